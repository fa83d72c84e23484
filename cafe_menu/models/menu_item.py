from sqlalchemy import Boolean, Column, DateTime, Numeric, String, Table, Text

from cafe_menu.database import metadata

# Column names follow the store's PascalCase convention; the API renames them.
menu_table = Table(
    "Menu",
    metadata,
    Column("MenuId", String(36), primary_key=True),
    Column("Name", Text, nullable=False),
    Column("Description", Text, nullable=False),
    Column("Price", Numeric(10, 2), nullable=False),
    Column("Available", Boolean, nullable=False),
    Column("CreatedAt", DateTime(timezone=True), nullable=False),
)
