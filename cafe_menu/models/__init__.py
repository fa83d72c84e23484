# Import all tables here so they register with the shared metadata
from cafe_menu.models.menu_item import menu_table

__all__ = [
    "menu_table",
]
