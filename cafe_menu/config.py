from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    project_id: str = Field(
        "taro-demo", validation_alias=AliasChoices("project_id", "gcp_project_id")
    )
    port: int = 8080
    log_level: str = "INFO"

    # Store; the Spanner-era variable names are still honoured
    db_instance: str = Field(
        "cafe-db", validation_alias=AliasChoices("db_instance", "spanner_instance_id")
    )
    db_name: str = Field(
        "cafe", validation_alias=AliasChoices("db_name", "spanner_database_id")
    )
    db_user: str = "postgres"
    db_password: str = "postgres"
    database_url: str | None = None
    create_tables: bool = True

    # Observability
    tracing_enabled: bool = True
    otlp_endpoint: str = "http://jaeger:4318/v1/traces"

    model_config = {"env_file": ".env", "populate_by_name": True}

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_instance}/{self.db_name}"
        )


settings = Settings()
