"""
Calendar service settings.

Values come from the environment or a local ``.env`` file. The database is
addressed either by a full ``DATABASE_URL`` or by PostgreSQL parts.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from aicalendar.core.exceptions import ConfigurationException


class Settings(BaseSettings):
    """
    Calendar service settings.

    Attributes:
        app_name: Title shown in the OpenAPI docs
        log_level: Level applied to the service loggers at startup

        database_url: Full SQLAlchemy URL; wins over the parts below
        db_username / db_password / db_host / db_port / db_name: PostgreSQL parts

        db_pool_*: QueuePool sizing for PostgreSQL engines

        api_prefix: Prefix for every versioned router
        user_id_header: Header carrying the caller id verified upstream
    """

    # Service
    app_name: str = "AI Calendar"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Database
    database_url: Optional[str] = None
    db_username: str = "postgres"
    db_password: Optional[str] = None
    db_host: Optional[str] = None
    db_port: int = 5432
    db_name: str = "aicalendar"

    # Pool
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 10
    db_pool_recycle: int = 1800
    db_pool_pre_ping: bool = True
    db_echo: bool = False

    # API
    api_prefix: str = "/api/v1"
    user_id_header: str = "X-User-Id"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def _missing_database_parts(self) -> List[str]:
        required = {"DB_USERNAME": self.db_username, "DB_PASSWORD": self.db_password, "DB_HOST": self.db_host}
        return [name for name, value in required.items() if not value]

    def _postgres_url(self) -> URL:
        return URL.create(
            "postgresql",
            username=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    def get_database_url(self) -> str:
        """
        URL the engine connects to.

        Raises:
            ConfigurationException: If neither DATABASE_URL nor all PostgreSQL parts are set
        """
        if self.database_url:
            return self.database_url

        missing = self._missing_database_parts()
        if missing:
            raise ConfigurationException(
                f"Database configuration incomplete. Missing: {', '.join(missing)}",
                {"missing": missing},
            )
        return self._postgres_url().render_as_string(hide_password=False)

    def get_safe_database_url(self) -> str:
        """Database URL with the password masked, for logging."""
        return make_url(self.get_database_url()).render_as_string(hide_password=True)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
