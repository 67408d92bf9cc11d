import enum
from pathlib import Path
from tempfile import gettempdir

from pydantic_settings import BaseSettings, SettingsConfigDict

TEMP_DIR = Path(gettempdir())


class LogLevel(str, enum.Enum):
    """Possible log levels."""

    NOTSET = "NOTSET"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


class Settings(BaseSettings):
    """
    Application settings.

    These parameters can be configured
    with environment variables.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    # quantity of workers for uvicorn
    workers_count: int = 1
    # Enable uvicorn reloading
    reload: bool = False

    # Current environment
    environment: str = "dev"

    log_level: LogLevel = LogLevel.INFO

    # Variables for the database
    db_file: Path = TEMP_DIR / "taskboard.sqlite3"
    db_echo: bool = False

    # Key-value store namespace holding users and the current session
    store_namespace: str = "task_manager"

    # Bootstrap admin, seeded the first time the user list is read
    seed_bootstrap_admin: bool = True
    bootstrap_admin_email: str = "admin@example.com"
    bootstrap_admin_password: str = "change-me"

    @property
    def db_url(self) -> str:
        """
        Assemble database URL from settings.

        :return: database URL.
        """
        return f"sqlite+aiosqlite:///{self.db_file}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TASKBOARD_",
        env_file_encoding="utf-8",
    )


settings = Settings()
