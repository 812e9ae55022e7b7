"""
Application settings (environment / .env).

Oracle login used by the HTTP host, driver timeouts and bind compiler
switches. Import the ``settings`` singleton; tests patch its attributes.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from oraquery.models import OracleCredentials


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "oraquery"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None

    ORACLE_USER: str = "system"
    ORACLE_PASSWORD: str = ""
    ORACLE_CONNECTION_STRING: str = "localhost/orcl"
    ORACLE_THIN_MODE: bool = True
    # Thick mode only; None lets the driver search the system library path.
    ORACLE_CLIENT_LIB_DIR: str | None = None

    # Seconds. Statement timeout unset = no call timeout on the connection.
    EXTERNAL_DB_CONNECT_TIMEOUT: float = 10.0
    EXTERNAL_DB_STATEMENT_TIMEOUT: float | None = None

    # Strip whitespace around each segment of an expand-as-list value.
    BIND_TRIM_LIST_VALUES: bool = False

    @property
    def oracle_credentials(self) -> OracleCredentials:
        return OracleCredentials(
            user=self.ORACLE_USER,
            password=self.ORACLE_PASSWORD,
            connection_string=self.ORACLE_CONNECTION_STRING,
            thin_mode=self.ORACLE_THIN_MODE,
        )


settings = Settings()  # type: ignore
