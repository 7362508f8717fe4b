"""Runtime configuration for SquadBoard.

Every option maps onto an upper-case environment variable (or `.env` entry);
only `SECRET_KEY` has no default.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings; field aliases are the variable names."""

    # Application metadata
    app_name: str = Field(default="SquadBoard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    # Argon2id cost parameters (libsodium "interactive" profile by default)
    password_hash_opslimit: int = Field(default=2, alias="PASSWORD_HASH_OPSLIMIT")
    password_hash_memlimit: int = Field(default=67_108_864, alias="PASSWORD_HASH_MEMLIMIT")

    # Database configuration
    database_url: str = Field(default="sqlite:///./squadboard.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    transaction_max_attempts: int = Field(default=5, alias="TRANSACTION_MAX_ATTEMPTS")
    transaction_retry_backoff_seconds: float = Field(
        default=0.02,
        alias="TRANSACTION_RETRY_BACKOFF_SECONDS",
    )

    # Account rules
    admin_handle: str = Field(default="admin", alias="ADMIN_HANDLE")
    handle_min_length: int = Field(default=8, alias="HANDLE_MIN_LENGTH")
    password_min_length: int = Field(default=6, alias="PASSWORD_MIN_LENGTH")

    # Brute-force lockout
    max_login_failures: int = Field(default=3, alias="MAX_LOGIN_FAILURES")
    lockout_minutes: int = Field(default=30, alias="LOCKOUT_MINUTES")
    failure_window_minutes: int = Field(default=30, alias="FAILURE_WINDOW_MINUTES")

    # Board limits
    liker_cap: int = Field(default=2000, alias="LIKER_CAP")
    feed_page_size: int = Field(default=50, alias="FEED_PAGE_SIZE")
    history_page_size: int = Field(default=50, alias="HISTORY_PAGE_SIZE")
    post_max_images: int = Field(default=9, alias="POST_MAX_IMAGES")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        """True when the configured store is SQLite (file or in-memory)."""
        return self.database_url.startswith("sqlite")


settings = Settings()  # type: ignore[call-arg]
