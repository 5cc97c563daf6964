"""Application configuration using pydantic-settings."""

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Django Core
    secret_key: str = Field(
        default="django-insecure-change-me-in-production",
        description="Django secret key for cryptographic signing",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (never use True in production)",
    )
    allowed_hosts_str: str = Field(
        default="localhost,127.0.0.1",
        alias="ALLOWED_HOSTS",
        description="Comma-separated list of allowed host/domain names",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def allowed_hosts(self) -> list[str]:
        """Get allowed hosts as a list.

        Returns:
            List of allowed host strings.

        """
        return [h.strip() for h in self.allowed_hosts_str.split(",") if h.strip()]

    # Database
    sqlite_path: str = Field(
        default="db.sqlite3",
        description="Path of the SQLite database file",
    )

    # Localization
    language_code: str = Field(
        default="en",
        description="Default (frontend) locale for pages",
    )
    languages_str: str = Field(
        default="en,ru",
        alias="LANGUAGES",
        description="Comma-separated list of locales pages can be translated into",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def languages(self) -> list[str]:
        """Get configured locales as a list.

        Returns:
            List of locale codes.

        """
        return [code.strip() for code in self.languages_str.split(",") if code.strip()]

    # Pages
    pages_reserved_words_str: str = Field(
        default="index,new,session,login,logout,users,admin,api,images,pages",
        alias="PAGES_RESERVED_WORDS",
        description="Comma-separated slugs that collide with system routes and get a '-page' suffix",
    )
    pages_allow_unicode_slugs: bool = Field(
        default=False,
        description="Keep non-ASCII characters in generated slugs instead of folding them",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pages_reserved_words(self) -> list[str]:
        """Get reserved slugs as an ordered list.

        Returns:
            List of reserved words, lowercased, in configured order.

        """
        return [w.strip().lower() for w in self.pages_reserved_words_str.split(",") if w.strip()]

    # Logfire (optional)
    logfire_token: str | None = Field(
        default=None,
        description="Logfire API token for observability",
    )
    logfire_environment: str = Field(
        default="development",
        description="Logfire environment name (e.g., development, staging, production)",
    )


settings = Settings()  # ty:ignore[missing-argument]
