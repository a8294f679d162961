from datetime import timedelta
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from lightblog.schemas.blog import SiteOptions


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    WEB_ROOT: str = "wwwroot"
    PAGE_SIZE: int = 5
    TOP_POSTS_COUNT: int = 5
    CACHE_SLIDING_EXPIRATION_SECONDS: int = 600

    # Runtime
    ENVIRONMENT: str = "production"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Site / feed
    SITE_NAME: str = "My Site"
    SITE_DESCRIPTION: str = ""
    SITE_AUTHOR_NAME: str = "Author"
    SITE_SUMMARY_ONLY: bool = False

    @property
    def posts_directory(self) -> Path:
        return Path(self.WEB_ROOT) / "posts"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cache_sliding_expiration(self) -> timedelta:
        return timedelta(seconds=self.CACHE_SLIDING_EXPIRATION_SECONDS)

    @property
    def site_options(self) -> SiteOptions:
        return SiteOptions(
            name=self.SITE_NAME,
            description=self.SITE_DESCRIPTION,
            authorName=self.SITE_AUTHOR_NAME,
            summaryOnly=self.SITE_SUMMARY_ONLY,
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
