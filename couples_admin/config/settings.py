"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, Optional, List
from enum import Enum

from couples_admin.core.constants import (
    SUPPORTED_LANGUAGES,
    BASE_LANGUAGE,
    TRANSLATION_LANGUAGES,
    ALLOWED_PAGE_SIZES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_COMPLETENESS,
)


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class TranslationWritePolicy(str, Enum):
    """How translation rows are written alongside a new base question"""
    BEST_EFFORT = "best_effort"  # base row committed first, translation failures logged
    ATOMIC = "atomic"  # one transaction, any failure rolls everything back


class MissingCountStrategy(str, Enum):
    """How the corpus-wide missing translations count is computed"""
    SCAN = "scan"
    GROUPED = "grouped"


class CategoryDeletePolicy(str, Enum):
    """What happens to questions when their category is deleted"""
    ALLOW = "allow"
    RESTRICT = "restrict"
    CASCADE = "cascade"


class QuestionSettings(BaseSettings):
    """
    Question, translation and listing configuration

    The language set is closed: every code path routes and slots rows by
    the fixed ``SUPPORTED_LANGUAGES``, so it is exposed read-only here.
    """

    allowed_page_sizes: Annotated[List[int], NoDecode] = Field(default_factory=lambda: list(ALLOWED_PAGE_SIZES))
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=1000)
    default_completeness: int = Field(default=DEFAULT_COMPLETENESS, ge=1)
    translation_write_policy: TranslationWritePolicy = Field(default=TranslationWritePolicy.BEST_EFFORT)
    missing_count_strategy: MissingCountStrategy = Field(default=MissingCountStrategy.SCAN)
    category_delete_policy: CategoryDeletePolicy = Field(default=CategoryDeletePolicy.ALLOW)

    @field_validator('allowed_page_sizes', mode='before')
    @classmethod
    def parse_page_sizes(cls, v):
        """Parse page sizes from a comma separated environment variable"""
        if isinstance(v, str):
            return [int(size.strip()) for size in v.split(",") if size.strip()]
        return v

    @model_validator(mode='after')
    def check_default_page_size(self):
        if self.default_page_size not in self.allowed_page_sizes:
            raise ValueError(
                f"default_page_size {self.default_page_size} must be one of {self.allowed_page_sizes}"
            )
        return self

    @property
    def supported_languages(self) -> List[str]:
        return list(SUPPORTED_LANGUAGES)

    @property
    def base_language(self) -> str:
        return BASE_LANGUAGE

    @property
    def translation_languages(self) -> List[str]:
        return list(TRANSLATION_LANGUAGES)

    @property
    def total_languages(self) -> int:
        return len(SUPPORTED_LANGUAGES)

    model_config = {"env_prefix": "QUESTIONS_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Couples Admin Panel")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")
    log_file: Optional[str] = Field(default=None)

    # Database Configuration
    database_url: str = Field(default="sqlite:///./couples_admin.db")
    database_echo: bool = Field(default=False)

    # Nested Settings
    questions: QuestionSettings = Field(default_factory=QuestionSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
