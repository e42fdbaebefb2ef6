"""Client configuration using Pydantic Settings.

Connection settings are loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment of the calling application."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class ReadConsistency(str, Enum):
    """Read consistency level forwarded with every read request.

    Values are the labels the service expects on the wire.
    """

    STRONG = "strongConsistency"
    EVENTUAL = "eventualConsistency"


class VectorDBSettings(BaseSettings):
    """Vector database connection configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VECTORDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:8100",
        description="Vector database service URL",
    )
    username: str = Field(
        default="root",
        description="Account name sent in the Authorization header",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key (optional for local)",
    )
    timeout: float = Field(
        default=10.0,
        description="Request timeout in seconds",
    )
    read_consistency: ReadConsistency = Field(
        default=ReadConsistency.EVENTUAL,
        description="Default read consistency for query and search",
    )


class Settings(BaseSettings):
    """Main settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    vectordb: VectorDBSettings = Field(default_factory=VectorDBSettings)


class ClientOptions(BaseModel):
    """Client-wide defaults threaded into every request composition call."""

    model_config = ConfigDict(frozen=True)

    read_consistency: ReadConsistency = Field(
        default=ReadConsistency.EVENTUAL,
        description="Read consistency used when a call omits one",
    )

    @classmethod
    def from_settings(cls, settings: VectorDBSettings) -> "ClientOptions":
        """Build options from connection settings."""
        return cls(read_consistency=settings.read_consistency)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
