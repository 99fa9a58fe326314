"""Configuration management for Taskboard."""

import json
from typing import Annotated, List, Literal, Optional
from pathlib import Path
from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, SecretStr, field_validator


class DatabaseConfig(BaseSettings):
    """Database configuration."""

    url: str = Field(
        default="sqlite:///data/taskboard.db",
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log",
    )

    class Config:
        env_prefix = "DATABASE_"


class AuthConfig(BaseSettings):
    """Authentication configuration."""

    secret_key: SecretStr = Field(
        default=SecretStr("CHANGE_ME_IN_PRODUCTION"),
        description="Secret used to sign access tokens",
    )
    algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        ge=1,
        description="Access token lifetime in minutes",
    )
    min_password_length: int = Field(
        default=6,
        ge=1,
        description="Minimum accepted password length",
    )
    enforce_task_ownership: bool = Field(
        default=True,
        description="Only the assignee may change, edit or delete a task",
    )

    class Config:
        env_prefix = "AUTH_"


class ServerConfig(BaseSettings):
    """HTTP server configuration."""

    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server",
    )
    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server",
    )
    api_prefix: str = Field(
        default="/api",
        description="Prefix for all API routes",
    )
    enable_cors: bool = Field(
        default=True,
        description="Enable CORS for browser clients",
    )
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )
    expose_error_details: bool = Field(
        default=False,
        description="Include exception text in 500 responses",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        # Env values arrive raw: a JSON list or a comma-separated string
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    class Config:
        env_prefix = "SERVER_"


class ClientConfig(BaseSettings):
    """API client configuration."""

    base_url: str = Field(
        default="http://localhost:5000/api",
        description="Base URL of the Taskboard API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )
    min_password_length: int = Field(
        default=6,
        ge=1,
        description="Password length checked before a register request is sent",
    )

    class Config:
        env_prefix = "CLIENT_"


class Settings(BaseSettings):
    """Main settings combining all configurations."""

    # Sub-configurations
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)

    # General settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: Optional[Path] = Field(
        default=None,
        description="Directory for the log file (console only when unset)",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment and files."""
        from dotenv import load_dotenv
        load_dotenv()
        return cls()


# Global settings instance
settings = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global settings
    if settings is None:
        settings = Settings.load()
    return settings


def reload_settings():
    """Reload settings from environment."""
    global settings
    settings = Settings.load()
    return settings
