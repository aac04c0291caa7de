"""Configuration management for the schema analyser."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.schema-analyser/.env
    3. Package directory (where this file is located)
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".schema-analyser" / ".env"
    if user_env.exists():
        return str(user_env)

    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MySQL / MariaDB server
    mysql_host: str = Field(
        default="localhost",
        description="Database server host"
    )
    mysql_port: int = Field(
        default=3306,
        description="Database server port"
    )
    mysql_user: str = Field(
        default="root",
        description="User to connect as"
    )
    mysql_password: Optional[str] = Field(
        default=None,
        description="Password for the connecting user"
    )
    mysql_database: Optional[str] = Field(
        default=None,
        description="Database (schema) to analyse"
    )
    mysql_connect_timeout: int = Field(
        default=10,
        description="Connection timeout in seconds"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the command line tool"
    )

    class Config:
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
