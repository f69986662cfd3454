"""Server configuration via pydantic-settings."""

import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Listener
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Assets – relative paths are resolved against the working directory
    ROOT_DIR: str = "./public"
    DEFAULT_DOCUMENT: str = "index.html"

    # Reject request paths that normalize to somewhere outside ROOT_DIR
    CONFINE_TO_ROOT: bool = True

    # Bytes per read while streaming a file body
    CHUNK_SIZE: int = Field(64 * 1024, gt=0)

    LOG_LEVEL: str = "info"

    @property
    def root_path(self) -> str:
        """Absolute root directory without a trailing separator."""
        return os.path.abspath(self.ROOT_DIR)


def _build_settings() -> Settings:
    """Build settings, pinning a relative ROOT_DIR to the startup directory."""
    s = Settings()
    if not os.path.isabs(s.ROOT_DIR):
        s.ROOT_DIR = os.path.abspath(s.ROOT_DIR)
    s.LOG_LEVEL = s.LOG_LEVEL.lower()
    return s


settings = _build_settings()
