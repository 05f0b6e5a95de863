"""
Configuration constants for the Crypto Blog web client.

This module centralizes all configurable parameters so the page server
can be pointed at a different backend without code changes.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass
class BackendConfig:
    """Backend service configuration."""
    base_url: str = field(
        default_factory=lambda: os.getenv("BLOG_BACKEND_URL", "http://127.0.0.1:8001")
    )
    posts_endpoint: str = "/posts"
    # None disables the timeout; calls are awaited until they settle
    timeout_seconds: Optional[float] = field(
        default_factory=lambda: _optional_float(os.getenv("BLOG_BACKEND_TIMEOUT"))
    )


@dataclass
class PageConfig:
    """Page content configuration."""
    title: str = "Crypto Blog"
    tagline: str = "Share your thoughts on the world of cryptocurrency"
    hero_image_url: str = (
        "https://images.unsplash.com/photo-1642239817413-692565098d33"
        "?ixid=M3w2MzIxNTd8MHwxfHJhbmRvbXx8fHx8fHx8fDE3MjU1MjYxNjl8&ixlib=rb-4.0.3"
    )
    timestamp_format: str = "%m/%d/%Y, %I:%M:%S %p"


@dataclass
class ServerConfig:
    """Page server configuration."""
    host: str = field(default_factory=lambda: os.getenv("BLOG_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("BLOG_PORT", "8000")))
    reload: bool = False


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "crypto_blog.log"
    log_level: str = field(default_factory=lambda: os.getenv("BLOG_LOG_LEVEL", "INFO"))
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {self.log_level!r} (BLOG_LOG_LEVEL); "
                f"expected one of {', '.join(LOG_LEVELS)}"
            )

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    backend: BackendConfig = field(default_factory=BackendConfig)
    page: PageConfig = field(default_factory=PageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
