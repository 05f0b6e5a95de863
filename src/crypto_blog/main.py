"""
Main Entry Point

Starts the Crypto Blog page server:

1. Configure console and file logging
2. Apply command-line overrides to the configuration
3. Serve the page application with uvicorn

The page talks to the blog backend given by --backend-url or
BLOG_BACKEND_URL.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from .config import LOG_LEVELS, config


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("crypto_blog")
    logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='a',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(config.log.log_format))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments, defaulting to the configuration."""
    parser = argparse.ArgumentParser(description="Run the Crypto Blog page server")
    parser.add_argument(
        "--host",
        default=config.server.host,
        help=f"Host to bind (default: {config.server.host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.server.port,
        help=f"Port to bind (default: {config.server.port})"
    )
    parser.add_argument(
        "--backend-url",
        default=None,
        help=f"Blog backend base URL (default: {config.backend.base_url})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes"
    )
    parser.add_argument(
        "--log-level",
        default=config.log.log_level,
        choices=LOG_LEVELS,
        type=str.upper,
        help=f"Console log level (default: {config.log.log_level})"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the page server."""
    args = parse_args(argv)
    logger = setup_logging(args.log_level)

    if args.backend_url:
        config.backend.base_url = args.backend_url
        # Reloader workers re-read the configuration from the environment
        os.environ["BLOG_BACKEND_URL"] = args.backend_url

    logger.info(f"Serving {config.page.title} at http://{args.host}:{args.port}")
    logger.info(f"Backend: {config.backend.base_url}")

    try:
        uvicorn.run(
            "crypto_blog.web.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_config=None,
        )
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
