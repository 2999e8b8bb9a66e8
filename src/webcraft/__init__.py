"""WebCraft - marketing site with a client area behind Stytch authentication.

Public pages, login and registration, and a protected dashboard served
with NiceGUI.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

__version__ = "0.1.0"


def _setup_logging(log_dir: Path) -> None:
    """Configure logging to both console and rotating file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"webcraft.{os.getpid()}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())


def main() -> None:
    """Entry point for the WebCraft site."""
    from nicegui import ui

    from webcraft.config import get_settings

    settings = get_settings()
    _setup_logging(settings.app.log_dir)

    import webcraft.pages  # noqa: F401 - registers routes

    if settings.dev.auth_mock:
        logging.warning("DEV__AUTH_MOCK=true: using the in-memory mock auth client")

    port = settings.app.port
    storage_secret = settings.app.storage_secret.get_secret_value()

    print(f"WebCraft v{__version__}")
    print(f"Starting application on http://0.0.0.0:{port}")

    reload = os.environ.get("WEBCRAFT_RELOAD", "1") != "0"
    ui.run(
        host="0.0.0.0",  # nosec B104
        port=port,
        reload=reload,
        storage_secret=storage_secret,
        title="WebCraft",
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
