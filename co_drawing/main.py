"""
Co-Drawing - Main Entry Point

Freehand canvas with Gemini native image generation.

Usage:
    python -m co_drawing.main
"""

import sys
from PyQt6.QtWidgets import QApplication

from .config import Config
from .events.event_bus import get_event_bus
from .utils.logging_config import LoggingConfig


def setup_application() -> QApplication:
    """
    Initialize and configure the Qt application

    Returns:
        Configured QApplication instance
    """
    app = QApplication(sys.argv)

    # Set application metadata
    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)

    # Initialize event bus (singleton)
    get_event_bus()

    return app


def main():
    """
    Main entry point for Co-Drawing

    Creates the application, wires the session to the Gemini service,
    sets up the main window, and runs the event loop.
    """
    # Setup logging first
    LoggingConfig.setup_logging(Config.get_log_dir())

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")

    settings = Config.ensure_generation_settings()
    logger.info(f"Settings: {Config.get_settings_file()}")
    logger.info(f"Model: {settings['model']}")
    logger.info(f"Request timeout: {settings['request_timeout_ms']} ms")
    if settings['save_generations']:
        logger.info(f"Generations: {Config.get_generations_dir()}")

    app = setup_application()

    from .core.session import DrawingSession
    from .services.credential_store import CredentialStore, QSettingsStore
    from .services.gemini_service import GeminiImageService
    from .widgets.main_window import MainWindow

    service = GeminiImageService(
        model=settings['model'],
        timeout_ms=settings['request_timeout_ms'],
    )
    session = DrawingSession(
        CredentialStore(QSettingsStore()),
        service,
        save_generations=settings['save_generations'],
    )

    window = MainWindow(session)
    window.show()

    logger.info("Application started successfully!")

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
