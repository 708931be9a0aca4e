"""
Global configuration for Co-Drawing

Canvas geometry, generation service defaults and user data locations.
"""

import os
import sys
import json
from pathlib import Path
from typing import Final, Optional


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Co-Drawing"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "CoDrawing"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent

    # Drawing surface (logical pixel space)
    CANVAS_WIDTH: Final[int] = 960
    CANVAS_HEIGHT: Final[int] = 540
    BASE_COLOR: Final[str] = "#FFFFFF"

    # Pen settings
    PEN_WIDTH: Final[int] = 5
    DEFAULT_PEN_COLOR: Final[str] = "#000000"

    # Generation service
    DEFAULT_MODEL: Final[str] = "gemini-2.0-flash-exp-image-generation"
    DEFAULT_REQUEST_TIMEOUT_MS: Final[int] = 300_000  # 0 = no timeout
    STYLE_SUFFIX: Final[str] = ". Keep the same minimal line doodle style."
    FLATTEN_MIME_TYPE: Final[str] = "image/png"
    LOG_PREVIEW_CHARS: Final[int] = 50  # Base64 chars shown in request/response logs

    # Persistent settings keys (QSettings)
    CREDENTIAL_KEY: Final[str] = "credentials/api_key"

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 1100
    DEFAULT_WINDOW_HEIGHT: Final[int] = 800
    MIN_CANVAS_HEIGHT: Final[int] = 400

    # Files
    SETTINGS_FILE_NAME: Final[str] = "settings.json"
    GENERATIONS_FOLDER_NAME: Final[str] = "generations"
    LOG_FOLDER_NAME: Final[str] = "logs"

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows), Application Support (macOS)
        or .local/share (Linux). A 'portable.txt' next to the package
        keeps everything in a local 'data' folder instead.
        """
        portable_flag = cls.APP_ROOT.parent / 'portable.txt'
        if portable_flag.exists():
            user_dir = cls.APP_ROOT.parent / 'data'
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / 'CoDrawing'
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / 'CoDrawing'
        else:
            user_dir = Path.home() / '.local' / 'share' / 'CoDrawing'

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get log directory"""
        return cls.get_user_data_dir() / cls.LOG_FOLDER_NAME

    @classmethod
    def get_settings_file(cls) -> Path:
        """Get settings JSON file path"""
        return cls.get_user_data_dir() / cls.SETTINGS_FILE_NAME

    @classmethod
    def get_generations_dir(cls) -> Path:
        """Get folder where generated images are saved"""
        folder = cls.get_user_data_dir() / cls.GENERATIONS_FOLDER_NAME
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    # ==================== Generation Settings ====================

    @classmethod
    def default_generation_settings(cls) -> dict:
        return {
            'model': cls.DEFAULT_MODEL,
            'request_timeout_ms': cls.DEFAULT_REQUEST_TIMEOUT_MS,
            'save_generations': True,
        }

    @classmethod
    def load_generation_settings(cls, settings_file: Optional[Path] = None) -> dict:
        """
        Load generation service settings

        Args:
            settings_file: Override settings path (defaults to get_settings_file())

        Returns:
            dict with keys:
                - model: str (Gemini model name)
                - request_timeout_ms: int (0 disables the timeout)
                - save_generations: bool (write generated images to disk)
        """
        settings = cls.default_generation_settings()
        settings_file = settings_file or cls.get_settings_file()
        if not settings_file.exists():
            return settings

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except (OSError, ValueError):
            return settings

        if not isinstance(stored, dict):
            return settings

        model = stored.get('model')
        if isinstance(model, str) and model.strip():
            settings['model'] = model.strip()

        timeout = stored.get('request_timeout_ms')
        if isinstance(timeout, int) and not isinstance(timeout, bool) and timeout >= 0:
            settings['request_timeout_ms'] = timeout

        save = stored.get('save_generations')
        if isinstance(save, bool):
            settings['save_generations'] = save

        return settings

    @classmethod
    def save_generation_settings(cls, settings: dict, settings_file: Optional[Path] = None) -> bool:
        """
        Save generation service settings, merged into the existing file

        Args:
            settings: dict with any of the keys from load_generation_settings()
            settings_file: Override settings path

        Returns:
            bool: True if saved successfully, False otherwise
        """
        settings_file = settings_file or cls.get_settings_file()
        try:
            settings_file.parent.mkdir(parents=True, exist_ok=True)

            existing = {}
            if settings_file.exists():
                try:
                    with open(settings_file, 'r', encoding='utf-8') as f:
                        existing = json.load(f)
                except ValueError:
                    existing = {}
            if not isinstance(existing, dict):
                existing = {}

            existing.update(settings)

            with open(settings_file, 'w', encoding='utf-8') as f:
                json.dump(existing, f, indent=2)
            return True
        except OSError:
            return False

    @classmethod
    def ensure_generation_settings(cls, settings_file: Optional[Path] = None) -> dict:
        """
        Load generation settings, writing the defaults on first run so the
        file exists for hand editing.

        Returns:
            dict as returned by load_generation_settings()
        """
        settings_file = settings_file or cls.get_settings_file()
        settings = cls.load_generation_settings(settings_file)
        if not settings_file.exists():
            cls.save_generation_settings(settings, settings_file)
        return settings


# Export for convenient imports
__all__ = ['Config']
