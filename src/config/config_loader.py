import os
import logging
from typing import Optional
import threading # For singleton lock

from .config import DEFAULT_PORT

logger = logging.getLogger(__name__)

# Singleton instance and lock
_config_instance = None
_config_lock = threading.Lock()


class AppConfig:
    """Holds the application configuration, loaded once as a singleton."""
    def __init__(self):
        logger.debug("Initializing AppConfig instance...")

        # --- Google Sheets ---
        self.google_sheet_id: Optional[str] = None
        self.service_account_json_string: Optional[str] = None # None means Application Default Credentials

        # --- Twilio (optional) ---
        self.twilio_account_sid: Optional[str] = None
        self.twilio_auth_token: Optional[str] = None
        self.twilio_from_number: Optional[str] = None

        # --- Server ---
        self.port: int = DEFAULT_PORT

    def _load_sheets_config(self):
        """Loads the spreadsheet ID and the service account credentials."""
        self.google_sheet_id = os.environ.get("GOOGLE_SHEET_ID")
        if not self.google_sheet_id:
            logger.error("GOOGLE_SHEET_ID not found in environment variables")
            raise ValueError("GOOGLE_SHEET_ID is required")

        # Priority: key file path (GOOGLE_APPLICATION_CREDENTIALS or KEY_FILE_PATH),
        # then SERVICE_ACCOUNT_JSON content, then Application Default Credentials
        key_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS") or os.environ.get("KEY_FILE_PATH")
        sa_json_env = os.environ.get("SERVICE_ACCOUNT_JSON")

        if key_path:
            if os.environ.get("K_SERVICE") or os.environ.get("K_REVISION"):
                logger.warning("A service account key file is configured in a Cloud Run environment. "
                               "Unset it to use the service's default credentials.")
            logger.info(f"Service account key file path found: {key_path}")
            try:
                with open(key_path, 'r') as f:
                    self.service_account_json_string = f.read()
                logger.info(f"Successfully loaded service account JSON from file: {key_path}")
            except FileNotFoundError:
                logger.error(f"Service account key file not found: {key_path}")
                raise ValueError(f"Service account file not found: {key_path}")
            except OSError as e:
                logger.error(f"Error reading service account file {key_path}: {e}", exc_info=True)
                raise ValueError(f"Error reading service account file: {key_path}")
        elif sa_json_env:
            logger.info("Using SERVICE_ACCOUNT_JSON environment variable for service account key.")
            self.service_account_json_string = sa_json_env
        else:
            logger.info("No service account key configured, using Application Default Credentials.")
            self.service_account_json_string = None

    def _load_twilio_config(self):
        """Loads Twilio credentials. The legacy variable names are accepted as fallback."""
        self.twilio_account_sid = os.environ.get("TWILIO_ACCOUNT_SID") or os.environ.get("sid")
        self.twilio_auth_token = os.environ.get("TWILIO_AUTH_TOKEN") or os.environ.get("token")
        self.twilio_from_number = os.environ.get("TWILIO_FROM_NUMBER") or os.environ.get("twilioNum")

        if self.sms_enabled:
            logger.info("Twilio configuration loaded.")
        else:
            logger.warning("Twilio credentials incomplete. SMS sending will fail until they are set.")

    def _load_server_config(self):
        port = os.environ.get("PORT")
        if not port:
            return
        try:
            self.port = int(port)
        except ValueError:
            logger.warning(f"Invalid PORT value '{port}'. Using default {DEFAULT_PORT}.")
            self.port = DEFAULT_PORT

    @property
    def sms_enabled(self) -> bool:
        return bool(self.twilio_account_sid and self.twilio_auth_token and self.twilio_from_number)

    def load(self):
        """Load all configurations."""
        logger.info("Loading application configuration...")
        self._load_sheets_config()
        self._load_twilio_config()
        self._load_server_config()
        logger.info("Configuration loading complete.")


def get_config() -> AppConfig:
    """Gets the singleton AppConfig instance, loading it on first call."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            # Double-check locking
            if _config_instance is None:
                logger.info("Creating and loading singleton AppConfig instance.")
                temp_instance = AppConfig()
                try:
                    temp_instance.load()
                    _config_instance = temp_instance
                except Exception as e:
                    logger.critical(f"Failed to load configuration during singleton creation: {e}", exc_info=True)
                    # Prevent partially configured singleton from being assigned
                    raise
            else:
                 logger.debug("Singleton AppConfig already created by another thread.")

    return _config_instance


def reset_config():
    """Drops the singleton so the next get_config() reloads from the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
