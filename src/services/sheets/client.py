"""Handles Google Sheets client authentication and the shared spreadsheet handle."""

import logging
import json
import threading
from typing import Optional
import gspread
import google.auth
from google.oauth2 import service_account

# Project imports
from src.config.config import SCOPES
from src.config.config_loader import get_config

logger = logging.getLogger(__name__)

# --- Singleton Client & Spreadsheet ---
# Only the authorized handles are shared; row data is always fetched fresh.
_gspread_client: Optional[gspread.Client] = None
_spreadsheet: Optional[gspread.Spreadsheet] = None
_client_lock = threading.Lock()


def _build_credentials(service_account_json_string: Optional[str]):
    """Service account credentials from JSON content, or Application Default Credentials."""
    if not service_account_json_string:
        logger.info("Using Application Default Credentials for Google Sheets.")
        creds, _ = google.auth.default(scopes=SCOPES)
        return creds

    try:
        service_account_info = json.loads(service_account_json_string)
    except json.JSONDecodeError as e:
        logger.critical(f"Failed to parse service account JSON from config: {e}")
        raise ValueError("Invalid service account JSON in configuration") from e

    return service_account.Credentials.from_service_account_info(
        service_account_info,
        scopes=SCOPES
    )


def _get_gspread_client() -> gspread.Client:
    """Authenticates and returns a shared gspread Client object.
    Raises:
        ValueError: If the configured credentials are invalid.
    """
    global _gspread_client
    if _gspread_client is not None:
        return _gspread_client

    with _client_lock:
        # Double-check lock
        if _gspread_client is None:
            logger.info("Initializing shared gspread client...")
            try:
                config = get_config()
                creds = _build_credentials(config.service_account_json_string)
                _gspread_client = gspread.authorize(creds)
                logger.info("Successfully authorized shared gspread client.")
            except Exception as e:
                logger.error(f"Error initializing shared gspread client: {e}", exc_info=True)
                _gspread_client = None
                raise

    return _gspread_client


def get_spreadsheet() -> gspread.Spreadsheet:
    """Opens (once) and returns the configured spreadsheet."""
    global _spreadsheet
    if _spreadsheet is not None:
        return _spreadsheet

    client = _get_gspread_client()
    with _client_lock:
        if _spreadsheet is None:
            sheet_id = get_config().google_sheet_id
            logger.info(f"Opening spreadsheet {sheet_id}...")
            _spreadsheet = client.open_by_key(sheet_id)
    return _spreadsheet


def reset_client():
    """Forgets the shared client and spreadsheet handle."""
    global _gspread_client, _spreadsheet
    with _client_lock:
        _gspread_client = None
        _spreadsheet = None
