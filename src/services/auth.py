"""
Login and registration against the Users sheet.
Passwords are stored as bcrypt hashes and verified via passlib.
"""
import logging
from typing import Dict, List, Optional

from passlib.context import CryptContext

from src.config.config import (
    USERS_SHEET_NAME, USERS_USERNAME_COL_IDX, USERS_PASSWORD_HASH_COL_IDX, USERS_CHURCH_ID_COL_IDX,
)
from src.exceptions import AuthenticationError, DuplicateRecordError, FieldValidationError
from src.services.sheets import SheetRecordStore, cell_value
from src.utils import normalize_identifier

logger = logging.getLogger(__name__)

# Create a password context using bcrypt as the default scheme
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a stored hash.

    A stored value that is not a recognizable hash never verifies.
    """
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError) as e:
        logger.warning(f"Stored password hash could not be verified: {e}")
        return False


def _user_rows(store: SheetRecordStore) -> List[List[str]]:
    # First row is the header
    return store.list_all(USERS_SHEET_NAME)[1:]


def find_user_row(rows: List[List[str]], username: Optional[str]) -> Optional[List[str]]:
    """First user row whose username matches, ignoring case and surrounding whitespace."""
    wanted = normalize_identifier(username)
    if not wanted:
        return None
    for row in rows:
        if normalize_identifier(cell_value(row, USERS_USERNAME_COL_IDX)) == wanted:
            return row
    return None


def authenticate(store: SheetRecordStore, username: str, password: str, church_id: str) -> Dict[str, str]:
    """
    Checks a login attempt against the Users sheet.

    Returns:
        The matched user's username and church ID.

    Raises:
        AuthenticationError: On unknown user, wrong password or church ID mismatch.
    """
    user_row = find_user_row(_user_rows(store), username)
    if user_row is None:
        logger.info(f"Login failed: no user found for username '{username}'")
        raise AuthenticationError()

    if not verify_password(password, cell_value(user_row, USERS_PASSWORD_HASH_COL_IDX)):
        logger.info(f"Login failed: password mismatch for user '{username}'")
        raise AuthenticationError()

    stored_church_id = cell_value(user_row, USERS_CHURCH_ID_COL_IDX)
    if church_id != stored_church_id:
        logger.info(f"Login failed: church ID mismatch for user '{username}'")
        raise AuthenticationError()

    logger.info(f"Login successful for user '{username}'")
    return {
        "username": cell_value(user_row, USERS_USERNAME_COL_IDX),
        "church_id": stored_church_id,
    }


def register_user(store: SheetRecordStore, username: str, password: str, church_id: str) -> dict:
    """
    Adds a user row [username, bcrypt hash, church ID] to the Users sheet.

    Raises:
        FieldValidationError: If the username is blank once trimmed.
        DuplicateRecordError: If the username is already taken.
    """
    if not normalize_identifier(username):
        raise FieldValidationError("Username must not be blank")

    if find_user_row(_user_rows(store), username) is not None:
        raise DuplicateRecordError(f"Username '{username.strip()}' is already registered")

    row = [""] * (max(USERS_USERNAME_COL_IDX, USERS_PASSWORD_HASH_COL_IDX, USERS_CHURCH_ID_COL_IDX) + 1)
    row[USERS_USERNAME_COL_IDX] = username.strip()
    row[USERS_PASSWORD_HASH_COL_IDX] = hash_password(password)
    row[USERS_CHURCH_ID_COL_IDX] = church_id
    response = store.append_record(USERS_SHEET_NAME, row)
    logger.info(f"Registered user '{username.strip()}'")
    return response
