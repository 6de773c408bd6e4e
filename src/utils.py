import re
from typing import Optional

MAX_ERROR_MESSAGE_LENGTH = 200

# Long opaque tokens (API keys, SIDs, hashes) and bcrypt hashes
_SECRET_PATTERN = re.compile(r'\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}|[A-Za-z0-9_\-]{32,}')


def sanitize_error_message(message: Optional[str]) -> str:
    """Makes an error message safe to return to API callers.

    Drops control characters, masks anything that looks like a credential
    and caps the length.
    """
    if not message:
        return ""
    printable = ''.join(c for c in str(message) if c.isprintable())
    masked = _SECRET_PATTERN.sub('***', printable)
    if len(masked) > MAX_ERROR_MESSAGE_LENGTH:
        masked = masked[:MAX_ERROR_MESSAGE_LENGTH - 3] + '...'
    return masked


def normalize_identifier(value: Optional[str]) -> str:
    """Trims and lowercases an identifier for login comparisons."""
    if value is None:
        return ""
    return str(value).strip().lower()
