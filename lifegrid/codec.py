"""Settings token codec.

Token = base64url (no padding) of the compact canonical JSON wire form. It is
neither encrypted nor signed: anyone holding a token can read the settings,
which carry nothing secret. Decoding is fail-closed.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Optional
from urllib.parse import urlencode

from .errors import InvalidTokenError, ValidationError
from .settings import Settings, settings_from_dict, settings_to_dict

MAX_TOKEN_LENGTH = 4096
_TOKEN_ALPHABET = re.compile(r"[A-Za-z0-9_-]+")


def encode(settings: Settings) -> str:
    """Serialize settings into a URL-safe token."""
    payload = json.dumps(settings_to_dict(settings), separators=(",", ":"), ensure_ascii=False)
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def _reject_duplicates(pairs):
    data = {}
    for key, value in pairs:
        if key in data:
            raise InvalidTokenError(f"Duplicate key in token: {key}")
        data[key] = value
    return data


def decode(token: str) -> Settings:
    """Parse a token back into validated settings.

    Raises:
        InvalidTokenError: On any malformed transform, JSON or schema violation
    """
    if not isinstance(token, str) or not token:
        raise InvalidTokenError("Token is empty")
    if len(token) > MAX_TOKEN_LENGTH:
        raise InvalidTokenError("Token too long")
    if not _TOKEN_ALPHABET.fullmatch(token) or len(token) % 4 == 1:
        raise InvalidTokenError("Token is not base64url")

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        data = json.loads(raw.decode("utf-8"), object_pairs_hook=_reject_duplicates)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidTokenError(f"Token payload unreadable: {exc}") from exc

    try:
        return settings_from_dict(data)
    except InvalidTokenError:
        raise
    except ValidationError as exc:
        raise InvalidTokenError(str(exc)) from exc


def decode_or_none(token: Optional[str]) -> Optional[Settings]:
    try:
        return decode(token)
    except InvalidTokenError:
        return None


def wallpaper_url(base_url: str, token: str) -> str:
    """URL an iOS Shortcut fetches to refresh the wallpaper."""
    return f"{base_url.rstrip('/')}/api/wallpaper?{urlencode({'token': token})}"
