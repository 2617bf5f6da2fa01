import hashlib
import secrets
from typing import Tuple

API_KEY_PREFIX = "ca_"
DISPLAY_PREFIX_LENGTH = 8


def hash_api_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def generate_api_key() -> Tuple[str, str, str]:
    """Returns (raw key, display prefix, sha256 hash). The raw key is shown once."""
    raw_key = API_KEY_PREFIX + secrets.token_urlsafe(24)
    return raw_key, raw_key[:DISPLAY_PREFIX_LENGTH], hash_api_key(raw_key)
