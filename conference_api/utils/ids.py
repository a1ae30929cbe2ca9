"""Row key generation for sessions and speakers."""

import re
import secrets
import string
import time
from typing import Optional

_BASE36 = string.digits + string.ascii_lowercase


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lower-case base 36."""
    if number < 0:
        raise ValueError("Only non-negative integers can be encoded")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def random_suffix(length: int) -> str:
    """Random lower-case base 36 string of the given length."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_session_id(timestamp_ms: Optional[int] = None) -> str:
    """Generate a URL-safe session id: sess_<base36 ms timestamp>_<6 random chars>."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"sess_{to_base36(timestamp_ms)}_{random_suffix(6)}"


def slugify(name: str, max_length: int = 50) -> str:
    """Lower-case a name, drop characters outside [a-z0-9 -] and join words with '-'."""
    slug = re.sub(r"[^a-z0-9\s-]", "", name.lower())
    slug = re.sub(r"\s+", "-", slug)
    return slug[:max_length]


def generate_speaker_id(name: str) -> str:
    """Generate a speaker id from the slug of the name plus 4 random chars."""
    return f"{slugify(name)}-{random_suffix(4)}"
