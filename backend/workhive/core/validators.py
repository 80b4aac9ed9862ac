"""
core/validators.py

Field validators shared by request schemas:
- password strength
- non-blank text
- future timestamps (deadlines, due dates)
- skill list normalization
"""

import string
from datetime import datetime, timezone
from typing import Final


# -------------------------------
# Constants
# -------------------------------
MIN_PASSWORD_LENGTH: Final[int] = 8
MAX_PASSWORD_LENGTH: Final[int] = 128


# -------------------------------
# Password
# -------------------------------
def password_validator(password: str) -> str:
    """
    Validates password strength.

    Rules:
    - Must contain only ASCII characters
    - Must include at least one uppercase letter
    - Must include at least one lowercase letter
    - Must include at least one digit
    - Must include at least one special character
    - Length must be between MIN_PASSWORD_LENGTH and MAX_PASSWORD_LENGTH

    Raises:
        ValueError: If any rule is violated
    """
    if not password.isascii():
        raise ValueError("Password must contain only ASCII characters.")
    if not any(c in string.ascii_uppercase for c in password):
        raise ValueError("Password must contain at least one uppercase letter.")
    if not any(c in string.ascii_lowercase for c in password):
        raise ValueError("Password must contain at least one lowercase letter.")
    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain at least one digit.")
    if not any(c in string.punctuation for c in password):
        raise ValueError("Password must contain at least one special character.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_LENGTH} characters long.")
    return password


# -------------------------------
# Text / Dates / Lists
# -------------------------------
def not_blank(value: str) -> str:
    """Strips surrounding whitespace and rejects empty strings."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value must not be empty.")
    return stripped


def as_utc(value: datetime) -> datetime:
    """Treats naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def future_datetime(value: datetime) -> datetime:
    value = as_utc(value)
    if value <= datetime.now(timezone.utc):
        raise ValueError("Timestamp must be in the future.")
    return value


def normalize_skills(skills: list[str]) -> list[str]:
    """Trims entries, drops blanks and duplicates while keeping order."""
    seen: dict[str, None] = {}
    for skill in skills:
        cleaned = skill.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)
