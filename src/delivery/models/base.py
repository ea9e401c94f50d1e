import secrets
import string
from datetime import UTC, datetime

_ID_ALPHABET = string.ascii_uppercase + string.digits


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime.

    Records are stored as JSON, so timestamps serialize to ISO 8601 with offset.
    """
    return datetime.now(UTC)


def generate_project_id(length: int = 8) -> str:
    """Generate an opaque short alphanumeric project ID, e.g. ``ABCD1234``."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def generate_id(prefix: str) -> str:
    """Generate a prefixed random ID for records nested in a project."""
    return f"{prefix}_{secrets.token_hex(8)}"
