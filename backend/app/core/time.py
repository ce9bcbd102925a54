"""Timezone-aware UTC clock shared by model defaults, logins and reversals."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)
