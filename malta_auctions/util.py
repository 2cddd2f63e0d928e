"""
Utility functions for Malta Auctions.

Provides time formatting and value masking helpers.
"""

import time
from datetime import datetime, timezone


def now_epoch() -> int:
    """Get current Unix timestamp as integer."""
    return int(time.time())


def utc_rfc3339(ts_epoch: int) -> str:
    """Convert Unix timestamp to RFC3339 UTC string."""
    return datetime.fromtimestamp(ts_epoch, tz=timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def utc_now_iso() -> str:
    """Current time as an RFC3339 UTC string."""
    return utc_rfc3339(now_epoch())


def mask_serial(serial: str, mask: str = "XXXX", anchor: int = 4) -> str:
    """
    Mask a serial number, keeping the first and last `anchor` characters.

    Serials shorter than two anchors are masked in full, one 'X' per
    character, so no part of a short value is revealed.
    """
    if len(serial) < anchor * 2:
        return "X" * len(serial)
    return serial[:anchor] + mask + serial[-anchor:]
