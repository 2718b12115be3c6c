"""Platform lookup of the local UTC offset.

The operating system is treated as an opaque provider of "the offset in
effect at this instant, or failure". Every call queries it afresh; nothing
is cached and a failure is not retried.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from civiltime._internal.rules import MAX_OFFSET_SECONDS
from civiltime.errors import IndeterminateOffset

if TYPE_CHECKING:
    from civiltime.units.offset import UtcOffset

logger = logging.getLogger(__name__)

OffsetProvider = Callable[[int], int]
"""A callable mapping a Unix timestamp to an offset in seconds east of UTC."""


def system_offset_seconds(unix_timestamp: int) -> int:
    """Return the platform's UTC offset in seconds at ``unix_timestamp``.

    Raises:
        OSError, OverflowError, ValueError: If the platform cannot convert
            the timestamp.
        AttributeError: If the platform does not report ``tm_gmtoff``.
    """
    return time.localtime(unix_timestamp).tm_gmtoff


def local_offset_at(unix_timestamp: int, provider: OffsetProvider | None = None) -> UtcOffset:
    """Return the local UtcOffset in effect at a Unix timestamp.

    Args:
        unix_timestamp: Seconds since 1970-01-01T00:00:00Z.
        provider: Offset source; defaults to the platform's local time
            conversion.

    Returns:
        The UtcOffset reported by the provider.

    Raises:
        IndeterminateOffset: If the provider fails or reports an offset of a
            day or more.
    """
    from civiltime.units.offset import UtcOffset

    lookup = provider if provider is not None else system_offset_seconds
    try:
        seconds = lookup(unix_timestamp)
    except (OSError, OverflowError, ValueError, AttributeError) as exc:
        logger.debug("Local offset lookup failed at %s: %s", unix_timestamp, exc)
        raise IndeterminateOffset() from exc

    if not isinstance(seconds, int) or abs(seconds) > MAX_OFFSET_SECONDS:
        logger.debug("Local offset lookup at %s returned %r", unix_timestamp, seconds)
        raise IndeterminateOffset()

    return UtcOffset._from_seconds(seconds)


__all__ = ["OffsetProvider", "system_offset_seconds", "local_offset_at"]
