"""
Timezone utilities for the Cadence platform.

Availability is stored as wall-clock time; the owning user's timezone is what
turns it into real instants for downstream scheduling. The core never does
that conversion, it only reports which zone applies.
"""

import logging
from typing import Optional

import pytz

from .config import settings

logger = logging.getLogger(__name__)


def resolve_timezone_name(name: Optional[str]) -> str:
    """
    Validated IANA zone name, falling back to the configured default.

    Unknown or empty names are logged and replaced rather than rejected, so a
    bad profile value never blocks reading a schedule.
    """
    if name:
        try:
            pytz.timezone(name)
            return name
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone {name!r}; using {settings.default_timezone}")
    return settings.default_timezone

