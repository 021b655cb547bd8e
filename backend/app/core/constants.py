"""Application-wide constants for the Cadence scheduling portal."""

from __future__ import annotations

BRAND_NAME = "Cadence"

API_TITLE = f"{BRAND_NAME} Availability API"
API_DESCRIPTION = "Weekly recurring availability for instructors of service businesses."
API_VERSION = "0.1.0"

# Wall-clock bounds (minutes since midnight)
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# Availability constraints
MAX_BLOCKS_PER_DAY = 5
MIN_BLOCK_MINUTES = 15
SNAP_MINUTES = 15
GRID_START_MINUTES = 6 * MINUTES_PER_HOUR
GRID_END_MINUTES = 22 * MINUTES_PER_HOUR
HOUR_HEIGHT_PX = 48.0

# Block added by the list editor's "Add Block" action
DEFAULT_BLOCK_START = "09:00"
DEFAULT_BLOCK_END = "17:00"

# Day of week mapping (0 = Sunday, matching the stored day_of_week column)
DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DAYS_OF_WEEK_SHORT = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAYS = frozenset({1, 2, 3, 4, 5})

DEFAULT_TIMEZONE = "America/New_York"

# Trusted headers set by the upstream identity proxy
ORGANIZATION_HEADER = "X-Organization-Id"
MEMBERSHIP_HEADER = "X-Membership-Id"

# Error messages
ERROR_INSTRUCTOR_NOT_FOUND = "Instructor not found in this organization"
ERROR_NOT_INSTRUCTOR_CAPABLE = "Only instructors can have availability schedules"
ERROR_VIEW_OWN_ONLY = "You can only view your own availability"
ERROR_EDIT_OWN_ONLY = "Instructors can only edit their own availability"
ERROR_ADMIN_ONLY = "Only organization administrators can perform this action"
