"""Conversion between decimal hours and HH:MM strings."""

import math
import re
from typing import Optional

_CLOCK_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')

# Hours above 24 encode the next day (an overnight end time).
MAX_HOURS = 28


def to_clock_string(hours: Optional[float]) -> str:
	"""Render decimal hours as a zero-padded "HH:MM" string.

	None, NaN, zero and negative values render as an empty string, so a shift
	starting at midnight is indistinguishable from an absent one. Values of 24
	or more fold back into the 24 hour range (25.25 -> "01:15").
	"""
	if hours is None or math.isnan(hours) or hours <= 0:
		return ''

	hour = math.floor(hours)
	# Half up: 0.125 h is 8 minutes
	minutes = math.floor((hours - hour) * 60 + 0.5)
	if minutes == 60:
		hour += 1
		minutes = 0
	hour %= 24

	return f'{hour:02d}:{minutes:02d}'


def from_clock_string(value: Optional[str]) -> Optional[float]:
	"""Parse "H:MM" or "HH:MM" into decimal hours, or None when invalid."""
	if not value:
		return None
	if not (match := _CLOCK_PATTERN.match(value.strip())):
		return None

	hours, minutes = int(match.group(1)), int(match.group(2))
	if hours > MAX_HOURS or minutes > 59:
		return None
	return hours + minutes / 60
