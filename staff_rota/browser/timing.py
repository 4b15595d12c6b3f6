"""Fixed delays and the single polling helper used by every wait."""

from enum import IntEnum
from typing import Callable, Optional

from ..progress import CancelToken


class Timing(IntEnum):
	"""Timing constants (milliseconds)"""

	WAIT_FOR_FORM = 1000
	FORM_SETTLE = 1000
	SAVE_START = 500
	LOADING_POLL = 500
	SAVE_SETTLE = 1000
	DOUBLE_SHIFT_SETTLE = 2000
	SHIFT_RECOVERY = 2000
	LOGIN_POLL = 1000
	NAVIGATION_POLL = 1000
	AFTER_NAVIGATION_CLICK = 2000
	AFTER_MENU_OPEN = 1000
	AFTER_FRAME_REDIRECT = 3000


LOADING_MAX_ATTEMPTS = 10
NAVIGATION_MAX_ATTEMPTS = 10


def await_condition(
	predicate: Callable[[], bool],
	interval: int,
	max_attempts: Optional[int],
	sleep: Callable[[int], None],
	cancel: Optional[CancelToken] = None,
) -> bool:
	"""Poll predicate every interval ms until it holds.

	Args:
		predicate: Condition to wait for.
		interval: Delay between checks (milliseconds).
		max_attempts: Number of checks before giving up; None polls forever.
		sleep: Function that yields to the browser for the given milliseconds.
		cancel: Token checked before every sleep.

	Returns:
		True if the condition held, False if the attempt budget ran out.

	Raises:
		AutomationCancelled: If the token was cancelled while waiting.
	"""
	attempts = 0
	while max_attempts is None or attempts < max_attempts:
		if cancel is not None:
			cancel.raise_if_cancelled()
		sleep(interval)
		attempts += 1
		if predicate():
			return True
	return False
