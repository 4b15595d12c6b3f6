"""Progress reporting and cancellation shared by the automation components."""

from __future__ import annotations

import threading
from enum import StrEnum
from typing import Any, Callable, Protocol

from pydantic import BaseModel, Field

from . import logger


class ProgressStatus(StrEnum):
	"""Kinds of event emitted during a run."""

	STARTING = 'starting'
	LOGIN_REQUIRED = 'login_required'
	PROCESSING_EMPLOYEE = 'processing_employee'
	PROCESSING_SHIFT = 'processing_shift'
	EMPLOYEE_NOT_FOUND = 'employee_not_found'
	EMPLOYEE_ERROR = 'employee_error'
	SHIFT_ERROR = 'shift_error'
	PROGRESS = 'progress'
	CANCELLED = 'cancelled'
	COMPLETE = 'complete'
	ERROR = 'error'


class ProgressEvent(BaseModel):
	"""A status update with a small payload."""

	status: ProgressStatus
	data: dict[str, Any] = Field(default_factory=dict)


class ProgressChannel(Protocol):
	"""Anything the orchestrator can publish progress to."""

	def publish(self, event: ProgressEvent) -> None: ...


Listener = Callable[[ProgressEvent], None]


class ProgressBroadcaster:
	"""Delivers every event to every listener, in emission order."""

	def __init__(self) -> None:
		self._listeners: list[Listener] = []
		self.history: list[ProgressEvent] = []

	def subscribe(self, listener: Listener) -> None:
		"""Register a listener for all later events."""
		self._listeners.append(listener)

	def publish(self, event: ProgressEvent) -> None:
		"""Record and deliver an event synchronously."""
		self.history.append(event)
		for listener in list(self._listeners):
			try:
				listener(event)
			except Exception as e:
				# A broken observer must not stop the data entry
				logger.warning('Progress listener failed on %s: %s', event.status, e)


class AutomationCancelled(RuntimeError):
	"""Raised by a cancellable wait once cancellation was requested."""


class CancelToken:
	"""Thread-safe cancellation flag checked at safe points."""

	def __init__(self) -> None:
		self._event = threading.Event()

	def cancel(self) -> None:
		"""Request cancellation."""
		self._event.set()

	@property
	def cancelled(self) -> bool:
		"""Whether cancellation was requested."""
		return self._event.is_set()

	def raise_if_cancelled(self) -> None:
		"""Raise AutomationCancelled if cancellation was requested."""
		if self.cancelled:
			raise AutomationCancelled('Automation cancelled')
