"""Pydantic models for configuration, rota input and automation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional

from pydantic import (
	AliasChoices,
	BaseModel,
	ConfigDict,
	Field,
	HttpUrl,
	field_validator,
	model_validator,
)

from .clock import MAX_HOURS, to_clock_string
from .vocabulary import Weekdays

MAX_SHIFTS_PER_WEEK = 7


class ShiftKind(StrEnum):
	"""How many work periods a day holds."""

	NONE = 'none'
	SINGLE = 'single'
	DOUBLE = 'double'

	@property
	def step_count(self) -> int:
		"""Number of form fills this kind of day needs."""
		return {ShiftKind.NONE: 0, ShiftKind.SINGLE: 1, ShiftKind.DOUBLE: 2}[self]


@dataclass(frozen=True, slots=True)
class FillInstruction:
	"""Values for one pass through the shift form."""

	start_clock: str
	end_clock: str
	break_minutes: int
	force_break: bool = False

	@property
	def writes_break(self) -> bool:
		"""Whether the break input must be written (0 is written when forced)."""
		return self.break_minutes > 0 or self.force_break


_Hours = Optional[float]


class ShiftSlot(BaseModel):
	"""One day's work assignment for one employee. Immutable."""

	model_config = ConfigDict(frozen=True, populate_by_name=True)

	day: Weekdays
	kind: ShiftKind = Field(
		default=ShiftKind.NONE, validation_alias=AliasChoices('kind', 'shiftType')
	)
	start1: _Hours = Field(
		default=None, ge=0, le=MAX_HOURS, validation_alias=AliasChoices('start1', 'startTime1')
	)
	end1: _Hours = Field(
		default=None, ge=0, le=MAX_HOURS, validation_alias=AliasChoices('end1', 'endTime1')
	)
	break1_minutes: int = Field(
		default=0, ge=0, validation_alias=AliasChoices('break1_minutes', 'breakDuration')
	)
	start2: _Hours = Field(
		default=None, ge=0, le=MAX_HOURS, validation_alias=AliasChoices('start2', 'startTime2')
	)
	end2: _Hours = Field(
		default=None, ge=0, le=MAX_HOURS, validation_alias=AliasChoices('end2', 'endTime2')
	)

	@field_validator('day', mode='before')
	@classmethod
	def parse_day(cls, value: Any) -> Any:
		"""Accept 'Monday', 'mon' or a weekday number."""
		if isinstance(value, int):
			return Weekdays.from_number(value) or value
		if isinstance(value, str):
			return Weekdays.from_name(value) or value
		return value

	@field_validator('kind', mode='before')
	@classmethod
	def parse_kind(cls, value: Any) -> Any:
		"""Accept any casing of the kind name; a missing kind means no shift."""
		if value is None:
			return ShiftKind.NONE
		if isinstance(value, str):
			return value.strip().lower()
		return value

	@field_validator('break1_minutes', mode='before')
	@classmethod
	def parse_break(cls, value: Any) -> Any:
		"""A blank break cell means no break."""
		return 0 if value is None or value == '' else value

	@model_validator(mode='after')
	def check_times(self) -> ShiftSlot:
		"""Enforce which time fields each kind carries."""
		first = (self.start1, self.end1)
		second = (self.start2, self.end2)
		match self.kind:
			case ShiftKind.NONE:
				if any(t is not None for t in first + second):
					raise ValueError(f'{self.day.label}: a day without a shift cannot carry times')
			case ShiftKind.SINGLE:
				if any(t is None for t in first):
					raise ValueError(f'{self.day.label}: single shift needs start1 and end1')
				if any(t is not None for t in second):
					raise ValueError(f'{self.day.label}: single shift cannot carry start2/end2')
			case ShiftKind.DOUBLE:
				if any(t is None for t in first + second):
					raise ValueError(f'{self.day.label}: double shift needs all four times')
		return self

	@property
	def is_working(self) -> bool:
		"""Whether anything has to be entered for this day."""
		return self.kind != ShiftKind.NONE

	@property
	def step_count(self) -> int:
		"""Number of form fills this day needs."""
		return self.kind.step_count

	def instructions(self) -> list[FillInstruction]:
		"""Form fills for this day, in entry order.

		The break belongs to the first slot; the second slot of a double shift
		always writes a zero break to overwrite any portal default.
		"""
		if self.kind == ShiftKind.NONE:
			return []

		first = FillInstruction(
			start_clock=to_clock_string(self.start1),
			end_clock=to_clock_string(self.end1),
			break_minutes=self.break1_minutes,
		)
		if self.kind == ShiftKind.SINGLE:
			return [first]

		second = FillInstruction(
			start_clock=to_clock_string(self.start2),
			end_clock=to_clock_string(self.end2),
			break_minutes=0,
			force_break=True,
		)
		return [first, second]


class EmployeeSchedule(BaseModel):
	"""One employee's week as read from the rota spreadsheet."""

	model_config = ConfigDict(frozen=True)

	name: str = Field(min_length=1)
	shifts: list[ShiftSlot] = Field(default_factory=list, max_length=MAX_SHIFTS_PER_WEEK)

	@field_validator('name')
	@classmethod
	def strip_name(cls, value: str) -> str:
		"""Names are compared without surrounding whitespace."""
		value = value.strip()
		if not value:
			raise ValueError('employee name cannot be blank')
		return value

	@model_validator(mode='after')
	def check_day_order(self) -> EmployeeSchedule:
		"""Shifts must be unique per day and listed Monday to Sunday."""
		numbers = [shift.day.number for shift in self.shifts]
		if numbers != sorted(set(numbers)):
			raise ValueError(f'{self.name}: shifts must be one per day in weekday order')
		return self

	@property
	def working_shifts(self) -> list[ShiftSlot]:
		"""Days that need entering, in day order."""
		return [shift for shift in self.shifts if shift.is_working]

	@property
	def step_count(self) -> int:
		"""Form fills needed for the whole week."""
		return sum(shift.step_count for shift in self.shifts)


class FailureReason(StrEnum):
	"""Why a shift could not be entered (or confirmed)."""

	ROW_NOT_FOUND = 'row_not_found'
	CELL_NOT_FOUND = 'cell_not_found'
	INPUT_NOT_FOUND = 'input_not_found'
	SAVE_CONTROL_NOT_FOUND = 'save_control_not_found'
	SAVE_UNCONFIRMED = 'save_unconfirmed'
	ERROR = 'error'


class FailedShift(BaseModel):
	"""A shift left for manual completion."""

	employee: str
	day: Weekdays
	reason: FailureReason
	slot: int = 1
	error: Optional[str] = None


class AutomationStatus(StrEnum):
	"""Lifecycle of one automation run."""

	IDLE = 'idle'
	STARTING = 'starting'
	NAVIGATING_TO_LOGIN = 'navigating_to_login'
	AWAITING_LOGIN = 'awaiting_login'
	NAVIGATING_TO_SCHEDULE = 'navigating_to_schedule'
	RUNNING = 'running'
	COMPLETE = 'complete'
	ERROR = 'error'


class AutomationOutcome(BaseModel):
	"""Everything a run accumulated; reset at the start of each run."""

	status: AutomationStatus = AutomationStatus.IDLE
	missing_employees: list[str] = Field(default_factory=list)
	failed_shifts: list[FailedShift] = Field(default_factory=list)
	completed_steps: int = 0
	total_steps: int = 0
	cancelled: bool = False

	def add_missing(self, name: str) -> None:
		"""Record an employee whose row was never resolved (once)."""
		if name not in self.missing_employees:
			self.missing_employees.append(name)

	@property
	def is_clean(self) -> bool:
		"""Whether nothing needs manual follow-up."""
		return not self.missing_employees and not self.failed_shifts and not self.cancelled


class Config(BaseModel):
	"""Main configuration."""

	url: HttpUrl = HttpUrl('https://fourthospitality.com')
	headless: bool = False
	slow_mo: int = Field(default=0, ge=0)
	first_name_only: bool = True
	name_mappings: dict[str, str] = Field(default_factory=dict)
