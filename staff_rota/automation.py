"""Rota entry logic: the run state machine and the interactive flow around it."""

from __future__ import annotations

import signal
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional, Sequence

from rich.prompt import Confirm

from . import logger
from .browser import RotaBrowser
from .browser.navigation import NavigationError
from .browser.timing import Timing
from .display import display_outcome, display_plan, log_progress
from .models import (
	AutomationOutcome,
	AutomationStatus,
	Config,
	EmployeeSchedule,
	FailedShift,
	FailureReason,
	ShiftSlot,
)
from .progress import CancelToken, ProgressBroadcaster, ProgressChannel, ProgressEvent, ProgressStatus

if TYPE_CHECKING:
	from .browser import BrowserSession, ElementLocator, FormFiller, NavigationController
	from .names import NameResolver


class AutomationOrchestrator:
	"""Enters a week of shifts for a list of employees, one slot at a time.

	Per-item problems (an employee nobody can find, a cell that will not
	open, a save that shows an error) are recorded in the outcome and the
	run moves on. Only failures before the first employee is processed
	abort the run.
	"""

	def __init__(
		self,
		session: BrowserSession,
		navigation: NavigationController,
		locator: ElementLocator,
		filler: FormFiller,
		names: NameResolver,
		channel: Optional[ProgressChannel] = None,
		cancel: Optional[CancelToken] = None,
	) -> None:
		self._session = session
		self._navigation = navigation
		self._locator = locator
		self._filler = filler
		self._names = names
		self._channel = channel if channel is not None else ProgressBroadcaster()
		self._cancel = cancel if cancel is not None else CancelToken()
		self.outcome = AutomationOutcome()
		self._slot = 1

	@classmethod
	def from_browser(
		cls,
		browser: RotaBrowser,
		channel: Optional[ProgressChannel] = None,
		cancel: Optional[CancelToken] = None,
	) -> AutomationOrchestrator:
		"""Build an orchestrator from the helpers of an open browser."""
		return cls(
			browser.session,
			browser.navigation,
			browser.locator,
			browser.filler,
			browser.names,
			channel=channel,
			cancel=cancel,
		)

	def request_cancel(self) -> None:
		"""Ask the run to stop at the next employee or shift boundary."""
		self._cancel.cancel()

	def _emit(self, status: ProgressStatus, **data) -> None:
		self._channel.publish(ProgressEvent(status=status, data=data))

	def _summary(self) -> dict:
		return {
			'missing_employees': list(self.outcome.missing_employees),
			'failed_shifts': [failure.model_dump(mode='json') for failure in self.outcome.failed_shifts],
			'completed': self.outcome.completed_steps,
			'total': self.outcome.total_steps,
		}

	# =========================================================================
	# Setup
	# =========================================================================

	def _ensure_logged_in(self) -> None:
		if not self._navigation.is_login_page():
			return
		self.outcome.status = AutomationStatus.AWAITING_LOGIN
		self._emit(ProgressStatus.LOGIN_REQUIRED)
		self._navigation.wait_for_login(self._cancel)

	def _ensure_schedule_page(self) -> None:
		self.outcome.status = AutomationStatus.NAVIGATING_TO_SCHEDULE
		try:
			self._navigation.navigate_to_scheduling_page()
			return
		except NavigationError as e:
			logger.warning('%s', e)

		if self._navigation.is_scheduling_page():
			return
		if self._navigation.fallback_navigation():
			logger.success('✓ Reached scheduling page via fallback')
			return
		logger.warning('Scheduling page not confirmed, continuing anyway')

	# =========================================================================
	# Processing
	# =========================================================================

	def _record(
		self,
		employee: str,
		shift: ShiftSlot,
		reason: FailureReason,
		slot: int,
		error: Optional[str] = None,
	) -> None:
		self.outcome.failed_shifts.append(
			FailedShift(employee=employee, day=shift.day, reason=reason, slot=slot, error=error)
		)

	def _advance(self) -> None:
		self.outcome.completed_steps += 1
		self._emit(
			ProgressStatus.PROGRESS,
			completed=self.outcome.completed_steps,
			total=self.outcome.total_steps,
		)

	def _process_shift(self, employee: str, portal_name: str, shift: ShiftSlot) -> None:
		"""Enter every slot of one day. The row and cell are looked up again per slot."""
		for slot, instruction in enumerate(shift.instructions(), start=1):
			self._slot = slot
			if slot > 1:
				# The first sub-form has to close before the cell accepts a second slot
				self._session.sleep(Timing.DOUBLE_SHIFT_SETTLE)

			row = self._locator.find_employee_row(portal_name)
			if row is None:
				self._record(employee, shift, FailureReason.ROW_NOT_FOUND, slot)
				return

			cell = self._locator.find_day_cell(row, shift.day)
			if cell is None:
				self._record(employee, shift, FailureReason.CELL_NOT_FOUND, slot)
				return

			cell.locator.click()
			self._session.sleep(Timing.WAIT_FOR_FORM)

			result = self._filler.fill(instruction)
			self._advance()

			if not result.saved:
				self._record(employee, shift, result.reason or FailureReason.SAVE_UNCONFIRMED, slot)
			elif result.missing_inputs:
				missing = ', '.join(str(role) for role in result.missing_inputs)
				self._record(employee, shift, FailureReason.INPUT_NOT_FOUND, slot, f'missing {missing}')
			else:
				logger.success(
					'✓ %s %s %s-%s', employee, shift.day.short, instruction.start_clock, instruction.end_clock
				)

	def _process_employee(self, schedule: EmployeeSchedule, index: int, total: int) -> None:
		portal_name = self._names.portal_name(schedule.name)
		logger.info('👤 %s (%d/%d)', schedule.name, index + 1, total)
		self._emit(
			ProgressStatus.PROCESSING_EMPLOYEE, employee=schedule.name, index=index, total=total
		)

		try:
			row = self._locator.find_employee_row(portal_name)
		except Exception as e:
			logger.error('Error finding %s: %s', schedule.name, e)
			self.outcome.add_missing(schedule.name)
			self._emit(ProgressStatus.EMPLOYEE_ERROR, employee=schedule.name, error=str(e))
			return

		if row is None:
			self.outcome.add_missing(schedule.name)
			self._emit(ProgressStatus.EMPLOYEE_NOT_FOUND, employee=schedule.name)
			return

		for shift in schedule.working_shifts:
			if self._cancel.cancelled:
				return
			self._slot = 1
			self._emit(
				ProgressStatus.PROCESSING_SHIFT,
				employee=schedule.name,
				day=shift.day.value,
				kind=shift.kind.value,
			)
			try:
				self._process_shift(schedule.name, portal_name, shift)
			except Exception as e:
				logger.error('Error entering %s %s: %s', schedule.name, shift.day.label, e)
				self._record(schedule.name, shift, FailureReason.ERROR, self._slot, str(e))
				self._emit(
					ProgressStatus.SHIFT_ERROR,
					employee=schedule.name,
					day=shift.day.value,
					error=str(e),
				)
				self._session.sleep(Timing.SHIFT_RECOVERY)

	def run(self, schedules: Sequence[EmployeeSchedule]) -> AutomationOutcome:
		"""Enter all schedules into the portal.

		Args:
			schedules: Employees in the order they should be processed.

		Returns:
			The outcome, listing what has to be finished by hand.

		Raises:
			Exception: Whatever stopped the run before the first employee
				(including AutomationCancelled while waiting for login).
		"""
		self.outcome = AutomationOutcome(
			status=AutomationStatus.STARTING,
			total_steps=sum(schedule.step_count for schedule in schedules),
		)
		self._emit(ProgressStatus.STARTING, employees=len(schedules), total=self.outcome.total_steps)
		self._emit(ProgressStatus.PROGRESS, completed=0, total=self.outcome.total_steps)

		try:
			self._ensure_logged_in()
			self._ensure_schedule_page()
		except Exception as e:
			self.outcome.status = AutomationStatus.ERROR
			logger.error('Automation failed: %s', e)
			self._emit(ProgressStatus.ERROR, error=str(e))
			raise

		self.outcome.status = AutomationStatus.RUNNING
		for index, schedule in enumerate(schedules):
			if self._cancel.cancelled:
				break
			self._process_employee(schedule, index, len(schedules))

		self.outcome.status = AutomationStatus.COMPLETE
		if self._cancel.cancelled:
			self.outcome.cancelled = True
			logger.warning('Automation cancelled')
			self._emit(ProgressStatus.CANCELLED, **self._summary())
		else:
			self._emit(ProgressStatus.COMPLETE, **self._summary())
		return self.outcome


# =============================================================================
# Interactive flow
# =============================================================================


@contextmanager
def cancel_on_interrupt(orchestrator: AutomationOrchestrator) -> Iterator[None]:
	"""Turn Ctrl+C into a cancellation request for the duration of a run."""

	def handler(signum, frame) -> None:
		logger.warning('Stopping after the current shift...')
		orchestrator.request_cancel()

	previous = signal.signal(signal.SIGINT, handler)
	try:
		yield
	finally:
		signal.signal(signal.SIGINT, previous)


def select_schedules(
	schedules: list[EmployeeSchedule], only: Optional[Sequence[str]] = None
) -> list[EmployeeSchedule]:
	"""Keep only the named employees (case-insensitive), in file order."""
	if not only:
		return schedules

	wanted = {name.strip().lower() for name in only}
	selected = [schedule for schedule in schedules if schedule.name.lower() in wanted]
	known = {schedule.name.lower() for schedule in selected}
	for name in sorted(wanted - known):
		logger.warning('No schedule for %s in the file', name)
	return selected


def run_automation_flow(
	config: Config,
	schedules: list[EmployeeSchedule],
	dry_run: bool = False,
	assume_yes: bool = False,
) -> Optional[AutomationOutcome]:
	"""Run the full rota entry flow.

	Args:
		config: Application configuration.
		schedules: Employees to enter, already filtered.
		dry_run: If True, only show the plan.
		assume_yes: If True, don't ask before writing to the portal.

	Returns:
		The outcome, or None if nothing was run.
	"""
	logger.info('╔══════════════════════════════════════════╗')
	logger.info('║        Staff Rota Auto-Entry             ║')
	logger.info('╚══════════════════════════════════════════╝')

	display_plan(schedules)

	total_steps = sum(schedule.step_count for schedule in schedules)
	if total_steps == 0:
		logger.success('✓ Nothing to enter!')
		return None

	if dry_run:
		logger.warning('DRY RUN: Would enter %d shift slots', total_steps)
		return None

	if not assume_yes and not Confirm.ask(
		f'\n[yellow]Enter {total_steps} shift slots into the portal?[/yellow]', default=True
	):
		logger.info('Cancelled.')
		return None

	channel = ProgressBroadcaster()
	channel.subscribe(log_progress)

	with RotaBrowser(config) as browser:
		browser.open_portal()
		orchestrator = AutomationOrchestrator.from_browser(browser, channel=channel)

		with cancel_on_interrupt(orchestrator):
			outcome = orchestrator.run(schedules)

		display_outcome(outcome)

		if not config.headless:
			input('Press Enter to close browser...')

	return outcome
