"""Display and formatting utilities for rota data."""

from typing import Optional

from rich.table import Table

from . import console, logger
from .models import AutomationOutcome, EmployeeSchedule, FillInstruction, ShiftSlot
from .progress import ProgressEvent, ProgressStatus
from .vocabulary import Weekdays


def format_instruction(instruction: FillInstruction) -> str:
	"""Format one slot as HH:MM-HH:MM, with the break when one is written."""
	times = f'{instruction.start_clock}-{instruction.end_clock}'
	if instruction.break_minutes > 0:
		return f'{times} ({instruction.break_minutes}m)'
	return times


def format_shift(shift: Optional[ShiftSlot]) -> str:
	"""Format a day cell of the plan table."""
	if shift is None or not shift.is_working:
		return '[dim]-[/dim]'
	slots = ' + '.join(format_instruction(instruction) for instruction in shift.instructions())
	color = 'cyan' if len(shift.instructions()) > 1 else 'green'
	return f'[{color}]{slots}[/{color}]'


def display_plan(schedules: list[EmployeeSchedule]) -> None:
	"""Display the shifts that would be entered as a Rich table."""
	if not schedules:
		logger.warning('No employees in schedule.')
		return

	total_steps = sum(schedule.step_count for schedule in schedules)
	table = Table(
		title=f'📋 Rota Plan ({len(schedules)} employees, {total_steps} slots)',
		show_header=True,
		header_style='bold cyan',
	)

	table.add_column('Employee', style='bold')
	for day in Weekdays:
		table.add_column(day.short, justify='center')

	for schedule in schedules:
		by_day = {shift.day: shift for shift in schedule.shifts}
		table.add_row(
			schedule.name,
			*(format_shift(by_day.get(day)) for day in Weekdays),
			style='dim' if schedule.step_count == 0 else None,
		)

	console.print(table)


def display_outcome(outcome: AutomationOutcome) -> None:
	"""Summarize a run: counts, then everything left for manual entry."""
	logger.info('=' * 40)
	logger.success('✓ Slots attempted: %d/%d', outcome.completed_steps, outcome.total_steps)
	if outcome.cancelled:
		logger.warning('⚠ Run was cancelled before all employees were processed')

	if outcome.is_clean:
		logger.success('✓ Everything entered, nothing to finish by hand')
		logger.info('=' * 40)
		return

	if outcome.missing_employees:
		logger.error('✗ Employees not found: %s', ', '.join(outcome.missing_employees))

	if outcome.failed_shifts:
		table = Table(
			title='✗ Shifts to enter manually',
			show_header=True,
			header_style='bold red',
		)
		table.add_column('Employee')
		table.add_column('Day', style='dim')
		table.add_column('Slot', justify='center')
		table.add_column('Reason')

		for failure in outcome.failed_shifts:
			reason = failure.reason.value.replace('_', ' ')
			if failure.error:
				reason = f'{reason}: {failure.error}'
			table.add_row(failure.employee, failure.day.short, str(failure.slot), reason)

		console.print(table)
	logger.info('=' * 40)


def log_progress(event: ProgressEvent) -> None:
	"""Progress listener that writes run events to the log."""
	data = event.data
	match event.status:
		case ProgressStatus.LOGIN_REQUIRED:
			logger.warning('🔐 Please log in to the portal in the browser window')
		case ProgressStatus.EMPLOYEE_NOT_FOUND:
			logger.warning('✗ %s not found in the portal', data.get('employee'))
		case ProgressStatus.EMPLOYEE_ERROR:
			logger.error('✗ %s: %s', data.get('employee'), data.get('error'))
		case ProgressStatus.SHIFT_ERROR:
			logger.error('✗ %s %s: %s', data.get('employee'), data.get('day'), data.get('error'))
		case ProgressStatus.PROGRESS:
			logger.debug('Progress %s/%s', data.get('completed'), data.get('total'))
		case ProgressStatus.PROCESSING_SHIFT:
			logger.debug('Entering %s %s', data.get('employee'), data.get('day'))
		case ProgressStatus.ERROR:
			logger.error('Automation stopped: %s', data.get('error'))
		case _:
			logger.debug('%s %s', event.status, data)
