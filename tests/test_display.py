from staff_rota.display import display_outcome, format_instruction, format_shift, log_progress
from staff_rota.models import AutomationOutcome, FailedShift, FailureReason, FillInstruction, ShiftSlot
from staff_rota.progress import ProgressEvent, ProgressStatus


def test_format_instruction():
	assert format_instruction(FillInstruction('09:00', '17:00', 30)) == '09:00-17:00 (30m)'
	assert format_instruction(FillInstruction('18:00', '22:00', 0, force_break=True)) == '18:00-22:00'


def test_format_double_shift():
	shift = ShiftSlot(day='friday', kind='double', start1=10, end1=14, start2=18, end2=22)

	assert format_shift(shift) == '[cyan]10:00-14:00 + 18:00-22:00[/cyan]'
	assert format_shift(None) == '[dim]-[/dim]'


def test_outcome_lists_what_is_left_to_do(caplog):
	outcome = AutomationOutcome(
		missing_employees=['Xavier'],
		failed_shifts=[FailedShift(employee='Rob', day='tuesday', reason=FailureReason.CELL_NOT_FOUND)],
		completed_steps=2,
		total_steps=3,
	)

	display_outcome(outcome)

	assert 'Slots attempted: 2/3' in caplog.text
	assert 'Employees not found: Xavier' in caplog.text


def test_clean_outcome(caplog):
	display_outcome(AutomationOutcome(completed_steps=1, total_steps=1))

	assert 'nothing to finish by hand' in caplog.text


def test_progress_log(caplog):
	log_progress(ProgressEvent(status=ProgressStatus.EMPLOYEE_NOT_FOUND, data={'employee': 'Xavier'}))

	assert 'Xavier not found in the portal' in caplog.text
