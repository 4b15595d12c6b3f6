import json

import pytest

from staff_rota.models import ShiftKind
from staff_rota.schedule import load_schedules, parse_schedules

ROTA = {
	'employees': [
		{
			'name': 'Rob',
			'shifts': [
				{'day': 'Monday', 'shiftType': 'single', 'startTime1': 9, 'endTime1': 17, 'breakDuration': 30},
				{'day': 'Tuesday', 'shiftType': 'none'},
				{
					'day': 'Saturday',
					'shiftType': 'double',
					'startTime1': 10,
					'endTime1': 14,
					'breakDuration': 15,
					'startTime2': 18,
					'endTime2': 23.5,
				},
			],
		},
		{'name': 'Jane', 'shifts': []},
	]
}


def test_load_wrapped_rota(tmp_path):
	path = tmp_path / 'rota.json'
	path.write_text(json.dumps(ROTA), encoding='utf-8')

	schedules = load_schedules(path)

	assert [schedule.name for schedule in schedules] == ['Rob', 'Jane']
	assert schedules[0].shifts[2].kind == ShiftKind.DOUBLE
	assert schedules[0].step_count == 3
	assert schedules[1].step_count == 0


def test_parse_bare_list():
	schedules = parse_schedules(ROTA['employees'])
	assert len(schedules) == 2


def test_missing_file(tmp_path):
	with pytest.raises(FileNotFoundError):
		load_schedules(tmp_path / 'missing.json')


def test_invalid_json(tmp_path):
	path = tmp_path / 'rota.json'
	path.write_text('{not json', encoding='utf-8')
	with pytest.raises(ValueError, match='not valid JSON'):
		load_schedules(path)


def test_invalid_rota():
	with pytest.raises(ValueError, match='Invalid rota'):
		parse_schedules([{'name': 'Rob', 'shifts': [{'day': 'Someday'}]}])


def test_object_without_employees():
	with pytest.raises(ValueError, match='employees'):
		parse_schedules({'staff': []})
