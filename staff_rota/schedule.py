"""Loading the weekly rota exported from the spreadsheet."""

import json
from pathlib import Path
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError

from . import logger
from .models import EmployeeSchedule

SCHEDULES_ADAPTER = TypeAdapter(list[EmployeeSchedule])


def parse_schedules(payload: Any) -> list[EmployeeSchedule]:
	"""Validate an already decoded rota.

	Args:
		payload: Either a list of employees or an object with an "employees" list.

	Raises:
		ValueError: If the payload does not describe a valid rota.
	"""
	if isinstance(payload, dict):
		if 'employees' not in payload:
			raise ValueError('Rota object has no "employees" list')
		payload = payload['employees']

	try:
		return SCHEDULES_ADAPTER.validate_python(payload)
	except ValidationError as e:
		raise ValueError(f'Invalid rota: {e}') from e


def load_schedules(path: Union[str, Path]) -> list[EmployeeSchedule]:
	"""Load and validate a rota JSON file.

	Raises:
		FileNotFoundError: If the file does not exist.
		ValueError: If the file is not valid JSON or not a valid rota.
	"""
	path = Path(path)
	if not path.exists():
		raise FileNotFoundError(f'Rota file not found: {path}')

	try:
		payload = json.loads(path.read_text(encoding='utf-8'))
	except json.JSONDecodeError as e:
		raise ValueError(f'Rota file is not valid JSON: {e}') from e

	schedules = parse_schedules(payload)
	logger.debug('Loaded %d employees from %s', len(schedules), path)
	return schedules
