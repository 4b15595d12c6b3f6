import math

import pytest

from staff_rota.clock import from_clock_string, to_clock_string


@pytest.mark.parametrize(
	('hours', 'expected'),
	[
		(8.5, '08:30'),
		(9, '09:00'),
		(17.75, '17:45'),
		(25.25, '01:15'),
		(24, '00:00'),
		(9.999, '10:00'),
		(23.9999, '00:00'),
	],
)
def test_to_clock_string(hours, expected):
	assert to_clock_string(hours) == expected


@pytest.mark.parametrize('hours', [0, -1.5, None, math.nan])
def test_to_clock_string_treats_zero_and_missing_as_absent(hours):
	assert to_clock_string(hours) == ''


@pytest.mark.parametrize(
	('value', 'expected'),
	[
		('08:30', 8.5),
		('8:30', 8.5),
		(' 17:45 ', 17.75),
		('26:00', 26.0),
	],
)
def test_from_clock_string(value, expected):
	assert from_clock_string(value) == pytest.approx(expected)


@pytest.mark.parametrize('value', ['', None, '8.30', '830', '10:60', '29:00', 'ab:cd', '1:5'])
def test_from_clock_string_rejects_invalid(value):
	assert from_clock_string(value) is None


@pytest.mark.parametrize('hours', [0.25, 6 + 1 / 60, 12.5, 13 + 59 / 60, 22.1])
def test_clock_string_survives_a_round_trip(hours):
	assert from_clock_string(to_clock_string(hours)) == pytest.approx(hours, abs=1 / 60)
