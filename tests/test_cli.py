import json

import pytest
from click.testing import CliRunner

from staff_rota import __version__
from staff_rota.cli import main
from staff_rota.config import save_config
from staff_rota.models import Config

ROTA = {
	'employees': [
		{
			'name': 'Rob',
			'shifts': [
				{'day': 'Monday', 'shiftType': 'single', 'startTime1': 9, 'endTime1': 17, 'breakDuration': 30},
				{
					'day': 'Saturday',
					'shiftType': 'double',
					'startTime1': 10,
					'endTime1': 14,
					'startTime2': 18,
					'endTime2': 22,
				},
			],
		},
		{'name': 'Jane', 'shifts': [{'day': 'Friday', 'shiftType': 'none'}]},
	]
}


@pytest.fixture
def runner():
	return CliRunner()


@pytest.fixture
def rota_file(tmp_path):
	path = tmp_path / 'rota.json'
	path.write_text(json.dumps(ROTA), encoding='utf-8')
	return path


@pytest.fixture
def config_file(tmp_path):
	path = tmp_path / 'staff-rota.json'
	save_config(Config(url='https://rota.example.com'), path)
	return path


def test_version(runner, caplog):
	result = runner.invoke(main, ['--version'])

	assert result.exit_code == 0
	assert __version__ in caplog.text


def test_plan_shows_every_employee(runner, rota_file):
	result = runner.invoke(main, ['plan', str(rota_file)])

	assert result.exit_code == 0
	assert 'Rob' in result.output
	assert 'Jane' in result.output


def test_plan_only_some_employees(runner, rota_file):
	result = runner.invoke(main, ['plan', str(rota_file), '--only', 'jane'])

	assert result.exit_code == 0
	assert 'Jane' in result.output
	assert 'Rob' not in result.output


def test_plan_needs_an_existing_file(runner, tmp_path):
	result = runner.invoke(main, ['plan', str(tmp_path / 'missing.json')])

	assert result.exit_code == 2


def test_plan_reports_a_broken_rota(runner, tmp_path, caplog):
	path = tmp_path / 'rota.json'
	path.write_text('[{"name": "Rob", "shifts": [{"day": "Someday"}]}]', encoding='utf-8')

	result = runner.invoke(main, ['plan', str(path)])

	assert result.exit_code == 0
	assert 'Invalid rota' in caplog.text


def test_fill_dry_run(runner, rota_file, config_file, caplog):
	result = runner.invoke(main, ['-c', str(config_file), 'fill', str(rota_file), '--dry-run'])

	assert result.exit_code == 0
	assert 'DRY RUN: Would enter 3 shift slots' in caplog.text


def test_fill_without_config(runner, rota_file, tmp_path, monkeypatch, caplog):
	monkeypatch.setattr('staff_rota.config.DEFAULT_CONFIG_PATH', tmp_path / 'none.json')

	result = runner.invoke(main, ['fill', str(rota_file)])

	assert result.exit_code == 0
	assert "Run 'rota init'" in caplog.text


def test_fill_with_nobody_selected(runner, rota_file, config_file, caplog):
	result = runner.invoke(main, ['-c', str(config_file), 'fill', str(rota_file), '-o', 'Zed'])

	assert result.exit_code == 0
	assert 'No employees selected' in caplog.text


def test_init_keeps_existing_config(runner, config_file, caplog):
	before = config_file.read_text(encoding='utf-8')

	result = runner.invoke(main, ['-c', str(config_file), 'init'])

	assert result.exit_code == 0
	assert 'already exists' in caplog.text
	assert config_file.read_text(encoding='utf-8') == before
