"""Command-line interface for Staff Rota."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from . import __version__, console, enable_debug_logging, logger
from .automation import run_automation_flow, select_schedules
from .config import (
	config_exists,
	create_config_interactive,
	get_config_path,
	load_config,
	save_config,
)
from .display import display_plan
from .progress import AutomationCancelled
from .schedule import load_schedules

SCHEDULE_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group(invoke_without_command=True, context_settings={'help_option_names': ['-h', '--help']})
@click.option('--version', '-v', is_flag=True, help='Show version and exit.')
@click.option('--config', '-c', type=click.Path(exists=True), help='Config file path.')
@click.option('--verbose', is_flag=True, help='Enable verbose/debug logging.')
@click.pass_context
def main(ctx: click.Context, version: bool, config: Optional[str], verbose: bool) -> None:
	"""📅 Staff Rota Auto-Entry CLI

	Enters a weekly rota into the scheduling portal for you.

	\b
	Quick start:
		1. Run 'rota init' to create your config
		2. Run 'rota plan rota.json' to check what will be entered
		3. Run 'rota fill rota.json' and log in when the browser opens

	\b
	Config file: ~/.config/staff-rota.json

	\b
	Use -c to specify a custom config file:
		rota -c ./my-config.json fill rota.json
	"""
	if verbose:
		enable_debug_logging()
	ctx.ensure_object(dict)
	ctx.obj['config_path'] = Path(config) if config else None

	if version:
		logger.info('staff-rota version %s', __version__)
		return

	if ctx.invoked_subcommand is None:
		click.echo(ctx.get_help())


@main.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--force', '-f', is_flag=True, help='Overwrite existing config.')
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
	"""Initialize configuration and install browser.

	Creates a configuration file at ~/.config/staff-rota.json
	and installs the Playwright browser.
	"""
	config_path = ctx.obj.get('config_path') or get_config_path()

	if config_exists(config_path) and not force:
		logger.warning('Configuration already exists at %s', config_path)
		logger.info('Use --force to overwrite.')
		return

	config = create_config_interactive()
	save_config(config, config_path)

	# Install browser
	logger.info('Installing Playwright browser...')
	try:
		result = subprocess.run(
			['playwright', 'install', 'chromium'], capture_output=True, text=True, check=False
		)
		if result.returncode == 0:
			logger.success('✓ Browser installed!')
		else:
			logger.warning("Browser install failed. Run 'playwright install chromium' manually.")
	except (subprocess.SubprocessError, OSError) as e:
		logger.warning('Could not install browser: %s', e)
		logger.warning("Run 'playwright install chromium' manually.")

	console.print(
		Panel(
			f'[green]✓ Setup complete![/green]\n\n'
			f'Config: [cyan]{config_path}[/cyan]\n\n'
			f"[dim]Run 'rota plan <rota.json>' to preview a rota.[/dim]",
			title='🎉 Ready',
			border_style='green',
		)
	)


@main.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('schedule', type=SCHEDULE_FILE)
@click.option('--only', '-o', multiple=True, help='Only this employee (repeatable).')
def plan(schedule: Path, only: tuple[str, ...]) -> None:
	"""Show the shifts a rota file would enter.

	Reads the file only; the portal is not opened.
	"""
	try:
		schedules = load_schedules(schedule)
	except (FileNotFoundError, ValueError) as e:
		logger.error('%s', e)
		return

	display_plan(select_schedules(schedules, only))


@main.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('schedule', type=SCHEDULE_FILE)
@click.option('--dry-run', '-d', is_flag=True, help='Preview without opening the portal.')
@click.option('--yes', '-y', 'assume_yes', is_flag=True, help='Do not ask for confirmation.')
@click.option('--only', '-o', multiple=True, help='Only this employee (repeatable).')
@click.pass_context
def fill(
	ctx: click.Context,
	schedule: Path,
	dry_run: bool,
	assume_yes: bool,
	only: tuple[str, ...],
) -> None:
	"""Enter a rota file into the portal.

	The browser opens on the portal; log in there when asked. Press
	Ctrl+C to stop after the shift being entered.

	\b
	Examples:
		rota fill rota.json                 # Enter the whole rota
		rota fill rota.json --dry-run       # Preview changes
		rota fill rota.json -o Rob -o Jane  # Only these employees
	"""
	config_path = ctx.obj.get('config_path')
	try:
		cfg = load_config(config_path)
		schedules = load_schedules(schedule)
	except (FileNotFoundError, ValueError) as e:
		logger.error('%s', e)
		return

	schedules = select_schedules(schedules, only)
	if not schedules:
		logger.warning('No employees selected.')
		return

	try:
		run_automation_flow(config=cfg, schedules=schedules, dry_run=dry_run, assume_yes=assume_yes)
	except AutomationCancelled:
		logger.warning('Cancelled before any shift was entered.')
		ctx.exit(1)


if __name__ == '__main__':
	main()
