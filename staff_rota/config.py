"""Configuration management for the Staff Rota CLI."""

from pathlib import Path
from typing import Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError
from rich.prompt import Confirm, Prompt

from . import logger
from .models import Config

DEFAULT_CONFIG_PATH = Path.home() / '.config' / 'staff-rota.json'


def get_config_path() -> Path:
	"""Get the configuration file path."""
	return DEFAULT_CONFIG_PATH


def config_exists(path: Optional[Path] = None) -> bool:
	"""Check if the configuration file exists."""
	return (path or get_config_path()).exists()


def load_config(path: Optional[Path] = None) -> Config:
	"""Load configuration from JSON file."""
	config_path = path or get_config_path()

	if not config_path.exists():
		raise FileNotFoundError(
			f"Config not found at {config_path}\nRun 'rota init' to create one."
		)

	try:
		return Config.model_validate_json(config_path.read_text(encoding='utf-8'))
	except ValidationError as e:
		raise ValueError(f'Invalid config: {e}') from e


def save_config(config: Config, path: Optional[Path] = None) -> None:
	"""Save configuration to JSON file."""
	config_path = path or get_config_path()
	config_path.parent.mkdir(parents=True, exist_ok=True)

	try:
		config_path.write_text(config.model_dump_json(indent=2), encoding='utf-8')
	except OSError as e:
		raise OSError(f'Failed to save config to {config_path}: {e}') from e


def create_config_interactive() -> Config:
	"""Create a new configuration interactively."""

	url_adapter = TypeAdapter(HttpUrl)

	def _prompt_url(default: str) -> HttpUrl:
		"""Prompt for the portal URL with Pydantic validation."""
		while True:
			value = Prompt.ask('[yellow]Portal base URL[/yellow]', default=default).rstrip('/')
			try:
				return url_adapter.validate_python(value)
			except ValidationError:
				logger.error('Invalid URL. Please include the scheme (e.g., https://portal.example.com)')

	logger.info('🔧 Staff Rota Setup\n')

	# Portal
	logger.info('Portal:')
	url = _prompt_url(str(Config().url).rstrip('/'))

	# Name matching
	logger.info('\nName matching:')
	first_name_only = Confirm.ask(
		'[yellow]Match employees by first name only?[/yellow]', default=True
	)

	name_mappings: dict[str, str] = {}
	logger.info('Map spreadsheet names to portal names (leave blank to finish)')
	while True:
		sheet_name = Prompt.ask('[yellow]Spreadsheet name[/yellow]', default='').strip()
		if not sheet_name:
			break
		portal_name = Prompt.ask(f'[yellow]Portal name for {sheet_name}[/yellow]').strip()
		if portal_name:
			name_mappings[sheet_name] = portal_name

	# Headless
	headless = Confirm.ask(
		'\n[yellow]Run browser in headless mode? (login needs a visible window)[/yellow]',
		default=False,
	)

	return Config(
		url=url,
		headless=headless,
		first_name_only=first_name_only,
		name_mappings=name_mappings,
	)
