"""High-level browser automation for the scheduling portal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..names import NameResolver
from .form import FormFiller
from .locator import ElementLocator
from .navigation import NavigationController
from .pages import LoginPage, SchedulePage
from .session import BrowserSession
from .verifier import SaveVerifier

if TYPE_CHECKING:
	from ..models import Config


class RotaBrowser:
	"""Owns the browser session and wires the page helpers around it.

	Every helper is created on first use and shares the one session.

	Example:
		with RotaBrowser(config) as browser:
			browser.open_portal()
			orchestrator = AutomationOrchestrator.from_browser(browser)
			outcome = orchestrator.run(schedules)
	"""

	def __init__(self, config: Config) -> None:
		"""Initialize the browser with configuration.

		Args:
			config: Application configuration including portal URL and name options.
		"""
		self._session = BrowserSession(config)
		self._login_page: Optional[LoginPage] = None
		self._schedule_page: Optional[SchedulePage] = None
		self._navigation: Optional[NavigationController] = None
		self._names: Optional[NameResolver] = None
		self._locator: Optional[ElementLocator] = None
		self._verifier: Optional[SaveVerifier] = None
		self._filler: Optional[FormFiller] = None

	def __enter__(self) -> RotaBrowser:
		"""Start the browser session."""
		self._session.start()
		return self

	def __exit__(self, *exc) -> None:
		"""Stop the browser session."""
		self._session.stop()

	@property
	def session(self) -> BrowserSession:
		"""Get the underlying browser session."""
		return self._session

	@property
	def login_page(self) -> LoginPage:
		"""Get the login page object (lazy initialization)."""
		if self._login_page is None:
			self._login_page = LoginPage(self._session)
		return self._login_page

	@property
	def schedule_page(self) -> SchedulePage:
		"""Get the scheduling page object (lazy initialization)."""
		if self._schedule_page is None:
			self._schedule_page = SchedulePage(self._session)
		return self._schedule_page

	@property
	def navigation(self) -> NavigationController:
		"""Get the navigation controller (lazy initialization)."""
		if self._navigation is None:
			self._navigation = NavigationController(self._session, self.login_page, self.schedule_page)
		return self._navigation

	@property
	def names(self) -> NameResolver:
		"""Get the name resolver built from the configuration (lazy initialization)."""
		if self._names is None:
			config = self._session.config
			self._names = NameResolver(config.first_name_only, config.name_mappings)
		return self._names

	@property
	def locator(self) -> ElementLocator:
		"""Get the element locator (lazy initialization)."""
		if self._locator is None:
			self._locator = ElementLocator(self._session, self.names)
		return self._locator

	@property
	def verifier(self) -> SaveVerifier:
		"""Get the save verifier (lazy initialization)."""
		if self._verifier is None:
			self._verifier = SaveVerifier(self._session)
		return self._verifier

	@property
	def filler(self) -> FormFiller:
		"""Get the form filler (lazy initialization)."""
		if self._filler is None:
			self._filler = FormFiller(self._session, self.locator, self.verifier)
		return self._filler

	def open_portal(self) -> None:
		"""Load the portal entry point in the browser window."""
		self.login_page.open()
