"""Getting from wherever the portal opened to its scheduling module."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Callable, Optional

from playwright.sync_api import Error as PlaywrightError

from .. import logger
from .timing import NAVIGATION_MAX_ATTEMPTS, Timing, await_condition

if TYPE_CHECKING:
	from ..progress import CancelToken
	from .pages import LoginPage, SchedulePage
	from .session import BrowserSession


class NavigationError(RuntimeError):
	"""Raised when no navigation method reached the scheduling page."""


class NavigationState(StrEnum):
	"""Where the navigator believes the portal is."""

	UNKNOWN = 'unknown'
	LOGIN_REQUIRED = 'login_required'
	AWAITING_LOGIN = 'awaiting_login'
	ON_SCHEDULING_PAGE = 'on_scheduling_page'


class NavigationController:
	"""Detects the login and scheduling pages and moves between them."""

	FALLBACK_SELECTOR = 'a, button, div, span'

	def __init__(self, session: BrowserSession, login_page: LoginPage, schedule_page: SchedulePage) -> None:
		self._session = session
		self._login_page = login_page
		self._schedule_page = schedule_page
		self.state = NavigationState.UNKNOWN

	def is_login_page(self) -> bool:
		"""Check whether the portal shows its login form."""
		if self._login_page.is_current():
			self.state = NavigationState.LOGIN_REQUIRED
			return True
		return False

	def is_scheduling_page(self) -> bool:
		"""Best-effort check for the scheduling module."""
		if self._schedule_page.is_current():
			self.state = NavigationState.ON_SCHEDULING_PAGE
			return True
		return False

	def wait_for_login(self, cancel: Optional[CancelToken] = None) -> None:
		"""Block until the login form is gone.

		There is no time limit: a person has to sign in. Cancellation is the
		only way out while the form is still showing.

		Raises:
			AutomationCancelled: If cancellation was requested while waiting.
		"""
		self.state = NavigationState.AWAITING_LOGIN
		logger.info('🔐 Waiting for you to log in to the portal...')
		await_condition(
			lambda: not self._login_page.is_current(),
			Timing.LOGIN_POLL,
			None,
			self._session.sleep,
			cancel,
		)
		self.state = NavigationState.UNKNOWN
		logger.success('✓ Login detected')

	def _methods(self) -> list[tuple[str, Callable[[], bool]]]:
		page = self._schedule_page
		return [
			('menu item', page.open_from_menu),
			('header module', page.open_from_header),
			('burger menu', page.open_from_burger_menu),
			('content frame', page.open_in_content_frame),
			('schedule link', page.open_from_link),
		]

	def navigate_to_scheduling_page(self) -> None:
		"""Try each way into the scheduling module until one lands there.

		Raises:
			NavigationError: If every method was tried and none was confirmed.
		"""
		if self.is_scheduling_page():
			return

		logger.info('📋 Navigating to scheduling page...')
		for number, (name, method) in enumerate(self._methods()):
			try:
				acted = method()
			except PlaywrightError as e:
				logger.debug('Navigation via %s failed: %s', name, e)
				continue
			if not acted:
				logger.debug('Navigation via %s not available', name)
				continue

			if number == 0:
				# The menu loads the module asynchronously
				arrived = await_condition(
					self.is_scheduling_page,
					Timing.NAVIGATION_POLL,
					NAVIGATION_MAX_ATTEMPTS,
					self._session.sleep,
				)
			else:
				arrived = self.is_scheduling_page()

			if arrived:
				logger.success('✓ Navigated to scheduling page via %s', name)
				return

		raise NavigationError('Could not navigate to the scheduling page')

	def fallback_navigation(self) -> bool:
		"""Click anything mentioning the schedule, then check once more."""
		try:
			clicked = self._schedule_page.open_from_link(self.FALLBACK_SELECTOR)
		except PlaywrightError as e:
			logger.debug('Fallback navigation failed: %s', e)
			return False
		return clicked and self.is_scheduling_page()
