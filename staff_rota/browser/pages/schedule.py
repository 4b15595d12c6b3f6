"""Scheduling page of the portal."""

from enum import StrEnum

from playwright.sync_api import Error as PlaywrightError

from ... import logger
from ...vocabulary import NavigationLabels
from ..dom import SET_SOURCE_JS, describe
from ..timing import Timing
from .base import BasePage

MIN_DAY_COLUMNS = 7


class Selector(StrEnum):
	"""CSS selectors for scheduling page markers and the ways into it."""

	SCHEDULE_CONTAINER = '[class*="schedule"], [id*="schedule"], [class*="rota"], [id*="rota"]'
	EMPLOYEE_ROW = '[id*="employee-row"], [class*="employee-row"], tr[class*="employee"]'
	DAY_COLUMN = '[class*="day-column"], [class*="day-header"], th[class*="day"]'
	HEADER_MODULE = '[id="UIXL_headermodule"]'
	PORTAL_FRAMESET = '[class*="main-frameset"], [id="headerHolder"]'
	CONTENT_FRAME = 'iframe[id="main"], frame[id="main"]'
	MENU_ITEM = '[class*="UIXL_menu_level_1"], [class*="menu-item"]'
	BURGER = '[class*="UIXL_burger_icon"], [class*="burger"], [class*="menu-icon"]'
	BURGER_ENTRY = 'a, li, div, span'
	LINK = 'a, button'


class SchedulePage(BasePage):
	"""The labour scheduling module, usually rendered inside the portal frameset.

	The portal gives no reliable signal for which module is showing, so
	is_current() is a best-effort guess from several weak markers.
	"""

	PATH = '/portal/modules/labourproductivity/homepage.asp'

	def _header_says_scheduling(self) -> bool:
		return any(
			NavigationLabels.SCHEDULING in info.text
			for context in self.contexts
			for info in describe(context, Selector.HEADER_MODULE)
		)

	def is_current(self) -> bool:
		"""Check the scheduling markers, strongest first."""
		checks = [
			('schedule container', lambda: self.exists(Selector.SCHEDULE_CONTAINER)),
			('employee rows', lambda: self.exists(Selector.EMPLOYEE_ROW)),
			('day columns', lambda: self.exists(Selector.DAY_COLUMN, MIN_DAY_COLUMNS)),
			('scheduling header', self._header_says_scheduling),
			('portal frameset', lambda: self.exists(Selector.PORTAL_FRAMESET)),
			('main content frame', lambda: self.exists(Selector.CONTENT_FRAME)),
		]
		for name, check in checks:
			if check():
				logger.debug('Scheduling page detected by %s', name)
				return True
		return False

	# =========================================================================
	# Ways into the scheduling module, tried in this order by the navigator
	# =========================================================================

	def open_from_menu(self) -> bool:
		"""Click the top-level menu entry for scheduling."""
		return self.try_click(self.find_by_text(Selector.MENU_ITEM, [NavigationLabels.SCHEDULING]))

	def open_from_header(self) -> bool:
		"""Click the portal's module header, which opens the module switcher."""
		if not self.try_click(self.find_visible(Selector.HEADER_MODULE)):
			return False
		self.session.sleep(Timing.AFTER_NAVIGATION_CLICK)
		return True

	def open_from_burger_menu(self) -> bool:
		"""Open the hamburger menu and pick the scheduling entry."""
		if not self.try_click(self.find_visible(Selector.BURGER)):
			return False
		self.session.sleep(Timing.AFTER_MENU_OPEN)

		if not self.try_click(self.find_by_text(Selector.BURGER_ENTRY, NavigationLabels.menu_words())):
			logger.debug('Burger menu opened but holds no scheduling entry')
			return False
		self.session.sleep(Timing.AFTER_NAVIGATION_CLICK)
		return True

	def open_in_content_frame(self) -> bool:
		"""Point the portal's main content frame straight at the scheduling module."""
		for context in self.contexts:
			frames = context.locator(Selector.CONTENT_FRAME)
			try:
				if frames.count() == 0:
					continue
				frames.first.evaluate(SET_SOURCE_JS, self.url)
			except PlaywrightError as e:
				logger.debug('Could not redirect content frame: %s', e)
				continue
			self.session.sleep(Timing.AFTER_FRAME_REDIRECT)
			return True
		return False

	def open_from_link(self, selector: str = Selector.LINK) -> bool:
		"""Click any control that mentions the schedule."""
		if not self.try_click(self.find_by_text(selector, NavigationLabels.link_words())):
			return False
		self.session.sleep(Timing.AFTER_NAVIGATION_CLICK)
		return True
