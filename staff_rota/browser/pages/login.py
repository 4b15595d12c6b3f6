"""Login page of the portal."""

from enum import StrEnum

from ... import logger
from .base import BasePage


class Selector(StrEnum):
	"""CSS selectors for login form elements."""

	LOGIN_FORM = 'form[name="login"]'


class LoginPage(BasePage):
	"""The portal's sign-in frameset.

	Credentials are never handled here: the login form is completed by a
	person in the visible browser window.
	"""

	PATH = '/portal/menus/frameset.asp'

	def is_current(self) -> bool:
		"""Check whether any frame shows the login form."""
		return self.exists(Selector.LOGIN_FORM)

	def open(self) -> None:
		"""Open the portal entry point."""
		logger.info('🌐 Opening portal at %s', self.url)
		self.navigate_to()
