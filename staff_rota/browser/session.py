"""Owns the Playwright browser that the portal is driven through."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from playwright.sync_api import (
	Browser,
	BrowserContext,
	Page,
	Playwright,
	sync_playwright,
)

if TYPE_CHECKING:
	from ..models import Config


class BrowserSession:
	"""One Chromium window with a single tab on the staff portal.

	Page objects, the locator and the form filler all act on the tab exposed
	as ``page``; none of them open tabs of their own.
	"""

	def __init__(self, config: Config) -> None:
		self.config = config
		self._playwright: Optional[Playwright] = None
		self._browser: Optional[Browser] = None
		self._context: Optional[BrowserContext] = None
		self._page: Optional[Page] = None

	def start(self) -> None:
		"""Launch Chromium and open the tab, honouring headless and slow_mo."""
		self._playwright = sync_playwright().start()
		self._browser = self._playwright.chromium.launch(
			headless=self.config.headless,
			slow_mo=self.config.slow_mo,
		)
		# Wide enough for the seven day columns without horizontal scrolling
		self._context = self._browser.new_context(
			viewport={'width': 1440, 'height': 900},
			locale='en-GB',
		)
		self._page = self._context.new_page()

	def stop(self) -> None:
		"""Close the tab, context and browser, then shut Playwright down.

		Safe to call on a session that never started or already stopped.
		"""
		for name in ('_page', '_context', '_browser'):
			resource = getattr(self, name)
			if resource is not None:
				resource.close()
				setattr(self, name, None)
		if self._playwright is not None:
			self._playwright.stop()
			self._playwright = None

	@property
	def page(self) -> Page:
		"""The portal tab.

		Raises:
			RuntimeError: When start() has not been called yet.
		"""
		if self._page is None:
			raise RuntimeError('No portal tab open; start the session first.')
		return self._page

	def sleep(self, ms: int) -> None:
		"""Pause through the page so Playwright keeps servicing its events."""
		self.page.wait_for_timeout(ms)
