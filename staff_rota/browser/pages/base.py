"""Base page class with common utilities (internal module)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Iterable, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from ... import logger
from ..dom import ResolvedElement, Strategy, count, document_contexts, first_index, resolve_first

if TYPE_CHECKING:
	from ...models import Config
	from ..session import BrowserSession


class BasePage(ABC):
	"""Abstract base class for page objects. Cannot be instantiated directly.

	Subclasses must define the PATH class variable.
	"""

	PATH: ClassVar[str]  # Subclasses must define this

	@classmethod
	def __init_subclass__(cls, **kwargs: object) -> None:
		"""Validate that subclasses define PATH."""
		super().__init_subclass__(**kwargs)
		if not hasattr(cls, 'PATH') or cls.PATH == '':
			raise TypeError(f'{cls.__name__} must define a non-empty PATH class variable')

	def __init__(self, session: BrowserSession) -> None:
		self._session = session

	@property
	def session(self) -> BrowserSession:
		"""Get the browser session."""
		return self._session

	@property
	def page(self) -> Page:
		"""Get the Playwright page."""
		return self._session.page

	@property
	def config(self) -> Config:
		"""Get the configuration."""
		return self._session.config

	@property
	def url(self) -> str:
		"""Get the full URL for this page."""
		base = str(self.config.url).rstrip('/')
		return base + self.PATH

	@property
	def contexts(self) -> list:
		"""Main document and attached frames, searched in this order."""
		return document_contexts(self.page)

	@abstractmethod
	def is_current(self) -> bool:
		"""Check if the portal is currently showing this page."""

	def navigate_to(self) -> None:
		"""Navigate to this page."""
		self.page.goto(self.url)
		self.wait_for_load()

	def wait_for_load(self) -> None:
		"""Wait for the page to be parsed and its resources loaded.

		The portal polls in the background, so networkidle is never waited for.
		"""
		self.page.wait_for_load_state('domcontentloaded')
		self.page.wait_for_load_state('load')

	def exists(self, selector: str, minimum: int = 1) -> bool:
		"""Whether any single context holds at least minimum matches of selector."""
		return any(count(context, selector) >= minimum for context in self.contexts)

	def find_visible(self, selector: str) -> Optional[ResolvedElement]:
		"""Find the first visible element matching selector."""
		def pick(infos) -> Optional[int]:
			return first_index(infos, lambda info: info.visible)

		return resolve_first([Strategy(f'visible {selector}', selector, pick)], self.contexts)

	def find_by_text(self, selector: str, words: Iterable[str]) -> Optional[ResolvedElement]:
		"""Find a visible element whose text mentions one of the words.

		Words are tried in order. Among the matches for a word, the element with
		the shortest text wins, so a menu entry beats the container listing it.
		"""

		def mentioning(word: str):
			def pick(infos) -> Optional[int]:
				matches = [i for i, info in enumerate(infos) if info.visible and word in info.text]
				return min(matches, key=lambda i: len(infos[i].text)) if matches else None

			return pick

		strategies = [Strategy(f'text "{word}"', selector, mentioning(word)) for word in words]
		return resolve_first(strategies, self.contexts)

	def try_click(self, element: Optional[ResolvedElement], silent: bool = False) -> bool:
		"""Try to click a resolved element.

		Args:
			element: Element to click; None counts as a failed click.
			silent: If True, don't log failures.

		Returns:
			True if element was clicked successfully.
		"""
		if element is None:
			return False
		try:
			element.locator.click()
			return True
		except PlaywrightError as e:
			if not silent:
				logger.debug('Failed to click %s: %s', element.strategy_name, e)
			return False
