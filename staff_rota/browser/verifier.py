"""Judging whether the portal accepted a submitted shift form."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Optional

from playwright.sync_api import Error as PlaywrightError

from .. import logger
from .dom import describe, document_contexts
from .timing import LOADING_MAX_ATTEMPTS, Timing, await_condition

if TYPE_CHECKING:
	from .session import BrowserSession


class Selector(StrEnum):
	"""CSS selectors for save feedback."""

	LOADING = '[class*="loading"], [class*="spinner"], [class*="processing"]'
	ERROR = '[class*="error"], [class*="alert"]'


class SaveVerifier:
	"""Watches loading indicators and error messages after a save click.

	Error elements that were already visible when the caller took its
	snapshot are ignored. FormFiller snapshots before it touches the form, so
	validation messages raised by the new values count as a rejection.
	"""

	def __init__(self, session: BrowserSession) -> None:
		self._session = session

	def _visible_texts(self, selector: str) -> set[str]:
		texts: set[str] = set()
		for context in document_contexts(self._session.page):
			texts.update(info.text for info in describe(context, selector) if info.visible and info.text)
		return texts

	def _any_visible(self, selector: str) -> bool:
		return any(
			info.visible
			for context in document_contexts(self._session.page)
			for info in describe(context, selector)
		)

	def snapshot(self) -> frozenset[str]:
		"""Texts of the error messages visible right now."""
		return frozenset(self._visible_texts(Selector.ERROR))

	def confirm(self, baseline: Optional[frozenset[str]] = None) -> bool:
		"""Wait for the save to settle and report whether it went through.

		Args:
			baseline: Error texts visible before the save was clicked.

		Returns:
			True unless a new error message appeared or the page became unreadable.
		"""
		baseline = baseline or frozenset()
		try:
			self._session.sleep(Timing.SAVE_START)

			if self._any_visible(Selector.LOADING):
				finished = await_condition(
					lambda: not self._any_visible(Selector.LOADING),
					Timing.LOADING_POLL,
					LOADING_MAX_ATTEMPTS,
					self._session.sleep,
				)
				if not finished:
					logger.debug('Loading indicator still visible, continuing')

			new_errors = self._visible_texts(Selector.ERROR) - baseline
			if new_errors:
				logger.warning('Error after save: %s', '; '.join(sorted(new_errors)))
				return False

			self._session.sleep(Timing.SAVE_SETTLE)
			return True
		except PlaywrightError as e:
			logger.warning('Could not verify save: %s', e)
			return False
