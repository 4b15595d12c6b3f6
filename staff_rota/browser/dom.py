"""Document contexts, element descriptions and the first-match combinator.

Every lookup against the portal goes through the same two steps: describe all
candidates of one CSS selector in the browser, then pick one of them in
Python. A Strategy bundles a selector with its picking rule, and
resolve_first() tries strategies in order over a list of scopes (frames, or
a row locator) until one yields an element.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Frame, Locator
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .. import logger

if TYPE_CHECKING:
	from playwright.sync_api import Page

DESCRIBE_JS = r"""
(elements) => {
	const isVisible = (el) => {
		const style = window.getComputedStyle(el);
		const rect = el.getBoundingClientRect();
		return (
			style.display !== 'none' &&
			style.visibility !== 'hidden' &&
			rect.width > 0 &&
			rect.height > 0
		);
	};

	const labelOf = (el) => {
		if (el.labels && el.labels.length > 0) return el.labels[0].textContent || '';
		const wrapping = el.closest('label');
		if (wrapping) return wrapping.textContent || '';
		const previous = el.previousElementSibling;
		if (previous && previous.tagName === 'LABEL') return previous.textContent || '';
		const parentPrevious = el.parentElement && el.parentElement.previousElementSibling;
		if (parentPrevious && parentPrevious.tagName === 'LABEL') return parentPrevious.textContent || '';
		return '';
	};

	const clean = (text) => (text || '').replace(/\u00a0/g, ' ').replace(/\s+/g, ' ').trim();

	return elements.map((el) => ({
		tag: el.tagName.toLowerCase(),
		id: el.id || '',
		className: el.getAttribute('class') || '',
		role: el.getAttribute('role') || '',
		name: el.getAttribute('name') || '',
		type: (el.getAttribute('type') || '').toLowerCase(),
		placeholder: el.getAttribute('placeholder') || '',
		value: typeof el.value === 'string' ? el.value : '',
		text: clean(el.innerText || el.textContent),
		visible: isVisible(el),
		hasHeaderCell: el.querySelector('th') !== null,
		label: clean(labelOf(el)),
	}));
}
"""

SET_VALUE_JS = '(el, value) => { el.value = value; }'

SET_SOURCE_JS = '(el, src) => { el.src = src; }'


class ElementInfo(BaseModel):
	"""Parsed payload describing one candidate element."""

	model_config = ConfigDict(extra='ignore')

	tag: str
	id: str = ''
	className: str = ''
	role: str = ''
	name: str = ''
	type: str = ''
	placeholder: str = ''
	value: str = ''
	text: str = ''
	visible: bool = True
	hasHeaderCell: bool = False
	label: str = ''

	@property
	def caption(self) -> str:
		"""Visible caption of a control: its text, or its value for input buttons."""
		return self.text or self.value

	def class_has(self, *fragments: str) -> bool:
		"""Whether the class attribute contains any of the fragments (case-insensitive)."""
		class_name = self.className.lower()
		return any(fragment in class_name for fragment in fragments)


ELEMENT_INFOS_ADAPTER = TypeAdapter(list[ElementInfo])

Scope = Union[Frame, Locator]
Picker = Callable[[list[ElementInfo]], Optional[int]]


def document_contexts(page: Page) -> list[Frame]:
	"""The main frame followed by every attached child frame, in document order."""
	return [frame for frame in page.frames if not frame.is_detached()]


def describe(scope: Scope, selector: str) -> list[ElementInfo]:
	"""Describe every element matching selector inside scope.

	Contexts that cannot be queried yield an empty list.
	"""
	try:
		raw = scope.locator(selector).evaluate_all(DESCRIBE_JS)
	except PlaywrightError as e:
		logger.debug('Skipping context for %s: %s', selector, e)
		return []
	try:
		return ELEMENT_INFOS_ADAPTER.validate_python(raw)
	except ValidationError as e:
		logger.debug('Unexpected element payload for %s: %s', selector, e)
		return []


def count(scope: Scope, selector: str) -> int:
	"""Number of elements matching selector, 0 when the context is unreachable."""
	try:
		return scope.locator(selector).count()
	except PlaywrightError as e:
		logger.debug('Skipping context for %s: %s', selector, e)
		return 0


def first_index(infos: list[ElementInfo], predicate: Callable[[ElementInfo], bool]) -> Optional[int]:
	"""Index of the first description satisfying predicate."""
	return next((i for i, info in enumerate(infos) if predicate(info)), None)


def nth_index(
	infos: list[ElementInfo], n: int, predicate: Callable[[ElementInfo], bool] = lambda _: True
) -> Optional[int]:
	"""Original index of the n-th description satisfying predicate."""
	matching = [i for i, info in enumerate(infos) if predicate(info)]
	return matching[n] if len(matching) > n else None


@dataclass(frozen=True, slots=True)
class Strategy:
	"""One ranked attempt at locating a target."""

	name: str
	selector: str
	pick: Picker


@dataclass(frozen=True, slots=True)
class ResolvedElement:
	"""A located element plus the strategy that found it.

	The locator is lazy and re-queries on use; resolve again after anything
	that may re-render the portal.
	"""

	locator: Locator
	strategy: int
	strategy_name: str
	info: ElementInfo

	@property
	def text(self) -> str:
		"""Text of the element when it was located."""
		return self.info.text


def resolve_first(strategies: Sequence[Strategy], scopes: Sequence[Scope]) -> Optional[ResolvedElement]:
	"""Try each strategy over each scope; the first element picked wins."""
	for number, strategy in enumerate(strategies):
		for scope in scopes:
			infos = describe(scope, strategy.selector)
			if not infos:
				continue
			index = strategy.pick(infos)
			if index is None:
				continue
			logger.debug('Resolved via %s (strategy %d)', strategy.name, number + 1)
			return ResolvedElement(
				locator=scope.locator(strategy.selector).nth(index),
				strategy=number,
				strategy_name=strategy.name,
				info=infos[index],
			)
	return None
