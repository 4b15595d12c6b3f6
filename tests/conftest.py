"""A small in-memory DOM standing in for the portal.

Only the part of the Playwright surface the code touches is implemented:
frames with locator(), lazy locators with count/nth/first/evaluate_all/
evaluate/click/dispatch_event, and a page that records its waits. Selectors
are limited to tags, [attr], [attr="v"], [attr*="v"], [attr^="v"] (with an
optional i flag), comma groups and ":scope > tag".
"""

from __future__ import annotations

import re
from typing import Callable, Optional

import pytest
from playwright.sync_api import Error as PlaywrightError

from staff_rota.browser.dom import DESCRIBE_JS, SET_SOURCE_JS, SET_VALUE_JS
from staff_rota.models import Config

_COMPOUND = re.compile(r'^(?P<tag>[a-z]+)?(?P<attrs>(?:\[[^\]]+\])*)$')
_ATTRIBUTE = re.compile(
	r'\[(?P<name>[\w-]+)(?:(?P<op>[*^]?=)"(?P<value>[^"]*)"(?:\s+(?P<flag>i))?)?\]'
)
_SCOPE_CHILD = ':scope >'


class FakeNode:
	"""An element. Keyword arguments become attributes (class_ -> class)."""

	def __init__(
		self,
		tag: str,
		*children: FakeNode,
		text: str = '',
		visible: bool = True,
		label: str = '',
		value: str = '',
		on_click: Optional[Callable[[FakeNode], None]] = None,
		**attrs: str,
	) -> None:
		self.tag = tag
		self.own_text = text
		self.visible_self = visible
		self.label = label
		self.value = value
		self.on_click = on_click
		self.attrs = {name.rstrip('_'): value for name, value in attrs.items()}
		self.parent: Optional[FakeNode] = None
		self.children: list[FakeNode] = []
		self.clicks = 0
		self.events: list[str] = []
		self.values: list[str] = []
		for child in children:
			self.append(child)

	def append(self, child: FakeNode) -> FakeNode:
		child.parent = self
		self.children.append(child)
		return child

	def remove(self, child: FakeNode) -> None:
		self.children.remove(child)
		child.parent = None

	@property
	def text(self) -> str:
		parts = [self.own_text] + [child.text for child in self.children]
		return ' '.join(part for part in parts if part).strip()

	@property
	def visible(self) -> bool:
		node: Optional[FakeNode] = self
		while node is not None:
			if not node.visible_self:
				return False
			node = node.parent
		return True

	def descendants(self):
		for child in self.children:
			yield child
			yield from child.descendants()

	def matches(self, compound: str) -> bool:
		match = _COMPOUND.match(compound.strip())
		if match is None:
			raise ValueError(f'Unsupported selector: {compound!r}')
		if match.group('tag') and match.group('tag') != self.tag:
			return False
		for attribute in _ATTRIBUTE.finditer(match.group('attrs')):
			name, op, expected = attribute.group('name', 'op', 'value')
			if name not in self.attrs:
				return False
			if op is None:
				continue
			actual = self.attrs[name]
			if attribute.group('flag'):
				actual, expected = actual.lower(), expected.lower()
			if op == '=' and actual != expected:
				return False
			if op == '*=' and expected not in actual:
				return False
			if op == '^=' and not actual.startswith(expected):
				return False
		return True

	def query(self, selector: str) -> list[FakeNode]:
		"""Descendants matching selector, in document order."""
		groups = [group.strip() for group in selector.split(',')]
		child_groups = [g[len(_SCOPE_CHILD):].strip() for g in groups if g.startswith(_SCOPE_CHILD)]
		plain_groups = [g for g in groups if not g.startswith(_SCOPE_CHILD)]

		found = []
		for node in self.descendants():
			if any(node.matches(g) for g in plain_groups):
				found.append(node)
			elif node.parent is self and any(node.matches(g) for g in child_groups):
				found.append(node)
		return found

	def describe(self) -> dict:
		return {
			'tag': self.tag,
			'id': self.attrs.get('id', ''),
			'className': self.attrs.get('class', ''),
			'role': self.attrs.get('role', ''),
			'name': self.attrs.get('name', ''),
			'type': self.attrs.get('type', '').lower(),
			'placeholder': self.attrs.get('placeholder', ''),
			'value': self.value,
			'text': self.text,
			'visible': self.visible,
			'hasHeaderCell': any(node.tag == 'th' for node in self.descendants()),
			'label': self.label,
		}

	def __repr__(self) -> str:
		return f'<{self.tag} {self.attrs} {self.text[:30]!r}>'


class FakeLocator:
	"""Lazy: every call re-runs the query against the current tree."""

	def __init__(self, parent, selector: str, index: Optional[int] = None) -> None:
		self._parent = parent
		self._selector = selector
		self._index = index

	def _roots(self) -> list[FakeNode]:
		return self._parent.resolve()

	def resolve(self) -> list[FakeNode]:
		found = []
		for root in self._roots():
			for node in root.query(self._selector):
				if node not in found:
					found.append(node)
		if self._index is None:
			return found
		return found[self._index : self._index + 1]

	def _single(self) -> FakeNode:
		nodes = self.resolve()
		if not nodes:
			raise PlaywrightError(f'No element for {self._selector}')
		return nodes[0]

	def locator(self, selector: str) -> FakeLocator:
		return FakeLocator(self, selector)

	def count(self) -> int:
		return len(self.resolve())

	def nth(self, index: int) -> FakeLocator:
		return FakeLocator(self._parent, self._selector, index)

	@property
	def first(self) -> FakeLocator:
		return self.nth(0)

	def evaluate_all(self, script: str) -> list[dict]:
		assert script == DESCRIBE_JS
		return [node.describe() for node in self.resolve()]

	def evaluate(self, script: str, arg=None) -> None:
		node = self._single()
		if script == SET_VALUE_JS:
			node.value = arg
			node.values.append(arg)
		elif script == SET_SOURCE_JS:
			node.attrs['src'] = arg
			if node.on_click:
				node.on_click(node)
		else:
			raise AssertionError(f'Unexpected script: {script}')

	def click(self) -> None:
		node = self._single()
		node.clicks += 1
		if node.on_click:
			node.on_click(node)

	def dispatch_event(self, event: str) -> None:
		self._single().events.append(event)


class FakeFrame:
	def __init__(self, *children: FakeNode, name: str = '', accessible: bool = True) -> None:
		self.name = name
		self.root = FakeNode('html', *children)
		self.accessible = accessible
		self.detached = False

	def resolve(self) -> list[FakeNode]:
		if not self.accessible:
			raise PlaywrightError('Blocked a frame with origin from accessing a cross-origin frame')
		return [self.root]

	def is_detached(self) -> bool:
		return self.detached

	def locator(self, selector: str) -> FakeLocator:
		return FakeLocator(self, selector)


class FakePage:
	def __init__(self, *frames: FakeFrame, url: str = 'https://portal.example.com/') -> None:
		self.frames = list(frames) or [FakeFrame()]
		self.url = url
		self.waits: list[int] = []
		self.visited: list[str] = []
		self.on_wait: Optional[Callable[[int], None]] = None

	@property
	def main_frame(self) -> FakeFrame:
		return self.frames[0]

	def wait_for_timeout(self, ms: int) -> None:
		self.waits.append(int(ms))
		if self.on_wait:
			self.on_wait(len(self.waits))

	def wait_for_load_state(self, state: str) -> None:
		pass

	def goto(self, url: str) -> None:
		self.visited.append(url)
		self.url = url


class FakeSession:
	def __init__(self, page: FakePage, config: Optional[Config] = None) -> None:
		self.page = page
		self.config = config or Config()

	def sleep(self, ms: int) -> None:
		self.page.wait_for_timeout(ms)


# =============================================================================
# Portal fragments
# =============================================================================

DAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')


def employee_row(name: str, **attrs: str) -> FakeNode:
	"""A table row: a name cell followed by seven day cells."""
	row = FakeNode('tr', FakeNode('td', text=name, class_='employee-name'), class_='employee-row', **attrs)
	for day in DAYS:
		row.append(FakeNode('td', class_='day-cell', headers=day))
	return row


def schedule_table(*names: str) -> FakeNode:
	header = FakeNode(
		'tr',
		FakeNode('th', text='Employee'),
		*(FakeNode('th', text=day[:3].title(), class_='day-header') for day in DAYS),
	)
	return FakeNode(
		'table',
		header,
		*(employee_row(name) for name in names),
		class_='schedule-grid',
	)


class ShiftForm:
	"""The shift dialog: three inputs and a save button."""

	def __init__(self, on_save: Optional[Callable[[FakeNode], None]] = None) -> None:
		self.start = FakeNode('input', name='startTime', type='time')
		self.end = FakeNode('input', name='endTime', type='time')
		self.break_ = FakeNode('input', name='breakDuration', type='number')
		self.save = FakeNode('button', text='Save', type='button', on_click=on_save)
		self.node = FakeNode(
			'div', self.start, self.end, self.break_, self.save, class_='shift-dialog'
		)


@pytest.fixture
def form() -> ShiftForm:
	return ShiftForm()


@pytest.fixture
def make_session():
	def make(*children: FakeNode, frames: Optional[list[FakeFrame]] = None, **config) -> FakeSession:
		page = FakePage(*(frames or [FakeFrame(*children)]))
		return FakeSession(page, Config(**config))

	return make
