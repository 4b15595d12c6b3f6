"""Locating employee rows, day cells and shift-form controls in the portal.

The portal has no stable markup, so each target is found through a ranked
ladder of strategies, most specific first. A miss is never an exception:
every finder returns None and the caller records the failure.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

from .. import logger
from ..names import NameResolver
from ..vocabulary import InputRole, SaveLabels, Weekdays
from .dom import (
	ElementInfo,
	ResolvedElement,
	Strategy,
	document_contexts,
	first_index,
	nth_index,
	resolve_first,
)

if TYPE_CHECKING:
	from .session import BrowserSession

# Pieces of row text that are never part of a name
_TOKEN_SPLIT = re.compile(r'[\s,;:|]+')
_DAY_PREFIX = re.compile(r'^(mon|tue|wed|thu|fri|sat|sun)', re.IGNORECASE)

# Cells with more text than this hold employee details, not a day
MAX_DAY_CELL_TEXT = 20

_CONTROL_TYPES_TO_SKIP = frozenset({'hidden', 'submit', 'button', 'checkbox', 'radio', 'image'})


class Selector(StrEnum):
	"""CSS selectors for rows, cells and form controls."""

	TABLE_ROW = 'tr, [role="row"]'
	ROW_LIKE = 'tr, div[class*="row"], div[role="row"]'
	TEXT_HOLDER = 'tr, [role="row"], div, li, td, span'
	DAY_CELL = 'td[class*="day"], td[headers*="day"], div[class*="day-cell"]'
	DIRECT_CELL = ':scope > td'
	CELL_LIKE = 'td, div[role="cell"], div[class*="cell"]'
	DAY_NAME_HOLDER = 'td, div'
	INPUT = 'input'
	TIME_INPUT = 'input[type="time"]'
	NUMBER_INPUT = 'input[type="number"]'
	SUBMIT = (
		'button[type="submit"], input[type="submit"], '
		'button[id*="save" i], input[id*="save" i], '
		'button[class*="save" i], input[class*="save" i]'
	)
	CLICKABLE = 'button, input[type="button"], input[type="submit"], a, [role="button"]'
	PRIMARY_ACTION = (
		'button[class*="primary"], input[class*="primary"], a[class*="primary"], '
		'button[class*="submit"], a[class*="submit"], '
		'button[class*="confirm"], a[class*="confirm"]'
	)


def _token_selector(role: InputRole) -> str:
	"""Inputs whose name, placeholder, id or class mention one of the role's tokens."""
	parts = []
	for token in role.tokens:
		parts.extend(
			f'input[{attribute}*="{token}" i]'
			for attribute in ('name', 'placeholder', 'id', 'class')
		)
	return ', '.join(parts)


def _is_fillable(info: ElementInfo) -> bool:
	return info.visible and info.type not in _CONTROL_TYPES_TO_SKIP


def _looks_like_row(info: ElementInfo) -> bool:
	return (
		info.tag == 'tr'
		or info.role == 'row'
		or 'row' in info.className.lower()
		or 'row' in info.id.lower()
	)


def _is_header_row(info: ElementInfo) -> bool:
	if info.tag == 'tr' and info.hasHeaderCell:
		return True
	return info.class_has('header', 'heading', 'title')


def _name_tokens(text: str) -> list[str]:
	"""Parts of a row's text that could be a name."""
	return [
		part
		for part in _TOKEN_SPLIT.split(text)
		if len(part) > 1 and not part.isdigit() and not _DAY_PREFIX.match(part)
	]


class ElementLocator:
	"""Finds portal elements across the page and all of its frames."""

	def __init__(self, session: BrowserSession, names: NameResolver) -> None:
		self._session = session
		self._names = names

	@property
	def contexts(self) -> list:
		"""Document contexts to search, main document first."""
		return document_contexts(self._session.page)

	# =========================================================================
	# Employee rows
	# =========================================================================

	def find_employee_row(self, name: str) -> Optional[ResolvedElement]:
		"""Find the schedule row of an employee.

		Args:
			name: Name as it should appear in the portal (possibly first name only).

		Returns:
			The row, or None when no context holds any trace of the name.
		"""
		if not name or not name.strip():
			logger.warning('Empty employee name provided')
			return None
		name = name.strip()

		def exact(infos: list[ElementInfo]) -> Optional[int]:
			return first_index(infos, lambda info: name in info.text)

		def candidates(infos: list[ElementInfo]) -> list[int]:
			return [
				i
				for i, info in enumerate(infos)
				if len(info.text) >= 2 and not _is_header_row(info)
			]

		def similar(strong_only: bool):
			"""Pick the first candidate row whose text or name tokens match the name.

			The strong pass (exact, nickname, substring) runs over every row before
			the weak pass (initial, edit distance) so "rob" lands on Robert Smith
			rather than on an earlier Richard.
			"""

			def pick(infos: list[ElementInfo]) -> Optional[int]:
				for i in candidates(infos):
					texts = [infos[i].text, *_name_tokens(infos[i].text)]
					for text in texts:
						kind = self._names.match_kind(text, name)
						if kind is not None and (kind.is_strong or not strong_only):
							return i
				return None

			return pick

		parts = [part for part in name.split() if len(part) > 1]

		def containing_part(infos: list[ElementInfo]) -> Optional[int]:
			"""Pick an element holding one of the name's words.

			A row-like holder wins; otherwise the holder with the shortest text,
			so the innermost element is chosen over a page-wide wrapper.
			"""
			for part in parts:
				part_lower = part.lower()
				holders = [i for i, info in enumerate(infos) if part_lower in info.text.lower()]
				if not holders:
					continue
				rows = [i for i in holders if _looks_like_row(infos[i])]
				if rows:
					return rows[0]
				return min(holders, key=lambda i: len(infos[i].text))
			return None

		strategies = [
			Strategy('exact text in table row', Selector.TABLE_ROW, exact),
			Strategy('close name match in row', Selector.ROW_LIKE, similar(strong_only=True)),
			Strategy('fuzzy name match in row', Selector.ROW_LIKE, similar(strong_only=False)),
			Strategy('element containing name part', Selector.TEXT_HOLDER, containing_part),
		]
		row = resolve_first(strategies, self.contexts)

		if row is None:
			logger.warning('Could not find employee row for: %s', name)
		elif row.strategy == len(strategies) - 1:
			logger.warning('Low-confidence match for %s: "%s"', name, row.text[:60])
		else:
			logger.debug('Found row for %s via %s: "%s"', name, row.strategy_name, row.text[:60])
		return row

	# =========================================================================
	# Day cells
	# =========================================================================

	def find_day_cell(self, row: ResolvedElement, day: Weekdays) -> Optional[ResolvedElement]:
		"""Find the cell for a weekday inside an employee row.

		Cell sets are tried from most to least specific; the first set with
		enough cells supplies the cell at the weekday's index.
		"""
		index = day.number

		def at_index(infos: list[ElementInfo]) -> Optional[int]:
			return nth_index(infos, index)

		def filtered_at_index(infos: list[ElementInfo]) -> Optional[int]:
			return nth_index(
				infos,
				index,
				lambda info: len(info.text) <= MAX_DAY_CELL_TEXT
				and not info.class_has('employee', 'name', 'header'),
			)

		def named_after_day(infos: list[ElementInfo]) -> Optional[int]:
			names = {day.value, day.short.lower()}
			return first_index(infos, lambda info: info.text.lower() in names)

		strategies = [
			Strategy('day-classed cells', Selector.DAY_CELL, at_index),
			Strategy('direct child cells', Selector.DIRECT_CELL, at_index),
			Strategy('filtered cell-like children', Selector.CELL_LIKE, filtered_at_index),
			Strategy('all cell-like children', Selector.CELL_LIKE, at_index),
			Strategy('cell named after the day', Selector.DAY_NAME_HOLDER, named_after_day),
		]
		cell = resolve_first(strategies, [row.locator])
		if cell is None:
			logger.warning('Cell for %s not found in row "%s"', day.label, row.text[:60])
		return cell

	# =========================================================================
	# Shift form
	# =========================================================================

	def find_form_input(self, role: InputRole) -> Optional[ResolvedElement]:
		"""Find the start, end or break input of the open shift form."""

		def fillable(infos: list[ElementInfo]) -> Optional[int]:
			return first_index(infos, _is_fillable)

		def labelled(infos: list[ElementInfo]) -> Optional[int]:
			return first_index(
				infos,
				lambda info: _is_fillable(info)
				and any(token in info.label.lower() for token in role.tokens),
			)

		def positional(infos: list[ElementInfo]) -> Optional[int]:
			visible = [i for i, info in enumerate(infos) if info.visible]
			if role == InputRole.BREAK:
				return visible[0] if visible else None
			if len(visible) != 2:
				return None
			return visible[0] if role == InputRole.START else visible[1]

		position_selector = Selector.NUMBER_INPUT if role == InputRole.BREAK else Selector.TIME_INPUT
		strategies = [
			Strategy(f'{role} input name', f'input[name="{role.exact_name}"]', fillable),
			Strategy(f'{role} input attributes', _token_selector(role), fillable),
			Strategy(f'{role} input label', Selector.INPUT, labelled),
			Strategy(f'{role} input position', position_selector, positional),
		]
		found = resolve_first(strategies, self.contexts)
		if found is None:
			logger.warning('Could not find %s input', role)
		return found

	def find_save_control(self) -> Optional[ResolvedElement]:
		"""Find the control that commits the shift form."""

		def visible(infos: list[ElementInfo]) -> Optional[int]:
			return first_index(infos, lambda info: info.visible)

		def caption_is(label: str):
			def pick(infos: list[ElementInfo]) -> Optional[int]:
				return first_index(
					infos, lambda info: info.visible and info.caption.strip().lower() == label
				)

			return pick

		def caption_contains(label: str):
			def pick(infos: list[ElementInfo]) -> Optional[int]:
				return first_index(
					infos, lambda info: info.visible and label in info.caption.lower()
				)

			return pick

		def caption_has_word(labels: list[str]):
			pattern = re.compile(rf'\b({"|".join(labels)})\b')

			def pick(infos: list[ElementInfo]) -> Optional[int]:
				return first_index(
					infos, lambda info: info.visible and pattern.search(info.caption.lower()) is not None
				)

			return pick

		synonyms = [str(label) for label in SaveLabels.synonyms()]
		strategies = [
			Strategy('submit or save-classed control', Selector.SUBMIT, visible),
			Strategy('control captioned Save', Selector.CLICKABLE, caption_is(SaveLabels.SAVE)),
			Strategy('control mentioning save', Selector.CLICKABLE, caption_contains(SaveLabels.SAVE)),
			*(
				Strategy(f'control captioned {label}', Selector.CLICKABLE, caption_is(label))
				for label in synonyms
			),
			Strategy('control mentioning a save synonym', Selector.CLICKABLE, caption_has_word(synonyms)),
			Strategy('primary action control', Selector.PRIMARY_ACTION, visible),
		]
		found = resolve_first(strategies, self.contexts)
		if found is None:
			logger.warning('Could not find save button')
		return found
