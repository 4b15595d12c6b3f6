"""Fuzzy comparison of employee names.

The rota spreadsheet usually carries first names only ("Rob") while the
portal shows full names ("Robert Smith"), so names are reduced to a
comparison key and then matched by a fixed ladder of rules.
"""

from __future__ import annotations

import math
import re
from enum import IntEnum
from typing import Mapping, Optional

from .vocabulary import Nicknames, Titles

_TITLE_PATTERN = re.compile(rf'^({"|".join(Titles)})\.?\s+')
_PUNCTUATION_PATTERN = re.compile(r'[.,/#!$%^&*;:{}=\-_`~()]')
_WHITESPACE_PATTERN = re.compile(r'\s+')


class MatchKind(IntEnum):
	"""Which rule matched two names, strongest first."""

	EXACT = 1
	NICKNAME = 2
	SUBSTRING = 3
	INITIAL = 4
	EDIT_DISTANCE = 5

	@property
	def is_strong(self) -> bool:
		"""Exact, nickname and substring matches are trusted over the rest."""
		return self <= MatchKind.SUBSTRING


def levenshtein(a: str, b: str) -> int:
	"""Edit distance with unit cost insertion, deletion and substitution."""
	if not a:
		return len(b)
	if not b:
		return len(a)

	previous = list(range(len(b) + 1))
	for i, char_a in enumerate(a, start=1):
		current = [i]
		for j, char_b in enumerate(b, start=1):
			if char_a == char_b:
				current.append(previous[j - 1])
			else:
				current.append(
					min(
						previous[j - 1] + 1,  # substitution
						current[j - 1] + 1,  # insertion
						previous[j] + 1,  # deletion
					)
				)
		previous = current
	return previous[-1]


class NameResolver:
	"""Normalizes and compares names.

	Args:
		first_name_only: Reduce every key to its first token.
		mappings: Known spreadsheet name -> portal name pairs, consulted
			before any heuristic.
	"""

	def __init__(
		self, first_name_only: bool = True, mappings: Optional[Mapping[str, str]] = None
	) -> None:
		self.first_name_only = first_name_only
		self._mappings = dict(mappings or {})

	def portal_name(self, name: str) -> str:
		"""Name to search for in the portal (mapped if a mapping is known)."""
		return self._mappings.get(name, self._mappings.get(name.strip(), name))

	def normalize(self, name: Optional[str]) -> str:
		"""Reduce a name to its comparison key."""
		if not name:
			return ''

		key = name.lower().strip()
		key = _TITLE_PATTERN.sub('', key)
		key = _PUNCTUATION_PATTERN.sub('', key)
		key = _WHITESPACE_PATTERN.sub(' ', key).strip()

		if self.first_name_only and key:
			key = key.split(' ')[0]
		return key

	@staticmethod
	def nickname_of(key: str) -> str:
		"""Formal name for a nickname key, or the key itself."""
		return Nicknames.canonical(key)

	def match_kind(self, a: Optional[str], b: Optional[str]) -> Optional[MatchKind]:
		"""Return the first rule under which the two names match, if any."""
		key_a = self.normalize(a)
		key_b = self.normalize(b)
		if not key_a or not key_b:
			return None

		if key_a == key_b:
			return MatchKind.EXACT
		if self.nickname_of(key_a) == self.nickname_of(key_b):
			return MatchKind.NICKNAME
		if key_a in key_b or key_b in key_a:
			return MatchKind.SUBSTRING
		if key_a[0] == key_b[0] and (len(key_a) <= 3 or len(key_b) <= 3):
			return MatchKind.INITIAL
		if len(key_a) > 2 and len(key_b) > 2:
			# One edit allowed per three characters of the longer name
			allowed = math.ceil(max(len(key_a), len(key_b)) / 3)
			if levenshtein(key_a, key_b) <= allowed:
				return MatchKind.EDIT_DISTANCE
		return None

	def similar(self, a: Optional[str], b: Optional[str]) -> bool:
		"""Whether two names plausibly refer to the same person."""
		return self.match_kind(a, b) is not None
