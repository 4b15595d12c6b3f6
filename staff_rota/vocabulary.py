"""Vocabulary for the scheduling portal and the rota spreadsheet.

Centralizes the day names, name titles, nickname classes and UI labels the
automation searches for.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


class Weekdays(StrEnum):
	"""Weekday names (matching Python's datetime.weekday() where Monday=0)."""

	MONDAY = 'monday'
	TUESDAY = 'tuesday'
	WEDNESDAY = 'wednesday'
	THURSDAY = 'thursday'
	FRIDAY = 'friday'
	SATURDAY = 'saturday'
	SUNDAY = 'sunday'

	@classmethod
	def _members(cls) -> list[Weekdays]:
		"""Get all members as a list (workaround for ty type checker)."""
		return list(cls.__members__.values())

	@property
	def label(self) -> str:
		"""Capitalized day name as the portal prints it (Monday, Tuesday...)."""
		return self.value.title()

	@property
	def short(self) -> str:
		"""Get 3-letter abbreviation (Mon, Tue, etc.)."""
		return self.value[:3].title()

	@property
	def number(self) -> int:
		"""Get Python weekday number (Monday=0, Sunday=6)."""
		return self._members().index(self)

	@classmethod
	def from_number(cls, num: int) -> Optional[Weekdays]:
		"""Get weekday from Python weekday number (Monday=0, Sunday=6)."""
		members = cls._members()
		if 0 <= num < len(members):
			return members[num]
		return None

	@classmethod
	def from_name(cls, name: str) -> Optional[Weekdays]:
		"""Get weekday from a full or 3-letter name (case-insensitive)."""
		name_lower = name.strip().lower()
		for day in cls._members():
			if name_lower in (day.value, day.value[:3]):
				return day
		return None


class Titles(StrEnum):
	"""Honorifics stripped from the front of a name before comparison."""

	MR = 'mr'
	MRS = 'mrs'
	MISS = 'miss'
	MS = 'ms'
	DR = 'dr'
	PROF = 'prof'


# Formal name -> nicknames. A nickname listed under two formal names belongs
# to the later one.
NICKNAME_CLASSES: dict[str, tuple[str, ...]] = {
	'robert': ('rob', 'bob', 'bobby', 'robbie'),
	'richard': ('rick', 'dick', 'richie'),
	'william': ('will', 'bill', 'billy'),
	'james': ('jim', 'jimmy', 'jamie'),
	'john': ('johnny', 'jon'),
	'michael': ('mike', 'mikey', 'mick'),
	'thomas': ('tom', 'tommy'),
	'christopher': ('chris',),
	'joseph': ('joe', 'joey'),
	'daniel': ('dan', 'danny'),
	'matthew': ('matt', 'matty'),
	'david': ('dave', 'davey'),
	'nicholas': ('nick', 'nicky'),
	'anthony': ('tony',),
	'andrew': ('andy', 'drew'),
	'steven': ('steve', 'stephen'),
	'edward': ('ed', 'eddie', 'ted'),
	'charles': ('charlie', 'chuck'),
	'benjamin': ('ben', 'benji'),
	'samuel': ('sam', 'sammy'),
	'alexander': ('alex',),
	'patrick': ('pat', 'patty'),
	'victoria': ('vicky', 'vicki'),
	'elizabeth': ('liz', 'beth', 'lizzie', 'eliza'),
	'catherine': ('cathy', 'katherine', 'kate', 'katie', 'cat'),
	'jennifer': ('jen', 'jenny'),
	'margaret': ('maggie', 'meg', 'peggy'),
	'rebecca': ('becky',),
	'stephanie': ('steph',),
	'deborah': ('debbie', 'deb'),
	'jessica': ('jess', 'jessie'),
	'susan': ('sue', 'suzie'),
	'barbara': ('barb',),
	'kimberly': ('kim',),
	'amanda': ('mandy',),
	'patricia': ('patty', 'pat'),
	'nicole': ('nikki',),
	'christine': ('chris', 'christy'),
	'samantha': ('sam',),
	'michelle': ('shelly',),
	'angela': ('angie',),
	'melissa': ('mel', 'missy'),
	'isabelle': ('izzy',),
}


class Nicknames:
	"""Lookup from any member of a nickname class to its formal name."""

	_index: dict[str, str] = {
		nickname: formal
		for formal, nicknames in NICKNAME_CLASSES.items()
		for nickname in nicknames
	}

	@classmethod
	def canonical(cls, key: str) -> str:
		"""Return the formal name for a nickname, or the key unchanged."""
		return cls._index.get(key, key)


class NavigationLabels(StrEnum):
	"""Link and menu texts that lead to the scheduling screen."""

	SCHEDULING = 'Scheduling'
	SCHEDULE = 'Schedule'
	ROTA = 'Rota'
	SHIFT = 'Shift'

	@classmethod
	def menu_words(cls) -> list[str]:
		"""Words accepted inside an opened burger menu."""
		return [cls.SCHEDULING, cls.ROTA, cls.SCHEDULE]

	@classmethod
	def link_words(cls) -> list[str]:
		"""Words accepted on any link or button."""
		return [cls.SCHEDULE, cls.ROTA, cls.SHIFT]


class SaveLabels(StrEnum):
	"""Labels of controls that commit the shift form (lower-case)."""

	SAVE = 'save'
	OK = 'ok'
	SUBMIT = 'submit'
	CONFIRM = 'confirm'
	DONE = 'done'
	APPLY = 'apply'
	UPDATE = 'update'

	@classmethod
	def synonyms(cls) -> list[SaveLabels]:
		"""Every label except SAVE, in preference order."""
		return [label for label in cls.__members__.values() if label is not cls.SAVE]


class InputRole(StrEnum):
	"""Semantic role of an input in the shift form."""

	START = 'start'
	END = 'end'
	BREAK = 'break'

	@property
	def exact_name(self) -> str:
		"""The name attribute the portal's own form uses for this field."""
		match self:
			case InputRole.START:
				return 'startTime'
			case InputRole.END:
				return 'endTime'
			case InputRole.BREAK:
				return 'breakDuration'

	@property
	def tokens(self) -> tuple[str, ...]:
		"""Attribute and label fragments that identify this field."""
		match self:
			case InputRole.START:
				return ('start', 'from')
			case InputRole.END:
				return ('end', 'finish')
			case InputRole.BREAK:
				return ('break',)
