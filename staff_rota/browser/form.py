"""Filling and submitting the portal's shift form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .. import logger
from ..models import FailureReason, FillInstruction
from ..vocabulary import InputRole
from .dom import SET_VALUE_JS
from .timing import Timing

if TYPE_CHECKING:
	from .locator import ElementLocator
	from .session import BrowserSession
	from .verifier import SaveVerifier


@dataclass(slots=True)
class FillResult:
	"""What happened to one pass through the shift form."""

	saved: bool
	reason: Optional[FailureReason] = None
	missing_inputs: list[InputRole] = field(default_factory=list)


class FormFiller:
	"""Writes shift times into the open form and submits it."""

	def __init__(self, session: BrowserSession, locator: ElementLocator, verifier: SaveVerifier) -> None:
		self._session = session
		self._locator = locator
		self._verifier = verifier

	def _write(self, role: InputRole, value: str) -> bool:
		"""Set an input's value and fire the events the portal listens for."""
		found = self._locator.find_form_input(role)
		if found is None:
			return False
		found.locator.evaluate(SET_VALUE_JS, value)
		found.locator.dispatch_event('input')
		found.locator.dispatch_event('change')
		logger.debug('Set %s input to %r', role, value)
		return True

	def fill(self, instruction: FillInstruction) -> FillResult:
		"""Fill the form with one instruction and save it.

		Inputs that cannot be found are skipped; the save is still attempted
		so a partially filled form is not left dangling.

		Args:
			instruction: Clock strings and break for this pass.

		Returns:
			FillResult with saved=True only when the save was confirmed.
		"""
		# Messages the portal raises while the form is filled count as new
		baseline = self._verifier.snapshot()
		self._session.sleep(Timing.FORM_SETTLE)

		values = [
			(InputRole.START, instruction.start_clock),
			(InputRole.END, instruction.end_clock),
		]
		if instruction.writes_break:
			values.append((InputRole.BREAK, str(instruction.break_minutes)))

		missing = [role for role, value in values if not self._write(role, value)]

		save = self._locator.find_save_control()
		if save is None:
			return FillResult(
				saved=False, reason=FailureReason.SAVE_CONTROL_NOT_FOUND, missing_inputs=missing
			)

		save.locator.click()
		logger.debug('Clicked save via %s', save.strategy_name)

		if not self._verifier.confirm(baseline):
			return FillResult(saved=False, reason=FailureReason.SAVE_UNCONFIRMED, missing_inputs=missing)
		return FillResult(saved=True, missing_inputs=missing)
