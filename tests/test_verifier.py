from playwright.sync_api import Error as PlaywrightError

from staff_rota.browser.timing import LOADING_MAX_ATTEMPTS, Timing
from staff_rota.browser.verifier import SaveVerifier

from .conftest import FakeNode


def test_quiet_page_is_a_success(make_session):
	session = make_session(FakeNode('div', text='Shift saved'))

	assert SaveVerifier(session).confirm()
	assert session.page.waits == [Timing.SAVE_START, Timing.SAVE_SETTLE]


def test_waits_for_spinner_to_go(make_session):
	spinner = FakeNode('div', class_='loading-spinner')
	body = FakeNode('div', spinner)
	session = make_session(body)

	def finish_loading(waits):
		if waits == 3 and spinner.parent is not None:
			body.remove(spinner)

	session.page.on_wait = finish_loading

	assert SaveVerifier(session).confirm()
	assert session.page.waits == [
		Timing.SAVE_START,
		Timing.LOADING_POLL,
		Timing.LOADING_POLL,
		Timing.SAVE_SETTLE,
	]


def test_spinner_that_never_stops_is_not_a_failure(make_session):
	session = make_session(FakeNode('div', class_='processing'))

	assert SaveVerifier(session).confirm()
	# Start delay, every poll, final settle
	assert len(session.page.waits) == LOADING_MAX_ATTEMPTS + 2


def test_visible_error_fails(make_session):
	session = make_session(FakeNode('div', text='Shift overlaps another shift', class_='alert alert-danger'))

	assert not SaveVerifier(session).confirm()


def test_hidden_or_empty_errors_are_ignored(make_session):
	session = make_session(
		FakeNode('div', text='Old problem', class_='error', visible=False),
		FakeNode('span', class_='field-error'),
	)

	assert SaveVerifier(session).confirm()


def test_errors_already_showing_before_save_are_ignored(make_session):
	banner = FakeNode('div', text='Your session expires in 5 minutes', class_='alert')
	session = make_session(banner)
	verifier = SaveVerifier(session)

	baseline = verifier.snapshot()

	assert baseline == {'Your session expires in 5 minutes'}
	assert verifier.confirm(baseline)


def test_never_raises(make_session):
	session = make_session(FakeNode('div'))

	def closed(_):
		raise PlaywrightError('Target page, context or browser has been closed')

	session.page.on_wait = closed

	assert not SaveVerifier(session).confirm()
