from .browser import RotaBrowser
from .form import FillResult, FormFiller
from .locator import ElementLocator
from .navigation import NavigationController, NavigationError, NavigationState
from .pages import LoginPage, SchedulePage
from .session import BrowserSession
from .verifier import SaveVerifier

__all__ = [
	'RotaBrowser',
	'BrowserSession',
	'ElementLocator',
	'FillResult',
	'FormFiller',
	'LoginPage',
	'NavigationController',
	'NavigationError',
	'NavigationState',
	'SaveVerifier',
	'SchedulePage',
]
