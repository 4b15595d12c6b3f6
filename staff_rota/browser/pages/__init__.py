"""Page objects for portal browser automation."""

from .login import LoginPage
from .schedule import SchedulePage

__all__ = ['LoginPage', 'SchedulePage']
