"""API endpoints package."""

from . import analytics
from . import health
from . import integrations
from . import modes
from . import process_thread
from . import teams
from . import threads

__all__ = ["analytics", "health", "integrations", "modes", "process_thread", "teams", "threads"]
