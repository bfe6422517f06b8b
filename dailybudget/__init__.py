"""Mini README: Core package initializer for the dailybudget planner.

This module exposes the logging helper shared by every sub-package. The
engine itself lives in ``dailybudget.budget``; persistence, sync, advice and
the web interface are collaborators in their own sub-packages so the engine
can be imported without pulling in web or network dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
