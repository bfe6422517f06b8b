"""Mini README: Utility helper functions for dailybudget.

Currently exports the entry-point plugin loader used to discover allocation
policies contributed by other installed packages.
"""

from .plugin_loader import load_entry_point_plugins

__all__ = ["load_entry_point_plugins"]
