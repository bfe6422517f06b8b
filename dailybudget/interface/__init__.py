"""Mini README: Interactive interfaces for the budget planner.

Exports the FastAPI application factory that serves period reports, expense
mutations, advice and sync as JSON. The command line entry point lives in
``main_budget_planner.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
