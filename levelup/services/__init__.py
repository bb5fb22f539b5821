"""
Service Layer Package

Business logic between the presentation layer (CLI) and persistence:
- ProgressService: session state, goal CRUD, completions, level/stats views
- data_export: CSV export of the completion history
"""

from levelup.services.progress_service import ProgressService
from levelup.services.data_export import export_completions_csv

__all__ = [
    "ProgressService",
    "export_completions_csv",
]
