"""Weekly FPL summary: fixtures, transfer trends, form, prices and injuries."""

from .cli import main
from .pipeline import BuildError, build, build_weekly_report

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "__version__",
    "build",
    "build_weekly_report",
    "main",
]
