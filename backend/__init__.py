"""Backend package for the Texas Hold'em trainer API.

This package provides the FastAPI web server, the table registry and the
HTTP routers for tables and preflop ranges.
"""

from holdem import __version__

__all__ = ["__version__"]
