"""FastAPI backend application entry point.

This module initializes the application using the factory pattern.
It serves as the entry point for uvicorn.
"""

import os

import uvicorn

from backend.app_factory import create_app
from holdem.config.server import DEFAULT_API_HOST, DEFAULT_API_PORT

# This global 'app' variable is what uvicorn looks for
app = create_app()


def main() -> None:
    """Run the application using uvicorn when executed directly."""
    host = os.getenv("HOLDEM_HOST", DEFAULT_API_HOST)
    port = int(os.getenv("HOLDEM_PORT", str(DEFAULT_API_PORT)))
    is_production = os.getenv("HOLDEM_PRODUCTION", "false").lower() == "true"

    uvicorn.run(
        "backend.main:app",
        host=host,
        port=port,
        reload=not is_production,
        log_level="info",
    )


if __name__ == "__main__":
    main()
