"""Server configuration constants."""

# Server Configuration
DEFAULT_API_HOST = "0.0.0.0"  # Default bind address for the FastAPI backend
DEFAULT_API_PORT = 8000  # Default port for FastAPI backend

# Table Registry
MAX_TABLES = 64  # Maximum concurrently open tables per server
