"""HTTP request parsing helpers, socket helpers and a minimal HTTP client."""

__version__ = "0.1.0"
__all__ = ["client", "io_helper", "parsing"]