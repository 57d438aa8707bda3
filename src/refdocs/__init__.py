"""refdocs: read-only documentation resource server."""

__version__ = "0.1.0"
