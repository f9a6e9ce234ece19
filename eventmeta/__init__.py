"""Extract event-publication metadata from annotated Java sources."""

__version__ = "0.1.0"
