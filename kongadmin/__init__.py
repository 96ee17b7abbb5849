"""Client library for the Kong Admin API: entities, HTTP client and per-entity services."""

__version__ = "0.1.0"