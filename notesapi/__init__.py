"""JSON HTTP API for users and their notes, with SQL storage and queue publishing."""

__version__ = "0.1.0"