"""
NoteKeeper Backend - Multi-tenant note taking API

Notes with per-note sharing, full-text search and JWT based authentication.
"""

__version__ = "1.0.0"
