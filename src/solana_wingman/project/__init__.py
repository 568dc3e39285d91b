"""Project setup helpers: Cursor configuration and Anchor bootstrap."""

from .anchor import init_project
from .cursor import setup_cursor

__all__ = ["init_project", "setup_cursor"]
