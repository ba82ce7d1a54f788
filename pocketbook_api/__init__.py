"""HTTP front end for the pocketbook widget."""

from .app import create_app

__all__ = ["create_app"]
