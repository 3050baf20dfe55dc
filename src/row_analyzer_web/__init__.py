"""Flask front end for the row-length analyzer (JSON API + upload page)."""
from __future__ import annotations

from .web import app, main

__all__ = ["app", "main"]
