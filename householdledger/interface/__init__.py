"""Mini README: Interactive interfaces for the household ledger.

Exports the FastAPI application factory. The Typer CLI lives in
``main_ledger.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
