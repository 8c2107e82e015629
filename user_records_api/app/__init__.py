"""
Application package.

Contains the FastAPI application and its layers: ``api`` (routes),
``services`` (business logic), ``schemas`` (pydantic models),
``store`` (persistence backends) and ``core`` (configuration, logging
and database wiring).
"""

from .main import app, create_app  # noqa: F401
