"""HTTP API server for differing."""

from ._app import SPAStaticFiles, create_app, status_code_for

__all__ = ["SPAStaticFiles", "create_app", "status_code_for"]
