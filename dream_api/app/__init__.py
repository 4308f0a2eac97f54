"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules.  Configuration, logging, storage and the conflict‑retry
policy live in ``core``; the storage accessor lives in
``repositories``; business logic lives in ``services``; and HTTP
routes are grouped by version under ``api/<version>/``.
"""

from .main import app  # noqa: F401
