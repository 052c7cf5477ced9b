"""
storefront_api
--------------

HTTP API for the storefront: catalog, checkout, accounts and back office.

This package exposes:

- ``create_app()``: application factory returning a FastAPI instance, for
  ``uvicorn storefront_api.main:create_app --factory``.
"""

from importlib import metadata as _metadata


# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

try:
    __version__: str = _metadata.version("storefront-api")
except _metadata.PackageNotFoundError:  # When running from source tree
    __version__ = "0.0.0"


def create_app(*args, **kwargs):
    """Lazy proxy to ``storefront_api.main.create_app``."""
    from .main import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = ["__version__", "create_app"]
