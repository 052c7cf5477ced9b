"""
storefront_api.db
=================

Database package for the storefront API.

Public DB primitives are importable from a single place, e.g.:

    from storefront_api.db import Base, build_engine, transaction
"""

from .models import Base
from .session import build_engine, build_session_factory, check_connection, db_session, transaction

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "check_connection",
    "db_session",
    "transaction",
]
