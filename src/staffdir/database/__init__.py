"""
Database module for the staffdir backend
"""

from .connection import create_all, get_async_engine, get_async_session, init_database

__all__ = ["create_all", "get_async_engine", "get_async_session", "init_database"]
