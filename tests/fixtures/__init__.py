"""Shared pytest fixtures for the Users API tests."""

from .core import *  # noqa: F401,F403
