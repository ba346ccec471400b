"""Test configuration and fixtures for the Users API."""

from tests.fixtures.core import *  # noqa: F401,F403
