"""Pytest configuration shared by the whole test suite."""

import os

# Must be set before anything imports the runtime context, which loads config.yaml
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from tests.fixtures import *  # noqa: E402,F401,F403
