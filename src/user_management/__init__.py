"""User management API.

A FastAPI service exposing CRUD operations for users persisted through
SQLModel, with loguru logging and YAML based configuration.
"""

__version__ = "0.1.0"
