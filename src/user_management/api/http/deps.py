"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date

from fastapi import Depends, Request
from sqlmodel import Session

from src.user_management.api.http.app_data import ApplicationDependencies
from src.user_management.core.services import DbSessionService, UserService
from src.user_management.entities.user import UserRepository


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a database session scoped to the current request."""
    with database_service.get_session() as session:
        yield session


def get_clock(request: Request) -> Callable[[], date]:
    """Get the callable that supplies today's date for age checks."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.today


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
    today: Callable[[], date] = Depends(get_clock),
) -> UserService:
    """Get a user service bound to the request's session."""
    return UserService(repository, today)
