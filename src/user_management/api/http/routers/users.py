"""User API router with CRUD operations."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from loguru import logger

from src.user_management.api.http.deps import get_user_service
from src.user_management.core.errors import UserManagementError
from src.user_management.core.services import UserService
from src.user_management.entities.user import CreateUserRequest, User

router = APIRouter(prefix="/api/users", tags=["users"])


@contextmanager
def _internal_errors(action: str, log_message: str, *args) -> Iterator[None]:
    """Turn unexpected failures into a generic 500, keeping details in the log."""
    try:
        yield
    except (UserManagementError, HTTPException):
        raise
    except Exception as exc:
        logger.exception(log_message, *args)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while {action}",
        ) from exc


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: CreateUserRequest,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> User:
    """Create a new user."""
    with _internal_errors("creating the user", "Error creating user"):
        user = service.create_user(payload)

    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.get("", response_model=list[User])
def list_users(service: UserService = Depends(get_user_service)) -> list[User]:
    """List all users."""
    with _internal_errors("retrieving users", "Error retrieving users"):
        return service.list_users()


@router.get("/{user_id}", response_model=User)
def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> User:
    """Get a user by ID."""
    with _internal_errors(
        "retrieving the user", "Error retrieving user with ID: {}", user_id
    ):
        return service.get_user(user_id)


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def update_user(
    user_id: str,
    payload: CreateUserRequest,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Replace every field of a user except its ID."""
    with _internal_errors(
        "updating the user", "Error updating user with ID: {}", user_id
    ):
        service.update_user(user_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Response:
    """Delete a user."""
    with _internal_errors(
        "deleting the user", "Error deleting user with ID: {}", user_id
    ):
        service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
