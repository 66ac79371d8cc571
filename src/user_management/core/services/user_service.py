from collections.abc import Callable
from datetime import date

from loguru import logger

from src.user_management.core.errors import ConflictError, NotFoundError
from src.user_management.core.validation import validate_user_details
from src.user_management.entities.user import CreateUserRequest, User, UserRepository


class UserService:
    """Create, read, replace and delete users.

    Every write validates first and then commits once, so a rejected
    request never leaves a partial change behind.
    """

    def __init__(
        self,
        repository: UserRepository,
        today: Callable[[], date] = date.today,
    ):
        self._repository = repository
        self._today = today

    def create_user(self, request: CreateUserRequest) -> User:
        """Validate and persist a new user with a server-generated id.

        Raises:
            UserValidationError: If the user is under age or the phone is invalid.
            ConflictError: If the email is already taken.
        """
        validate_user_details(request, self._today())

        if self._repository.email_exists(request.email):
            raise ConflictError()

        user = User.from_request(request)
        self._repository.add(user)
        # The unique index still guards against a concurrent create with the same email
        self._repository.save()

        logger.info("User created with ID: {}", user.id)
        return user

    def list_users(self) -> list[User]:
        users = self._repository.list_all()
        logger.info("Retrieved {} users", len(users))
        return users

    def get_user(self, user_id: str) -> User:
        user = self._repository.get(user_id)
        if user is None:
            logger.warning("User not found with ID: {}", user_id)
            raise NotFoundError(user_id)

        logger.info("Retrieved user with ID: {}", user_id)
        return user

    def update_user(self, user_id: str, request: CreateUserRequest) -> User:
        """Replace every field of an existing user except its id."""
        existing = self._repository.get(user_id)
        if existing is None:
            logger.warning("User not found with ID: {}", user_id)
            raise NotFoundError(user_id)

        validate_user_details(request, self._today())

        if self._repository.email_exists(request.email, exclude_id=user_id):
            raise ConflictError()

        updated = User.from_request(request, user_id=existing.id)
        self._repository.update(updated)
        self._repository.save()

        logger.info("Updated user with ID: {}", user_id)
        return updated

    def delete_user(self, user_id: str) -> None:
        user = self._repository.get(user_id)
        if user is None:
            logger.warning("User not found with ID: {}", user_id)
            raise NotFoundError(user_id)

        self._repository.remove(user)
        self._repository.save()

        logger.info("Deleted user with ID: {}", user_id)
