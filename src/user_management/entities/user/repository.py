"""Data-access layer for users."""

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.user_management.core.errors import ConflictError, NotFoundError
from src.user_management.entities.user.entity import User
from src.user_management.entities.user.table import UserTable


class UserRepository:
    """Maps User entities to and from the users table.

    Writes are staged with add/update/remove and only reach the database
    when save() commits the session.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def list_all(self) -> list[User]:
        rows = self._session.exec(select(UserTable)).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def email_exists(self, email: str, exclude_id: str | None = None) -> bool:
        """Return True if another user already has ``email``.

        ``exclude_id`` skips the user being updated.
        """
        statement = select(UserTable.id).where(UserTable.email == email)
        if exclude_id is not None:
            statement = statement.where(UserTable.id != exclude_id)
        return self._session.exec(statement).first() is not None

    def add(self, user: User) -> None:
        self._session.add(UserTable(**user.model_dump(exclude={"age"})))

    def update(self, user: User) -> None:
        """Overwrite every mutable column of the stored row with ``user``'s values."""
        row = self._session.get(UserTable, user.id)
        if row is None:
            raise NotFoundError(user.id)

        for field_name, value in user.model_dump(exclude={"id", "age"}).items():
            setattr(row, field_name, value)
        self._session.add(row)

    def remove(self, user: User) -> None:
        row = self._session.get(UserTable, user.id)
        if row is None:
            raise NotFoundError(user.id)
        self._session.delete(row)

    def save(self) -> None:
        """Commit staged changes in a single transaction.

        Raises:
            ConflictError: If the email unique index rejects the write.
        """
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            if "email" in str(exc.orig).lower():
                logger.warning("Email uniqueness constraint rejected write: {}", exc.orig)
                raise ConflictError() from exc
            raise
