"""Field rules shared by the create and update paths."""

from datetime import date
from typing import Protocol

from src.user_management.core.errors import ErrorCode, UserValidationError

MINIMUM_AGE = 18
PHONE_NUMBER_LENGTH = 10
_DIGITS = frozenset("0123456789")


class UserDetails(Protocol):
    date_of_birth: date
    phone_number: str


def compute_age(date_of_birth: date, today: date) -> int:
    """Return the number of whole years between ``date_of_birth`` and ``today``.

    A Feb 29 birthday counts as reached on Mar 1 in non-leap years.
    """
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def is_adult(date_of_birth: date, today: date) -> bool:
    return compute_age(date_of_birth, today) >= MINIMUM_AGE


def is_valid_phone_number(value: str) -> bool:
    """Exactly ten ASCII digits, no leading ``+`` and no separators."""
    return len(value) == PHONE_NUMBER_LENGTH and all(ch in _DIGITS for ch in value)


def validate_user_details(details: UserDetails, today: date) -> None:
    """Check the age and phone rules, raising on the first one that fails.

    Raises:
        UserValidationError: With code AGE_TOO_YOUNG or INVALID_PHONE.
    """
    if not is_adult(details.date_of_birth, today):
        raise UserValidationError(
            f"User must be {MINIMUM_AGE} years or older.", ErrorCode.AGE_TOO_YOUNG
        )

    if not is_valid_phone_number(details.phone_number):
        raise UserValidationError(
            f"Phone number must be exactly {PHONE_NUMBER_LENGTH} digits.",
            ErrorCode.INVALID_PHONE,
        )
