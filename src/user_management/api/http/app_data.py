from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from src.user_management.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    today: Callable[[], date] = field(default=date.today)
