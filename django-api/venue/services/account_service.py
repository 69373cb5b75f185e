"""Account lookup and role-based capability checks.

Roles are a tag on a flat record; what each role may do is a table, not a
class hierarchy.
"""

import logging
import threading

from venue.domain.errors import AccountNotFoundError, DuplicateAccountError, PermissionDeniedError
from venue.domain.models import Account, AdministratorProfile, HandlerProfile, Role
from venue.stores.interfaces import Repository

logger = logging.getLogger(__name__)

SCHEDULE = "schedule"
VIEW_CUSTOMER_HISTORY = "view_customer_history"
PURCHASE = "purchase"
ORDER = "order"
READ_NOTIFICATIONS = "read_notifications"
READ_HANDLER_HISTORY = "read_handler_history"
REGISTER_STAFF = "register_staff"

CAPABILITIES: dict[Role, frozenset[str]] = {
    Role.ADMINISTRATOR: frozenset({SCHEDULE, VIEW_CUSTOMER_HISTORY, REGISTER_STAFF}),
    Role.CUSTOMER: frozenset({PURCHASE, ORDER, READ_NOTIFICATIONS}),
    Role.CONCESSION_HANDLER: frozenset({READ_HANDLER_HISTORY}),
}

DEFAULT_ADMIN = Account(
    nickname="Administrator",
    first_name="Venue",
    last_name="Admin",
    email="admin@venue.example",
    role=Role.ADMINISTRATOR,
    profile=AdministratorProfile(),
)

SYSTEM_HANDLER = Account(
    nickname="KitchenExpress",
    first_name="System",
    last_name="Auto",
    email="kitchen@venue.example",
    role=Role.CONCESSION_HANDLER,
    profile=HandlerProfile(),
)


def require(account: Account, action: str) -> None:
    """Raise PermissionDeniedError unless the account's role grants ``action``."""
    if action not in CAPABILITIES[account.role]:
        raise PermissionDeniedError(action)


class AccountService:
    """Service for account lookups."""

    def __init__(self, accounts: Repository[Account]) -> None:
        self._accounts = accounts
        self._lock = threading.Lock()

    def ensure_default_admin(self) -> None:
        """Create the built-in administrator when no account carries its nickname."""
        if self._accounts.get(DEFAULT_ADMIN.nickname) is None:
            logger.info("Seeding default administrator account")
            self._accounts.upsert(DEFAULT_ADMIN)

    def register(self, account: Account) -> Account:
        """Add a new account.

        Raises:
            DuplicateAccountError: If the nickname is already taken.
        """
        with self._lock:
            if self._accounts.get(account.nickname) is not None:
                raise DuplicateAccountError(account.nickname)
            self._accounts.upsert(account)
        logger.info("Registered %s account %s", account.role.value, account.nickname)
        return account

    def get(self, nickname: str) -> Account:
        """Return an account by nickname.

        Raises:
            AccountNotFoundError: If no account has that nickname.
        """
        account = self._accounts.get(nickname)
        if account is None:
            raise AccountNotFoundError(nickname)
        return account

    def authorize(self, nickname: str, action: str) -> Account:
        account = self.get(nickname)
        require(account, action)
        return account

    def first_handler(self) -> Account:
        """First registered concession handler, or the system handler if none exists."""
        for account in self._accounts.list():
            if account.role is Role.CONCESSION_HANDLER:
                return account
        return SYSTEM_HANDLER

    def search_customers(self, fragment: str) -> list[Account]:
        return [
            account
            for account in self._accounts.list()
            if account.role is Role.CUSTOMER and fragment in account.nickname
        ]
