# roundvote/core/access.py
from typing import Iterable, List

from roundvote.errors import NotAuthorized


class AdminRoster:
    """
    Accounts allowed to administer rounds.

    Fixed at system initialization; granting and revoking happen outside
    the election core.
    """

    def __init__(self, accounts: Iterable[str]):
        self._accounts = frozenset(a for a in accounts if a)

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account: str) -> bool:
        return account in self._accounts

    def is_admin(self, caller: str) -> bool:
        return caller in self._accounts

    def require_admin(self, caller: str, operation: str = "this operation") -> None:
        if caller not in self._accounts:
            raise NotAuthorized(f"{caller!r} may not perform {operation}")

    def accounts(self) -> List[str]:
        return sorted(self._accounts)
