"""
Static in-memory credential table.

One admin account plus one account per market ("<market>_user"), rebuilt
from the market list whenever it is needed. There is no session storage:
a successful login just returns the role the user may work as.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from restock.config import (
    ADMIN_PASSWORD, ADMIN_ROLE, ADMIN_USERNAME, MARKET_PASSWORD, MARKET_USER_SUFFIX,
)
from restock.errors import AccessDenied


@dataclass(frozen=True)
class Credential:
    password: str
    allowed_role: str


@dataclass
class CredentialTable:
    users: dict[str, Credential] = field(default_factory=dict)

    @classmethod
    def from_markets(cls, markets: list[str]) -> "CredentialTable":
        users = {ADMIN_USERNAME: Credential(ADMIN_PASSWORD, ADMIN_ROLE)}
        for market in markets:
            users[f"{str(market).lower()}{MARKET_USER_SUFFIX}"] = Credential(MARKET_PASSWORD, market)
        return cls(users)

    def authenticate(self, username: str, password: str, selected_role: str) -> str:
        """Return the role to work as, or raise AccessDenied."""
        user = self.users.get((username or "").strip())
        if user is None or user.password != password:
            raise AccessDenied("Invalid username or password.", bad_credentials=True)

        if user.allowed_role == ADMIN_ROLE:
            if selected_role != ADMIN_ROLE:
                raise AccessDenied("Admin role must be selected for this user.")
            return ADMIN_ROLE

        if selected_role != user.allowed_role:
            raise AccessDenied(f"Access Denied: You are not authorized for market '{selected_role}'.")
        return user.allowed_role
