"""Per-request caller context passed explicitly into operations."""

from __future__ import annotations

from dataclasses import dataclass

from expocredits.modules.accounts.models import AccountRole


@dataclass(frozen=True, slots=True)
class RequestContext:
    account_id: str
    role: AccountRole

    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    def can_transfer(self) -> bool:
        return self.role != AccountRole.RESTRICTED_VIEW
