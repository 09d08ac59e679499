from __future__ import annotations

from typing import Optional, Protocol

from ..models import BillingTransition, Client


class ClientRepository(Protocol):
    """Storage of client billing state."""

    def get_client_by_user_id(self, user_id: str) -> Optional[Client]:
        ...

    def get_client(self, client_id: str) -> Optional[Client]:
        ...

    def apply_billing_transition(
        self, client_id: str, transition: BillingTransition
    ) -> Optional[Client]:
        """Write every field of ``transition`` in one atomic update.

        Returns the updated client, or ``None`` when no row matches.
        Only webhook processing may call this.
        """
        ...
