"""Repository for Client persistence in Supabase."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...domain.errors import StoreError
from ...domain.models import BillingTransition, Client, ClientStatus
from ...domain.ports.persistence import ClientRepository

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class SupabaseClientRepository(ClientRepository):
    """Reads and updates the ``clients`` table through Supabase's PostgREST API.

    Requests authenticate with the service role key, so row level security
    does not apply.
    """

    TABLE = "clients"
    COLUMNS = "id,user_id,company_name,tier,status,stripe_customer_id,stripe_subscription_id"

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not base_url or not service_role_key:
            raise RuntimeError("Supabase URL and service role key are required.")
        self._http = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": service_role_key,
                "Authorization": f"Bearer {service_role_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    # ClientRepository API ---------------------------------------------------
    def get_client_by_user_id(self, user_id: str) -> Optional[Client]:
        rows = self._request("GET", params={"user_id": f"eq.{user_id}", "select": self.COLUMNS, "limit": "1"})
        return self._row_to_client(rows[0]) if rows else None

    def get_client(self, client_id: str) -> Optional[Client]:
        rows = self._request("GET", params={"id": f"eq.{client_id}", "select": self.COLUMNS, "limit": "1"})
        return self._row_to_client(rows[0]) if rows else None

    def apply_billing_transition(
        self, client_id: str, transition: BillingTransition
    ) -> Optional[Client]:
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{client_id}", "select": self.COLUMNS},
            json=transition.to_columns(),
            headers={"Prefer": "return=representation"},
        )
        return self._row_to_client(rows[0]) if rows else None

    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        *,
        params: Dict[str, str],
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        try:
            response = self._http.request(
                method, f"/{self.TABLE}", params=params, json=json, headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Supabase %s %s failed with %s: %s",
                method,
                self.TABLE,
                exc.response.status_code,
                exc.response.text,
            )
            raise StoreError(f"Client store returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Supabase %s %s failed: %s", method, self.TABLE, exc)
            raise StoreError("Client store is unreachable") from exc

        if not response.content:
            return []
        payload = response.json()
        if isinstance(payload, dict):
            return [payload]
        return payload

    @staticmethod
    def _row_to_client(row: Dict[str, Any]) -> Client:
        try:
            status = ClientStatus(row.get("status") or ClientStatus.INACTIVE.value)
        except ValueError:
            status = ClientStatus.INACTIVE
        return Client(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            status=status,
            company_name=row.get("company_name"),
            tier=row.get("tier"),
            provider_customer_id=row.get("stripe_customer_id"),
            provider_subscription_id=row.get("stripe_subscription_id"),
        )
