"""HTTP client for the booking API. Unwraps {data} envelopes, raises on {error}."""
from typing import Any

import requests

DEFAULT_AUTH_HEADER = "X-Clerk-User-Id"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class GymSlotClient:
    """Booking API client for one signed-in user."""

    def __init__(
        self,
        base_url: str,
        user_id: str | None = None,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
        auth_header: str = DEFAULT_AUTH_HEADER,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.timeout = timeout
        self._session = session or requests.Session()
        self._auth_header = auth_header

    def _headers(self) -> dict[str, str]:
        return {self._auth_header: str(self.user_id)} if self.user_id else {}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        resp = self._session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs,
        )
        try:
            body = resp.json()
        except ValueError:
            body = {}

        if not resp.ok or "error" in body:
            raise ApiError(resp.status_code, body.get("error") or resp.reason or "Request failed")
        return body.get("data", body)

    def list_slots(self, day: str | None = None, *, upcoming: bool = False) -> list[dict[str, Any]]:
        params: dict[str, str] = {}
        if day:
            params["date"] = day
        if upcoming:
            params["upcoming"] = "true"
        return self._request("GET", "/booking_slots", params=params)

    def get_slot(self, slot_id: int) -> dict[str, Any]:
        return self._request("GET", f"/booking_slots/{slot_id}")

    def reserve(self, user_id: int, slot_id: int) -> dict[str, Any]:
        return self._request("POST", "/user_bookings", json={"userId": user_id, "bookingSlotId": slot_id})

    def cancel(self, booking_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/user_bookings/{booking_id}")

    def my_bookings(self, user_id: int, limit: int = 50) -> list[dict[str, Any]]:
        return self._request("GET", "/user_bookings", params={"userId": user_id, "limit": limit})
