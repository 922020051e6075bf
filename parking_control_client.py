"""Parking Control API client.

A small wrapper around the ``/parking-spot`` REST endpoints using the
``requests`` library.  It is meant for scripts and other services that
need to register or look up parking spots without dealing with HTTP
details.

Every method returns a tuple ``(data, error)``.  On success ``data``
holds the decoded JSON body and ``error`` is ``None``.  On failure
``data`` is ``None`` (or an empty value for list calls) and ``error``
is a dictionary with ``status_code`` and ``message`` keys.  Transport
failures have ``status_code`` set to ``None``.

Payloads use the API's camelCase keys, e.g.::

    api = ParkingControlAPI(base_url="http://localhost:8080")
    spot, error = api.create_parking_spot({
        "parkingSpotNumber": "A1",
        "licensePlateCar": "ABC123",
        ...
    })
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ParkingControlAPI:
    """Client for the parking spot registration API."""

    RESOURCE = "/parking-spot"

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        if response.content:
            return response.json(), None
        return None, None

    # ------------------------------------------------------------------
    # Parking spot operations
    # ------------------------------------------------------------------
    def create_parking_spot(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a new parking spot.

        A ``409`` error means the plate, the spot number or the
        apartment/block pair is already registered.
        """
        return self._request("POST", self.RESOURCE, json_body=payload)

    def list_parking_spots(
        self,
        page: int = 0,
        size: int = 10,
        sort: Union[str, Iterable[str], None] = None,
    ) -> Tuple[Dict[str, Any], Optional[Error]]:
        """Retrieve one page of parking spots.

        Args:
            page: Zero-based page index.
            size: Page size.
            sort: One or more ``"property[,asc|desc]"`` values.
        Returns:
            A tuple ``(page, error)``; ``page`` is empty on failure.
        """
        params: Dict[str, Any] = {"page": page, "size": size}
        if sort:
            params["sort"] = [sort] if isinstance(sort, str) else list(sort)
        data, error = self._request("GET", self.RESOURCE, params=params)
        if error:
            return {}, error
        return data or {}, None

    def get_parking_spot(self, spot_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"{self.RESOURCE}/{spot_id}")

    def update_parking_spot(
        self, spot_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace all mutable fields of a parking spot."""
        return self._request("PUT", f"{self.RESOURCE}/{spot_id}", json_body=payload)

    def delete_parking_spot(self, spot_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a parking spot.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"{self.RESOURCE}/{spot_id}")
        if error:
            return False, error
        return True, None


def _error_message(response: Any) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if detail is not None:
            return detail if isinstance(detail, str) else str(detail)
    return str(body)
