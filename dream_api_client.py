"""Dream API client.

This module defines a small client wrapper around the Dream REST API.
It uses the ``requests`` library internally to make HTTP calls and
exposes one method per server operation:

* :meth:`DreamAPI.list_dreams` – return all dreams.
* :meth:`DreamAPI.get_dream` – fetch a single dream by its identifier.
* :meth:`DreamAPI.create_dream` – create a dream and return its new id.
* :meth:`DreamAPI.update_dream` – update the fields of a dream.
* :meth:`DreamAPI.delete_dream` – delete a single dream.
* :meth:`DreamAPI.delete_all_dreams` – delete every dream.

Methods never raise on HTTP or network failures.  Each returns a tuple
``(result, error)`` where ``error`` is ``None`` on success or a
dictionary with ``status_code`` and ``message`` keys.  A 409 status
means the server gave up after repeated write conflicts; the caller
may simply try again.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class DreamAPI:
    """Client for interacting with the Dream API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.  The server may
                spend up to two seconds retrying a conflicting write, so
                keep this comfortably above that.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[requests.Response], Optional[Error]]:
        """Perform an HTTP request and return ``(response, error)``."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                message = self._error_message(exc.response)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract a readable message from an error response.

        FastAPI puts the message in ``detail``, which is a list of
        problems for validation errors.  Bodies that are not a JSON object
        fall back to the raw text.
        """
        try:
            body = response.json()
        except ValueError:
            return response.text
        if not isinstance(body, dict):
            return response.text
        detail = body.get("detail")
        if detail is None:
            return ""
        if isinstance(detail, str):
            return detail
        return json.dumps(detail)

    # ------------------------------------------------------------------
    # Dream operations
    # ------------------------------------------------------------------
    def list_dreams(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all dreams.  Returns ``([], error)`` on failure."""
        response, error = self._request("GET", "/dreams")
        if error:
            return [], error
        data = response.json()
        return (data if isinstance(data, list) else []), None

    def get_dream(self, dream_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single dream.  ``(None, None)`` means it does not exist."""
        response, error = self._request("GET", f"/dreams/{dream_id}")
        if error:
            return None, error
        return response.json(), None

    def create_dream(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        """Create a dream and return its id, taken from the ``Location`` header."""
        response, error = self._request("POST", "/dreams", json_body=payload)
        if error:
            return None, error
        location = response.headers.get("Location", "")
        dream_id = location.rstrip("/").rsplit("/", 1)[-1] or None
        return dream_id, None

    def update_dream(self, dream_id: str, payload: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        """Update a dream.  Only the keys present in ``payload`` are changed."""
        _, error = self._request("PUT", f"/dreams/{dream_id}", json_body=payload)
        return error is None, error

    def delete_dream(self, dream_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"/dreams/{dream_id}")
        return error is None, error

    def delete_all_dreams(self) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", "/dreams")
        return error is None, error
