"""Agree/Disagree API client.

This module defines a small client wrapper around the HTTP surface of a
single client store.  The store lives under ``/<client_name>`` on the
server and answers:

* :meth:`ping` – ``GET /<client_name>``, the liveness probe.
* :meth:`add_question` – ``POST /<client_name>/q?text=...``.
* :meth:`get_question` – ``GET /<client_name>/q?qid=...``.
* :meth:`add_user` – ``POST /<client_name>/u?uid=...``.
* :meth:`get_user` – ``GET /<client_name>/u?uid=...``.

Every operation returns a tuple ``(data, error)``.  On success ``data``
holds the unwrapped question or user dictionary and ``error`` is
``None``.  On failure ``data`` is ``None`` and ``error`` is a dictionary
with keys ``status_code`` and ``message``; the message is the plain‑text
body the store answered with (e.g. ``"DUPLICATE QUESTION"``).

The client uses the ``requests`` library internally.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

# Wrapper fields the store places around returned records.  Retrieving
# a question uses the default wrapper, every other reply a named one.
_RESPONSE_TAGS = ("question", "user", "value0")

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class AgreeDisagreeClient:
    """Client for one store of the Agree/Disagree API."""

    def __init__(
        self,
        *,
        base_url: str,
        client_name: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            client_name: Name of the store, i.e. its route prefix.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.client_name = client_name
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, suffix: str = "", *, params: Dict[str, Any] | None = None) -> Tuple[Optional[requests.Response], Optional[Dict[str, Any]]]:
        """Perform an HTTP request against the store.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            suffix: Path below the store prefix, ``""``, ``"/q"`` or ``"/u"``.
            params: Query parameters to include in the request.
        Returns:
            A tuple ``(response, error)``.
        """
        url = f"{self.base_url}/{self.client_name}{suffix}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = exc.response.text.strip() if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _unwrap(response: requests.Response) -> Any:
        data = response.json()
        if isinstance(data, dict) and len(data) == 1:
            tag = next(iter(data))
            if tag in _RESPONSE_TAGS:
                return data[tag]
        return data

    def _record(self, method: str, suffix: str, params: Dict[str, Any]) -> Result:
        response, error = self._request(method, suffix, params=params)
        if error:
            return None, error
        return self._unwrap(response), None

    # ------------------------------------------------------------------
    # Store operations
    # ------------------------------------------------------------------
    def ping(self) -> bool:
        """Return ``True`` if the store's routes are live."""
        response, error = self._request("GET")
        return error is None and response is not None

    def add_question(self, text: str) -> Result:
        """Add a question and return it with its newly assigned ``qid``."""
        return self._record("POST", "/q", {"text": text})

    def get_question(self, qid: int) -> Result:
        return self._record("GET", "/q", {"qid": qid})

    def add_user(self, uid: str) -> Result:
        """Create the user ``uid``.  Fails with 400 if it already exists."""
        return self._record("POST", "/u", {"uid": uid})

    def get_user(self, uid: str) -> Result:
        return self._record("GET", "/u", {"uid": uid})
