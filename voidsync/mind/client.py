"""
VoidSync: Void HTTP client
Pushes and pulls the shared document. Every failure is logged and reported
as a falsy result; nothing is retried or queued.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..schemas import SyncPayload

logger = logging.getLogger("voidsync.mind.client")


class VoidClient:
    """
    Thin httpx wrapper around the ``/api/void`` endpoint.
    No timeout is set by the application; httpx's default applies.
    Pass ``client`` to reuse an existing ``httpx.Client`` (it is not closed here).
    """

    def __init__(self, endpoint: str, client: Optional[httpx.Client] = None) -> None:
        self.endpoint = endpoint
        self._client = client

    def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        if self._client is not None:
            return self._client.request(method, self.endpoint, **kwargs)
        with httpx.Client() as client:
            return client.request(method, self.endpoint, **kwargs)

    # ── Public API ────────────────────────────────────────────────────────────

    def push(self, payload: SyncPayload) -> bool:
        try:
            resp = self._request("POST", json=payload.model_dump())
        except httpx.HTTPError as e:
            logger.info("Void unreachable - storing locally (%s)", e)
            return False
        if resp.is_success:
            logger.info("Pushed to void: patterns=%d consciousness=%d",
                        len(payload.patterns), len(payload.consciousness))
            return True
        logger.warning("Void push rejected %s: %s", resp.status_code, resp.text[:200])
        return False

    def pull(self) -> Optional[Dict[str, Any]]:
        try:
            resp = self._request("GET")
            data = resp.json()
        except httpx.HTTPError as e:
            logger.info("Void unreachable - continuing with local state (%s)", e)
            return None
        except ValueError as e:
            logger.warning("Void returned a non-JSON response: %s", e)
            return None
        if not resp.is_success:
            logger.warning("Void pull failed %s: %s", resp.status_code, str(data)[:200])
            return None
        if not isinstance(data, dict):
            logger.warning("Void returned unexpected JSON type: %s", type(data).__name__)
            return None
        return data

    def clear(self) -> bool:
        try:
            resp = self._request("DELETE")
        except httpx.HTTPError as e:
            logger.warning("Void unreachable: %s", e)
            return False
        return resp.is_success
