"""
HTTP persisters for SortableList - talk to the admin API with a bearer token.
"""
from __future__ import annotations

import json
from typing import Any, Optional

import requests

from portfolio.app.core.logging_config import get_logger

logger = get_logger("sortable.persisters")

DEFAULT_TIMEOUT = 30


def parse_tags(item: dict[str, Any]) -> dict[str, Any]:
    """
    Admin list rows carry `tags` as stored JSON text; the upsert endpoints want a list.
    Use as transform_before_save for projects and sites.
    """
    record = dict(item)
    raw = record.get("tags")
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw) if raw.strip() else []
        except ValueError:
            parsed = [t.strip() for t in raw.split(",") if t.strip()]
        record["tags"] = parsed if isinstance(parsed, list) else []
    elif raw is None:
        record["tags"] = []
    return record


class _AdminHttp:
    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"


class HttpItemPersister(_AdminHttp):
    """POST one full row to an admin upsert endpoint, e.g. http://host/api/admin/projects."""

    def __call__(self, record: dict[str, Any]) -> Any:
        response = self.session.post(self.url, json=record, headers=self.headers, timeout=self.timeout)
        if response.status_code >= 400:
            logger.warning(
                "Sort persist failed url=%s id=%s status=%s",
                self.url,
                record.get("id"),
                response.status_code,
            )
        response.raise_for_status()
        return response.json()


class HttpBatchPersister(_AdminHttp):
    """PUT the full order to /api/admin/order/{entity} in one request."""

    def __call__(self, order: list[dict[str, Any]]) -> Any:
        response = self.session.put(
            self.url, json={"items": order}, headers=self.headers, timeout=self.timeout
        )
        if response.status_code >= 400:
            logger.warning(
                "Sort batch persist failed url=%s items=%d status=%s",
                self.url,
                len(order),
                response.status_code,
            )
        response.raise_for_status()
        return response.json()
