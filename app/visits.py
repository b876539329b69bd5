"""Append-only visit log: one JSON object per HTTP request.

Each line carries time, ip, userAgent, acceptLanguage and url. Writes are
best-effort; a failed append never affects the request."""

import os
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from fastapi import Request

load_dotenv()

logger = logging.getLogger(__name__)

VISIT_LOG_FILE: str = os.getenv("VISIT_LOG_FILE", "visits.log")


def _iso_now() -> str:
    """UTC timestamp like 2026-01-31T09:15:02.123Z."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return ""


class VisitLogger:
    """Appends visit records to a newline-delimited JSON file."""

    def __init__(self, path: Union[str, Path] = VISIT_LOG_FILE) -> None:
        self.path = Path(path)

    def build_entry(self, request: Request) -> dict:
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        return {
            "time": _iso_now(),
            "ip": client_ip(request),
            "userAgent": request.headers.get("user-agent", ""),
            "acceptLanguage": request.headers.get("accept-language", ""),
            "url": url,
        }

    def record(self, request: Request) -> Optional[dict]:
        """Append one entry for ``request``. Returns the entry, or None if the write failed."""
        entry = self.build_entry(request)
        try:
            with open(self.path, "a", encoding="utf-8") as fh:
                fh.write(json.dumps(entry, ensure_ascii=False, separators=(",", ":")) + "\n")
        except OSError as exc:
            logger.debug(f"Visit log append failed: {exc}")
            return None
        return entry


# Module-level singleton
visit_logger = VisitLogger()
