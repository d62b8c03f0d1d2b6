# loadgen/core/transport.py

import base64
import logging
import time
from typing import Dict, Optional, Tuple

import requests

from loadgen.core.config import Settings

logger = logging.getLogger(__name__)


def basic_auth(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class IngestClient:
    """
    One HTTP session per virtual user. Every request is a single POST;
    failures are logged and reported as status 0, never retried.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.timeout = settings.timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "User-Agent": settings.USER_AGENT,
        })

    def post(self, url: str, body: bytes, headers: Optional[Dict[str, str]] = None) -> Tuple[int, float]:
        """Returns (status_code, latency in seconds)."""
        start = time.perf_counter()
        try:
            response = self.session.post(url, data=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            latency = time.perf_counter() - start
            logger.warning(f"⚠️ POST {url} failed after {latency:.2f}s: {e}")
            return 0, latency

        latency = time.perf_counter() - start
        if not 200 <= response.status_code < 300:
            logger.debug(f"Server returned {response.status_code}: {response.text[:200]}")
        return response.status_code, latency

    def close(self):
        self.session.close()
