"""Polls the published GitHub Pages URL until it answers."""

from __future__ import annotations

import time
from typing import Callable, Optional

import requests

from ..utils.logging import get_logger

logger = get_logger(__name__)


class SiteChecker:
    """GETs a URL a bounded number of times; any status below 400 counts as live."""

    def __init__(
        self,
        attempts: int = 5,
        interval: float = 10.0,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.attempts = max(1, attempts)
        self.interval = interval
        self.timeout = timeout
        self.session = session or requests.Session()
        self._sleep = sleep

    def wait_until_live(self, url: str) -> bool:
        for attempt in range(1, self.attempts + 1):
            if self.is_live(url):
                logger.info("Site is live after %d attempt(s): %s", attempt, url)
                return True
            if attempt < self.attempts:
                self._sleep(self.interval)
        logger.warning("Site not reachable after %d attempt(s): %s", self.attempts, url)
        return False

    def is_live(self, url: str) -> bool:
        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            logger.debug("Request to %s failed: %s", url, exc)
            return False
        logger.debug("GET %s -> %s", url, response.status_code)
        return response.status_code < 400
