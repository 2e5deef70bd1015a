"""Cluster URL reachability probe over httpx.

One GET per call. Any HTTP response, whatever its status code, counts as
reachable; every transport-level failure counts as unreachable. A URL
without a scheme is fetched over plain ``http://``, as curl does.
"""

from __future__ import annotations

import logging

import httpx

from kbcheck.config.models import HttpConfig

logger = logging.getLogger(__name__)


class HttpProbe:
    """GET-based reachability check.

    Defaults mirror ``curl --insecure``: certificate validation off, no
    timeout, redirects not followed. *transport* exists so tests can plug in
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: HttpConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or HttpConfig()
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            verify=self._config.verify,
            timeout=httpx.Timeout(self._config.timeout_seconds),
            follow_redirects=False,
            transport=self._transport,
        )

    def reachable(self, url: str) -> bool:
        target = url if "://" in url else f"http://{url}"
        # getaddrinfo raises UnicodeError for hosts with empty or oversized labels.
        try:
            with self._client() as client:
                response = client.get(target)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            logger.debug("GET %s failed: %s", url, exc)
            return False
        logger.debug("GET %s -> %d", url, response.status_code)
        return True
