import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "https://ntfy.sh"


class NtfyNotifier:
    """Fire-and-forget publisher for an ntfy topic."""

    def __init__(
        self,
        *,
        topic: str,
        server: str = DEFAULT_SERVER,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = f"{server.rstrip('/')}/{topic}"
        self._timeout_seconds = timeout_seconds
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    def send(self, title: str, message: str) -> None:
        # ntfy reads UTF-8 header values; httpx would encode a str as ASCII
        headers = {"Title": title.encode("utf-8")}
        post = self._client.post if self._client is not None else httpx.post
        logger.debug("POST %s title=%r", self._url, title)
        try:
            # response is not inspected
            post(
                self._url,
                content=message.encode("utf-8"),
                headers=headers,
                timeout=self._timeout_seconds,
            )
        except httpx.HTTPError as exc:
            logger.warning("could not deliver notification to %s: %s", self._url, exc)
