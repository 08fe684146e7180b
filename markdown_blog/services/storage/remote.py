"""
Read-only storage backed by a static content host.

Published divisions are served from raw file hosting behind a CDN
(``{base_url}/{root}/{name}``). The HTTP client is injected so its
lifetime, connection pool and per-division settings stay with the caller.
"""

from logging import getLogger

from httpx import AsyncClient, HTTPStatusError, Response, TransportError

from markdown_blog.configs import ContentDeliveryConfig, file_logger
from markdown_blog.decorators import RetriableStatusError, with_retry
from markdown_blog.errors import IndexStorageError

logger = file_logger(getLogger(__name__))

NOT_FOUND_STATUSES = frozenset({404, 410})


class RemoteStorage:
    """HTTP backend supporting reads only."""

    writable = False

    def __init__(
        self,
        client: AsyncClient,
        config: ContentDeliveryConfig | None = None,
        base_url: str | None = None,
    ) -> None:
        self.client = client
        self.config = config or ContentDeliveryConfig()
        self.base_url = (base_url or self.config.base_url).rstrip("/")

    def build_url(self, root: str, name: str) -> str:
        parts = [self.base_url, root.strip("/"), name.lstrip("/")]
        return "/".join(part for part in parts if part)

    async def _get(self, url: str) -> Response:
        response = await self.client.get(url, timeout=self.config.timeout)
        if response.status_code == 429 or response.status_code >= 500:
            raise RetriableStatusError(response.status_code, url)
        return response

    async def _fetch(self, url: str) -> Response | None:
        try:
            response = await with_retry(max_retries=self.config.max_retries)(self._get)(url)
        except (RetriableStatusError, TransportError) as e:
            mssg = f"Remote read failed for {url}: {e}"
            raise IndexStorageError(mssg, path=url) from e

        if response.status_code in NOT_FOUND_STATUSES:
            return None
        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            mssg = f"Remote read failed for {url}: HTTP {response.status_code}"
            raise IndexStorageError(mssg, path=url) from e
        return response

    async def read_bytes(self, root: str, name: str) -> bytes | None:
        url = self.build_url(root, name)
        response = await self._fetch(url)
        if response is None:
            logger.debug("Remote artifact absent: %s", url)
            return None
        return response.content

    async def exists(self, root: str, name: str) -> bool:
        return await self.read_bytes(root, name) is not None

    async def write_bytes(self, root: str, name: str, data: bytes) -> None:
        mssg = "Remote storage is read-only"
        raise IndexStorageError(mssg, path=self.build_url(root, name))

    async def delete(self, root: str, name: str) -> bool:
        mssg = "Remote storage is read-only"
        raise IndexStorageError(mssg, path=self.build_url(root, name))

    async def list_names(self, root: str, directory: str = "") -> list[str]:
        mssg = "Remote storage cannot list artifacts"
        raise IndexStorageError(mssg, path=self.build_url(root, directory))
