"""Paginating client for the Memos list API."""

import json
from datetime import datetime, timezone

import httpx
from loguru import logger
from pydantic import ValidationError

from memosync.config.schema import API_VERSION_SEGMENT, SyncConfig
from memosync.errors import ConfigurationError, FormatError, HostUnreachableError, TransportError
from memosync.memos.types import MemoItem, MemosPage

PAGE_SIZE = 100


def _sort_key(dt: datetime) -> datetime:
    """Timestamps without an offset sort as UTC."""
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class MemosClient:
    """
    Fetch memos page by page from a Memos server.

    The client never retries: a single failed request aborts the whole fetch.
    """

    def __init__(self, config: SyncConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.memos_access_token}",
            "Accept": "application/json",
        }

    async def fetch_all_memos(self) -> list[MemoItem]:
        """
        Fetch up to ``sync_limit`` memos, newest first.

        Returns:
            Memos sorted descending by creation time.

        Raises:
            ConfigurationError: If the API URL lacks the version segment.
            TransportError: On a non-2xx response or unreachable host.
            FormatError: On an unparseable or structurally invalid body.
        """
        if API_VERSION_SEGMENT not in self.config.memos_api_url:
            raise ConfigurationError(
                f"Invalid API URL format, make sure it contains {API_VERSION_SEGMENT}"
            )

        logger.info(f"Fetching memos from {self.config.memos_api_url}")
        logger.debug(f"Access token: {'set' if self.config.memos_access_token else 'not set'}")

        limit = self.config.sync_limit
        all_memos: list[MemoItem] = []
        page_token: str | None = None

        while len(all_memos) < limit:
            page = await self.fetch_page(page_token)
            all_memos.extend(page.memos)
            logger.info(f"Fetched {len(page.memos)} memos, total: {len(all_memos)}")

            if not page.next_page_token or len(all_memos) >= limit:
                break
            page_token = page.next_page_token

        result = all_memos[:limit]
        logger.info(f"Returning {len(result)} memos")
        return sorted(result, key=lambda memo: _sort_key(memo.create_time), reverse=True)

    async def fetch_page(self, page_token: str | None = None) -> MemosPage:
        """Fetch a single page starting at ``page_token``."""
        params = {"rowStatus": "NORMAL", "limit": str(PAGE_SIZE)}
        if page_token:
            params["offset"] = page_token

        url = f"{self.config.memos_api_url}/memos"
        try:
            response = await self.client.get(url, params=params, headers=self.headers)
        except httpx.TransportError as e:
            logger.error(f"Failed to reach {self.config.memos_api_url}: {e}")
            raise HostUnreachableError(self.config.memos_api_url, str(e)) from e

        logger.debug(f"GET {response.request.url} -> {response.status_code}")
        body = response.text

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}\nResponse body: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise FormatError(f"Failed to parse JSON: {e}", body) from e

        if not isinstance(data, dict) or not isinstance(data.get("memos"), list):
            raise FormatError("Invalid response format: memos array not found", body)

        try:
            return MemosPage.model_validate(data)
        except ValidationError as e:
            raise FormatError(f"Invalid memo record: {e}", body) from e
