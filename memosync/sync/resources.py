"""Download memo attachments into the vault."""

from urllib.parse import quote

import httpx
from loguru import logger

from memosync.config.schema import SyncConfig
from memosync.errors import ResourceDownloadError
from memosync.memos.types import MemoResource
from memosync.sync.paths import resource_directory, resource_file_name
from memosync.vault.base import BaseVault

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"


def resource_url(config: SyncConfig, resource: MemoResource) -> str:
    """Public file URL of an attachment on the Memos server."""
    filename = quote(resource.filename, safe=_URI_COMPONENT_SAFE)
    return f"{config.server_url}/file/resources/{resource.short_id}/{filename}"


class ResourceDownloader:
    """
    Materialize attachments below ``{month_dir}/resources``.

    Files are keyed by resource id and name; once present they are never
    fetched again. Failures are logged and reported as ``None``.
    """

    def __init__(self, config: SyncConfig, vault: BaseVault, client: httpx.AsyncClient):
        self.config = config
        self.vault = vault
        self.client = client
        self.downloaded = 0
        self.reused = 0

    async def download(self, resource: MemoResource, target_dir: str) -> str | None:
        """
        Return the vault path of the attachment, downloading it if needed.

        Args:
            resource: Attachment reference from the memo.
            target_dir: Month directory of the owning document.

        Returns:
            Vault path of the local file, or None if the download failed.
        """
        try:
            return await self._materialize(resource, target_dir)
        except ResourceDownloadError as e:
            logger.error(f"Error downloading resource {resource.filename}: {e}")
            return None

    async def _materialize(self, resource: MemoResource, target_dir: str) -> str:
        resource_dir = resource_directory(target_dir)
        local_path = f"{resource_dir}/{resource_file_name(resource)}"

        try:
            self.vault.ensure_dir(resource_dir)
            if self.vault.exists(local_path):
                logger.debug(f"Resource already exists: {local_path}")
                self.reused += 1
                return local_path
        except OSError as e:
            raise ResourceDownloadError(f"cannot prepare {resource_dir}: {e}") from e

        url = resource_url(self.config, resource)
        logger.debug(f"Downloading resource: {url}")

        try:
            response = await self.client.get(
                url,
                headers={"Authorization": f"Bearer {self.config.memos_access_token}"},
            )
        except httpx.HTTPError as e:
            raise ResourceDownloadError(f"request failed: {e}") from e

        if not response.is_success:
            raise ResourceDownloadError(f"HTTP {response.status_code} {response.reason_phrase}")

        try:
            self.vault.write_binary(local_path, response.content)
        except OSError as e:
            raise ResourceDownloadError(f"cannot write {local_path}: {e}") from e

        self.downloaded += 1
        logger.info(f"Resource downloaded to: {local_path}")
        return local_path
