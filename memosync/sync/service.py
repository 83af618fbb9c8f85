"""Sync service: one-way mirror of a Memos server into the vault."""

from dataclasses import dataclass, field
from typing import Callable, Literal

import httpx
from loguru import logger

from memosync.config.schema import SyncConfig
from memosync.errors import ConfigurationError, LocalWriteError, MemoSyncError
from memosync.memos.client import MemosClient
from memosync.memos.types import MemoItem
from memosync.sync.paths import join_vault_path, memo_file_name, month_directory, year_directory
from memosync.sync.render import render_memo, split_resources
from memosync.sync.resources import ResourceDownloader
from memosync.utils.helpers import now_ms
from memosync.vault.base import BaseVault

SyncState = Literal["idle", "validating", "fetching", "processing", "done", "failed", "skipped"]


@dataclass
class SyncResult:
    """Outcome of a single sync run."""

    state: SyncState
    fetched: int = 0
    synced: int = 0
    error: str | None = None
    paths: list[str] = field(default_factory=list)
    resources_downloaded: int = 0
    resources_reused: int = 0
    started_at_ms: int = 0
    finished_at_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.state == "done"


class MemosSyncService:
    """
    Pull memos and write them into the vault as markdown documents.

    Runs are strictly sequential: memos, and attachments within a memo, are
    processed one after another. A run requested while another is active is
    skipped rather than started.
    """

    def __init__(
        self,
        config: SyncConfig,
        vault: BaseVault,
        notify: Callable[[str, bool], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.vault = vault
        self.notify = notify  # Host callback: (message, is_error)
        self.transport = transport
        self.state: SyncState = "idle"
        self.last_result: SyncResult | None = None

    @property
    def is_running(self) -> bool:
        return self.state in ("validating", "fetching", "processing")

    async def sync(self) -> SyncResult:
        """Run one full sync pass and report the outcome to the host."""
        if self.is_running:
            logger.warning("Sync already in progress, skipping this run")
            return SyncResult(state="skipped", started_at_ms=now_ms(), finished_at_ms=now_ms())

        result = SyncResult(state="validating", started_at_ms=now_ms())
        self.state = "validating"
        try:
            self._validate()
            self._display("Sync started")
            self._ensure_dir(self.config.sync_directory)

            self.state = "fetching"
            async with httpx.AsyncClient(transport=self.transport) as client:
                memos = await MemosClient(self.config, client).fetch_all_memos()
                result.fetched = len(memos)
                self._display(f"Found {len(memos)} memos")

                self.state = "processing"
                downloader = ResourceDownloader(self.config, self.vault, client)
                try:
                    for memo in memos:
                        result.paths.append(await self.save_memo(memo, downloader))
                        result.synced += 1
                finally:
                    result.resources_downloaded = downloader.downloaded
                    result.resources_reused = downloader.reused

            result.state = "done"
            self._display(f"Successfully synced {result.synced} memos")
        except MemoSyncError as e:
            logger.error(f"Sync failed: {e}")
            result.state = "failed"
            result.error = str(e)
            self._display(f"Sync failed: {e}", is_error=True)
        finally:
            # Unexpected exceptions propagate but still end the run
            if result.state not in ("done", "failed"):
                result.state = "failed"
            result.finished_at_ms = now_ms()
            self.state = result.state
            self.last_result = result

        return result

    async def save_memo(self, memo: MemoItem, downloader: ResourceDownloader) -> str:
        """
        Render one memo and create or overwrite its document.

        Returns:
            Vault path of the written document.

        Raises:
            LocalWriteError: If a directory or the document cannot be written.
        """
        root = self.config.sync_directory
        created = memo.create_time
        month_dir = month_directory(root, created)
        file_path = join_vault_path(month_dir, memo_file_name(memo))

        self._ensure_dir(year_directory(root, created))
        self._ensure_dir(month_dir)

        # Images first, then other attachments, the same order they are rendered in
        images, others = split_resources(memo.resources)
        local_paths: dict[str, str | None] = {}
        for resource in images + others:
            local_paths[resource.name] = await downloader.download(resource, month_dir)

        document = render_memo(memo, file_path, local_paths)

        try:
            if self.vault.exists(file_path):
                self.vault.modify(file_path, document)
            else:
                self.vault.create(file_path, document)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save memo to file: {file_path}: {e}")
            raise LocalWriteError(file_path, str(e)) from e

        logger.info(f"Saved memo to: {file_path}")
        return file_path

    def _validate(self) -> None:
        if not self.config.memos_api_url:
            raise ConfigurationError("Memos API URL is not configured")
        if not self.config.memos_access_token:
            raise ConfigurationError("Memos Access Token is not configured")

    def _ensure_dir(self, path: str) -> None:
        try:
            self.vault.ensure_dir(path)
        except (OSError, ValueError) as e:
            raise LocalWriteError(path, str(e)) from e

    def _display(self, message: str, is_error: bool = False) -> None:
        if not is_error:
            logger.info(message)
        if self.notify:
            self.notify(message, is_error)
