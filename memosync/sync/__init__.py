"""The sync pipeline: path derivation, rendering, downloads and orchestration."""

from memosync.sync.render import extract_tags, normalize_tags, render_memo
from memosync.sync.resources import ResourceDownloader
from memosync.sync.scheduler import AutoSyncScheduler
from memosync.sync.service import MemosSyncService, SyncResult

__all__ = [
    "AutoSyncScheduler",
    "MemosSyncService",
    "ResourceDownloader",
    "SyncResult",
    "extract_tags",
    "normalize_tags",
    "render_memo",
]
