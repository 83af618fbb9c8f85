"""
Vault storage for the local mirror tree.

The sync pipeline only talks to BaseVault, so it runs the same against the
local disk or an in-memory dict.
"""

from memosync.vault.base import BaseVault
from memosync.vault.file_store import FileVault
from memosync.vault.memory_store import InMemoryVault

__all__ = ["BaseVault", "FileVault", "InMemoryVault", "create_vault"]


def create_vault(path, dry_run: bool = False) -> BaseVault:
    """
    Factory: create the vault the CLI writes into.

    Args:
        path: Root directory of the vault on disk.
        dry_run: Keep every write in memory instead of touching the disk.

    Returns:
        A BaseVault instance.
    """
    if dry_run:
        return InMemoryVault()
    return FileVault(path)
