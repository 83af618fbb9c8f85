"""Abstract base class for vault storage."""

from abc import ABC, abstractmethod


class BaseVault(ABC):
    """
    Hierarchical read/write file store addressed by ``/``-separated paths.

    Paths are always relative to the vault root (e.g. ``memos/2024/03/x.md``).
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at ``path``."""
        ...

    @abstractmethod
    def mkdir(self, path: str) -> None:
        """Create a directory, including missing parents."""
        ...

    @abstractmethod
    def read(self, path: str) -> str:
        """
        Read a text file.

        Raises:
            FileNotFoundError: If nothing exists at ``path``.
        """
        ...

    @abstractmethod
    def create(self, path: str, content: str) -> None:
        """
        Create a new text file.

        Raises:
            FileExistsError: If ``path`` already exists.
        """
        ...

    @abstractmethod
    def modify(self, path: str, content: str) -> None:
        """
        Replace the content of an existing text file.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
        """
        ...

    @abstractmethod
    def write_binary(self, path: str, data: bytes) -> None:
        """Write raw bytes, replacing any existing file."""
        ...

    def ensure_dir(self, path: str) -> None:
        """Create ``path`` unless it already exists."""
        if not self.exists(path):
            self.mkdir(path)
