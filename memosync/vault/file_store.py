"""Vault backed by a directory on the local disk."""

from pathlib import Path

from memosync.vault.base import BaseVault


class FileVault(BaseVault):
    """Store vault paths as real files below ``root``."""

    def __init__(self, root: Path | str):
        self.root = Path(root).expanduser().resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if target != self.root and self.root not in target.parents:
            raise ValueError(f"Path escapes the vault root: {path}")
        return target

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def mkdir(self, path: str) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def create(self, path: str, content: str) -> None:
        # "x" mode refuses to clobber an existing file
        with open(self._resolve(path), "x", encoding="utf-8") as f:
            f.write(content)

    def modify(self, path: str, content: str) -> None:
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"No such file in vault: {path}")
        target.write_text(content, encoding="utf-8")

    def write_binary(self, path: str, data: bytes) -> None:
        self._resolve(path).write_bytes(data)
