"""In-memory vault, used for dry runs and tests."""

from memosync.vault.base import BaseVault


class InMemoryVault(BaseVault):
    """
    Dict-backed vault.

    Writes require the parent directory to exist, like a real filesystem, so
    callers that forget to create directories fail here too.
    """

    def __init__(self):
        self.files: dict[str, str | bytes] = {}
        self.dirs: set[str] = {""}

    @staticmethod
    def _norm(path: str) -> str:
        return "/".join(part for part in path.split("/") if part and part != ".")

    def _parent(self, path: str) -> str:
        return self._norm(path).rpartition("/")[0]

    def _check_parent(self, path: str) -> None:
        parent = self._parent(path)
        if parent not in self.dirs:
            raise FileNotFoundError(f"Parent directory does not exist: {parent}")

    def exists(self, path: str) -> bool:
        key = self._norm(path)
        return key in self.files or key in self.dirs

    def mkdir(self, path: str) -> None:
        parts = self._norm(path).split("/")
        for i in range(1, len(parts) + 1):
            self.dirs.add("/".join(parts[:i]))

    def read(self, path: str) -> str:
        key = self._norm(path)
        if key not in self.files:
            raise FileNotFoundError(f"No such file in vault: {path}")
        content = self.files[key]
        return content.decode("utf-8") if isinstance(content, bytes) else content

    def create(self, path: str, content: str) -> None:
        key = self._norm(path)
        if key in self.files or key in self.dirs:
            raise FileExistsError(f"File already exists in vault: {path}")
        self._check_parent(key)
        self.files[key] = content

    def modify(self, path: str, content: str) -> None:
        key = self._norm(path)
        if key not in self.files:
            raise FileNotFoundError(f"No such file in vault: {path}")
        self.files[key] = content

    def write_binary(self, path: str, data: bytes) -> None:
        key = self._norm(path)
        self._check_parent(key)
        self.files[key] = bytes(data)
