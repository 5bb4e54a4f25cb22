"""JSON-file-per-key store."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .gateway import StorageKey

log = logging.getLogger(__name__)


class FileStore:
    """Keeps each blob in ``<root>/<key>.json``; writes go through a temp file and replace."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path_for(self, key: StorageKey) -> Path:
        return self.root / f"{key.value}.json"

    def load(self, key: StorageKey) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            log.error(f"[STORE] Failed to read {path}: {e}")
            return None

    def save(self, key: StorageKey, data: bytes) -> bool:
        path = self._path_for(key)
        tmp_name = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key.value}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError as e:
            log.error(f"[STORE] Failed to write {path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            return False
        log.debug(f"[STORE] Saved {path.name} ({len(data)} bytes)")
        return True

    def delete(self, key: StorageKey) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            log.error(f"[STORE] Failed to delete {path}: {e}")
            return False
        return True
