"""File-based store — one file per key under a directory.

Values survive process restarts. Writes go through a temp file and
``os.replace`` so readers never see a partial value; ``take`` claims a key by
renaming its file, which only one process can win.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Callable
from urllib.parse import quote

from batch_collector.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)


class FileStore(KeyValueStore):
    """Stores each key at ``{directory}/{quoted key}.json``."""

    SUFFIX = ".json"

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{quote(key, safe='')}{self.SUFFIX}"

    def get(self, key: str) -> str | None:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        finally:
            tmp.unlink(missing_ok=True)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def take(self, key: str, accept: Callable[[str], bool]) -> str | None:
        path = self._path(key)
        raw = self.get(key)
        if raw is None or not accept(raw):
            return None

        claim = path.with_name(f".{path.name}.{uuid.uuid4().hex}.claim")
        try:
            os.rename(path, claim)
        except FileNotFoundError:
            # Another claimant won the rename.
            return None

        try:
            claimed = claim.read_text(encoding="utf-8")
            if accept(claimed):
                return claimed
            # Rewritten between the read and the rename: put it back unless a
            # newer value has been written since.
            try:
                os.link(claim, path)
            except FileExistsError:
                logger.debug("claimed value for %r superseded; dropping it", key)
            else:
                logger.debug("claimed value for %r no longer accepted; restored", key)
            return None
        finally:
            claim.unlink(missing_ok=True)
