"""
Batch stores.

The captured batch lives in a small key/value store.  All access is
asynchronous and may fail; backends report failures as `StoreError`.
Listeners registered with `subscribe` are called with the set of keys
changed by every successful `set` or `remove`.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Set

import aiofiles

from ..errors import StoreError

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Set[str]], None]


class BatchStore(ABC):
    """Abstract async key/value store with change notification."""

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []

    @abstractmethod
    async def get(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Return the stored values for ``keys``; absent keys are omitted."""
        raise NotImplementedError

    @abstractmethod
    async def _write(self, values: Mapping[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    async def _delete(self, keys: Set[str]) -> None:
        raise NotImplementedError

    async def set(self, values: Mapping[str, Any]) -> None:
        await self._write(values)
        self._notify(set(values))

    async def remove(self, keys: Iterable[str]) -> None:
        keys = set(keys)
        await self._delete(keys)
        self._notify(keys)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` and return a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, keys: Set[str]) -> None:
        for listener in list(self._listeners):
            listener(keys)


class MemoryStore(BatchStore):
    """Process‑local store, used by tests and one‑shot pipelines."""

    def __init__(self) -> None:
        super().__init__()
        self._data: Dict[str, Any] = {}

    async def get(self, keys: Iterable[str]) -> Dict[str, Any]:
        return {k: self._data[k] for k in keys if k in self._data}

    async def _write(self, values: Mapping[str, Any]) -> None:
        self._data.update(values)

    async def _delete(self, keys: Set[str]) -> None:
        for key in keys:
            self._data.pop(key, None)


class JsonFileStore(BatchStore):
    """Store persisted as a single JSON document on disk.

    Writes go to a temporary sibling file that replaces the document
    once complete, so a reader never sees a half written batch.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)

    async def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as exc:
            raise StoreError(f"cannot read {self.path}: {exc}") from exc
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StoreError(f"corrupt store file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(f"corrupt store file {self.path}: expected an object")
        return data

    async def _save(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, ensure_ascii=False, indent=2))
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("Saved store to %s", self.path)

    async def get(self, keys: Iterable[str]) -> Dict[str, Any]:
        data = await self._load()
        return {k: data[k] for k in keys if k in data}

    async def _write(self, values: Mapping[str, Any]) -> None:
        data = await self._load()
        data.update(values)
        await self._save(data)

    async def _delete(self, keys: Set[str]) -> None:
        data = await self._load()
        if not self.path.exists():
            return
        for key in keys:
            data.pop(key, None)
        await self._save(data)
