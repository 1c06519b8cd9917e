"""
Local Filesystem Document Store.
Each document is one JSON file: ``<base_dir>/<collection>/<id>.json``.
"""

import asyncio
import json
import logging
import os
import re
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

import aiofiles
import aiofiles.os

from .interface import (
    Document,
    DocumentStore,
    DuplicateKeyError,
    Filters,
    InvalidDocumentId,
    StorageUnavailable,
    comparable,
    matches,
)

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,127}$")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _DocumentLock:
    """A document's write lock and the number of coroutines holding or awaiting it."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self.users = 0


class LocalStorage(DocumentStore):
    """
    Filesystem-backed document store.

    Writes go through a temp file and ``os.replace`` so readers never see a
    half-written document. Writers to the same document are serialized by
    a per-document ``asyncio.Lock`` within this process.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Args:
            base_dir: Directory holding one sub-directory per collection
        """
        self.base_dir = Path(base_dir).resolve()
        self._connected = False
        self._locks: Dict[str, _DocumentLock] = {}

    async def connect(self) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Cannot create storage directory {self.base_dir}: {e}") from e
        if not os.access(self.base_dir, os.W_OK):
            raise StorageUnavailable(f"Storage directory {self.base_dir} is not writable")
        self._connected = True
        logger.info(f"Document store connected: {self.base_dir}")

    async def disconnect(self) -> None:
        if self._connected:
            self._connected = False
            logger.info("Document store disconnected")

    def is_ready(self) -> bool:
        return self._connected and self.base_dir.is_dir()

    def _ensure_ready(self) -> None:
        if not self._connected:
            raise StorageUnavailable("Document store is not connected")

    def _collection_dir(self, collection: str) -> Path:
        if not _ID_PATTERN.match(collection):
            raise InvalidDocumentId(f"Invalid collection name: {collection!r}")
        return self.base_dir / collection

    def _get_full_path(self, collection: str, doc_id: str) -> Path:
        """Resolve a document path, refusing anything outside ``base_dir``."""
        if not isinstance(doc_id, str) or not _ID_PATTERN.match(doc_id) or ".." in doc_id:
            raise InvalidDocumentId(f"Invalid document id: {doc_id!r}")
        full_path = (self._collection_dir(collection) / f"{doc_id}.json").resolve()
        if self.base_dir not in full_path.parents:
            raise InvalidDocumentId(f"Invalid document id: {doc_id!r}")
        return full_path

    @asynccontextmanager
    async def _lock_for(self, collection: str, doc_id: str) -> AsyncIterator[None]:
        """
        Hold the write lock of one document.

        A map entry exists only while some coroutine holds or awaits it.
        """
        key = f"{collection}/{doc_id}"
        entry = self._locks.get(key)
        if entry is None:
            entry = self._locks[key] = _DocumentLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]

    async def _read(self, path: Path) -> Optional[Document]:
        if not path.exists():
            return None
        async with aiofiles.open(path, 'r', encoding='utf-8') as f:
            content = await f.read()
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            logger.warning(f"Skipping unreadable document {path}")
            return None

    async def _write(self, path: Path, document: Document) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
            await f.write(json.dumps(document, ensure_ascii=False, indent=2, default=str))
        await aiofiles.os.replace(tmp_path, path)

    async def insert(self, collection: str, document: Document,
                     doc_id: Optional[str] = None) -> Document:
        self._ensure_ready()
        doc_id = doc_id or uuid.uuid4().hex
        path = self._get_full_path(collection, doc_id)

        async with self._lock_for(collection, doc_id):
            if path.exists():
                raise DuplicateKeyError(collection, "id", doc_id)
            now = utc_now_iso()
            stored = {
                **document,
                "id": doc_id,
                "createdAt": document.get("createdAt") or now,
                "updatedAt": now,
                "revision": 1,
            }
            await self._write(path, stored)
        return stored

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        self._ensure_ready()
        return await self._read(self._get_full_path(collection, doc_id))

    async def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        sort_by: Optional[str] = "createdAt",
        descending: bool = True,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Document]:
        self._ensure_ready()
        directory = self._collection_dir(collection)
        if not directory.is_dir():
            return []

        results = []
        for path in directory.glob("*.json"):
            document = await self._read(path)
            if document is not None and matches(document, filters):
                results.append(document)

        if sort_by:
            present = [d for d in results if d.get(sort_by) is not None]
            missing = [d for d in results if d.get(sort_by) is None]
            present.sort(key=lambda d: comparable(d[sort_by]), reverse=descending)
            results = present + missing

        results = results[skip:]
        if limit is not None:
            results = results[:limit]
        return results

    async def update(self, collection: str, doc_id: str,
                     changes: Document) -> Optional[Document]:
        self._ensure_ready()
        path = self._get_full_path(collection, doc_id)
        async with self._lock_for(collection, doc_id):
            document = await self._read(path)
            if document is None:
                return None
            protected = {"id", "createdAt", "revision"}
            document.update({k: v for k, v in changes.items() if k not in protected})
            document["updatedAt"] = utc_now_iso()
            document["revision"] = document.get("revision", 0) + 1
            await self._write(path, document)
        return document

    async def delete(self, collection: str, doc_id: str) -> bool:
        self._ensure_ready()
        path = self._get_full_path(collection, doc_id)
        async with self._lock_for(collection, doc_id):
            if not path.exists():
                return False
            await aiofiles.os.remove(path)
        return True

    async def push(
        self,
        collection: str,
        doc_id: str,
        field: str,
        items: List[Any],
        defaults: Optional[Document] = None,
    ) -> Document:
        self._ensure_ready()
        path = self._get_full_path(collection, doc_id)
        async with self._lock_for(collection, doc_id):
            document = await self._read(path)
            now = utc_now_iso()
            if document is None:
                if defaults is None:
                    raise KeyError(f"{collection}/{doc_id}")
                document = {**defaults, "id": doc_id, "createdAt": now, "revision": 0}
            document[field] = list(document.get(field) or []) + list(items)
            document["updatedAt"] = now
            document["revision"] = document.get("revision", 0) + 1
            await self._write(path, document)
        return document
