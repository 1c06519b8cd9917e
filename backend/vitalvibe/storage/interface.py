"""
Document Store Interface - Abstract base class for document persistence.

Documents are JSON-compatible dicts grouped in named collections and
addressed by a string id. Every write stamps ``updatedAt`` and bumps an
integer ``revision``.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]
Filters = Dict[str, Any]


class StorageError(Exception):
    """Base class for store failures."""


class StorageUnavailable(StorageError):
    """The store is not connected or its backing medium is unusable."""


class DuplicateKeyError(StorageError):
    """A document with the same unique key already exists."""

    def __init__(self, collection: str, key: str, value: Any):
        super().__init__(f"Duplicate {key} in {collection}: {value}")
        self.collection = collection
        self.key = key
        self.value = value


class InvalidDocumentId(StorageError):
    """The id cannot address a document (empty, traversal, bad characters)."""


def comparable(value: Any) -> Any:
    """
    Normalize a value for ordering.

    ISO date and datetime strings become aware UTC datetimes so stored
    strings compare correctly against ``datetime``/``date`` query values.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str) and len(value) >= 10 and value[4:5] == "-":
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return value
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return value


def _compare(op: str, actual: Any, expected: Any) -> bool:
    if op == "$in":
        return actual in expected
    if op == "$ne":
        return actual != expected
    if actual is None:
        return False
    left, right = comparable(actual), comparable(expected)
    try:
        if op == "$gte":
            return left >= right
        if op == "$lte":
            return left <= right
        if op == "$gt":
            return left > right
        if op == "$lt":
            return left < right
    except TypeError:
        return False
    raise ValueError(f"Unsupported filter operator: {op}")


def matches(document: Document, filters: Optional[Filters]) -> bool:
    """
    Check ``document`` against ``filters``.

    A filter value is either a literal (equality) or a dict of operators:
    ``$gte``, ``$lte``, ``$gt``, ``$lt``, ``$ne``, ``$in``.
    """
    if not filters:
        return True
    for key, expected in filters.items():
        actual = document.get(key)
        if isinstance(expected, dict):
            if not all(_compare(op, actual, value) for op, value in expected.items()):
                return False
        elif actual != expected:
            return False
    return True


class DocumentStore(ABC):
    """
    Abstract document store.
    The application creates one instance at startup and owns its lifecycle.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the store. Raises ``StorageUnavailable`` when it cannot be used."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store; further operations raise ``StorageUnavailable``."""

    @abstractmethod
    def is_ready(self) -> bool:
        """True while the store is connected and usable."""

    @abstractmethod
    async def insert(self, collection: str, document: Document,
                     doc_id: Optional[str] = None) -> Document:
        """
        Insert a new document.

        Args:
            collection: Collection name
            document: Field values (JSON-compatible)
            doc_id: Explicit id; generated when omitted

        Returns:
            The stored document including ``id``, timestamps and ``revision``

        Raises:
            DuplicateKeyError: if ``doc_id`` already exists
        """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or None."""

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        sort_by: Optional[str] = "createdAt",
        descending: bool = True,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Document]:
        """Return matching documents, sorted, paginated."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str,
                     changes: Document) -> Optional[Document]:
        """Shallow-merge ``changes`` into a document; None if it does not exist."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document; False if it did not exist."""

    @abstractmethod
    async def push(
        self,
        collection: str,
        doc_id: str,
        field: str,
        items: List[Any],
        defaults: Optional[Document] = None,
    ) -> Document:
        """
        Atomically append ``items`` to the array ``field`` of a document.

        When the document does not exist and ``defaults`` is given, it is
        created from ``defaults`` first; without ``defaults`` a missing
        document raises ``KeyError``.
        """

    async def find_one(self, collection: str, filters: Filters) -> Optional[Document]:
        results = await self.find(collection, filters, sort_by=None, limit=1)
        return results[0] if results else None

    async def count(self, collection: str, filters: Optional[Filters] = None) -> int:
        return len(await self.find(collection, filters, sort_by=None))

    async def update_many(self, collection: str, filters: Filters, changes: Document) -> int:
        updated = 0
        for document in await self.find(collection, filters, sort_by=None):
            if await self.update(collection, document["id"], changes) is not None:
                updated += 1
        return updated

    async def delete_many(self, collection: str, filters: Filters) -> int:
        deleted = 0
        for document in await self.find(collection, filters, sort_by=None):
            if await self.delete(collection, document["id"]):
                deleted += 1
        return deleted
