"""
Document store interface.

Defines the contract for the hosted document database the application runs
against: collections of JSON documents addressed by slash-separated paths
(``children/{child_id}/milestoneProgress/{milestone_id}``), queryable by
field, with live snapshot subscriptions, merge upserts and atomic batches.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Generic, Literal, Mapping, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

FilterOp = Literal["==", "<", "<=", ">", ">="]


def join_path(*segments: str) -> str:
    """Build a document or collection path from its segments."""
    return "/".join(segment.strip("/") for segment in segments)


def split_document_path(path: str) -> tuple[str, str]:
    """Split a document path into (collection path, document id)."""
    collection, _, doc_id = path.rpartition("/")
    if not collection or not doc_id:
        raise ValueError(f"Invalid document path: {path!r}")
    return collection, doc_id


@dataclass(frozen=True)
class FieldFilter:
    """A single ``field op value`` condition."""

    field: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class OrderBy:
    """Sort key for a query."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class Document:
    """Immutable view of a stored document."""

    path: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.data, MappingProxyType):
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def id(self) -> str:
        return split_document_path(self.path)[1]


@dataclass(frozen=True)
class WriteOp:
    """One merge-upsert inside a batch."""

    path: str
    fields: Mapping[str, Any]


class ISnapshotStream(ABC, Generic[T]):
    """
    Cancellable asynchronous sequence of snapshots.

    Iteration yields one value per change and raises the store error if the
    subscription fails. ``close()`` releases the underlying listener; it is
    safe to call more than once and before the first snapshot arrives.
    """

    def __aiter__(self) -> "ISnapshotStream[T]":
        return self

    @abstractmethod
    async def __anext__(self) -> T:
        """Wait for the next snapshot."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop the subscription."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass

    async def __aenter__(self) -> "ISnapshotStream[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def map(self, transform: Callable[[T], U]) -> "ISnapshotStream[U]":
        """Return a stream yielding ``transform(snapshot)``, sharing this stream's lifetime."""
        return MappedSnapshotStream(self, transform)


class MappedSnapshotStream(ISnapshotStream[U]):
    """Snapshot stream that converts each snapshot of an underlying stream."""

    def __init__(self, source: ISnapshotStream[T], transform: Callable[[T], U]):
        self._source = source
        self._transform = transform

    async def __anext__(self) -> U:
        snapshot = await self._source.__anext__()
        return self._transform(snapshot)

    async def close(self) -> None:
        await self._source.close()

    @property
    def closed(self) -> bool:
        return self._source.closed


Snapshot = tuple[Document, ...]


class IDocumentStore(ABC):
    """Interface for document store operations."""

    @abstractmethod
    async def get(self, path: str) -> Document | None:
        """Get a document by path. Returns None if it does not exist."""
        pass

    @abstractmethod
    async def add(self, collection: str, fields: Mapping[str, Any]) -> Document:
        """Create a document with a generated ID."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
    ) -> list[Document]:
        """
        Run a query against a collection.

        Raises:
            QueryConfigurationError: the query needs an index that is not provisioned
            TransientIOError: the store could not be reached
        """
        pass

    @abstractmethod
    async def subscribe(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
    ) -> ISnapshotStream[Snapshot]:
        """Open a live subscription emitting the full result set on every change."""
        pass

    @abstractmethod
    async def upsert(self, path: str, fields: Mapping[str, Any], merge: bool = True) -> None:
        """Create the document or update it. With merge, unspecified fields are kept."""
        pass

    @abstractmethod
    async def batch_write(self, writes: Sequence[WriteOp]) -> None:
        """Apply merge upserts atomically: either all are committed or none."""
        pass
