"""JSON documents and the record stores embedded in them."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from mcpsync.errors import MalformedDocument, SourceMissing

# server name -> server entry
RecordStore = dict[str, dict[str, Any]]


class Document:
    """A top-level JSON object with explicit field accessors.

    Values are never interpreted beyond what an accessor promises: a field
    read through :meth:`get_store` must be a mapping of name to mapping,
    everything else is returned as-is.
    """

    def __init__(self, data: dict[str, Any] | None = None, path: Path | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self.path = path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Document({self._data!r}, path={self.path!r})"

    def get_field(self, name: str) -> Any | None:
        """Return the value of top-level field *name*, or ``None`` if absent."""
        return self._data.get(name)

    def has_field(self, name: str) -> bool:
        return name in self._data

    def get_store(self, name: str) -> RecordStore:
        """Return the record store under *name*, or ``{}`` when the field is absent.

        Raises:
            MalformedDocument: If the field is present but is not a mapping of
                server names to mappings.
        """
        raw = self._data.get(name)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise MalformedDocument(
                f"{self._where()}'{name}' must be an object, got {type(raw).__name__}"
            )
        for key, entry in raw.items():
            if not isinstance(entry, dict):
                raise MalformedDocument(
                    f"{self._where()}'{name}.{key}' must be an object, got {type(entry).__name__}"
                )
        return copy.deepcopy(raw)

    def with_field(self, name: str, value: Any) -> Document:
        """Return a copy with *name* set to *value*; all other fields are kept verbatim."""
        data = dict(self._data)
        data[name] = value
        return Document(data, path=self.path)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def _where(self) -> str:
        return f"{self.path}: " if self.path is not None else ""


def load_document(path: Path, *, required: bool = False) -> Document:
    """Read the JSON object at *path*.

    A missing file yields an empty :class:`Document` unless *required* is set,
    in which case :class:`SourceMissing` is raised.

    Raises:
        SourceMissing: If *required* and the file does not exist.
        MalformedDocument: If the file is not valid JSON or not an object.
    """
    if not path.is_file():
        if required:
            raise SourceMissing(f"Source not found: {path}")
        return Document(path=path)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedDocument(f"Cannot parse {path}: {exc}") from exc
    except OSError as exc:
        raise MalformedDocument(f"Cannot read {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise MalformedDocument(f"Expected JSON object in {path}, got {type(raw).__name__}")

    return Document(raw, path=path)


def read_store(path: Path, field: str) -> RecordStore:
    """Load the record store under *field* from *path*, ``{}`` if either is absent."""
    return load_document(path).get_store(field)
