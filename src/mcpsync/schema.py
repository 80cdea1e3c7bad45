"""Schema conversion from the Claude ``mcpServers`` format to target formats."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from mcpsync.store import RecordStore


@dataclass(frozen=True)
class Schema:
    """Shape of a target's MCP record store.

    ``servers_key`` is the top-level field holding the store. When
    ``type_tag`` is set, every entry gets a ``type`` field defaulting to it.
    """

    name: str
    servers_key: str
    type_tag: str | None = None

    @property
    def is_identity(self) -> bool:
        return self.type_tag is None


CLAUDE_SCHEMA = Schema(name="claude", servers_key="mcpServers")
VSCODE_SCHEMA = Schema(name="vscode", servers_key="servers", type_tag="stdio")

SOURCE_SCHEMA = CLAUDE_SCHEMA


def convert_entry(entry: dict[str, Any], schema: Schema) -> dict[str, Any]:
    """Convert a single source-schema entry to *schema*.

    The ``type`` tag is a default: a ``type`` already declared by the source
    entry is kept.
    """
    converted = copy.deepcopy(entry)
    if schema.is_identity:
        return converted
    return {"type": schema.type_tag, **converted}


def convert(servers: RecordStore, schema: Schema) -> RecordStore:
    """Convert a source-schema record store to *schema*, preserving key order."""
    return {name: convert_entry(entry, schema) for name, entry in servers.items()}
