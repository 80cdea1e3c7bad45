"""Per-server adaptors for targets that cannot run a server as the source defines it.

An adaptor takes the server name and returns a replacement entry in source
(Claude) schema, without a ``type`` field. :func:`apply_adaptors` wraps it for
whichever schema the target uses, so one registration covers every target.

To add an adaptor::

    @register_adaptor("name")
    def _name(server: str) -> dict[str, Any]:
        return {"command": "...", "args": [...]}
"""

from __future__ import annotations

from typing import Any, Callable

from mcpsync.schema import Schema, convert_entry
from mcpsync.store import RecordStore

Adaptor = Callable[[str], dict[str, Any]]

ADAPTORS: dict[str, Adaptor] = {}


def register_adaptor(name: str) -> Callable[[Adaptor], Adaptor]:
    """Register the decorated function as the adaptor for server *name*."""

    def decorator(func: Adaptor) -> Adaptor:
        ADAPTORS[name] = func
        return func

    return decorator


# ===================================================================
# Built-in adaptors
# ===================================================================


@register_adaptor("atlassian")
def _atlassian(server: str) -> dict[str, Any]:
    # Remote OAuth server; Copilot CLI and VSCode Copilot lack OAuth, so proxy via mcp-remote.
    return {
        "command": "npx",
        "args": ["mcp-remote", "https://mcp.atlassian.com/v1/mcp"],
    }


# ===================================================================
# Dispatch
# ===================================================================


def adapted_names(servers: RecordStore, registry: dict[str, Adaptor] | None = None) -> list[str]:
    """Names in *servers* that have a registered adaptor, in store order."""
    reg = ADAPTORS if registry is None else registry
    return [name for name in servers if name in reg]


def apply_adaptors(
    servers: RecordStore,
    schema: Schema,
    registry: dict[str, Adaptor] | None = None,
) -> RecordStore:
    """Replace every entry that has a registered adaptor.

    *servers* must already be in *schema*; the adaptor output is converted to
    *schema* before it is substituted. Other entries are left untouched and
    *servers* itself is not modified.
    """
    reg = ADAPTORS if registry is None else registry
    result = dict(servers)
    for name in adapted_names(servers, reg):
        result[name] = convert_entry(reg[name](name), schema)
    return result
