"""Existing-wins merge of record stores — pure functions, no I/O."""

from __future__ import annotations

from typing import Any, Mapping


def merge(existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Union *incoming* with *existing*; on a key collision the existing entry wins.

    Entries already in the destination are never replaced, so user
    customisations survive a resync. Neither argument is modified.
    """
    return {**incoming, **existing}


def diff_added_keys(incoming: Mapping[str, Any], existing: Mapping[str, Any]) -> set[str]:
    """Names in *incoming* that are absent from *existing*.

    Call this on the un-merged pair to report what a merge would add.
    """
    return set(incoming) - set(existing)
