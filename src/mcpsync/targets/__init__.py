"""Sync targets: the agent config files MCP servers are written to.

Modules are imported directly (``mcpsync.targets.vscode`` etc.) so that
``mcpsync.utils.io`` can depend on :mod:`mcpsync.targets.base` without a cycle.
"""
