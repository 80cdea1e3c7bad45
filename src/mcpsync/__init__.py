"""mcpsync — distribute MCP server configs and skills to AI coding agents."""

__version__ = "0.1.0"
