"""Part cross-reference MCP server - rule-based replacement recommendations."""

__version__ = "0.3.0"
