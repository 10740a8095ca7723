"""BusSeva MCP server - fuzzy destination search over a bus-route directory."""

__version__ = "0.1.0"
