"""Mock brokerage exposed through MCP tool calls and a simple REST envelope."""

__version__ = "1.0.0"
