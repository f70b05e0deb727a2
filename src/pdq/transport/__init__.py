"""
Transport implementations for the PDQ MCP server.
"""

from pdq.transport.stdio import StdioTransport, parse_line, run_stdio_server

__all__ = ["StdioTransport", "parse_line", "run_stdio_server"]
