"""Shared utilities for the .NET CLI MCP server."""
