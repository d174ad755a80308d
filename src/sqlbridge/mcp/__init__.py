"""MCP transport for the sqlbridge operation catalog.

Every tool is a thin wrapper around ``Dispatcher.dispatch``; no SQL lives here.
"""
