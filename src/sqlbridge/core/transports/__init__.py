"""Transport scaffolds for exposing sqlbridge operations.

Modules
-------
mcp     create_mcp() + run_mcp() factory functions (stdio / streamable-http)

Tags:
    sqlbridge, mcp, transport, ai-callable

Doc-Types:
    package-overview
"""
