"""MCP tool modules. Importing a module registers its tools on ``_app.mcp``."""
