"""Conversion core: names, rewriting, MCP translation, assembly and target registry."""
