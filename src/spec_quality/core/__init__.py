"""Core scoring logic — document accessors, report models, and category scorers.

This module is framework-agnostic and performs no I/O. The loader, store,
and MCP server all import from here.
"""
