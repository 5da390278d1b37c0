"""Core business logic — score update rules, registry clients, and data models.

This module is framework-agnostic. It has no dependency on MCP or any
server framework.
"""
