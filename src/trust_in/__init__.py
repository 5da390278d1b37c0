"""TrustIn MCP Server.

Decaying trust scores for French companies, re-anchored by SIRENE registry lookups.
"""

__version__ = "0.1.0"
