from __future__ import annotations

"""
Infrastructure layer (no watch list rules).

Technical building blocks behind the application ports: the PostgreSQL
pool and store implementations. Settings arrive as plain arguments.
"""

__all__ = [
    "persistence",
]
