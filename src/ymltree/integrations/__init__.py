"""Integrations subpackage for ymltree.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via the pytest11 entry point)
"""

from __future__ import annotations

__all__: list[str] = []
