"""Frame graph CLI package.

Thin wrapper to validate frame graph files, inspect them and resolve chains.
"""

__all__ = []
