"""
headerdb core: header tree, reorg planning, locators, codec and persistence.
"""

__all__ = []
