"""
sclipt: a personal CLI snippet manager.

Keeps short text fragments in a local JSON file:
- add, list, view and delete snippets by id
- tag snippets and look them up by exact tag
"""

__version__ = "0.1.0"
