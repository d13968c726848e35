"""
Utility modules for the recipe client.

This package contains:
- cache: TTLCache and SearchCache slots
- tasks: awaiting blocking or async backend callables
"""
