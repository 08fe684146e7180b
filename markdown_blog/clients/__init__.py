"""
Cache tiers used by the cache manager.

Import directly from the specific modules; this file stays minimal.
"""
