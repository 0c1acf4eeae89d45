"""
utils/ - Shared Helpers
=======================
Logging setup, UTC timestamps and filesystem helpers used by every other layer.
"""
