"""fsinspect Shared Module.

Constants, error types and logging helpers used across fsinspect.
"""

__all__ = ["constants", "errors", "logging"]
