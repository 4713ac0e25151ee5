"""
Utility functions for the lamdo library.
"""

import os


def env_flag(name: str) -> bool:
    """Read a boolean switch from the process environment."""
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


# Environment variable to trace every evaluation step at DEBUG level
DEBUG_EVAL = env_flag("LAMDO_DEBUG")
