"""
Song Director - live song section broadcaster.

A director picks the current song section (letter plus optional number)
from a control page, and every open viewer and controller follows along
through HTTP long-polling.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
