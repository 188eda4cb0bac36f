"""
Utility functions for cellgrid.

This module provides utilities for working with grids:
- serialization: JSON snapshot serialization/deserialization of grids
- frames: pandas DataFrame conversion
"""

from .serialization import (
    serialize,
    deserialize,
    to_json,
    from_json,
)
from .frames import to_frame, from_frame

__all__ = [
    'serialize',
    'deserialize',
    'to_json',
    'from_json',
    'to_frame',
    'from_frame',
]
