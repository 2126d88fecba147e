"""
2D pooling layers.

Public API
----------
- ``Pool2dMeta``
- ``MaxPooling2D``, ``AveragePooling2D``
"""

from ._pooling_layer import AveragePooling2D, MaxPooling2D, Pool2dMeta

__all__ = [
    AveragePooling2D.__name__,
    MaxPooling2D.__name__,
    Pool2dMeta.__name__,
]
