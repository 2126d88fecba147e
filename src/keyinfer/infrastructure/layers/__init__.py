"""
Layer base class and layer registry.

Public API
----------
- ``Layer``
- ``register_layer``, ``build_layer``, ``layer_to_config``,
  ``layer_to_json``, ``layer_from_json``
"""

from ._layer import Layer
from ._registry import (
    build_layer,
    layer_from_json,
    layer_to_config,
    layer_to_json,
    register_layer,
)

__all__ = [
    Layer.__name__,
    build_layer.__name__,
    layer_from_json.__name__,
    layer_to_config.__name__,
    layer_to_json.__name__,
    register_layer.__name__,
]
