"""
Layer registry and JSON (de)serialization.

Layers register themselves by class name with `@register_layer` so that a
model execution engine can build them from the per-layer entries of a model
definition:

    {"class_name": "MaxPooling2D", "config": {"poolSize": [2, 2], ...}}
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, Type

from ...domain._errors import InvalidConfigurationError

_LAYER_REGISTRY: Dict[str, Type[Any]] = {}


def register_layer(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a Layer class for config-based construction.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _LAYER_REGISTRY[key] = cls
        return cls

    return deco


def layer_to_config(layer: Any) -> Dict[str, Any]:
    """
    Convert a layer into a ``{"class_name", "config"}`` node.
    """
    return {"class_name": layer.layer_class, "config": layer.get_config()}


def build_layer(node: Dict[str, Any]) -> Any:
    """
    Build a layer from a ``{"class_name", "config"}`` node.

    Raises
    ------
    InvalidConfigurationError
        If the class name is missing or not registered.
    """
    # Lazy import registers the built-in layers without an import cycle.
    from .. import pooling  # noqa: F401

    class_name = node.get("class_name")
    if class_name not in _LAYER_REGISTRY:
        raise InvalidConfigurationError(
            "class_name",
            class_name,
            f"Register it via @register_layer. Known: {sorted(_LAYER_REGISTRY)}.",
        )
    cls = _LAYER_REGISTRY[class_name]
    return cls.build(node.get("config", {}) or {})


def layer_to_json(layer: Any) -> str:
    """Serialize a layer's config node to a JSON string."""
    return json.dumps(layer_to_config(layer))


def layer_from_json(text: str) -> Any:
    """Rebuild a layer from a JSON string produced by `layer_to_json`."""
    return build_layer(json.loads(text))
