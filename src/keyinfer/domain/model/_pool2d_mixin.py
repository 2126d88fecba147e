"""
Configuration mixins for 2D pooling layers.

This module defines `Pool2dConfigMixin`, a lightweight mixin that provides
JSON-serializable configuration hooks for weightless 2D pooling layers
(e.g., MaxPooling2D, AveragePooling2D).

Design notes
------------
- Assumes the host class defines `window_size`, `stride`, `padding_mode` and
  `channel_order` attributes or properties.
- Uses plain Python types (lists, ints, strings) to ensure JSON compatibility.
- `from_config` also understands the attribute spellings found in exported
  Keras model definitions (`poolSize`, `strides`, `borderMode`,
  `dimOrdering`, `data_format`, ...), so layer configs taken straight from a
  model file can be used without renaming.
"""

from typing import Any, Dict, Type, TypeVar


T = TypeVar("T", bound="Pool2dConfigMixin")

_KEY_ALIASES: Dict[str, str] = {
    "poolSize": "window_size",
    "pool_size": "window_size",
    "strides": "stride",
    "borderMode": "padding_mode",
    "border_mode": "padding_mode",
    "padding": "padding_mode",
    "dimOrdering": "channel_order",
    "dim_ordering": "channel_order",
    "data_format": "channel_order",
}

_ACCEPTED_KEYS = ("window_size", "stride", "padding_mode", "channel_order", "name", "backend")


class Pool2dConfigMixin:
    """
    Mixin providing JSON serialization hooks for 2D pooling layers.

    The host class exposes:
    - window_size   : tuple[int, int]
    - stride        : tuple[int, int]
    - padding_mode  : PaddingMode
    - channel_order : ChannelOrder
    """

    # ---------------------------------------------------------------------
    # JSON serialization
    # ---------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        """
        Return JSON-serializable configuration for this pooling layer.
        """
        base = getattr(super(), "get_config", None)
        cfg: Dict[str, Any] = dict(base()) if callable(base) else {}

        k_h, k_w = self.window_size
        s_h, s_w = self.stride
        cfg.update(
            {
                "window_size": [int(k_h), int(k_w)],
                "stride": [int(s_h), int(s_w)],
                "padding_mode": self.padding_mode.value,
                "channel_order": self.channel_order.value,
            }
        )
        return cfg

    @classmethod
    def from_config(cls: Type[T], cfg: Dict[str, Any]) -> T:
        """
        Reconstruct the pooling layer from a JSON configuration dict.

        Unknown keys are ignored so that full Keras layer configs (which carry
        e.g. `trainable`) can be passed through unchanged.
        """
        kwargs: Dict[str, Any] = {}
        for key, value in cfg.items():
            canonical = _KEY_ALIASES.get(key, key)
            if canonical not in _ACCEPTED_KEYS or canonical in kwargs:
                continue
            if canonical in ("window_size", "stride") and isinstance(value, list):
                value = tuple(value)
            kwargs[canonical] = value
        return cls(**kwargs)
