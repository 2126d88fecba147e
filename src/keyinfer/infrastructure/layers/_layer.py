"""
Infrastructure layer base class.

This module provides a concrete `Layer` implementation that satisfies the
domain-level `ILayer` protocol together with the optional `IWeightBearing`
and `IBackendSelectable` capabilities. It implements common conveniences used
by inference layers, including:

- automatic, Keras-style layer naming (``maxpooling2d_1``, ...)
- positional weight assignment onto named params (`set_weights`)
- compute backend selection and toggling
- `__call__` forwarding to `call` for ergonomic invocation
- `get_config` / `from_config` / `build` serialization hooks

Concrete layers subclass `Layer`, list their weight names in `params`
(weightless layers leave it empty) and implement `call`.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Dict, List, Optional, Sequence

from typing_extensions import Self

from ...domain._errors import InvalidConfigurationError
from ...domain._layer import IBackendSelectable, ILayer, IWeightBearing
from ...domain._tensor import ITensor
from ..backend import DEFAULT_BACKEND, FALLBACK_BACKEND, resolve_backend

logger = logging.getLogger(__name__)

_NAME_COUNTERS: DefaultDict[str, int] = defaultdict(int)


def _auto_name(layer_class: str) -> str:
    """Return the next unique default name for `layer_class`."""
    key = layer_class.lower().lstrip("_")
    _NAME_COUNTERS[key] += 1
    return f"{key}_{_NAME_COUNTERS[key]}"


class Layer(ILayer, IWeightBearing, IBackendSelectable):
    """
    Infrastructure base class for inference layers.

    Parameters
    ----------
    name : Optional[str]
        Layer name. A unique default is generated when omitted.
    backend : str
        Name of the compute backend used by `call`. Defaults to the
        accelerated NumPy backend; unavailable backends degrade to the
        reference backend.

    Attributes
    ----------
    layer_class : str
        Class tag, used by the registry and in default names.
    """

    def __init__(self, *, name: Optional[str] = None, backend: str = DEFAULT_BACKEND) -> None:
        self.layer_class = type(self).__name__
        self._name = name if name else _auto_name(self.layer_class)
        self._params: List[str] = []
        self._weights: Dict[str, ITensor] = {}
        self._backend = resolve_backend(backend)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{self.layer_class}(name={self._name!r}, backend={self.backend!r})"

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------
    @property
    def params(self) -> List[str]:
        return list(self._params)

    @property
    def weights(self) -> Dict[str, ITensor]:
        return dict(self._weights)

    def set_weights(self, weights: Sequence[ITensor]) -> None:
        """
        Assign `weights` positionally onto `params`.

        Raises
        ------
        InvalidConfigurationError
            If the number of tensors differs from the number of params.
        """
        if len(weights) != len(self._params):
            raise InvalidConfigurationError(
                "weights",
                f"{len(weights)} tensor(s)",
                f"{self.layer_class} expects {len(self._params)}: {self._params}.",
            )
        for p, w in zip(self._params, weights):
            self._weights[p] = w

    # ------------------------------------------------------------------
    # Compute backend
    # ------------------------------------------------------------------
    @property
    def backend(self) -> str:
        return self._backend.name

    def toggle_compute_backend(self, name: Optional[str] = None) -> str:
        """
        Switch compute backend.

        Parameters
        ----------
        name : Optional[str]
            Backend to select. If None, toggles between the default
            (accelerated) backend and the reference fallback.

        Returns
        -------
        str
            Name of the backend now in use.
        """
        if name is None:
            name = FALLBACK_BACKEND if self.backend != FALLBACK_BACKEND else DEFAULT_BACKEND
        self._backend = resolve_backend(name)
        logger.info("Layer '%s' now uses compute backend '%s'.", self._name, self.backend)
        return self.backend

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------
    def call(self, x: ITensor) -> ITensor:
        """
        Execute the layer's computation. The base layer is the identity.
        """
        return x

    def __call__(self, x: ITensor) -> ITensor:
        """
        Call the layer as a function, delegating to `call`.
        """
        return self.call(x)

    # ------------------------------------------------------------------
    # Serialization hooks
    # ------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        """
        Return the JSON-serializable configuration shared by all layers.
        """
        return {"name": self._name, "backend": self.backend}

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> Self:
        """
        Reconstruct a layer from `cfg`.
        """
        return cls(**cfg)

    @classmethod
    def build(cls, cfg: Optional[Dict[str, Any]] = None) -> Self:
        """
        Build a layer from a (possibly empty) configuration dict.
        """
        return cls.from_config(dict(cfg or {}))
