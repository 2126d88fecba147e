"""
Pluggable compute backends for the pooling window reduction.

Backends are registered by name through the `register_backend` decorator and
looked up by layers at build time (and again whenever a layer toggles its
backend).

Registered backends
-------------------
- ``"reference"``: Tensor-primitive kernel (`ops.pool2d_cpu_ext`). Always
  available; it is the fallback every other backend degrades to.
- ``"numpy"``: vectorized NumPy kernel (`ops.pool2d_cpu`). Default.

A backend that is registered but reports `is_available() == False` is
replaced by the fallback with a logged warning, the same way a layer built
with GPU support silently runs on the CPU when no GPU runtime is present.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Tuple, Type

from ...domain._errors import BackendNotAvailableError
from ...domain._pool_options import PoolReducer
from ...domain.backend._backend_protocol import IComputeBackend
from ..ops import pool2d_cpu, pool2d_cpu_ext
from ..ops.pool2d_geometry import Pool2dGeometry
from ..tensor._tensor import Tensor

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "numpy"
FALLBACK_BACKEND = "reference"

_BACKEND_REGISTRY: Dict[str, IComputeBackend] = {}


def register_backend(name: str) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a backend class under `name`.

    The class is instantiated once without arguments; the instance is shared
    by every layer that selects it, so backends must be stateless.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        instance = cls()
        instance.name = name
        if not isinstance(instance, IComputeBackend):
            raise TypeError(f"{cls.__name__} does not satisfy IComputeBackend.")
        _BACKEND_REGISTRY[name] = instance
        return cls

    return deco


def available_backends() -> List[str]:
    """Names of registered backends whose runtime requirements are met."""
    return sorted(n for n, b in _BACKEND_REGISTRY.items() if b.is_available())


def get_backend(name: str) -> IComputeBackend:
    """
    Return the registered backend `name`.

    Raises
    ------
    BackendNotAvailableError
        If no backend is registered under `name`.
    """
    try:
        return _BACKEND_REGISTRY[name]
    except KeyError:
        raise BackendNotAvailableError(name, tuple(_BACKEND_REGISTRY)) from None


def resolve_backend(name: str) -> IComputeBackend:
    """
    Like `get_backend`, but degrade to the fallback if `name` is unavailable.
    """
    backend = get_backend(name)
    if backend.is_available():
        return backend
    logger.warning(
        "Compute backend '%s' is not available; falling back to '%s'.",
        name,
        FALLBACK_BACKEND,
    )
    return get_backend(FALLBACK_BACKEND)


@register_backend(FALLBACK_BACKEND)
class ReferenceBackend:
    """
    Pure in-process backend built on Tensor primitives.
    """

    name = FALLBACK_BACKEND

    def is_available(self) -> bool:
        return True

    def pool2d(
        self,
        x: Tensor,
        *,
        geometry: Pool2dGeometry,
        window_size: Tuple[int, int],
        stride: Tuple[int, int],
        reducer: PoolReducer,
    ) -> Tensor:
        return pool2d_cpu_ext.pool2d_forward(
            x,
            geometry=geometry,
            window_size=window_size,
            stride=stride,
            reducer=reducer,
        )


@register_backend(DEFAULT_BACKEND)
class NumpyBackend:
    """
    Vectorized NumPy backend.

    Operates on the backing ndarray of the input tensor and wraps the result
    in a new `Tensor`. Always available: `sliding_window_view` ships with
    every supported NumPy release (>= 1.20).
    """

    name = DEFAULT_BACKEND

    def is_available(self) -> bool:
        return True

    def pool2d(
        self,
        x: Tensor,
        *,
        geometry: Pool2dGeometry,
        window_size: Tuple[int, int],
        stride: Tuple[int, int],
        reducer: PoolReducer,
    ) -> Tensor:
        y = pool2d_cpu.pool2d_hwc_forward_cpu(
            x.data,
            geometry=geometry,
            window_size=window_size,
            stride=stride,
            reducer=reducer,
        )
        return Tensor(y)
