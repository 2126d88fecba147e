"""
Compute backend contracts for KeyInfer.

This module defines a duck-typed `IComputeBackend` protocol describing a
strategy object that executes the pooling window reduction. Layers select a
backend by name at build time and may switch it later; they never depend on a
concrete backend class.

Design notes
------------
- Uses `typing.Protocol` and `@runtime_checkable` so registries can validate
  backend objects structurally.
- The geometry is computed once by the caller and handed to the backend, so
  every backend sees the same padding split and output size.
"""

from __future__ import annotations

from typing import Any, Protocol, Tuple, runtime_checkable

from .._pool_options import PoolReducer
from .._tensor import ITensor


@runtime_checkable
class IComputeBackend(Protocol):
    """
    Duck-typed compute backend contract.

    Any object providing these members can execute pooling for a layer,
    regardless of its concrete class identity.
    """

    name: str

    def is_available(self) -> bool: ...

    def pool2d(
        self,
        x: ITensor,
        *,
        geometry: Any,
        window_size: Tuple[int, int],
        stride: Tuple[int, int],
        reducer: PoolReducer,
    ) -> ITensor: ...
