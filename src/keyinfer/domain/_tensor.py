"""
Tensor interface definitions.

This module defines the domain-level interface for the dense tensor container
used by KeyInfer layers. The interface captures exactly the operations the
pooling kernels are built on: shape inspection, sub-region views, in-place
assignment and fill, element access, reductions and axis transposition.

Notes
-----
The protocol is backend-agnostic. The concrete NumPy-backed implementation
lives in `keyinfer.infrastructure.tensor`.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Dense N-dimensional tensor interface.

    Structural typing is used so that alternative storage backends can satisfy
    the same contract without inheriting from a concrete class.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        ...

    @property
    def ndim(self) -> int:
        """Return the number of axes."""
        ...

    def to_numpy(self) -> Any:
        """
        Return a host copy of the tensor's values.

        Returns
        -------
        Any
            Backend-defined array object (a NumPy ndarray for CPU tensors).
        """
        ...

    def region(self, lo: Sequence[int], hi: Sequence[int]) -> "ITensor":
        """
        Return a view over the half-open box ``[lo, hi)``.

        Parameters
        ----------
        lo : Sequence[int]
            Inclusive lower corner, one entry per axis.
        hi : Sequence[int]
            Exclusive upper corner, one entry per axis.

        Returns
        -------
        ITensor
            A tensor sharing storage with this tensor.
        """
        ...

    def assign(self, other: "ITensor") -> None:
        """Copy the values of `other` (same shape) into this tensor in place."""
        ...

    def fill(self, value: Number) -> None:
        """Write `value` into every element in place."""
        ...

    def get(self, *index: int) -> float:
        """Return a single element."""
        ...

    def set(self, *index_and_value: Number) -> None:
        """Set a single element; the last argument is the value."""
        ...

    def sum(self, axis: Optional[Union[int, tuple[int, ...]]] = None) -> "ITensor":
        """Sum over `axis` (all axes when None)."""
        ...

    def max(self, axis: Optional[Union[int, tuple[int, ...]]] = None) -> "ITensor":
        """Maximum over `axis` (all axes when None)."""
        ...

    def transpose(self, *axes: int) -> "ITensor":
        """Return a view with permuted axes."""
        ...
