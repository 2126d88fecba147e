"""
Concrete Tensor implementation (NumPy backend).

This module provides a concrete `Tensor` that satisfies the domain-level
`ITensor` protocol. Storage is a NumPy ndarray of floating-point elements.

Design notes
------------
- Views: `region` and `transpose` return tensors that *share storage* with
  their parent, so `region(...).assign(...)` writes through. This is what the
  pooling kernels use to place an input inside a padded buffer.
- Reductions (`sum`, `max`) always return new tensors.
- Element dtype is always floating point so that `-inf` padding can be
  represented; integer inputs are converted to float32.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from ...domain._errors import DimensionError
from ...domain._tensor import ITensor

Number = Union[int, float]
Axis = Optional[Union[int, Tuple[int, ...]]]


class Tensor(ITensor):
    """
    NumPy-backed dense tensor.

    Parameters
    ----------
    data : array-like, optional
        Initial values. If omitted, `shape` must be given and the tensor is
        zero-filled.
    shape : tuple[int, ...], optional
        Shape of a zero-filled tensor. Ignored when `data` is given.
    dtype : np.dtype, optional
        Floating-point element dtype. Defaults to the dtype of `data` when it
        is floating point, else np.float32.

    Notes
    -----
    `data` is not copied when it is already an ndarray of the target dtype;
    the tensor then aliases the caller's array.
    """

    def __init__(
        self,
        data: Any = None,
        *,
        shape: Optional[Sequence[int]] = None,
        dtype: Optional[np.dtype] = None,
    ) -> None:
        if data is None:
            if shape is None:
                raise ValueError("Tensor requires either `data` or `shape`.")
            self._data = np.zeros(tuple(int(d) for d in shape), dtype=dtype or np.float32)
            return

        arr = np.asarray(data)
        if dtype is None:
            dtype = arr.dtype if np.issubdtype(arr.dtype, np.floating) else np.float32
        if not np.issubdtype(np.dtype(dtype), np.floating):
            raise TypeError(f"Tensor dtype must be floating point, got {dtype}.")
        self._data = arr.astype(dtype, copy=False)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def full(
        cls, shape: Sequence[int], value: Number, *, dtype: np.dtype = np.float32
    ) -> "Tensor":
        """
        Create a tensor of `shape` with every element set to `value`.
        """
        return cls(np.full(tuple(int(d) for d in shape), value, dtype=dtype))

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "Tensor":
        """Wrap an ndarray without copying or converting it."""
        t = cls.__new__(cls)
        t._data = arr
        return t

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._data.shape)

    @property
    def ndim(self) -> int:
        return int(self._data.ndim)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def data(self) -> np.ndarray:
        """
        Return the backing ndarray (no copy).
        """
        return self._data

    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the tensor's values as an ndarray.
        """
        return np.array(self._data, copy=True)

    def item(self) -> float:
        """Return the value of a single-element tensor as a Python float."""
        if self._data.size != 1:
            raise DimensionError("item", self.shape, "Expected exactly one element.")
        return float(self._data.reshape(-1)[0])

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape}, dtype={self.dtype})"

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def region(self, lo: Sequence[int], hi: Sequence[int]) -> "Tensor":
        """
        Return a view over the half-open box ``[lo, hi)``.

        Raises
        ------
        DimensionError
            If `lo`/`hi` do not provide one bound per axis.
        """
        if len(lo) != self.ndim or len(hi) != self.ndim:
            raise DimensionError(
                "region",
                self.shape,
                f"Expected {self.ndim} bounds, got lo={tuple(lo)} hi={tuple(hi)}.",
            )
        key = tuple(slice(int(a), int(b)) for a, b in zip(lo, hi))
        return self._wrap(self._data[key])

    def transpose(self, *axes: int) -> "Tensor":
        """
        Return a view with permuted axes (reversed when `axes` is empty).
        """
        if axes and len(axes) != self.ndim:
            raise DimensionError(
                "transpose", self.shape, f"Expected {self.ndim} axes, got {axes}."
            )
        return self._wrap(self._data.transpose(*axes) if axes else self._data.T)

    # ------------------------------------------------------------------
    # In-place writes
    # ------------------------------------------------------------------
    def assign(self, other: ITensor) -> None:
        """
        Copy `other` into this tensor (in place).

        Raises
        ------
        DimensionError
            If shapes differ.
        """
        if tuple(other.shape) != self.shape:
            raise DimensionError(
                "assign",
                tuple(other.shape),
                f"Source shape must equal destination shape {self.shape}.",
            )
        src = other.data if isinstance(other, Tensor) else np.asarray(other.to_numpy())
        self._data[...] = src

    def fill(self, value: Number) -> None:
        """Write `value` into every element (in place)."""
        self._data.fill(value)

    def get(self, *index: int) -> float:
        """Return the element at `index` as a Python float."""
        if len(index) != self.ndim:
            raise DimensionError(
                "get", self.shape, f"Expected {self.ndim} indices, got {len(index)}."
            )
        return float(self._data[index])

    def set(self, *index_and_value: Number) -> None:
        """
        Set a single element; the last positional argument is the value.
        """
        *index, value = index_and_value
        if len(index) != self.ndim:
            raise DimensionError(
                "set", self.shape, f"Expected {self.ndim} indices, got {len(index)}."
            )
        self._data[tuple(int(i) for i in index)] = value

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------
    def sum(self, axis: Axis = None) -> "Tensor":
        """
        Sum over `axis` (all axes when None). Returns a new tensor.
        """
        return self._wrap(np.asarray(self._data.sum(axis=axis), dtype=self.dtype))

    def max(self, axis: Axis = None) -> "Tensor":
        """
        Maximum over `axis` (all axes when None). Returns a new tensor.
        """
        return self._wrap(np.asarray(self._data.max(axis=axis), dtype=self.dtype))
