"""
Output-shape and padding derivation for 2D pooling.

This module implements the TensorFlow-compatible "valid" / "same" shape
inference used by Keras pooling layers (see TensorFlow's
`common_shape_fns.cc`):

- valid: ``out = floor((n - k + s) / s)``, no padding
- same : ``out = floor((n + s - 1) / s)``, total padding
  ``max(0, (out - 1) * s + k - n)`` split as ``before = floor(total / 2)``,
  ``after = total - before``

The odd cell of an odd total always goes to the trailing ("after") side.

All functions here are pure integer arithmetic and are shared by every
compute backend, so the padding split and output size are identical no matter
which backend executes the window loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ...domain._errors import DimensionError
from ...domain._pool_options import PaddingMode


@dataclass(frozen=True)
class PaddingSpec:
    """
    Synthetic border added around the spatial axes before pooling.

    Attributes
    ----------
    row_before, row_after : int
        Rows added above / below the input.
    col_before, col_after : int
        Columns added left / right of the input.
    """

    row_before: int = 0
    row_after: int = 0
    col_before: int = 0
    col_after: int = 0

    @property
    def total_rows(self) -> int:
        return self.row_before + self.row_after

    @property
    def total_cols(self) -> int:
        return self.col_before + self.col_after

    @property
    def is_zero(self) -> bool:
        """True when no border cell is added on any side."""
        return self.total_rows == 0 and self.total_cols == 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return ``(row_before, row_after, col_before, col_after)``."""
        return (self.row_before, self.row_after, self.col_before, self.col_after)


@dataclass(frozen=True)
class Pool2dGeometry:
    """
    Per-call geometry derived from an input's spatial size and a pool config.

    Attributes
    ----------
    input_hw : tuple[int, int]
        Spatial size of the (channels-last) input.
    output_hw : tuple[int, int]
        Spatial size of the pooled output.
    padding : PaddingSpec
        Border to materialize before the window loop.
    """

    input_hw: Tuple[int, int]
    output_hw: Tuple[int, int]
    padding: PaddingSpec

    @property
    def padded_hw(self) -> Tuple[int, int]:
        """Spatial size of the padded working tensor."""
        H, W = self.input_hw
        return (H + self.padding.total_rows, W + self.padding.total_cols)


def _out_len(n: int, k: int, s: int, mode: PaddingMode) -> int:
    """Output length along one spatial axis."""
    if mode is PaddingMode.SAME:
        return (n + s - 1) // s
    return (n - k + s) // s


def _split_padding(n: int, k: int, s: int, out: int) -> Tuple[int, int]:
    """Split the "same" padding along one axis into (before, after)."""
    total = max(0, (out - 1) * s + k - n)
    before = total // 2
    return before, total - before


def compute_pool2d_geometry(
    H: int,
    W: int,
    *,
    window_size: Tuple[int, int],
    stride: Tuple[int, int],
    padding_mode: PaddingMode,
) -> Pool2dGeometry:
    """
    Derive output size and padding for a channels-last input of size (H, W).

    Parameters
    ----------
    H, W : int
        Input rows and columns.
    window_size : tuple[int, int]
        Pooling window (k_h, k_w).
    stride : tuple[int, int]
        Stride (s_h, s_w).
    padding_mode : PaddingMode
        "valid" or "same".

    Returns
    -------
    Pool2dGeometry
        Output size and padding split.

    Notes
    -----
    This function never raises; a window larger than a "valid" input yields a
    non-positive output size. Use `check_pool2d_geometry` to reject that.
    """
    k_h, k_w = window_size
    s_h, s_w = stride

    H_out = _out_len(H, k_h, s_h, padding_mode)
    W_out = _out_len(W, k_w, s_w, padding_mode)

    if padding_mode is PaddingMode.SAME:
        row_before, row_after = _split_padding(H, k_h, s_h, H_out)
        col_before, col_after = _split_padding(W, k_w, s_w, W_out)
        padding = PaddingSpec(row_before, row_after, col_before, col_after)
    else:
        padding = PaddingSpec()

    return Pool2dGeometry(input_hw=(H, W), output_hw=(H_out, W_out), padding=padding)


def check_pool2d_geometry(
    geometry: Pool2dGeometry, *, window_size: Tuple[int, int]
) -> None:
    """
    Reject geometries that would produce an empty or malformed output.

    Raises
    ------
    DimensionError
        If either output extent is non-positive, or the window does not fit
        inside the padded input.
    """
    H_out, W_out = geometry.output_hw
    H_pad, W_pad = geometry.padded_hw
    k_h, k_w = window_size
    if H_out <= 0 or W_out <= 0 or k_h > H_pad or k_w > W_pad:
        raise DimensionError(
            "pool2d",
            geometry.input_hw,
            f"Window {tuple(window_size)} does not fit the padded input "
            f"{(H_pad, W_pad)}; derived output size would be {(H_out, W_out)}.",
        )


def count_padding_cells(start: int, size: int, extent: int, before: int, after: int) -> int:
    """
    Number of window cells along one axis that fall in a padding band.

    Parameters
    ----------
    start : int
        First index of the window in padded coordinates.
    size : int
        Window length.
    extent : int
        Padded length of the axis.
    before, after : int
        Padding added at the start / end of the axis.

    Returns
    -------
    int
        Cells of ``[start, start + size)`` lying in ``[0, before)`` or
        ``[extent - after, extent)``.
    """
    in_before = max(0, min(start + size, before) - start)
    in_after = max(0, start + size - max(start, extent - after))
    return min(size, in_before + in_after)
