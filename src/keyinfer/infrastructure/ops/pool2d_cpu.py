"""
Vectorized NumPy kernels for 2D pooling on channels-last arrays.

This module provides NumPy implementations of the pooling window reduction
for a single feature map laid out as **(H, W, C)**. They are the numerical
core of the ``"numpy"`` compute backend and produce exactly the same values as
the Tensor-level reference kernel in `pool2d_cpu_ext`.

Design notes
------------
- Padding semantics are explicit:
  - MaxPool pads with `-inf` so padded values never win.
  - AvgPool pads with zero and divides each window by the number of
    *genuine* cells it covers, never by the full window area.
- Windows are enumerated with `sliding_window_view` and then strided, so no
  Python-level loop runs over output positions.
- Geometry (output size and padding split) is computed by the caller via
  `pool2d_geometry.compute_pool2d_geometry`.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ...domain._pool_options import PoolReducer
from .pool2d_geometry import PaddingSpec, Pool2dGeometry, count_padding_cells


def pad_fill_value(reducer: PoolReducer) -> float:
    """
    Return the border fill value for `reducer`.

    Returns
    -------
    float
        `-inf` for max pooling, `0.0` for average pooling.
    """
    return -np.inf if reducer is PoolReducer.MAX else 0.0


def pad2d_hwc_cpu(x: np.ndarray, padding: PaddingSpec, fill_value: float) -> np.ndarray:
    """
    Pad the spatial axes of an (H, W, C) array.

    Parameters
    ----------
    x : np.ndarray
        Input array of shape (H, W, C).
    padding : PaddingSpec
        Rows/cols to add on each side.
    fill_value : float
        Value written into the border cells.

    Returns
    -------
    np.ndarray
        A new array of shape (H + rows, W + cols, C). When `padding` is zero
        the input itself is returned.
    """
    if padding.is_zero:
        return x
    return np.pad(
        x,
        pad_width=(
            (padding.row_before, padding.row_after),
            (padding.col_before, padding.col_after),
            (0, 0),
        ),
        mode="constant",
        constant_values=fill_value,
    )


def _genuine_counts(
    n_out: int, k: int, s: int, extent: int, before: int, after: int
) -> np.ndarray:
    """Per-window count of non-padding cells along one axis."""
    return np.array(
        [k - count_padding_cells(i * s, k, extent, before, after) for i in range(n_out)],
        dtype=np.float64,
    )


def average_divisors(
    geometry: Pool2dGeometry, window_size: Tuple[int, int], stride: Tuple[int, int]
) -> np.ndarray:
    """
    Effective cell count for every output position.

    Returns
    -------
    np.ndarray
        Array of shape (H_out, W_out) holding
        ``(k_h - rows_in_padding) * (k_w - cols_in_padding)``.
    """
    H_out, W_out = geometry.output_hw
    H_pad, W_pad = geometry.padded_hw
    p = geometry.padding
    rows = _genuine_counts(H_out, window_size[0], stride[0], H_pad, p.row_before, p.row_after)
    cols = _genuine_counts(W_out, window_size[1], stride[1], W_pad, p.col_before, p.col_after)
    return np.outer(rows, cols)


def pool2d_hwc_forward_cpu(
    x: np.ndarray,
    *,
    geometry: Pool2dGeometry,
    window_size: Tuple[int, int],
    stride: Tuple[int, int],
    reducer: PoolReducer,
) -> np.ndarray:
    """
    Pool an (H, W, C) array.

    Parameters
    ----------
    x : np.ndarray
        Channels-last input of shape (H, W, C). Not modified.
    geometry : Pool2dGeometry
        Output size and padding for `x`.
    window_size, stride : tuple[int, int]
        Pooling hyperparameters.
    reducer : PoolReducer
        MAX or AVERAGE.

    Returns
    -------
    np.ndarray
        New array of shape (H_out, W_out, C) with the dtype of `x`.
    """
    k_h, k_w = window_size
    s_h, s_w = stride
    H_out, W_out = geometry.output_hw

    x_pad = pad2d_hwc_cpu(x, geometry.padding, pad_fill_value(reducer))

    # (H_pad - k_h + 1, W_pad - k_w + 1, C, k_h, k_w)
    windows = sliding_window_view(x_pad, (k_h, k_w), axis=(0, 1))
    windows = windows[::s_h, ::s_w][:H_out, :W_out]

    if reducer is PoolReducer.MAX:
        y = windows.max(axis=(-2, -1))
    else:
        divisors = average_divisors(geometry, window_size, stride)
        y = windows.sum(axis=(-2, -1), dtype=np.float64) / divisors[:, :, None]

    return np.ascontiguousarray(y, dtype=x.dtype)
