"""
Tensor-level 2D pooling primitives.

This module implements the pooling kernel purely in terms of the `Tensor`
primitive (`full`, `region`, `assign`, `get`, `set`, `sum`, `max`,
`transpose`). It is the ``"reference"`` compute backend: readable, always
available, and the numerical ground truth the NumPy backend is tested against.

Responsibilities
----------------
- Normalize channel order to (H, W, C) and back.
- Materialize the padded working tensor for "same" padding.
- Slide the window over the padded tensor and reduce each channel.

Notes
-----
- Inputs are never mutated; every function returns a tensor the caller owns.
- All tensors here are channels-last (H, W, C) unless stated otherwise.
"""

from __future__ import annotations

from typing import Tuple

from ...domain._pool_options import ChannelOrder, PoolReducer
from ..tensor._tensor import Tensor
from .pool2d_cpu import pad_fill_value
from .pool2d_geometry import PaddingSpec, Pool2dGeometry, count_padding_cells


def to_channels_last(x: Tensor, order: ChannelOrder) -> Tensor:
    """
    Return `x` as (H, W, C); a transposed view when `x` is (C, H, W).
    """
    if order is ChannelOrder.CHANNELS_FIRST:
        return x.transpose(1, 2, 0)
    return x


def from_channels_last(y: Tensor, order: ChannelOrder) -> Tensor:
    """
    Inverse of `to_channels_last`: (H, W, C) -> configured order.
    """
    if order is ChannelOrder.CHANNELS_FIRST:
        return y.transpose(2, 0, 1)
    return y


def pad_input(x: Tensor, padding: PaddingSpec, reducer: PoolReducer) -> Tensor:
    """
    Materialize the padded working tensor.

    Parameters
    ----------
    x : Tensor
        Input of shape (H, W, C).
    padding : PaddingSpec
        Border to add.
    reducer : PoolReducer
        Selects the fill value (`-inf` for max, `0` for average).

    Returns
    -------
    Tensor
        A new tensor of shape (H + rows, W + cols, C) with `x` copied into the
        offset region, or `x` itself when no padding is required.
    """
    if padding.is_zero:
        return x

    H, W, C = x.shape
    padded = Tensor.full(
        (H + padding.total_rows, W + padding.total_cols, C),
        pad_fill_value(reducer),
        dtype=x.dtype,
    )
    padded.region(
        (padding.row_before, padding.col_before, 0),
        (padding.row_before + H, padding.col_before + W, C),
    ).assign(x)
    return padded


def pool2d_forward(
    x: Tensor,
    *,
    geometry: Pool2dGeometry,
    window_size: Tuple[int, int],
    stride: Tuple[int, int],
    reducer: PoolReducer,
) -> Tensor:
    """
    Slide the pooling window over `x` and reduce each channel.

    Parameters
    ----------
    x : Tensor
        Channels-last input of shape (H, W, C). Not modified.
    geometry : Pool2dGeometry
        Output size and padding for `x`.
    window_size, stride : tuple[int, int]
        Pooling hyperparameters.
    reducer : PoolReducer
        MAX or AVERAGE.

    Returns
    -------
    Tensor
        New tensor of shape (H_out, W_out, C).

    Notes
    -----
    Row positions run over ``0, s_h, 2*s_h, ...`` while ``i + k_h <= H_pad``
    (likewise for columns); the number of positions equals the output size
    from the geometry.
    """
    k_h, k_w = window_size
    s_h, s_w = stride
    p = geometry.padding

    x_pad = pad_input(x, p, reducer)
    H_pad, W_pad, C = x_pad.shape
    H_out, W_out = geometry.output_hw

    y = Tensor(shape=(H_out, W_out, C), dtype=x.dtype)

    for _i, i in enumerate(range(0, H_pad - k_h + 1, s_h)):
        rows_in_padding = count_padding_cells(i, k_h, H_pad, p.row_before, p.row_after)

        for _j, j in enumerate(range(0, W_pad - k_w + 1, s_w)):
            cols_in_padding = count_padding_cells(j, k_w, W_pad, p.col_before, p.col_after)

            patch = x_pad.region((i, j, 0), (i + k_h, j + k_w, C))
            if reducer is PoolReducer.MAX:
                pooled = patch.max(axis=(0, 1))
            else:
                effective = (k_h - rows_in_padding) * (k_w - cols_in_padding)
                pooled = patch.sum(axis=(0, 1))
                pooled = Tensor(pooled.data / effective, dtype=x.dtype)

            for c in range(C):
                y.set(_i, _j, c, pooled.get(c))

    return y
