"""
Pooling layer interface for KeyInfer.

This module defines the **domain-level Protocol** for 2D spatial pooling
layers operating on a single 3-D feature tensor.

Shape semantics
---------------
Channels-last input ``(H, W, C)`` produces ``(H_out, W_out, C)``;
channels-first input ``(C, H, W)`` produces ``(C, H_out, W_out)``, where

    valid: H_out = floor((H - k_h + s_h) / s_h)
    same : H_out = floor((H + s_h - 1) / s_h)

and likewise for W.

Design constraints
------------------
- Pooling layers MUST NOT own weights.
- Pooling layers MUST preserve the channel count.
- Pooling layers MUST be pure functions of their input and configuration.
"""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple, runtime_checkable

from ._layer import ILayer
from ._pool_options import ChannelOrder, PaddingMode, PoolReducer
from ._tensor import ITensor


@runtime_checkable
class IPooling2D(ILayer, Protocol):
    """
    Protocol for 2D pooling layers.

    Examples
    --------
    Typical implementations include max pooling and average pooling.
    """

    @property
    def window_size(self) -> Tuple[int, int]:
        """Pooling window as (k_h, k_w)."""
        ...

    @property
    def stride(self) -> Tuple[int, int]:
        """Stride as (s_h, s_w)."""
        ...

    @property
    def padding_mode(self) -> PaddingMode:
        """Border handling mode."""
        ...

    @property
    def channel_order(self) -> ChannelOrder:
        """Channel axis position of inputs and outputs."""
        ...

    @property
    def reducer(self) -> PoolReducer:
        """Window reduction."""
        ...

    def compute_output_shape(self, input_shape: Sequence[int]) -> Tuple[int, int, int]:
        """
        Return the output shape for `input_shape`, in the configured channel order.
        """
        ...

    def call(self, x: ITensor) -> ITensor:
        """
        Apply pooling over the spatial axes of `x`.

        Notes
        -----
        Pooling is applied independently per channel.
        """
        ...
