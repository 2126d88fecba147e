"""
Pooling layers for KeyInfer (2D, single feature map).

This module defines the layer wrappers around the pooling kernels:

- `MaxPooling2D`     : windowed max pooling
- `AveragePooling2D` : windowed average pooling over genuine (non-padding)
  cells only

Each layer is:
- **weightless** (empty `params`, `set_weights([])` is a no-op),
- **channel-preserving** while reducing the spatial axes,
- **pure per call**: geometry is recomputed from every input, nothing is
  cached on the layer, and the input tensor is never mutated.

Design notes
------------
- Hyperparameters are normalized to 2-tuples with `_pair` and stored in an
  immutable `Pool2dMeta`.
- `call` normalizes channels-first input to (H, W, C), derives geometry,
  rejects degenerate geometry with `DimensionError`, dispatches the window
  loop to the layer's compute backend and restores the channel order.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from ...domain._errors import DimensionError, InvalidConfigurationError
from ...domain._pool_options import ChannelOrder, PaddingMode, PoolReducer
from ...domain._pooling import IPooling2D
from ...domain._tensor import ITensor
from ...domain.model._pool2d_mixin import Pool2dConfigMixin
from ..backend import DEFAULT_BACKEND
from ..layers._layer import Layer
from ..layers._registry import register_layer
from ..ops.pool2d_cpu_ext import from_channels_last, to_channels_last
from ..ops.pool2d_geometry import (
    PaddingSpec,
    Pool2dGeometry,
    check_pool2d_geometry,
    compute_pool2d_geometry,
)

logger = logging.getLogger(__name__)

IntPair = Union[int, Tuple[int, int], Sequence[int]]


def _pair(option: str, v: IntPair) -> Tuple[int, int]:
    """
    Normalize an integer or pair into a 2-tuple of positive ints.

    Raises
    ------
    InvalidConfigurationError
        If `v` is not a positive int or a pair of positive ints.
    """
    pair = (v, v) if isinstance(v, numbers.Integral) else tuple(v)
    if len(pair) != 2 or not all(
        isinstance(e, numbers.Integral) and not isinstance(e, bool) and e > 0
        for e in pair
    ):
        raise InvalidConfigurationError(
            option, v, "Expected a positive int or a pair of positive ints."
        )
    return int(pair[0]), int(pair[1])


@dataclass(frozen=True)
class Pool2dMeta:
    """
    Immutable configuration container for 2D pooling hyperparameters.

    Attributes
    ----------
    window_size : tuple[int, int]
        Pooling window (k_h, k_w).
    stride : tuple[int, int]
        Stride (s_h, s_w); defaults to `window_size` when not given.
    padding_mode : PaddingMode
        "valid" or "same".
    channel_order : ChannelOrder
        Channel axis position of inputs and outputs.
    reducer : PoolReducer or str
        Fixed by the concrete layer class; validated when the layer is called.
    """

    window_size: Tuple[int, int]
    stride: Tuple[int, int]
    padding_mode: PaddingMode
    channel_order: ChannelOrder
    reducer: Union[PoolReducer, str]

    @classmethod
    def create(
        cls,
        *,
        window_size: IntPair = (2, 2),
        stride: Optional[IntPair] = None,
        padding_mode: Union[PaddingMode, str] = PaddingMode.VALID,
        channel_order: Union[ChannelOrder, str] = ChannelOrder.CHANNELS_LAST,
        reducer: Union[PoolReducer, str] = PoolReducer.MAX,
    ) -> "Pool2dMeta":
        """
        Validate and normalize user-facing options.

        Raises
        ------
        InvalidConfigurationError
            If the window, stride, padding mode or channel order is invalid.
        """
        k = _pair("window_size", window_size)
        s = k if stride is None else _pair("stride", stride)
        return cls(
            window_size=k,
            stride=s,
            padding_mode=PaddingMode.parse(padding_mode),
            channel_order=ChannelOrder.parse(channel_order),
            reducer=reducer,
        )


class _Pooling2D(Pool2dConfigMixin, Layer, IPooling2D):
    """
    Shared implementation of 2D pooling layers.

    Subclasses fix the reducer through the `_reducer` class attribute.

    Shape semantics
    ---------------
    Input:
        (H, W, C) for channels-last, (C, H, W) for channels-first
    Output:
        (H_out, W_out, C) or (C, H_out, W_out) respectively
    """

    _reducer: Union[PoolReducer, str] = PoolReducer.MAX

    def __init__(
        self,
        window_size: IntPair = (2, 2),
        *,
        stride: Optional[IntPair] = None,
        padding_mode: Union[PaddingMode, str] = PaddingMode.VALID,
        channel_order: Union[ChannelOrder, str] = ChannelOrder.CHANNELS_LAST,
        name: Optional[str] = None,
        backend: str = DEFAULT_BACKEND,
    ) -> None:
        """
        Construct a pooling layer.

        Parameters
        ----------
        window_size : int or tuple[int, int], optional
            Pooling window. Defaults to (2, 2).
        stride : int or tuple[int, int] or None, optional
            Stride. If None, defaults to `window_size`.
        padding_mode : PaddingMode or str, optional
            "valid" (default) or "same".
        channel_order : ChannelOrder or str, optional
            "channelsLast" (default) or "channelsFirst".
        name : Optional[str]
            Layer name.
        backend : str
            Compute backend name.

        Raises
        ------
        InvalidConfigurationError
            If any option is invalid.
        """
        super().__init__(name=name, backend=backend)
        self._meta = Pool2dMeta.create(
            window_size=window_size,
            stride=stride,
            padding_mode=padding_mode,
            channel_order=channel_order,
            reducer=self._reducer,
        )

    @property
    def window_size(self) -> Tuple[int, int]:
        return self._meta.window_size

    @property
    def stride(self) -> Tuple[int, int]:
        return self._meta.stride

    @property
    def padding_mode(self) -> PaddingMode:
        return self._meta.padding_mode

    @property
    def channel_order(self) -> ChannelOrder:
        return self._meta.channel_order

    @property
    def reducer(self) -> PoolReducer:
        """
        Return the reducer fixed by this layer class.

        Raises
        ------
        InvalidConfigurationError
            If the class carries a reducer other than max or average.
        """
        return PoolReducer.parse(self._meta.reducer)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def _spatial_dims(self, shape: Sequence[int]) -> Tuple[int, int, int]:
        """Return (H, W, C) of a 3-D shape given in the configured order."""
        if len(shape) != 3:
            raise DimensionError(
                self.layer_class,
                tuple(shape),
                "Expected a 3-D feature tensor (rows, cols, channels) "
                "or (channels, rows, cols).",
            )
        if self.channel_order is ChannelOrder.CHANNELS_FIRST:
            C, H, W = shape
        else:
            H, W, C = shape
        return int(H), int(W), int(C)

    def _geometry(self, H: int, W: int) -> Pool2dGeometry:
        geometry = compute_pool2d_geometry(
            H,
            W,
            window_size=self.window_size,
            stride=self.stride,
            padding_mode=self.padding_mode,
        )
        check_pool2d_geometry(geometry, window_size=self.window_size)
        return geometry

    def compute_padding(self, input_shape: Sequence[int]) -> PaddingSpec:
        """
        Return the padding applied to an input of `input_shape`.
        """
        H, W, _ = self._spatial_dims(input_shape)
        return self._geometry(H, W).padding

    def compute_output_shape(self, input_shape: Sequence[int]) -> Tuple[int, int, int]:
        """
        Return the output shape for `input_shape`, in the configured order.

        Raises
        ------
        DimensionError
            If `input_shape` is not 3-D or the geometry is degenerate.
        """
        H, W, C = self._spatial_dims(input_shape)
        H_out, W_out = self._geometry(H, W).output_hw
        if self.channel_order is ChannelOrder.CHANNELS_FIRST:
            return (C, H_out, W_out)
        return (H_out, W_out, C)

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------
    def call(self, x: ITensor) -> ITensor:
        """
        Apply pooling to `x`.

        Parameters
        ----------
        x : ITensor
            3-D input tensor in the configured channel order. Not modified.

        Returns
        -------
        ITensor
            Newly allocated pooled tensor in the configured channel order.

        Raises
        ------
        InvalidConfigurationError
            If the reducer is neither max nor average.
        DimensionError
            If `x` is not 3-D or the window does not fit the padded input.
        """
        reducer = self.reducer
        H, W, _ = self._spatial_dims(x.shape)
        geometry = self._geometry(H, W)
        logger.debug(
            "%s: input=%s output_hw=%s padding=%s backend=%s",
            self._name,
            x.shape,
            geometry.output_hw,
            geometry.padding.as_tuple(),
            self.backend,
        )

        x_hwc = to_channels_last(x, self.channel_order)
        y = self._backend.pool2d(
            x_hwc,
            geometry=geometry,
            window_size=self.window_size,
            stride=self.stride,
            reducer=reducer,
        )
        return from_channels_last(y, self.channel_order)

    def get_config(self):
        cfg = super().get_config()
        cfg["reducer"] = self.reducer.value
        return cfg


@register_layer()
class MaxPooling2D(_Pooling2D):
    """
    2D max pooling layer.

    Border cells added by "same" padding hold `-inf` and therefore never
    become the maximum of a window that contains at least one real cell.
    """

    _reducer = PoolReducer.MAX


@register_layer()
class AveragePooling2D(_Pooling2D):
    """
    2D average pooling layer.

    Each window is averaged over its genuine cells only: at borders in "same"
    mode the divisor is the number of real input cells covered, so padding
    never dilutes the mean.
    """

    _reducer = PoolReducer.AVERAGE
