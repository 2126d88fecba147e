"""
Pooling option enumerations.

This module defines the small closed vocabularies that configure a 2D pooling
layer:

- `PaddingMode`  : "valid" (no synthetic border) or "same" (output tracks
  ``ceil(input / stride)``)
- `ChannelOrder` : whether the channel axis is last or first
- `PoolReducer`  : max or average reduction over each window

Each enum provides a `parse` classmethod that accepts either an enum member or
one of its accepted string spellings, including the legacy Keras 1 spellings
("tf"/"th" for channel ordering).
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from ._errors import InvalidConfigurationError


class PaddingMode(Enum):
    """
    Border handling for pooling windows.

    Attributes
    ----------
    VALID : PaddingMode
        Windows only cover real input cells.
    SAME : PaddingMode
        Synthetic border cells are added so every input cell is covered.
    """

    VALID = "valid"
    SAME = "same"

    @classmethod
    def parse(cls, value: Union["PaddingMode", str]) -> "PaddingMode":
        """
        Normalize a padding mode given as enum member or string.

        Raises
        ------
        InvalidConfigurationError
            If the spelling is not recognized.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise InvalidConfigurationError(
            "padding_mode", value, "Expected 'valid' or 'same'."
        )


_CHANNEL_ORDER_ALIASES: Dict[str, str] = {
    "channelslast": "channelsLast",
    "channels_last": "channelsLast",
    "tf": "channelsLast",
    "channelsfirst": "channelsFirst",
    "channels_first": "channelsFirst",
    "th": "channelsFirst",
}


class ChannelOrder(Enum):
    """
    Position of the channel axis in a 3-D feature tensor.

    Attributes
    ----------
    CHANNELS_LAST : ChannelOrder
        Tensors are laid out as (rows, cols, channels).
    CHANNELS_FIRST : ChannelOrder
        Tensors are laid out as (channels, rows, cols).
    """

    CHANNELS_LAST = "channelsLast"
    CHANNELS_FIRST = "channelsFirst"

    @classmethod
    def parse(cls, value: Union["ChannelOrder", str]) -> "ChannelOrder":
        """
        Normalize a channel order given as enum member or string.

        Raises
        ------
        InvalidConfigurationError
            If the spelling is not recognized.
        """
        if isinstance(value, cls):
            return value
        canonical = _CHANNEL_ORDER_ALIASES.get(str(value).strip().lower())
        if canonical is None:
            raise InvalidConfigurationError(
                "channel_order",
                value,
                "Expected 'channelsLast' ('tf') or 'channelsFirst' ('th').",
            )
        return cls(canonical)


_REDUCER_ALIASES: Dict[str, str] = {
    "max": "max",
    "average": "average",
    "avg": "average",
    "mean": "average",
}


class PoolReducer(Enum):
    """
    Reduction applied to each pooling window, per channel.

    Attributes
    ----------
    MAX : PoolReducer
        Largest value in the window.
    AVERAGE : PoolReducer
        Mean over the genuine (non-padding) cells in the window.
    """

    MAX = "max"
    AVERAGE = "average"

    @classmethod
    def parse(cls, value: Union["PoolReducer", str]) -> "PoolReducer":
        """
        Normalize a reducer given as enum member or string.

        Raises
        ------
        InvalidConfigurationError
            If the reducer is neither max nor average.
        """
        if isinstance(value, cls):
            return value
        canonical = _REDUCER_ALIASES.get(str(value).strip().lower())
        if canonical is None:
            raise InvalidConfigurationError(
                "reducer", value, "Pooling function must be max or average."
            )
        return cls(canonical)
