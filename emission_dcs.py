# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: emission_dcs.py — Device color space (DCS) vectors.

A DCS vector is more or less what is sent to the light device: one drive
level per channel, e.g. 5 channels for RGB + cold white + warm white.
The channel order is fixed by the owning color profile (primaries first,
then whites).

Two flavours exist:
  - ``DCSVector``     non-linear, as transmitted to the hardware.
  - ``LinDCSVector``  linear, after the inverse transfer function and
                      before color mixing.

If clamped, values are in the range [0, 1].  They may be unclamped
depending on the context they are used in (e.g. intermediate results of
the white optimisation).

Vectors are immutable: the backing float64 array is read-only, and every
operation returns a new vector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Optional, Sequence, TypeVar, Union

import numpy as np

from emission_errors import ChannelCountMismatchError

if TYPE_CHECKING:
    from emission_profile import ColorProfile
    from emission_transfer import TransferFunction

__all__ = ["DCSVector", "LinDCSVector"]

_V = TypeVar("_V", bound="_ChannelVector")


@dataclass(frozen=True, slots=True, eq=False)
class _ChannelVector:
    """Shared storage and arithmetic of both DCS vector flavours."""
    values: np.ndarray

    def __init__(self, values: Union[Sequence[float], np.ndarray] = ()) -> None:
        arr = np.array(values, dtype=np.float64).ravel()
        arr.flags.writeable = False
        object.__setattr__(self, "values", arr)

    # --- Sequence behaviour ---

    def __len__(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, index: int) -> float:
        return float(self.values[index])

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self.values)

    def __array__(self, dtype: Any = None, copy: Optional[bool] = None) -> np.ndarray:
        if dtype is None:
            return self.values.copy()
        return self.values.astype(dtype)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.values.tobytes()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{v:.6g}" for v in self.values)
        return f"{type(self).__name__}({inner})"

    # --- Common operations ---

    @property
    def channels(self) -> int:
        """The dimensionality of the device color space."""
        return self.values.shape[0]

    def copy(self: _V) -> _V:
        return type(self)(self.values)

    def _check_channels(self, other: _ChannelVector) -> None:
        if self.channels != other.channels:
            raise ChannelCountMismatchError(other.channels, self.channels, "DCS vector arithmetic")

    def clamped_individually(self: _V) -> _V:
        """
        Returns all channels individually clamped into [0, 1].

            DCSVector([1.1, 0.9]) --> DCSVector([1.0, 0.9])
        """
        return type(self)(np.clip(self.values, 0.0, 1.0))

    def component_sum(self) -> float:
        """Sum of all components, unclamped."""
        return float(np.sum(self.values))

    def difference(self: _V, other: _V) -> _V:
        """
        Returns self - other.

        For non-linear vectors this may or may not be meaningful, as the
        space isn't linear.
        """
        self._check_channels(other)
        return type(self)(self.values - other.values)


@dataclass(frozen=True, slots=True, eq=False, init=False, repr=False)
class DCSVector(_ChannelVector):
    """A vector in the (non-linear) device color space."""

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> DCSVector:
        return cls(v.values)

    def clamped_and_linearized(self, tf: Optional[TransferFunction]) -> LinDCSVector:
        """
        Clamps all channels into [0, 1] and transforms the result into the
        linear device color space with the transfer function tf.

        A tf of None denotes a linear device color space.
        """
        clamped = self.clamped_individually()
        if tf is None:
            return LinDCSVector(clamped.values)
        return tf.linearize(clamped)


@dataclass(frozen=True, slots=True, eq=False, init=False, repr=False)
class LinDCSVector(_ChannelVector):
    """A vector in the linear device color space."""

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.clamped_and_delinearized(profile.transfer_function)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> LinDCSVector:
        return v.clamped_and_linearized(profile.transfer_function)

    def clamped_to_positive(self) -> LinDCSVector:
        """
        Returns all channels individually clamped into [0, +inf).

            LinDCSVector([1.1, 0.9, -0.1]) --> LinDCSVector([1.1, 0.9, 0.0])
        """
        return LinDCSVector(np.maximum(self.values, 0.0))

    def clamped_and_delinearized(self, tf: Optional[TransferFunction]) -> DCSVector:
        """
        Clamps all channels into [0, 1] and transforms the result into the
        non-linear device color space with the transfer function tf.
        """
        clamped = self.clamped_individually()
        if tf is None:
            return DCSVector(clamped.values)
        return tf.delinearize(clamped)

    def sum(self, *vectors: LinDCSVector) -> LinDCSVector:
        """Returns the sum of self and all other vectors."""
        result = self.values.copy()
        for v in vectors:
            self._check_channels(v)
            result += v.values
        return LinDCSVector(result)

    def __add__(self, other: LinDCSVector) -> LinDCSVector:
        if not isinstance(other, LinDCSVector):
            return NotImplemented
        return self.sum(other)

    def scaled(self, s: float) -> LinDCSVector:
        return LinDCSVector(self.values * s)

    def concatenated(self, *vectors: LinDCSVector) -> LinDCSVector:
        """Appends the channels of all vectors to the channels of self."""
        return LinDCSVector(np.concatenate([self.values, *(v.values for v in vectors)]))

    def scaled_to_positive_difference(self, other: LinDCSVector) -> float:
        """
        Largest factor s in [0, 1] so that ``self - other * s`` has no
        negative channel.

        Channels where the ratio is undefined (0/0) don't constrain s.
        """
        self._check_channels(other)
        with np.errstate(divide="ignore", invalid="ignore"):
            ratios = self.values / other.values
        ratios = ratios[~np.isnan(ratios)]
        s_min = min(1.0, float(ratios.min())) if ratios.size else 1.0
        return min(max(s_min, 0.0), 1.0)
