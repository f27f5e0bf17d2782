# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Profiles
==============
A color profile describes a set of light emitters (a module) that together
create a single color impression, and contains everything needed to convert
between CIE 1931 XYZ and the module's device color space.

Most devices contain one module with some number of channels (e.g. RGBW
bulbs), but there can be several per device (multi-headed lamps,
addressable LED strips).  A caller holds one profile per module:

    dcs = profile.xyz_to_dcs(color)     # XYZ → DCS, transmit dcs
    color = profile.dcs_to_xyz(dcs)     # DCS read back → XYZ

White Optimisation:
    ``GeneralColorProfile`` splits its channels into *primaries* that span
    the gamut and *whites* that lie inside it.  Any color the whites can
    produce can also be produced by the primaries, so the forward transform
    first solves with primaries only and then substitutes as much white
    drive as possible without pushing any primary negative.  The emitted
    color stays the same; output and color rendering improve.

Profiles are immutable once constructed: the inverse matrices are computed
eagerly in the constructor (which raises if a sub-matrix is singular) and
never written again, so a profile can be shared between threads freely.
"""

from __future__ import annotations

import copy
import warnings
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from emission_colorvalues import CIE1931XYZAbs, EmissionValue
from emission_dcs import DCSVector, LinDCSVector
from emission_errors import (
    ChannelCountMismatchError,
    SingularMatrixError,
    UnsupportedDimensionError,
)
from emission_limiter import OutputLimiter
from emission_transfer import TransferFunction
from emission_transformation import TransformationLinDCSToXYZ, TransformationXYZToLinDCS

__all__ = [
    "ColorProfile",
    "GeneralColorProfile",
    "CIE1931XYZColorProfile",
    "NoWhiteOptimization",
]

ColorColumns = Union[TransformationLinDCSToXYZ, Iterable[CIE1931XYZAbs]]
DCSInput = Union[DCSVector, Sequence[float], np.ndarray]

# Relative tolerance below which a negative primary coordinate of a white
# channel is treated as numerical noise.
_GAMUT_TOLERANCE = 1e-9


def _as_dcs(v: DCSInput) -> DCSVector:
    return v if isinstance(v, DCSVector) else DCSVector(v)


# ═══════════════════════════════════════════════════════════════════════════════
# 1.  ColorProfile — the interface consumed by device drivers
# ═══════════════════════════════════════════════════════════════════════════════
@runtime_checkable
class ColorProfile(Protocol):
    """
    Minimal interface of a color profile.

    channels                     → dimensionality of the device color space
    white_point                  → brightest color the module can output
    channel_points               → color of every channel at full drive
    transfer_function            → TransferFunction or None (linear DCS)
    xyz_to_dcs(color)            → DCSVector reproducing color as closely as possible
    dcs_to_xyz(v)                → color represented by v
    without_white_optimization() → variant that only drives primaries

    Concrete implementations:
      - GeneralColorProfile     (up to 3 primaries + up to 3 whites)
      - CIE1931XYZColorProfile  (device that takes XYZ directly)
    """
    @property
    def channels(self) -> int: ...
    @property
    def white_point(self) -> CIE1931XYZAbs: ...
    @property
    def channel_points(self) -> list[CIE1931XYZAbs]: ...
    @property
    def transfer_function(self) -> Optional[TransferFunction]: ...
    def xyz_to_dcs(self, color: CIE1931XYZAbs) -> DCSVector: ...
    def dcs_to_xyz(self, v: DCSVector) -> CIE1931XYZAbs: ...
    def without_white_optimization(self) -> ColorProfile: ...


# ═══════════════════════════════════════════════════════════════════════════════
# 2.  GeneralColorProfile
# ═══════════════════════════════════════════════════════════════════════════════
class GeneralColorProfile:
    """
    General color profile supporting:

      - Up to 3 primary colored emitters.
      - Up to 3 white emitters, so a total of 6 emitters.
      - Custom transfer functions.
      - Custom output limiters.

    Channel order is primaries first, then whites.

    Args:
        primary_colors: XYZ of every primary channel at full linear drive.
            All channels that increase the gamut have to go in here.
        white_colors: XYZ of every white channel at full linear drive.  These
            are maximised without changing the resulting color, and usually
            span a gamut inside that of the primaries.
        white_point: Brightest color the module can output.  Defaults to the
            brighter of all whites combined and all primaries combined.
        output_limiter: Optional limiter mirroring the device's internal
            output throttling.
        transfer_function: Non-linear ⇄ linear DCS transformation, None if the
            DCS is linear.

    Raises:
        SingularMatrixError: If the primary or white matrix can't be inverted.
        UnsupportedDimensionError: If there are more than 3 primaries or whites.

    Examples:
        profile = GeneralColorProfile(
            primary_colors=[red, green, blue],
            white_colors=[cold_white, warm_white],
            output_limiter=OutputLimiterSum(2),
        )
    """

    __slots__ = (
        "_primaries",
        "_whites",
        "_inv_primaries",
        "_inv_whites",
        "_white_point",
        "_limiter",
        "_tf",
        "_white_optimization",
    )

    def __init__(
        self,
        primary_colors: ColorColumns = (),
        white_colors: ColorColumns = (),
        white_point: Optional[CIE1931XYZAbs] = None,
        output_limiter: Optional[OutputLimiter] = None,
        transfer_function: Optional[TransferFunction] = None,
    ) -> None:
        self._primaries = TransformationLinDCSToXYZ(primary_colors)
        self._whites = TransformationLinDCSToXYZ(white_colors)
        self._inv_primaries = self._invert(self._primaries, "primary")
        self._inv_whites = self._invert(self._whites, "white")
        self._limiter = output_limiter
        self._tf = transfer_function
        self._white_optimization = True

        if white_point is None:
            white_sum = CIE1931XYZAbs(0.0, 0.0, 0.0).sum(*self._whites)
            primary_sum = CIE1931XYZAbs(0.0, 0.0, 0.0).sum(*self._primaries)
            white_point = white_sum if white_sum.Y >= primary_sum.Y else primary_sum
        self._white_point = white_point

        self._check_white_gamut()

    @staticmethod
    def _invert(t: TransformationLinDCSToXYZ, label: str) -> TransformationXYZToLinDCS:
        try:
            return t.inverted()
        except (SingularMatrixError, UnsupportedDimensionError) as err:
            raise type(err)(f"failed to invert {label} color matrix: {err}") from err

    def _check_white_gamut(self) -> None:
        """Warns about white channels the primaries can't reproduce."""
        if self._primaries.dcs_channels != 3:
            return
        for i, white in enumerate(self._whites):
            coords = self._inv_primaries.multiplied(white).values
            if np.any(coords < -_GAMUT_TOLERANCE * np.max(np.abs(coords))):
                warnings.warn(
                    f"White channel {i} {white} lies outside the primary gamut "
                    f"(primary coordinates {coords}); white optimisation will not use it "
                    f"for colors that need the out-of-gamut part.",
                    RuntimeWarning,
                    stacklevel=3,
                )

    def __repr__(self) -> str:
        return (
            f"GeneralColorProfile(primaries={self._primaries.dcs_channels}, "
            f"whites={self._whites.dcs_channels}, "
            f"limiter={self._limiter!r}, transfer_function={self._tf!r}, "
            f"white_optimization={self._white_optimization})"
        )

    # --- Read-only accessors ---

    @property
    def primary_colors(self) -> TransformationLinDCSToXYZ:
        return self._primaries

    @property
    def white_colors(self) -> TransformationLinDCSToXYZ:
        return self._whites

    @property
    def output_limiter(self) -> Optional[OutputLimiter]:
        return self._limiter

    @property
    def transfer_function(self) -> Optional[TransferFunction]:
        return self._tf

    @property
    def white_optimization(self) -> bool:
        """False for variants created by ``without_white_optimization``."""
        return self._white_optimization

    @property
    def channels(self) -> int:
        return self._primaries.dcs_channels + self._whites.dcs_channels

    @property
    def white_point(self) -> CIE1931XYZAbs:
        return self._white_point

    @property
    def full_transformation(self) -> TransformationLinDCSToXYZ:
        """Transformation containing all channels, primaries then whites."""
        return self._primaries + self._whites

    @property
    def channel_points(self) -> list[CIE1931XYZAbs]:
        """
        Color of every channel at full drive.  Depending on the module this
        could be a single white, RGB, RGB + white or RGB + cold + warm white.
        """
        return self.full_transformation.columns

    # --- Conversions ---

    def xyz_to_dcs(self, color: CIE1931XYZAbs) -> DCSVector:
        """
        Returns the DCS vector that reproduces color as closely as possible.

        Short: XYZ --> device color space.
        """
        # Primaries only.  Negative entries mean color is outside the gamut.
        primary_v = self._inv_primaries.multiplied(color)

        # Closest white drive; white LEDs can't subtract light.
        white_v = self._inv_whites.multiplied(color).clamped_to_positive()
        white_color = self._whites.multiplied(white_v)
        # Can contain negative values if the white is outside the primary gamut.
        white_in_primary = self._inv_primaries.multiplied(white_color)

        # Trade primary drive for white drive without changing the total
        # color, as far as no primary channel goes negative.
        scale = primary_v.scaled_to_positive_difference(white_in_primary)
        primary_v = primary_v.sum(white_in_primary.scaled(-scale))
        white_v = white_v.scaled(scale)

        lin_v = primary_v.concatenated(white_v)

        if self._limiter is not None:
            lin_v = self._limiter.limit(lin_v)

        return lin_v.clamped_and_delinearized(self._tf)

    def dcs_to_xyz(self, v: DCSInput) -> CIE1931XYZAbs:
        """
        Returns the color represented by the DCS vector v.

        Short: device color space --> XYZ.

        Raises:
            ChannelCountMismatchError: If v doesn't match the profile's channels.
        """
        v = _as_dcs(v)
        if v.channels != self.channels:
            raise ChannelCountMismatchError(v.channels, self.channels, "DCS to XYZ")

        lin_v = v.clamped_and_linearized(self._tf)

        if self._limiter is not None:
            lin_v = self._limiter.limit(lin_v)

        return self.full_transformation.multiplied(lin_v)

    def without_white_optimization(self) -> GeneralColorProfile:
        """
        Same profile, but the white channels contribute nothing.

        Colors are constructed out of primaries only.  The color doesn't
        change, but maximum brightness and CRI may be lower.  Useful where
        white and primary emitters are low-pass filtered differently by the
        hardware and fast color changes must stay in sync.
        """
        if not self._white_optimization:
            return self
        variant = copy.copy(self)
        variant._inv_whites = self._inv_whites.zeroed()
        variant._white_optimization = False
        return variant


# ═══════════════════════════════════════════════════════════════════════════════
# 3.  CIE1931XYZColorProfile
# ═══════════════════════════════════════════════════════════════════════════════
class CIE1931XYZColorProfile:
    """
    Profile of a module that takes CIE 1931 XYZ directly.

    Only converts into a space with relative luminance (white point Y = 1),
    the device is assumed to do the color transformation itself.  No
    chromatic adaptation is done.
    """

    __slots__ = ("_white_point", "_tf")

    def __init__(
        self,
        white_point: CIE1931XYZAbs,
        transfer_function: Optional[TransferFunction] = None,
    ) -> None:
        if not white_point.Y > 0:
            raise ValueError(f"White point luminance must be > 0, got {white_point.Y}")
        self._white_point = white_point
        self._tf = transfer_function

    def __repr__(self) -> str:
        return f"CIE1931XYZColorProfile(white_point={self._white_point!r}, transfer_function={self._tf!r})"

    @property
    def channels(self) -> int:
        return 3

    @property
    def white_point(self) -> CIE1931XYZAbs:
        return self._white_point

    @property
    def channel_points(self) -> list[CIE1931XYZAbs]:
        return [CIE1931XYZAbs(1.0, 0.0, 0.0), CIE1931XYZAbs(0.0, 1.0, 0.0), CIE1931XYZAbs(0.0, 0.0, 1.0)]

    @property
    def transfer_function(self) -> Optional[TransferFunction]:
        return self._tf

    def xyz_to_dcs(self, color: CIE1931XYZAbs) -> DCSVector:
        # Scale so that the white point results in Y = 1.0
        v = LinDCSVector(color.as_array()).scaled(1.0 / self._white_point.Y)
        return v.clamped_and_delinearized(self._tf)

    def dcs_to_xyz(self, v: DCSInput) -> CIE1931XYZAbs:
        v = _as_dcs(v)
        if v.channels != self.channels:
            raise ChannelCountMismatchError(v.channels, self.channels, "DCS to XYZ")
        lin_v = v.clamped_and_linearized(self._tf).scaled(self._white_point.Y)
        return CIE1931XYZAbs.from_array(lin_v.values)

    def without_white_optimization(self) -> CIE1931XYZColorProfile:
        return self


# ═══════════════════════════════════════════════════════════════════════════════
# 4.  NoWhiteOptimization — value wrapper
# ═══════════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True, slots=True)
class NoWhiteOptimization:
    """
    Wraps an emission value to disable white emitter optimisation.

    The value is then constructed out of primary emitters only.  This has no
    effect on DCS vectors, as they bypass the color management.
    """
    value: EmissionValue

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.value.into_dcs(profile.without_white_optimization())
