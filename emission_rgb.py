# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: emission_rgb.py — sRGB color values.

Lets callers use familiar sRGB triplets (e.g. from a color picker) as
emission values.  The triplet is interpreted according to IEC 61966-2-1
relative to the D65 white of the sRGB primaries, and handed to the target
profile as relative XYZ, so "white" means the brightest white of the
device.  No chromatic adaptation is done.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from emission_colorvalues import CIE1931XYZAbs, CIE1931XYZRel
from emission_dcs import DCSVector
from emission_transfer import TRANSFER_FUNCTION_STANDARD_RGB
from emission_transformation import TransformationLinDCSToXYZ, TransformationXYZToLinDCS

if TYPE_CHECKING:
    from emission_profile import ColorProfile

__all__ = ["StandardRGB", "STANDARD_RGB_TRANSFORMATION"]

# sRGB primaries with Y of the D65 white normalised to 1.
STANDARD_RGB_TRANSFORMATION: Final[TransformationLinDCSToXYZ] = TransformationLinDCSToXYZ([
    CIE1931XYZAbs(0.4124, 0.2126, 0.0193),
    CIE1931XYZAbs(0.3576, 0.7152, 0.1192),
    CIE1931XYZAbs(0.1805, 0.0722, 0.9505),
])

_STANDARD_RGB_INVERSE: Final[TransformationXYZToLinDCS] = STANDARD_RGB_TRANSFORMATION.must_inverted()


@dataclass(frozen=True, slots=True)
class StandardRGB:
    """
    sRGB color with non-linear channels in the range [0, 1].

    Examples:
        StandardRGB(1.0, 0.5, 0.0).into_dcs(profile)
        StandardRGB.from_dcs(profile, dcs)
    """
    r: float
    g: float
    b: float

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.cie1931_xyz_rel().into_dcs(profile)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> StandardRGB:
        return cls.from_cie1931_xyz_rel(CIE1931XYZRel.from_dcs(profile, v))

    def cie1931_xyz_rel(self) -> CIE1931XYZRel:
        """Clamps, linearizes and converts the triplet into relative XYZ."""
        lin_v = DCSVector((self.r, self.g, self.b)).clamped_and_linearized(TRANSFER_FUNCTION_STANDARD_RGB)
        xyz = STANDARD_RGB_TRANSFORMATION.multiplied(lin_v)
        return CIE1931XYZRel(xyz.X, xyz.Y, xyz.Z)

    @classmethod
    def from_cie1931_xyz_rel(cls, color: CIE1931XYZRel) -> StandardRGB:
        """
        Returns the sRGB triplet closest to color.  Colors outside the sRGB
        gamut are clamped channel-wise.
        """
        lin_v = _STANDARD_RGB_INVERSE.multiplied(CIE1931XYZAbs(color.X, color.Y, color.Z))
        r, g, b = lin_v.clamped_and_delinearized(TRANSFER_FUNCTION_STANDARD_RGB)
        return cls(r, g, b)
