# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colorimetric Value Types
========================
Immutable CIE 1931 XYZ / xyY and CIE 1976 L*a*b* values and the exact
conversion math between them.

Luminance Convention:
    Values come in two flavours.  *Absolute* values carry the luminance Y
    in lumen.  *Relative* values normalise Y to the brightest color a
    device (color profile) can emit, so Y = 1.0 corresponds to full output.
    The profile's white point is the bridge between both flavours:

        rel = abs.relative(profile.white_point.Y)
        abs = rel.absolute(profile.white_point.Y)

    An equal-energy radiator results in X == Y == Z.

Black Pixel Convention:
    Converting black (X + Y + Z == 0) to xyY yields (0, 0, 0) instead of
    NaN chromaticities (colour-science convention, not CIE mandated).  The
    opposite direction has no such escape hatch: an xyY value with y == 0
    carries no colorimetric information and raises
    ``DomainNotRepresentableError``.

References:
    - CIE 15:2004 "Colorimetry"
    - http://www.brucelindbloom.com/LContinuity.html
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

import numpy as np

from emission_errors import DomainNotRepresentableError

if TYPE_CHECKING:
    from emission_dcs import DCSVector
    from emission_profile import ColorProfile

__all__ = [
    # --- Constants ---
    "LAB_DELTA",
    "LAB_EPSILON",
    "LAB_KAPPA",

    # --- Protocols ---
    "EmissionValue",

    # --- Classes ---
    "CIE1931XYZAbs",
    "CIE1931XYZRel",
    "CIE1931xyYAbs",
    "CIE1931xyYRel",
    "CIE1976LAB",
]

# --- Exact Rational Math Constants ---
# Using the intent of the CIE standard, not the rounded numbers it publishes.
# delta = 6/29 is the threshold where the function switches from cubic to linear.
LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = LAB_DELTA * LAB_DELTA * LAB_DELTA  # ~0.008856
LAB_KAPPA: Final[float] = (116.0 * 29.0 * 29.0) / (3.0 * 6.0 * 6.0)  # ~903.296


def _lab_f(t: float) -> float:
    """Forward L*a*b* companding with a linear slope near zero."""
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0


def _lab_f_inv(t: float) -> float:
    """
    Inverse L*a*b* companding.

    Uses the multiplication form (116*t - 16)/k to minimise division error
    near the delta threshold.
    """
    if t > LAB_DELTA:
        return t * t * t
    return (116.0 * t - 16.0) / LAB_KAPPA


def _check_max_luminance(max_luminance: float) -> None:
    if not max_luminance > 0:
        raise ValueError(f"Maximum luminance must be > 0, got {max_luminance}")


# =============================================================================
# 1. VALUE PROTOCOL
# =============================================================================

@runtime_checkable
class EmissionValue(Protocol):
    """
    Anything that can be rendered by a light emitting device.

    into_dcs(profile) → DCSVector that the device driver transmits.

    Types that can also be read back from a device additionally provide a
    ``from_dcs(profile, vector)`` classmethod.
    """
    def into_dcs(self, profile: ColorProfile) -> DCSVector: ...


# =============================================================================
# 2. CIE 1931 XYZ
# =============================================================================

@dataclass(frozen=True, slots=True)
class CIE1931XYZAbs:
    """CIE 1931 XYZ color with an absolute luminance Y in lumen."""
    X: float
    Y: float
    Z: float

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return profile.xyz_to_dcs(self)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> CIE1931XYZAbs:
        return profile.dcs_to_xyz(v)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> CIE1931XYZAbs:
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def as_array(self) -> np.ndarray:
        return np.array((self.X, self.Y, self.Z), dtype=np.float64)

    def relative(self, max_luminance: float) -> CIE1931XYZRel:
        """
        Returns the color with a luminance relative to max_luminance.

        Args:
            max_luminance: The highest possible luminance in lumen.
        """
        _check_max_luminance(max_luminance)
        return CIE1931XYZRel(self.X / max_luminance, self.Y / max_luminance, self.Z / max_luminance)

    def cie1931_xyy_abs(self) -> CIE1931xyYAbs:
        total = self.X + self.Y + self.Z
        if total == 0:
            return CIE1931xyYAbs(0.0, 0.0, 0.0)
        return CIE1931xyYAbs(self.X / total, self.Y / total, self.Y)

    def sum(self, *colors: CIE1931XYZAbs) -> CIE1931XYZAbs:
        """Returns the sum of self and all colors."""
        X, Y, Z = self.X, self.Y, self.Z
        for color in colors:
            X += color.X
            Y += color.Y
            Z += color.Z
        return CIE1931XYZAbs(X, Y, Z)

    def __add__(self, other: CIE1931XYZAbs) -> CIE1931XYZAbs:
        if not isinstance(other, CIE1931XYZAbs):
            return NotImplemented
        return self.sum(other)

    def scaled(self, s: float) -> CIE1931XYZAbs:
        return CIE1931XYZAbs(self.X * s, self.Y * s, self.Z * s)

    def cross(self, other: CIE1931XYZAbs) -> CIE1931XYZAbs:
        """Cross product of two color vectors."""
        return CIE1931XYZAbs(
            self.Y * other.Z - self.Z * other.Y,
            self.Z * other.X - self.X * other.Z,
            self.X * other.Y - self.Y * other.X,
        )


@dataclass(frozen=True, slots=True)
class CIE1931XYZRel:
    """
    CIE 1931 XYZ color with a relative luminance.

    Y is in the range [0, 1], where 1 corresponds to the full light output
    of the device this value is rendered on.
    """
    X: float
    Y: float
    Z: float

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.absolute(profile.white_point.Y).into_dcs(profile)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> CIE1931XYZRel:
        return CIE1931XYZAbs.from_dcs(profile, v).relative(profile.white_point.Y)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> CIE1931XYZRel:
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def as_array(self) -> np.ndarray:
        return np.array((self.X, self.Y, self.Z), dtype=np.float64)

    def absolute(self, max_luminance: float) -> CIE1931XYZAbs:
        """
        Returns the color with an absolute luminance in lumen.

        Args:
            max_luminance: The highest possible luminance in lumen.
        """
        _check_max_luminance(max_luminance)
        return CIE1931XYZAbs(self.X * max_luminance, self.Y * max_luminance, self.Z * max_luminance)

    def cie1931_xyy_rel(self) -> CIE1931xyYRel:
        total = self.X + self.Y + self.Z
        if total == 0:
            return CIE1931xyYRel(0.0, 0.0, 0.0)
        return CIE1931xyYRel(self.X / total, self.Y / total, self.Y)

    def __add__(self, other: CIE1931XYZRel) -> CIE1931XYZRel:
        if not isinstance(other, CIE1931XYZRel):
            return NotImplemented
        return CIE1931XYZRel(self.X + other.X, self.Y + other.Y, self.Z + other.Z)

    def scaled(self, s: float) -> CIE1931XYZRel:
        return CIE1931XYZRel(self.X * s, self.Y * s, self.Z * s)

    def distance(self, other: CIE1931XYZRel) -> float:
        """
        Euclidean distance in XYZ.

        This doesn't represent the perceptual difference of two colors, see
        ``cie1976_lab_distance`` for that.
        """
        return math.sqrt(
            (self.X - other.X) ** 2 + (self.Y - other.Y) ** 2 + (self.Z - other.Z) ** 2
        )

    def cie1976_lab(self, white_point: CIE1931XYZRel) -> CIE1976LAB:
        """Transforms the color into CIE 1976 L*a*b* with the given white point."""
        fx = _lab_f(self.X / white_point.X)
        fy = _lab_f(self.Y / white_point.Y)
        fz = _lab_f(self.Z / white_point.Z)
        return CIE1976LAB(
            L=116.0 * fy - 16.0,
            a=500.0 * (fx - fy),
            b=200.0 * (fy - fz),
            white_point=white_point,
        )

    def cie1976_lab_distance(self, other: CIE1931XYZRel, white_point: CIE1931XYZRel) -> float:
        """
        Perceptual difference ΔE*ab between self and other.

        A value of about 2.3 is just noticeable.
        """
        return self.cie1976_lab(white_point).distance(other.cie1976_lab(white_point))

    def cie1976_lab_distance_sqr(self, other: CIE1931XYZRel, white_point: CIE1931XYZRel) -> float:
        """Squared ΔE*ab, cheaper to compute when only comparing distances."""
        return self.cie1976_lab(white_point).distance_sqr(other.cie1976_lab(white_point))


# =============================================================================
# 3. CIE 1931 xyY
# =============================================================================

def _xyy_to_xyz(x: float, y: float, luminance: float) -> tuple[float, float, float]:
    if y == 0:
        raise DomainNotRepresentableError(
            f"xyY chromaticity ({x}, {y}) has y == 0 and no XYZ equivalent"
        )
    return x * luminance / y, luminance, (1.0 - x - y) * luminance / y


@dataclass(frozen=True, slots=True)
class CIE1931xyYAbs:
    """
    CIE 1931 xyY color with an absolute luminance in lumen.

    An equal-energy radiator results in x == y == 1/3.
    """
    x: float
    y: float
    luminance: float

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.cie1931_xyz_abs().into_dcs(profile)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> CIE1931xyYAbs:
        return CIE1931XYZAbs.from_dcs(profile, v).cie1931_xyy_abs()

    def relative(self, max_luminance: float) -> CIE1931xyYRel:
        _check_max_luminance(max_luminance)
        return CIE1931xyYRel(self.x, self.y, self.luminance / max_luminance)

    def cie1931_xyz_abs(self) -> CIE1931XYZAbs:
        return CIE1931XYZAbs(*_xyy_to_xyz(self.x, self.y, self.luminance))

    def scaled(self, s: float) -> CIE1931xyYAbs:
        return CIE1931xyYAbs(self.x, self.y, self.luminance * s)


@dataclass(frozen=True, slots=True)
class CIE1931xyYRel:
    """
    CIE 1931 xyY color with a relative luminance in the range [0, 1].

    Use ``scaled`` on a relative value to dim it, or ``absolute`` to pin it
    to a luminance in lumen.
    """
    x: float
    y: float
    luminance: float

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.absolute(profile.white_point.Y).into_dcs(profile)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector) -> CIE1931xyYRel:
        return CIE1931xyYAbs.from_dcs(profile, v).relative(profile.white_point.Y)

    def absolute(self, max_luminance: float) -> CIE1931xyYAbs:
        _check_max_luminance(max_luminance)
        return CIE1931xyYAbs(self.x, self.y, self.luminance * max_luminance)

    def cie1931_xyz_rel(self) -> CIE1931XYZRel:
        return CIE1931XYZRel(*_xyy_to_xyz(self.x, self.y, self.luminance))

    def scaled(self, s: float) -> CIE1931xyYRel:
        return CIE1931xyYRel(self.x, self.y, self.luminance * s)


# =============================================================================
# 4. CIE 1976 L*a*b*
# =============================================================================

@dataclass(frozen=True, slots=True)
class CIE1976LAB:
    """
    Color in the CIE 1976 L*a*b* space.

    Attributes:
        L: Perceptual lightness L* in the range [0, 100].
        a: Redness a*.
        b: Blueness b*.
        white_point: Relative XYZ white point the value was computed against.
    """
    L: float
    a: float
    b: float
    white_point: CIE1931XYZRel

    def into_dcs(self, profile: ColorProfile) -> DCSVector:
        return self.cie1931_xyz_rel().into_dcs(profile)

    @classmethod
    def from_dcs(cls, profile: ColorProfile, v: DCSVector, white_point: CIE1931XYZRel) -> CIE1976LAB:
        return CIE1931XYZRel.from_dcs(profile, v).cie1976_lab(white_point)

    def cie1931_xyz_rel(self) -> CIE1931XYZRel:
        l_scaled = (self.L + 16.0) / 116.0
        wp = self.white_point
        return CIE1931XYZRel(
            X=wp.X * _lab_f_inv(l_scaled + self.a / 500.0),
            Y=wp.Y * _lab_f_inv(l_scaled),
            Z=wp.Z * _lab_f_inv(l_scaled - self.b / 200.0),
        )

    def distance_sqr(self, other: CIE1976LAB) -> float:
        if self.white_point != other.white_point:
            raise ValueError(
                f"L*a*b* values use different white points {self.white_point} and {other.white_point}"
            )
        return (self.L - other.L) ** 2 + (self.a - other.a) ** 2 + (self.b - other.b) ** 2

    def distance(self, other: CIE1976LAB) -> float:
        """
        ΔE*ab between self and other.

        Both values need to share the same white point, otherwise the
        distance is meaningless and a ValueError is raised.
        """
        return math.sqrt(self.distance_sqr(other))
