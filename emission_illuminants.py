# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: emission_illuminants.py — CIE standard illuminants.

Chromaticities of the CIE 1931 2° standard observer with relative
luminance 1.  Use ``scaled`` to dim them, or pass them to
``CIE1976LAB`` conversions as white point via ``cie1931_xyz_rel()``.

Source: CIE 15:2004, Table T.3 / Lindbloom.
"""

from __future__ import annotations

from typing import Final

from emission_colorvalues import CIE1931XYZRel, CIE1931xyYRel

__all__ = [
    "ILLUMINANT_A",
    "ILLUMINANT_B",
    "ILLUMINANT_C",
    "ILLUMINANT_D50",
    "ILLUMINANT_D55",
    "ILLUMINANT_D65",
    "ILLUMINANT_D75",
    "ILLUMINANT_D93",
    "ILLUMINANT_E",
    "STANDARD_ILLUMINANTS",
]

# Incandescent / tungsten.
ILLUMINANT_A: Final[CIE1931xyYRel] = CIE1931xyYRel(0.44757, 0.40745, 1.0)
# Obsolete, direct sunlight at noon.
ILLUMINANT_B: Final[CIE1931xyYRel] = CIE1931xyYRel(0.34842, 0.35161, 1.0)
# Obsolete, average / north sky daylight.
ILLUMINANT_C: Final[CIE1931xyYRel] = CIE1931xyYRel(0.31006, 0.31616, 1.0)
# Horizon light, ICC profile PCS.
ILLUMINANT_D50: Final[CIE1931xyYRel] = CIE1931xyYRel(0.34567, 0.35850, 1.0)
# Mid-morning / mid-afternoon daylight.
ILLUMINANT_D55: Final[CIE1931xyYRel] = CIE1931xyYRel(0.33242, 0.34743, 1.0)
# Noon daylight: television, sRGB color space.
ILLUMINANT_D65: Final[CIE1931xyYRel] = CIE1931xyYRel(0.31271, 0.32902, 1.0)
# North sky daylight.
ILLUMINANT_D75: Final[CIE1931xyYRel] = CIE1931xyYRel(0.29902, 0.31485, 1.0)
# High-efficiency blue phosphor monitors.
ILLUMINANT_D93: Final[CIE1931xyYRel] = CIE1931xyYRel(0.28315, 0.29711, 1.0)
# Equal energy.
ILLUMINANT_E: Final[CIE1931XYZRel] = CIE1931XYZRel(1.0, 1.0, 1.0)

STANDARD_ILLUMINANTS: Final[dict[str, CIE1931XYZRel]] = {
    "A": ILLUMINANT_A.cie1931_xyz_rel(),
    "B": ILLUMINANT_B.cie1931_xyz_rel(),
    "C": ILLUMINANT_C.cie1931_xyz_rel(),
    "D50": ILLUMINANT_D50.cie1931_xyz_rel(),
    "D55": ILLUMINANT_D55.cie1931_xyz_rel(),
    "D65": ILLUMINANT_D65.cie1931_xyz_rel(),
    "D75": ILLUMINANT_D75.cie1931_xyz_rel(),
    "D93": ILLUMINANT_D93.cie1931_xyz_rel(),
    "E": ILLUMINANT_E,
}
