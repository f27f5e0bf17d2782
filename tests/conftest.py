# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Shared fixtures: measured and standard emitter modules.
"""

import pytest

from emission_colorvalues import CIE1931XYZAbs
from emission_limiter import OutputLimiterSum
from emission_profile import GeneralColorProfile
from emission_transfer import TRANSFER_FUNCTION_STANDARD_RGB, set_strict_ieee

# sRGB primaries (IEC 61966-2-1, Lindbloom precision), D65 white with Y = 1.
SRGB_RED = CIE1931XYZAbs(0.4124564, 0.2126729, 0.0193339)
SRGB_GREEN = CIE1931XYZAbs(0.3575761, 0.7151522, 0.1191920)
SRGB_BLUE = CIE1931XYZAbs(0.1804375, 0.0721750, 0.9503041)

# Measured RGB + cold white + warm white bulb, in lumen.
RGBTW_RED = CIE1931XYZAbs(198.136406299187, 86.6027529080741, 0.0479301103007406)
RGBTW_GREEN = CIE1931XYZAbs(43.7905927586912, 195.166857944595, 31.6765054168812)
RGBTW_BLUE = CIE1931XYZAbs(129.149462685368, 51.1132970868513, 731.546582530092)
RGBTW_COLD = CIE1931XYZAbs(680.061978810243, 761.238333698754, 746.14571679305)
RGBTW_WARM = CIE1931XYZAbs(844.960958613623, 759.761666301247, 230.895041995431)


@pytest.fixture
def srgb_profile():
    return GeneralColorProfile(
        primary_colors=[SRGB_RED, SRGB_GREEN, SRGB_BLUE],
        output_limiter=OutputLimiterSum(2),
        transfer_function=TRANSFER_FUNCTION_STANDARD_RGB,
    )


@pytest.fixture
def rgbtw_profile():
    return GeneralColorProfile(
        primary_colors=[RGBTW_RED, RGBTW_GREEN, RGBTW_BLUE],
        white_colors=[RGBTW_COLD, RGBTW_WARM],
        white_point=RGBTW_COLD + RGBTW_WARM,
        output_limiter=OutputLimiterSum(2),
    )


@pytest.fixture
def strict_ieee():
    set_strict_ieee(True)
    yield
    set_strict_ieee(False)
