# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for color profiles and the white optimisation.
"""

import warnings

import numpy as np
import pytest

from conftest import (
    RGBTW_BLUE,
    RGBTW_COLD,
    RGBTW_GREEN,
    RGBTW_RED,
    RGBTW_WARM,
    SRGB_BLUE,
    SRGB_GREEN,
    SRGB_RED,
)
from emission_colorvalues import (
    CIE1931XYZAbs,
    CIE1931XYZRel,
    CIE1931xyYAbs,
    CIE1931xyYRel,
    CIE1976LAB,
    EmissionValue,
)
from emission_dcs import DCSVector, LinDCSVector
from emission_errors import ChannelCountMismatchError, SingularMatrixError, UnsupportedDimensionError
from emission_illuminants import ILLUMINANT_D65
from emission_limiter import OutputLimiterSum
from emission_profile import (
    CIE1931XYZColorProfile,
    ColorProfile,
    GeneralColorProfile,
    NoWhiteOptimization,
)
from emission_transfer import GammaTransferFunction

D65 = ILLUMINANT_D65.cie1931_xyz_rel()

# Single channel dimmable white and a two channel tunable white bulb.
DW_WHITE = CIE1931XYZAbs(0.5750302833988727, 0.5063118604976793, 0.16587493725962105).scaled(810)
TW_COLD = CIE1931XYZAbs(0.4453145432034966, 0.4936881395023207, 0.42839706385865284).scaled(720)
TW_WARM = CIE1931XYZAbs(0.5750302833988727, 0.5063118604976793, 0.16587493725962105).scaled(720)


def _primary_mixes(profile, n, scale, seed):
    """Colors inside the primary gamut, dim enough to never clamp."""
    rng = np.random.default_rng(seed)
    for _ in range(n):
        yield profile.primary_colors.multiplied(LinDCSVector(rng.uniform(0.0, scale, size=3)))


class TestConcreteScenario:
    def test_srgb_xyz_to_dcs(self, srgb_profile):
        dcs = srgb_profile.xyz_to_dcs(CIE1931XYZAbs(0.5, 0.4, 0.3))
        np.testing.assert_allclose(dcs.values, [0.933728, 0.564098, 0.550101], atol=1e-5)

    def test_value_dispatch(self, srgb_profile):
        color = CIE1931XYZAbs(0.5, 0.4, 0.3)
        assert color.into_dcs(srgb_profile) == srgb_profile.xyz_to_dcs(color)


class TestGeneralColorProfile:
    def test_implements_protocols(self, srgb_profile):
        assert isinstance(srgb_profile, ColorProfile)
        assert isinstance(CIE1931XYZAbs(0, 0, 0), EmissionValue)

    def test_queries(self, rgbtw_profile):
        assert rgbtw_profile.channels == 5
        assert rgbtw_profile.transfer_function is None
        assert rgbtw_profile.channel_points == [RGBTW_RED, RGBTW_GREEN, RGBTW_BLUE, RGBTW_COLD, RGBTW_WARM]
        assert rgbtw_profile.white_point == RGBTW_COLD + RGBTW_WARM

    def test_default_white_point(self):
        profile = GeneralColorProfile(primary_colors=[SRGB_RED, SRGB_GREEN, SRGB_BLUE])
        np.testing.assert_allclose(profile.white_point.as_array(), [0.9504700, 1.0, 1.0888300], atol=1e-6)
        profile = GeneralColorProfile(
            primary_colors=[RGBTW_RED, RGBTW_GREEN, RGBTW_BLUE],
            white_colors=[RGBTW_COLD, RGBTW_WARM],
        )
        assert profile.white_point == RGBTW_COLD.sum(RGBTW_WARM)

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_round_trip(self, srgb_profile, seed):
        for color in _primary_mixes(srgb_profile, 20, 0.6, seed):
            back = srgb_profile.dcs_to_xyz(srgb_profile.xyz_to_dcs(color))
            np.testing.assert_allclose(back.as_array(), color.as_array(), atol=1e-6)

    @pytest.mark.parametrize("profile_name", ["srgb_profile", "rgbtw_profile"])
    def test_pure_channels(self, request, profile_name):
        profile = request.getfixturevalue(profile_name)
        for i, point in enumerate(profile.channel_points):
            expected = np.zeros(profile.channels)
            expected[i] = 1.0
            np.testing.assert_allclose(profile.xyz_to_dcs(point).values, expected, atol=1e-9)

    def test_pure_white_channels(self, rgbtw_profile):
        dcs = rgbtw_profile.xyz_to_dcs(RGBTW_COLD)
        np.testing.assert_allclose(dcs.values, [0, 0, 0, 1, 0], atol=1e-9)
        dcs = rgbtw_profile.xyz_to_dcs(RGBTW_WARM.scaled(0.5))
        np.testing.assert_allclose(dcs.values, [0, 0, 0, 0, 0.5], atol=1e-9)

    def test_dcs_to_xyz_applies_transfer_function(self):
        profile = GeneralColorProfile(
            primary_colors=[SRGB_RED, SRGB_GREEN, SRGB_BLUE],
            transfer_function=GammaTransferFunction(2.0),
        )
        color = profile.dcs_to_xyz(DCSVector([0.5, 0.0, 0.0]))
        np.testing.assert_allclose(color.as_array(), SRGB_RED.scaled(0.25).as_array())

    def test_dcs_to_xyz_clamps(self, srgb_profile):
        color = srgb_profile.dcs_to_xyz(DCSVector([2.0, -1.0, 0.0]))
        np.testing.assert_allclose(color.as_array(), SRGB_RED.as_array())

    def test_dcs_to_xyz_applies_limiter(self, rgbtw_profile):
        color = rgbtw_profile.dcs_to_xyz(DCSVector([0, 0, 0, 1, 1]))
        np.testing.assert_allclose(color.as_array(), (RGBTW_COLD + RGBTW_WARM).as_array())
        color = rgbtw_profile.dcs_to_xyz([1, 1, 1, 1, 0])
        np.testing.assert_allclose(
            color.as_array(),
            RGBTW_RED.sum(RGBTW_GREEN, RGBTW_BLUE, RGBTW_COLD).scaled(0.5).as_array(),
        )

    def test_xyz_to_dcs_applies_limiter(self, rgbtw_profile):
        dcs = rgbtw_profile.xyz_to_dcs(rgbtw_profile.white_point.scaled(10.0))
        assert dcs.component_sum() <= 2.0 + 1e-9

    def test_channel_mismatch(self, srgb_profile):
        with pytest.raises(ChannelCountMismatchError) as excinfo:
            srgb_profile.dcs_to_xyz(DCSVector([1.0, 0.0]))
        assert (excinfo.value.got, excinfo.value.want) == (2, 3)

    def test_singular_primaries(self):
        with pytest.raises(SingularMatrixError, match="primary") as excinfo:
            GeneralColorProfile(primary_colors=[
                CIE1931XYZAbs(0.5, 0.25, 0.0),
                CIE1931XYZAbs(0.25, 0.125, 0.0),
                CIE1931XYZAbs(0.0, 0.0, 1.0),
            ])
        assert isinstance(excinfo.value.__cause__, SingularMatrixError)

    def test_singular_whites(self):
        with pytest.raises(SingularMatrixError, match="white"):
            GeneralColorProfile(
                primary_colors=[SRGB_RED, SRGB_GREEN, SRGB_BLUE],
                white_colors=[SRGB_RED, SRGB_RED],
            )

    def test_too_many_primaries(self):
        with pytest.raises(UnsupportedDimensionError):
            GeneralColorProfile(primary_colors=[SRGB_RED, SRGB_GREEN, SRGB_BLUE, DW_WHITE])

    def test_white_outside_gamut_warns(self):
        with pytest.warns(RuntimeWarning, match="outside the primary gamut"):
            GeneralColorProfile(
                primary_colors=[SRGB_RED, SRGB_GREEN, SRGB_BLUE],
                white_colors=[CIE1931XYZAbs(0.0, 0.0, 1.0)],
            )

    def test_white_inside_gamut_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            GeneralColorProfile(
                primary_colors=[RGBTW_RED, RGBTW_GREEN, RGBTW_BLUE],
                white_colors=[RGBTW_COLD, RGBTW_WARM],
            )


class TestDegenerateProfiles:
    def test_dimmable_white(self):
        profile = GeneralColorProfile(white_colors=[DW_WHITE], output_limiter=OutputLimiterSum(1))
        assert profile.channels == 1
        np.testing.assert_allclose(profile.xyz_to_dcs(DW_WHITE.scaled(0.4)).values, [0.4], atol=1e-12)
        np.testing.assert_allclose(profile.dcs_to_xyz([0.4]).as_array(), DW_WHITE.scaled(0.4).as_array())

    def test_single_primary(self):
        profile = GeneralColorProfile(primary_colors=[DW_WHITE])
        np.testing.assert_allclose(profile.xyz_to_dcs(DW_WHITE.scaled(0.7)).values, [0.7], atol=1e-12)

    def test_tunable_white(self):
        profile = GeneralColorProfile(white_colors=[TW_COLD, TW_WARM], output_limiter=OutputLimiterSum(2))
        color = TW_COLD.scaled(0.3) + TW_WARM.scaled(0.6)
        np.testing.assert_allclose(profile.xyz_to_dcs(color).values, [0.3, 0.6], atol=1e-12)

    def test_empty_profile(self):
        profile = GeneralColorProfile()
        assert profile.channels == 0
        assert profile.xyz_to_dcs(CIE1931XYZAbs(1, 1, 1)).channels == 0


class TestWhiteOptimization:
    @pytest.mark.parametrize("seed", [10, 11, 12])
    def test_color_is_preserved(self, rgbtw_profile, seed):
        wp = rgbtw_profile.white_point.Y
        for color in _primary_mixes(rgbtw_profile, 25, 0.2, seed):
            back = rgbtw_profile.dcs_to_xyz(rgbtw_profile.xyz_to_dcs(color))
            delta_e = back.relative(wp).cie1976_lab_distance(color.relative(wp), D65)
            assert delta_e < 1.0
            np.testing.assert_allclose(back.as_array(), color.as_array(), atol=1e-6)

    def test_whites_replace_primaries(self, rgbtw_profile):
        color = RGBTW_COLD.scaled(0.1) + RGBTW_WARM.scaled(0.1)
        dcs = rgbtw_profile.xyz_to_dcs(color)
        np.testing.assert_allclose(dcs.values, [0, 0, 0, 0.1, 0.1], atol=1e-9)

    def test_without_white_optimization(self, rgbtw_profile):
        color = RGBTW_COLD.scaled(0.1) + RGBTW_WARM.scaled(0.1)
        plain = rgbtw_profile.without_white_optimization()
        assert plain.channels == rgbtw_profile.channels
        assert not plain.white_optimization
        assert rgbtw_profile.white_optimization
        assert plain.without_white_optimization() is plain

        dcs = plain.xyz_to_dcs(color)
        np.testing.assert_array_equal(dcs.values[3:], [0.0, 0.0])
        assert np.all(dcs.values[:3] > 0.0)
        np.testing.assert_allclose(plain.dcs_to_xyz(dcs).as_array(), color.as_array(), atol=1e-6)

    def test_no_white_optimization_wrapper(self, rgbtw_profile):
        color = RGBTW_COLD.scaled(0.1) + RGBTW_WARM.scaled(0.1)
        wrapped = NoWhiteOptimization(color)
        assert isinstance(wrapped, EmissionValue)
        assert wrapped.into_dcs(rgbtw_profile) == rgbtw_profile.without_white_optimization().xyz_to_dcs(color)

    def test_no_white_optimization_keeps_dcs(self, rgbtw_profile):
        v = DCSVector([0.1, 0.2, 0.3, 0.4, 0.5])
        assert NoWhiteOptimization(v).into_dcs(rgbtw_profile) == v


class TestValueConversions:
    def test_relative_values(self, rgbtw_profile):
        color = CIE1931XYZRel(0.05, 0.05, 0.04)
        dcs = color.into_dcs(rgbtw_profile)
        assert dcs == color.absolute(rgbtw_profile.white_point.Y).into_dcs(rgbtw_profile)
        back = CIE1931XYZRel.from_dcs(rgbtw_profile, dcs)
        np.testing.assert_allclose(back.as_array(), color.as_array(), atol=1e-9)

    def test_xyy_round_trip(self, srgb_profile):
        color = CIE1931xyYRel(0.31271, 0.32902, 0.5)
        back = CIE1931xyYRel.from_dcs(srgb_profile, color.into_dcs(srgb_profile))
        np.testing.assert_allclose([back.x, back.y, back.luminance], [0.31271, 0.32902, 0.5], atol=1e-6)

        absolute = CIE1931xyYAbs(0.31271, 0.32902, 0.25)
        back_abs = CIE1931xyYAbs.from_dcs(srgb_profile, absolute.into_dcs(srgb_profile))
        np.testing.assert_allclose([back_abs.x, back_abs.y, back_abs.luminance], [0.31271, 0.32902, 0.25], atol=1e-6)

    def test_lab_round_trip(self, srgb_profile):
        lab = CIE1976LAB(50.0, 10.0, -10.0, D65)
        back = CIE1976LAB.from_dcs(srgb_profile, lab.into_dcs(srgb_profile), D65)
        assert back.distance(lab) < 1e-4


class TestCIE1931XYZColorProfile:
    @pytest.fixture
    def profile(self):
        return CIE1931XYZColorProfile(white_point=CIE1931XYZAbs(450.0, 500.0, 400.0))

    def test_queries(self, profile):
        assert isinstance(profile, ColorProfile)
        assert profile.channels == 3
        assert profile.channel_points[1] == CIE1931XYZAbs(0.0, 1.0, 0.0)
        assert profile.without_white_optimization() is profile

    def test_scales_to_white_point(self, profile):
        dcs = profile.xyz_to_dcs(CIE1931XYZAbs(225.0, 250.0, 200.0))
        np.testing.assert_allclose(dcs.values, [0.45, 0.5, 0.4])

    def test_round_trip_with_transfer_function(self):
        profile = CIE1931XYZColorProfile(CIE1931XYZAbs(450.0, 500.0, 400.0), GammaTransferFunction(2.2))
        color = CIE1931XYZAbs(100.0, 120.0, 80.0)
        np.testing.assert_allclose(profile.dcs_to_xyz(profile.xyz_to_dcs(color)).as_array(), color.as_array())

    def test_channel_mismatch(self, profile):
        with pytest.raises(ChannelCountMismatchError):
            profile.dcs_to_xyz(DCSVector([0.5]))

    def test_invalid_white_point(self):
        with pytest.raises(ValueError):
            CIE1931XYZColorProfile(CIE1931XYZAbs(1.0, 0.0, 1.0))
