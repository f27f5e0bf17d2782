# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for device color space vectors.
"""

import numpy as np
import pytest

from emission_dcs import DCSVector, LinDCSVector
from emission_errors import ChannelCountMismatchError
from emission_transfer import GammaTransferFunction


class TestStorage:
    def test_values_are_read_only(self):
        v = DCSVector([0.1, 0.2])
        with pytest.raises(ValueError):
            v.values[0] = 1.0

    def test_input_is_copied(self):
        src = np.array([0.1, 0.2])
        v = LinDCSVector(src)
        src[0] = 5.0
        assert v[0] == 0.1

    def test_sequence_behaviour(self):
        v = DCSVector([0.25, 0.5, 1.0])
        assert len(v) == v.channels == 3
        assert list(v) == [0.25, 0.5, 1.0]
        assert v[1] == 0.5
        np.testing.assert_array_equal(np.asarray(v), [0.25, 0.5, 1.0])

    def test_equality_and_hash(self):
        assert DCSVector([1, 0]) == DCSVector([1.0, 0.0])
        assert hash(DCSVector([1, 0])) == hash(DCSVector([1.0, 0.0]))
        # Linear and non-linear vectors are never equal
        assert DCSVector([1, 0]) != LinDCSVector([1, 0])

    def test_empty_vector(self):
        v = LinDCSVector()
        assert v.channels == 0
        assert v.component_sum() == 0.0


class TestClamping:
    def test_clamped_individually(self):
        v = DCSVector([1.1, 0.9, -0.1])
        assert v.clamped_individually() == DCSVector([1.0, 0.9, 0.0])

    def test_clamped_to_positive(self):
        v = LinDCSVector([1.1, 0.9, -0.1])
        assert v.clamped_to_positive() == LinDCSVector([1.1, 0.9, 0.0])

    def test_linearize_without_transfer_function_is_identity(self):
        v = DCSVector([1.5, 0.3, -2.0]).clamped_and_linearized(None)
        assert v == LinDCSVector([1.0, 0.3, 0.0])

    def test_delinearize_with_gamma(self):
        v = LinDCSVector([0.25, 2.0]).clamped_and_delinearized(GammaTransferFunction(2.0))
        np.testing.assert_allclose(v.values, [0.5, 1.0])


class TestArithmetic:
    def test_sum(self):
        a = LinDCSVector([1.0, 2.0])
        total = a.sum(LinDCSVector([0.5, 0.5]), LinDCSVector([-1.0, 0.0]))
        assert total == LinDCSVector([0.5, 2.5])
        assert a + a == LinDCSVector([2.0, 4.0])

    def test_sum_with_mismatching_channels_raises(self):
        with pytest.raises(ChannelCountMismatchError) as excinfo:
            LinDCSVector([1.0, 2.0]).sum(LinDCSVector([1.0]))
        assert excinfo.value.got == 1
        assert excinfo.value.want == 2

    def test_difference(self):
        d = DCSVector([1.0, 0.5]).difference(DCSVector([0.25, 0.5]))
        assert d == DCSVector([0.75, 0.0])

    def test_scaled_and_concatenated(self):
        v = LinDCSVector([0.2, 0.4]).scaled(0.5).concatenated(LinDCSVector([1.0]), LinDCSVector())
        assert v == LinDCSVector([0.1, 0.2, 1.0])

    def test_component_sum_is_unclamped(self):
        assert LinDCSVector([2.0, -0.5, 1.0]).component_sum() == 2.5


class TestScaledToPositiveDifference:
    @pytest.mark.parametrize("v, other, expected", [
        ([1.0, 1.0], [0.5, 0.5], 1.0),      # capped at 1
        ([0.2, 1.0], [0.4, 0.5], 0.5),      # first channel limits
        ([0.0, 1.0], [0.0, 0.5], 1.0),      # 0/0 is ignored
        ([-0.1, 1.0], [0.5, 0.5], 0.0),     # already negative
        ([1.0, 1.0], [-0.5, 0.5], 0.0),     # negative ratio clamps to 0
        ([1.0, 1.0], [0.0, 0.0], 1.0),      # division by zero gives +inf
    ])
    def test_factor(self, v, other, expected):
        s = LinDCSVector(v).scaled_to_positive_difference(LinDCSVector(other))
        assert s == pytest.approx(expected)
        assert 0.0 <= s <= 1.0

    def test_difference_stays_positive(self):
        v = LinDCSVector([0.3, 0.8, 0.6])
        other = LinDCSVector([0.6, 0.4, 0.9])
        s = v.scaled_to_positive_difference(other)
        assert np.all(v.sum(other.scaled(-s)).values >= -1e-15)


class TestPassThrough:
    def test_dcs_into_dcs_is_identity(self, srgb_profile):
        v = DCSVector([0.1, 0.2, 0.3])
        assert v.into_dcs(srgb_profile) is v
        assert DCSVector.from_dcs(srgb_profile, v) == v

    def test_lin_dcs_round_trip(self, srgb_profile):
        lin = LinDCSVector([0.05, 0.5, 0.9])
        dcs = lin.into_dcs(srgb_profile)
        back = LinDCSVector.from_dcs(srgb_profile, dcs)
        np.testing.assert_allclose(back.values, lin.values, rtol=1e-9)
