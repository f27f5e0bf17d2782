# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: emission_limiter.py — Output limiters.

Some devices limit their total output internally: sending
DCSVector(1, 1, 1, 1, 1) to such a device may really result in
(0.4, 0.4, 0.4, 0.4, 0.4).  A limiter reproduces that behaviour in
software, so luminance estimates stay consistent with the hardware.

The exact throttling rule of a device family is usually only known from
measurements, so limiters are a pluggable protocol.  ``OutputLimiterSum``
is the rule observed on RGBW bulbs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from emission_dcs import LinDCSVector

__all__ = ["OutputLimiter", "OutputLimiterSum"]


@runtime_checkable
class OutputLimiter(Protocol):
    """
    limit(v) → v itself if it obeys the limits, otherwise a uniformly
    rescaled version that obeys them exactly.
    """
    def limit(self, v: LinDCSVector) -> LinDCSVector: ...


@dataclass(frozen=True, slots=True)
class OutputLimiterSum:
    """
    Scales linear DCS vectors so that the sum of all channels doesn't
    exceed ``limit``.

    Examples:
        OutputLimiterSum(2).limit(LinDCSVector([1, 1, 1, 1]))
        # → LinDCSVector(0.5, 0.5, 0.5, 0.5)
    """
    limit_sum: float

    def __post_init__(self) -> None:
        if not self.limit_sum > 0:
            raise ValueError(f"Sum limit must be > 0, got {self.limit_sum}")

    def limit(self, v: LinDCSVector) -> LinDCSVector:
        total = v.component_sum()
        if total > self.limit_sum:
            return v.scaled(self.limit_sum / total)
        return v
