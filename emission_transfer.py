# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Transfer Functions
==================
Pluggable strategies that map between the non-linear device color space
(what is transmitted to the hardware) and the linear device color space
(what mixes additively).

Contract:
    linearize(DCSVector) -> LinDCSVector
    delinearize(LinDCSVector) -> DCSVector

Both directions are channel-count preserving and transform every channel
independently.  Inputs are expected to be clamped into [0, 1] already; the
DCS vector helpers ``clamped_and_linearized`` / ``clamped_and_delinearized``
take care of that.  A transfer function of ``None`` denotes a linear device
color space (identity).

The sRGB curves are Numba-compiled.  By default the kernels are built with
``fastmath=True``; ``set_strict_ieee(True)`` swaps them for
``fastmath=False`` variants with strict IEEE 754 semantics.

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol, TypeAlias, runtime_checkable

import numpy as np
from numba import njit
from numpy.typing import NDArray

from emission_dcs import DCSVector, LinDCSVector

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Configuration ---
    "set_strict_ieee",

    # --- Protocols ---
    "TransferFunction",

    # --- Classes ---
    "StandardRGBTransferFunction",
    "GammaTransferFunction",

    # --- Instances ---
    "TRANSFER_FUNCTION_STANDARD_RGB",
]

ArrayFloat: TypeAlias = NDArray[np.floating]


# --- Runtime Configuration ---
# When True, the transfer-function kernels use fastmath=False variants that
# preserve strict IEEE 754 semantics (inf / NaN propagation, no FP
# reassociation).
_STRICT_IEEE: bool = False

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 Numba kernels.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)


# =============================================================================
# 1. LOW-LEVEL KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True, fastmath=True)
def _srgb_encode_kernel(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF: linear → non-linear."""
    out = np.empty(linear.shape[0], dtype=np.float64)
    for i in range(linear.shape[0]):
        v = linear[i]
        # IEC 61966-2-1 defines the slope as exactly 12.92
        if v <= 0.0031308:
            out[i] = 12.92 * v
        else:
            out[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out

@njit(cache=True, fastmath=True)
def _srgb_decode_kernel(encoded: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF: non-linear → linear."""
    out = np.empty(encoded.shape[0], dtype=np.float64)
    for i in range(encoded.shape[0]):
        v = encoded[i]
        if v <= 0.04045:
            out[i] = v / 12.92
        else:
            out[i] = ((v + 0.055) / 1.055) ** 2.4
    return out

@njit(cache=True, fastmath=False)
def _srgb_encode_kernel_strict(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF — strict IEEE 754 variant."""
    out = np.empty(linear.shape[0], dtype=np.float64)
    for i in range(linear.shape[0]):
        v = linear[i]
        if v <= 0.0031308:
            out[i] = 12.92 * v
        else:
            out[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out

@njit(cache=True, fastmath=False)
def _srgb_decode_kernel_strict(encoded: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF — strict IEEE 754 variant."""
    out = np.empty(encoded.shape[0], dtype=np.float64)
    for i in range(encoded.shape[0]):
        v = encoded[i]
        if v <= 0.04045:
            out[i] = v / 12.92
        else:
            out[i] = ((v + 0.055) / 1.055) ** 2.4
    return out


def _srgb_encode(linear: ArrayFloat) -> ArrayFloat:
    # Kernels write into fresh buffers, DCS vectors hand out read-only views.
    arr = np.array(linear, dtype=np.float64)
    if _STRICT_IEEE:
        return _srgb_encode_kernel_strict(arr)
    return _srgb_encode_kernel(arr)

def _srgb_decode(encoded: ArrayFloat) -> ArrayFloat:
    arr = np.array(encoded, dtype=np.float64)
    if _STRICT_IEEE:
        return _srgb_decode_kernel_strict(arr)
    return _srgb_decode_kernel(arr)


# =============================================================================
# 2. STRATEGIES
# =============================================================================

@runtime_checkable
class TransferFunction(Protocol):
    """
    Converts between non-linear and linear device color spaces.

    linearize(v)   → LinDCSVector with the same channel count
    delinearize(v) → DCSVector with the same channel count
    """
    def linearize(self, v: DCSVector) -> LinDCSVector: ...
    def delinearize(self, v: LinDCSVector) -> DCSVector: ...


class StandardRGBTransferFunction:
    """Piecewise sRGB curve according to IEC 61966-2-1."""

    __slots__ = ()

    def linearize(self, v: DCSVector) -> LinDCSVector:
        return LinDCSVector(_srgb_decode(v.values))

    def delinearize(self, v: LinDCSVector) -> DCSVector:
        return DCSVector(_srgb_encode(v.values))

    def __repr__(self) -> str:
        return "StandardRGBTransferFunction()"


@dataclass(frozen=True, slots=True)
class GammaTransferFunction:
    """
    Pure power-law curve.

        linear    = v ** gamma
        nonlinear = v ** (1 / gamma)
    """
    gamma: float

    def __post_init__(self) -> None:
        if not self.gamma > 0:
            raise ValueError(f"Gamma must be > 0, got {self.gamma}")

    def linearize(self, v: DCSVector) -> LinDCSVector:
        return LinDCSVector(np.power(v.values, self.gamma))

    def delinearize(self, v: LinDCSVector) -> DCSVector:
        return DCSVector(np.power(v.values, 1.0 / self.gamma))


TRANSFER_FUNCTION_STANDARD_RGB: Final[StandardRGBTransferFunction] = StandardRGBTransferFunction()
