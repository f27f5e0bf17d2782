# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: blackbody.py — Black body radiators.

Two models with different trade-offs:

  BlackBodyFixed: Cubic spline approximation of the Planckian locus
      (Kim et al., US patent 7024034) combined with a fixed luminance.
      Fast, valid from 1667 K to 25000 K.

  BlackBodyArea: Planck's law integrated against the CIE 1931 2° observer.
      The luminance follows from the temperature and the emitting area,
      any positive temperature is allowed.

Neither model describes daylight, see ``daylight.py`` for that.

References:
    - https://en.wikipedia.org/wiki/Planckian_locus
    - CIE 15:2004 "Colorimetry", section 7
"""

import math

import numpy as np
from numba import njit
from scipy import constants
from typing import Dict, Final, Optional, Tuple, Union

from emission_colorvalues import CIE1931XYZAbs, CIE1931xyYAbs
from emission_errors import DomainNotRepresentableError

from .observer import CIE1931_CMF, CIE1931_WAVELENGTHS
from .radiator import Radiator

__all__ = ["BlackBodyFixed", "BlackBodyArea"]

# Maximum luminous efficacy for photopic vision in lm/W.
KM_PHOTOPIC: Final[float] = 683.002

# First and second radiation constants for spectral radiance.
_C1: Final[float] = 2.0 * constants.h * constants.c ** 2
_C2: Final[float] = constants.h * constants.c / constants.k

_LOCUS_T_MIN: Final[float] = 1667.0
_LOCUS_T_MAX: Final[float] = 25000.0


# =============================================================================
# 1. LOW-LEVEL KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True)
def _planckian_locus_kernel(t: float) -> Tuple[float, float]:
    """Chromaticity (x, y) of a black body at t Kelvin, 1667 K <= t <= 25000 K."""
    if t <= 4000.0:
        x = -0.2661239e9 / t / t / t - 0.2343589e6 / t / t + 0.8776956e3 / t + 0.179910
    else:
        x = -3.0258469e9 / t / t / t + 2.1070379e6 / t / t + 0.2226347e3 / t + 0.240390

    if t <= 2222.0:
        y = -1.1063814 * x * x * x - 1.34811020 * x * x + 2.18555832 * x - 0.20219683
    elif t <= 4000.0:
        y = -0.9549476 * x * x * x - 1.37418593 * x * x + 2.09137015 * x - 0.16748867
    else:
        y = 3.0817580 * x * x * x - 5.87338670 * x * x + 3.75112997 * x - 0.37001483
    return x, y


@njit(cache=True, fastmath=True)
def _planck_radiance_kernel(wavelength_nm: np.ndarray, t: float, c1: float, c2: float) -> np.ndarray:
    """
    Spectral radiance B(λ, T) in W / (m² · sr · m).

        B = c1 / λ⁵ / (exp(c2 / (λ T)) - 1)
    """
    n = wavelength_nm.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        lam = wavelength_nm[i] * 1e-9
        out[i] = c1 / (lam ** 5) / math.expm1(c2 / (lam * t))
    return out


@njit(cache=True, fastmath=True)
def _tristimulus_kernel(spd: np.ndarray, cmf: np.ndarray, interval: float) -> np.ndarray:
    """Rectangle rule: Sum(SPD * cmf) * interval, per CMF column."""
    out = np.zeros(3, dtype=np.float64)
    for i in range(spd.shape[0]):
        s = spd[i]
        out[0] += s * cmf[i, 0]
        out[1] += s * cmf[i, 1]
        out[2] += s * cmf[i, 2]
    for j in range(3):
        out[j] *= interval
    return out


# =============================================================================
# 2. MODELS
# =============================================================================

class BlackBodyFixed(Radiator):
    """
    Black body radiator with a fixed luminance in lumen.

    Parameters:
        temperature: Temperature in K, 1667 K to 25000 K.
        luminance: Luminance in lumen, >= 0 (0 is a switched-off source).

    Examples:
        BlackBodyFixed(temperature=2700, luminance=800).into_dcs(profile)
        BlackBodyFixed(params={'temperature': 6500, 'luminance': 1})
    """

    def __init__(
        self,
        temperature: Optional[Union[float, int]] = None,
        luminance: Optional[Union[float, int]] = None,
        params: Optional[Dict[str, Union[float, int]]] = None,
        **kwargs: Union[float, int]
    ):
        p = params.copy() if params else {}
        if temperature is not None:
            p['temperature'] = temperature
        if luminance is not None:
            p['luminance'] = luminance
        p.update(kwargs)

        super().__init__(params=p)
        self._validate_params(required=['temperature', 'luminance'])
        self._check_domain()

    def _check_domain(self) -> None:
        t = self._params['temperature']
        if not _LOCUS_T_MIN <= t <= _LOCUS_T_MAX:
            raise DomainNotRepresentableError(
                f"Temperature {t} K is outside of the Planckian locus approximation "
                f"range [{_LOCUS_T_MIN:g} K, {_LOCUS_T_MAX:g} K]"
            )
        if not self._params['luminance'] >= 0:
            raise ValueError(f"Luminance must be >= 0, got {self._params['luminance']}")

    @property
    def temperature(self) -> float:
        return self._params['temperature']

    @property
    def luminance(self) -> float:
        return self._params['luminance']

    def cie1931_xyy_abs(self) -> CIE1931xyYAbs:
        x, y = _planckian_locus_kernel(self.temperature)
        return CIE1931xyYAbs(x, y, self.luminance)

    def _compute_xyz(self) -> CIE1931XYZAbs:
        return self.cie1931_xyy_abs().cie1931_xyz_abs()


class BlackBodyArea(Radiator):
    """
    Black body radiator of a given emitting area.

    The radiant exitance π·B(λ, T) is weighted by the CIE 1931 color
    matching functions on a 1 nm grid (380 nm to 780 nm) and converted to
    lumen with Km = 683.002 lm/W.

    Parameters:
        temperature: Temperature in K, must be > 0.
        area: Emitting area in m², must be > 0.

    Examples:
        BlackBodyArea(temperature=2000, area=0.15).cie1931_xyz_abs()
    """

    def __init__(
        self,
        temperature: Optional[Union[float, int]] = None,
        area: Optional[Union[float, int]] = None,
        params: Optional[Dict[str, Union[float, int]]] = None,
        **kwargs: Union[float, int]
    ):
        p = params.copy() if params else {}
        if temperature is not None:
            p['temperature'] = temperature
        if area is not None:
            p['area'] = area
        p.update(kwargs)

        super().__init__(params=p)
        self._validate_params(required=['temperature', 'area'])
        self._check_domain()

    def _check_domain(self) -> None:
        t = self._params['temperature']
        if not t > 0:
            raise DomainNotRepresentableError(f"Temperature must be > 0 K, got {t} K")
        if not self._params['area'] > 0:
            raise ValueError(f"Area must be > 0, got {self._params['area']}")

    @property
    def temperature(self) -> float:
        return self._params['temperature']

    @property
    def area(self) -> float:
        return self._params['area']

    def spectral_exitance(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns (wavelength in nm, spectral radiant exitance in W / (m² · m))
        on the integration grid.
        """
        radiance = _planck_radiance_kernel(CIE1931_WAVELENGTHS, self.temperature, _C1, _C2)
        return CIE1931_WAVELENGTHS, np.pi * radiance

    def _compute_xyz(self) -> CIE1931XYZAbs:
        wavelengths, exitance = self.spectral_exitance()
        interval = float(wavelengths[1] - wavelengths[0]) * 1e-9
        xyz = _tristimulus_kernel(exitance, CIE1931_CMF, interval)
        return CIE1931XYZAbs.from_array(xyz * (KM_PHOTOPIC * self.area))
