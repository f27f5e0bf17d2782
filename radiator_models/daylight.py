# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: daylight.py — CIE standard illuminant D series.

Chromaticity of the CIE daylight locus for a correlated color
temperature, combined with a fixed luminance in lumen.

Reference: CIE 15:2004 "Colorimetry", section 3.1
"""

from numba import njit
from typing import Dict, Final, Optional, Tuple, Union

from emission_colorvalues import CIE1931XYZAbs, CIE1931xyYAbs
from emission_errors import DomainNotRepresentableError

from .radiator import Radiator

__all__ = ["StandardIlluminantDSeries"]

_DAYLIGHT_T_MIN: Final[float] = 4000.0
_DAYLIGHT_T_MAX: Final[float] = 25000.0


@njit(cache=True)
def _daylight_locus_kernel(t: float) -> Tuple[float, float]:
    """Chromaticity (x, y) of the D series at t Kelvin, 4000 K <= t <= 25000 K."""
    if t <= 7000.0:
        x = 0.244063 + 0.09911e3 / t + 2.9678e6 / t / t - 4.6070e9 / t / t / t
    else:
        x = 0.237040 + 0.24748e3 / t + 1.9018e6 / t / t - 2.0064e9 / t / t / t
    y = -3.000 * x * x + 2.870 * x - 0.275
    return x, y


class StandardIlluminantDSeries(Radiator):
    """
    CIE D series illuminant, e.g. D65 for temperature=6504.

    Parameters:
        temperature: Correlated color temperature in K, 4000 K to 25000 K.
        luminance: Luminance in lumen, >= 0 (0 is a switched-off source).
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
        if not _DAYLIGHT_T_MIN <= t <= _DAYLIGHT_T_MAX:
            raise DomainNotRepresentableError(
                f"Temperature {t} K is outside of the daylight locus range "
                f"[{_DAYLIGHT_T_MIN:g} K, {_DAYLIGHT_T_MAX:g} K]"
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
        x, y = _daylight_locus_kernel(self.temperature)
        return CIE1931xyYAbs(x, y, self.luminance)

    def _compute_xyz(self) -> CIE1931XYZAbs:
        return self.cie1931_xyy_abs().cie1931_xyz_abs()
