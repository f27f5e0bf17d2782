# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: radiator.py — Base class for physical light source models.

Radiators synthesize reference colors from a handful of physical
parameters (temperature, luminance, emitting area).  They are write-only
emission values: they implement ``into_dcs`` but have no ``from_dcs``, as
a DCS vector doesn't determine e.g. a unique temperature.

Parameter API:
  - Hybrid: supports both dict-based and individual parameters
  - Single source of truth: the private params dict, exposed read-only
  - with_param() returns a re-validated copy, the radiator itself never changes
"""

import copy
import numpy as np
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, TypeVar, Union

from emission_colorvalues import CIE1931XYZAbs, CIE1931xyYAbs

if TYPE_CHECKING:
    from emission_dcs import DCSVector
    from emission_profile import ColorProfile

__all__ = ["Radiator"]

R = TypeVar("R", bound="Radiator")


def _as_float(name: str, value: Union[float, int]) -> float:
    if not isinstance(value, (int, float, np.number)):
        raise TypeError(
            f"Parameter '{name}' must be numeric, got {type(value).__name__}"
        )
    return float(value)


class Radiator:
    """
    Base class for radiator models.

    Subclasses must override ``_compute_xyz()`` and may override
    ``_check_domain()`` to reject parameter combinations the model can't
    represent.

    Radiators are immutable like every other emission value, so the color
    is computed once on first use and cached.

    Attributes:
        params : Mapping[str, float]
            Read-only view of the model parameters.
    """

    def __init__(
        self,
        params: Optional[Dict[str, Union[float, int]]] = None,
        **kwargs: Union[float, int]
    ):
        """
        Initialize radiator with parameters.

        Args:
            params: Dictionary of model parameters.
            **kwargs: Individual parameters (override params dict).
        """
        merged = {**(params or {}), **kwargs}
        self._params: Dict[str, float] = {k: _as_float(k, v) for k, v in merged.items()}
        self._xyz: Optional[CIE1931XYZAbs] = None

    def _validate_params(self, required: List[str]) -> None:
        """
        Validate that the parameters are exactly the required ones.

        Raises:
            ValueError: If a required parameter is missing or an unknown
                one is given.
        """
        for param in required:
            if param not in self._params:
                raise ValueError(
                    f"Parameter '{param}' is required for {self.__class__.__name__}."
                )
        unknown = sorted(set(self._params) - set(required))
        if unknown:
            raise ValueError(
                f"Unknown parameters {unknown} for {self.__class__.__name__}, "
                f"expected {required}"
            )

    def _check_domain(self) -> None:
        """Override in subclass: raise if the parameters are out of range."""

    def _compute_xyz(self) -> CIE1931XYZAbs:
        """Override in subclass: return the absolute XYZ of the emission."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _compute_xyz()"
        )

    @property
    def params(self) -> Mapping[str, float]:
        return MappingProxyType(self._params)

    def get_params(self) -> Dict[str, float]:
        return self._params.copy()

    def with_param(self: R, param_name: str, value: Union[float, int]) -> R:
        """
        Returns a copy of this radiator with one parameter replaced.

        Raises:
            KeyError: If the model has no parameter of that name.
            TypeError: If value is not numeric.
            ValueError: If the model can't represent the new value.
        """
        if param_name not in self._params:
            raise KeyError(
                f"Unknown parameter '{param_name}' for {self.__class__.__name__}, "
                f"expected one of {sorted(self._params)}"
            )
        new = copy.copy(self)
        new._params = {**self._params, param_name: _as_float(param_name, value)}
        new._xyz = None
        new._check_domain()
        return new

    def cie1931_xyz_abs(self) -> CIE1931XYZAbs:
        if self._xyz is None:
            self._xyz = self._compute_xyz()
        return self._xyz

    def cie1931_xyy_abs(self) -> CIE1931xyYAbs:
        return self.cie1931_xyz_abs().cie1931_xyy_abs()

    def into_dcs(self, profile: "ColorProfile") -> "DCSVector":
        return profile.xyz_to_dcs(self.cie1931_xyz_abs())

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v:g}" for k, v in self._params.items())
        return f"{self.__class__.__name__}({inner})"
