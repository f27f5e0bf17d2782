# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Physical light source models usable as emission values.
"""

from .blackbody import BlackBodyArea, BlackBodyFixed
from .daylight import StandardIlluminantDSeries
from .radiator import Radiator

__all__ = ["Radiator", "BlackBodyFixed", "BlackBodyArea", "StandardIlluminantDSeries"]
