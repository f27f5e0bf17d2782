# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: emission_errors.py — Exception taxonomy.

All errors are raised synchronously at the point of failure and propagate
to the immediate caller.  Every class also derives from the builtin (or
NumPy) exception a caller would naturally expect, so ``except ValueError``
keeps working for code that does not know about this module.
"""

import numpy as np

__all__ = [
    "EmissionError",
    "ChannelCountMismatchError",
    "SingularMatrixError",
    "UnsupportedDimensionError",
    "DomainNotRepresentableError",
]


class EmissionError(Exception):
    """Base class of all errors raised by the emission engine."""


class ChannelCountMismatchError(EmissionError, ValueError):
    """
    A DCS vector does not have the number of channels its consumer expects.

    This always indicates a programming error on the caller side.

    Attributes:
        got: Number of channels that were supplied.
        want: Number of channels that were expected.
    """

    def __init__(self, got: int, want: int, context: str = "") -> None:
        self.got = got
        self.want = want
        prefix = f"{context}: " if context else ""
        super().__init__(f"{prefix}unexpected number of channels. Got {got}, want {want}")


class SingularMatrixError(EmissionError, np.linalg.LinAlgError):
    """A transformation matrix can't be inverted (determinant is exactly zero)."""


class UnsupportedDimensionError(EmissionError, ValueError):
    """A transformation matrix has a number of columns outside of 0..3."""


class DomainNotRepresentableError(EmissionError, ValueError):
    """The requested value has no colorimetric equivalent."""
