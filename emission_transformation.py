# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Transformation Matrices
=======================
Forward (linear DCS → XYZ) and inverse (XYZ → linear DCS) transformation
matrices over up to 3 channels.

Layout:
    The forward matrix is stored by its column vectors, one XYZ color per
    DCS channel ("what color does channel i produce at full linear drive"):

        t[0].X t[1].X t[2].X ...
        t[0].Y t[1].Y t[2].Y ...
        t[0].Z t[1].Z t[2].Z ...

    The inverse matrix is stored by its row vectors:

        t[0].X t[0].Y t[0].Z
        t[1].X t[1].Y t[1].Z
        ...

Degenerate Inversion:
    Devices with fewer than 3 controllable primaries (e.g. a single dimmable
    white channel) are inverted by extending the matrix with synthetic,
    mutually perpendicular columns (cross products), inverting the 3x3
    result and keeping only the rows of the real channels.  For a color in
    the span of the real columns the synthetic channels stay at zero, so the
    kept rows are an exact inverse on that subspace.
"""

from __future__ import annotations

from typing import Final, Iterable, Iterator, TypeAlias, Union, overload

import numpy as np
from numba import njit
from numpy.typing import NDArray

from emission_colorvalues import CIE1931XYZAbs
from emission_dcs import LinDCSVector
from emission_errors import (
    ChannelCountMismatchError,
    SingularMatrixError,
    UnsupportedDimensionError,
)

__all__ = [
    "TransformationLinDCSToXYZ",
    "TransformationXYZToLinDCS",
]

ArrayFloat: TypeAlias = NDArray[np.floating]
ColumnSource: TypeAlias = Union[Iterable[CIE1931XYZAbs], ArrayFloat]

_MAX_CHANNELS: Final[int] = 3
_ZERO: Final[CIE1931XYZAbs] = CIE1931XYZAbs(0.0, 0.0, 0.0)

# Reference axes used to construct the auxiliary columns of the
# single-primary case.  The second one is used for primaries parallel to X.
_REFERENCE_AXES: Final[tuple[CIE1931XYZAbs, ...]] = (
    CIE1931XYZAbs(1.0, 0.0, 0.0),
    CIE1931XYZAbs(0.0, 1.0, 0.0),
)


# =============================================================================
# 1. LOW-LEVEL KERNELS (Numba Optimized)
# =============================================================================

@njit(cache=True, fastmath=False)
def _adjugate_3x3_kernel(cols: ArrayFloat) -> tuple[ArrayFloat, float]:
    """
    Adjugate and determinant of the 3x3 matrix given by its column vectors.

    cols has shape (3, 3) with cols[i] being column i.  The returned
    adjugate is laid out by rows, so ``adj / det`` is the inverse matrix.
    """
    a = cols[0]
    b = cols[1]
    c = cols[2]

    det = (a[0] * (b[1] * c[2] - c[1] * b[2])
           - a[1] * (b[0] * c[2] - b[2] * c[0])
           + a[2] * (b[0] * c[1] - b[1] * c[0]))

    adj = np.empty((3, 3), dtype=np.float64)
    adj[0, 0] = b[1] * c[2] - c[1] * b[2]
    adj[0, 1] = b[2] * c[0] - b[0] * c[2]
    adj[0, 2] = b[0] * c[1] - c[0] * b[1]
    adj[1, 0] = a[2] * c[1] - a[1] * c[2]
    adj[1, 1] = a[0] * c[2] - a[2] * c[0]
    adj[1, 2] = c[0] * a[1] - a[0] * c[1]
    adj[2, 0] = a[1] * b[2] - a[2] * b[1]
    adj[2, 1] = b[0] * a[2] - a[0] * b[2]
    adj[2, 2] = a[0] * b[1] - b[0] * a[1]
    return adj, det


def _as_matrix(source: ColumnSource) -> ArrayFloat:
    """Normalises colors or an (m, 3) array into a read-only (m, 3) float64 array."""
    if isinstance(source, np.ndarray):
        arr = np.array(source, dtype=np.float64)
    else:
        arr = np.array([c.as_array() for c in source], dtype=np.float64)
    if arr.size == 0:
        arr = np.zeros((0, 3), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected an (m, 3) matrix of XYZ vectors, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


class _XYZVectorList:
    """Immutable, ordered list of XYZ vectors backed by an (m, 3) array."""

    __slots__ = ("_m",)

    def __init__(self, vectors: ColumnSource = ()) -> None:
        self._m = _as_matrix(vectors)

    @property
    def matrix(self) -> ArrayFloat:
        """The vectors as read-only (m, 3) array, one XYZ vector per row."""
        return self._m

    @property
    def dcs_channels(self) -> int:
        """The dimensionality of the device color space."""
        return self._m.shape[0]

    def __len__(self) -> int:
        return self._m.shape[0]

    @overload
    def __getitem__(self, index: int) -> CIE1931XYZAbs: ...
    @overload
    def __getitem__(self, index: slice) -> list[CIE1931XYZAbs]: ...
    def __getitem__(self, index: Union[int, slice]) -> Union[CIE1931XYZAbs, list[CIE1931XYZAbs]]:
        if isinstance(index, slice):
            return [CIE1931XYZAbs.from_array(row) for row in self._m[index]]
        return CIE1931XYZAbs.from_array(self._m[index])

    def __iter__(self) -> Iterator[CIE1931XYZAbs]:
        return (CIE1931XYZAbs.from_array(row) for row in self._m)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._m.tobytes()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


# =============================================================================
# 2. FORWARD TRANSFORMATION (linear DCS → XYZ)
# =============================================================================

class TransformationLinDCSToXYZ(_XYZVectorList):
    """
    Linear DCS → XYZ transformation, stored as list of column vectors
    (color primaries).

    Examples:
        t = TransformationLinDCSToXYZ([red, green, blue])
        color = t.multiplied(LinDCSVector([1.0, 0.5, 0.0]))
        inv = t.inverted()
    """

    __slots__ = ()

    @property
    def columns(self) -> list[CIE1931XYZAbs]:
        return list(self)

    def scaled(self, s: float) -> TransformationLinDCSToXYZ:
        return TransformationLinDCSToXYZ(self._m * s)

    def __add__(self, other: TransformationLinDCSToXYZ) -> TransformationLinDCSToXYZ:
        """Concatenates the channels of both transformations."""
        if not isinstance(other, TransformationLinDCSToXYZ):
            return NotImplemented
        return TransformationLinDCSToXYZ(np.concatenate([self._m, other._m]))

    def multiplied(self, v: LinDCSVector) -> CIE1931XYZAbs:
        """
        Linear combination of the column colors weighted by the channels of v.

        Raises:
            ChannelCountMismatchError: If v doesn't have one channel per column.
        """
        if v.channels != self.dcs_channels:
            raise ChannelCountMismatchError(
                v.channels, self.dcs_channels, "transformation matrix multiplication"
            )
        return CIE1931XYZAbs.from_array(v.values @ self._m)

    def inverted(self) -> TransformationXYZToLinDCS:
        """
        Returns the inverse transformation as list of row vectors.

        1x3 and 2x3 matrices are extended by perpendicular auxiliary columns
        before inversion, 0x3 matrices return an empty inverse.

        Raises:
            SingularMatrixError: If the (extended) matrix has a zero determinant.
            UnsupportedDimensionError: If there are more than 3 columns.
        """
        m = self.dcs_channels
        if m == 0:
            return TransformationXYZToLinDCS()

        if m == 1:
            p = self[0]
            aux = p.cross(_REFERENCE_AXES[0])
            if aux == _ZERO:
                aux = p.cross(_REFERENCE_AXES[1])
            extended = TransformationLinDCSToXYZ([p, aux, p.cross(aux)])
            return TransformationXYZToLinDCS(extended.inverted().matrix[:1])

        if m == 2:
            p0, p1 = self[0], self[1]
            extended = TransformationLinDCSToXYZ([p0, p1, p0.cross(p1)])
            return TransformationXYZToLinDCS(extended.inverted().matrix[:2])

        if m == 3:
            adj, det = _adjugate_3x3_kernel(np.ascontiguousarray(self._m))
            if det == 0.0:
                raise SingularMatrixError("determinant is zero")
            return TransformationXYZToLinDCS(adj * (1.0 / det))

        raise UnsupportedDimensionError(
            f"unsupported transformation matrix dimension {m} x 3 (at most {_MAX_CHANNELS} channels)"
        )

    def must_inverted(self) -> TransformationXYZToLinDCS:
        """
        Alias of ``inverted`` for module level constants whose matrices are
        known to be regular.
        """
        return self.inverted()


# =============================================================================
# 3. INVERSE TRANSFORMATION (XYZ → linear DCS)
# =============================================================================

class TransformationXYZToLinDCS(_XYZVectorList):
    """XYZ → linear DCS transformation, stored as list of row vectors."""

    __slots__ = ()

    @property
    def rows(self) -> list[CIE1931XYZAbs]:
        return list(self)

    def multiplied(self, color: CIE1931XYZAbs) -> LinDCSVector:
        """Returns the unclamped linear DCS vector that produces color."""
        return LinDCSVector(self._m @ color.as_array())

    def zeroed(self) -> TransformationXYZToLinDCS:
        """Same shape, but every color maps to the zero vector."""
        return TransformationXYZToLinDCS(np.zeros_like(self._m))

