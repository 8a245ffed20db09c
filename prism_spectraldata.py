# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_spectraldata.py — Sampled spectral data.

  SpectralDistribution
    1.  Immutable: wavelength and value arrays are private copies with the
        numpy write flag cleared.  There is no write path after __init__.
    2.  Strictly increasing wavelength grid, equal lengths, at least two
        samples.  Violations raise ConstructionError.
    3.  Point evaluation is linear interpolation with ZERO extension
        outside the sampled domain (no edge clamping, no extrapolation).
    4.  Binary arithmetic resamples both operands onto the union of their
        grids.

  ColorMatchingFunctions
    5.  (N, 3) table of x̄, ȳ, z̄ on one validated grid.  Read-only.

  Illuminant
    6.  Named wrapper around a SpectralDistribution used to weight
        tristimulus integration.
"""

from __future__ import annotations

import numbers
from typing import Iterator, Optional, Tuple, TypeAlias, Union

import numpy as np
import numpy.typing as npt
from scipy.integrate import trapezoid

from prism_errors import ConstructionError, DomainError

__all__ = [
    "ArrayFloat",
    "SpectralDistribution",
    "ColorMatchingFunctions",
    "Illuminant",
    "validate_wavelength_grid",
]

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
ArrayFloat: TypeAlias = npt.NDArray[np.floating]
WavelengthLike: TypeAlias = Union[float, npt.ArrayLike]


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------
def _as_float_array(data: npt.ArrayLike, label: str) -> ArrayFloat:
    try:
        return np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ConstructionError(f"{label}: not convertible to float64 ({exc})") from exc


def validate_wavelength_grid(wl: ArrayFloat, label: str) -> None:
    """Shape, size, finiteness and strict monotonicity of a wavelength grid."""
    if wl.ndim != 1:
        raise ConstructionError(f"{label}: wavelengths must be 1-D, got shape {wl.shape}")
    if wl.shape[0] < 2:
        raise ConstructionError(
            f"{label}: at least 2 samples required, got {wl.shape[0]}"
        )
    if not np.all(np.isfinite(wl)):
        raise ConstructionError(f"{label}: wavelengths must be finite")
    if not np.all(np.diff(wl) > 0):
        raise ConstructionError(
            f"{label}: wavelength array must be strictly monotonically increasing"
        )


def _readonly(arr: ArrayFloat) -> ArrayFloat:
    arr.setflags(write=False)
    return arr


def _interp_zero(wavelength: WavelengthLike, wl: ArrayFloat, values: ArrayFloat) -> ArrayFloat:
    """Linear interpolation, 0 outside [wl[0], wl[-1]]."""
    return np.interp(np.asarray(wavelength, dtype=np.float64), wl, values, left=0.0, right=0.0)


# =============================================================================
# 1.  SpectralDistribution
# =============================================================================
class SpectralDistribution:
    """
    A sampled function of wavelength (nm): radiant power, reflectance or
    transmittance.

    Construction
    ------------
    ``SpectralDistribution(wavelengths, values)`` or the equivalent
    ``SpectralDistribution.from_wavelength_and_value``.  Both arrays are
    copied and frozen.

    Evaluation
    ----------
    ``spd.value_at(550.0)`` -> float, ``spd.value_at(grid)`` -> ndarray.
    At a stored wavelength the stored value is returned exactly; outside
    the domain the result is 0.

    Arithmetic
    ----------
    ``a * b`` and ``a + b`` resample onto ``np.union1d`` of both grids;
    ``a * 2.0`` scales.  Every operation returns a new instance.
    """

    __slots__ = ("_wavelengths", "_values")

    def __init__(self, wavelengths: npt.ArrayLike, values: npt.ArrayLike) -> None:
        label = type(self).__name__
        wl = _as_float_array(wavelengths, label)
        vals = _as_float_array(values, label)

        if wl.ndim == 1 and vals.ndim == 1 and wl.shape[0] != vals.shape[0]:
            raise ConstructionError(
                f"{label}: {wl.shape[0]} wavelengths but {vals.shape[0]} values"
            )
        validate_wavelength_grid(wl, label)
        if vals.shape != wl.shape:
            raise ConstructionError(
                f"{label}: values must be 1-D with shape {wl.shape}, got {vals.shape}"
            )
        if not np.all(np.isfinite(vals)):
            raise ConstructionError(f"{label}: values must be finite")

        self._wavelengths: ArrayFloat = _readonly(wl)
        self._values: ArrayFloat = _readonly(vals)

    @classmethod
    def from_wavelength_and_value(
        cls, wavelengths: npt.ArrayLike, values: npt.ArrayLike
    ) -> "SpectralDistribution":
        """Build from parallel wavelength / value sequences."""
        return cls(wavelengths, values)

    # -- read interface ----------------------------------------------------
    @property
    def wavelengths(self) -> ArrayFloat:
        """Sample wavelengths in nm (read-only)."""
        return self._wavelengths

    @property
    def values(self) -> ArrayFloat:
        """Sample values (read-only)."""
        return self._values

    @property
    def domain(self) -> Tuple[float, float]:
        """(min, max) of the wavelength grid."""
        return float(self._wavelengths[0]), float(self._wavelengths[-1])

    @property
    def interval(self) -> Optional[float]:
        """Constant sampling step, or None for an irregular grid."""
        steps = np.diff(self._wavelengths)
        if np.allclose(steps, steps[0], rtol=0.0, atol=1e-9):
            return float(steps[0])
        return None

    def __len__(self) -> int:
        return self._wavelengths.shape[0]

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for wl, v in zip(self._wavelengths, self._values):
            yield float(wl), float(v)

    def value_at(self, wavelength: WavelengthLike) -> Union[float, ArrayFloat]:
        """
        Evaluate by linear interpolation between the bracketing samples.

        Wavelengths outside the sampled domain evaluate to 0 so that no
        spurious energy is introduced beyond the measured range.
        """
        out = _interp_zero(wavelength, self._wavelengths, self._values)
        if np.ndim(out) == 0:
            return float(out)
        return out

    def resample(self, wavelengths: npt.ArrayLike) -> "SpectralDistribution":
        """Evaluate onto a new grid (zero outside the current domain)."""
        grid = _as_float_array(wavelengths, type(self).__name__)
        return SpectralDistribution(grid, _interp_zero(grid, self._wavelengths, self._values))

    def integrate(self) -> float:
        """Composite trapezoidal rule over the own sample grid."""
        return float(trapezoid(self._values, self._wavelengths))

    # -- arithmetic --------------------------------------------------------
    def _union_grid(self, other: "SpectralDistribution") -> ArrayFloat:
        return np.union1d(self._wavelengths, other._wavelengths)

    def multiply(self, other: "SpectralDistribution") -> "SpectralDistribution":
        """Elementwise product on the union of both grids."""
        grid = self._union_grid(other)
        return SpectralDistribution(grid, self.value_at(grid) * other.value_at(grid))

    def add(self, other: "SpectralDistribution") -> "SpectralDistribution":
        """Elementwise sum on the union of both grids."""
        grid = self._union_grid(other)
        return SpectralDistribution(grid, self.value_at(grid) + other.value_at(grid))

    def scale(self, factor: float) -> "SpectralDistribution":
        return SpectralDistribution(self._wavelengths, self._values * float(factor))

    def normalize(self, wavelength: float = 560.0, value: float = 100.0) -> "SpectralDistribution":
        """
        Rescale so the distribution reads *value* at *wavelength*.

        Raises:
            DomainError: If the distribution is zero at *wavelength*.
        """
        ref = self.value_at(wavelength)
        if ref == 0.0:
            raise DomainError(
                f"{type(self).__name__}: cannot normalise, value at {wavelength} nm is 0"
            )
        return self.scale(value / ref)

    def __mul__(self, other: object) -> "SpectralDistribution":
        if isinstance(other, SpectralDistribution):
            return self.multiply(other)
        if isinstance(other, numbers.Real):
            return self.scale(float(other))
        return NotImplemented

    __rmul__ = __mul__

    def __add__(self, other: object) -> "SpectralDistribution":
        if isinstance(other, SpectralDistribution):
            return self.add(other)
        return NotImplemented

    # -- display -----------------------------------------------------------
    def __repr__(self) -> str:
        lo, hi = self.domain
        return (
            f"{type(self).__name__}(points={len(self)}, "
            f"range=[{lo:.2f}, {hi:.2f}])"
        )


# =============================================================================
# 2.  ColorMatchingFunctions
# =============================================================================
class ColorMatchingFunctions:
    """
    Standard-observer weighting functions x̄, ȳ, z̄ on a shared grid.

    Parameters
    ----------
    name : str
        Human readable identifier, e.g. ``"CIE 1931 2°"``.
    wavelengths : array_like, shape (N,)
        Strictly increasing grid in nm.
    table : array_like, shape (N, 3)
        Columns are x̄, ȳ, z̄.
    """

    __slots__ = ("_name", "_wavelengths", "_table")

    def __init__(self, name: str, wavelengths: npt.ArrayLike, table: npt.ArrayLike) -> None:
        label = f"ColorMatchingFunctions({name!r})"
        wl = _as_float_array(wavelengths, label)
        tbl = _as_float_array(table, label)
        validate_wavelength_grid(wl, label)
        if tbl.shape != (wl.shape[0], 3):
            raise ConstructionError(
                f"{label}: table must have shape ({wl.shape[0]}, 3), got {tbl.shape}"
            )
        if not np.all(np.isfinite(tbl)):
            raise ConstructionError(f"{label}: table values must be finite")

        self._name = name
        self._wavelengths: ArrayFloat = _readonly(wl)
        self._table: ArrayFloat = _readonly(tbl)

    @property
    def name(self) -> str:
        return self._name

    @property
    def wavelengths(self) -> ArrayFloat:
        return self._wavelengths

    @property
    def table(self) -> ArrayFloat:
        """(N, 3) array of x̄, ȳ, z̄ (read-only)."""
        return self._table

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self._wavelengths[0]), float(self._wavelengths[-1])

    @property
    def x_bar(self) -> SpectralDistribution:
        return SpectralDistribution(self._wavelengths, self._table[:, 0])

    @property
    def y_bar(self) -> SpectralDistribution:
        return SpectralDistribution(self._wavelengths, self._table[:, 1])

    @property
    def z_bar(self) -> SpectralDistribution:
        return SpectralDistribution(self._wavelengths, self._table[:, 2])

    def value_at(self, wavelength: WavelengthLike) -> ArrayFloat:
        """(x̄, ȳ, z̄) at *wavelength*; shape (..., 3), zero outside the domain."""
        return np.stack(
            [_interp_zero(wavelength, self._wavelengths, self._table[:, i]) for i in range(3)],
            axis=-1,
        )

    def __len__(self) -> int:
        return self._wavelengths.shape[0]

    def __repr__(self) -> str:
        lo, hi = self.domain
        return (
            f"ColorMatchingFunctions({self._name!r}, points={len(self)}, "
            f"range=[{lo:.2f}, {hi:.2f}])"
        )


# =============================================================================
# 3.  Illuminant
# =============================================================================
class Illuminant:
    """
    Reference light source: a named SpectralDistribution.

    The normalisation constant that maps a perfect reflector to Y = 100 is
    derived per colour-matching table by ``TristimulusComputer``.
    """

    __slots__ = ("_name", "_spd")

    def __init__(self, name: str, spd: SpectralDistribution) -> None:
        if not isinstance(spd, SpectralDistribution):
            raise TypeError(f"Illuminant {name!r}: expected SpectralDistribution, got {type(spd)}")
        self._name = name
        self._spd = spd

    @classmethod
    def from_wavelength_and_value(
        cls, name: str, wavelengths: npt.ArrayLike, values: npt.ArrayLike
    ) -> "Illuminant":
        return cls(name, SpectralDistribution(wavelengths, values))

    @property
    def name(self) -> str:
        return self._name

    @property
    def spd(self) -> SpectralDistribution:
        return self._spd

    @property
    def wavelengths(self) -> ArrayFloat:
        return self._spd.wavelengths

    @property
    def values(self) -> ArrayFloat:
        return self._spd.values

    @property
    def domain(self) -> Tuple[float, float]:
        return self._spd.domain

    def value_at(self, wavelength: WavelengthLike) -> Union[float, ArrayFloat]:
        return self._spd.value_at(wavelength)

    def __repr__(self) -> str:
        lo, hi = self.domain
        return f"Illuminant({self._name!r}, points={len(self._spd)}, range=[{lo:.2f}, {hi:.2f}])"
