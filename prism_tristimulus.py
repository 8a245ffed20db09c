# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_tristimulus.py — Spectral → CIE XYZ integration.

Normalization Convention:
    All integrals are evaluated on the colour-matching table's native grid
    with the composite trapezoidal rule.  The sample S(λ) and illuminant
    I(λ) are evaluated through their own ``value_at`` (zero outside their
    measured domains).

        k = 100 / Σ I(λ)·ȳ(λ)·Δλ
        X = k · Σ S(λ)·I(λ)·x̄(λ)·Δλ        (Y, Z likewise)

    so that the perfect reflecting diffuser maps to Y = 100.  The same
    reference luminance (``REFERENCE_WHITE_Y``) is used by
    ``prism_colorspace`` when deriving RGB matrices, which keeps the two
    halves of the pipeline on one scale.

References:
    - CIE 15:2004 "Colorimetry", §7
"""

from __future__ import annotations

import functools
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Final, Tuple, Union

import numpy as np
import numpy.typing as npt

from prism_errors import ConstructionError, DomainError
from prism_spectraldata import (
    ArrayFloat,
    ColorMatchingFunctions,
    Illuminant,
    SpectralDistribution,
    validate_wavelength_grid,
)

__all__ = [
    "REFERENCE_WHITE_Y",
    "handle_shapes",
    "XYZ",
    "TristimulusWeights",
    "TristimulusComputer",
    "spd_to_xyz",
    "xyz_to_xyY",
    "xyY_to_xyz",
    "xy_to_xyz",
]

# --- Constants ---
REFERENCE_WHITE_Y: Final[float] = 100.0

# Chromaticity reported for zero-luminance input (D65).
_BLACK_XY: Final[Tuple[float, float]] = (0.3127, 0.3290)


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) and safeguard shape.

    This ensures that 1D inputs (single colours) are treated as 2D batches
    internally, simplifying the kernels.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: npt.ArrayLike, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.ndim != 2 or arr_in.shape[-1] != 3:
            raise ValueError(f"Expected shape (3,) or (N, 3), got {arr.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. VALUE TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class XYZ:
    """
    CIE tristimulus value on the Y = 100 white scale.

    No bounds are enforced; negative or > 100 components are legal
    intermediate results.
    """
    X: float
    Y: float
    Z: float

    def as_array(self) -> ArrayFloat:
        return np.array([self.X, self.Y, self.Z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> "XYZ":
        a = np.asarray(arr, dtype=np.float64)
        if a.shape != (3,):
            raise ValueError(f"XYZ.from_array: expected shape (3,), got {a.shape}")
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def chromaticity(self) -> Tuple[float, float]:
        """(x, y); black reports the D65 chromaticity."""
        total = self.X + self.Y + self.Z
        if total == 0.0:
            return _BLACK_XY
        return self.X / total, self.Y / total

    def xyY(self) -> Tuple[float, float, float]:
        x, y = self.chromaticity()
        return x, y, self.Y


@dataclass(frozen=True, slots=True, eq=False)
class TristimulusWeights:
    """
    Pre-integrated weighting for one (CMF, illuminant) pair.

    ``weights[i] = k · Δλ_i · I(λ_i) · (x̄, ȳ, z̄)(λ_i)`` where Δλ_i are the
    trapezoid weights of the CMF grid.  A sample evaluated on
    ``wavelengths`` gives XYZ as ``samples @ weights``.
    """
    wavelengths: ArrayFloat
    weights: ArrayFloat
    k: float


# =============================================================================
# 3. INTEGRATION
# =============================================================================

def _trapezoid_weights(wl: ArrayFloat) -> ArrayFloat:
    """Per-sample weights w with Σ f·w == scipy.integrate.trapezoid(f, wl)."""
    steps = np.diff(wl)
    w = np.zeros_like(wl)
    w[:-1] += 0.5 * steps
    w[1:] += 0.5 * steps
    return w


@functools.lru_cache(maxsize=32)
def _cached_weights(cmf: ColorMatchingFunctions, illuminant: Illuminant) -> TristimulusWeights:
    """
    Cached worker for the illuminant weighting.

    Keys are the (immutable) objects themselves, hashed by identity.
    """
    wl = cmf.wavelengths
    cmf_lo, cmf_hi = cmf.domain
    ill_lo, ill_hi = illuminant.domain
    if ill_lo > cmf_lo or ill_hi < cmf_hi:
        warnings.warn(
            f"Illuminant {illuminant.name!r} spans [{ill_lo:.1f}, {ill_hi:.1f}] nm, "
            f"narrower than {cmf.name!r} [{cmf_lo:.1f}, {cmf_hi:.1f}] nm; "
            "it is treated as zero outside its domain.",
            RuntimeWarning,
            stacklevel=4,
        )

    raw = cmf.table * (_trapezoid_weights(wl) * np.asarray(illuminant.value_at(wl)))[:, np.newaxis]
    denom = float(np.sum(raw[:, 1]))
    if denom == 0.0 or not np.isfinite(denom):
        raise DomainError(
            f"Illuminant {illuminant.name!r} has zero weighted energy against "
            f"{cmf.name!r} ȳ; normalisation is undefined."
        )

    k = REFERENCE_WHITE_Y / denom
    weights = raw * k
    weights.setflags(write=False)
    return TristimulusWeights(wavelengths=wl, weights=weights, k=k)


class TristimulusComputer:
    """
    Integrates spectra against one set of colour-matching functions.

    Instances are immutable and safe to share between threads; the only
    cached state is the per-illuminant weighting, held in a thread-safe
    ``functools.lru_cache``.
    """

    __slots__ = ("_cmf",)

    def __init__(self, cmf: ColorMatchingFunctions) -> None:
        if not isinstance(cmf, ColorMatchingFunctions):
            raise TypeError(f"TristimulusComputer: expected ColorMatchingFunctions, got {type(cmf)}")
        self._cmf = cmf

    @property
    def cmf(self) -> ColorMatchingFunctions:
        return self._cmf

    def weights(self, illuminant: Illuminant) -> TristimulusWeights:
        """
        Weighting for *illuminant* on this observer.

        Raises:
            DomainError: If Σ I·ȳ·Δλ is zero.
        """
        return _cached_weights(self._cmf, illuminant)

    def compute(self, spd: SpectralDistribution, illuminant: Illuminant) -> XYZ:
        """XYZ of sample *spd* viewed under *illuminant* (white → Y = 100)."""
        w = self.weights(illuminant)
        samples = np.asarray(spd.value_at(w.wavelengths), dtype=np.float64)
        return XYZ.from_array(samples @ w.weights)

    def compute_many(
        self,
        wavelengths: npt.ArrayLike,
        values: npt.ArrayLike,
        illuminant: Illuminant,
    ) -> ArrayFloat:
        """
        Batch integration of spectra sharing one wavelength grid.

        Args:
            wavelengths: Shared grid, shape (N,).
            values: Spectra, shape (M, N) or (N,).
            illuminant: Reference light source.

        Returns:
            XYZ array of shape (M, 3) or (3,).
        """
        wl = np.asarray(wavelengths, dtype=np.float64)
        validate_wavelength_grid(wl, "TristimulusComputer.compute_many")
        vals = np.asarray(values, dtype=np.float64)
        batch = np.atleast_2d(vals)
        if batch.ndim != 2 or batch.shape[-1] != wl.shape[0]:
            raise ValueError(
                f"Spectra must have shape (M, {wl.shape[0]}) or ({wl.shape[0]},), got {vals.shape}"
            )

        w = self.weights(illuminant)
        samples = np.stack(
            [np.interp(w.wavelengths, wl, row, left=0.0, right=0.0) for row in batch]
        )
        xyz = samples @ w.weights
        if vals.ndim == 1:
            return xyz[0]
        return xyz

    def white_point(self, illuminant: Illuminant) -> XYZ:
        """XYZ of the perfect reflecting diffuser under *illuminant* (Y = 100)."""
        return XYZ.from_array(np.sum(self.weights(illuminant).weights, axis=0))

    def __repr__(self) -> str:
        return f"TristimulusComputer(cmf={self._cmf.name!r})"


def spd_to_xyz(
    spd: SpectralDistribution,
    illuminant: Illuminant,
    cmf: ColorMatchingFunctions,
) -> XYZ:
    """One-shot ``TristimulusComputer(cmf).compute(spd, illuminant)``."""
    return TristimulusComputer(cmf).compute(spd, illuminant)


# =============================================================================
# 4. CHROMATICITY
# =============================================================================

@handle_shapes
def xyz_to_xyY(xyz_array: ArrayFloat) -> ArrayFloat:
    """
    XYZ → xyY over (N, 3) or (3,) arrays.

    NOTE: zero-luminance (black) rows get the D65 chromaticity with Y = 0
    so the output is NaN-free.
    """
    sum_xyz = np.sum(xyz_array, axis=-1)
    mask = sum_xyz != 0.0
    xyY = np.zeros_like(xyz_array)

    if np.any(mask):
        inv_sum = 1.0 / sum_xyz[mask]
        xyY[mask, 0] = xyz_array[mask, 0] * inv_sum
        xyY[mask, 1] = xyz_array[mask, 1] * inv_sum
        xyY[mask, 2] = xyz_array[mask, 1]

    xyY[~mask, 0] = _BLACK_XY[0]
    xyY[~mask, 1] = _BLACK_XY[1]
    xyY[~mask, 2] = 0.0
    return xyY


@handle_shapes
def xyY_to_xyz(xyY_array: ArrayFloat) -> ArrayFloat:
    """xyY → XYZ over (N, 3) or (3,) arrays; rows with y == 0 map to 0."""
    x, y, Y = xyY_array[:, 0], xyY_array[:, 1], xyY_array[:, 2]
    xyz = np.zeros_like(xyY_array)
    mask = y != 0.0
    if np.any(mask):
        factor = Y[mask] / y[mask]
        xyz[mask, 0] = x[mask] * factor
        xyz[mask, 1] = Y[mask]
        xyz[mask, 2] = (1.0 - x[mask] - y[mask]) * factor
    return xyz


def xy_to_xyz(x: float, y: float, Y: Union[float, int] = 1.0) -> XYZ:
    """
    XYZ with luminance *Y* along chromaticity direction (x, y).

    Raises:
        ConstructionError: If y == 0 (no finite direction exists).
    """
    if y == 0.0:
        raise ConstructionError(f"Chromaticity ({x}, {y}) has y = 0")
    scale = float(Y) / y
    return XYZ(x * scale, float(Y), (1.0 - x - y) * scale)
