# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_transfer.py — OETF / EOTF pairs.

Each curve is declared as an exact closed-form inverse pair rather than
solved numerically.  The piecewise family

    V = slope · L                          L <  beta
    V = alpha · L^(1/gamma) − (alpha − 1)  L >= beta

is inverted branch by branch, and the EOTF switches at exactly
``slope · beta`` (the image of the OETF breakpoint), so
``eotf(oetf(v)) == v`` holds to rounding on both segments.

Performance:
    Piecewise curves run in Numba kernels with explicit loops (no boolean
    mask allocation).  ``set_strict_ieee(True)`` swaps them for
    ``fastmath=False`` twins that preserve IEEE 754 semantics.

References:
    - IEC 61966-2-1:1999 (sRGB)
    - ITU-R BT.709-6, ITU-R BT.2020-2
    - Adobe RGB (1998) Color Image Encoding, §4.3.4
    - SMPTE RP 431-2 (DCI-P3)
"""

from __future__ import annotations

from typing import Callable, Final, Union

import numpy as np
import numpy.typing as npt
from numba import njit

from prism_errors import ConstructionError
from prism_spectraldata import ArrayFloat

__all__ = [
    "set_strict_ieee",
    "TransferFunction",
    "LinearTransfer",
    "GammaTransfer",
    "PiecewiseGammaTransfer",
    "LINEAR_TRANSFER",
    "SRGB_TRANSFER",
    "REC709_TRANSFER",
    "REC2020_TRANSFER",
    "ADOBE_RGB_TRANSFER",
    "DCI_P3_TRANSFER",
]

ScalarOrArray = Union[float, ArrayFloat]


# --- Runtime Configuration ---
# When True, Numba kernels use fastmath=False variants that preserve strict
# IEEE 754 semantics (inf / NaN propagation, no FP reassociation).
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
def _piecewise_oetf_kernel(linear: ArrayFloat, inv_gamma: float, alpha: float,
                           beta: float, slope: float) -> ArrayFloat:
    """Linear segment below *beta*, offset power law above."""
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    offset = alpha - 1.0

    for i in range(linear.size):
        v = linear_flat[i]
        if v < beta:
            out_flat[i] = slope * v
        else:
            out_flat[i] = alpha * (v ** inv_gamma) - offset
    return out


@njit(cache=True, fastmath=True)
def _piecewise_eotf_kernel(encoded: ArrayFloat, gamma: float, alpha: float,
                           beta: float, slope: float) -> ArrayFloat:
    """Closed-form inverse of ``_piecewise_oetf_kernel``."""
    out = np.empty_like(encoded)
    encoded_flat = encoded.ravel()
    out_flat = out.ravel()
    offset = alpha - 1.0
    threshold = slope * beta

    for i in range(encoded.size):
        v = encoded_flat[i]
        if v < threshold:
            out_flat[i] = v / slope
        else:
            out_flat[i] = ((v + offset) / alpha) ** gamma
    return out


# --- Strict IEEE 754 kernel variants (fastmath=False) ---

@njit(cache=True, fastmath=False)
def _piecewise_oetf_kernel_strict(linear: ArrayFloat, inv_gamma: float, alpha: float,
                                  beta: float, slope: float) -> ArrayFloat:
    """Piecewise OETF — strict IEEE 754 variant."""
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()
    offset = alpha - 1.0
    for i in range(linear.size):
        v = linear_flat[i]
        if v < beta:
            out_flat[i] = slope * v
        else:
            out_flat[i] = alpha * (v ** inv_gamma) - offset
    return out


@njit(cache=True, fastmath=False)
def _piecewise_eotf_kernel_strict(encoded: ArrayFloat, gamma: float, alpha: float,
                                  beta: float, slope: float) -> ArrayFloat:
    """Piecewise EOTF — strict IEEE 754 variant."""
    out = np.empty_like(encoded)
    encoded_flat = encoded.ravel()
    out_flat = out.ravel()
    offset = alpha - 1.0
    threshold = slope * beta
    for i in range(encoded.size):
        v = encoded_flat[i]
        if v < threshold:
            out_flat[i] = v / slope
        else:
            out_flat[i] = ((v + offset) / alpha) ** gamma
    return out


# --- Kernel dispatchers ---

def _piecewise_oetf(linear: ArrayFloat, inv_gamma: float, alpha: float,
                    beta: float, slope: float) -> ArrayFloat:
    if _STRICT_IEEE:
        return _piecewise_oetf_kernel_strict(linear, inv_gamma, alpha, beta, slope)
    return _piecewise_oetf_kernel(linear, inv_gamma, alpha, beta, slope)


def _piecewise_eotf(encoded: ArrayFloat, gamma: float, alpha: float,
                    beta: float, slope: float) -> ArrayFloat:
    if _STRICT_IEEE:
        return _piecewise_eotf_kernel_strict(encoded, gamma, alpha, beta, slope)
    return _piecewise_eotf_kernel(encoded, gamma, alpha, beta, slope)


def _apply(fn: Callable[[ArrayFloat], ArrayFloat], value: npt.ArrayLike) -> ScalarOrArray:
    """Run an array curve on a scalar or an array of any shape."""
    arr = np.asarray(value, dtype=np.float64)
    res = fn(np.ascontiguousarray(np.atleast_1d(arr)))
    if arr.ndim == 0:
        return float(res.reshape(-1)[0])
    return res.reshape(arr.shape)


def _require_positive(label: str, **params: float) -> None:
    for key, val in params.items():
        if not np.isfinite(val) or val <= 0.0:
            raise ConstructionError(f"{label}: {key} must be finite and > 0, got {val}")


# =============================================================================
# 2. TRANSFER FUNCTIONS
# =============================================================================

class TransferFunction:
    """
    Base class for an OETF / EOTF pair.

    Subclasses implement ``_oetf_array`` and ``_eotf_array`` on contiguous
    float64 arrays.  The public ``oetf`` / ``eotf`` accept a scalar
    (returning ``float``) or an array of any shape.  Curves are pure and
    stateless; instances are safe to share.
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def oetf(self, linear: npt.ArrayLike) -> ScalarOrArray:
        """Linear light → encoded signal."""
        return _apply(self._oetf_array, linear)

    def eotf(self, encoded: npt.ArrayLike) -> ScalarOrArray:
        """Encoded signal → linear light."""
        return _apply(self._eotf_array, encoded)

    def _oetf_array(self, linear: ArrayFloat) -> ArrayFloat:
        raise NotImplementedError

    def _eotf_array(self, encoded: ArrayFloat) -> ArrayFloat:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


class LinearTransfer(TransferFunction):
    """Identity curve for scene-linear working spaces."""

    __slots__ = ()

    def __init__(self, name: str = "linear") -> None:
        super().__init__(name)

    def _oetf_array(self, linear: ArrayFloat) -> ArrayFloat:
        return linear.copy()

    def _eotf_array(self, encoded: ArrayFloat) -> ArrayFloat:
        return encoded.copy()


class GammaTransfer(TransferFunction):
    """
    Pure power law: V = L^(1/gamma), L = V^gamma.

    Negative inputs are mirrored (sign · |v|^p) so unclipped data stays
    finite.
    """

    __slots__ = ("_gamma",)

    def __init__(self, gamma: float, name: str = "") -> None:
        _require_positive("GammaTransfer", gamma=gamma)
        super().__init__(name or f"gamma {gamma:g}")
        self._gamma = float(gamma)

    @property
    def gamma(self) -> float:
        return self._gamma

    def _oetf_array(self, linear: ArrayFloat) -> ArrayFloat:
        return np.sign(linear) * np.power(np.abs(linear), 1.0 / self._gamma)

    def _eotf_array(self, encoded: ArrayFloat) -> ArrayFloat:
        return np.sign(encoded) * np.power(np.abs(encoded), self._gamma)


class PiecewiseGammaTransfer(TransferFunction):
    """
    Linear toe joined to an offset power law (sRGB, BT.709, BT.2020).

    Parameters:
        gamma: Decoding exponent (the OETF uses 1/gamma).
        alpha: Power-segment gain, >= 1; the offset is alpha − 1.
        beta: Linear-light breakpoint, in (0, 1).
        slope: Gain of the linear toe.
    """

    __slots__ = ("_gamma", "_alpha", "_beta", "_slope")

    def __init__(self, gamma: float, alpha: float, beta: float, slope: float,
                 name: str = "") -> None:
        _require_positive("PiecewiseGammaTransfer", gamma=gamma, alpha=alpha,
                          beta=beta, slope=slope)
        if alpha < 1.0:
            raise ConstructionError(f"PiecewiseGammaTransfer: alpha must be >= 1, got {alpha}")
        if beta >= 1.0:
            raise ConstructionError(f"PiecewiseGammaTransfer: beta must be < 1, got {beta}")
        super().__init__(name or f"piecewise gamma {gamma:g}")
        self._gamma = float(gamma)
        self._alpha = float(alpha)
        self._beta = float(beta)
        self._slope = float(slope)

    @property
    def gamma(self) -> float:
        return self._gamma

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def slope(self) -> float:
        return self._slope

    @property
    def encoded_breakpoint(self) -> float:
        """Signal value where the EOTF switches segments (slope · beta)."""
        return self._slope * self._beta

    def _oetf_array(self, linear: ArrayFloat) -> ArrayFloat:
        return _piecewise_oetf(linear, 1.0 / self._gamma, self._alpha, self._beta, self._slope)

    def _eotf_array(self, encoded: ArrayFloat) -> ArrayFloat:
        return _piecewise_eotf(encoded, self._gamma, self._alpha, self._beta, self._slope)


# =============================================================================
# 3. NAMED CURVES
# =============================================================================

LINEAR_TRANSFER: Final[TransferFunction] = LinearTransfer()

# IEC 61966-2-1 defines the slope as exactly 12.92
SRGB_TRANSFER: Final[TransferFunction] = PiecewiseGammaTransfer(
    gamma=2.4, alpha=1.055, beta=0.0031308, slope=12.92, name="sRGB"
)

# BT.2020 quotes the exact constants; BT.709 rounds them to 1.099 / 0.018
REC709_TRANSFER: Final[TransferFunction] = PiecewiseGammaTransfer(
    gamma=1.0 / 0.45, alpha=1.09929682680944, beta=0.018053968510807, slope=4.5,
    name="Rec. 709",
)
REC2020_TRANSFER: Final[TransferFunction] = PiecewiseGammaTransfer(
    gamma=1.0 / 0.45, alpha=1.09929682680944, beta=0.018053968510807, slope=4.5,
    name="Rec. 2020",
)

ADOBE_RGB_TRANSFER: Final[TransferFunction] = GammaTransfer(563.0 / 256.0, name="Adobe RGB (1998)")

DCI_P3_TRANSFER: Final[TransferFunction] = GammaTransfer(2.6, name="DCI-P3")
