# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_data/illuminants.py — CIE standard and daylight illuminants.

Sources (CIE 15:2004 / CIE S 005-1998):
    D65       Tabulated relative SPD, 300–780 nm at 5 nm, 100 at 560 nm.
              This table, not the daylight formula, is the definition of D65.
    D50/55/75 Reconstructed from the daylight basis S0, S1, S2:
                  S(λ) = S0(λ) + M1·S1(λ) + M2·S2(λ)
              with (x_D, y_D) on the daylight locus and M1, M2 rounded to
              three decimals.  The nominal CCTs are scaled by
              1.4388 / 1.4380 to the ITS-90 value of c2.
    A         Planckian radiator at 2856 K (c2 = 1.435e-2 m·K), in closed form.
    E         Equal energy.
"""

import types
from typing import Final, Mapping, Optional

import numpy as np

from prism_errors import ConstructionError
from prism_spectraldata import Illuminant

__all__ = [
    "daylight_locus_chromaticity",
    "daylight_illuminant",
    "planckian_illuminant_a",
    "D65",
    "D50",
    "D55",
    "D75",
    "A",
    "E",
    "ILLUMINANTS",
    "get_illuminant",
]

# Ratio of the ITS-90 second radiation constant to the one used when the
# D-series CCTs were assigned.
_C2_RATIO: Final[float] = 1.4388 / 1.4380

_DAYLIGHT_CCT_RANGE: Final[tuple[float, float]] = (4000.0, 25000.0)

# =============================================================================
# TABLES
# =============================================================================

_D65_WAVELENGTHS: Final[np.ndarray] = np.arange(300.0, 785.0, 5.0)
_D65_VALUES: Final[np.ndarray] = np.array([
    0.034100, 1.6643, 3.2945, 11.7652, 20.236, 28.6447, 37.0535, 38.5011,
    39.9488, 42.4302, 44.9117, 45.775, 46.6383, 49.3637, 52.0891, 51.0323,
    49.9755, 52.3118, 54.6482, 68.7015, 82.7549, 87.1204, 91.486, 92.4589,
    93.4318, 90.057, 86.6823, 95.7736, 104.865, 110.936, 117.008, 117.410,
    117.812, 116.336, 114.861, 115.392, 115.923, 112.367, 108.811, 109.082,
    109.354, 108.578, 107.802, 106.296, 104.790, 106.239, 107.689, 106.047,
    104.405, 104.225, 104.046, 102.023, 100.000, 98.1671, 96.3342, 96.0611,
    95.788, 92.2368, 88.6856, 89.3459, 90.0062, 89.8026, 89.5991, 88.6489,
    87.6987, 85.4936, 83.2886, 83.4939, 83.6992, 81.8630, 80.0268, 80.1207,
    80.2146, 81.2462, 82.2778, 80.2810, 78.2842, 74.0027, 69.7213, 70.6652,
    71.6091, 72.979, 74.349, 67.9765, 61.604, 65.7448, 69.8856, 72.4863,
    75.087, 69.3398, 63.5927, 55.0054, 46.4182, 56.6118, 66.8054, 65.0941,
    63.3828,
], dtype=np.float64)

# λ [nm], S0, S1, S2 (CIE 15:2004 Table T.2), 300–830 nm at 5 nm.
_DAYLIGHT_BASIS: Final[np.ndarray] = np.array([
    [300.0, 0.04, 0.02, 0.00],
    [305.0, 3.02, 2.26, 1.00],
    [310.0, 6.00, 4.50, 2.00],
    [315.0, 17.80, 13.45, 3.00],
    [320.0, 29.60, 22.40, 4.00],
    [325.0, 42.45, 32.20, 6.25],
    [330.0, 55.30, 42.00, 8.50],
    [335.0, 56.30, 41.30, 8.15],
    [340.0, 57.30, 40.60, 7.80],
    [345.0, 59.55, 41.10, 7.25],
    [350.0, 61.80, 41.60, 6.70],
    [355.0, 61.65, 39.80, 6.00],
    [360.0, 61.50, 38.00, 5.30],
    [365.0, 65.15, 40.20, 5.70],
    [370.0, 68.80, 42.40, 6.10],
    [375.0, 66.10, 40.45, 4.55],
    [380.0, 63.40, 38.50, 3.00],
    [385.0, 64.60, 36.75, 2.10],
    [390.0, 65.80, 35.00, 1.20],
    [395.0, 80.30, 39.20, 0.05],
    [400.0, 94.80, 43.40, -1.10],
    [405.0, 99.80, 44.85, -0.80],
    [410.0, 104.80, 46.30, -0.50],
    [415.0, 105.35, 45.10, -0.60],
    [420.0, 105.90, 43.90, -0.70],
    [425.0, 101.35, 40.50, -0.95],
    [430.0, 96.80, 37.10, -1.20],
    [435.0, 105.35, 36.90, -1.90],
    [440.0, 113.90, 36.70, -2.60],
    [445.0, 119.75, 36.30, -2.75],
    [450.0, 125.60, 35.90, -2.90],
    [455.0, 125.55, 34.25, -2.85],
    [460.0, 125.50, 32.60, -2.80],
    [465.0, 123.40, 30.25, -2.70],
    [470.0, 121.30, 27.90, -2.60],
    [475.0, 121.30, 26.10, -2.60],
    [480.0, 121.30, 24.30, -2.60],
    [485.0, 117.40, 22.20, -2.20],
    [490.0, 113.50, 20.10, -1.80],
    [495.0, 113.30, 18.15, -1.65],
    [500.0, 113.10, 16.20, -1.50],
    [505.0, 111.95, 14.70, -1.40],
    [510.0, 110.80, 13.20, -1.30],
    [515.0, 108.65, 10.90, -1.25],
    [520.0, 106.50, 8.60, -1.20],
    [525.0, 107.65, 7.35, -1.10],
    [530.0, 108.80, 6.10, -1.00],
    [535.0, 107.05, 5.15, -0.75],
    [540.0, 105.30, 4.20, -0.50],
    [545.0, 104.85, 3.05, -0.40],
    [550.0, 104.40, 1.90, -0.30],
    [555.0, 102.20, 0.95, -0.15],
    [560.0, 100.00, 0.00, 0.00],
    [565.0, 98.00, -0.80, 0.10],
    [570.0, 96.00, -1.60, 0.20],
    [575.0, 95.55, -2.55, 0.35],
    [580.0, 95.10, -3.50, 0.50],
    [585.0, 92.10, -3.50, 1.30],
    [590.0, 89.10, -3.50, 2.10],
    [595.0, 89.80, -4.65, 2.65],
    [600.0, 90.50, -5.80, 3.20],
    [605.0, 90.40, -6.50, 3.65],
    [610.0, 90.30, -7.20, 4.10],
    [615.0, 89.35, -7.90, 4.40],
    [620.0, 88.40, -8.60, 4.70],
    [625.0, 86.20, -9.05, 4.90],
    [630.0, 84.00, -9.50, 5.10],
    [635.0, 84.55, -10.20, 5.90],
    [640.0, 85.10, -10.90, 6.70],
    [645.0, 83.50, -10.80, 7.00],
    [650.0, 81.90, -10.70, 7.30],
    [655.0, 82.25, -11.35, 7.95],
    [660.0, 82.60, -12.00, 8.60],
    [665.0, 83.75, -13.00, 9.20],
    [670.0, 84.90, -14.00, 9.80],
    [675.0, 83.10, -13.80, 10.00],
    [680.0, 81.30, -13.60, 10.20],
    [685.0, 76.60, -12.80, 9.25],
    [690.0, 71.90, -12.00, 8.30],
    [695.0, 73.10, -12.65, 8.95],
    [700.0, 74.30, -13.30, 9.60],
    [705.0, 75.35, -13.10, 9.05],
    [710.0, 76.40, -12.90, 8.50],
    [715.0, 69.85, -11.75, 7.75],
    [720.0, 63.30, -10.60, 7.00],
    [725.0, 67.50, -11.10, 7.30],
    [730.0, 71.70, -11.60, 7.60],
    [735.0, 74.35, -11.90, 7.80],
    [740.0, 77.00, -12.20, 8.00],
    [745.0, 71.10, -11.20, 7.35],
    [750.0, 65.20, -10.20, 6.70],
    [755.0, 56.45, -9.00, 5.95],
    [760.0, 47.70, -7.80, 5.20],
    [765.0, 58.15, -9.50, 6.30],
    [770.0, 68.60, -11.20, 7.40],
    [775.0, 66.80, -10.80, 7.10],
    [780.0, 65.00, -10.40, 6.80],
    [785.0, 65.50, -10.50, 6.90],
    [790.0, 66.00, -10.60, 7.00],
    [795.0, 63.50, -10.15, 6.70],
    [800.0, 61.00, -9.70, 6.40],
    [805.0, 57.15, -9.00, 5.95],
    [810.0, 53.30, -8.30, 5.50],
    [815.0, 56.10, -8.80, 5.80],
    [820.0, 58.90, -9.30, 6.10],
    [825.0, 60.40, -9.55, 6.30],
    [830.0, 61.90, -9.80, 6.50],
], dtype=np.float64)


# =============================================================================
# CONSTRUCTORS
# =============================================================================

def daylight_locus_chromaticity(cct: float) -> tuple[float, float]:
    """
    (x_D, y_D) on the CIE daylight locus for an ITS-90 correlated colour
    temperature in [4000, 25000] K.

    Raises:
        ConstructionError: CCT outside the locus definition.
    """
    lo, hi = _DAYLIGHT_CCT_RANGE
    if not np.isfinite(cct) or not lo <= cct <= hi:
        raise ConstructionError(f"Daylight CCT must lie in [{lo:.0f}, {hi:.0f}] K, got {cct}")

    t = float(cct)
    if t <= 7000.0:
        x = -4.6070e9 / t**3 + 2.9678e6 / t**2 + 0.09911e3 / t + 0.244063
    else:
        x = -2.0064e9 / t**3 + 1.9018e6 / t**2 + 0.24748e3 / t + 0.237040
    y = -3.000 * x**2 + 2.870 * x - 0.275
    return x, y


def daylight_illuminant(cct: float, name: Optional[str] = None) -> Illuminant:
    """
    CIE daylight illuminant for *cct* (kelvin, ITS-90 scale).

    Args:
        cct: Correlated colour temperature, 4000–25000 K.
        name: Illuminant name; defaults to ``"D<cct>"``.

    Returns:
        Illuminant on 300–830 nm at 5 nm, 100 at 560 nm.
    """
    x_d, y_d = daylight_locus_chromaticity(cct)
    denominator = 0.0241 + 0.2562 * x_d - 0.7341 * y_d
    m1 = round((-1.3515 - 1.7703 * x_d + 5.9114 * y_d) / denominator, 3)
    m2 = round((0.0300 - 31.4424 * x_d + 30.0717 * y_d) / denominator, 3)

    wl = _DAYLIGHT_BASIS[:, 0]
    s0, s1, s2 = _DAYLIGHT_BASIS[:, 1], _DAYLIGHT_BASIS[:, 2], _DAYLIGHT_BASIS[:, 3]
    return Illuminant.from_wavelength_and_value(
        name or f"D{cct:.0f}", wl, s0 + m1 * s1 + m2 * s2
    )


def planckian_illuminant_a() -> Illuminant:
    """CIE illuminant A, 300–830 nm at 5 nm, normalised to 100 at 560 nm."""
    wl = np.arange(300.0, 835.0, 5.0)
    c2_over_t = 1.435e7 / 2848.0
    values = (
        100.0 * (560.0 / wl) ** 5
        * np.expm1(c2_over_t / 560.0)
        / np.expm1(c2_over_t / wl)
    )
    return Illuminant.from_wavelength_and_value("A", wl, values)


# =============================================================================
# NAMED ILLUMINANTS
# =============================================================================

D65: Final[Illuminant] = Illuminant.from_wavelength_and_value("D65", _D65_WAVELENGTHS, _D65_VALUES)
D50: Final[Illuminant] = daylight_illuminant(5000.0 * _C2_RATIO, name="D50")
D55: Final[Illuminant] = daylight_illuminant(5500.0 * _C2_RATIO, name="D55")
D75: Final[Illuminant] = daylight_illuminant(7500.0 * _C2_RATIO, name="D75")
A: Final[Illuminant] = planckian_illuminant_a()
E: Final[Illuminant] = Illuminant.from_wavelength_and_value(
    "E", np.arange(300.0, 835.0, 5.0), np.full(107, 100.0)
)

ILLUMINANTS: Final[Mapping[str, Illuminant]] = types.MappingProxyType({
    ill.name.lower(): ill for ill in (D65, D50, D55, D75, A, E)
})


def get_illuminant(name: str) -> Illuminant:
    """Case-insensitive lookup in ``ILLUMINANTS``."""
    try:
        return ILLUMINANTS[name.strip().lower()]
    except KeyError:
        known = ", ".join(ill.name for ill in ILLUMINANTS.values())
        raise KeyError(f"Unknown illuminant {name!r}. Known: {known}") from None
