# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_colorspace.py — RGB working spaces.

Matrix derivation (SMPTE RP 177):
    1. Each primary (x, y) becomes the XYZ direction (x/y, 1, z/y).
    2. The white chromaticity becomes XYZ with Y = white_y
       (``REFERENCE_WHITE_Y`` = 100, the tristimulus white scale).
    3. Solve P · S = W for the per-primary scale S.
    4. M = P · diag(S) maps linear RGB → XYZ; M⁻¹ maps back.

Both matrices are computed once in ``__init__`` and stored read-only.
RGB (1, 1, 1) therefore maps to the white point at Y = 100, matching the
output scale of ``prism_tristimulus``.

References:
    - SMPTE RP 177-1993 "Derivation of Basic Television Color Equations"
    - IEC 61966-2-1:1999, ITU-R BT.709-6, ITU-R BT.2020-2,
      SMPTE RP 431-2, Adobe RGB (1998), SMPTE ST 2065-1, S-2014-004
"""

from __future__ import annotations

import types
from typing import Final, Mapping, Sequence, Tuple, TypeAlias

import numpy as np
import numpy.typing as npt

import prism_rgb
from prism_errors import ConstructionError, NumericError
from prism_spectraldata import ArrayFloat
from prism_transfer import (
    ADOBE_RGB_TRANSFER,
    DCI_P3_TRANSFER,
    LINEAR_TRANSFER,
    REC709_TRANSFER,
    REC2020_TRANSFER,
    SRGB_TRANSFER,
    TransferFunction,
)
from prism_tristimulus import REFERENCE_WHITE_Y, XYZ, xy_to_xyz

__all__ = [
    "Chromaticity",
    "RGBColorSpace",
    "SRGB",
    "LINEAR_SRGB",
    "REC709",
    "REC2020",
    "DCI_P3",
    "DISPLAY_P3",
    "ADOBE_RGB",
    "ACES_CG",
    "ACES2065_1",
    "COLOR_SPACES",
    "get_color_space",
]

Chromaticity: TypeAlias = Tuple[float, float]

# Twice the signed area of the primaries' triangle in the xy plane.
_COLLINEAR_TOL: Final[float] = 1e-10


def _as_chromaticity(label: str, xy: Sequence[float]) -> Chromaticity:
    try:
        x, y = (float(c) for c in xy)
    except (TypeError, ValueError) as exc:
        raise ConstructionError(f"{label}: expected an (x, y) pair, got {xy!r}") from exc
    if not (np.isfinite(x) and np.isfinite(y)):
        raise ConstructionError(f"{label}: chromaticity must be finite, got ({x}, {y})")
    if y == 0.0:
        raise ConstructionError(f"{label}: chromaticity y must be non-zero")
    return x, y


def _derive_matrices(
    name: str,
    primaries: Tuple[Chromaticity, Chromaticity, Chromaticity],
    white: Chromaticity,
    white_y: float,
) -> Tuple[ArrayFloat, ArrayFloat]:
    """Return (M, M⁻¹) for the given primaries and white point."""
    homogeneous = np.array(
        [[x for x, _ in primaries], [y for _, y in primaries], [1.0, 1.0, 1.0]],
        dtype=np.float64,
    )
    if abs(np.linalg.det(homogeneous)) < _COLLINEAR_TOL:
        raise ConstructionError(
            f"RGBColorSpace({name!r}): primaries {primaries} are collinear"
        )

    # Columns are the unnormalised XYZ directions (x/y, 1, z/y)
    directions = np.column_stack([xy_to_xyz(x, y, 1.0).as_array() for x, y in primaries])
    white_xyz = xy_to_xyz(white[0], white[1], white_y).as_array()

    try:
        scale = np.linalg.solve(directions, white_xyz)
        rgb_to_xyz = directions * scale[np.newaxis, :]
        xyz_to_rgb = np.linalg.inv(rgb_to_xyz)
    except np.linalg.LinAlgError as exc:
        raise NumericError(f"RGBColorSpace({name!r}): matrix inversion failed ({exc})") from exc

    if not (np.all(np.isfinite(rgb_to_xyz)) and np.all(np.isfinite(xyz_to_rgb))):
        raise NumericError(f"RGBColorSpace({name!r}): derived matrices are not finite")

    rgb_to_xyz.setflags(write=False)
    xyz_to_rgb.setflags(write=False)
    return rgb_to_xyz, xyz_to_rgb


class RGBColorSpace:
    """
    RGB working space: three primaries, a white point and a transfer curve.

    Parameters:
        name: Identifier used in the registry and in messages.
        red, green, blue: Primary chromaticities (x, y).
        white: White-point chromaticity (x, y).
        transfer: OETF / EOTF pair applied per channel.
        white_y: Luminance the white point maps to (default 100).

    Raises:
        ConstructionError: Malformed chromaticities or collinear primaries.
        NumericError: Matrix solve / inversion failed.
    """

    __slots__ = (
        "_name",
        "_primaries",
        "_white",
        "_white_y",
        "_transfer",
        "_rgb_to_xyz",
        "_xyz_to_rgb",
    )

    def __init__(
        self,
        name: str,
        red: Sequence[float],
        green: Sequence[float],
        blue: Sequence[float],
        white: Sequence[float],
        transfer: TransferFunction,
        white_y: float = REFERENCE_WHITE_Y,
    ) -> None:
        label = f"RGBColorSpace({name!r})"
        if not isinstance(transfer, TransferFunction):
            raise TypeError(f"{label}: transfer must be a TransferFunction, got {type(transfer)}")
        if not np.isfinite(white_y) or white_y <= 0.0:
            raise ConstructionError(f"{label}: white_y must be finite and > 0, got {white_y}")

        primaries = (
            _as_chromaticity(f"{label} red", red),
            _as_chromaticity(f"{label} green", green),
            _as_chromaticity(f"{label} blue", blue),
        )
        white_xy = _as_chromaticity(f"{label} white", white)

        self._name = name
        self._primaries = primaries
        self._white = white_xy
        self._white_y = float(white_y)
        self._transfer = transfer
        self._rgb_to_xyz, self._xyz_to_rgb = _derive_matrices(
            name, primaries, white_xy, self._white_y
        )

    # -- read interface ----------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def primaries(self) -> Tuple[Chromaticity, Chromaticity, Chromaticity]:
        return self._primaries

    @property
    def white(self) -> Chromaticity:
        return self._white

    @property
    def white_y(self) -> float:
        return self._white_y

    @property
    def white_xyz(self) -> XYZ:
        return xy_to_xyz(self._white[0], self._white[1], self._white_y)

    @property
    def transfer(self) -> TransferFunction:
        return self._transfer

    @property
    def rgb_to_xyz_matrix(self) -> ArrayFloat:
        """M: column-vector linear RGB → XYZ (read-only)."""
        return self._rgb_to_xyz

    @property
    def xyz_to_rgb_matrix(self) -> ArrayFloat:
        """M⁻¹: column-vector XYZ → linear RGB (read-only)."""
        return self._xyz_to_rgb

    @property
    def normalized_primary_matrix(self) -> ArrayFloat:
        """M rescaled so the white maps to Y = 1 (the published NPM)."""
        return self._rgb_to_xyz / self._white_y

    # -- conversions -------------------------------------------------------
    def xyz_to_rgb_with_oetf(self, xyz: XYZ | npt.ArrayLike, clip: bool = True) -> "prism_rgb.EncodedRGB":
        return prism_rgb.xyz_to_rgb_with_oetf(xyz, self, clip=clip)

    def rgb_to_xyz_with_eotf(self, rgb: "prism_rgb.EncodedRGB | prism_rgb.RGBu8") -> XYZ:
        return prism_rgb.rgb_to_xyz_with_eotf(rgb, self)

    def xyz_to_rgb_array(self, xyz_array: npt.ArrayLike, clip: bool = True) -> ArrayFloat:
        return prism_rgb.xyz_to_rgb_array(xyz_array, self, clip=clip)

    def rgb_array_to_xyz(self, rgb_array: npt.ArrayLike) -> ArrayFloat:
        return prism_rgb.rgb_array_to_xyz(rgb_array, self)

    def __repr__(self) -> str:
        return (
            f"RGBColorSpace({self._name!r}, white={self._white}, "
            f"transfer={self._transfer.name!r})"
        )


# =============================================================================
# NAMED SPACES
# =============================================================================

_D65: Final[Chromaticity] = (0.3127, 0.3290)
_DCI_WHITE: Final[Chromaticity] = (0.314, 0.351)
_ACES_WHITE: Final[Chromaticity] = (0.32168, 0.33767)

_BT709_PRIMARIES = ((0.64, 0.33), (0.30, 0.60), (0.15, 0.06))
_BT2020_PRIMARIES = ((0.708, 0.292), (0.170, 0.797), (0.131, 0.046))
_P3_PRIMARIES = ((0.680, 0.320), (0.265, 0.690), (0.150, 0.060))
_ADOBE_PRIMARIES = ((0.64, 0.33), (0.21, 0.71), (0.15, 0.06))
_AP1_PRIMARIES = ((0.713, 0.293), (0.165, 0.830), (0.128, 0.044))
_AP0_PRIMARIES = ((0.7347, 0.2653), (0.0, 1.0), (0.0001, -0.0770))

SRGB: Final[RGBColorSpace] = RGBColorSpace("sRGB", *_BT709_PRIMARIES, _D65, SRGB_TRANSFER)
LINEAR_SRGB: Final[RGBColorSpace] = RGBColorSpace(
    "linear sRGB", *_BT709_PRIMARIES, _D65, LINEAR_TRANSFER
)
REC709: Final[RGBColorSpace] = RGBColorSpace("Rec. 709", *_BT709_PRIMARIES, _D65, REC709_TRANSFER)
REC2020: Final[RGBColorSpace] = RGBColorSpace(
    "Rec. 2020", *_BT2020_PRIMARIES, _D65, REC2020_TRANSFER
)
DCI_P3: Final[RGBColorSpace] = RGBColorSpace("DCI-P3", *_P3_PRIMARIES, _DCI_WHITE, DCI_P3_TRANSFER)
DISPLAY_P3: Final[RGBColorSpace] = RGBColorSpace("Display P3", *_P3_PRIMARIES, _D65, SRGB_TRANSFER)
ADOBE_RGB: Final[RGBColorSpace] = RGBColorSpace(
    "Adobe RGB (1998)", *_ADOBE_PRIMARIES, _D65, ADOBE_RGB_TRANSFER
)
ACES_CG: Final[RGBColorSpace] = RGBColorSpace("ACEScg", *_AP1_PRIMARIES, _ACES_WHITE, LINEAR_TRANSFER)
ACES2065_1: Final[RGBColorSpace] = RGBColorSpace(
    "ACES2065-1", *_AP0_PRIMARIES, _ACES_WHITE, LINEAR_TRANSFER
)


def _registry_key(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


COLOR_SPACES: Final[Mapping[str, RGBColorSpace]] = types.MappingProxyType({
    _registry_key(space.name): space
    for space in (SRGB, LINEAR_SRGB, REC709, REC2020, DCI_P3, DISPLAY_P3,
                  ADOBE_RGB, ACES_CG, ACES2065_1)
})


def get_color_space(name: str) -> RGBColorSpace:
    """
    Look up a named space; case, spaces and punctuation are ignored
    (``"rec709"``, ``"Rec. 709"`` and ``"REC-709"`` are the same).
    """
    try:
        return COLOR_SPACES[_registry_key(name)]
    except KeyError:
        known = ", ".join(space.name for space in COLOR_SPACES.values())
        raise KeyError(f"Unknown colour space {name!r}. Known: {known}") from None
