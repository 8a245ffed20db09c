# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_rgb.py — RGB value family and conversion pipeline.

Three views of one colour under a given ``RGBColorSpace``:

    LinearRGB   linear light, nominally [0, 1]
    EncodedRGB  transfer-encoded signal, [0, 1]
    RGBu8       quantised 8-bit code values, [0, 255]

Forward path:
    XYZ --M⁻¹--> linear --clip [0, 1]--> OETF --> encoded --round, clip--> codes

Out-of-gamut policy: linear components are clamped to [0, 1] before the
OETF (negative or > 1 light is never pushed through the curve); codes are
clamped to [0, 2^bits − 1] after rounding.  ``clip=False`` disables the
first clamp for scene-referred / HDR work.

The inverse path decodes codes to [0, 1], applies the EOTF and multiplies
by M.  Everything here is a pure function of immutable inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal, Union

import numpy as np
import numpy.typing as npt

from prism_errors import ConstructionError
from prism_spectraldata import ArrayFloat, ColorMatchingFunctions, Illuminant, SpectralDistribution
from prism_transfer import TransferFunction
from prism_tristimulus import XYZ, TristimulusComputer, handle_shapes

if TYPE_CHECKING:
    from prism_colorspace import RGBColorSpace

__all__ = [
    "Rounding",
    "LinearRGB",
    "EncodedRGB",
    "RGBu8",
    "rgbu8",
    "quantize",
    "dequantize",
    "xyz_to_linear_rgb",
    "linear_rgb_to_xyz",
    "xyz_to_rgb_with_oetf",
    "rgb_to_xyz_with_eotf",
    "xyz_to_rgb_array",
    "rgb_array_to_xyz",
    "spd_to_rgb",
    "spd_to_rgb_u8",
    "spectra_to_rgb_u8",
]

Rounding = Literal["half_up", "half_even"]
_ROUNDING_MODES: Final[tuple[str, ...]] = ("half_up", "half_even")


# =============================================================================
# 1. QUANTISATION
# =============================================================================

def _max_code(bits: int) -> int:
    if not isinstance(bits, (int, np.integer)) or not 1 <= bits <= 16:
        raise ValueError(f"bits must be an integer in [1, 16], got {bits!r}")
    return (1 << int(bits)) - 1


def quantize(encoded: npt.ArrayLike, bits: int = 8, rounding: Rounding = "half_up") -> np.ndarray:
    """
    Encoded [0, 1] values → integer codes.

    Args:
        encoded: Transfer-encoded values, any shape.
        bits: Code depth (8 → [0, 255]).
        rounding: ``"half_up"`` (floor(v + 0.5)) or ``"half_even"``
                  (banker's rounding, ``np.rint``).

    Returns:
        uint8 codes for bits <= 8, uint16 otherwise, clamped to range.
    """
    max_code = _max_code(bits)
    scaled = np.asarray(encoded, dtype=np.float64) * max_code
    if rounding == "half_up":
        codes = np.floor(scaled + 0.5)
    elif rounding == "half_even":
        codes = np.rint(scaled)
    else:
        raise ValueError(f"Unknown rounding mode {rounding!r}. Choose from: {list(_ROUNDING_MODES)}")
    dtype = np.uint8 if bits <= 8 else np.uint16
    return np.clip(codes, 0, max_code).astype(dtype)


def dequantize(codes: npt.ArrayLike, bits: int = 8) -> ArrayFloat:
    """Integer codes → encoded [0, 1] floats."""
    return np.asarray(codes, dtype=np.float64) / _max_code(bits)


# =============================================================================
# 2. VALUE TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class LinearRGB:
    """Linear-light RGB under some colour space."""
    r: float
    g: float
    b: float

    def as_array(self) -> ArrayFloat:
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> "LinearRGB":
        a = np.asarray(arr, dtype=np.float64)
        if a.shape != (3,):
            raise ValueError(f"{cls.__name__}.from_array: expected shape (3,), got {a.shape}")
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def is_in_gamut(self) -> bool:
        return all(0.0 <= c <= 1.0 for c in (self.r, self.g, self.b))

    def encode(self, transfer: TransferFunction, clip: bool = True) -> "EncodedRGB":
        """Apply the OETF, clamping to [0, 1] first unless ``clip=False``."""
        linear = self.as_array()
        if clip:
            linear = np.clip(linear, 0.0, 1.0)
        return EncodedRGB.from_array(transfer.oetf(linear))


@dataclass(frozen=True, slots=True)
class EncodedRGB:
    """Transfer-encoded RGB signal, nominally [0, 1]."""
    r: float
    g: float
    b: float

    def as_array(self) -> ArrayFloat:
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> "EncodedRGB":
        a = np.asarray(arr, dtype=np.float64)
        if a.shape != (3,):
            raise ValueError(f"{cls.__name__}.from_array: expected shape (3,), got {a.shape}")
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def decode(self, transfer: TransferFunction) -> LinearRGB:
        return LinearRGB.from_array(transfer.eotf(self.as_array()))

    def quantize(self, rounding: Rounding = "half_up") -> "RGBu8":
        r, g, b = (int(c) for c in quantize(self.as_array(), bits=8, rounding=rounding))
        return RGBu8(r, g, b)


@dataclass(frozen=True, slots=True)
class RGBu8:
    """8-bit code values; construction rejects anything outside [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel, value in zip("rgb", (self.r, self.g, self.b)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConstructionError(f"RGBu8.{channel}: expected int, got {value!r}")
            if not 0 <= value <= 255:
                raise ConstructionError(f"RGBu8.{channel}: {value} outside [0, 255]")

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.uint8)

    def to_encoded(self) -> EncodedRGB:
        return EncodedRGB.from_array(dequantize(self.as_array(), bits=8))

    def max_channel_difference(self, other: "RGBu8") -> int:
        """Largest absolute per-channel difference in code values."""
        return max(abs(int(a) - int(b)) for a, b in zip((self.r, self.g, self.b),
                                                        (other.r, other.g, other.b)))

    def __iter__(self):
        return iter((self.r, self.g, self.b))


def rgbu8(r: int, g: int, b: int) -> RGBu8:
    return RGBu8(r, g, b)


# =============================================================================
# 3. SINGLE-VALUE PIPELINE
# =============================================================================

def _xyz_array(xyz: Union[XYZ, npt.ArrayLike]) -> ArrayFloat:
    if isinstance(xyz, XYZ):
        return xyz.as_array()
    return XYZ.from_array(xyz).as_array()


def xyz_to_linear_rgb(xyz: Union[XYZ, npt.ArrayLike], space: "RGBColorSpace") -> LinearRGB:
    """linear = M⁻¹ · xyz  (no clamping)."""
    return LinearRGB.from_array(space.xyz_to_rgb_matrix @ _xyz_array(xyz))


def linear_rgb_to_xyz(rgb: LinearRGB, space: "RGBColorSpace") -> XYZ:
    """xyz = M · linear."""
    return XYZ.from_array(space.rgb_to_xyz_matrix @ rgb.as_array())


def xyz_to_rgb_with_oetf(
    xyz: Union[XYZ, npt.ArrayLike],
    space: "RGBColorSpace",
    clip: bool = True,
) -> EncodedRGB:
    """
    XYZ (white at Y = 100) → transfer-encoded RGB.

    Args:
        xyz: Tristimulus value.
        space: Target working space.
        clip: Clamp linear RGB to [0, 1] before the OETF (default).

    Returns:
        Encoded RGB; call ``.quantize()`` for 8-bit codes.
    """
    return xyz_to_linear_rgb(xyz, space).encode(space.transfer, clip=clip)


def rgb_to_xyz_with_eotf(rgb: Union[EncodedRGB, RGBu8], space: "RGBColorSpace") -> XYZ:
    """Encoded (or 8-bit) RGB → XYZ via the EOTF and M."""
    if isinstance(rgb, RGBu8):
        rgb = rgb.to_encoded()
    elif not isinstance(rgb, EncodedRGB):
        raise TypeError(f"rgb_to_xyz_with_eotf: expected EncodedRGB or RGBu8, got {type(rgb)}")
    return linear_rgb_to_xyz(rgb.decode(space.transfer), space)


def spd_to_rgb(
    spd: SpectralDistribution,
    illuminant: Illuminant,
    cmf: ColorMatchingFunctions,
    space: "RGBColorSpace",
) -> EncodedRGB:
    """Spectrum → XYZ under *illuminant* → encoded RGB in *space*."""
    xyz = TristimulusComputer(cmf).compute(spd, illuminant)
    return xyz_to_rgb_with_oetf(xyz, space)


def spd_to_rgb_u8(
    spd: SpectralDistribution,
    illuminant: Illuminant,
    cmf: ColorMatchingFunctions,
    space: "RGBColorSpace",
    rounding: Rounding = "half_up",
) -> RGBu8:
    """``spd_to_rgb`` followed by 8-bit quantisation."""
    return spd_to_rgb(spd, illuminant, cmf, space).quantize(rounding=rounding)


# =============================================================================
# 4. BATCH PIPELINE  (shape-safe (N, 3) arrays)
# =============================================================================

@handle_shapes
def xyz_to_rgb_array(xyz_array: ArrayFloat, space: "RGBColorSpace", clip: bool = True) -> ArrayFloat:
    """
    XYZ → encoded RGB for (N, 3) or (3,) arrays.

    Rows are independent, so callers may split large batches across
    threads freely; ``space`` is read-only.
    """
    linear = xyz_array @ space.xyz_to_rgb_matrix.T
    if clip:
        linear = np.clip(linear, 0.0, 1.0)
    return np.asarray(space.transfer.oetf(linear))


@handle_shapes
def rgb_array_to_xyz(rgb_array: ArrayFloat, space: "RGBColorSpace") -> ArrayFloat:
    """Encoded RGB → XYZ for (N, 3) or (3,) arrays."""
    linear = np.asarray(space.transfer.eotf(rgb_array))
    return linear @ space.rgb_to_xyz_matrix.T


def spectra_to_rgb_u8(
    wavelengths: npt.ArrayLike,
    values: npt.ArrayLike,
    illuminant: Illuminant,
    cmf: ColorMatchingFunctions,
    space: "RGBColorSpace",
    rounding: Rounding = "half_up",
) -> np.ndarray:
    """
    Batch of spectra on one grid → 8-bit codes.

    Args:
        wavelengths: Shared grid, shape (N,).
        values: Spectra, shape (M, N) or (N,).

    Returns:
        uint8 array of shape (M, 3) or (3,).
    """
    xyz = TristimulusComputer(cmf).compute_many(wavelengths, values, illuminant)
    return quantize(xyz_to_rgb_array(xyz, space), bits=8, rounding=rounding)
