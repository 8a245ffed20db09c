# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_errors.py — Exception hierarchy.

Validation happens when spectra and colour spaces are constructed.  Once
built, conversions are total except for the zero-energy illuminant case
reported by ``DomainError``.
"""

__all__ = [
    "PrismError",
    "ConstructionError",
    "DomainError",
    "NumericError",
]


class PrismError(Exception):
    """Base class for every error raised by Prism."""


class ConstructionError(PrismError, ValueError):
    """
    Malformed input at construction time.

    Raised for spectral data with mismatched lengths, fewer than two
    samples or non-increasing wavelengths, and for RGB colour spaces
    whose primaries are collinear.
    """


class DomainError(PrismError, ValueError):
    """A computation has no defined result, e.g. a zero-energy illuminant."""


class NumericError(ConstructionError, ArithmeticError):
    """
    Linear algebra failed while deriving colour-space matrices.

    Subclasses ``ConstructionError`` so a single handler catches both the
    up-front collinearity check and a failure detected only at inversion.
    """
