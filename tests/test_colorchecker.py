"""
End-to-end checks against the BabelColor ColorChecker average.
"""

import numpy as np
import pytest

from prism_colorspace import SRGB
from prism_data.cmf import CIE_1931_2DEG
from prism_data.colorchecker import (
    BABEL_AVERAGE_SPD,
    BABEL_AVERAGE_SRGB_U8,
    BABEL_AVERAGE_WAVELENGTHS,
    PATCH_NAMES,
)
from prism_data.illuminants import D65
from prism_rgb import rgbu8, spd_to_rgb_u8, spectra_to_rgb_u8

GREY_RAMP = ["white_95", "neutral_80", "neutral_65", "neutral_50", "neutral_35", "black_20"]


def chart_rgb(name):
    return spd_to_rgb_u8(BABEL_AVERAGE_SPD[name], D65, CIE_1931_2DEG, SRGB)


class TestFixtureData:

    def test_patch_count_and_order(self):
        assert len(PATCH_NAMES) == 24
        assert PATCH_NAMES[0] == "dark_skin"
        assert PATCH_NAMES[-1] == "black_20"
        assert set(BABEL_AVERAGE_SPD) == set(PATCH_NAMES) == set(BABEL_AVERAGE_SRGB_U8)

    def test_sampling(self):
        assert len(BABEL_AVERAGE_WAVELENGTHS) == 36
        for spd in BABEL_AVERAGE_SPD.values():
            assert spd.domain == (380.0, 730.0)
            assert spd.interval == pytest.approx(10.0)
            assert np.all((spd.values >= 0.0) & (spd.values <= 1.0))

    def test_registries_read_only(self):
        with pytest.raises(TypeError):
            BABEL_AVERAGE_SPD["extra"] = BABEL_AVERAGE_SPD["cyan"]
        with pytest.raises(TypeError):
            BABEL_AVERAGE_SRGB_U8["cyan"] = rgbu8(0, 0, 0)


class TestEndToEnd:
    """Spectrum -> XYZ (D65, CIE 1931 2°) -> sRGB codes."""

    @pytest.mark.parametrize("name, expected", [
        ("dark_skin", (115, 82, 68)),
        ("neutral_50", (120, 121, 121)),
        ("cyan", (0, 137, 166)),
    ])
    def test_reference_patches(self, name, expected):
        got = chart_rgb(name)
        assert got.max_channel_difference(rgbu8(*expected)) <= 1, f"{name}: {got}"
        assert rgbu8(*expected) == BABEL_AVERAGE_SRGB_U8[name]

    def test_neutral_ramp_is_monotone(self):
        greens = [chart_rgb(name).g for name in GREY_RAMP]
        assert all(a > b for a, b in zip(greens, greens[1:])), greens

    def test_neutral_ramp_is_neutral(self):
        for name in GREY_RAMP:
            rgb = chart_rgb(name)
            assert max(rgb) - min(rgb) <= 8, f"{name}: {rgb}"

    def test_batch_matches_single(self):
        values = np.stack([BABEL_AVERAGE_SPD[name].values for name in PATCH_NAMES])
        codes = spectra_to_rgb_u8(BABEL_AVERAGE_WAVELENGTHS, values, D65, CIE_1931_2DEG, SRGB)
        assert codes.shape == (24, 3)
        for name, row in zip(PATCH_NAMES, codes):
            assert tuple(int(c) for c in row) == tuple(chart_rgb(name))
