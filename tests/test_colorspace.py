"""
Tests for RGB working-space construction and the named-space registry.
"""

import numpy as np
import pytest

import prism_rgb
from prism_colorspace import (
    ACES2065_1,
    ACES_CG,
    ADOBE_RGB,
    COLOR_SPACES,
    DCI_P3,
    DISPLAY_P3,
    LINEAR_SRGB,
    REC709,
    REC2020,
    SRGB,
    RGBColorSpace,
    get_color_space,
)
from prism_errors import ConstructionError, NumericError
from prism_transfer import LINEAR_TRANSFER, SRGB_TRANSFER
from prism_tristimulus import XYZ

ALL_SPACES = [SRGB, LINEAR_SRGB, REC709, REC2020, DCI_P3, DISPLAY_P3, ADOBE_RGB, ACES_CG, ACES2065_1]

# IEC 61966-2-1 Annex F, rounded to four decimals
IEC_SRGB_NPM = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505],
])


class TestMatrixDerivation:

    def test_srgb_matches_published_matrix(self):
        np.testing.assert_allclose(SRGB.normalized_primary_matrix, IEC_SRGB_NPM, atol=5e-4)

    def test_srgb_luminance_row(self):
        # BT.709 luma coefficients
        np.testing.assert_allclose(
            SRGB.normalized_primary_matrix[1], [0.2126, 0.7152, 0.0722], atol=1e-4
        )

    @pytest.mark.parametrize("space", ALL_SPACES, ids=lambda s: s.name)
    def test_white_maps_to_white_point(self, space):
        white = space.rgb_to_xyz_matrix @ np.ones(3)
        np.testing.assert_allclose(white, space.white_xyz.as_array(), rtol=1e-12)
        assert white[1] == pytest.approx(100.0)

    @pytest.mark.parametrize("space", ALL_SPACES, ids=lambda s: s.name)
    def test_inverse(self, space):
        np.testing.assert_allclose(
            space.rgb_to_xyz_matrix @ space.xyz_to_rgb_matrix, np.eye(3), atol=1e-12
        )

    @pytest.mark.parametrize("space", ALL_SPACES, ids=lambda s: s.name)
    def test_primaries_chromaticity(self, space):
        for column, (x, y) in zip(space.rgb_to_xyz_matrix.T, space.primaries):
            cx, cy = XYZ.from_array(column).chromaticity()
            assert (cx, cy) == pytest.approx((x, y), abs=1e-12)

    def test_matrices_read_only(self):
        with pytest.raises(ValueError):
            SRGB.rgb_to_xyz_matrix[0, 0] = 1.0
        with pytest.raises(ValueError):
            SRGB.xyz_to_rgb_matrix[0, 0] = 1.0

    def test_custom_white_scale(self):
        space = RGBColorSpace("unit", (0.64, 0.33), (0.30, 0.60), (0.15, 0.06),
                              (0.3127, 0.3290), LINEAR_TRANSFER, white_y=1.0)
        np.testing.assert_allclose(space.rgb_to_xyz_matrix, SRGB.normalized_primary_matrix)


class TestConstructionErrors:

    def test_collinear_primaries(self):
        with pytest.raises(ConstructionError, match="collinear"):
            RGBColorSpace("flat", (0.2, 0.2), (0.3, 0.3), (0.4, 0.4), (0.3127, 0.3290), SRGB_TRANSFER)

    def test_coincident_primaries(self):
        with pytest.raises(ConstructionError):
            RGBColorSpace("dup", (0.64, 0.33), (0.64, 0.33), (0.15, 0.06), (0.3127, 0.3290),
                          SRGB_TRANSFER)

    def test_zero_y_chromaticity(self):
        with pytest.raises(ConstructionError, match="non-zero"):
            RGBColorSpace("bad", (0.64, 0.0), (0.30, 0.60), (0.15, 0.06), (0.3127, 0.3290),
                          SRGB_TRANSFER)

    def test_non_finite_chromaticity(self):
        with pytest.raises(ConstructionError, match="finite"):
            RGBColorSpace("bad", (0.64, 0.33), (np.nan, 0.60), (0.15, 0.06), (0.3127, 0.3290),
                          SRGB_TRANSFER)

    def test_malformed_chromaticity(self):
        with pytest.raises(ConstructionError, match="pair"):
            RGBColorSpace("bad", (0.64, 0.33, 0.03), (0.30, 0.60), (0.15, 0.06), (0.3127, 0.3290),
                          SRGB_TRANSFER)

    def test_bad_white_scale(self):
        with pytest.raises(ConstructionError):
            RGBColorSpace("bad", (0.64, 0.33), (0.30, 0.60), (0.15, 0.06), (0.3127, 0.3290),
                          SRGB_TRANSFER, white_y=0.0)

    def test_transfer_type_checked(self):
        with pytest.raises(TypeError):
            RGBColorSpace("bad", (0.64, 0.33), (0.30, 0.60), (0.15, 0.06), (0.3127, 0.3290), 2.2)

    def test_numeric_error_is_construction_error(self):
        assert issubclass(NumericError, ConstructionError)
        assert issubclass(NumericError, ArithmeticError)

    def test_negative_y_primary_allowed(self):
        # AP0 blue lies below the spectral locus
        assert ACES2065_1.primaries[2] == (0.0001, -0.0770)


class TestDelegation:

    def test_methods_match_functions(self):
        xyz = XYZ(30.0, 25.0, 10.0)
        assert SRGB.xyz_to_rgb_with_oetf(xyz) == prism_rgb.xyz_to_rgb_with_oetf(xyz, SRGB)
        rgb = prism_rgb.EncodedRGB(0.2, 0.4, 0.6)
        assert SRGB.rgb_to_xyz_with_eotf(rgb) == prism_rgb.rgb_to_xyz_with_eotf(rgb, SRGB)

    def test_array_methods(self):
        xyz = np.array([[30.0, 25.0, 10.0], [5.0, 5.0, 5.0]])
        np.testing.assert_array_equal(SRGB.xyz_to_rgb_array(xyz), prism_rgb.xyz_to_rgb_array(xyz, SRGB))
        rgb = np.array([0.2, 0.4, 0.6])
        np.testing.assert_array_equal(SRGB.rgb_array_to_xyz(rgb), prism_rgb.rgb_array_to_xyz(rgb, SRGB))

    def test_repr(self):
        assert "sRGB" in repr(SRGB)


class TestRegistry:

    @pytest.mark.parametrize("name, space", [
        ("sRGB", SRGB),
        ("srgb", SRGB),
        ("Rec. 709", REC709),
        ("REC-709", REC709),
        ("rec2020", REC2020),
        ("Display P3", DISPLAY_P3),
        ("acescg", ACES_CG),
        ("ACES2065-1", ACES2065_1),
        ("Adobe RGB (1998)", ADOBE_RGB),
    ])
    def test_lookup(self, name, space):
        assert get_color_space(name) is space

    def test_unknown(self):
        with pytest.raises(KeyError, match="Unknown colour space"):
            get_color_space("ProPhoto")

    def test_read_only(self):
        with pytest.raises(TypeError):
            COLOR_SPACES["custom"] = SRGB

    def test_all_named_spaces_registered(self):
        assert len(COLOR_SPACES) == len(ALL_SPACES)
