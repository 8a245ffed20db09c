"""
Tests for OETF / EOTF pairs.
"""

import numpy as np
import pytest

import prism_transfer
from prism_errors import ConstructionError
from prism_transfer import (
    ADOBE_RGB_TRANSFER,
    DCI_P3_TRANSFER,
    LINEAR_TRANSFER,
    REC709_TRANSFER,
    REC2020_TRANSFER,
    SRGB_TRANSFER,
    GammaTransfer,
    PiecewiseGammaTransfer,
    set_strict_ieee,
)

ALL_CURVES = [
    LINEAR_TRANSFER,
    SRGB_TRANSFER,
    REC709_TRANSFER,
    REC2020_TRANSFER,
    ADOBE_RGB_TRANSFER,
    DCI_P3_TRANSFER,
]


@pytest.fixture
def strict_mode():
    """Enable strict IEEE kernels for one test and restore afterwards."""
    previous = prism_transfer._STRICT_IEEE
    set_strict_ieee(True)
    yield
    set_strict_ieee(previous)


class TestInverseLaw:
    """EOTF(OETF(v)) == v and OETF(EOTF(v)) == v on [0, 1]."""

    @pytest.fixture
    def samples(self):
        return np.linspace(0.0, 1.0, 1001)

    @pytest.mark.parametrize("curve", ALL_CURVES, ids=lambda c: c.name)
    def test_eotf_of_oetf(self, curve, samples):
        np.testing.assert_allclose(curve.eotf(curve.oetf(samples)), samples, rtol=0.0, atol=1e-6)

    @pytest.mark.parametrize("curve", ALL_CURVES, ids=lambda c: c.name)
    def test_oetf_of_eotf(self, curve, samples):
        np.testing.assert_allclose(curve.oetf(curve.eotf(samples)), samples, rtol=0.0, atol=1e-6)

    def test_strict_kernels_agree(self, samples, strict_mode):
        np.testing.assert_allclose(
            SRGB_TRANSFER.eotf(SRGB_TRANSFER.oetf(samples)), samples, rtol=0.0, atol=1e-6
        )


class TestSRGBCurve:

    def test_endpoints(self):
        assert SRGB_TRANSFER.oetf(0.0) == 0.0
        assert SRGB_TRANSFER.oetf(1.0) == pytest.approx(1.0, abs=1e-12)
        assert SRGB_TRANSFER.eotf(1.0) == pytest.approx(1.0, abs=1e-12)

    def test_linear_toe(self):
        assert SRGB_TRANSFER.oetf(0.002) == pytest.approx(12.92 * 0.002)
        assert SRGB_TRANSFER.eotf(0.02) == pytest.approx(0.02 / 12.92)

    def test_breakpoint(self):
        assert SRGB_TRANSFER.encoded_breakpoint == pytest.approx(0.04045, abs=1e-5)
        below = SRGB_TRANSFER.oetf(0.0031308 - 1e-12)
        above = SRGB_TRANSFER.oetf(0.0031308)
        assert abs(above - below) < 1e-4

    def test_mid_grey(self):
        # 18 % grey encodes to about 118/255
        assert SRGB_TRANSFER.oetf(0.18) == pytest.approx(0.4614, abs=1e-3)

    def test_monotone(self):
        encoded = SRGB_TRANSFER.oetf(np.linspace(0.0, 1.0, 513))
        assert np.all(np.diff(encoded) > 0)


class TestRec709Curve:

    def test_continuous_at_breakpoint(self):
        beta = 0.018053968510807
        linear_branch = 4.5 * beta
        assert REC709_TRANSFER.oetf(beta) == pytest.approx(linear_branch, abs=1e-9)

    def test_rec2020_shares_constants(self):
        values = np.linspace(0.0, 1.0, 11)
        np.testing.assert_allclose(REC2020_TRANSFER.oetf(values), REC709_TRANSFER.oetf(values))


class TestShapes:

    def test_scalar_returns_float(self):
        assert isinstance(SRGB_TRANSFER.oetf(0.5), float)
        assert isinstance(ADOBE_RGB_TRANSFER.eotf(0.5), float)

    def test_array_shape_preserved(self):
        data = np.random.default_rng(3).uniform(0.0, 1.0, (2, 4, 3))
        assert SRGB_TRANSFER.oetf(data).shape == (2, 4, 3)
        assert LINEAR_TRANSFER.eotf(data).shape == (2, 4, 3)

    def test_linear_is_identity_copy(self):
        data = np.array([0.1, 0.5])
        out = LINEAR_TRANSFER.oetf(data)
        np.testing.assert_array_equal(out, data)
        assert out is not data


class TestGammaTransfer:

    def test_power_law(self):
        assert DCI_P3_TRANSFER.eotf(0.5) == pytest.approx(0.5 ** 2.6)
        assert ADOBE_RGB_TRANSFER.oetf(0.5) == pytest.approx(0.5 ** (256.0 / 563.0))

    def test_negative_mirrored(self):
        assert DCI_P3_TRANSFER.oetf(-0.25) == pytest.approx(-DCI_P3_TRANSFER.oetf(0.25))

    def test_default_name(self):
        assert GammaTransfer(2.2).name == "gamma 2.2"


class TestConstruction:

    @pytest.mark.parametrize("kwargs", [
        dict(gamma=0.0, alpha=1.055, beta=0.0031308, slope=12.92),
        dict(gamma=2.4, alpha=0.9, beta=0.0031308, slope=12.92),
        dict(gamma=2.4, alpha=1.055, beta=1.5, slope=12.92),
        dict(gamma=2.4, alpha=1.055, beta=0.0031308, slope=-1.0),
        dict(gamma=float("nan"), alpha=1.055, beta=0.0031308, slope=12.92),
    ])
    def test_invalid_piecewise(self, kwargs):
        with pytest.raises(ConstructionError):
            PiecewiseGammaTransfer(**kwargs)

    def test_invalid_gamma(self):
        with pytest.raises(ConstructionError):
            GammaTransfer(-2.2)

    def test_strict_switch(self, strict_mode):
        assert prism_transfer._STRICT_IEEE is True
        assert SRGB_TRANSFER.oetf(0.5) == pytest.approx(1.055 * 0.5 ** (1 / 2.4) - 0.055)
