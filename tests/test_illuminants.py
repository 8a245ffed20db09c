"""
Tests for the standard observer and illuminant data.
"""

import numpy as np
import pytest

from prism_data.cmf import CIE_1931_2DEG
from prism_data.illuminants import (
    A,
    D50,
    D55,
    D65,
    D75,
    E,
    ILLUMINANTS,
    daylight_illuminant,
    daylight_locus_chromaticity,
    get_illuminant,
)
from prism_errors import ConstructionError
from prism_tristimulus import TristimulusComputer


@pytest.fixture(scope="module")
def computer():
    return TristimulusComputer(CIE_1931_2DEG)


class TestObserver:

    def test_grid(self):
        assert CIE_1931_2DEG.domain == (380.0, 780.0)
        assert len(CIE_1931_2DEG) == 81
        assert CIE_1931_2DEG.y_bar.value_at(555.0) == 1.0

    def test_equal_energy_balance(self):
        # The 1931 observer integrates to (nearly) equal areas
        areas = [CIE_1931_2DEG.x_bar.integrate(), CIE_1931_2DEG.y_bar.integrate(),
                 CIE_1931_2DEG.z_bar.integrate()]
        np.testing.assert_allclose(areas, areas[1], rtol=2e-3)


class TestChromaticities:
    """White points derived by integration agree with the published values."""

    @pytest.mark.parametrize("illuminant, expected", [
        (D65, (0.31272, 0.32903)),
        (D50, (0.34567, 0.35851)),
        (D55, (0.33243, 0.34744)),
        (D75, (0.29903, 0.31488)),
        (A, (0.44757, 0.40745)),
        (E, (1.0 / 3.0, 1.0 / 3.0)),
    ], ids=lambda v: getattr(v, "name", None))
    def test_white_point(self, computer, illuminant, expected):
        white = computer.white_point(illuminant)
        assert white.Y == pytest.approx(100.0)
        assert white.chromaticity() == pytest.approx(expected, abs=1e-3)


class TestDaylight:

    def test_d65_table_normalised(self):
        assert D65.value_at(560.0) == 100.0
        assert D65.domain == (300.0, 780.0)

    @pytest.mark.parametrize("illuminant", [D50, D55, D75, A], ids=lambda i: i.name)
    def test_normalised_at_560(self, illuminant):
        assert illuminant.value_at(560.0) == pytest.approx(100.0)

    def test_reconstructed_d65_close_to_table(self):
        rebuilt = daylight_illuminant(6500.0 * 1.4388 / 1.4380)
        grid = np.arange(380.0, 785.0, 5.0)
        np.testing.assert_allclose(rebuilt.value_at(grid), D65.value_at(grid), rtol=1e-2)

    def test_locus(self):
        x, y = daylight_locus_chromaticity(6504.0)
        assert (x, y) == pytest.approx((0.3127, 0.3291), abs=2e-4)

    def test_default_name(self):
        assert daylight_illuminant(6000.0).name == "D6000"

    @pytest.mark.parametrize("cct", [3999.0, 25001.0, float("nan")])
    def test_out_of_range(self, cct):
        with pytest.raises(ConstructionError, match="CCT"):
            daylight_illuminant(cct)


class TestRegistry:

    @pytest.mark.parametrize("name, illuminant", [
        ("D65", D65), ("d65", D65), (" D50 ", D50), ("a", A), ("E", E),
    ])
    def test_lookup(self, name, illuminant):
        assert get_illuminant(name) is illuminant

    def test_unknown(self):
        with pytest.raises(KeyError, match="Unknown illuminant"):
            get_illuminant("F2")

    def test_read_only(self):
        with pytest.raises(TypeError):
            ILLUMINANTS["d65"] = A
        assert not D65.values.flags.writeable
