"""IS 456:2000 table lookups.

Stepped tables are checked at and either side of their breakpoints;
interpolated tables at tabulated and intermediate values.
"""
import pytest

from rebar_design.codes.is456 import IS456, step_down, step_up
from rebar_design.models.inputs import ConcreteGrade, SteelGrade, SupportType


@pytest.fixture(scope="module")
def code():
    return IS456()


class TestStepHelpers:
    def test_step_up_takes_first_breakpoint_at_or_above(self):
        assert step_up(1.0, (1.0, 2.0), (1, 2, 3)) == 1
        assert step_up(1.5, (1.0, 2.0), (1, 2, 3)) == 2
        assert step_up(2.5, (1.0, 2.0), (1, 2, 3)) == 3

    def test_step_down_takes_last_breakpoint_at_or_below(self):
        assert step_down(0.5, (1.0, 2.0), (10, 20)) == 10
        assert step_down(1.0, (1.0, 2.0), (10, 20)) == 10
        assert step_down(1.99, (1.0, 2.0), (10, 20)) == 10
        assert step_down(2.0, (1.0, 2.0), (10, 20)) == 20
        assert step_down(9.0, (1.0, 2.0), (10, 20)) == 20


class TestMaterialStrengths:
    def test_concrete_grades(self, code):
        assert code.get_concrete_strength("M25") == 25.0
        assert code.get_concrete_strength(ConcreteGrade.M30) == 30.0

    def test_steel_grades(self, code):
        assert code.get_steel_strength("Fe415") == 415.0
        assert code.get_steel_strength(SteelGrade.FE500) == 500.0

    def test_unknown_grade_raises(self, code):
        with pytest.raises(ValueError, match="Unknown concrete grade"):
            code.get_concrete_strength("M99")
        with pytest.raises(ValueError, match="Unknown steel grade"):
            code.get_steel_strength("Fe250")


class TestBondStress:
    @pytest.mark.parametrize("fck, expected", [
        (15, 1.2), (20, 1.2), (22, 1.4), (25, 1.4), (26, 1.5),
        (35, 1.7), (40, 1.9), (45, 2.0), (50, 2.0),
    ])
    def test_table_21_steps(self, code, fck, expected):
        assert code.get_bond_stress(fck) == pytest.approx(expected)


class TestMomentCoefficients:
    @pytest.mark.parametrize("ratio, short, long", [
        (1.0, 0.032, 0.032),
        (1.05, 0.037, 0.028),
        (1.25, 0.047, 0.021),
        (1.5, 0.055, 0.016),
        (1.6, 0.061, 0.013),
        (1.75, 0.061, 0.013),
        (2.0, 0.065, 0.011),
    ])
    def test_two_way_is_stepped_not_interpolated(self, code, ratio, short, long):
        assert code.get_two_way_moment_coefficient(ratio, True) == pytest.approx(short)
        assert code.get_two_way_moment_coefficient(ratio, False) == pytest.approx(long)

    def test_one_way_coefficients(self, code):
        assert code.get_one_way_moment_coefficient(SupportType.SIMPLE, True) == 0.125
        assert code.get_one_way_moment_coefficient(SupportType.SIMPLE, False) == 0.0
        assert code.get_one_way_moment_coefficient("fixed", True) == pytest.approx(0.0833)
        assert code.get_one_way_moment_coefficient("continuous", True) == pytest.approx(0.0625)


class TestServiceabilityAndDetailing:
    def test_span_depth_ratio_by_support(self, code):
        assert code.get_span_depth_ratio(SupportType.SIMPLE) == pytest.approx(20.0)
        assert code.get_span_depth_ratio(SupportType.FIXED) == pytest.approx(30.0)
        assert code.get_span_depth_ratio(SupportType.CONTINUOUS) == pytest.approx(26.0)

    def test_spacing_caps(self, code):
        assert code.get_main_spacing_cap(150) == 300
        assert code.get_distribution_spacing_cap(150) == 450
        assert code.get_main_spacing_cap(80) == 240
        assert code.get_distribution_spacing_cap(80) == 400

    def test_reinforcement_limits(self, code):
        assert code.get_minimum_reinforcement_ratio(415) == 0.12
        assert code.get_minimum_reinforcement_ratio(250) == 0.15
        assert code.get_maximum_reinforcement_ratio() == 4.0
        assert code.get_column_steel_limits() == (0.008, 0.06)


class TestShearTables:
    @pytest.mark.parametrize("pt, fck, expected", [
        (0.10, 20, 0.28),   # below table takes first value
        (0.60, 20, 0.48),   # between 0.50 and 0.75 steps down
        (1.00, 20, 0.62),
        (3.50, 20, 0.82),   # beyond table takes last value
        (1.00, 22, 0.62),   # M22 uses the M20 row
        (1.00, 50, 0.68),   # above M40 uses the M40 row
        (1.00, 10, 0.60),   # below M15 uses the M15 row
    ])
    def test_table_19(self, code, pt, fck, expected):
        assert code.get_shear_strength_concrete(pt, fck) == pytest.approx(expected)

    def test_table_20_interpolates(self, code):
        assert code.get_maximum_shear_stress(20) == pytest.approx(2.8)
        assert code.get_maximum_shear_stress(22.5) == pytest.approx(2.95)
        assert code.get_maximum_shear_stress(50) == pytest.approx(4.0)

    def test_xu_max_ratio(self, code):
        assert code.get_xu_max_ratio(415) == pytest.approx(0.48)
        assert code.get_xu_max_ratio(500) == pytest.approx(0.46)
        assert code.get_xu_max_ratio(450) == pytest.approx(0.48 - 0.02 * 35 / 85)
