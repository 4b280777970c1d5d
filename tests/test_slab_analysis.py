"""Slab classification, moments, required steel and deflection."""
import pytest

from rebar_design.core.slab_analysis import SlabAnalyzer
from rebar_design.models.inputs import SlabDesignInput, SupportType
from rebar_design.models.outputs import SlabDesignOutput


@pytest.fixture(scope="module")
def analyzer():
    return SlabAnalyzer()


@pytest.fixture(scope="module")
def one_way_slab():
    """30 m x 5 m strip, r = 6."""
    return SlabDesignInput(length=30000, width=5000, thickness=150, live_load=3.0)


class TestClassification:
    def test_two_way_panel(self, analyzer, large_slab):
        out = analyzer.classify(large_slab, SlabDesignOutput())
        assert out.lx == 10000 and out.ly == 15000
        assert out.ly_lx_ratio == pytest.approx(1.5)
        assert out.is_two_way and not out.is_one_way

    def test_ratio_of_exactly_two_is_two_way(self, analyzer):
        slab = SlabDesignInput(length=4000, width=8000, thickness=150, live_load=3.0)
        out = analyzer.classify(slab, SlabDesignOutput())
        assert out.ly_lx_ratio == 2.0
        assert out.is_two_way

    def test_long_strip_is_one_way(self, analyzer, one_way_slab):
        out = analyzer.classify(one_way_slab, SlabDesignOutput())
        assert out.lx == 5000
        assert out.ly_lx_ratio == pytest.approx(6.0)
        assert out.is_one_way and not out.is_two_way


class TestMoments:
    def test_factored_load_includes_self_weight_and_finish(self, analyzer, large_slab):
        """1.5 × (0 + 3.75 + 3 + 1) = 11.625 kN/m²."""
        assert analyzer.factored_load(large_slab) == pytest.approx(11.625)

    def test_two_way_moments(self, analyzer, large_slab):
        """r = 1.5 steps to αx = 0.055, αy = 0.016; support moments × 1.33."""
        out = analyzer.classify(large_slab, SlabDesignOutput())
        out = analyzer.calculate_design_moments(large_slab, out)
        assert out.factored_load == pytest.approx(11.625)
        assert out.positive_moment_x == pytest.approx(0.055 * 1162.5)
        assert out.negative_moment_x == pytest.approx(0.055 * 1162.5 * 1.33)
        assert out.positive_moment_y == pytest.approx(0.016 * 1162.5)
        assert out.negative_moment_y == pytest.approx(0.016 * 1162.5 * 1.33)

    def test_one_way_simple_has_no_support_moment(self, analyzer, one_way_slab):
        out = analyzer.classify(one_way_slab, SlabDesignOutput())
        out = analyzer.calculate_design_moments(one_way_slab, out)
        assert out.positive_moment_x == pytest.approx(0.125 * 11.625 * 25)
        assert out.negative_moment_x == 0.0
        assert out.positive_moment_y == 0.0
        assert out.negative_moment_y == 0.0


class TestRequiredSteel:
    def test_over_capacity_moment_is_clamped(self, analyzer, large_slab):
        """Support moment 85 kNm on d = 115 mm exceeds the square-root domain."""
        out = analyzer.analyze(large_slab)
        assert out.effective_depth == 115
        assert out.ast_main_top == pytest.approx(0.5 * 25 * 1000 * 115 / 415)
        assert out.required_main_steel == out.ast_main_top
        assert out.ast_main_bottom < out.ast_main_top
        assert any("beyond the capacity" in w for w in out.warnings)
        assert any("exceeds limiting moment" in w for w in out.warnings)

    def test_light_demand_takes_code_minimum(self, analyzer, office_slab):
        """Long-span demand (≈120 mm²/m) is raised to 0.12% × 1000 × 150 = 180."""
        out = analyzer.analyze(office_slab)
        assert out.ast_distribution == pytest.approx(180.0)
        assert out.ast_main_top == pytest.approx(372.5, abs=0.5)

    def test_one_way_distribution_is_minimum_steel(self, analyzer, one_way_slab):
        out = analyzer.analyze(one_way_slab)
        assert out.ast_distribution == pytest.approx(180.0)
        assert out.ast_main_top == pytest.approx(180.0)


class TestDeflection:
    def test_long_span_fails(self, analyzer, large_slab):
        out = analyzer.analyze(large_slab)
        assert out.actual_span_depth_ratio == pytest.approx(10000 / 115)
        assert out.allowable_span_depth_ratio == pytest.approx(20.0)
        assert not out.deflection_check_passed
        assert any("Deflection check failed" in w for w in out.warnings)

    def test_short_span_passes(self, analyzer):
        slab = SlabDesignInput(length=2500, width=2000, thickness=150, live_load=3.0)
        out = analyzer.analyze(slab)
        assert out.actual_span_depth_ratio == pytest.approx(2000 / 115)
        assert out.deflection_check_passed

    def test_fixed_support_raises_allowable(self, analyzer, fixed_slab):
        out = analyzer.analyze(fixed_slab)
        assert out.allowable_span_depth_ratio == pytest.approx(30.0)


class TestCalculationSteps:
    def test_steps_are_numbered_in_order(self, analyzer, large_slab):
        out = analyzer.analyze(large_slab)
        assert [s.step_number for s in out.steps] == list(range(1, len(out.steps) + 1))

    def test_analysis_is_repeatable(self, analyzer, office_slab):
        assert analyzer.analyze(office_slab) == analyzer.analyze(office_slab)

    def test_support_type_does_not_change_two_way_steel(self, analyzer, office_slab):
        fixed = office_slab.model_copy(update={"support_type": SupportType.FIXED})
        assert analyzer.analyze(fixed).ast_main_top == analyzer.analyze(office_slab).ast_main_top
