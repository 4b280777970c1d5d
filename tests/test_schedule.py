"""Bar bending schedule entries and weight totals."""
import pytest

from rebar_design.core.pipeline import design_slab
from rebar_design.schedule import build_bar_schedule, summarise_by_diameter
from rebar_design.utils.constants import bar_area


@pytest.fixture(scope="module")
def office_schedule(office_slab, office_design):
    return build_bar_schedule(office_slab, office_design)


class TestSimplySupported:
    def test_marks(self, office_schedule):
        assert [e.mark for e in office_schedule] == ["M1", "D1"]

    def test_main_bars_run_along_long_span(self, office_schedule):
        m1 = office_schedule[0]
        assert (m1.diameter, m1.length, m1.number, m1.spacing) == (10, 5000, 20, 210)
        assert m1.shape == "Straight"
        assert m1.total_length == pytest.approx(100000)

    def test_distribution_bars_run_along_short_span(self, office_schedule):
        d1 = office_schedule[1]
        assert (d1.diameter, d1.length, d1.number) == (10, 4000, 17)

    def test_weight(self, office_schedule):
        """78.54 mm² × 100 m × 7850 kg/m³ ≈ 61.65 kg."""
        m1 = office_schedule[0]
        assert m1.weight == pytest.approx(bar_area(10) / 1e6 * 100.0 * 7850)
        assert m1.weight == pytest.approx(61.65, abs=0.01)


class TestFixed:
    def test_top_bars_and_cranks(self, fixed_slab):
        schedule = build_bar_schedule(fixed_slab, design_slab(fixed_slab))
        assert [e.mark for e in schedule] == ["M1", "M2", "D1"]
        assert schedule[0].shape == "Cranked"
        assert schedule[1].shape == "Straight"


class TestSummary:
    def test_totals_by_diameter(self, office_schedule):
        totals = summarise_by_diameter(office_schedule)
        assert list(totals) == [10]
        assert totals[10] == pytest.approx(sum(e.weight for e in office_schedule))

    def test_sorted_smallest_first(self, large_slab, large_design):
        totals = summarise_by_diameter(build_bar_schedule(large_slab, large_design))
        assert list(totals) == [10, 20]
