"""Code compliance checks on completed slab designs."""
import pytest

from rebar_design.core.validation import ValidationEngine
from rebar_design.models.inputs import SlabDesignInput


@pytest.fixture(scope="module")
def validator():
    return ValidationEngine()


def _bars(output, **update):
    return output.model_copy(update=update)


class TestCompliantDesigns:
    def test_office_slab_is_valid(self, validator, office_slab, office_design):
        result = validator.validate(office_slab, office_design)
        assert result.is_valid
        assert result.errors == []
        assert "Cover is more than 2 times bar diameter. May affect bond." in result.warnings

    def test_large_slab_bar_size_warning(self, validator, large_slab, large_design):
        """20 mm bars exceed D/8 = 18.75 mm: a warning, not an error."""
        result = validator.validate(large_slab, large_design)
        assert result.is_valid
        assert any("(D/8)" in w for w in result.warnings)


class TestReinforcementRatio:
    def test_main_ratio_below_minimum_is_error(self, validator, office_slab, office_design):
        """8 mm @ 300 gives 0.112% < 0.12%."""
        out = _bars(office_design, main_bar_diameter=8, main_bar_spacing=300)
        result = validator.validate(office_slab, out)
        assert any("less than minimum 0.12%" in e for e in result.errors)

    def test_main_ratio_above_maximum_is_error(self, validator, office_slab, office_design):
        out = _bars(office_design, main_bar_diameter=20, main_bar_spacing=40)
        result = validator.validate(office_slab, out)
        assert any("exceeds maximum 4.0%" in e for e in result.errors)

    def test_light_distribution_is_warning(self, validator, office_slab, office_design):
        out = _bars(office_design, dist_bar_diameter=8, dist_bar_spacing=400)
        result = validator.validate(office_slab, out)
        assert any(w.startswith("Distribution reinforcement ratio") for w in result.warnings)
        assert not any(e.startswith("Distribution reinforcement ratio") for e in result.errors)


class TestSpacing:
    def test_main_spacing_over_cap(self, validator, office_slab, office_design):
        out = _bars(office_design, main_bar_spacing=350)
        result = validator.validate(office_slab, out)
        assert "Main bar spacing 350mm exceeds maximum 300mm" in result.errors

    def test_distribution_spacing_over_cap(self, validator, office_slab, office_design):
        out = _bars(office_design, dist_bar_spacing=500)
        result = validator.validate(office_slab, out)
        assert "Distribution bar spacing 500mm exceeds maximum 450mm" in result.errors

    def test_tight_main_spacing_warns(self, validator, office_slab, office_design):
        out = _bars(office_design, main_bar_spacing=20)
        result = validator.validate(office_slab, out)
        assert any("is very tight" in w for w in result.warnings)


class TestCover:
    def test_cover_below_minimum(self, validator, office_slab, office_design):
        thin = office_slab.model_copy(update={"bottom_cover": 20, "top_cover": 20})
        result = validator.validate(thin, office_design)
        assert "Bottom cover 20mm is less than minimum 25mm" in result.errors
        assert "Top cover 20mm is less than minimum 25mm" in result.errors

    def test_side_cover_below_minimum(self, validator, office_slab, office_design):
        edge = office_slab.model_copy(update={"side_cover": 15})
        result = validator.validate(edge, office_design)
        assert result.errors == ["Side cover 15mm is less than minimum 25mm"]

    def test_unusually_large_cover(self, validator, office_slab, office_design):
        deep = office_slab.model_copy(update={"bottom_cover": 80})
        result = validator.validate(deep, office_design)
        assert "Bottom cover 80mm is unusually large" in result.warnings


class TestBarDiameterAndThickness:
    def test_undersized_bars(self, validator, office_slab, office_design):
        out = _bars(office_design, main_bar_diameter=6, main_bar_spacing=100,
                    dist_bar_diameter=6)
        result = validator.validate(office_slab, out)
        assert "Main bar diameter 6mm is less than minimum 8mm" in result.errors
        assert "Distribution bar diameter 6mm is less than minimum 8mm" in result.errors

    def test_thin_slab_reports_shortfall(self, validator, office_design):
        """25 + 10 + 10 + 25 + 10 = 80 mm needed; 60 mm is short by 20 mm."""
        thin = SlabDesignInput(length=5000, width=4000, thickness=60, live_load=5.0)
        result = validator.validate(thin, office_design)
        assert "Slab thickness 60mm is less than practical minimum 100mm" in result.errors
        assert any("(short by 20mm)" in e for e in result.errors)

    def test_required_thickness(self, validator, office_slab, office_design):
        assert validator.required_thickness(office_slab, office_design) == 80


class TestCollection:
    def test_every_rule_group_runs(self, validator, office_slab, office_design):
        """Findings from separate groups are all reported together."""
        bad = office_slab.model_copy(update={"bottom_cover": 20})
        out = _bars(office_design, main_bar_spacing=350, dist_bar_diameter=6)
        result = validator.validate(bad, out)
        assert not result.is_valid
        assert len(result.errors) >= 3
