"""Genetic-algorithm layout search and its cost model."""
import numpy as np
import pytest
from pydantic import ValidationError

from rebar_design.core.pipeline import design_slab
from rebar_design.models.inputs import SlabDesignInput
from rebar_design.optimization.cost import CostModel, CostRates
from rebar_design.optimization.genetic import (
    OptimizationEngine, OptimizationError, OptimizerSettings, RebarSolution
)

SMALL = OptimizerSettings(population_size=20, generations=15)


@pytest.fixture(scope="module")
def engine(office_slab, office_design):
    return OptimizationEngine(office_slab, office_design, settings=SMALL, seed=42)


@pytest.fixture(scope="module")
def result(office_slab, office_design):
    return OptimizationEngine(office_slab, office_design, settings=SMALL, seed=42).optimize_bar_arrangement()


class TestCostModel:
    def test_office_slab_baseline_cost(self, office_slab, office_design):
        """103.58 kg × 60 INR/kg + 37 bars × 5 INR."""
        model = CostModel(office_slab)
        assert model.output_cost(office_design) == pytest.approx(6399.7, abs=0.5)

    def test_layout_and_output_agree(self, office_slab, office_design):
        model = CostModel(office_slab)
        layout = model.layout_cost(
            office_design.main_bar_diameter, office_design.dist_bar_diameter,
            office_design.main_bar_spacing, office_design.dist_bar_spacing,
        )
        assert layout == pytest.approx(model.output_cost(office_design))

    def test_bar_counts_match_design(self, office_slab, office_design):
        counts = CostModel(office_slab).bar_counts(
            office_design.main_bar_spacing, office_design.dist_bar_spacing
        )
        assert counts == (office_design.main_bar_count, office_design.dist_bar_count)

    def test_rates_scale_cost(self, office_slab):
        cheap = CostModel(office_slab, CostRates(steel_rate=30, labour_rate=0.5))
        dear = CostModel(office_slab)
        assert cheap.layout_cost(10, 10, 200, 300) < dear.layout_cost(10, 10, 200, 300)


class TestSettings:
    def test_defaults(self):
        settings = OptimizerSettings()
        assert settings.population_size == 50
        assert settings.generations == 100
        assert settings.mutation_rate == 0.1
        assert settings.tournament_size == 5
        assert settings.main_spacing_range == (100, 300)
        assert settings.dist_spacing_range == (150, 450)

    def test_diameters_sorted_and_unique(self):
        assert OptimizerSettings(diameters=[16, 8, 8, 12]).diameters == [8, 12, 16]

    def test_invalid_settings(self):
        with pytest.raises(ValidationError):
            OptimizerSettings(diameters=[])
        with pytest.raises(ValidationError):
            OptimizerSettings(main_spacing_range=(300, 100))
        with pytest.raises(ValidationError):
            OptimizerSettings(mutation_rate=1.5)


class TestValidity:
    """Office slab needs 0.95 × 372.5 ≈ 354 mm²/m of main steel."""

    def test_valid_layout(self, engine):
        assert engine.is_valid_solution(RebarSolution(10, 8, 210, 300))

    def test_too_little_steel(self, engine):
        assert not engine.is_valid_solution(RebarSolution(8, 8, 200, 300))

    def test_spacing_bands(self, engine):
        assert not engine.is_valid_solution(RebarSolution(12, 8, 310, 300))
        assert not engine.is_valid_solution(RebarSolution(12, 8, 200, 140))
        assert not engine.is_valid_solution(RebarSolution(12, 8, 200, 460))

    def test_validity_uses_governing_main_steel(self, large_slab, large_design):
        """Support demand (3464 mm²/m) governs, so only 25 mm bars ≤ 149 mm work."""
        eng = OptimizationEngine(large_slab, large_design, settings=SMALL, seed=0)
        assert eng.is_valid_solution(RebarSolution(25, 10, 140, 300))
        assert not eng.is_valid_solution(RebarSolution(20, 10, 100, 300))


class TestFitness:
    def test_single_size_and_round_spacings_score_best(self):
        same = RebarSolution(10, 10, 200, 300)
        mixed = RebarSolution(10, 8, 210, 310)
        assert OptimizationEngine.variety_bonus(same) == 1.0
        assert OptimizationEngine.variety_bonus(mixed) == 0.5
        assert OptimizationEngine.spacing_score(same) == 1.0
        assert OptimizationEngine.spacing_score(mixed) == 0.5

    def test_fitness_is_positive(self, engine):
        assert engine.calculate_fitness(RebarSolution(10, 8, 210, 300)) > 0


class TestOperators:
    def test_population_is_all_valid(self, office_slab, office_design):
        eng = OptimizationEngine(office_slab, office_design, settings=SMALL, seed=1)
        population = eng.initialize_population()
        assert len(population) == SMALL.population_size
        assert all(eng.is_valid_solution(s) for s in population)

    def test_crossover_averages_spacings(self, office_slab, office_design):
        eng = OptimizationEngine(office_slab, office_design, settings=SMALL, seed=3)
        a = RebarSolution(10, 8, 200, 300)
        b = RebarSolution(12, 10, 240, 360)
        child = eng.crossover(a, b)
        assert child.main_bar_spacing == 220
        assert child.dist_bar_spacing == 330
        assert child.main_bar_diameter in (10, 12)
        assert child.dist_bar_diameter in (8, 10)

    def test_mutation_changes_at_most_one_gene(self, office_slab, office_design):
        eng = OptimizationEngine(office_slab, office_design, settings=SMALL, seed=7)
        parent = RebarSolution(10, 8, 200, 300)
        for _ in range(50):
            child = eng.mutate(parent)
            changed = [
                child.main_bar_diameter != parent.main_bar_diameter,
                child.dist_bar_diameter != parent.dist_bar_diameter,
                child.main_bar_spacing != parent.main_bar_spacing,
                child.dist_bar_spacing != parent.dist_bar_spacing,
            ]
            assert sum(changed) <= 1
            assert abs(child.main_bar_spacing - 200) <= 20
            assert abs(child.dist_bar_spacing - 300) <= 30

    def test_elites_survive(self, office_slab, office_design):
        eng = OptimizationEngine(office_slab, office_design, settings=SMALL, seed=5)
        population = eng.evaluate(eng.initialize_population())
        best = max(population, key=lambda s: s.fitness)
        assert best in eng.create_next_generation(population)


class TestSearch:
    def test_best_solution_is_valid(self, engine, result):
        assert engine.is_valid_solution(result.optimized_solution)
        assert result.generations_run == SMALL.generations

    def test_best_fitness_never_decreases(self, result):
        history = result.fitness_history
        assert len(history) == SMALL.generations
        assert all(b >= a for a, b in zip(history, history[1:]))

    def test_cost_fields(self, office_slab, office_design, result):
        model = CostModel(office_slab)
        assert result.baseline_cost == pytest.approx(model.output_cost(office_design))
        solution = result.optimized_solution
        assert result.optimized_cost == pytest.approx(model.layout_cost(
            solution.main_bar_diameter, solution.dist_bar_diameter,
            solution.main_bar_spacing, solution.dist_bar_spacing,
        ))
        expected = (result.baseline_cost - result.optimized_cost) / result.baseline_cost * 100
        assert result.material_savings == pytest.approx(expected)

    def test_same_seed_same_result(self, office_slab, office_design, result):
        again = OptimizationEngine(
            office_slab, office_design, settings=SMALL, seed=42
        ).optimize_bar_arrangement()
        assert again.optimized_solution == result.optimized_solution

    def test_explicit_generator(self, office_slab, office_design):
        rng = np.random.default_rng(11)
        out = OptimizationEngine(office_slab, office_design, settings=SMALL, rng=rng)
        assert out.rng is rng

    @pytest.mark.parametrize("length, width, live_load", [
        (3000, 3000, 2.0),
        (6000, 4500, 4.0),
        (7000, 3000, 5.0),
    ])
    def test_result_valid_for_other_panels(self, length, width, live_load):
        slab = SlabDesignInput(length=length, width=width, thickness=175, live_load=live_load)
        baseline = design_slab(slab)
        eng = OptimizationEngine(slab, baseline, settings=SMALL, seed=2024)
        best = eng.optimize_bar_arrangement().optimized_solution
        assert eng.is_valid_solution(best)
        assert best.provided_main_steel >= 0.95 * baseline.required_main_steel

    def test_result_valid_across_random_baselines(self):
        """1000 seeded random panels, each searched with a tiny budget."""
        rng = np.random.default_rng(2024)
        tiny = OptimizerSettings(population_size=6, generations=3)
        checked = 0
        while checked < 1000:
            slab = SlabDesignInput(
                length=float(rng.integers(2000, 9001)),
                width=float(rng.integers(2000, 9001)),
                thickness=float(rng.integers(12, 26) * 10),
                live_load=float(rng.uniform(1.5, 10.0)),
                support_type=str(rng.choice(["simple", "fixed", "continuous"])),
            )
            baseline = design_slab(slab)
            if baseline.required_main_steel > 3000:
                continue
            eng = OptimizationEngine(slab, baseline, settings=tiny, rng=rng)
            assert eng.is_valid_solution(eng.optimize_bar_arrangement().optimized_solution)
            checked += 1

    def test_stall_limit_stops_early(self, office_slab, office_design):
        settings = OptimizerSettings(population_size=20, generations=200, stall_generations=3)
        out = OptimizationEngine(
            office_slab, office_design, settings=settings, seed=9
        ).optimize_bar_arrangement()
        assert out.generations_run < 200


class TestInfeasible:
    def test_no_layout_can_carry_the_demand(self, large_slab, large_design):
        settings = OptimizerSettings(population_size=10, generations=5, diameters=[8, 10])
        eng = OptimizationEngine(large_slab, large_design, settings=settings, seed=0)
        with pytest.raises(OptimizationError, match="No layout can provide"):
            eng.optimize_bar_arrangement()

    def test_demand_beyond_largest_bar(self, office_slab, office_design):
        heavy = office_design.model_copy(update={"ast_main_top": 6000.0})
        eng = OptimizationEngine(office_slab, heavy, settings=SMALL, seed=0)
        with pytest.raises(OptimizationError):
            eng.initialize_population()


class TestAlternatives:
    def test_three_named_options_cheapest_first(self, office_slab, office_design):
        eng = OptimizationEngine(office_slab, office_design, settings=SMALL, seed=42)
        options = eng.suggest_alternatives()
        assert {o.name for o in options} == {
            "Minimum Steel Weight", "Minimum Bar Variety", "Balanced Design",
        }
        costs = [o.cost for o in options]
        assert costs == sorted(costs)
        assert all(eng.is_valid_solution(o.solution) for o in options)

    def test_minimum_variety_uses_one_size(self, office_slab, office_design):
        eng = OptimizationEngine(office_slab, office_design, settings=SMALL, seed=42)
        option = next(o for o in eng.suggest_alternatives() if o.name == "Minimum Bar Variety")
        assert option.solution.main_bar_diameter == option.solution.dist_bar_diameter
