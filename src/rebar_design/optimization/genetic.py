"""
Genetic-algorithm search for cheaper slab reinforcement layouts.

Starting from a code-compliant baseline design, the search looks for a
(main diameter, distribution diameter, main spacing, distribution spacing)
layout that keeps at least 95% of the baseline's required main steel and
scores well on cost, labour, bar variety and spacing regularity.

Workflow per generation:
1. Evaluate fitness of every individual (best-of-run tracked as it goes)
2. Carry the top 10% over unchanged (elitism)
3. Fill the rest by tournament selection, crossover and mutation, keeping
   only valid children

The random source is a ``numpy.random.Generator`` passed in (or built from
a seed), so runs are reproducible.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rebar_design.models.inputs import SlabDesignInput
from rebar_design.models.outputs import SlabDesignOutput
from rebar_design.optimization.cost import CostModel, CostRates
from rebar_design.utils.constants import SLAB_STRIP_WIDTH, bar_area


class OptimizationError(ValueError):
    """Raised when no layout in the search space can satisfy the baseline."""


class OptimizerSettings(BaseModel):
    """Genetic algorithm parameters."""
    model_config = ConfigDict(frozen=True)

    population_size: int = Field(default=50, ge=2)
    generations: int = Field(default=100, ge=1)
    mutation_rate: float = Field(default=0.1, ge=0, le=1)
    tournament_size: int = Field(default=5, ge=1)
    elite_fraction: float = Field(default=0.1, ge=0, lt=1)
    diameters: List[int] = Field(default=[8, 10, 12, 16, 20, 25])
    main_spacing_range: Tuple[int, int] = (100, 300)
    dist_spacing_range: Tuple[int, int] = (150, 450)
    min_steel_fraction: float = Field(default=0.95, gt=0)
    main_spacing_step: int = Field(default=20, ge=0, description="Mutation step ± for main spacing")
    dist_spacing_step: int = Field(default=30, ge=0, description="Mutation step ± for distribution spacing")
    max_attempts: int = Field(
        default=100_000, ge=1, description="Sampling attempts before giving up on a valid individual"
    )
    stall_generations: Optional[int] = Field(
        default=None, ge=1,
        description="Stop after this many generations without improvement (None runs all generations)",
    )

    @field_validator("diameters")
    @classmethod
    def _positive_diameters(cls, value: List[int]) -> List[int]:
        if not value or any(d <= 0 for d in value):
            raise ValueError("diameters must be a non-empty list of positive sizes")
        return sorted(set(value))

    @model_validator(mode="after")
    def _ordered_ranges(self) -> "OptimizerSettings":
        for name in ("main_spacing_range", "dist_spacing_range"):
            low, high = getattr(self, name)
            if not 0 < low <= high:
                raise ValueError(f"{name} must satisfy 0 < low <= high, got {(low, high)}")
        return self


@dataclass(frozen=True)
class RebarSolution:
    """One candidate layout (an individual of the population)."""
    main_bar_diameter: int
    dist_bar_diameter: int
    main_bar_spacing: float
    dist_bar_spacing: float
    fitness: Optional[float] = None

    @property
    def provided_main_steel(self) -> float:
        """Main steel per metre width (mm²/m)."""
        return bar_area(self.main_bar_diameter) * SLAB_STRIP_WIDTH / self.main_bar_spacing


@dataclass(frozen=True)
class OptimizationResult:
    """Best-of-run layout compared with the baseline design."""
    baseline_cost: float
    optimized_cost: float
    material_savings: float  # % of baseline cost
    labor_savings: float  # % of baseline bar count
    optimized_solution: RebarSolution
    generations_run: int
    fitness_history: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class AlternativeDesign:
    """A named layout option with its trade-offs."""
    name: str
    description: str
    solution: RebarSolution
    cost: float
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)


@dataclass
class _SearchState:
    best: RebarSolution
    population: List[RebarSolution]
    history: List[float]
    generations_run: int


class OptimizationEngine:
    """
    Genetic algorithm over slab bar layouts.

    Args:
        inputs: The slab the baseline was designed for
        baseline: Completed baseline design (bars selected)
        settings: OptimizerSettings (defaults match the reference search)
        rates: CostRates for the cost model
        rng: Random generator; takes precedence over ``seed``
        seed: Seed for a fresh ``numpy.random.default_rng``
    """

    def __init__(
        self,
        inputs: SlabDesignInput,
        baseline: SlabDesignOutput,
        settings: OptimizerSettings = None,
        rates: CostRates = None,
        rng: np.random.Generator = None,
        seed: Optional[int] = None,
    ):
        self.inputs = inputs
        self.baseline = baseline
        self.settings = settings or OptimizerSettings()
        self.cost_model = CostModel(inputs, rates)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.required_main_steel = baseline.required_main_steel

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def optimize_bar_arrangement(self) -> OptimizationResult:
        """
        Run the search and compare the best layout with the baseline.

        Savings are not clamped; a negative value means the baseline was
        cheaper.

        Raises:
            OptimizationError: If no valid layout exists in the search space
        """
        state = self._run()
        return self._result(state)

    def suggest_alternatives(self) -> List[AlternativeDesign]:
        """
        Three named layouts (minimum weight, minimum variety, balanced),
        cheapest first.
        """
        state = self._run()
        best = state.best
        final = state.population + [best]

        min_weight = min(final, key=self.solution_weight)

        variety_pool = final + self.initialize_population()
        same_size = [s for s in variety_pool if s.main_bar_diameter == s.dist_bar_diameter]
        min_variety = min(same_size or variety_pool, key=self.calculate_cost)

        alternatives = [
            AlternativeDesign(
                name="Minimum Steel Weight",
                description="Optimized for minimum material usage",
                solution=min_weight,
                cost=self.calculate_cost(min_weight),
                pros=["Lowest material cost", "Reduced dead load"],
                cons=["May have more bar sizes", "Tighter spacing"],
            ),
            AlternativeDesign(
                name="Minimum Bar Variety",
                description="Uses fewer different bar sizes",
                solution=min_variety,
                cost=self.calculate_cost(min_variety),
                pros=["Simpler procurement", "Reduced site confusion", "Faster installation"],
                cons=["Slightly higher material cost"],
            ),
            AlternativeDesign(
                name="Balanced Design",
                description="Balance between cost and constructability",
                solution=best,
                cost=self.calculate_cost(best),
                pros=["Good overall value", "Practical spacing", "Moderate bar variety"],
                cons=["Not optimal in any single metric"],
            ),
        ]
        return sorted(alternatives, key=lambda a: a.cost)

    # ------------------------------------------------------------------
    # Validity, cost and fitness
    # ------------------------------------------------------------------

    def is_valid_solution(self, solution: RebarSolution) -> bool:
        """Enough main steel and both spacings inside their bands."""
        low, high = self.settings.main_spacing_range
        if not low <= solution.main_bar_spacing <= high:
            return False
        low, high = self.settings.dist_spacing_range
        if not low <= solution.dist_bar_spacing <= high:
            return False
        needed = self.required_main_steel * self.settings.min_steel_fraction
        return solution.provided_main_steel >= needed

    def calculate_cost(self, solution: RebarSolution) -> float:
        return self.cost_model.layout_cost(
            solution.main_bar_diameter, solution.dist_bar_diameter,
            solution.main_bar_spacing, solution.dist_bar_spacing,
        )

    def solution_weight(self, solution: RebarSolution) -> float:
        n_main, n_dist = self.cost_model.bar_counts(
            solution.main_bar_spacing, solution.dist_bar_spacing
        )
        return self.cost_model.steel_weight(
            solution.main_bar_diameter, solution.dist_bar_diameter, n_main, n_dist
        )

    def calculate_fitness(self, solution: RebarSolution) -> float:
        """
        1000/material + 500/labour + variety×100 + regularity×50.

        Higher is better.
        """
        material = self.cost_model.material_cost(self.calculate_cost(solution))
        labour = self.cost_model.labour_cost(solution.main_bar_spacing, solution.dist_bar_spacing)
        return (
            1000.0 / material
            + 500.0 / labour
            + self.variety_bonus(solution) * 100
            + self.spacing_score(solution) * 50
        )

    @staticmethod
    def variety_bonus(solution: RebarSolution) -> float:
        """1.0 for a single bar size, 0.5 for two."""
        unique = 1 if solution.main_bar_diameter == solution.dist_bar_diameter else 2
        return 1.0 / unique

    @staticmethod
    def spacing_score(solution: RebarSolution) -> float:
        """Average of 1.0 per spacing on a 50 mm multiple, 0.5 otherwise."""
        main = 1.0 if solution.main_bar_spacing % 50 == 0 else 0.5
        dist = 1.0 if solution.dist_bar_spacing % 50 == 0 else 0.5
        return (main + dist) / 2.0

    # ------------------------------------------------------------------
    # Genetic operators
    # ------------------------------------------------------------------

    def _check_feasible(self) -> None:
        """Fail fast when even the heaviest main layout is too light."""
        largest = max(self.settings.diameters)
        low = self.settings.main_spacing_range[0]
        best_possible = bar_area(largest) * SLAB_STRIP_WIDTH / low
        needed = self.required_main_steel * self.settings.min_steel_fraction
        if best_possible < needed:
            raise OptimizationError(
                f"No layout can provide {needed:.0f} mm²/m of main steel: "
                f"{largest}mm bars at {low}mm give only {best_possible:.0f} mm²/m"
            )

    def random_solution(self) -> RebarSolution:
        diameters = self.settings.diameters
        main_low, main_high = self.settings.main_spacing_range
        dist_low, dist_high = self.settings.dist_spacing_range
        return RebarSolution(
            main_bar_diameter=int(self.rng.choice(diameters)),
            dist_bar_diameter=int(self.rng.choice(diameters)),
            main_bar_spacing=float(self.rng.integers(main_low, main_high + 1)),
            dist_bar_spacing=float(self.rng.integers(dist_low, dist_high + 1)),
        )

    def initialize_population(self) -> List[RebarSolution]:
        """
        Rejection-sample a full population of valid individuals.

        Raises:
            OptimizationError: If the search space is infeasible or the
                attempt budget runs out
        """
        self._check_feasible()
        population: List[RebarSolution] = []
        attempts = 0
        while len(population) < self.settings.population_size:
            if attempts >= self.settings.max_attempts:
                raise OptimizationError(
                    f"Found only {len(population)} valid layouts in "
                    f"{self.settings.max_attempts} attempts"
                )
            attempts += 1
            candidate = self.random_solution()
            if self.is_valid_solution(candidate):
                population.append(candidate)
        return population

    def tournament_selection(self, population: Sequence[RebarSolution]) -> RebarSolution:
        """Fittest of ``tournament_size`` draws with replacement."""
        picks = self.rng.integers(0, len(population), size=self.settings.tournament_size)
        return max((population[i] for i in picks), key=lambda s: s.fitness)

    def crossover(self, parent1: RebarSolution, parent2: RebarSolution) -> RebarSolution:
        """Coin-flip diameters, mean spacings."""
        return RebarSolution(
            main_bar_diameter=parent1.main_bar_diameter if self.rng.random() < 0.5
            else parent2.main_bar_diameter,
            dist_bar_diameter=parent1.dist_bar_diameter if self.rng.random() < 0.5
            else parent2.dist_bar_diameter,
            main_bar_spacing=(parent1.main_bar_spacing + parent2.main_bar_spacing) / 2,
            dist_bar_spacing=(parent1.dist_bar_spacing + parent2.dist_bar_spacing) / 2,
        )

    def mutate(self, solution: RebarSolution) -> RebarSolution:
        """Perturb exactly one of the four genes."""
        gene = int(self.rng.integers(0, 4))
        if gene == 0:
            return dataclasses.replace(
                solution, main_bar_diameter=int(self.rng.choice(self.settings.diameters))
            )
        if gene == 1:
            return dataclasses.replace(
                solution, dist_bar_diameter=int(self.rng.choice(self.settings.diameters))
            )
        if gene == 2:
            step = self.settings.main_spacing_step
            return dataclasses.replace(
                solution,
                main_bar_spacing=solution.main_bar_spacing + int(self.rng.integers(-step, step + 1)),
            )
        step = self.settings.dist_spacing_step
        return dataclasses.replace(
            solution,
            dist_bar_spacing=solution.dist_bar_spacing + int(self.rng.integers(-step, step + 1)),
        )

    def evaluate(self, population: Sequence[RebarSolution]) -> List[RebarSolution]:
        return [dataclasses.replace(s, fitness=self.calculate_fitness(s)) for s in population]

    def create_next_generation(self, population: Sequence[RebarSolution]) -> List[RebarSolution]:
        """Elites plus valid children of tournament-selected parents."""
        size = self.settings.population_size
        ranked = sorted(population, key=lambda s: s.fitness, reverse=True)
        elite_count = int(size * self.settings.elite_fraction)
        next_generation = list(ranked[:elite_count])

        attempts = 0
        while len(next_generation) < size:
            if attempts >= self.settings.max_attempts:
                logger.warning(
                    "Child generation stalled after {} attempts; filling with top individuals",
                    attempts,
                )
                next_generation.extend(
                    ranked[i % len(ranked)] for i in range(size - len(next_generation))
                )
                break
            attempts += 1

            parent1 = self.tournament_selection(ranked)
            parent2 = self.tournament_selection(ranked)
            child = self.crossover(parent1, parent2)
            if self.rng.random() < self.settings.mutation_rate:
                child = self.mutate(child)
            if self.is_valid_solution(child):
                next_generation.append(child)

        return next_generation

    # ------------------------------------------------------------------
    # Search loop
    # ------------------------------------------------------------------

    def _run(self) -> _SearchState:
        population = self.initialize_population()
        best: Optional[RebarSolution] = None
        history: List[float] = []
        stall = 0
        generation = 0

        for generation in range(1, self.settings.generations + 1):
            population = self.evaluate(population)
            improved = False
            for solution in population:
                if best is None or solution.fitness > best.fitness:
                    best = solution
                    improved = True
            history.append(best.fitness)
            logger.debug("Generation {}: best fitness {:.4f}", generation, best.fitness)

            stall = 0 if improved else stall + 1
            limit = self.settings.stall_generations
            if limit is not None and stall >= limit:
                logger.debug("No improvement for {} generations; stopping", stall)
                break
            if generation < self.settings.generations:
                population = self.create_next_generation(population)

        return _SearchState(best=best, population=population, history=history,
                            generations_run=generation)

    def _result(self, state: _SearchState) -> OptimizationResult:
        best = state.best
        baseline_cost = self.cost_model.output_cost(self.baseline)
        optimized_cost = self.calculate_cost(best)

        baseline_bars = self.baseline.main_bar_count + self.baseline.dist_bar_count
        optimized_bars = sum(self.cost_model.bar_counts(best.main_bar_spacing, best.dist_bar_spacing))

        material_savings = (
            (baseline_cost - optimized_cost) / baseline_cost * 100 if baseline_cost > 0 else 0.0
        )
        labor_savings = (
            (baseline_bars - optimized_bars) / baseline_bars * 100 if baseline_bars > 0 else 0.0
        )

        logger.info(
            "Optimized layout {}φ @ {:.0f} / {}φ @ {:.0f}: cost {:.0f} vs baseline {:.0f} "
            "({:+.1f}%)",
            best.main_bar_diameter, best.main_bar_spacing,
            best.dist_bar_diameter, best.dist_bar_spacing,
            optimized_cost, baseline_cost, material_savings,
        )

        return OptimizationResult(
            baseline_cost=baseline_cost,
            optimized_cost=optimized_cost,
            material_savings=material_savings,
            labor_savings=labor_savings,
            optimized_solution=best,
            generations_run=state.generations_run,
            fitness_history=state.history,
        )
