"""
Steel and labour cost model for slab reinforcement layouts.

Main bars run along ly and are counted across lx; distribution bars run
along lx and are counted across ly.  Bar counts use the same rule as the
bar selector (ceil(span / spacing)), so a layout costs the same whether it
comes from a design output or an optimizer solution.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from rebar_design.core.rebar_selector import bar_count
from rebar_design.models.inputs import SlabDesignInput
from rebar_design.models.outputs import SlabDesignOutput
from rebar_design.utils.constants import STEEL_DENSITY, bar_area


class CostRates(BaseModel):
    """Unit rates for reinforcement cost estimates."""
    model_config = ConfigDict(frozen=True)

    steel_rate: float = Field(default=60.0, gt=0, description="Steel price in INR/kg")
    labour_rate: float = Field(
        default=5.0, gt=0, description="Cutting and bending cost in INR per bar"
    )
    steel_density: float = Field(default=STEEL_DENSITY, gt=0, description="kg/m³")
    material_share: float = Field(
        default=0.8, gt=0, le=1, description="Share of total cost treated as material"
    )


class CostModel:
    """
    Prices a layout (diameters and spacings) on a given slab panel.
    """

    def __init__(self, inputs: SlabDesignInput, rates: CostRates = None):
        self.lx = inputs.lx
        self.ly = inputs.ly
        self.rates = rates or CostRates()

    def bar_counts(self, main_spacing: float, dist_spacing: float) -> Tuple[int, int]:
        """(main count across lx, distribution count across ly)."""
        return bar_count(self.lx, main_spacing), bar_count(self.ly, dist_spacing)

    def steel_weight(self, main_dia: float, dist_dia: float, n_main: int, n_dist: int) -> float:
        """Total bar weight in kg."""
        main_volume = bar_area(main_dia) * self.ly * n_main
        dist_volume = bar_area(dist_dia) * self.lx * n_dist
        return (main_volume + dist_volume) / 1e9 * self.rates.steel_density

    def _cost(self, main_dia: float, dist_dia: float, n_main: int, n_dist: int) -> float:
        weight = self.steel_weight(main_dia, dist_dia, n_main, n_dist)
        return weight * self.rates.steel_rate + (n_main + n_dist) * self.rates.labour_rate

    def layout_cost(self, main_dia: float, dist_dia: float,
                    main_spacing: float, dist_spacing: float) -> float:
        """Total cost (INR) of a layout given by diameters and spacings."""
        n_main, n_dist = self.bar_counts(main_spacing, dist_spacing)
        return self._cost(main_dia, dist_dia, n_main, n_dist)

    def output_cost(self, output: SlabDesignOutput) -> float:
        """Total cost (INR) of the bars chosen in a design output."""
        return self._cost(
            output.main_bar_diameter, output.dist_bar_diameter,
            output.main_bar_count, output.dist_bar_count,
        )

    def labour_cost(self, main_spacing: float, dist_spacing: float) -> float:
        n_main, n_dist = self.bar_counts(main_spacing, dist_spacing)
        return (n_main + n_dist) * self.rates.labour_rate

    def material_cost(self, total_cost: float) -> float:
        return total_cost * self.rates.material_share
