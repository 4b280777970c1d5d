"""
Bar selection and anchorage per IS 456:2000.

Turns a required steel area per metre width into a constructible bar
diameter, spacing and count, then works out development and lap lengths.

Key clauses:
- IS 456:2000 Clause 26.3.3(b): Maximum spacing of slab bars
- IS 456:2000 Clause 26.2.1: Development length Ld = φ·σs / (4·τbd)
- IS 456:2000 Clause 26.2.5.1: Lap length
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.models.inputs import SlabDesignInput, SupportType
from rebar_design.models.outputs import CalculationStep, CrankDetails, SlabDesignOutput
from rebar_design.utils.constants import SLAB_STRIP_WIDTH, bar_area

# Distribution bar sizes used when no preferred size fits under the main bar
FALLBACK_DISTRIBUTION_SIZES = (8, 10)

CRANK_ANGLE = 45.0  # degrees


@dataclass
class BarSelection:
    """Chosen diameter and spacing for one reinforcement role."""
    diameter: int  # mm
    spacing: float  # mm c/c
    warning: Optional[str] = None


def floor_to(value: float, step: float) -> float:
    """Round *value* down to a multiple of *step*."""
    return math.floor(value / step) * step


def bar_count(span: float, spacing: float) -> int:
    """Number of bars at *spacing* across *span*: ceil(span / spacing)."""
    # Rounding guards against 15000/150 landing a hair above 100
    return int(math.ceil(round(span / spacing, 9)))


def spacing_for_area(diameter: float, required_ast: float) -> float:
    """Spacing (mm) at which bars of *diameter* deliver *required_ast* mm²/m."""
    return bar_area(diameter) * SLAB_STRIP_WIDTH / required_ast


def provided_area(diameter: float, spacing: float) -> float:
    """Steel area per metre width (mm²/m) for bars at a spacing."""
    return bar_area(diameter) * SLAB_STRIP_WIDTH / spacing


def select_bar(
    required_ast: float,
    diameters: Sequence[int],
    min_spacing: float,
    max_spacing: float,
    spacing_cap: float,
    role: str = "main",
) -> BarSelection:
    """
    Pick the smallest diameter whose exact spacing fits the allowed band.

    The band is [min_spacing, min(max_spacing, spacing_cap)].  The accepted
    spacing is floored to 10 mm but never below min_spacing, so it stays in
    the band and never provides less steel than required.

    When no diameter fits:
    - if even the smallest bar would sit wider than the band allows (light
      demand) the smallest bar is used at the upper limit;
    - otherwise the largest bar is used at the minimum spacing (never wider
      than the code cap).
    Either fallback carries a warning.

    Args:
        required_ast: Required area in mm²/m
        diameters: Candidate diameters in mm (any order)
        min_spacing: Caller's minimum spacing in mm
        max_spacing: Caller's maximum spacing in mm
        spacing_cap: Code maximum spacing for the role in mm
        role: Name used in warning messages

    Returns:
        BarSelection
    """
    ordered = sorted(diameters)
    upper = min(max_spacing, spacing_cap)

    for dia in ordered:
        spacing = spacing_for_area(dia, required_ast)
        if min_spacing <= spacing <= upper:
            return BarSelection(dia, max(floor_to(spacing, 10), min_spacing))

    smallest = ordered[0]
    if spacing_for_area(smallest, required_ast) > upper:
        spacing = max(floor_to(upper, 10), min(min_spacing, upper))
        return BarSelection(
            smallest,
            spacing,
            f"{role.capitalize()} steel demand ({required_ast:.0f} mm²/m) is below what "
            f"{smallest}mm bars provide at the maximum spacing. "
            f"Using {smallest}mm @ {spacing:.0f}mm c/c (spacing limit governs).",
        )

    largest = ordered[-1]
    spacing = min(min_spacing, spacing_cap)
    message = (
        f"Could not find optimal spacing for {role} bars. "
        f"Using {largest}mm @ {spacing:.0f}mm c/c"
    )
    if spacing < min_spacing:
        message += f" (code maximum spacing {spacing_cap:.0f}mm overrides preferred minimum)"
    return BarSelection(largest, spacing, message)


class RebarCalculator:
    """
    Calculates specific rebar requirements (bar sizes, spacing, counts).

    Every method is a pure function of its arguments: running the selection
    twice on the same input and output gives the same bars.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()

    def select_bars(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> SlabDesignOutput:
        """Main bars, distribution bars, anchorage and cranks in order."""
        output = self.calculate_main_bars(inputs, output)
        output = self.calculate_distribution_bars(inputs, output)
        output = self.calculate_development_length(inputs, output)
        return self.apply_cranks(inputs, output)

    def calculate_main_bars(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> SlabDesignOutput:
        """
        Main reinforcement for the governing of bottom and top demand.

        Bars are counted across the short span lx.
        """
        selection = select_bar(
            output.required_main_steel,
            inputs.preferred_bar_diameters,
            inputs.min_bar_spacing,
            inputs.max_bar_spacing,
            self.code.get_main_spacing_cap(inputs.thickness),
            role="main",
        )
        warnings = list(output.warnings)
        if selection.warning:
            warnings.append(selection.warning)

        return output.model_copy(update={
            "main_bar_diameter": selection.diameter,
            "main_bar_spacing": selection.spacing,
            "main_bar_count": bar_count(inputs.lx, selection.spacing),
            "warnings": warnings,
        })

    def distribution_options(self, inputs: SlabDesignInput, main_diameter: int) -> list:
        """Preferred diameters not larger than the main bar, else 8/10 mm."""
        options = [d for d in inputs.preferred_bar_diameters if d <= main_diameter]
        return options or list(FALLBACK_DISTRIBUTION_SIZES)

    def calculate_distribution_bars(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> SlabDesignOutput:
        """
        Distribution reinforcement, counted across the long span ly.
        """
        selection = select_bar(
            output.ast_distribution,
            self.distribution_options(inputs, output.main_bar_diameter),
            inputs.min_bar_spacing,
            inputs.max_bar_spacing,
            self.code.get_distribution_spacing_cap(inputs.thickness),
            role="distribution",
        )
        warnings = list(output.warnings)
        if selection.warning:
            warnings.append(selection.warning)

        return output.model_copy(update={
            "dist_bar_diameter": selection.diameter,
            "dist_bar_spacing": selection.spacing,
            "dist_bar_count": bar_count(inputs.ly, selection.spacing),
            "warnings": warnings,
        })

    def development_length(self, diameter: float, fck: float, fy: float) -> float:
        """Ld = φ·(0.87·fy) / (4·τbd) in mm."""
        sigma_s = 0.87 * fy
        return diameter * sigma_s / (4 * self.code.get_bond_stress(fck))

    def lap_length(self, diameter: float, development_length: float) -> float:
        """Tension lap: not less than Ld, 15φ or 200 mm."""
        return max(development_length, 15 * diameter, 200.0)

    def calculate_development_length(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> SlabDesignOutput:
        """
        Development and lap length for the main bars.
        """
        phi = output.main_bar_diameter
        ld = self.development_length(phi, inputs.fck, inputs.fy)
        lap = self.lap_length(phi, ld)
        tau_bd = self.code.get_bond_stress(inputs.fck)

        steps = [*output.steps, CalculationStep(
            step_number=len(output.steps) + 1,
            description="Development length",
            formula="Ld = φ·0.87fy / (4·τbd)",
            substitution=f"= {phi} × 0.87 × {inputs.fy:.0f} / (4 × {tau_bd})",
            result=round(ld, 1),
            unit="mm",
            code_reference="IS 456:2000, Cl. 26.2.1",
        )]

        return output.model_copy(update={
            "development_length": ld,
            "lap_length": lap,
            "steps": steps,
        })

    def apply_cranks(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> SlabDesignOutput:
        """
        Crank details for bars bent up at supports (45°, length d/2).

        Cranks are only required where the support restrains rotation.
        """
        d = inputs.thickness - inputs.bottom_cover - output.main_bar_diameter / 2.0
        crank_length = d / 2.0
        crank = CrankDetails(
            crank_length=crank_length,
            crank_angle=CRANK_ANGLE,
            horizontal_projection=crank_length * math.cos(math.radians(CRANK_ANGLE)),
            is_required=inputs.support_type != SupportType.SIMPLE,
        )
        return output.model_copy(update={"crank": crank})
