"""
Axially loaded short column design per IS 456:2000.

Key clauses:
- IS 456:2000 Clause 39.3: Short axially loaded members
  Pu = 0.4·fck·Ac + 0.67·fy·Asc
- IS 456:2000 Clause 26.5.3.1: Longitudinal steel 0.8% to 6% of Ag
- IS 456:2000 Clause 26.5.3.2: Transverse (tie) reinforcement
- IS 456:2000 Clause 25.1.2: Short / slender classification
"""

import math
from typing import List, Optional, Tuple

from loguru import logger

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.models.inputs import ColumnDesignInput
from rebar_design.models.outputs import CalculationStep, ColumnDesignOutput, DesignStatus
from rebar_design.utils.constants import LONGITUDINAL_BAR_SIZES, TIE_BAR_SIZES, bar_area

MIN_COLUMN_BARS = 4
MAX_COLUMN_BARS = 12
FALLBACK_BAR_DIA = 20  # mm
SHORT_COLUMN_LIMIT = 12.0
TIE_SPACING_LIMIT = 300.0  # mm


def _round_up_even(count: int) -> int:
    return count + 1 if count % 2 else count


class ColumnDesigner:
    """
    Design engine for rectangular columns under axial load.

    Applied moments are carried through (factored) for reporting only; the
    steel is sized for the axial load alone.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()

    def design(self, inputs: ColumnDesignInput) -> ColumnDesignOutput:
        """
        Execute the complete column design.

        Args:
            inputs: ColumnDesignInput with service loads

        Returns:
            ColumnDesignOutput with longitudinal bars, ties and slenderness
        """
        warnings: List[str] = []
        steps: List[CalculationStep] = []

        fck = inputs.fck
        fy = inputs.fy
        gamma_f = self.code.get_partial_safety_factors()["gamma_f_dead"]

        Pu = inputs.axial_load * gamma_f
        Mux = inputs.moment_x * gamma_f
        Muy = inputs.moment_y * gamma_f
        if Mux or Muy:
            warnings.append(
                f"Applied moments (Mux = {Mux:.1f} kNm, Muy = {Muy:.1f} kNm) are not "
                "considered; design is for axial load only. Check biaxial bending separately."
            )

        # Longitudinal steel
        Ag = inputs.gross_area
        asc_required = (Pu * 1000 - 0.4 * fck * Ag) / (0.67 * fy - 0.4 * fck)
        min_frac, max_frac = self.code.get_column_steel_limits()
        asc = max(asc_required, min_frac * Ag)
        if asc > max_frac * Ag:
            warnings.append(
                f"Required steel {asc_required:.0f} mm² exceeds the 6% maximum "
                f"({max_frac * Ag:.0f} mm²). Increase the column section."
            )
            asc = max_frac * Ag

        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Longitudinal steel (Asc)",
            formula="Asc = (Pu - 0.4·fck·Ag) / (0.67·fy - 0.4·fck)",
            substitution=(
                f"= ({Pu * 1000:.0f} - 0.4 × {fck:.0f} × {Ag:.0f}) / "
                f"(0.67 × {fy:.0f} - 0.4 × {fck:.0f})"
            ),
            result=round(asc_required, 0),
            unit="mm²",
            code_reference="IS 456:2000, Cl. 39.3"
        ))

        bar_dia, bar_count, bar_warning = self.select_longitudinal_bars(asc)
        if bar_warning:
            warnings.append(bar_warning)
        provided = bar_count * bar_area(bar_dia)

        # Ties
        tie_dia = self.tie_diameter(bar_dia)
        tie_spacing = self.tie_spacing(inputs, bar_dia)

        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Tie spacing",
            formula="Sv = min(least dimension, 16φ, 300)",
            substitution=f"= min({inputs.least_dimension:.0f}, {16 * bar_dia}, 300)",
            result=tie_spacing,
            unit="mm",
            code_reference="IS 456:2000, Cl. 26.5.3.2(c)"
        ))

        # Slenderness
        le = inputs.unbraced_length * inputs.effective_length_factor
        slenderness = le / inputs.least_dimension
        is_short = slenderness < SHORT_COLUMN_LIMIT
        notes = ""
        if not is_short:
            notes = "Slender column - additional moment due to slenderness must be considered"
            warnings.append(
                f"Slenderness ratio {slenderness:.1f} ≥ {SHORT_COLUMN_LIMIT:.0f}: "
                "additional moments are not computed."
            )

        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Slenderness ratio",
            formula="λ = le / least dimension",
            substitution=f"= {le:.0f} / {inputs.least_dimension:.0f}",
            result=round(slenderness, 2),
            unit="",
            code_reference="IS 456:2000, Cl. 25.1.2"
        ))

        status = DesignStatus.WARNING if warnings else DesignStatus.PASS
        logger.debug("Column {}x{}: Pu={:.0f} kN, {}-{}φ", inputs.width, inputs.depth,
                     Pu, bar_count, bar_dia)

        return ColumnDesignOutput(
            status=status,
            axial_load=Pu,
            moment_x=Mux,
            moment_y=Muy,
            gross_area=Ag,
            required_steel_area=asc_required,
            longitudinal_steel_area=asc,
            longitudinal_bar_diameter=bar_dia,
            longitudinal_bar_count=bar_count,
            provided_steel_area=provided,
            steel_percentage=100 * provided / Ag,
            tie_diameter=tie_dia,
            tie_spacing=tie_spacing,
            effective_length=le,
            slenderness_ratio=slenderness,
            is_short_column=is_short,
            notes=notes,
            warnings=warnings,
            steps=steps,
        )

    def select_longitudinal_bars(self, asc: float) -> Tuple[int, int, Optional[str]]:
        """
        Smallest diameter giving 4-12 bars; the count is rounded up to even.

        Returns:
            (diameter, count, warning or None)
        """
        for dia in LONGITUDINAL_BAR_SIZES:
            count = math.ceil(asc / bar_area(dia))
            if MIN_COLUMN_BARS <= count <= MAX_COLUMN_BARS:
                return dia, _round_up_even(count), None

        count = _round_up_even(max(MIN_COLUMN_BARS, math.ceil(asc / bar_area(FALLBACK_BAR_DIA))))
        return (
            FALLBACK_BAR_DIA,
            count,
            f"No bar size gives {MIN_COLUMN_BARS}-{MAX_COLUMN_BARS} bars for "
            f"Asc = {asc:.0f} mm². Using {count}-{FALLBACK_BAR_DIA}φ.",
        )

    def tie_diameter(self, bar_dia: int) -> int:
        """Not less than φ/4 or 6 mm, rounded up to a standard tie size."""
        needed = max(bar_dia / 4.0, 6.0)
        for size in TIE_BAR_SIZES:
            if size >= needed:
                return size
        return TIE_BAR_SIZES[-1]

    def tie_spacing(self, inputs: ColumnDesignInput, bar_dia: int) -> float:
        """Least of the lateral dimension, 16φ and 300 mm, floored to 25 mm."""
        spacing = min(inputs.least_dimension, 16 * bar_dia, TIE_SPACING_LIMIT)
        return math.floor(spacing / 25) * 25
