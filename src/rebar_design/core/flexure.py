"""
Flexural steel calculations per IS 456:2000 (Annex G).

Implements the singly reinforced rectangular section relation shared by
slabs and beams:

    Mu = 0.87·fy·Ast·d·(1 - Ast·fy / (fck·b·d))

rearranged for Ast:

    Ast = 0.5·fck·b·d/fy · (1 - sqrt(1 - 4.6·Mu / (fck·b·d²)))

Key clauses:
- IS 456:2000 Clause 38.1: Limit state of collapse - Flexure
- IS 456:2000 Annex G-1.1: Rectangular sections
"""

import math
from dataclasses import dataclass, field
from typing import List

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456


@dataclass
class FlexureResult:
    """Internal result from a singly reinforced steel-area calculation."""
    moment: float  # Mu in kNm (per metre width for slabs)
    limiting_moment: float  # Mu,lim in kNm
    required_ast: float  # mm² (per metre width for slabs)
    exceeds_limit: bool  # Mu > Mu,lim
    clamped: bool  # square-root argument was negative and clamped at zero
    warnings: List[str] = field(default_factory=list)


class FlexureDesigner:
    """
    Tension steel for a rectangular section under a given moment.

    Over-moment sections are not rejected: the square-root argument is
    clamped at zero (giving the maximum steel the relation can return) and a
    warning is recorded.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()

    def limiting_moment(self, fck: float, b: float, d: float) -> float:
        """Mu,lim = 0.138·fck·b·d² in kNm."""
        return IS456.LIMITING_MOMENT_COEFFICIENT * fck * b * d * d / 1e6

    def singly_reinforced(
        self,
        moment: float,  # Design moment Mu (kNm)
        fck: float,     # Concrete strength (MPa)
        fy: float,      # Steel yield strength (MPa)
        b: float,       # Section width (mm)
        d: float,       # Effective depth (mm)
        label: str = "Moment",
    ) -> FlexureResult:
        """
        Required tension steel for a singly reinforced section.

        Args:
            moment: Design bending moment in kNm
            fck: Characteristic concrete strength in MPa
            fy: Characteristic steel yield strength in MPa
            b: Width in mm (1000 for a metre strip of slab)
            d: Effective depth in mm
            label: Name used in warning messages

        Returns:
            FlexureResult with the required area and any warnings
        """
        warnings = []
        mu_lim = self.limiting_moment(fck, b, d)
        exceeds = moment > mu_lim

        if exceeds:
            warnings.append(
                f"{label} {moment:.2f} kNm exceeds limiting moment {mu_lim:.2f} kNm. "
                "Consider increasing depth or using compression reinforcement."
            )

        if moment <= 0:
            return FlexureResult(moment, mu_lim, 0.0, exceeds, False, warnings)

        term1 = 0.5 * fck * b * d / fy
        radicand = 1 - (4.6 * moment * 1e6) / (fck * b * d * d)
        clamped = radicand < 0
        if clamped:
            warnings.append(
                f"{label} {moment:.2f} kNm is beyond the capacity of a singly reinforced "
                f"section at d = {d:.0f} mm; steel area capped at {term1:.0f} mm². "
                "Increase depth or provide compression steel."
            )
            radicand = 0.0

        ast = term1 * (1 - math.sqrt(radicand))
        return FlexureResult(moment, mu_lim, ast, exceeds, clamped, warnings)
