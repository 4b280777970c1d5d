"""
Shear design calculations per IS 456:2000.

Implements the nominal shear stress method for beams:
- τv = Vu / (b·d)
- τc from Table 19 (stepped on pt), τc,max from Table 20
- Vertical stirrups for Vus = (τv - τc)·b·d

Key clauses:
- IS 456:2000 Clause 40.1: Nominal shear stress
- IS 456:2000 Clause 40.4: Design of shear reinforcement
- IS 456:2000 Clause 26.5.1.5: Maximum spacing of shear reinforcement
"""

import math
from dataclasses import dataclass, field
from typing import List

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.models.outputs import CalculationStep, DesignStatus
from rebar_design.utils.constants import bar_area

MINIMUM_STIRRUP_DIA = 8  # mm, when concrete carries the shear
DESIGN_STIRRUP_DIA = 10  # mm, when stirrups are designed
STIRRUP_LEGS = 2
SPACING_ROUNDING = 25  # mm
MIN_PRACTICAL_SPACING = 75  # mm


@dataclass
class ShearResult:
    """Internal result from shear design calculations."""
    status: DesignStatus

    design_shear: float  # Vu (kN)
    tau_v: float  # Nominal shear stress (MPa)
    pt: float  # Tension steel percentage
    tau_c: float  # Concrete shear strength (MPa)
    tau_c_max: float  # Maximum shear stress (MPa)

    shear_reinf_required: bool
    stirrup_dia: int  # mm
    stirrup_legs: int
    Asv: float  # Stirrup area (mm²)
    spacing_required: float  # mm, before capping
    spacing_provided: float  # mm
    spacing_max: float  # mm

    note: str = ""
    warnings: List[str] = field(default_factory=list)
    steps: List[CalculationStep] = field(default_factory=list)


class ShearDesigner:
    """
    Shear reinforcement design per IS 456:2000.

    Uses the vertical stirrup formula of Clause 40.4(a).
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()

    def design(
        self,
        shear_force: float,      # Vu at support (kN)
        width: float,            # Beam width b (mm)
        effective_depth: float,  # Effective depth d (mm)
        fck: float,              # Concrete strength (MPa)
        fy: float,               # Steel yield strength (MPa)
        ast_provided: float,     # Tension steel area used for pt (mm²)
    ) -> ShearResult:
        """
        Design shear reinforcement per IS 456:2000.

        Args:
            shear_force: Design shear force at support (kN)
            width: Beam width b in mm
            effective_depth: Effective depth d in mm
            fck: Characteristic concrete strength in MPa
            fy: Characteristic steel yield strength in MPa
            ast_provided: Tension steel area in mm²

        Returns:
            ShearResult with complete design details
        """
        steps = []
        warnings = []
        step_num = 1

        b = width
        d = effective_depth
        Vu = shear_force

        # Step 1: Nominal shear stress
        tau_v = Vu * 1000 / (b * d)

        steps.append(CalculationStep(
            step_number=step_num,
            description="Nominal shear stress (τv)",
            formula="τv = Vu / (b × d)",
            substitution=f"= {Vu * 1000:.0f} / ({b:.0f} × {d:.0f})",
            result=round(tau_v, 3),
            unit="MPa",
            code_reference="IS 456:2000, Cl. 40.1"
        ))
        step_num += 1

        # Step 2: Concrete shear strength
        pt = 100 * ast_provided / (b * d)
        tau_c = self.code.get_shear_strength_concrete(pt, fck)

        steps.append(CalculationStep(
            step_number=step_num,
            description="Design shear strength of concrete (τc)",
            formula="τc from Table 19 at pt = 100·Ast/(b·d)",
            substitution=f"pt = 100 × {ast_provided:.0f} / ({b:.0f} × {d:.0f}) = {pt:.3f}%",
            result=tau_c,
            unit="MPa",
            code_reference="IS 456:2000, Table 19"
        ))
        step_num += 1

        # Step 3: Section adequacy
        tau_c_max = self.code.get_maximum_shear_stress(fck)
        if tau_v > tau_c_max:
            warnings.append(
                f"Nominal shear stress {tau_v:.2f} MPa exceeds τc,max {tau_c_max:.2f} MPa. "
                "Section is inadequate in shear; increase the section size."
            )

        sv_max = min(0.75 * d, 300)
        shear_reinf_required = tau_v > tau_c

        if not shear_reinf_required:
            stirrup_dia = MINIMUM_STIRRUP_DIA
            Asv = STIRRUP_LEGS * bar_area(stirrup_dia)
            sv_required = sv_max
            note = "Minimum shear reinforcement provided"

            steps.append(CalculationStep(
                step_number=step_num,
                description="Shear reinforcement check",
                formula="τv ≤ τc",
                substitution=f"{tau_v:.3f} ≤ {tau_c:.3f} ✓",
                result=tau_c,
                unit="MPa",
                code_reference="Minimum shear reinforcement sufficient"
            ))
            step_num += 1
        else:
            stirrup_dia = DESIGN_STIRRUP_DIA
            Asv = STIRRUP_LEGS * bar_area(stirrup_dia)
            Vus = (tau_v - tau_c) * b * d / 1000  # kN
            sv_required = 0.87 * fy * Asv * d / (Vus * 1000)
            note = f"Designed for Vus = {Vus:.1f} kN"

            steps.append(CalculationStep(
                step_number=step_num,
                description="Required stirrup spacing",
                formula="Sv = 0.87·fy·Asv·d / Vus",
                substitution=f"= 0.87 × {fy:.0f} × {Asv:.0f} × {d:.0f} / {Vus * 1000:.0f}",
                result=round(sv_required, 0),
                unit="mm",
                code_reference="IS 456:2000, Cl. 40.4(a)"
            ))
            step_num += 1

        sv_provided = math.floor(min(sv_required, sv_max) / SPACING_ROUNDING) * SPACING_ROUNDING
        sv_provided = max(sv_provided, SPACING_ROUNDING)

        if sv_provided < MIN_PRACTICAL_SPACING:
            warnings.append(
                f"Stirrup spacing {sv_provided:.0f}mm is below the practical minimum of "
                f"{MIN_PRACTICAL_SPACING}mm. Consider a larger stirrup or a deeper section."
            )

        steps.append(CalculationStep(
            step_number=step_num,
            description="Stirrup arrangement",
            formula=f"Provide {STIRRUP_LEGS}L-{stirrup_dia}φ @ {sv_provided:.0f}mm c/c",
            substitution=f"Sv,max = min(0.75 × {d:.0f}, 300) = {sv_max:.0f}",
            result=sv_provided,
            unit="mm",
            code_reference="IS 456:2000, Cl. 26.5.1.5"
        ))

        return ShearResult(
            status=DesignStatus.WARNING if warnings else DesignStatus.PASS,
            design_shear=Vu,
            tau_v=tau_v,
            pt=pt,
            tau_c=tau_c,
            tau_c_max=tau_c_max,
            shear_reinf_required=shear_reinf_required,
            stirrup_dia=stirrup_dia,
            stirrup_legs=STIRRUP_LEGS,
            Asv=Asv,
            spacing_required=sv_required,
            spacing_provided=sv_provided,
            spacing_max=sv_max,
            note=note,
            warnings=warnings,
            steps=steps,
        )
