"""
Simply supported rectangular beam design per IS 456:2000.

Coordinates the design workflow:
1. Factored UDL, midspan moment and support shear
2. Flexural design (singly reinforced, doubly reinforced beyond Mu,lim)
3. Bar selection for tension and compression faces
4. Shear design (vertical stirrups)
5. Deflection check by span/effective depth ratio
"""

import math
from typing import List, Optional, Tuple

from loguru import logger

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.core.flexure import FlexureDesigner
from rebar_design.core.shear import ShearDesigner
from rebar_design.models.inputs import BeamDesignInput, SupportType
from rebar_design.models.outputs import BeamDesignOutput, CalculationStep, DesignStatus
from rebar_design.utils.constants import LONGITUDINAL_BAR_SIZES, bar_area

MIN_TENSION_BARS = 2
MAX_TENSION_BARS = 6
FALLBACK_BAR_DIA = 20  # mm


class BeamDesigner:
    """
    Design engine for simply supported rectangular beams under UDL.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()
        self.flexure_designer = FlexureDesigner(self.code)
        self.shear_designer = ShearDesigner(self.code)

    def design(self, inputs: BeamDesignInput) -> BeamDesignOutput:
        """
        Execute the complete beam design.

        Args:
            inputs: BeamDesignInput with all parameters

        Returns:
            BeamDesignOutput with complete design results
        """
        warnings: List[str] = []
        steps: List[CalculationStep] = []

        fck = inputs.fck
        fy = inputs.fy
        b = inputs.width
        d = inputs.effective_depth
        d_prime = inputs.compression_cover
        span = inputs.span

        # Design forces
        gamma_f = self.code.get_partial_safety_factors()["gamma_f_dead"]
        w = gamma_f * (inputs.dead_load + inputs.live_load)
        Mu = w * span * span / 8.0
        Vu = w * span / 2.0

        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Design moment (simply supported)",
            formula="Mu = w·L² / 8",
            substitution=f"= {w:.2f} × {span:.2f}² / 8",
            result=round(Mu, 2),
            unit="kNm",
            code_reference="IS 456:2000, Cl. 22.2"
        ))

        # Flexure
        flexure = self.flexure_designer.singly_reinforced(Mu, fck, fy, b, d, label="Design moment")
        warnings.extend(flexure.warnings)
        mu_lim = flexure.limiting_moment

        min_steel = 0.85 * b * d / fy
        ast = max(flexure.required_ast, min_steel)

        compression_required = Mu > mu_lim
        asc = 0.0
        if compression_required:
            asc = (Mu - mu_lim) * 1e6 / (0.87 * fy * (d - d_prime))
            xu_max = self.code.get_xu_max_ratio(fy) * d
            ast_lim = 0.36 * fck * b * xu_max / (0.87 * fy)
            # Balancing tension for the compression couple works at the same stress
            ast = max(ast, ast_lim + asc)

            steps.append(CalculationStep(
                step_number=len(steps) + 1,
                description="Compression steel (Asc)",
                formula="Asc = (Mu - Mu,lim) / (0.87·fy·(d - d'))",
                substitution=(
                    f"= ({Mu:.2f} - {mu_lim:.2f})×10⁶ / (0.87 × {fy:.0f} × ({d:.0f} - {d_prime:.0f}))"
                ),
                result=round(asc, 0),
                unit="mm²",
                code_reference="IS 456:2000, Annex G-1.2"
            ))

        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Tension steel (Ast)",
            formula="Ast ≥ 0.85·b·d / fy",
            substitution=f"min = 0.85 × {b:.0f} × {d:.0f} / {fy:.0f} = {min_steel:.0f}",
            result=round(ast, 0),
            unit="mm²",
            code_reference="IS 456:2000, Cl. 26.5.1.1"
        ))

        tension_dia, tension_count, bar_warning = self.select_tension_bars(ast)
        if bar_warning:
            warnings.append(bar_warning)

        compression_dia: Optional[int] = None
        compression_count: Optional[int] = None
        if compression_required:
            compression_dia = tension_dia
            compression_count = max(
                MIN_TENSION_BARS, math.ceil(asc / bar_area(compression_dia))
            )

        # Shear
        shear = self.shear_designer.design(
            shear_force=Vu,
            width=b,
            effective_depth=d,
            fck=fck,
            fy=fy,
            ast_provided=ast,
        )
        warnings.extend(shear.warnings)
        for step in shear.steps:
            steps.append(step.model_copy(update={"step_number": len(steps) + 1}))

        # Deflection
        actual_ld = span * 1000 / d
        allowable_ld = self.code.get_span_depth_ratio(SupportType.SIMPLE)
        deflection_ok = actual_ld <= allowable_ld
        if not deflection_ok:
            warnings.append(
                f"Deflection check failed. Actual L/d = {actual_ld:.2f}, "
                f"Allowable = {allowable_ld:.2f}. Consider increasing beam depth."
            )

        status = DesignStatus.WARNING if warnings else DesignStatus.PASS
        logger.debug("Beam {:.2f}m {}x{}: Mu={:.1f} kNm, status={}",
                     span, b, inputs.depth, Mu, status.value)

        return BeamDesignOutput(
            status=status,
            factored_load=w,
            max_moment=Mu,
            max_shear=Vu,
            effective_depth=d,
            limiting_moment=mu_lim,
            tension_steel_area=ast,
            tension_bar_diameter=tension_dia,
            tension_bar_count=tension_count,
            compression_steel_required=compression_required,
            compression_steel_area=asc,
            compression_bar_diameter=compression_dia,
            compression_bar_count=compression_count,
            nominal_shear_stress=shear.tau_v,
            concrete_shear_strength=shear.tau_c,
            max_shear_stress=shear.tau_c_max,
            stirrup_diameter=shear.stirrup_dia,
            stirrup_legs=shear.stirrup_legs,
            stirrup_spacing=shear.spacing_provided,
            shear_reinforcement_note=shear.note,
            actual_span_depth_ratio=actual_ld,
            allowable_span_depth_ratio=allowable_ld,
            deflection_check_passed=deflection_ok,
            warnings=warnings,
            steps=steps,
        )

    def select_tension_bars(self, ast: float) -> Tuple[int, int, Optional[str]]:
        """
        First diameter whose bar count lands in the practical 2-6 range.

        Returns:
            (diameter, count, warning or None)
        """
        for dia in LONGITUDINAL_BAR_SIZES:
            count = math.ceil(ast / bar_area(dia))
            if MIN_TENSION_BARS <= count <= MAX_TENSION_BARS:
                return dia, count, None

        count = max(MIN_TENSION_BARS, math.ceil(ast / bar_area(FALLBACK_BAR_DIA)))
        return (
            FALLBACK_BAR_DIA,
            count,
            f"No bar size gives {MIN_TENSION_BARS}-{MAX_TENSION_BARS} tension bars for "
            f"Ast = {ast:.0f} mm². Using {count}-{FALLBACK_BAR_DIA}φ; "
            "check bar spacing and consider two layers.",
        )
