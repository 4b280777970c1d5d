"""
Slab analysis per IS 456:2000.

Stages, each a pure function of (input, output) returning a new output:
1. Classification (one-way / two-way from ly/lx)
2. Factored load and design moments (one-way coefficients or Table 26)
3. Required steel per direction, clamped to the code minimum
4. Deflection control by span/effective depth ratio

Key clauses:
- IS 456:2000 Clause 24.4 / Annex D: Slabs spanning in two directions
- IS 456:2000 Clause 26.5.2.1: Minimum slab reinforcement
- IS 456:2000 Clause 23.2.1: Span/depth ratios
"""

from loguru import logger

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.core.flexure import FlexureDesigner
from rebar_design.models.inputs import SlabDesignInput
from rebar_design.models.outputs import CalculationStep, SlabDesignOutput
from rebar_design.utils.constants import CONCRETE_UNIT_WEIGHT, SLAB_STRIP_WIDTH


# Slabs with ly/lx strictly above this ratio span one way
ONE_WAY_RATIO_LIMIT = 2.0


def _step(output: SlabDesignOutput, **kwargs) -> list:
    """Return output.steps with one more numbered CalculationStep."""
    step = CalculationStep(step_number=len(output.steps) + 1, **kwargs)
    return [*output.steps, step]


class SlabAnalyzer:
    """
    Analyzes a slab panel and calculates design requirements.

    The analyzer holds no per-run state; the same instance can analyze any
    number of inputs.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()
        self.flexure = FlexureDesigner(self.code)

    def analyze(self, inputs: SlabDesignInput) -> SlabDesignOutput:
        """
        Run classification, moments, required steel and deflection.

        Args:
            inputs: SlabDesignInput

        Returns:
            SlabDesignOutput with forces, steel areas and deflection check
            populated (bar selection is done by RebarCalculator)
        """
        output = SlabDesignOutput()
        output = self.classify(inputs, output)
        output = self.calculate_design_moments(inputs, output)
        output = self.calculate_required_steel(inputs, output)
        output = self.check_deflection(inputs, output)
        logger.debug(
            "Slab {}x{}x{} analysed: r={:.2f}, Ast main={:.0f} mm²/m",
            inputs.length, inputs.width, inputs.thickness,
            output.ly_lx_ratio, output.required_main_steel,
        )
        return output

    def classify(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> SlabDesignOutput:
        """
        One-way if ly/lx > 2.0, otherwise two-way (ratio of exactly 2.0 is two-way).
        """
        lx, ly = inputs.lx, inputs.ly
        ratio = ly / lx
        one_way = ratio > ONE_WAY_RATIO_LIMIT

        return output.model_copy(update={
            "lx": lx,
            "ly": ly,
            "ly_lx_ratio": ratio,
            "is_one_way": one_way,
            "is_two_way": not one_way,
            "steps": _step(
                output,
                description="Span ratio (ly/lx)",
                formula="r = ly / lx",
                substitution=f"= {ly:.0f} / {lx:.0f}",
                result=round(ratio, 3),
                unit="",
                code_reference="IS 456:2000, Cl. 24.4",
            ),
        })

    def factored_load(self, inputs: SlabDesignInput) -> float:
        """w = 1.5 × (dead + self weight + live + finish) in kN/m²."""
        gamma_f = self.code.get_partial_safety_factors()["gamma_f_dead"]
        self_weight = inputs.thickness / 1000.0 * CONCRETE_UNIT_WEIGHT
        total = inputs.dead_load + self_weight + inputs.live_load + inputs.floor_finish_load
        return gamma_f * total

    def calculate_design_moments(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> SlabDesignOutput:
        """
        Design moments per metre width using IS 456 coefficients.

        Spans are converted to metres so that w·lx² is in kNm/m.
        """
        w = self.factored_load(inputs)
        lx_m = output.lx / 1000.0
        wl2 = w * lx_m * lx_m

        if output.is_one_way:
            alpha_pos = self.code.get_one_way_moment_coefficient(inputs.support_type, True)
            alpha_neg = self.code.get_one_way_moment_coefficient(inputs.support_type, False)
            mx_pos = alpha_pos * wl2
            mx_neg = alpha_neg * wl2
            my_pos = 0.0
            my_neg = 0.0
            formula = "Mx = α·w·lx² (one-way)"
            substitution = f"= {alpha_pos} × {w:.3f} × {lx_m:.3f}²"
        else:
            alpha_x = self.code.get_two_way_moment_coefficient(output.ly_lx_ratio, True)
            alpha_y = self.code.get_two_way_moment_coefficient(output.ly_lx_ratio, False)
            mx_pos = alpha_x * wl2
            my_pos = alpha_y * wl2
            factor = IS456.NEGATIVE_MOMENT_FACTOR
            mx_neg = mx_pos * factor
            my_neg = my_pos * factor
            formula = "Mx = αx·w·lx² (two-way, Table 26)"
            substitution = f"= {alpha_x} × {w:.3f} × {lx_m:.3f}²"

        steps = _step(
            output,
            description="Factored load",
            formula="w = 1.5 × (DL + 25·D + LL + FF)",
            substitution=(
                f"= 1.5 × ({inputs.dead_load} + {inputs.thickness / 1000.0 * CONCRETE_UNIT_WEIGHT:.2f}"
                f" + {inputs.live_load} + {inputs.floor_finish_load})"
            ),
            result=round(w, 3),
            unit="kN/m²",
            code_reference="IS 456:2000, Table 18",
        )
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Short span positive moment",
            formula=formula,
            substitution=substitution,
            result=round(mx_pos, 3),
            unit="kNm/m",
            code_reference="IS 456:2000, Annex D",
        ))

        return output.model_copy(update={
            "factored_load": w,
            "positive_moment_x": mx_pos,
            "negative_moment_x": mx_neg,
            "positive_moment_y": my_pos,
            "negative_moment_y": my_neg,
            "steps": steps,
        })

    def calculate_required_steel(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> SlabDesignOutput:
        """
        Required steel per metre width, clamped to 0.12% of b·D.

        Distribution steel is the long-span demand for two-way slabs and the
        code minimum for one-way slabs.
        """
        fck, fy = inputs.fck, inputs.fy
        b = SLAB_STRIP_WIDTH
        d = inputs.effective_depth
        warnings = list(output.warnings)

        bottom = self.flexure.singly_reinforced(
            output.positive_moment_x, fck, fy, b, d, label="Short span positive moment"
        )
        top = self.flexure.singly_reinforced(
            output.negative_moment_x, fck, fy, b, d, label="Short span negative moment"
        )
        warnings.extend(bottom.warnings)
        warnings.extend(top.warnings)

        min_ratio = self.code.get_minimum_reinforcement_ratio(fy) / 100.0
        min_steel = min_ratio * b * inputs.thickness

        if output.is_two_way:
            long_span = self.flexure.singly_reinforced(
                output.positive_moment_y, fck, fy, b, d, label="Long span positive moment"
            )
            warnings.extend(long_span.warnings)
            ast_dist = max(long_span.required_ast, min_steel)
        else:
            ast_dist = min_steel

        ast_bottom = max(bottom.required_ast, min_steel)
        ast_top = max(top.required_ast, min_steel)

        steps = _step(
            output,
            description="Main steel (bottom)",
            formula="Ast = 0.5·fck·b·d/fy·(1 - √(1 - 4.6·Mu/(fck·b·d²))) ≥ 0.12%·b·D",
            substitution=(
                f"= 0.5 × {fck:.0f} × {b:.0f} × {d:.0f} / {fy:.0f} × (...), "
                f"min {min_steel:.0f}"
            ),
            result=round(ast_bottom, 1),
            unit="mm²/m",
            code_reference="IS 456:2000, Annex G-1.1(b), Cl. 26.5.2.1",
        )

        return output.model_copy(update={
            "effective_depth": d,
            "ast_main_bottom": ast_bottom,
            "ast_main_top": ast_top,
            "ast_distribution": ast_dist,
            "warnings": warnings,
            "steps": steps,
        })

    def check_deflection(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> SlabDesignOutput:
        """
        Span/effective depth check (Clause 23.2.1); a failure is a warning.
        """
        d = inputs.effective_depth
        actual = output.lx / d
        allowable = self.code.get_span_depth_ratio(inputs.support_type)
        passed = actual <= allowable

        warnings = list(output.warnings)
        if not passed:
            warnings.append(
                f"Deflection check failed. Actual L/d = {actual:.2f}, "
                f"Allowable = {allowable:.2f}. Consider increasing slab thickness."
            )

        return output.model_copy(update={
            "actual_span_depth_ratio": actual,
            "allowable_span_depth_ratio": allowable,
            "deflection_check_passed": passed,
            "warnings": warnings,
            "steps": _step(
                output,
                description="Span/effective depth ratio",
                formula="lx / d ≤ 20 × kf",
                substitution=f"= {output.lx:.0f} / {d:.0f}",
                result=round(actual, 2),
                unit="",
                code_reference="IS 456:2000, Cl. 23.2.1",
            ),
        })
