"""
Code compliance checks for a completed slab design per IS 456:2000.

All rule groups always run; nothing fails fast.  Code violations are
collected as errors, advisory findings as warnings.

Key clauses:
- IS 456:2000 Clause 26.5.2.1: Minimum / maximum reinforcement
- IS 456:2000 Clause 26.3.3: Maximum bar spacing
- IS 456:2000 Clause 26.4: Nominal cover
"""

from typing import List, Tuple

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.models.inputs import SlabDesignInput
from rebar_design.models.outputs import SlabDesignOutput, ValidationResult
from rebar_design.utils.constants import SLAB_STRIP_WIDTH, bar_area


MIN_COVER = 25.0  # mm, moderate exposure
MAX_PRACTICAL_COVER = 75.0  # mm
MIN_SLAB_BAR_DIAMETER = 8  # mm
MIN_SLAB_THICKNESS = 100.0  # mm
THICKNESS_TOLERANCE = 10.0  # mm


def _steel_ratio(diameter: float, spacing: float, thickness: float) -> float:
    """Provided steel as a percentage of the gross section per metre width."""
    if spacing <= 0:
        return 0.0
    provided = bar_area(diameter) * SLAB_STRIP_WIDTH / spacing
    return provided / (SLAB_STRIP_WIDTH * thickness) * 100


class ValidationEngine:
    """
    Validates a slab design against IS 456 detailing rules.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()

    def validate(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> ValidationResult:
        """
        Run every rule group and collect the findings.

        Args:
            inputs: SlabDesignInput the design was produced from
            output: SlabDesignOutput with bars selected

        Returns:
            ValidationResult; is_valid is True exactly when no errors were found
        """
        errors: List[str] = []
        warnings: List[str] = []

        for check in (
            self.check_reinforcement_ratio,
            self.check_spacing,
            self.check_cover,
            self.check_bar_diameter,
            self.check_thickness,
        ):
            group_errors, group_warnings = check(inputs, output)
            errors.extend(group_errors)
            warnings.extend(group_warnings)

        return ValidationResult(errors=errors, warnings=warnings)

    def check_reinforcement_ratio(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> Tuple[List[str], List[str]]:
        """Provided ratios against the 0.12% minimum and 4% maximum."""
        errors, warnings = [], []
        min_ratio = self.code.get_minimum_reinforcement_ratio(inputs.fy)
        max_ratio = self.code.get_maximum_reinforcement_ratio()

        main_ratio = _steel_ratio(output.main_bar_diameter, output.main_bar_spacing, inputs.thickness)
        if main_ratio < min_ratio:
            errors.append(
                f"Main reinforcement ratio {main_ratio:.3f}% is less than minimum {min_ratio}%"
            )
        if main_ratio > max_ratio:
            errors.append(
                f"Main reinforcement ratio {main_ratio:.3f}% exceeds maximum {max_ratio}%"
            )

        dist_ratio = _steel_ratio(output.dist_bar_diameter, output.dist_bar_spacing, inputs.thickness)
        if dist_ratio < min_ratio:
            warnings.append(
                f"Distribution reinforcement ratio {dist_ratio:.3f}% is less than minimum {min_ratio}%"
            )
        return errors, warnings

    def check_spacing(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> Tuple[List[str], List[str]]:
        """Spacing caps per role, plus a tight-spacing warning for main bars."""
        errors, warnings = [], []

        main_cap = self.code.get_main_spacing_cap(inputs.thickness)
        if output.main_bar_spacing > main_cap:
            errors.append(
                f"Main bar spacing {output.main_bar_spacing:.0f}mm exceeds maximum {main_cap:.0f}mm"
            )

        # Clear gap needed to place concrete
        tight = max(output.main_bar_diameter + 5, 25)
        if output.main_bar_spacing < tight:
            warnings.append(
                f"Main bar spacing {output.main_bar_spacing:.0f}mm is very tight. "
                "Consider using larger bars."
            )

        dist_cap = self.code.get_distribution_spacing_cap(inputs.thickness)
        if output.dist_bar_spacing > dist_cap:
            errors.append(
                f"Distribution bar spacing {output.dist_bar_spacing:.0f}mm exceeds "
                f"maximum {dist_cap:.0f}mm"
            )
        return errors, warnings

    def check_cover(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> Tuple[List[str], List[str]]:
        """Nominal cover limits."""
        errors, warnings = [], []

        if inputs.bottom_cover < MIN_COVER:
            errors.append(
                f"Bottom cover {inputs.bottom_cover:.0f}mm is less than minimum {MIN_COVER:.0f}mm"
            )
        if inputs.top_cover < MIN_COVER:
            errors.append(
                f"Top cover {inputs.top_cover:.0f}mm is less than minimum {MIN_COVER:.0f}mm"
            )
        if inputs.side_cover < MIN_COVER:
            errors.append(
                f"Side cover {inputs.side_cover:.0f}mm is less than minimum {MIN_COVER:.0f}mm"
            )
        if inputs.bottom_cover > MAX_PRACTICAL_COVER:
            warnings.append(f"Bottom cover {inputs.bottom_cover:.0f}mm is unusually large")
        if inputs.bottom_cover > 2 * output.main_bar_diameter:
            warnings.append("Cover is more than 2 times bar diameter. May affect bond.")
        return errors, warnings

    def check_bar_diameter(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> Tuple[List[str], List[str]]:
        """Bar size limits relative to the slab."""
        errors, warnings = [], []

        max_diameter = inputs.thickness / 8.0
        if output.main_bar_diameter > max_diameter:
            warnings.append(
                f"Main bar diameter {output.main_bar_diameter}mm exceeds recommended limit "
                f"of {max_diameter:.1f}mm (D/8)"
            )
        if output.main_bar_diameter < MIN_SLAB_BAR_DIAMETER:
            errors.append(
                f"Main bar diameter {output.main_bar_diameter}mm is less than minimum "
                f"{MIN_SLAB_BAR_DIAMETER}mm"
            )
        if output.dist_bar_diameter < MIN_SLAB_BAR_DIAMETER:
            errors.append(
                f"Distribution bar diameter {output.dist_bar_diameter}mm is less than minimum "
                f"{MIN_SLAB_BAR_DIAMETER}mm"
            )
        return errors, warnings

    def required_thickness(self, inputs: SlabDesignInput, output: SlabDesignOutput) -> float:
        """Thickness needed to fit both covers, both bar layers and a tolerance."""
        return (
            inputs.bottom_cover + output.main_bar_diameter + output.dist_bar_diameter
            + inputs.top_cover + THICKNESS_TOLERANCE
        )

    def check_thickness(
        self, inputs: SlabDesignInput, output: SlabDesignOutput
    ) -> Tuple[List[str], List[str]]:
        """Practical minimum thickness and room for cover plus bars."""
        errors = []

        if inputs.thickness < MIN_SLAB_THICKNESS:
            errors.append(
                f"Slab thickness {inputs.thickness:.0f}mm is less than practical minimum "
                f"{MIN_SLAB_THICKNESS:.0f}mm"
            )

        required = self.required_thickness(inputs, output)
        if inputs.thickness < required:
            errors.append(
                f"Slab thickness {inputs.thickness:.0f}mm is insufficient for cover and "
                f"reinforcement. Minimum required: {required:.0f}mm "
                f"(short by {required - inputs.thickness:.0f}mm)"
            )
        return errors, []
