"""
Slab design orchestrator per IS 456:2000.

Coordinates the complete design workflow:
1. Classification, design moments, required steel, deflection (SlabAnalyzer)
2. Main and distribution bar selection (RebarCalculator)
3. Development length, lap length and cranks (RebarCalculator)
4. Compliance validation (ValidationEngine)

Each stage takes the output of the previous one and returns a new record;
validator findings are merged in last.
"""

from loguru import logger

from rebar_design.codes.base_code import DesignCode
from rebar_design.codes.is456 import IS456
from rebar_design.core.rebar_selector import RebarCalculator
from rebar_design.core.slab_analysis import SlabAnalyzer
from rebar_design.core.validation import ValidationEngine
from rebar_design.models.inputs import SlabDesignInput
from rebar_design.models.outputs import SlabDesignOutput


class SlabDesignEngine:
    """
    Main calculation engine for IS 456 slab design.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or IS456()
        self.analyzer = SlabAnalyzer(self.code)
        self.rebar_calculator = RebarCalculator(self.code)
        self.validator = ValidationEngine(self.code)

    def design(self, inputs: SlabDesignInput) -> SlabDesignOutput:
        """
        Execute the complete slab design workflow.

        Args:
            inputs: SlabDesignInput with all parameters

        Returns:
            SlabDesignOutput; ``errors`` holds validator errors only and
            ``warnings`` accumulates findings from every stage
        """
        output = self.analyzer.analyze(inputs)
        logger.debug("Analysis complete: {} slab, r = {:.3f}",
                     "one-way" if output.is_one_way else "two-way", output.ly_lx_ratio)

        output = self.rebar_calculator.calculate_main_bars(inputs, output)
        output = self.rebar_calculator.calculate_distribution_bars(inputs, output)
        logger.debug("Bars selected: {}", output.reinforcement_summary)

        output = self.rebar_calculator.calculate_development_length(inputs, output)
        output = self.rebar_calculator.apply_cranks(inputs, output)

        validation = self.validator.validate(inputs, output)
        output = output.model_copy(update={
            "warnings": [*output.warnings, *validation.warnings],
            "errors": [*output.errors, *validation.errors],
        })
        logger.debug("Validation: {} errors, {} warnings",
                     len(output.errors), len(output.warnings))
        return output


def design_slab(inputs: SlabDesignInput, code: DesignCode = None) -> SlabDesignOutput:
    """Run the full slab pipeline with a fresh engine."""
    return SlabDesignEngine(code).design(inputs)
