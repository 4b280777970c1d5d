"""
Output data models for IS 456 element design results.

Outputs are frozen records.  Pipeline stages never mutate an output; they
return an updated copy (``model_copy(update=...)``), so each stage can be
run and inspected on its own.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DesignStatus(str, Enum):
    """Status of a design check."""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class CalculationStep(BaseModel):
    """Single calculation step for transparency."""
    model_config = ConfigDict(frozen=True)

    step_number: int
    description: str
    formula: str
    substitution: str
    result: float
    unit: str
    code_reference: Optional[str] = None


class CrankDetails(BaseModel):
    """Crank (bent-up bar) geometry at supports."""
    model_config = ConfigDict(frozen=True)

    crank_length: float  # mm
    crank_angle: float  # degrees
    horizontal_projection: float  # mm
    is_required: bool


class ValidationResult(BaseModel):
    """Errors and warnings from the compliance validator."""
    model_config = ConfigDict(frozen=True)

    errors: List[str] = []
    warnings: List[str] = []

    @property
    def is_valid(self) -> bool:
        """A design is valid exactly when no errors were found."""
        return not self.errors


class SlabDesignOutput(BaseModel):
    """Slab analysis and reinforcement design results."""
    model_config = ConfigDict(frozen=True)

    # Slab classification
    is_one_way: bool = False
    is_two_way: bool = False
    ly_lx_ratio: float = 0.0
    lx: float = 0.0  # mm
    ly: float = 0.0  # mm

    # Loads and design moments
    factored_load: float = 0.0  # kN/m²
    positive_moment_x: float = 0.0  # kNm/m
    negative_moment_x: float = 0.0  # kNm/m
    positive_moment_y: float = 0.0  # kNm/m
    negative_moment_y: float = 0.0  # kNm/m

    # Required steel area
    effective_depth: float = 0.0  # mm
    ast_main_bottom: float = 0.0  # mm²/m
    ast_main_top: float = 0.0  # mm²/m
    ast_distribution: float = 0.0  # mm²/m

    # Rebar details - main direction
    main_bar_diameter: int = 0  # mm
    main_bar_spacing: float = 0.0  # mm
    main_bar_count: int = 0

    # Rebar details - distribution direction
    dist_bar_diameter: int = 0  # mm
    dist_bar_spacing: float = 0.0  # mm
    dist_bar_count: int = 0

    # Anchorage
    development_length: float = 0.0  # mm
    lap_length: float = 0.0  # mm
    crank: Optional[CrankDetails] = None

    # Deflection check
    actual_span_depth_ratio: float = 0.0
    allowable_span_depth_ratio: float = 0.0
    deflection_check_passed: bool = False

    # Messages
    warnings: List[str] = []
    errors: List[str] = []
    steps: List[CalculationStep] = []

    @property
    def is_valid(self) -> bool:
        """True when the validator reported no errors."""
        return not self.errors

    @property
    def required_main_steel(self) -> float:
        """Governing main steel demand (mm²/m) the main bars are sized for."""
        return max(self.ast_main_bottom, self.ast_main_top)

    @property
    def reinforcement_summary(self) -> str:
        """Quick summary of reinforcement."""
        return (
            f"Main: {self.main_bar_diameter}φ @ {self.main_bar_spacing:.0f} c/c "
            f"({self.main_bar_count} bars) | "
            f"Distribution: {self.dist_bar_diameter}φ @ {self.dist_bar_spacing:.0f} c/c "
            f"({self.dist_bar_count} bars)"
        )


class BeamDesignOutput(BaseModel):
    """Beam flexure, shear and deflection results."""
    model_config = ConfigDict(frozen=True)

    status: DesignStatus

    # Design forces
    factored_load: float  # kN/m
    max_moment: float  # kNm
    max_shear: float  # kN
    effective_depth: float  # mm
    limiting_moment: float  # Mu,lim in kNm

    # Tension reinforcement
    tension_steel_area: float  # mm²
    tension_bar_diameter: int
    tension_bar_count: int

    # Compression reinforcement
    compression_steel_required: bool = False
    compression_steel_area: float = 0.0  # mm²
    compression_bar_diameter: Optional[int] = None
    compression_bar_count: Optional[int] = None

    # Shear
    nominal_shear_stress: float  # τv in MPa
    concrete_shear_strength: float  # τc in MPa
    max_shear_stress: float  # τc,max in MPa
    stirrup_diameter: int
    stirrup_legs: int = 2
    stirrup_spacing: float  # mm
    shear_reinforcement_note: str = ""

    # Deflection
    actual_span_depth_ratio: float
    allowable_span_depth_ratio: float
    deflection_check_passed: bool

    warnings: List[str] = []
    steps: List[CalculationStep] = []

    @property
    def reinforcement_summary(self) -> str:
        """Quick summary of reinforcement."""
        summary = f"Bottom: {self.tension_bar_count}-{self.tension_bar_diameter}φ"
        if self.compression_steel_required:
            summary += f" | Top: {self.compression_bar_count}-{self.compression_bar_diameter}φ"
        summary += (
            f" | Stirrups: {self.stirrup_legs}L-{self.stirrup_diameter}φ "
            f"@ {self.stirrup_spacing:.0f}mm"
        )
        return summary


class ColumnDesignOutput(BaseModel):
    """Axially loaded column design results."""
    model_config = ConfigDict(frozen=True)

    status: DesignStatus

    # Factored actions
    axial_load: float  # kN
    moment_x: float  # kNm
    moment_y: float  # kNm

    # Longitudinal steel
    gross_area: float  # mm²
    required_steel_area: float  # Asc from the capacity relation (mm², may be negative)
    longitudinal_steel_area: float  # Asc after the 0.8%-6% clamp (mm²)
    longitudinal_bar_diameter: int
    longitudinal_bar_count: int
    provided_steel_area: float  # mm²
    steel_percentage: float  # 100·Asc,provided/Ag

    # Lateral ties
    tie_diameter: int
    tie_spacing: float  # mm

    # Slenderness
    effective_length: float  # mm
    slenderness_ratio: float
    is_short_column: bool
    notes: str = ""

    warnings: List[str] = []
    steps: List[CalculationStep] = []

    @property
    def reinforcement_summary(self) -> str:
        """Quick summary of reinforcement."""
        return (
            f"{self.longitudinal_bar_count}-{self.longitudinal_bar_diameter}φ "
            f"| Ties: {self.tie_diameter}φ @ {self.tie_spacing:.0f}mm"
        )
