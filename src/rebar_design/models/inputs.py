"""
Input data models for IS 456 element design using Pydantic for validation.

Inputs are frozen: one analysis run owns its input and never changes it.
Range checks are deliberately loose (positive dimensions, non-negative loads)
so that non-conforming designs still reach the compliance validator, which
reports them as errors instead of rejecting them at construction time.
Only sections with no usable effective depth are refused outright.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rebar_design.codes.is456 import IS456
from rebar_design.utils.constants import ASSUMED_BAR_ALLOWANCE

_CODE = IS456()


class ConcreteGrade(str, Enum):
    """Available concrete grades per IS 456."""
    M20 = "M20"
    M25 = "M25"
    M30 = "M30"
    M35 = "M35"
    M40 = "M40"
    M45 = "M45"
    M50 = "M50"


class SteelGrade(str, Enum):
    """Available steel grades."""
    FE415 = "Fe415"
    FE500 = "Fe500"
    FE550 = "Fe550"


class SupportType(str, Enum):
    """Slab edge support condition."""
    SIMPLE = "simple"
    FIXED = "fixed"
    CONTINUOUS = "continuous"


class _MaterialMixin(BaseModel):
    """Concrete and steel grade with derived strengths."""

    concrete_grade: ConcreteGrade = ConcreteGrade.M25
    steel_grade: SteelGrade = SteelGrade.FE415

    @property
    def fck(self) -> float:
        """Characteristic compressive strength in MPa."""
        return _CODE.get_concrete_strength(self.concrete_grade)

    @property
    def fy(self) -> float:
        """Characteristic yield strength in MPa."""
        return _CODE.get_steel_strength(self.steel_grade)


class SlabDesignInput(_MaterialMixin):
    """Complete input model for a rectangular slab panel.

    Plan dimensions and thickness in mm, area loads in kN/m².
    """
    model_config = ConfigDict(frozen=True)

    # Dimensions
    length: float = Field(..., gt=0, description="Panel length in mm")
    width: float = Field(..., gt=0, description="Panel width in mm")
    thickness: float = Field(..., gt=0, description="Overall slab thickness in mm")

    # Loads (self weight is added by the analyzer)
    dead_load: float = Field(
        default=0.0,
        ge=0,
        description="Superimposed dead load in kN/m²"
    )
    live_load: float = Field(..., ge=0, description="Imposed load in kN/m²")
    floor_finish_load: float = Field(
        default=1.0,
        ge=0,
        description="Floor finish load in kN/m²"
    )

    # Cover requirements
    top_cover: float = Field(default=25, gt=0, description="Top clear cover in mm")
    bottom_cover: float = Field(default=25, gt=0, description="Bottom clear cover in mm")
    side_cover: float = Field(default=25, gt=0, description="Side clear cover in mm")

    # Design preferences
    preferred_bar_diameters: List[int] = Field(
        default=[10, 12, 16, 20],
        min_length=1,
        description="Candidate main bar diameters in mm"
    )
    max_bar_spacing: float = Field(default=300, gt=0, description="Maximum bar spacing in mm")
    min_bar_spacing: float = Field(default=100, gt=0, description="Minimum bar spacing in mm")

    support_type: SupportType = SupportType.SIMPLE

    @field_validator("preferred_bar_diameters")
    @classmethod
    def _positive_diameters(cls, value: List[int]) -> List[int]:
        if any(d <= 0 for d in value):
            raise ValueError("bar diameters must be positive")
        return sorted(set(value))

    @model_validator(mode="after")
    def _spacing_band(self) -> "SlabDesignInput":
        if self.min_bar_spacing > self.max_bar_spacing:
            raise ValueError(
                f"min_bar_spacing ({self.min_bar_spacing}) exceeds "
                f"max_bar_spacing ({self.max_bar_spacing})"
            )
        if self.effective_depth <= 0:
            raise ValueError(
                f"thickness ({self.thickness}) leaves no effective depth below "
                f"{self.bottom_cover} mm cover and a {ASSUMED_BAR_ALLOWANCE:.0f} mm bar"
            )
        return self

    @property
    def lx(self) -> float:
        """Short span in mm."""
        return min(self.length, self.width)

    @property
    def ly(self) -> float:
        """Long span in mm."""
        return max(self.length, self.width)

    @property
    def effective_depth(self) -> float:
        """Effective depth assuming a 10 mm bar below the cover (mm)."""
        return self.thickness - self.bottom_cover - ASSUMED_BAR_ALLOWANCE


class BeamDesignInput(_MaterialMixin):
    """Simply supported rectangular beam under uniform load."""
    model_config = ConfigDict(frozen=True)

    span: float = Field(..., gt=0, description="Effective span in meters")
    width: float = Field(..., gt=0, description="Beam width b in mm")
    depth: float = Field(..., gt=0, description="Overall depth D in mm")
    dead_load: float = Field(..., ge=0, description="Dead load in kN/m")
    live_load: float = Field(..., ge=0, description="Live load in kN/m")
    cover: float = Field(default=25, gt=0, description="Clear cover in mm")
    compression_cover: float = Field(
        default=50,
        gt=0,
        description="Depth to compression steel centroid d' in mm"
    )

    @model_validator(mode="after")
    def _compression_steel_below_d(self) -> "BeamDesignInput":
        if self.effective_depth <= self.compression_cover:
            raise ValueError(
                f"effective depth ({self.effective_depth:.0f} mm) must exceed "
                f"compression_cover ({self.compression_cover} mm)"
            )
        return self

    @property
    def effective_depth(self) -> float:
        """Effective depth d in mm."""
        return self.depth - self.cover - ASSUMED_BAR_ALLOWANCE


class ColumnDesignInput(_MaterialMixin):
    """Rectangular column under axial load."""
    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0, description="Column width in mm")
    depth: float = Field(..., gt=0, description="Column depth in mm")
    unbraced_length: float = Field(..., gt=0, description="Unsupported length in mm")
    axial_load: float = Field(..., ge=0, description="Service axial load in kN")
    moment_x: float = Field(default=0.0, description="Service moment about x in kNm")
    moment_y: float = Field(default=0.0, description="Service moment about y in kNm")
    cover: float = Field(default=40, gt=0, description="Clear cover in mm")
    effective_length_factor: float = Field(
        default=1.0,
        gt=0,
        description="Effective length ratio (1.0 = both ends hinged)"
    )

    @property
    def gross_area(self) -> float:
        """Gross cross-section area Ag in mm²."""
        return self.width * self.depth

    @property
    def least_dimension(self) -> float:
        """Least lateral dimension in mm."""
        return min(self.width, self.depth)
