"""
Rule-based classification of slab boundaries and openings.

Sorts a boundary polygon into coarse categories (rectangular, L, T,
irregular) from its vertex count and interior angles, emits layout guidance
for each category, and sizes trimmer bars around openings by size bracket.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from rebar_design.utils.geometry import as_vertex_array, interior_angles


RIGHT_ANGLE_TOLERANCE_RECT = 1.0  # degrees
RIGHT_ANGLE_TOLERANCE_L = 5.0  # degrees


class ShapeType(str, Enum):
    RECTANGULAR = "rectangular"
    L_SHAPE = "l_shape"
    T_SHAPE = "t_shape"
    IRREGULAR = "irregular"


class ComplexityLevel(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class IrregularShapeAnalysis(BaseModel):
    """Classification of a slab boundary."""
    model_config = ConfigDict(frozen=True)

    shape_type: ShapeType
    complexity: ComplexityLevel
    vertex_count: int
    interior_angles: List[float] = []
    suggested_approach: str = ""


class RebarLayoutSuggestion(BaseModel):
    """Textual layout guidance for a shape category."""
    model_config = ConfigDict(frozen=True)

    main_direction: str
    distribution_direction: str
    special_requirements: List[str] = []


class Opening(BaseModel):
    """Opening or penetration in a slab."""
    model_config = ConfigDict(frozen=True)

    id: str
    size: float = Field(..., gt=0, description="Largest plan dimension in mm")
    center: Optional[Tuple[float, float]] = None


class OpeningReinforcement(BaseModel):
    """Trimmer bars framing one opening."""
    model_config = ConfigDict(frozen=True)

    opening_id: str
    size: float  # mm
    trimmer_bars_required: bool = True
    trimmer_bar_diameter: int
    trimmer_bar_count: int
    additional_length: float  # mm
    notes: str = ""
    requires_detailed_analysis: bool = False


# Size brackets: (upper bound exclusive, diameter, count, extension, note, detailed)
OPENING_BRACKETS = (
    (500.0, 12, 2, 600.0, "Provide trimmer bars on both sides of opening", False),
    (1500.0, 16, 4, 1000.0,
     "Provide double trimmer bars. Check if additional analysis needed.", False),
    (float("inf"), 20, 6, 1500.0,
     "Large opening - requires detailed analysis. Consider edge beams.", True),
)

LAYOUT_SUGGESTIONS = {
    ShapeType.RECTANGULAR: RebarLayoutSuggestion(
        main_direction="Along shorter span",
        distribution_direction="Along longer span",
    ),
    ShapeType.L_SHAPE: RebarLayoutSuggestion(
        main_direction="Divide into two panels",
        distribution_direction="Perpendicular in each panel",
        special_requirements=[
            "Add extra bars at re-entrant corner",
            "Provide diagonal bars at corner (45°)",
            "Ensure proper anchorage at panel junction",
        ],
    ),
    ShapeType.T_SHAPE: RebarLayoutSuggestion(
        main_direction="Along each wing",
        distribution_direction="Perpendicular to main bars",
        special_requirements=[
            "Add extra reinforcement at T-junction",
            "Ensure continuity of bars across junction",
            "Consider torsion at junction",
        ],
    ),
    ShapeType.IRREGULAR: RebarLayoutSuggestion(
        main_direction="Radial from center or along principal axes",
        distribution_direction="Circumferential or perpendicular",
        special_requirements=[
            "Use mesh reinforcement for very irregular shapes",
            "Provide additional bars at acute corners",
            "Consider using FEA for accurate design",
        ],
    ),
}


def _near(angle: float, target: float, tolerance: float) -> bool:
    return abs(angle - target) <= tolerance


class PatternRecognition:
    """
    Classifies slab boundaries and sizes opening trimmers.

    Stateless; all methods are deterministic functions of their arguments.
    """

    def detect_irregular_shapes(self, boundary: Sequence[Sequence[float]]) -> IrregularShapeAnalysis:
        """
        Classify a closed boundary polygon.

        Args:
            boundary: Ordered (x, y) vertices in mm, either winding; a final
                vertex repeating the first is ignored

        Returns:
            IrregularShapeAnalysis

        Raises:
            ValueError: If fewer than 3 distinct vertices are given
        """
        pts = as_vertex_array(boundary)
        angles = interior_angles(boundary)
        n = len(pts)

        if self.is_rectangular(angles):
            shape, complexity, approach = (
                ShapeType.RECTANGULAR, ComplexityLevel.SIMPLE,
                "Design as a single rectangular panel",
            )
        elif self.is_l_shape(angles):
            shape, complexity, approach = (
                ShapeType.L_SHAPE, ComplexityLevel.MODERATE,
                "Divide into two rectangular panels and design separately",
            )
        elif self.is_t_shape(angles):
            shape, complexity, approach = (
                ShapeType.T_SHAPE, ComplexityLevel.MODERATE,
                "Divide into rectangular panels at the junction",
            )
        else:
            shape, complexity, approach = (
                ShapeType.IRREGULAR, ComplexityLevel.COMPLEX,
                "Use finite element analysis or divide into simpler shapes",
            )

        return IrregularShapeAnalysis(
            shape_type=shape,
            complexity=complexity,
            vertex_count=n,
            interior_angles=[round(a, 3) for a in angles],
            suggested_approach=approach,
        )

    @staticmethod
    def is_rectangular(angles: Sequence[float]) -> bool:
        """Four corners, each within 1° of a right angle."""
        return len(angles) == 4 and all(
            _near(a, 90.0, RIGHT_ANGLE_TOLERANCE_RECT) for a in angles
        )

    @staticmethod
    def is_l_shape(angles: Sequence[float]) -> bool:
        """Six corners: five right angles and one 270° re-entrant corner."""
        if len(angles) != 6:
            return False
        right = sum(1 for a in angles if _near(a, 90.0, RIGHT_ANGLE_TOLERANCE_L))
        reflex = sum(1 for a in angles if _near(a, 270.0, RIGHT_ANGLE_TOLERANCE_L))
        return right == 5 and reflex == 1

    @staticmethod
    def is_t_shape(angles: Sequence[float]) -> bool:
        """Eight corners.

        Vertex count only; any octagonal outline lands here.
        """
        return len(angles) == 8

    def suggest_rebar_layout(self, analysis: IrregularShapeAnalysis) -> RebarLayoutSuggestion:
        """Layout guidance for the classified shape."""
        return LAYOUT_SUGGESTIONS[analysis.shape_type]

    def handle_openings(self, openings: Sequence[Opening]) -> List[OpeningReinforcement]:
        """
        Trimmer bars for each opening, sized by bracket.

        <500 mm: 2-12φ, size+600; 500-1500 mm: 4-16φ, size+1000;
        ≥1500 mm: 6-20φ, size+1500 and flagged for detailed analysis.
        """
        return [self.size_opening(opening) for opening in openings]

    @staticmethod
    def size_opening(opening: Opening) -> OpeningReinforcement:
        for limit, dia, count, extension, note, detailed in OPENING_BRACKETS:
            if opening.size < limit:
                return OpeningReinforcement(
                    opening_id=opening.id,
                    size=opening.size,
                    trimmer_bar_diameter=dia,
                    trimmer_bar_count=count,
                    additional_length=opening.size + extension,
                    notes=note,
                    requires_detailed_analysis=detailed,
                )
        raise ValueError(f"Opening size {opening.size} is not finite")
