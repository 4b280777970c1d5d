# Core calculation engine
from .beam_design import BeamDesigner
from .column_design import ColumnDesigner
from .flexure import FlexureDesigner
from .pattern_recognition import Opening, PatternRecognition
from .pipeline import SlabDesignEngine, design_slab
from .rebar_selector import RebarCalculator
from .shear import ShearDesigner
from .slab_analysis import SlabAnalyzer
from .validation import ValidationEngine
