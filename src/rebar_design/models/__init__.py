# Data models for IS 456 element design
from .inputs import (
    SlabDesignInput, BeamDesignInput, ColumnDesignInput,
    ConcreteGrade, SteelGrade, SupportType
)
from .outputs import (
    SlabDesignOutput, BeamDesignOutput, ColumnDesignOutput,
    ValidationResult, CrankDetails, CalculationStep, DesignStatus
)
