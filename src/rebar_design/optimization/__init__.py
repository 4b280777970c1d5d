# Reinforcement layout optimization
from .cost import CostModel, CostRates
from .genetic import (
    AlternativeDesign, OptimizationEngine, OptimizationError, OptimizationResult,
    OptimizerSettings, RebarSolution
)
