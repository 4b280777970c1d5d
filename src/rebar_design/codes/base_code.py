"""
Lookup interface shared by the slab, beam and column analyzers.
Analyzers receive a code object instead of importing tables directly.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple


class DesignCode(ABC):
    """
    Tables and limits an element analyzer needs from a design code.

    Grades may be passed as enum members or plain strings ("M25", "Fe415").
    Support types likewise accept ``SupportType`` or its string value.
    """

    @property
    @abstractmethod
    def code_name(self) -> str:
        """Code designation, e.g. ``"IS 456:2000"``."""

    @abstractmethod
    def get_partial_safety_factors(self) -> Dict[str, float]:
        """γm for concrete and steel plus γf for dead and live load."""

    # -- materials ----------------------------------------------------------

    @abstractmethod
    def get_concrete_strength(self, grade) -> float:
        """fck in MPa."""

    @abstractmethod
    def get_steel_strength(self, grade) -> float:
        """fy in MPa."""

    @abstractmethod
    def get_bond_stress(self, fck: float) -> float:
        """τbd in MPa for deformed bars in tension."""

    # -- slab analysis ------------------------------------------------------

    @abstractmethod
    def get_one_way_moment_coefficient(self, support_type, positive: bool) -> float:
        """α in M = α·w·l² for a one-way strip."""

    @abstractmethod
    def get_two_way_moment_coefficient(self, ly_lx_ratio: float, short_span: bool) -> float:
        """αx (short_span=True) or αy for a panel."""

    @abstractmethod
    def get_deflection_modification_factor(self, support_type) -> float:
        """Tension steel modification factor applied to the basic L/d."""

    @abstractmethod
    def get_span_depth_ratio(self, support_type) -> float:
        """Basic allowable span/effective depth."""

    @abstractmethod
    def get_main_spacing_cap(self, thickness: float) -> float:
        """Upper bound on main bar spacing in mm."""

    @abstractmethod
    def get_distribution_spacing_cap(self, thickness: float) -> float:
        """Upper bound on distribution bar spacing in mm."""

    # -- reinforcement limits -----------------------------------------------

    @abstractmethod
    def get_minimum_reinforcement_ratio(self, fy: float) -> float:
        """Minimum steel as a percentage of the gross section."""

    @abstractmethod
    def get_maximum_reinforcement_ratio(self) -> float:
        """Maximum steel as a percentage of the gross section."""

    @abstractmethod
    def get_column_steel_limits(self) -> Tuple[float, float]:
        """(min, max) longitudinal column steel as fractions of Ag."""

    # -- shear and flexure --------------------------------------------------

    @abstractmethod
    def get_shear_strength_concrete(self, pt: float, fck: float) -> float:
        """τc for a tension steel percentage pt."""

    @abstractmethod
    def get_maximum_shear_stress(self, fck: float) -> float:
        """τc,max; above this the section must be resized."""

    @abstractmethod
    def get_xu_max_ratio(self, fy: float) -> float:
        """Limiting neutral axis depth ratio xu,max/d."""
