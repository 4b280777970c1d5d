"""
IS 456:2000 code provisions for reinforced concrete design.

Key clauses implemented:
- Clause 23.2: Span/depth ratios (deflection control)
- Clause 26.2: Development length and lap length
- Clause 26.3.3: Maximum bar spacing in slabs
- Clause 26.5.1 / 26.5.2 / 26.5.3: Minimum and maximum reinforcement
- Clause 38: Limit state of collapse - Flexure
- Clause 40: Limit state of collapse - Shear
- Table 19: Design shear strength of concrete
- Table 20: Maximum shear stress
- Table 21: Design bond stress
- Table 26: Bending moment coefficients for two-way slabs

Every table is an immutable mapping.  Stepped tables are evaluated with
``numpy.searchsorted`` so each breakpoint can be tested on its own.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Sequence

import numpy as np

from .base_code import DesignCode


def _grade_key(grade) -> str:
    """Accept enum members or their string values."""
    return getattr(grade, "value", grade)


def step_up(x: float, breakpoints: Sequence[float], values: Sequence[float]) -> float:
    """Value of the first breakpoint that is >= x.

    ``values`` has one more entry than ``breakpoints``; the last entry applies
    beyond the final breakpoint.
    """
    idx = int(np.searchsorted(breakpoints, x, side="left"))
    return float(values[idx])


def step_down(x: float, breakpoints: Sequence[float], values: Sequence[float]) -> float:
    """Value at the largest breakpoint that is <= x (first value below range)."""
    idx = int(np.searchsorted(breakpoints, x, side="right")) - 1
    return float(values[max(idx, 0)])


class IS456(DesignCode):
    """
    IS 456:2000 - Indian Standard for Plain and Reinforced Concrete.
    Code of Practice for Plain and Reinforced Concrete (Fourth Revision).
    """

    CONCRETE_STRENGTH: Mapping[str, float] = MappingProxyType({
        "M20": 20.0,
        "M25": 25.0,
        "M30": 30.0,
        "M35": 35.0,
        "M40": 40.0,
        "M45": 45.0,
        "M50": 50.0,
    })

    STEEL_STRENGTH: Mapping[str, float] = MappingProxyType({
        "Fe415": 415.0,
        "Fe500": 500.0,
        "Fe550": 550.0,
    })

    # Table 21 design bond stress τbd (N/mm²), upper-bound fck breakpoints.
    # Above the last breakpoint BOND_STRESS_ABOVE applies.
    BOND_STRESS_FCK = (20.0, 25.0, 30.0, 35.0, 40.0)
    BOND_STRESS_VALUES = (1.2, 1.4, 1.5, 1.7, 1.9, 2.0)

    # One-way slab coefficients (positive, negative) of w·lx²
    ONE_WAY_MOMENT_COEFFICIENTS: Mapping[str, tuple] = MappingProxyType({
        "simple": (0.125, 0.0),
        "fixed": (0.0833, 0.0833),
        "continuous": (0.0625, 0.0833),
    })

    # Table 26 (simplified): coefficient of w·lx² for ly/lx up to each breakpoint
    TWO_WAY_RATIOS = (1.0, 1.1, 1.2, 1.3, 1.4, 1.5, 1.75)
    TWO_WAY_SHORT_SPAN = (0.032, 0.037, 0.043, 0.047, 0.051, 0.055, 0.061, 0.065)
    TWO_WAY_LONG_SPAN = (0.032, 0.028, 0.024, 0.021, 0.018, 0.016, 0.013, 0.011)

    # Ratio of support (negative) to span (positive) moment in two-way slabs
    NEGATIVE_MOMENT_FACTOR = 1.33

    # Clause 23.2.1: basic span/depth ratio and support modification factors
    BASIC_SPAN_DEPTH_RATIO = 20.0
    DEFLECTION_MODIFICATION: Mapping[str, float] = MappingProxyType({
        "simple": 1.0,
        "fixed": 1.5,
        "continuous": 1.3,
    })

    # Table 19: Design shear strength of concrete τc (N/mm²)
    SHEAR_STRENGTH_PT = (0.15, 0.25, 0.50, 0.75, 1.00, 1.25, 1.50, 1.75, 2.00, 2.25, 2.50, 2.75, 3.00)
    SHEAR_STRENGTH_TABLE: Mapping[int, tuple] = MappingProxyType({
        # fck: τc values for each pt
        15: (0.28, 0.35, 0.46, 0.54, 0.60, 0.64, 0.68, 0.71, 0.71, 0.71, 0.71, 0.71, 0.71),
        20: (0.28, 0.36, 0.48, 0.56, 0.62, 0.67, 0.72, 0.75, 0.79, 0.81, 0.82, 0.82, 0.82),
        25: (0.29, 0.36, 0.49, 0.57, 0.64, 0.70, 0.74, 0.78, 0.82, 0.85, 0.88, 0.90, 0.92),
        30: (0.29, 0.37, 0.50, 0.59, 0.66, 0.71, 0.76, 0.80, 0.84, 0.88, 0.91, 0.94, 0.96),
        35: (0.29, 0.37, 0.50, 0.59, 0.67, 0.73, 0.78, 0.82, 0.86, 0.90, 0.93, 0.96, 0.99),
        40: (0.30, 0.38, 0.51, 0.60, 0.68, 0.74, 0.79, 0.84, 0.88, 0.92, 0.95, 0.98, 1.01),
    })

    # Table 20: Maximum shear stress τc,max (N/mm²)
    MAX_SHEAR_STRESS: Mapping[int, float] = MappingProxyType({
        15: 2.5,
        20: 2.8,
        25: 3.1,
        30: 3.5,
        35: 3.7,
        40: 4.0,
    })

    # xu_max/d values for different steel grades (Clause 38.1, Note)
    XU_MAX_RATIO: Mapping[int, float] = MappingProxyType({
        250: 0.53,
        415: 0.48,
        500: 0.46,
        550: 0.44,
    })

    # Limiting moment coefficient Mu,lim = 0.138·fck·b·d² (Fe415, Annex G)
    LIMITING_MOMENT_COEFFICIENT = 0.138

    @property
    def code_name(self) -> str:
        return "IS 456:2000"

    def get_partial_safety_factors(self) -> Dict[str, float]:
        """
        Partial safety factors per IS 456.

        Clause 36.4.2: Partial safety factors for materials
        - Concrete: γm = 1.5
        - Steel: γm = 1.15

        Table 18: Partial safety factors for loads
        - Dead load: γf = 1.5
        - Live load: γf = 1.5
        """
        return {
            'gamma_c': 1.5,
            'gamma_s': 1.15,
            'gamma_f_dead': 1.5,
            'gamma_f_live': 1.5,
        }

    def get_concrete_strength(self, grade) -> float:
        """
        Characteristic cube strength for a concrete grade.

        Raises:
            ValueError: If the grade is not one of M20 ... M50
        """
        key = _grade_key(grade)
        try:
            return self.CONCRETE_STRENGTH[key]
        except KeyError:
            raise ValueError(f"Unknown concrete grade: {key!r}") from None

    def get_steel_strength(self, grade) -> float:
        """
        Characteristic yield strength for a steel grade.

        Raises:
            ValueError: If the grade is not Fe415, Fe500 or Fe550
        """
        key = _grade_key(grade)
        try:
            return self.STEEL_STRENGTH[key]
        except KeyError:
            raise ValueError(f"Unknown steel grade: {key!r}") from None

    def get_bond_stress(self, fck: float) -> float:
        """
        Design bond stress per Table 21.

        Stepped on upper-bound breakpoints: M20 and below 1.2, up to M25 1.4,
        up to M30 1.5, up to M35 1.7, up to M40 1.9, beyond 2.0.
        """
        return step_up(fck, self.BOND_STRESS_FCK, self.BOND_STRESS_VALUES)

    def get_one_way_moment_coefficient(self, support_type, positive: bool) -> float:
        """
        Bending moment coefficient for one-way slabs.

        Args:
            support_type: 'simple', 'fixed' or 'continuous'
            positive: True for span moment, False for support moment
        """
        key = _grade_key(support_type)
        pos, neg = self.ONE_WAY_MOMENT_COEFFICIENTS.get(key, (0.125, 0.0))
        return pos if positive else neg

    def get_two_way_moment_coefficient(self, ly_lx_ratio: float, short_span: bool) -> float:
        """
        Bending moment coefficient for two-way slabs (Table 26, simplified).

        The coefficient is stepped, not interpolated: the value listed for
        the first ratio breakpoint that is >= ly/lx is used, and ratios above
        1.75 take the final value.
        """
        values = self.TWO_WAY_SHORT_SPAN if short_span else self.TWO_WAY_LONG_SPAN
        return step_up(ly_lx_ratio, self.TWO_WAY_RATIOS, values)

    def get_deflection_modification_factor(self, support_type) -> float:
        """Support-condition multiplier on the basic span/depth ratio."""
        return self.DEFLECTION_MODIFICATION.get(_grade_key(support_type), 1.0)

    def get_span_depth_ratio(self, support_type) -> float:
        """
        Allowable span/effective depth ratio per Clause 23.2.1.

        Args:
            support_type: 'simple', 'fixed', 'continuous'

        Returns:
            20 × support modification factor
        """
        return self.BASIC_SPAN_DEPTH_RATIO * self.get_deflection_modification_factor(support_type)

    def get_minimum_reinforcement_ratio(self, fy: float) -> float:
        """
        Minimum slab reinforcement per Clause 26.5.2.1.

        0.12% of gross area for HYSD bars, 0.15% for mild steel.

        Returns:
            Minimum reinforcement ratio as percentage
        """
        return 0.15 if fy <= 250 else 0.12

    def get_maximum_reinforcement_ratio(self) -> float:
        """
        Maximum reinforcement per Clause 26.5.1.1(b).

        Returns:
            Maximum reinforcement ratio as percentage (4.0%)
        """
        return 4.0

    def get_column_steel_limits(self) -> tuple:
        """Longitudinal column steel limits (Clause 26.5.3.1) as fractions of Ag."""
        return 0.008, 0.06

    def get_main_spacing_cap(self, thickness: float) -> float:
        """Clause 26.3.3(b)(1): main bars at most min(3D, 300 mm)."""
        return min(3 * thickness, 300.0)

    def get_distribution_spacing_cap(self, thickness: float) -> float:
        """Clause 26.3.3(b)(2): distribution bars at most min(5D, 450 mm)."""
        return min(5 * thickness, 450.0)

    def get_shear_strength_concrete(self, pt: float, fck: float) -> float:
        """
        Design shear strength of concrete per Table 19.

        Stepped on pt: the value at the largest tabulated pt not exceeding
        the actual pt is used (conservative), and pt below 0.15 takes the
        first value.  The fck row is the highest tabulated grade not above
        fck (M15 row below, M40 row above the table).

        Args:
            pt: Percentage of tension reinforcement (100*As/bd)
            fck: Characteristic compressive strength of concrete (MPa)

        Returns:
            τc in MPa (N/mm²)
        """
        fck_values = sorted(self.SHEAR_STRENGTH_TABLE.keys())

        if fck <= fck_values[0]:
            fck_use = fck_values[0]
        elif fck >= fck_values[-1]:
            fck_use = fck_values[-1]
        else:
            fck_use = max(f for f in fck_values if f <= fck)

        return step_down(pt, self.SHEAR_STRENGTH_PT, self.SHEAR_STRENGTH_TABLE[fck_use])

    def get_maximum_shear_stress(self, fck: float) -> float:
        """
        Maximum shear stress per Table 20.

        Args:
            fck: Characteristic compressive strength (MPa)

        Returns:
            τc,max in MPa
        """
        fck_values = sorted(self.MAX_SHEAR_STRESS.keys())
        tau_values = [self.MAX_SHEAR_STRESS[f] for f in fck_values]
        return float(np.interp(fck, fck_values, tau_values))

    def get_xu_max_ratio(self, fy: float) -> float:
        """
        Get xu_max/d ratio for limiting neutral axis depth.

        Clause 38.1, Note: For ductile behavior (under-reinforced section),
        xu <= xu_max where xu_max/d depends on steel grade.

        Args:
            fy: Steel yield strength in MPa

        Returns:
            xu_max/d ratio
        """
        fy_values = sorted(self.XU_MAX_RATIO.keys())
        ratios = [self.XU_MAX_RATIO[f] for f in fy_values]
        return float(np.interp(fy, fy_values, ratios))
