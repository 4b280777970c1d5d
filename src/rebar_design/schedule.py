"""
Bar bending schedule data for a designed slab.

Lists each bar mark with its cutting length, count and weight, then totals
steel weight per diameter.  Bars are straight and run the full panel span;
crank and hook allowances are not added to cutting lengths.
"""

from dataclasses import dataclass
from typing import Dict, List

from rebar_design.models.inputs import SlabDesignInput, SupportType
from rebar_design.models.outputs import SlabDesignOutput
from rebar_design.utils.constants import STEEL_DENSITY, bar_area


@dataclass
class BBSEntry:
    """Represents a single line of the bar bending schedule."""
    mark: str              # e.g. "M1", "M2", "D1"
    description: str
    diameter: int          # mm
    shape: str
    length: float          # mm, per bar
    number: int
    total_length: float    # mm
    weight: float          # kg
    spacing: float         # mm c/c


def _make_entry(mark: str, description: str, diameter: int, length: float,
                number: int, spacing: float, shape: str = "Straight") -> BBSEntry:
    total = length * number
    weight = bar_area(diameter) / 1e6 * total / 1000.0 * STEEL_DENSITY
    return BBSEntry(
        mark=mark,
        description=description,
        diameter=diameter,
        shape=shape,
        length=round(length, 0),
        number=number,
        total_length=total,
        weight=weight,
        spacing=spacing,
    )


def build_bar_schedule(inputs: SlabDesignInput, output: SlabDesignOutput) -> List[BBSEntry]:
    """
    Schedule entries for a designed slab.

    Args:
        inputs: SlabDesignInput the design was produced from
        output: SlabDesignOutput with bars selected

    Returns:
        M1 (main, bottom), M2 (main, top; only where supports restrain the
        slab) and D1 (distribution) entries
    """
    lx, ly = inputs.lx, inputs.ly
    shape = "Cranked" if output.crank is not None and output.crank.is_required else "Straight"

    entries = [
        _make_entry("M1", "Main bars, bottom", output.main_bar_diameter, ly,
                    output.main_bar_count, output.main_bar_spacing, shape),
    ]
    if inputs.support_type != SupportType.SIMPLE:
        entries.append(
            _make_entry("M2", "Main bars, top", output.main_bar_diameter, ly,
                        output.main_bar_count, output.main_bar_spacing)
        )
    entries.append(
        _make_entry("D1", "Distribution bars", output.dist_bar_diameter, lx,
                    output.dist_bar_count, output.dist_bar_spacing)
    )
    return entries


def summarise_by_diameter(entries: List[BBSEntry]) -> Dict[int, float]:
    """Total weight (kg) per bar diameter, smallest diameter first."""
    totals: Dict[int, float] = {}
    for entry in entries:
        totals[entry.diameter] = totals.get(entry.diameter, 0.0) + entry.weight
    return dict(sorted(totals.items()))
