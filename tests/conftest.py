"""Shared slab inputs for the design tests."""
import pytest

from rebar_design.core.pipeline import design_slab
from rebar_design.models.inputs import SlabDesignInput, SupportType


@pytest.fixture(scope="session")
def large_slab():
    """10 m x 15 m panel, 150 mm thick, LL 3 kN/m², M25/Fe415, simply supported."""
    return SlabDesignInput(
        length=10000,
        width=15000,
        thickness=150,
        live_load=3.0,
        concrete_grade="M25",
        steel_grade="Fe415",
    )


@pytest.fixture(scope="session")
def office_slab():
    """4 m x 5 m panel, 150 mm thick, LL 5 kN/m², M25/Fe415, simply supported."""
    return SlabDesignInput(
        length=5000,
        width=4000,
        thickness=150,
        live_load=5.0,
        concrete_grade="M25",
        steel_grade="Fe415",
    )


@pytest.fixture(scope="session")
def fixed_slab():
    """Same panel as office_slab with fixed edges."""
    return SlabDesignInput(
        length=5000,
        width=4000,
        thickness=150,
        live_load=5.0,
        support_type=SupportType.FIXED,
    )


@pytest.fixture(scope="session")
def large_design(large_slab):
    return design_slab(large_slab)


@pytest.fixture(scope="session")
def office_design(office_slab):
    return design_slab(office_slab)
