"""Parse and validate YAML design files.

A design file names one element kind and carries the fields of the matching
input model::

    element: slab            # slab | beam | column | shape
    input:
      length: 4000
      ...
    optimizer:               # optional, slab only
      generations: 50
    costs:                   # optional, slab only
      steel_rate: 65
    openings:                # optional, slab and shape
      - {id: O1, size: 600}
    boundary:                # required for shape
      - [0, 0]
      - [6000, 0]
      ...

Field values are validated by the pydantic input models; every problem found
is reported together in one ``InputError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ValidationError

from rebar_design.core.pattern_recognition import Opening
from rebar_design.models.inputs import BeamDesignInput, ColumnDesignInput, SlabDesignInput
from rebar_design.optimization.cost import CostRates
from rebar_design.optimization.genetic import OptimizerSettings


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

INPUT_MODELS: dict[str, type[BaseModel]] = {
    "slab": SlabDesignInput,
    "beam": BeamDesignInput,
    "column": ColumnDesignInput,
}

ELEMENT_KINDS = (*INPUT_MODELS, "shape")

_TOP_LEVEL_KEYS = {"element", "input", "optimizer", "costs", "openings", "boundary"}


class InputError(Exception):
    """Raised when the YAML input is invalid or incomplete."""


@dataclass
class DesignRequest:
    """Everything a design file asks for."""
    element: str
    model: Optional[BaseModel] = None
    optimizer: Optional[OptimizerSettings] = None
    costs: Optional[CostRates] = None
    openings: list[Opening] = field(default_factory=list)
    boundary: list[tuple[float, float]] = field(default_factory=list)


def _format_validation_error(section: str, exc: ValidationError) -> list[str]:
    """One message per pydantic error, prefixed with the YAML section."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        path = f"{section}.{location}" if location else section
        messages.append(f"{path}: {err['msg']}")
    return messages


def _build(model: type[BaseModel], data: Any, section: str, errors: list[str]):
    """Construct *model* from *data*, collecting problems into *errors*."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        errors.append(f"{section}: must be a mapping, got {type(data).__name__}")
        return None
    try:
        return model(**data)
    except ValidationError as exc:
        errors.extend(_format_validation_error(section, exc))
        return None


def _parse_openings(raw: Any, errors: list[str]) -> list[Opening]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        errors.append("openings: must be a list of {id, size} mappings")
        return []
    openings = []
    for i, entry in enumerate(raw):
        opening = _build(Opening, entry, f"openings[{i}]", errors)
        if opening is not None:
            openings.append(opening)
    return openings


def _parse_boundary(raw: Any, errors: list[str]) -> list[tuple[float, float]]:
    """Ensure the boundary is a list of ``[x, y]`` pairs."""
    if not isinstance(raw, list) or len(raw) == 0:
        errors.append("boundary: must be a non-empty list of [x, y] pairs")
        return []
    points: list[tuple[float, float]] = []
    for i, pair in enumerate(raw):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            errors.append(f"boundary[{i}]: each entry must be [x, y], got {pair!r}")
            continue
        try:
            points.append((float(pair[0]), float(pair[1])))
        except (TypeError, ValueError):
            errors.append(f"boundary[{i}]: coordinates must be numeric, got {pair!r}")
    return points


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_data(raw: Any) -> DesignRequest:
    """Validate an already-loaded YAML document.

    Raises
    ------
    InputError
        If validation fails (the message lists every problem found).
    """
    if not isinstance(raw, dict):
        raise InputError("YAML root must be a mapping (dict)")

    errors: list[str] = []

    unknown = sorted(set(raw) - _TOP_LEVEL_KEYS)
    if unknown:
        errors.append(f"Unknown top-level keys: {', '.join(unknown)}")

    element = raw.get("element")
    if element not in ELEMENT_KINDS:
        errors.append(
            f"element: must be one of {', '.join(ELEMENT_KINDS)}, got {element!r}"
        )
        raise InputError("\n".join(errors))

    request = DesignRequest(element=element)

    if element in INPUT_MODELS:
        if "input" not in raw:
            errors.append("Missing required section: input")
        else:
            request.model = _build(INPUT_MODELS[element], raw["input"], "input", errors)

    if element == "slab":
        if "optimizer" in raw:
            request.optimizer = _build(OptimizerSettings, raw["optimizer"], "optimizer", errors)
        if "costs" in raw:
            request.costs = _build(CostRates, raw["costs"], "costs", errors)
    else:
        for key in ("optimizer", "costs"):
            if key in raw:
                errors.append(f"{key}: only supported for slab designs")

    if element in ("slab", "shape"):
        request.openings = _parse_openings(raw.get("openings"), errors)
    elif "openings" in raw:
        errors.append("openings: only supported for slab and shape designs")

    if element == "shape":
        request.boundary = _parse_boundary(raw.get("boundary"), errors)
    elif "boundary" in raw:
        errors.append("boundary: only supported for shape designs")

    if errors:
        raise InputError("\n".join(errors))
    return request


def parse_input(yaml_path: str | Path) -> DesignRequest:
    """Read and validate a design YAML file.

    Parameters
    ----------
    yaml_path:
        Filesystem path to the YAML input file.

    Returns
    -------
    DesignRequest
        The element kind with its validated input model and options.

    Raises
    ------
    FileNotFoundError
        If *yaml_path* does not exist.
    InputError
        If the YAML is malformed or validation fails.
    """
    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {yaml_path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise InputError(f"YAML syntax error: {exc}") from exc

    return parse_data(raw)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_TEMPLATES: dict[str, str] = {
    "slab": """\
# Two-way slab panel, IS 456:2000
element: slab

input:
  length: 5000                  # mm
  width: 4000                   # mm
  thickness: 150                # mm
  dead_load: 0.0                # kN/m2, superimposed
  live_load: 5.0                # kN/m2
  floor_finish_load: 1.0        # kN/m2
  concrete_grade: M25           # M20 ... M50
  steel_grade: Fe415            # Fe415 | Fe500 | Fe550
  top_cover: 25                 # mm
  bottom_cover: 25              # mm
  side_cover: 25                # mm
  preferred_bar_diameters: [10, 12, 16, 20]
  min_bar_spacing: 100          # mm
  max_bar_spacing: 300          # mm
  support_type: simple          # simple | fixed | continuous

optimizer:
  population_size: 50
  generations: 100
  mutation_rate: 0.1

costs:
  steel_rate: 60                # INR/kg
  labour_rate: 5                # INR per bar

openings:
  - id: O1
    size: 600                   # mm
""",
    "beam": """\
# Simply supported rectangular beam, IS 456:2000
element: beam

input:
  span: 6.0                     # m
  width: 300                    # mm
  depth: 500                    # mm
  dead_load: 15.0               # kN/m
  live_load: 10.0               # kN/m
  cover: 25                     # mm
  compression_cover: 50         # mm, d'
  concrete_grade: M25
  steel_grade: Fe415
""",
    "column": """\
# Axially loaded rectangular column, IS 456:2000
element: column

input:
  width: 400                    # mm
  depth: 400                    # mm
  unbraced_length: 3000         # mm
  axial_load: 1500              # kN, service
  moment_x: 0                   # kNm, service
  moment_y: 0                   # kNm, service
  cover: 40                     # mm
  effective_length_factor: 1.0
  concrete_grade: M25
  steel_grade: Fe415
""",
    "shape": """\
# Slab boundary classification and opening trimmers
element: shape

boundary:                       # mm, either winding
  - [0, 0]
  - [6000, 0]
  - [6000, 3000]
  - [3000, 3000]
  - [3000, 6000]
  - [0, 6000]

openings:
  - id: O1
    size: 450
  - id: O2
    size: 1800
""",
}


def generate_template(element: str = "slab") -> str:
    """Return a sample YAML input for *element* as a string.

    The returned text is ready to be written to a file and edited by the
    user.
    """
    try:
        return _TEMPLATES[element]
    except KeyError:
        raise InputError(
            f"No template for {element!r}; choose one of {', '.join(_TEMPLATES)}"
        ) from None
