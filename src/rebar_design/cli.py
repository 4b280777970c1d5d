"""Command-line interface for IS 456 reinforcement design.

Usage::

    rebar-design run <input_yaml> [--optimize] [--alternatives] [--seed N] [--json] [-v] [--log-file PATH]
    rebar-design validate <input_yaml>
    rebar-design template {slab,beam,column,shape}
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Optional

import click

from rebar_design.core.beam_design import BeamDesigner
from rebar_design.core.column_design import ColumnDesigner
from rebar_design.core.pattern_recognition import PatternRecognition
from rebar_design.core.pipeline import design_slab
from rebar_design.input_parser import (
    ELEMENT_KINDS, DesignRequest, InputError, generate_template, parse_input
)
from rebar_design.logging_setup import configure_logging
from rebar_design.optimization.genetic import OptimizationEngine, OptimizationError
from rebar_design.schedule import build_bar_schedule, summarise_by_diameter


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="rebar-design")
def main():
    """Reinforcement design and optimization per IS 456:2000."""


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _echo_messages(warnings: list[str], errors: Optional[list[str]] = None) -> None:
    for message in warnings:
        click.secho(f"  WARNING: {message}", fg="yellow")
    for message in errors or []:
        click.secho(f"  ERROR: {message}", fg="red")


def _load(input_file: str) -> DesignRequest:
    try:
        return parse_input(Path(input_file))
    except (InputError, FileNotFoundError) as exc:
        click.secho(f"Error parsing input:\n{exc}", fg="red", err=True)
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# Element runners
# ---------------------------------------------------------------------------

def _run_slab(request: DesignRequest, optimize: bool, alternatives: bool,
              seed: Optional[int], as_json: bool) -> dict[str, Any]:
    inputs = request.model
    output = design_slab(inputs)
    schedule = build_bar_schedule(inputs, output)
    openings = PatternRecognition().handle_openings(request.openings)

    results: dict[str, Any] = {
        "element": "slab",
        "design": output.model_dump(mode="json"),
        "is_valid": output.is_valid,
        "schedule": [dataclasses.asdict(e) for e in schedule],
        "steel_by_diameter": summarise_by_diameter(schedule),
        "openings": [o.model_dump(mode="json") for o in openings],
    }

    if not as_json:
        kind = "One-way" if output.is_one_way else "Two-way"
        click.echo(f"\n{kind} slab, ly/lx = {output.ly_lx_ratio:.3f}")
        click.echo(f"  Factored load:      {output.factored_load:.3f} kN/m2")
        click.echo(f"  Mx (+/-):           {output.positive_moment_x:.2f} / "
                   f"{output.negative_moment_x:.2f} kNm/m")
        click.echo(f"  My (+/-):           {output.positive_moment_y:.2f} / "
                   f"{output.negative_moment_y:.2f} kNm/m")
        click.echo(f"  Ast bottom/top:     {output.ast_main_bottom:.0f} / "
                   f"{output.ast_main_top:.0f} mm2/m")
        click.echo(f"  Ast distribution:   {output.ast_distribution:.0f} mm2/m")
        click.echo(f"  {output.reinforcement_summary}")
        click.echo(f"  Ld = {output.development_length:.0f} mm, lap = {output.lap_length:.0f} mm")
        status = "PASS" if output.deflection_check_passed else "FAIL"
        click.echo(f"  Deflection L/d:     {output.actual_span_depth_ratio:.2f} "
                   f"(allowable {output.allowable_span_depth_ratio:.2f}) {status}")
        _echo_messages(output.warnings, output.errors)

        click.echo("\nBar bending schedule:")
        for e in schedule:
            click.echo(f"  {e.mark:<3} {e.diameter:>3}φ  {e.shape:<9} L={e.length:>7.0f}  "
                       f"n={e.number:>4}  {e.weight:>9.1f} kg")
        for opening in openings:
            click.echo(f"  Opening {opening.opening_id}: {opening.trimmer_bar_count}-"
                       f"{opening.trimmer_bar_diameter}φ trimmers, "
                       f"L={opening.additional_length:.0f} mm. {opening.notes}")

        if output.is_valid:
            click.secho("\nDesign complies with IS 456 checks.", fg="green")
        else:
            click.secho(f"\nDesign has {len(output.errors)} code violation(s).", fg="red")

    if not (optimize or alternatives):
        return results

    engine_args = dict(settings=request.optimizer, rates=request.costs, seed=seed)
    try:
        if optimize:
            result = OptimizationEngine(inputs, output, **engine_args).optimize_bar_arrangement()
            results["optimization"] = dataclasses.asdict(result)
            if not as_json:
                best = result.optimized_solution
                click.echo("\nOptimized layout:")
                click.echo(f"  Main: {best.main_bar_diameter}φ @ {best.main_bar_spacing:.0f} c/c | "
                           f"Distribution: {best.dist_bar_diameter}φ @ {best.dist_bar_spacing:.0f} c/c")
                click.echo(f"  Cost: {result.optimized_cost:.0f} INR "
                           f"(baseline {result.baseline_cost:.0f} INR)")
                click.echo(f"  Material savings: {result.material_savings:.1f}%, "
                           f"labour savings: {result.labor_savings:.1f}%")
        if alternatives:
            options = OptimizationEngine(inputs, output, **engine_args).suggest_alternatives()
            results["alternatives"] = [dataclasses.asdict(a) for a in options]
            if not as_json:
                click.echo("\nAlternatives (cheapest first):")
                for option in options:
                    s = option.solution
                    click.echo(f"  {option.name}: {s.main_bar_diameter}φ @ {s.main_bar_spacing:.0f} / "
                               f"{s.dist_bar_diameter}φ @ {s.dist_bar_spacing:.0f}, "
                               f"{option.cost:.0f} INR")
    except OptimizationError as exc:
        click.secho(f"Optimization error: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc

    return results


def _run_beam(request: DesignRequest, as_json: bool) -> dict[str, Any]:
    output = BeamDesigner().design(request.model)
    if not as_json:
        click.echo(f"\nBeam design: {output.status.value.upper()}")
        click.echo(f"  Mu = {output.max_moment:.2f} kNm (Mu,lim = {output.limiting_moment:.2f} kNm), "
                   f"Vu = {output.max_shear:.2f} kN")
        click.echo(f"  Ast = {output.tension_steel_area:.0f} mm2"
                   + (f", Asc = {output.compression_steel_area:.0f} mm2"
                      if output.compression_steel_required else ""))
        click.echo(f"  {output.reinforcement_summary}")
        click.echo(f"  τv = {output.nominal_shear_stress:.3f} MPa, τc = "
                   f"{output.concrete_shear_strength:.3f} MPa")
        _echo_messages(output.warnings)
    return {"element": "beam", "design": output.model_dump(mode="json")}


def _run_column(request: DesignRequest, as_json: bool) -> dict[str, Any]:
    output = ColumnDesigner().design(request.model)
    if not as_json:
        kind = "Short" if output.is_short_column else "Slender"
        click.echo(f"\nColumn design: {output.status.value.upper()} ({kind}, "
                   f"λ = {output.slenderness_ratio:.2f})")
        click.echo(f"  Pu = {output.axial_load:.1f} kN, Asc = {output.longitudinal_steel_area:.0f} mm2")
        click.echo(f"  {output.reinforcement_summary} ({output.steel_percentage:.2f}%)")
        _echo_messages(output.warnings)
    return {"element": "column", "design": output.model_dump(mode="json")}


def _run_shape(request: DesignRequest, as_json: bool) -> dict[str, Any]:
    recognizer = PatternRecognition()
    try:
        analysis = recognizer.detect_irregular_shapes(request.boundary)
    except ValueError as exc:
        click.secho(f"Boundary error: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc
    layout = recognizer.suggest_rebar_layout(analysis)
    openings = recognizer.handle_openings(request.openings)
    if not as_json:
        click.echo(f"\nShape: {analysis.shape_type.value} ({analysis.complexity.value})")
        click.echo(f"  {analysis.suggested_approach}")
        click.echo(f"  Main bars: {layout.main_direction}")
        click.echo(f"  Distribution bars: {layout.distribution_direction}")
        for item in layout.special_requirements:
            click.echo(f"  - {item}")
        for opening in openings:
            click.echo(f"  Opening {opening.opening_id}: {opening.trimmer_bar_count}-"
                       f"{opening.trimmer_bar_diameter}φ trimmers, "
                       f"L={opening.additional_length:.0f} mm. {opening.notes}")
    return {
        "element": "shape",
        "analysis": analysis.model_dump(mode="json"),
        "layout": layout.model_dump(mode="json"),
        "openings": [o.model_dump(mode="json") for o in openings],
    }


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--optimize", is_flag=True, help="Search for a cheaper slab layout.")
@click.option("--alternatives", is_flag=True, help="List alternative slab layouts.")
@click.option("--seed", type=int, default=None, help="Random seed for the optimizer.")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr.")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None,
              help="Also write debug logs to this file.")
def run(input_file: str, optimize: bool, alternatives: bool, seed: Optional[int],
        as_json: bool, verbose: bool, log_file: Optional[str]) -> None:
    """Run the design described in INPUT_FILE."""
    configure_logging(verbose, log_file)
    request = _load(input_file)

    if (optimize or alternatives) and request.element != "slab":
        click.secho("--optimize/--alternatives apply to slab designs only", fg="red", err=True)
        raise SystemExit(1)

    if not as_json:
        click.echo(f"Reading input file: {input_file}")

    if request.element == "slab":
        results = _run_slab(request, optimize, alternatives, seed, as_json)
    elif request.element == "beam":
        results = _run_beam(request, as_json)
    elif request.element == "column":
        results = _run_column(request, as_json)
    else:
        results = _run_shape(request, as_json)

    if as_json:
        click.echo(json.dumps(results, indent=2, default=str))


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
def validate(input_file: str) -> None:
    """Validate an input YAML file without running the design."""
    click.echo(f"Validating: {input_file}")
    request = _load(input_file)
    click.secho(f"\nInput file is valid ({request.element}).", fg="green")


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
@click.argument("element", type=click.Choice(ELEMENT_KINDS), default="slab")
def template(element: str) -> None:
    """Print a sample input YAML for ELEMENT to stdout."""
    click.echo(generate_template(element), nl=False)


# ---------------------------------------------------------------------------
# Allow ``python -m rebar_design.cli``
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
