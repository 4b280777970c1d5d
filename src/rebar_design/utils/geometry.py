"""Plane geometry helpers for slab boundary polygons.

Provides:
- Closing-vertex cleanup and winding normalisation
- Signed polygon area (shoelace formula)
- Interior angles at each vertex
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


# ---------------------------------------------------------------------------
# Polygon preparation
# ---------------------------------------------------------------------------

def as_vertex_array(points: Sequence[Sequence[float]]) -> np.ndarray:
    """Convert ``[(x, y), ...]`` into an ``(n, 2)`` float array.

    A trailing vertex that repeats the first one (explicitly closed polygon)
    is dropped.

    Raises
    ------
    ValueError
        If fewer than three distinct vertices remain.
    """
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError("Boundary must be a sequence of (x, y) pairs")
    if len(pts) > 1 and np.allclose(pts[0], pts[-1]):
        pts = pts[:-1]
    if len(pts) < 3:
        raise ValueError(
            f"Boundary needs at least 3 distinct vertices, got {len(pts)}"
        )
    return pts


def signed_area(pts: np.ndarray) -> float:
    """Signed area by the shoelace formula.

    Positive for counter-clockwise winding, negative for clockwise.
    """
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def counter_clockwise(pts: np.ndarray) -> np.ndarray:
    """Return *pts* ordered counter-clockwise."""
    if signed_area(pts) < 0:
        return pts[::-1].copy()
    return pts


# ---------------------------------------------------------------------------
# Angles
# ---------------------------------------------------------------------------

def interior_angles(points: Sequence[Sequence[float]]) -> list[float]:
    """Interior angle (degrees) at every vertex of a simple polygon.

    The polygon is normalised to counter-clockwise winding, so convex corners
    give angles below 180° and re-entrant corners angles above 180°.  The
    angle reported at index ``i`` belongs to vertex ``i + 1`` (the corner
    between edge ``i -> i+1`` and edge ``i+1 -> i+2``); only the multiset of
    angles matters for shape classification.

    Parameters
    ----------
    points : sequence of (x, y)
        Boundary vertices, optionally closed.

    Returns
    -------
    list of float
        One interior angle per vertex, each in ``(0, 360)``.
    """
    pts = counter_clockwise(as_vertex_array(points))
    n = len(pts)
    angles: list[float] = []
    for i in range(n):
        p1, p2, p3 = pts[i], pts[(i + 1) % n], pts[(i + 2) % n]
        heading_in = math.atan2(p2[1] - p1[1], p2[0] - p1[0])
        heading_out = math.atan2(p3[1] - p2[1], p3[0] - p2[0])
        turn = math.degrees(heading_out - heading_in)
        # Normalise the turning angle to (-180, 180]
        turn = (turn + 180.0) % 360.0 - 180.0
        if turn == -180.0:
            turn = 180.0
        angles.append(180.0 - turn)
    return angles
