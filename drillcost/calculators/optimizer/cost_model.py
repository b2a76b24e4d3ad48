# drillcost/calculators/optimizer/cost_model.py
"""
Depth grid and run-cost tables for the bit sequence search.

Costs follow the simulator's timeline rules: a run that starts at the
interval top is already in hole, every other run pays a round trip at the
depth it starts from plus the bit change overhead.

Grid selection
~~~~~~~~~~~~~~
When the interval and every run length are whole millimetres, the grid step
is their greatest common divisor, so every run and the interval end exactly
on a grid state and the search is exact. Otherwise (or when that lattice
would exceed `max_states`) the caller's resolution is used, with the
interval rounded up and run reach rounded down.
"""
import math
from dataclasses import dataclass
from functools import reduce
from typing import Optional, Sequence, Tuple

import numpy as np

from drillcost.models.drilling import BitType, DrillingParameters
from drillcost.utils.validation import InvalidParameterError

# Absorbs float noise when mapping lengths onto the depth grid
GRID_TOLERANCE = 1e-9

# Relative tolerance under which two plan costs count as equal
COST_TOLERANCE = 1e-9

# Exact grids are built on whole millimetres
LATTICE_UNITS_PER_METER = 1000

DEFAULT_MAX_STATES = 200_000


@dataclass(frozen=True)
class DepthGrid:
    step: float  # meters
    cells: int  # states are 0 .. cells
    reach: Tuple[int, ...]  # cells covered by one run, per bit
    exact: bool  # every run length and the interval sit on the grid


def grid_size(interval: float, step: float) -> int:
    """Number of grid cells needed to cover `interval` (rounded up)."""
    return max(1, math.ceil(interval / step - GRID_TOLERANCE))


def run_reach(bit: BitType, step: float) -> int:
    """Grid cells one run of `bit` is guaranteed to cover (rounded down, ≥1)."""
    return max(1, math.floor(bit.max_run_length / step + GRID_TOLERANCE))


def _lattice_units(length: float) -> Optional[int]:
    """`length` in whole lattice units, None when it is not a whole number of them."""
    scaled = length * LATTICE_UNITS_PER_METER
    units = round(scaled)
    if units <= 0 or abs(scaled - units) > 1e-6:
        return None
    return units


def exact_grid(interval: float, bits: Sequence[BitType]) -> Optional[DepthGrid]:
    """Coarsest grid on which the interval and every run length are exact."""
    units = [_lattice_units(interval)] + [_lattice_units(bit.max_run_length) for bit in bits]
    if None in units:
        return None

    step_units = reduce(math.gcd, units)
    return DepthGrid(
        step=step_units / LATTICE_UNITS_PER_METER,
        cells=units[0] // step_units,
        reach=tuple(u // step_units for u in units[1:]),
        exact=True,
    )


def build_grid(params: DrillingParameters,
               bits: Sequence[BitType],
               resolution: float,
               max_states: int = DEFAULT_MAX_STATES) -> DepthGrid:
    """
    Choose the depth grid for a search over `bits`.

    Raises:
        InvalidParameterError: resolution is not positive, or a grid at that
            resolution would need more than `max_states` states
    """
    if not resolution > 0:
        raise InvalidParameterError('Optimizer resolution must be positive')

    interval = params.interval_to_drill
    step = min(resolution, min(bit.max_run_length for bit in bits))
    cells = grid_size(interval, step)
    if cells > max_states:
        raise InvalidParameterError(
            f"Depth grid of {cells} states at {step:g} m exceeds the limit of "
            f"{max_states}; use a coarser resolution"
        )

    grid = exact_grid(interval, bits)
    if grid is not None and grid.cells <= max_states:
        return grid
    return DepthGrid(step, cells, tuple(run_reach(bit, step) for bit in bits), exact=False)


def run_cost_table(params: DrillingParameters,
                   bits: Sequence[BitType],
                   grid: DepthGrid) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cost of one run of every bit from every grid state.

    Parameters
    ----------
    params : DrillingParameters
    bits : sequence of BitType
        Candidate bits, one table row each.
    grid : DepthGrid
        Grid from `build_grid`; `grid.reach` is ordered like `bits`.

    Returns
    -------
    cost : np.ndarray, shape (len(bits), grid.cells)
        cost[j, k] is the currency spent running bit j from state k.
    next_state : np.ndarray, shape (len(bits), grid.cells)
        State reached after that run, clamped to `grid.cells`.
    """
    step = grid.step
    cells = grid.cells
    states = np.arange(cells, dtype=np.int64)
    drilled = states * step
    depth = params.start_depth + drilled
    remaining = np.maximum(params.interval_to_drill - drilled, 0.0)

    # trip + overhead hours before each run; state 0 is the first run
    changeover = np.where(
        states == 0,
        0.0,
        2.0 * depth / params.trip_rate + params.bit_change_overhead_hours,
    )

    reach = np.array(grid.reach, dtype=np.int64)
    unit_cost = np.array([bit.unit_cost for bit in bits], dtype=np.float64)
    rate = np.array([bit.penetration_rate for bit in bits], dtype=np.float64)

    run_length = np.minimum(reach[:, None] * step, remaining[None, :])
    drill_hours = run_length / rate[:, None]

    cost = unit_cost[:, None] + (changeover[None, :] + drill_hours) * params.hourly_rig_cost
    next_state = np.minimum(states[None, :] + reach[:, None], cells)
    return cost, next_state


def compare_plans(cost, runs, other_cost, other_runs) -> int:
    """
    Order two plans by cost (within tolerance), then by run count.

    Returns -1 when the first plan is preferred, 1 when the second is, and
    0 when they tie and must be split on bit ids.
    """
    if not math.isclose(cost, other_cost, rel_tol=COST_TOLERANCE, abs_tol=COST_TOLERANCE):
        return -1 if cost < other_cost else 1
    if runs != other_runs:
        return -1 if runs < other_runs else 1
    return 0


def is_preferred(cost, runs, path, best) -> bool:
    """True when plan (cost, runs, path) beats `best` or `best` is None."""
    if best is None:
        return True
    order = compare_plans(cost, runs, best[0], best[1])
    if order != 0:
        return order < 0
    return tuple(path) < tuple(best[2])
