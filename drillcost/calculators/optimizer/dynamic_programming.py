# drillcost/calculators/optimizer/dynamic_programming.py
"""
Lowest-cost bit sequence by dynamic programming over drilled depth.

The cost still to be spent from a given depth does not depend on how that
depth was reached, so the interval is cut into a grid of cells (see
`cost_model.build_grid`) and the cheapest completion is solved once per
cell, from the bottom of the interval back up to the start.

On an exact grid every run ends on a grid state and the answer is the true
optimum. On a resolution grid run reach is rounded down, so plans stay
complete when replayed, and runs the replay never reaches are dropped.

Ties on cost are split by fewer runs, then by the lexicographically
smallest tuple of bit ids.
"""
import logging
from typing import Callable, List, Optional, Sequence

from drillcost.calculators.optimizer.cost_model import (
    DEFAULT_MAX_STATES, build_grid, compare_plans, run_cost_table
)
from drillcost.calculators.simulation.simulator import DEPTH_TOLERANCE
from drillcost.models.drilling import BitType, DrillingParameters, active_bits
from drillcost.utils.validation import ensure_valid_parameters

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 1.0  # m


def optimize(params: DrillingParameters,
             bit_types: Sequence[BitType],
             resolution: float = DEFAULT_RESOLUTION,
             should_stop: Optional[Callable[[], bool]] = None,
             max_states: int = DEFAULT_MAX_STATES) -> List[str]:
    """
    Find the cheapest ordered sequence of active bits reaching target depth.

    Args:
        params: Rig and interval figures
        bit_types: Roster; only bits with ``active`` set are considered
        resolution: Depth grid step (m) used when run lengths do not share
            an exact millimetre grid. Reduced automatically to the shortest
            active run length.
        should_stop: Optional callable polled once per grid state; when it
            returns True the search is abandoned and ``[]`` returned.
        max_states: Upper bound on grid states

    Returns:
        List of bit ids, empty when there are no active bits or nothing to
        drill.

    Raises:
        InvalidParameterError: invalid figures, a non-positive resolution, or
            a grid larger than `max_states`
    """
    candidates = active_bits(bit_types)
    if not candidates:
        logger.info("No active bit types, optimizer returns an empty plan")
        return []

    ensure_valid_parameters(params, candidates)
    grid = build_grid(params, candidates, resolution, max_states)

    interval = params.interval_to_drill
    if interval <= 0:
        return []

    cells = grid.cells
    costs, next_state = run_cost_table(params, candidates, grid)
    costs = costs.tolist()
    next_state = next_state.tolist()
    ids = [bit.id for bit in candidates]

    best_cost = [0.0] * (cells + 1)
    best_runs = [0] * (cells + 1)
    best_path = [()] * (cells + 1)

    for k in range(cells - 1, -1, -1):
        if should_stop is not None and should_stop():
            logger.info(f"Optimizer stopped at state {k} of {cells}")
            return []

        chosen = None  # (cost, runs, path)
        for j, bit_id in enumerate(ids):
            nxt = next_state[j][k]
            cost = costs[j][k] + best_cost[nxt]
            runs = best_runs[nxt] + 1

            if chosen is not None:
                order = compare_plans(cost, runs, chosen[0], chosen[1])
                if order > 0:
                    continue
                if order == 0:
                    path = (bit_id,) + best_path[nxt]
                    if path >= chosen[2]:
                        continue
                    chosen = (cost, runs, path)
                    continue

            chosen = (cost, runs, (bit_id,) + best_path[nxt])

        best_cost[k], best_runs[k], best_path[k] = chosen

    logger.debug(
        f"DP optimizer: {cells} states at {grid.step:g} m ({'exact' if grid.exact else 'resolution'} grid), "
        f"{len(candidates)} bits, {best_runs[0]} runs, estimated cost {best_cost[0]:.2f}"
    )
    return _used_runs(best_path[0], candidates, interval)


def _used_runs(path, bits, interval) -> List[str]:
    """Cut `path` after the run that actually reaches target depth."""
    lengths = {bit.id: bit.max_run_length for bit in bits}
    covered = 0.0
    for used, bit_id in enumerate(path, 1):
        covered += lengths[bit_id]
        if covered + DEPTH_TOLERANCE >= interval:
            if used < len(path):
                logger.debug(f"Dropped {len(path) - used} run(s) the replay never reaches")
            return list(path[:used])
    return list(path)
