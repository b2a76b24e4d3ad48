# drillcost/calculators/optimizer/exhaustive.py
"""
Exhaustive bit sequence search for small rosters.

Every ordered combination of active bits is grown depth-first until its
capacity covers the interval, then scored with the simulator. Exact for
any run lengths, but exponential in the number of runs, so it is capped
by `max_runs` and refused when the search tree would exceed `max_states`
sequences.
"""
import logging
import math
from typing import List, Sequence

from drillcost.calculators.optimizer.cost_model import DEFAULT_MAX_STATES, is_preferred
from drillcost.calculators.simulation.simulator import simulate
from drillcost.models.drilling import BitType, DrillingParameters, active_bits
from drillcost.utils.validation import InvalidParameterError, ensure_valid_parameters

logger = logging.getLogger(__name__)

DEFAULT_MAX_RUNS = 12


def optimize_exhaustive(params: DrillingParameters,
                        bit_types: Sequence[BitType],
                        max_runs: int = DEFAULT_MAX_RUNS,
                        max_states: int = DEFAULT_MAX_STATES) -> List[str]:
    """
    Cheapest complete sequence of at most `max_runs` active bits.

    Returns ``[]`` when no bit is active, nothing needs drilling, or no
    sequence within `max_runs` reaches target depth.

    Raises InvalidParameterError when more than `max_states` sequences
    could need scoring.
    """
    candidates = sorted(active_bits(bit_types), key=lambda bit: bit.id)
    if not candidates:
        return []

    ensure_valid_parameters(params, candidates)
    interval = params.interval_to_drill
    if interval <= 0:
        return []

    # no sequence is longer than the shortest bit needs to cover the interval
    shortest = min(bit.max_run_length for bit in candidates)
    depth = min(max_runs, math.ceil(interval / shortest))
    if depth > 0 and depth * math.log(len(candidates)) > math.log(max_states):
        raise InvalidParameterError(
            f"Exhaustive search over {len(candidates)} bits and up to {depth} runs "
            f"exceeds the limit of {max_states} sequences"
        )

    best = None  # (cost, runs, path)
    sequence = []
    evaluated = 0

    def search(capacity):
        nonlocal best, evaluated
        if capacity >= interval:
            evaluated += 1
            result = simulate(params, candidates, sequence)
            if result.is_complete and is_preferred(result.total_cost, len(sequence), sequence, best):
                best = (result.total_cost, len(sequence), tuple(sequence))
            return

        if len(sequence) >= max_runs:
            return

        for bit in candidates:
            sequence.append(bit.id)
            search(capacity + bit.max_run_length)
            sequence.pop()

    search(0.0)
    logger.debug(f"Exhaustive optimizer evaluated {evaluated} sequences (max {max_runs} runs)")

    if best is None:
        logger.info(f"No sequence of at most {max_runs} runs reaches target depth")
        return []
    return list(best[2])
