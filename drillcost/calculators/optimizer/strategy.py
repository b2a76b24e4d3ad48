# drillcost/calculators/optimizer/strategy.py
from typing import Callable, Optional, Sequence

from drillcost.calculators.optimizer.cost_model import DEFAULT_MAX_STATES
from drillcost.calculators.optimizer.dynamic_programming import DEFAULT_RESOLUTION, optimize
from drillcost.calculators.optimizer.exhaustive import DEFAULT_MAX_RUNS, optimize_exhaustive
from drillcost.calculators.simulation.simulator import simulate
from drillcost.models.drilling import BitType, DrillingParameters
from drillcost.models.optimization import OptimizationResult

METHODS = ('dp', 'exhaustive')


def find_optimal_strategy(params: DrillingParameters,
                          bit_types: Sequence[BitType],
                          method: str = 'dp',
                          resolution: float = DEFAULT_RESOLUTION,
                          max_runs: int = DEFAULT_MAX_RUNS,
                          should_stop: Optional[Callable[[], bool]] = None,
                          max_states: int = DEFAULT_MAX_STATES,
                          scenario_id: str = 'optimized',
                          name: str = 'Optimized') -> OptimizationResult:
    """
    Run a sequence search and replay its answer through the simulator.

    Args:
        params: Rig and interval figures
        bit_types: Full roster (inactive bits are ignored by the search)
        method: 'dp' (dynamic programming) or 'exhaustive'
        resolution: Depth grid step for 'dp'
        max_runs: Run cap for 'exhaustive'
        should_stop: Cancellation poll for 'dp'
        max_states: Grid state limit for 'dp', sequence limit for 'exhaustive'
        scenario_id: Id given to the replayed result
        name: Name given to the replayed result

    Returns:
        OptimizationResult; ``found`` is False when the sequence is empty
    """
    if method == 'dp':
        sequence = optimize(params, bit_types, resolution=resolution,
                            should_stop=should_stop, max_states=max_states)
    elif method == 'exhaustive':
        sequence = optimize_exhaustive(params, bit_types, max_runs=max_runs, max_states=max_states)
    else:
        raise ValueError(f"Unknown optimization method: {method}")

    if not sequence:
        return OptimizationResult(method=method)

    result = simulate(params, bit_types, sequence, scenario_id=scenario_id, name=name)
    return OptimizationResult(
        method=method,
        bit_sequence=sequence,
        estimated_cost=result.total_cost,
        estimated_time=result.total_time,
        cost_per_unit_depth=result.cost_per_unit_depth,
        status=result.status,
        result=result,
    )
