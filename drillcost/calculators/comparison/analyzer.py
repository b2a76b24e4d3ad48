# drillcost/calculators/comparison/analyzer.py
import numpy as np


def _summary(values):
    return {
        'min': float(np.min(values)),
        'max': float(np.max(values)),
        'average': float(np.mean(values))
    }


def compare_scenarios(results):
    """
    Compares simulated scenarios side by side

    Args:
        results (list): ScenarioResult objects

    Returns:
        dict: Statistics, completion lists and a cost ranking of the
        complete scenarios
    """
    comparison = {
        'count': len(results),
    }

    if not results:
        return comparison

    total_costs = np.array([r.total_cost for r in results])
    total_times = np.array([r.total_time for r in results])
    unit_costs = np.array([r.cost_per_unit_depth for r in results])

    comparison['statistics'] = {
        'total_cost': _summary(total_costs),
        'total_time': _summary(total_times),
        'cost_per_unit_depth': _summary(unit_costs)
    }

    complete = [r for r in results if r.is_complete]
    comparison['complete'] = [r.id for r in complete]
    comparison['incomplete'] = [r.id for r in results if not r.is_complete]

    # Only scenarios that reach target depth are comparable on cost
    ranked = sorted(complete, key=lambda r: (r.total_cost, r.total_time, r.id))
    comparison['ranking'] = [
        {
            'id': r.id,
            'name': r.name,
            'total_cost': r.total_cost,
            'total_time': r.total_time,
            'cost_per_unit_depth': r.cost_per_unit_depth
        }
        for r in ranked
    ]

    if not ranked:
        comparison['cheapest'] = None
        comparison['fastest'] = None
        comparison['savings_vs_worst'] = 0.0
        return comparison

    complete_costs = np.array([r.total_cost for r in ranked])
    complete_times = np.array([r.total_time for r in ranked])

    comparison['cheapest'] = ranked[0].id
    comparison['fastest'] = ranked[int(np.argmin(complete_times))].id
    comparison['savings_vs_worst'] = float(np.max(complete_costs) - complete_costs[0])

    return comparison
