# drillcost/utils/result_cache.py

import hashlib
import json
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Sequence, Tuple

from drillcost.calculators.simulation.simulator import simulate
from drillcost.models.drilling import BitType, DrillingParameters, sequence_item_to_dict
from drillcost.models.scenario_result import ScenarioResult


def _hash(text: str) -> str:
    """Return a 40-char SHA-1 hex digest."""
    return hashlib.sha1(text.encode("utf-8", "replace")).hexdigest()


def scenario_key(params: DrillingParameters,
                 bit_types: Sequence[BitType],
                 sequence: Sequence) -> str:
    """
    Content hash of everything a simulation depends on.

    Scenario id and name are left out: two scenarios with the same inputs
    share one timeline.
    """
    document = {
        'parameters': params.to_dict(),
        'bits': [bit.to_dict() for bit in bit_types],
        'sequence': [sequence_item_to_dict(item) for item in sequence],
    }
    return _hash(json.dumps(document, sort_keys=True, separators=(",", ":"), default=repr))


@dataclass(frozen=True)
class _SimulationInputs:
    """Simulation inputs that hash and compare by content key only."""
    key: str
    params: DrillingParameters = field(compare=False)
    bit_types: Tuple[BitType, ...] = field(compare=False)
    sequence: Tuple = field(compare=False)


@lru_cache(maxsize=256)                 # one timeline per unique key
def _simulate_cached(inputs: _SimulationInputs) -> ScenarioResult:
    return simulate(inputs.params, inputs.bit_types, inputs.sequence)


def cached_simulate(params: DrillingParameters,
                    bit_types: Sequence[BitType],
                    sequence: Sequence,
                    scenario_id: str = "",
                    name: str = "") -> ScenarioResult:
    """
    `simulate` memoised on the content of its inputs.

    Notes
    -----
    • Only the content key reaches the cache, so sequences holding
      unhashable (malformed) items are skipped exactly as `simulate` does.
    • Id and name are stamped onto a copy, so scenarios that only differ
      by label reuse the same cache line. Each copy gets its own step list.
    """
    bit_types = tuple(bit_types)
    sequence = tuple(sequence)
    inputs = _SimulationInputs(scenario_key(params, bit_types, sequence), params, bit_types, sequence)
    cached = _simulate_cached(inputs)
    return ScenarioResult(
        id=scenario_id,
        name=name,
        steps=list(cached.steps),
        total_time=cached.total_time,
        total_cost=cached.total_cost,
        cost_per_unit_depth=cached.cost_per_unit_depth,
        bits_used=dict(cached.bits_used),
        status=cached.status,
    )


def clear_cache():
    _simulate_cached.cache_clear()


def cache_info():
    return _simulate_cached.cache_info()
