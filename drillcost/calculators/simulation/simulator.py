# drillcost/calculators/simulation/simulator.py
"""
Drilling campaign simulator.

Replays an ordered bit sequence against the rig parameters and records a
timeline of cumulative depth, time and cost.

Timeline rules
--------------
* The first run starts in hole: no trip and no changeover overhead.
* Every later run first pulls out and runs back in to the current depth
  (a ``tripping`` step), then pays the bit change overhead (a
  ``circulating`` step), then drills (a ``drilling`` step).
* A bit's purchase cost is booked when its run starts; reruns are free.
* The sequence is never extended: once it is exhausted the scenario is
  simply incomplete.
"""
import logging
from typing import List, Sequence

from drillcost.models.drilling import BitType, DrillingParameters, ScenarioConfig, as_entry
from drillcost.models.scenario_result import Activity, ScenarioResult, ScenarioStatus, SimulationStep
from drillcost.utils.validation import ensure_valid_parameters, ensure_valid_run

logger = logging.getLogger(__name__)

# A run ending this close to target depth (m) finishes the interval
DEPTH_TOLERANCE = 1e-6


def simulate(params: DrillingParameters,
             bit_types: Sequence[BitType],
             sequence: Sequence,
             scenario_id: str = "",
             name: str = "") -> ScenarioResult:
    """
    Simulate one scenario.

    Args:
        params: Rig and interval figures
        bit_types: Roster used to resolve the ids in `sequence`
        sequence: Bit ids and/or BitSequenceEntry items, in run order.
            Items that do not resolve are skipped.
        scenario_id: Copied into the result
        name: Copied into the result

    Returns:
        ScenarioResult with the full timeline

    Raises:
        InvalidParameterError: trip speed, stand length or a run's rate or
            length would make the arithmetic undefined
    """
    ensure_valid_parameters(params)

    bit_map = {bit.id: bit for bit in bit_types}
    target_depth = params.target_depth
    hourly_cost = params.hourly_rig_cost

    current_depth = params.start_depth
    current_time = 0.0
    current_cost = 0.0
    bits_used = {}
    runs = 0

    steps: List[SimulationStep] = [
        SimulationStep(current_depth, current_time, current_cost, Activity.START)
    ]

    for item in sequence:
        if current_depth >= target_depth:
            break

        entry = as_entry(item)
        bit = bit_map.get(entry.bit_id) if entry is not None else None
        if bit is None:
            logger.warning(f"Bit {item!r} not found in roster, skipping")
            continue

        ensure_valid_run(bit, entry)

        if not entry.is_rerun:
            current_cost += bit.unit_cost

        if runs > 0:
            trip_hours = params.round_trip_hours(current_depth)
            current_time += trip_hours
            current_cost += trip_hours * hourly_cost
            steps.append(SimulationStep(current_depth, current_time, current_cost, Activity.TRIPPING))

            overhead_hours = params.bit_change_overhead_hours
            current_time += overhead_hours
            current_cost += overhead_hours * hourly_cost
            steps.append(SimulationStep(current_depth, current_time, current_cost, Activity.CIRCULATING))

        remaining = target_depth - current_depth
        run_length = entry.run_length(bit)
        if run_length + DEPTH_TOLERANCE >= remaining:
            run_length = remaining
            next_depth = target_depth
        else:
            next_depth = current_depth + run_length

        drill_hours = run_length / entry.penetration_rate(bit)
        current_time += drill_hours
        current_cost += drill_hours * hourly_cost
        current_depth = next_depth
        steps.append(SimulationStep(current_depth, current_time, current_cost, Activity.DRILLING, bit.name))

        bits_used[bit.name] = bits_used.get(bit.name, 0) + 1
        runs += 1

    depth_drilled = current_depth - params.start_depth
    cost_per_unit_depth = current_cost / depth_drilled if depth_drilled > 0 else 0.0
    status = ScenarioStatus.COMPLETE if current_depth >= target_depth else ScenarioStatus.INCOMPLETE

    return ScenarioResult(
        id=scenario_id,
        name=name,
        steps=steps,
        total_time=current_time,
        total_cost=current_cost,
        cost_per_unit_depth=cost_per_unit_depth,
        bits_used=bits_used,
        status=status,
    )


def run_scenario(params: DrillingParameters,
                 bit_types: Sequence[BitType],
                 scenario: ScenarioConfig) -> ScenarioResult:
    """Simulate a caller-owned scenario record."""
    return simulate(params, bit_types, scenario.bit_sequence,
                    scenario_id=scenario.id, name=scenario.name)
