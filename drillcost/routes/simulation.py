import logging

from flask import Blueprint, request, jsonify

from drillcost.calculators.comparison.analyzer import compare_scenarios
from drillcost.utils.payload import (
    InvalidPayloadError, parse_inputs, parse_scenario, parse_scenarios,
    parse_sequence, sanitize_scenarios
)
from drillcost.utils.result_cache import cached_simulate, scenario_key
from drillcost.utils.validation import InvalidParameterError, ensure_valid_parameters, validate_parameters

logger = logging.getLogger(__name__)

simulation_bp = Blueprint('simulation', __name__)


def _bad_request(error):
    logger.error(f"Rejected simulation request: {error}")
    body = {'error': str(error)}
    if isinstance(error, InvalidParameterError):
        body['details'] = error.errors
    return jsonify(body), 400


def _simulate_all(data):
    params, bit_types = parse_inputs(data)
    ensure_valid_parameters(params, bit_types)

    if 'scenarios' not in data:
        raise InvalidPayloadError("Missing required field: scenarios")
    scenarios = parse_scenarios(data['scenarios'])
    if data.get('sanitize', False):
        scenarios = sanitize_scenarios(scenarios, bit_types)

    return [
        cached_simulate(params, bit_types, scenario.bit_sequence,
                        scenario_id=scenario.id, name=scenario.name)
        for scenario in scenarios
    ]


@simulation_bp.route('/run', methods=['POST'])
def run():
    """
    Simulate a single scenario

    Expected input format:
    {
        "parameters": {
            "rig_cost_per_day": float,           # currency/day
            "trip_speed": float,                 # stands/hour
            "stand_length": float,               # meters/stand
            "start_depth": float,                # meters
            "interval_to_drill": float,          # meters
            "bit_change_overhead_hours": float   # hours (optional, default 0)
        },
        "bits": [
            {
                "id": string,
                "name": string,
                "unit_cost": float,              # currency
                "penetration_rate": float,       # meters/hour
                "max_run_length": float,         # meters
                "active": boolean                # optional, default true
            },
            ...
        ],
        "scenario": {
            "id": string,
            "name": string,
            "bit_sequence": [string | {"bit_id": string,
                                       "actual_distance": float,
                                       "actual_rop": float,
                                       "is_rerun": boolean}, ...]
        }
    }
    """
    data = request.get_json(silent=True)
    try:
        params, bit_types = parse_inputs(data)
        ensure_valid_parameters(params, bit_types)
        if 'scenario' not in data:
            raise InvalidPayloadError("Missing required field: scenario")
        scenario = parse_scenario(data['scenario'])
    except (InvalidPayloadError, InvalidParameterError) as e:
        return _bad_request(e)

    result = cached_simulate(params, bit_types, scenario.bit_sequence,
                             scenario_id=scenario.id, name=scenario.name)
    response = result.to_dict()
    response['input_hash'] = scenario_key(params, bit_types, scenario.bit_sequence)
    return jsonify(response)


@simulation_bp.route('/run-batch', methods=['POST'])
def run_batch():
    """
    Simulate several scenarios against the same parameters and roster

    Same body as /run with "scenarios": [...] instead of "scenario", plus an
    optional "sanitize": true to drop entries referencing unknown bits.
    """
    data = request.get_json(silent=True)
    try:
        results = _simulate_all(data)
    except (InvalidPayloadError, InvalidParameterError) as e:
        return _bad_request(e)

    return jsonify({'results': [result.to_dict() for result in results]})


@simulation_bp.route('/compare', methods=['POST'])
def compare():
    """Simulate several scenarios and rank the ones that reach target depth."""
    data = request.get_json(silent=True)
    try:
        results = _simulate_all(data)
    except (InvalidPayloadError, InvalidParameterError) as e:
        return _bad_request(e)

    return jsonify({
        'results': [result.to_dict() for result in results],
        'comparison': compare_scenarios(results)
    })


@simulation_bp.route('/validate', methods=['POST'])
def validate():
    """
    Check parameters, roster and an optional bit sequence

    Returns the validation report even when it contains errors; only a
    malformed payload is rejected with 400.
    """
    data = request.get_json(silent=True)
    try:
        params, bit_types = parse_inputs(data)
        sequence = None
        if 'bit_sequence' in data or 'bitSequence' in data:
            sequence = parse_sequence(data.get('bit_sequence', data.get('bitSequence')))
    except InvalidPayloadError as e:
        return _bad_request(e)

    return jsonify(validate_parameters(params, bit_types, sequence))
