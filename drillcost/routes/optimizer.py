import logging

from flask import Blueprint, current_app, request, jsonify

from drillcost.calculators.optimizer.strategy import METHODS, find_optimal_strategy
from drillcost.models.drilling import ScenarioConfig
from drillcost.utils.payload import InvalidPayloadError, parse_inputs
from drillcost.utils.validation import InvalidParameterError

logger = logging.getLogger(__name__)

optimizer_bp = Blueprint('optimizer', __name__)


@optimizer_bp.route('/optimize', methods=['POST'])
def optimize_sequence():
    """
    Search for the lowest-cost bit sequence reaching target depth

    Expected input format:
    {
        "parameters": {...},           # as for /simulation/run
        "bits": [...],                 # only bits with "active": true are used
        "method": "dp" | "exhaustive", # optional, defaults to OPTIMIZER_METHOD
        "resolution": float,           # optional DP depth step (m)
        "max_runs": int,               # optional exhaustive run cap
                                       # (requests needing more than OPTIMIZER_MAX_STATES
                                       #  grid states or sequences are rejected)
        "id": string,                  # optional id for the new scenario
        "name": string                 # optional name for the new scenario
    }

    Returns the optimization summary and, when a plan was found, a
    ready-to-store scenario {"id", "name", "bit_sequence"}.
    """
    data = request.get_json(silent=True)
    config = current_app.config

    try:
        params, bit_types = parse_inputs(data)
        method = data.get('method', config['OPTIMIZER_METHOD'])
        if method not in METHODS:
            raise InvalidPayloadError(f"Unsupported optimization method: {method}")
        resolution = float(data.get('resolution', config['OPTIMIZER_RESOLUTION']))
        max_runs = int(data.get('max_runs', config['OPTIMIZER_MAX_RUNS']))
        scenario_id = str(data.get('id', 'optimized'))
        name = str(data.get('name', 'Optimized Strategy'))

        outcome = find_optimal_strategy(
            params,
            bit_types,
            method=method,
            resolution=resolution,
            max_runs=max_runs,
            max_states=config['OPTIMIZER_MAX_STATES'],
            scenario_id=scenario_id,
            name=name
        )
    except (TypeError, ValueError, OverflowError) as e:
        # InvalidPayloadError and InvalidParameterError are ValueErrors too
        logger.error(f"Rejected optimization request: {e}")
        body = {'error': str(e)}
        if isinstance(e, InvalidParameterError):
            body['details'] = e.errors
        return jsonify(body), 400

    response = outcome.to_dict()
    response['scenario'] = None
    if outcome.found:
        response['scenario'] = ScenarioConfig(scenario_id, name, tuple(outcome.bit_sequence)).to_dict()
        response['result'] = outcome.result.to_dict()
    return jsonify(response)
