# drillcost/utils/payload.py
"""
Conversion of JSON payloads into drilling models.

Editors in the field send the same figures under different names
(snake_case, camelCase, or the labels of the older spreadsheet-style
tool), so every field is looked up through a list of accepted variants.
"""
import logging
import math
from typing import Any, Dict, List

from drillcost.models.drilling import (
    BitSequenceEntry, BitType, DrillingParameters, ScenarioConfig, as_entry
)

logger = logging.getLogger(__name__)

_MISSING = object()

PARAMETER_FIELDS = {
    'rig_cost_per_day': ('rig_cost_per_day', 'rigCostPerDay', 'operationCostPerDay'),
    'trip_speed': ('trip_speed', 'tripSpeed'),
    'stand_length': ('stand_length', 'standLength'),
    'start_depth': ('start_depth', 'startDepth', 'depthIn'),
    'interval_to_drill': ('interval_to_drill', 'intervalToDrill'),
    'bit_change_overhead_hours': ('bit_change_overhead_hours', 'bitChangeOverheadHours', 'circulatingHours'),
}

BIT_FIELDS = {
    'unit_cost': ('unit_cost', 'unitCost', 'cost'),
    'penetration_rate': ('penetration_rate', 'penetrationRate', 'rop'),
    'max_run_length': ('max_run_length', 'maxRunLength', 'maxDistance'),
}


class InvalidPayloadError(ValueError):
    """Raised when a payload is missing fields or carries non-numeric values."""


def _lookup(data: Dict[str, Any], names, default=_MISSING):
    for name in names:
        if name in data and data[name] is not None:
            return data[name]
    if default is _MISSING:
        raise InvalidPayloadError(f"Missing required field: {names[0]}")
    return default


def _number(data, names, default=_MISSING) -> float:
    value = _lookup(data, names, default)
    if isinstance(value, bool):
        raise InvalidPayloadError(f"Field {names[0]} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidPayloadError(f"Field {names[0]} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidPayloadError(f"Field {names[0]} must be finite")
    return number


def _optional_number(data, names):
    value = _lookup(data, names, None)
    if value is None:
        return None
    return _number(data, names)


def _require_mapping(data, what):
    if not isinstance(data, dict):
        raise InvalidPayloadError(f"{what} must be an object")


def parse_parameters(data) -> DrillingParameters:
    """Build DrillingParameters from a dict (or pass an instance through)."""
    if isinstance(data, DrillingParameters):
        return data
    _require_mapping(data, 'parameters')

    values = {}
    for field_name, names in PARAMETER_FIELDS.items():
        default = 0.0 if field_name == 'bit_change_overhead_hours' else _MISSING
        values[field_name] = _number(data, names, default)
    return DrillingParameters(**values)


def parse_bit_type(data) -> BitType:
    if isinstance(data, BitType):
        return data
    _require_mapping(data, 'bit')

    bit_id = str(_lookup(data, ('id',)))
    return BitType(
        id=bit_id,
        name=str(_lookup(data, ('name',), bit_id)),
        unit_cost=_number(data, BIT_FIELDS['unit_cost']),
        penetration_rate=_number(data, BIT_FIELDS['penetration_rate']),
        max_run_length=_number(data, BIT_FIELDS['max_run_length']),
        active=bool(_lookup(data, ('active', 'isActive'), True)),
    )


def parse_bit_types(items) -> List[BitType]:
    if not isinstance(items, list):
        raise InvalidPayloadError("bits must be a list")
    return [parse_bit_type(item) for item in items]


def parse_sequence_item(item):
    """A plain id stays a string; an object becomes a BitSequenceEntry."""
    if isinstance(item, (str, BitSequenceEntry)):
        return item
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return str(item)
    _require_mapping(item, 'sequence entry')

    entry = BitSequenceEntry(
        bit_id=str(_lookup(item, ('bit_id', 'bitId'))),
        actual_distance=_optional_number(item, ('actual_distance', 'actualDistance')),
        actual_rop=_optional_number(item, ('actual_rop', 'actualROP', 'actualRop')),
        is_rerun=bool(_lookup(item, ('is_rerun', 'isRerun'), False)),
    )
    if entry.actual_distance is None and entry.actual_rop is None and not entry.is_rerun:
        return entry.bit_id
    return entry


def parse_sequence(items) -> List:
    if items is None:
        return []
    if not isinstance(items, list):
        raise InvalidPayloadError("bit_sequence must be a list")
    return [parse_sequence_item(item) for item in items]


def parse_scenario(data, index=0) -> ScenarioConfig:
    if isinstance(data, ScenarioConfig):
        return data
    _require_mapping(data, 'scenario')

    scenario_id = str(_lookup(data, ('id',), f'scenario-{index + 1}'))
    return ScenarioConfig(
        id=scenario_id,
        name=str(_lookup(data, ('name',), scenario_id)),
        bit_sequence=tuple(parse_sequence(_lookup(data, ('bit_sequence', 'bitSequence'), []))),
    )


def parse_scenarios(items) -> List[ScenarioConfig]:
    if not isinstance(items, list):
        raise InvalidPayloadError("scenarios must be a list")
    return [parse_scenario(item, index) for index, item in enumerate(items)]


def sanitize_scenarios(scenarios, bit_types) -> List[ScenarioConfig]:
    """
    Drop sequence entries that reference bits no longer in the roster.

    The simulator tolerates such entries; this is for load paths that want
    the stored scenarios cleaned up.
    """
    valid_ids = {bit.id for bit in bit_types}
    cleaned = []
    dropped = 0
    for scenario in scenarios:
        kept = []
        for item in scenario.bit_sequence:
            entry = as_entry(item)
            if entry is not None and entry.bit_id in valid_ids:
                kept.append(item)
            else:
                dropped += 1
        cleaned.append(ScenarioConfig(scenario.id, scenario.name, tuple(kept)))

    if dropped:
        logger.warning(f"Dropped {dropped} sequence entries referencing unknown bits")
    return cleaned


def parse_inputs(data):
    """Parameters and bit roster from a request body."""
    if not data:
        raise InvalidPayloadError("No data provided")
    _require_mapping(data, 'request body')
    params = parse_parameters(_lookup(data, ('parameters', 'params')))
    bit_types = parse_bit_types(_lookup(data, ('bits', 'bit_types', 'bitTypes')))
    return params, bit_types
