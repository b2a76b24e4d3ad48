# drillcost/utils/validation.py
from collections import Counter

from drillcost.models.drilling import as_entry


class InvalidParameterError(ValueError):
    """Raised when parameters would make trip or drill time undefined."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


def parameter_errors(params):
    """Range checks on DrillingParameters, as a list of messages."""
    errors = []
    if params.rig_cost_per_day < 0:
        errors.append('Rig cost per day must not be negative')
    if params.trip_speed <= 0:
        errors.append('Trip speed must be positive')
    if params.stand_length <= 0:
        errors.append('Stand length must be positive')
    if params.start_depth < 0:
        errors.append('Start depth must not be negative')
    if params.interval_to_drill < 0:
        errors.append('Interval to drill must not be negative')
    if params.bit_change_overhead_hours < 0:
        errors.append('Bit change overhead must not be negative')
    return errors


def bit_errors(bit):
    """Range checks on a single BitType."""
    errors = []
    if bit.unit_cost < 0:
        errors.append(f'Bit {bit.id}: unit cost must not be negative')
    if bit.penetration_rate <= 0:
        errors.append(f'Bit {bit.id}: penetration rate must be positive')
    if bit.max_run_length <= 0:
        errors.append(f'Bit {bit.id}: max run length must be positive')
    return errors


def ensure_valid_parameters(params, bit_types=()):
    """Raise InvalidParameterError listing every failed check."""
    errors = parameter_errors(params)
    for bit in bit_types:
        errors.extend(bit_errors(bit))
    if errors:
        raise InvalidParameterError(errors)


def ensure_valid_run(bit, entry):
    """Fail fast on a run that would divide by zero or never advance."""
    errors = []
    rate = entry.penetration_rate(bit)
    length = entry.run_length(bit)
    if rate <= 0:
        errors.append(f'Bit {bit.id}: penetration rate must be positive, got {rate}')
    if length <= 0:
        errors.append(f'Bit {bit.id}: run length must be positive, got {length}')
    if errors:
        raise InvalidParameterError(errors)


def sequence_capacity(bit_types, sequence):
    """
    Sum of the run lengths of every resolvable sequence entry.

    Unknown ids contribute nothing. This is a quick feasibility figure and
    does not account for the simulator stopping once the target is reached.
    """
    bit_map = {bit.id: bit for bit in bit_types}
    capacity = 0.0
    for item in sequence:
        entry = as_entry(item)
        if entry is None or entry.bit_id not in bit_map:
            continue
        capacity += entry.run_length(bit_map[entry.bit_id])
    return capacity


def validate_parameters(params, bit_types=(), sequence=None):
    """
    Validates drilling parameters, a bit roster and optionally a sequence

    Args:
        params (DrillingParameters): rig and interval figures
        bit_types (list): BitType roster
        sequence (list): optional bit ids / BitSequenceEntry items

    Returns:
        dict: Validation results with errors and warnings
    """
    result = {
        'is_valid': True,
        'errors': [],
        'warnings': []
    }

    result['errors'].extend(parameter_errors(params))
    for bit in bit_types:
        result['errors'].extend(bit_errors(bit))

    id_counts = Counter(bit.id for bit in bit_types)
    for bit_id, count in id_counts.items():
        if count > 1:
            result['errors'].append(f'Bit id {bit_id} is used by {count} bit types')

    name_counts = Counter(bit.name for bit in bit_types)
    for name, count in name_counts.items():
        if count > 1:
            result['warnings'].append(f'Bit name {name} is shared by {count} bit types; run counts will be merged')

    if bit_types and not any(bit.active for bit in bit_types):
        result['warnings'].append('No active bit types; the optimizer will not produce a plan')

    if sequence is not None:
        known = set(id_counts)
        unknown = []
        for item in sequence:
            entry = as_entry(item)
            if entry is None or entry.bit_id not in known:
                unknown.append(str(item if entry is None else entry.bit_id))
        if unknown:
            result['warnings'].append(f'Sequence references unknown bit ids (skipped): {", ".join(unknown)}')

        capacity = sequence_capacity(bit_types, sequence)
        if capacity < params.interval_to_drill:
            result['warnings'].append(
                f'Sequence capacity {capacity:.1f} m is short of the {params.interval_to_drill:.1f} m interval'
            )

    result['is_valid'] = not result['errors']
    return result
