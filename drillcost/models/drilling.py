# drillcost/models/drilling.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class DrillingParameters:
    """Rig and interval figures shared by every scenario."""
    rig_cost_per_day: float  # currency per day
    trip_speed: float  # stands per hour
    stand_length: float  # meters per stand
    start_depth: float  # meters
    interval_to_drill: float  # meters still to drill from start_depth
    bit_change_overhead_hours: float = 0.0  # hours per bit change

    @property
    def target_depth(self) -> float:
        return self.start_depth + self.interval_to_drill

    @property
    def hourly_rig_cost(self) -> float:
        return self.rig_cost_per_day / 24.0

    @property
    def trip_rate(self) -> float:
        """Trip speed expressed in meters per hour."""
        return self.trip_speed * self.stand_length

    def round_trip_hours(self, depth: float) -> float:
        """Hours to pull out of hole from `depth` and run back in."""
        return 2.0 * depth / self.trip_rate

    def to_dict(self):
        return {
            'rig_cost_per_day': self.rig_cost_per_day,
            'trip_speed': self.trip_speed,
            'stand_length': self.stand_length,
            'start_depth': self.start_depth,
            'interval_to_drill': self.interval_to_drill,
            'bit_change_overhead_hours': self.bit_change_overhead_hours,
        }


@dataclass(frozen=True)
class BitType:
    """A bit design that can be placed in a sequence any number of times."""
    id: str
    name: str
    unit_cost: float  # currency per bit instance
    penetration_rate: float  # meters per hour
    max_run_length: float  # meters one instance drills before it is pulled
    active: bool = True  # eligible for the optimizer

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'unit_cost': self.unit_cost,
            'penetration_rate': self.penetration_rate,
            'max_run_length': self.max_run_length,
            'active': self.active,
        }


@dataclass(frozen=True)
class BitSequenceEntry:
    """
    One run in a sequence, with optional as-drilled overrides.

    A plain bit id in a sequence is equivalent to an entry with no
    overrides.
    """
    bit_id: str
    actual_distance: Optional[float] = None  # replaces max_run_length
    actual_rop: Optional[float] = None  # replaces penetration_rate
    is_rerun: bool = False  # re-dressed bit, no purchase cost

    def run_length(self, bit: BitType) -> float:
        if self.actual_distance is None:
            return bit.max_run_length
        return self.actual_distance

    def penetration_rate(self, bit: BitType) -> float:
        if self.actual_rop is None:
            return bit.penetration_rate
        return self.actual_rop

    def to_dict(self):
        data = {'bit_id': self.bit_id}
        if self.actual_distance is not None:
            data['actual_distance'] = self.actual_distance
        if self.actual_rop is not None:
            data['actual_rop'] = self.actual_rop
        if self.is_rerun:
            data['is_rerun'] = True
        return data


SequenceItem = Union[str, BitSequenceEntry]


def as_entry(item) -> Optional[BitSequenceEntry]:
    """Normalise a sequence item; anything unrecognised maps to None."""
    if isinstance(item, BitSequenceEntry):
        return item
    if isinstance(item, str):
        return BitSequenceEntry(item)
    return None


def sequence_item_to_dict(item):
    """Plain ids stay plain; entries become dicts."""
    if isinstance(item, BitSequenceEntry):
        return item.to_dict()
    return item


@dataclass(frozen=True)
class ScenarioConfig:
    """A named bit sequence owned by the caller."""
    id: str
    name: str
    bit_sequence: Tuple[SequenceItem, ...] = field(default_factory=tuple)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'bit_sequence': [sequence_item_to_dict(item) for item in self.bit_sequence],
        }


def active_bits(bit_types: List[BitType]) -> List[BitType]:
    """Bit types the optimizer is allowed to use."""
    return [bit for bit in bit_types if bit.active]
