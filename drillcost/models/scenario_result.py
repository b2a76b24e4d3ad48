# drillcost/models/scenario_result.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Activity(Enum):
    """Rig activity recorded on a timeline step."""
    START = 'start'
    TRIPPING = 'tripping'
    CIRCULATING = 'circulating'
    DRILLING = 'drilling'


class ScenarioStatus(Enum):
    COMPLETE = 'complete'
    INCOMPLETE = 'incomplete'


@dataclass(frozen=True)
class SimulationStep:
    """A point on the campaign timeline (cumulative values)."""
    depth: float  # meters
    elapsed_time: float  # hours
    cumulative_cost: float  # currency
    activity: Activity
    bit_name: Optional[str] = None  # set for drilling steps only

    def to_dict(self):
        data = {
            'depth': self.depth,
            'elapsed_time': self.elapsed_time,
            'cumulative_cost': self.cumulative_cost,
            'activity': self.activity.value,
        }
        if self.bit_name is not None:
            data['bit_name'] = self.bit_name
        return data


@dataclass
class ScenarioResult:
    """Timeline and summary metrics of one simulated scenario."""
    id: str
    name: str
    steps: List[SimulationStep]
    total_time: float  # hours
    total_cost: float  # currency
    cost_per_unit_depth: float  # currency per meter drilled, 0 if nothing drilled
    bits_used: Dict[str, int] = field(default_factory=dict)
    status: ScenarioStatus = ScenarioStatus.INCOMPLETE

    @property
    def final_depth(self) -> float:
        return self.steps[-1].depth

    @property
    def depth_drilled(self) -> float:
        return self.final_depth - self.steps[0].depth

    @property
    def is_complete(self) -> bool:
        return self.status is ScenarioStatus.COMPLETE

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'steps': [step.to_dict() for step in self.steps],
            'total_time': self.total_time,
            'total_cost': self.total_cost,
            'cost_per_unit_depth': self.cost_per_unit_depth,
            'bits_used': [{'name': name, 'count': count} for name, count in self.bits_used.items()],
            'final_depth': self.final_depth,
            'status': self.status.value,
        }
