# drillcost/models/optimization.py
from dataclasses import dataclass, field
from typing import List, Optional

from drillcost.models.scenario_result import ScenarioResult, ScenarioStatus


@dataclass
class OptimizationResult:
    """Optimizer output with the metrics of its replayed sequence."""
    method: str
    bit_sequence: List[str] = field(default_factory=list)
    estimated_cost: float = 0.0
    estimated_time: float = 0.0
    cost_per_unit_depth: float = 0.0
    status: ScenarioStatus = ScenarioStatus.INCOMPLETE
    result: Optional[ScenarioResult] = None

    @property
    def found(self) -> bool:
        """An empty sequence means no plan was produced."""
        return bool(self.bit_sequence)

    def to_dict(self):
        return {
            'method': self.method,
            'found': self.found,
            'bit_sequence': list(self.bit_sequence),
            'estimated_cost': self.estimated_cost,
            'estimated_time': self.estimated_time,
            'cost_per_unit_depth': self.cost_per_unit_depth,
            'status': self.status.value,
        }
