"""Timing instrumentation for the generation phases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class PhaseMetrics:
    """Timings of one generation phase, accumulated over every time it ran."""

    name: str
    invocations: int = 0
    total_time: float = 0.0
    slowest: Optional[float] = None

    def record(self, duration: float) -> None:
        self.invocations += 1
        self.total_time += duration
        if self.slowest is None or duration > self.slowest:
            self.slowest = duration

    def to_dict(self) -> Dict[str, float | int]:
        return {
            "invocations": self.invocations,
            "total_time": self.total_time,
            "average_time": self.total_time / self.invocations if self.invocations else 0.0,
            "slowest_time": self.slowest or 0.0,
        }


@dataclass
class GenerationMetrics:
    """Phase timings of a generator, keyed by phase name in the order phases first ran."""

    phases: Dict[str, PhaseMetrics] = field(default_factory=dict)

    def record_phase(self, name: str, duration: float) -> None:
        self.phases.setdefault(name, PhaseMetrics(name=name)).record(duration)

    @property
    def total_time(self) -> float:
        return sum(phase.total_time for phase in self.phases.values())

    def snapshot(self) -> Dict[str, Dict[str, float | int]]:
        return {name: metrics.to_dict() for name, metrics in self.phases.items()}
