"""
Run configuration shared by the CLI commands.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Tuple

from .algorithms import ALGORITHMS, QUANTUM_ALGORITHMS
from .errors import ConfigurationError

DEFAULT_QUANTUM = 2
DEFAULT_ALGORITHMS: Tuple[str, ...] = ("fcfs", "sjf", "priority", "rr")


@dataclass(frozen=True)
class SimulationConfig:
    quantum: int = DEFAULT_QUANTUM
    algorithms: Tuple[str, ...] = field(default=DEFAULT_ALGORITHMS)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SimulationConfig":
        return cls(
            quantum=args.quantum,
            algorithms=tuple(name.lower() for name in args.algorithms),
        )

    def validate(self) -> "SimulationConfig":
        """
        Raise ConfigurationError unless every algorithm is known and the quantum
        is usable by the ones that need it.
        """
        if not self.algorithms:
            raise ConfigurationError("At least one algorithm must be selected")

        unknown = [name for name in self.algorithms if name not in ALGORITHMS]
        if unknown:
            raise ConfigurationError(
                f"Unknown algorithm(s): {', '.join(unknown)} (choose from {', '.join(ALGORITHMS)})"
            )

        if self.quantum <= 0 and any(name in QUANTUM_ALGORITHMS for name in self.algorithms):
            raise ConfigurationError(f"Time quantum must be a positive integer (got {self.quantum})")

        return self

    def quantum_for(self, name: str):
        return self.quantum if name in QUANTUM_ALGORITHMS else None
