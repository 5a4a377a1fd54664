"""Testing support for Swiss Pairing.

Provides a seeded tournament simulator used by the test suite and the
``simulate`` command.
"""

from swisspairing.testing.simulator import (
    ResultPattern,
    SimulationReport,
    SimulatorConfig,
    TournamentSimulator,
    verify_round,
)

__all__ = [
    "ResultPattern",
    "SimulationReport",
    "SimulatorConfig",
    "TournamentSimulator",
    "verify_round",
]
