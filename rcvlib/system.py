from typing import Dict

import rcvlib.evaluate.core
import rcvlib.evaluate.sequential
from rcvlib.persist import simple_serialization


@simple_serialization
class VotingSystem(rcvlib.evaluate.core.TallyAlgorithm):
    """A named voting system. Wraps a tally algorithm.

    Can be used wherever the wrapped algorithm can.

    :param name: Name of the system, for display.
    :param algorithm: Tally algorithm representing the system.
    """
    def __init__(self, name: str, algorithm: rcvlib.evaluate.core.TallyAlgorithm):
        self.name = name
        self.algorithm = algorithm

    def compute(self, options, ballots, random_source=None):
        """Return the algorithm's results for the ballots given."""
        return self.algorithm.compute(options, ballots, random_source)


SYSTEMS: Dict[str, VotingSystem] = {
    "irv": VotingSystem(
        'Instant-Runoff',
        rcvlib.evaluate.sequential.InstantRunoffTally()
    ),
}


def get_system(key: str) -> VotingSystem:
    """Return a voting system by its key in :data:`SYSTEMS`."""
    try:
        return SYSTEMS[key]
    except KeyError as e:
        raise KeyError(f'unknown voting system {str(e)}, available: '
                       + ', '.join(SYSTEMS.keys())) from e
