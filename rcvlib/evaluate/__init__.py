'''Count ranked ballots to determine the outcome of an election.

Every counting method is a :class:`core.TallyAlgorithm`: it takes the options,
the ballots and an optional source of randomness for tiebreaking, and returns
an :class:`rcvlib.result.ElectionResult` with the winner (or the tied options)
and a summary of every counting round. Algorithms are interchangeable, so
a :class:`rcvlib.poll.Poll` can be counted by any of them.

Currently, the instant-runoff tally (:class:`sequential.InstantRunoffTally`)
is provided.

None of the algorithms validate the ballots against the options; use
:class:`rcvlib.poll.Poll` or :func:`rcvlib.vote.validate_ballots` for that.
'''

from rcvlib.evaluate.core import *    # noqa
