"""rcvlib - a library for counting ranked-choice elections.

An election counted by rcvlib consists of the following:

-   The options (candidates) standing in the election, defined by the
    :class:`candidate.Option` objects.
-   The ranked ballots cast by voters, represented by
    :class:`vote.RankedBallot` objects.
-   A poll (:class:`poll.Poll`) tying the two together: it makes sure the
    options form a valid election and that the ballots only rank them.
-   A tally algorithm from the :mod:`evaluate` subpackage, which counts the
    ballots, currently the instant-runoff tally
    (:class:`evaluate.sequential.InstantRunoffTally`).

The outcome is an :class:`result.ElectionResult` with the winner or the tied
options and a summary of every counting round, which the :mod:`persist`
module can turn into a JSON-ready dictionary. Ballots can be loaded from BLT
files using :mod:`io.blt`; ``python -m rcvlib`` does all of this from the
command line.
"""
