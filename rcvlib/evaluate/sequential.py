'''Tally algorithms that count ranked ballots in sequential rounds.

This hosts the instant-runoff tally (:class:`InstantRunoffTally`), which
eliminates the weakest option one round at a time until some option holds
a majority of the ballots still in play.
'''

import logging
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence

import rcvlib.util
import rcvlib.evaluate.core
from rcvlib.candidate import Option, OptionId, check_options
from rcvlib.persist import simple_serialization
from rcvlib.result import ElectionResult, RoundSummary
from rcvlib.vote import RankedBallot

logger = logging.getLogger(__name__)


@simple_serialization
class InstantRunoffTally(rcvlib.evaluate.core.TallyAlgorithm):
    '''Select a single winner by eliminating options and transferring votes.

    This is instant-runoff voting (IRV), also called the alternative vote or
    single-winner ranked-choice voting.

    In every round, each ballot counts for its most preferred option still
    in the race. Ballots that rank none of the remaining options are called
    exhausted and count for nobody. Then:

    1.  If an option has strictly more than half of the counted ballots,
        it wins.
    2.  Otherwise, if all remaining options have the same number of votes,
        the election ends in a tie among all of them.
    3.  Otherwise, the option with the fewest votes is eliminated. If more
        options share the lowest count, one of them is chosen at random.
        If a single option remains after the elimination, it wins, and its
        final count is recorded as an extra round.

    Only a tie among *all* remaining options ends the election; a tie among
    some of the weakest options is always resolved by random elimination.
    Every round is recorded in the result; the final round is the only one
    with no option eliminated.
    '''

    def compute(self,
                options: Sequence[Option],
                ballots: Iterable[RankedBallot],
                random_source: rcvlib.evaluate.core.RandomSource = None,
                ) -> ElectionResult:
        '''Run the instant-runoff count.

        :param options: Options standing in the election; at least two, with
            unique identifiers.
        :param ballots: Ranked ballots. Options they rank that are not among
            ``options`` are skipped.
        :param random_source: Seed or random generator for breaking ties for
            the last place.
        :raises EmptyInputError: If there are no ballots.
        :raises ConfigurationError: If the options are not a valid setup.
        '''
        ballots = list(ballots)
        if not ballots:
            raise rcvlib.evaluate.core.EmptyInputError()
        options_by_id = {opt.id: opt for opt in check_options(options)}
        rng = rcvlib.evaluate.core.resolve_random_source(random_source)
        remaining = list(options_by_id.keys())
        rounds = []
        round_number = 1
        logger.info('counting %d ballots for %d options',
                    len(ballots), len(remaining))
        while True:
            logger.info('proceeding to round %d', round_number)
            counts = rcvlib.util.count_first_preferences(ballots, remaining)
            logger.info('current vote totals: %s', counts)
            majority_winner = self.majority_winner(counts)
            if majority_winner is not None:
                logger.info('%s elected by majority', majority_winner)
                rounds.append(RoundSummary(round_number, counts))
                return ElectionResult(
                    winner=options_by_id[majority_winner],
                    rounds=rounds,
                    final_vote_totals=counts,
                )
            if len(counts) > 1 and len(set(counts.values())) == 1:
                logger.info('all remaining options tied: %s', remaining)
                rounds.append(RoundSummary(round_number, counts))
                return ElectionResult(
                    winner=None,
                    rounds=rounds,
                    final_vote_totals=counts,
                    tied_options=[options_by_id[oid] for oid in counts],
                )
            eliminated = self.select_eliminated(counts, rng)
            logger.info('eliminating %s', eliminated)
            rounds.append(RoundSummary(round_number, counts, eliminated))
            remaining.remove(eliminated)
            round_number += 1
            if len(remaining) == 1:
                last_id = remaining[0]
                logger.info('%s elected as the last remaining option', last_id)
                final_counts = rcvlib.util.count_first_preferences(
                    ballots, remaining
                )
                logger.debug('final vote totals: %s', final_counts)
                rounds.append(RoundSummary(round_number, final_counts))
                return ElectionResult(
                    winner=options_by_id[last_id],
                    rounds=rounds,
                    final_vote_totals=final_counts,
                )

    @staticmethod
    def majority_winner(counts: Dict[OptionId, int]) -> Optional[OptionId]:
        '''Return the option with a strict majority of the counted votes.

        A half of the votes is not enough. Returns None if no option has
        a majority, which is always the case if no votes were counted.
        '''
        majority = Fraction(sum(counts.values()), 2)
        logger.debug('majority threshold at %s', majority)
        for option_id, n_votes in counts.items():
            if n_votes > majority:
                return option_id
        return None

    @staticmethod
    def select_eliminated(counts: Dict[OptionId, int], rng) -> OptionId:
        '''Select the option to eliminate: the one with the fewest votes.

        Ties for the last place are broken by drawing uniformly at random,
        with the tied options taken in the order of the counts.
        '''
        lowest: List[OptionId] = rcvlib.util.lowest_candidates(counts)
        if len(lowest) == 1:
            return lowest[0]
        chosen = rcvlib.evaluate.core.pick_random(lowest, rng)
        logger.info('tie for the last place among %s, drew %s',
                    lowest, chosen)
        return chosen
