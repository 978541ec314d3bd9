"""A commandline tool for quick evaluation of ranked-choice elections.

Loads ranked ballots from a BLT file, counts them and shows the results
round by round.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Optional

import rcvlib.persist
import rcvlib.system
import rcvlib.util
import rcvlib.io.blt
from rcvlib.io.core import ElectionData
from rcvlib.poll import Poll
from rcvlib.result import ElectionResult

argparser = argparse.ArgumentParser(
    prog='rcvlib',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='BLT file to load input ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load input ballots from standard input',
)
argparser.add_argument(
    '-s', '--system',
    default='irv',
    choices=list(rcvlib.system.SYSTEMS.keys()),
    help='voting system to use',
)
argparser.add_argument(
    '-r', '--seed',
    type=int,
    help='seed for breaking ties at random (makes the result reproducible)',
)
argparser.add_argument(
    '-j', '--json',
    dest='as_json',
    action='store_true',
    help='output the full result as JSON',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tally log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tally log messages',
)


def main(input_file: Optional[io.TextIOBase],
         use_stdin: bool = False,
         system: str = 'irv',
         seed: Optional[int] = None,
         as_json: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> Optional[ElectionResult]:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    data = rcvlib.io.blt.load(input_file)
    if not data.ballots:
        warnings.warn('empty ballots: cannot evaluate election, terminating')
        return None
    voting_system = rcvlib.system.get_system(system)
    poll = Poll(data.options, title=data.election_name)
    if not as_json:
        show_setup(poll, data, voting_system.name)
    result = poll.tally(data.ballots, voting_system, random_source=seed)
    if as_json:
        print(json.dumps(rcvlib.persist.to_dict(result), indent=2))
    else:
        show_result(poll, result)
    return result


def show_setup(poll: Poll, data: ElectionData, system_name: str) -> None:
    print()
    if poll.title:
        print(poll.title)
    print(f'Running a {system_name} election')
    print(f'Received {len(data.ballots)} ballots'
          f' for {len(poll.options)} options:')
    for option in poll.options:
        print(' ' * 10 + str(option))
    print()


def show_result(poll: Poll, result: ElectionResult) -> None:
    """Show the vote counts in all rounds and the election outcome."""
    label_width = max(len(opt.label) for opt in poll.options)
    for rnd in result.rounds:
        print(f'Round {rnd.round_number}'
              f' ({rnd.total_votes} ballots counted)')
        for option_id, n_votes in rcvlib.util.sorted_votes(rnd.vote_counts):
            label = poll.get_option(option_id).label
            print(' ' * 4 + label.ljust(label_width), ' ', n_votes)
        if not rnd.is_final:
            eliminated = poll.get_option(rnd.eliminated_option_id)
            print(' ' * 4 + f'Eliminated: {eliminated}')
        print()
    if result.is_tie:
        print('Tied: ' + ', '.join(str(opt) for opt in result.tied_options))
    else:
        print(f'Elected: {result.winner}')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
