"""Reading and writing ballots in the BLT format.

The BLT format (used by OpenSTV, Droop, ERS and many other counting programs)
stores a whole election in a single text file::

    4 1             # number of candidates, number of seats
    -2              # optional: withdrawn candidates (negative indices)
    3 1 3 0         # ballots: weight, candidate indices by preference, 0
    2 4 0
    0               # end of ballots
    "Amy"           # candidate names, in index order
    "Bob"
    "Chuck"
    "Diane"
    "Gardening Club Election"   # optional election name

Only single-seat elections with whole ballot weights can be represented as
ranked ballots; a ballot line with weight ``n`` is loaded as ``n`` identical
ballots. The options get the 1-based candidate indices as their identifiers.
"""

from decimal import Decimal
from numbers import Number
from typing import List, Dict, Tuple, Set, Iterable, Optional

import rcvlib.io.core
from rcvlib.candidate import Option
from rcvlib.io.core import ElectionData
from rcvlib.vote import RankedBallot, ValidationError


class NotSupportedInBLT(rcvlib.io.core.NotSupportedInFormat):
    FORMAT = 'BLT file'


class BLTParseError(rcvlib.io.core.ParseError):
    pass


def dump_lines(options: List[Option],
               ballots: Iterable[RankedBallot],
               election_name: Optional[str] = None,
               ) -> Iterable[str]:
    index_by_id = {opt.id: i + 1 for i, opt in enumerate(options)}
    yield _dump_numline([len(options), 1])
    for preferences, n_ballots in _group_ballots(ballots).items():
        try:
            indices = [index_by_id[oid] for oid in preferences]
        except KeyError as e:
            raise ValueError(f'ballot ranks unknown option {e}') from e
        yield _dump_numline([n_ballots] + indices + [0])
    yield _dump_numline([0])
    for opt in options:
        yield _dump_strline(opt.label)
    if election_name is not None:
        yield _dump_strline(election_name)


dump, dumps = rcvlib.io.core.dumpers(dump_lines)


def _group_ballots(ballots: Iterable[RankedBallot]
                   ) -> Dict[Tuple, int]:
    grouped = {}
    for ballot in ballots:
        grouped[ballot.preferences] = grouped.get(ballot.preferences, 0) + 1
    return grouped


def _dump_numline(nums: List[Number]) -> str:
    return ' '.join(str(num) for num in nums)


def _dump_strline(string: str) -> str:
    return f'"{string}"'


def load_lines(blt_lines: Iterable[str]) -> ElectionData:
    try:
        n_cands, n_seats = _parse_header(next(blt_lines))
    except StopIteration as e:
        raise BLTParseError('empty BLT file') from e
    if n_seats != 1:
        raise NotSupportedInBLT(f'election for {n_seats} seats')
    weighted, withdrawn = _parse_body(blt_lines, n_cands)
    names, election_name = _parse_strings(blt_lines, n_cands)
    if names is None:
        names = [str(i + 1) for i in range(n_cands)]
    options = [
        Option(i + 1, name) for i, name in enumerate(names)
        if i + 1 not in withdrawn
    ]
    return ElectionData(
        options=options,
        ballots=_expand_ballots(weighted, withdrawn),
        election_name=election_name,
    )


load, loads = rcvlib.io.core.loaders(load_lines)


def _expand_ballots(weighted: List[Tuple[int, Tuple[int, ...]]],
                    withdrawn: Set[int],
                    ) -> List[RankedBallot]:
    ballots = []
    for weight, indices in weighted:
        ballot = RankedBallot(i for i in indices if i not in withdrawn)
        ballots.extend([ballot] * weight)
    return ballots


def _parse_header(blt_line: str) -> Tuple[int, int]:
    blt_result = _parse_numline(blt_line)
    if len(blt_result) == 2 and all(isinstance(n, int) for n in blt_result):
        return tuple(blt_result)
    else:
        raise BLTParseError(f'need two integers (candidate and seat count)'
                            f' in BLT file header line, got {blt_result!r}')


def _parse_body(blt_lines: Iterable[str],
                n_cands: int,
                ) -> Tuple[List[Tuple[int, Tuple[int, ...]]], Set[int]]:
    ballots = []
    withdrawn = set()
    for line in blt_lines:
        result = _parse_numline(line, allow_first_decimal=True)
        if not result:
            continue    # ignore empty lines
        elif result == [0]:
            return ballots, withdrawn
        elif result[0] < 0:
            if ballots:
                raise BLTParseError('withdrawn candidate line after ballot'
                                    f' line: {line!r}')
            for n in result:
                if not isinstance(n, int) or not 1 <= -n <= n_cands:
                    raise BLTParseError(
                        f'withdrawn candidate index {n} out of range'
                        f' -{n_cands}..-1 in line {line!r}'
                    )
            withdrawn.update(-n for n in result)
        else:
            ballots.append(_parse_ballot(result, n_cands))
    raise BLTParseError('incomplete BLT file:'
                        ' EOF before ballot list terminator')


def _parse_ballot(nums: List[Number],
                  n_cands: int,
                  ) -> Tuple[int, Tuple[int, ...]]:
    if nums[-1] != 0:
        raise BLTParseError(f'ballot line must be zero-terminated, got {nums!r}')
    weight, indices = nums[0], tuple(nums[1:-1])
    if not isinstance(weight, int):
        raise NotSupportedInBLT(f'fractional ballot weight {weight}')
    for i in indices:
        if not 1 <= i <= n_cands:
            raise BLTParseError(f'candidate index {i} out of range'
                                f' 1..{n_cands} in ballot {nums!r}')
    try:
        RankedBallot(indices)
    except ValidationError as e:
        raise BLTParseError(f'invalid ballot line {nums!r}: {e}') from e
    return weight, indices


def _parse_strings(blt_lines: Iterable[str],
                   n_cands: int,
                   ) -> Tuple[Optional[List[str]], Optional[str]]:
    strings = []
    for blt_line in blt_lines:
        blt_line = _clean_line(blt_line)
        if not blt_line:
            continue
        elif blt_line.startswith('"') and blt_line.endswith('"'):
            strings.append(blt_line[1:-1])
        else:
            raise BLTParseError(f'invalid BLT string line: {blt_line!r}')
    if not strings:
        return None, None
    elif len(strings) == n_cands:
        return strings, None
    elif len(strings) == 1:
        return None, strings[0]
    elif len(strings) == n_cands + 1:
        return strings[:-1], strings[-1]
    else:
        raise BLTParseError(f'{len(strings)} strings found but expecting'
                            f' {n_cands} candidate names + optional title')


def _clean_line(blt_line: str) -> str:
    blt_line = blt_line.strip()
    # Everything after the first hash sign after the last double quote is
    # a comment.
    hash_search_start = blt_line.rfind('"') if '"' in blt_line else 0
    leftmost_hash = blt_line[hash_search_start:].find('#')
    if leftmost_hash == -1:
        return blt_line
    else:
        return blt_line[:(hash_search_start + leftmost_hash)].rstrip()


def _parse_numline(blt_line: str,
                   allow_first_decimal: bool = False,
                   ) -> List[Number]:
    blt_line = _clean_line(blt_line)
    nums = []
    for i, numstr in enumerate(blt_line.split()):
        try:
            nums.append(int(numstr))
        except ValueError:
            if i == 0 and allow_first_decimal:
                try:
                    nums.append(Decimal(numstr))
                    continue
                except ArithmeticError:
                    pass
            raise BLTParseError(f'invalid BLT number item {i}: {numstr!r}')
    return nums
