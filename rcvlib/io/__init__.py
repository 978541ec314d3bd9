"""Input/output of ballots from and to election file formats.

This subpackage is structured into modules by file format. Loaders return
an :class:`core.ElectionData` object holding the options and ranked ballots,
ready to be passed to :class:`rcvlib.poll.Poll`.
"""
