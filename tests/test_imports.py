import sys
import os
import subprocess

import pytest

ROOT = os.path.join(os.path.dirname(__file__), '..')


@pytest.mark.parametrize('module', [
    'rcvlib.evaluate.sequential',
    'rcvlib.evaluate',
    'rcvlib.poll',
    'rcvlib.system',
    'rcvlib.persist',
    'rcvlib.io.blt',
    'rcvlib.__main__',
])
def test_import_fresh(module):
    # each module must import first in a clean interpreter
    completed = subprocess.run(
        [sys.executable, '-c', f'import {module}'],
        cwd=ROOT,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == 0, completed.stderr


def test_cli_help():
    completed = subprocess.run(
        [sys.executable, '-m', 'rcvlib', '--help'],
        cwd=ROOT,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == 0, completed.stderr
    assert '--seed' in completed.stdout
