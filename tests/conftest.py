import os
import random
import sys

import pytest

# Ensure project root (where maze.py lives) is on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from scheduler import Scheduler
from session import MazeSession


@pytest.fixture
def session():
    return MazeSession(rng=random.Random(1234))


@pytest.fixture
def scheduler():
    return Scheduler()
