import sys, os
import random

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from slide2048.events.bus import EventBus
from slide2048.systems.board import BoardSystem
from slide2048.world import create_world


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def world(bus):
    return create_world(bus, rng=random.Random(2048))


@pytest.fixture
def board(world, bus):
    return BoardSystem(world, bus)
