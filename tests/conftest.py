"""
Shared fixtures: a hand-driven clock, a renderer that records calls and a
fixed asteroid layout.
"""

import random

import pytest

from space_shooter.config import GameConfig
from space_shooter.render import Renderer
from space_shooter.session import Session

TICK = 0.016
LAYOUT = [(100.0, 200.0), (300.0, 200.0), (500.0, 200.0), (700.0, 200.0), (900.0, 200.0)]


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def advance(self, dt: float = TICK):
        self.now += dt

    def __call__(self):
        return self.now


class RecordingRenderer(Renderer):
    def __init__(self):
        self.calls = []
        self.messages = []
        self.closed = 0

    def clear(self):
        self.calls.append(("clear",))
        self.messages = []

    def draw_player(self, ship):
        self.calls.append(("player", ship.x, ship.y))

    def draw_bullet(self, bullet, hostile=False):
        self.calls.append(("bullet", bullet.x, bullet.y, hostile))

    def draw_asteroid(self, asteroid):
        self.calls.append(("asteroid", asteroid.x, asteroid.y))

    def draw_boss(self, boss):
        self.calls.append(("boss", boss.x, boss.y))

    def show_message(self, text, color, subtitle=None):
        self.calls.append(("message", text))
        self.messages.append(text)

    def close(self):
        self.closed += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def session(clock, renderer, config):
    return Session(renderer=renderer, config=config, clock=clock, rng=random.Random(7))


@pytest.fixture
def level_one(session):
    session.start_level_one(layout=LAYOUT)
    return session


@pytest.fixture
def level_two(session, clock):
    session.state.start_level_two(clock())
    return session


def run_ticks(session, clock, n, dt=TICK):
    for _ in range(n):
        clock.advance(dt)
        session.tick()
