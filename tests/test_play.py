import pytest

from space_shooter import play as play_module
from space_shooter.config import GameConfig
from space_shooter.entities import Asteroid
from space_shooter.render import RenderInitError
from space_shooter.session import Session


class TrackingSession(Session):
    instances = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.close_calls = 0
        TrackingSession.instances.append(self)

    def close(self):
        self.close_calls += 1
        super().close()


@pytest.fixture
def arcade_window():
    pytest.importorskip("arcade")
    from space_shooter import arcade_window
    return arcade_window


def test_invalid_cli_config_exits_through_argparse(capsys):
    with pytest.raises(SystemExit) as exc:
        play_module.main(["--level-time", "0"])
    assert exc.value.code == 2
    assert "level_time" in capsys.readouterr().err


def test_random_agent_cli(capsys):
    code = play_module.main(["--random-agent", "--episodes", "2", "--seed", "0", "--level-time", "0.5"])
    assert code == 0
    assert "Random agent over 2 episodes" in capsys.readouterr().out


def test_window_failure_raises_render_init_error(arcade_window, monkeypatch):
    def broken_window(*args, **kwargs):
        raise RuntimeError("no display")

    monkeypatch.setattr(arcade_window, "ShooterWindow", broken_window)
    renderer = arcade_window.ArcadeRenderer(GameConfig(), seed=0)
    session = Session(renderer=renderer)

    with pytest.raises(RenderInitError) as exc:
        arcade_window.open_window(session, renderer)
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_play_reports_render_failure_and_tears_down(arcade_window, monkeypatch, capsys):
    def failing_open_window(session, renderer, drive_updates=True):
        raise RenderInitError("no display")

    TrackingSession.instances = []
    monkeypatch.setattr(arcade_window, "open_window", failing_open_window)
    monkeypatch.setattr(play_module, "Session", TrackingSession)

    code = play_module.play(GameConfig(), seed=0)

    assert code == 1
    assert "Game cannot start" in capsys.readouterr().out
    session = TrackingSession.instances[-1]
    assert session.close_calls == 1
    assert session.closed


def test_asteroid_shape_is_not_reused_for_a_new_asteroid(arcade_window):
    renderer = arcade_window.ArcadeRenderer(GameConfig(), seed=0)
    old = Asteroid(x=100, y=100)
    new = Asteroid(x=200, y=100)

    # A stale entry filed under the new asteroid's id
    renderer._asteroid_shapes[id(new)] = (old, [(0.0, 0.0)] * 8, [])
    renderer.draw_asteroid(new)

    cached, outline, lines = renderer._asteroid_shapes[id(new)]
    assert cached is new
    assert outline != [(0.0, 0.0)] * 8
    assert len(lines) == 5


def test_asteroid_shape_is_stable_while_drawn(arcade_window):
    renderer = arcade_window.ArcadeRenderer(GameConfig(), seed=0)
    asteroid = Asteroid(x=100, y=100)

    renderer.draw_asteroid(asteroid)
    first = renderer._asteroid_shapes[id(asteroid)]
    renderer.clear()
    renderer.draw_asteroid(asteroid)
    assert renderer._asteroid_shapes[id(asteroid)] is first

    renderer.clear()
    renderer.clear()
    assert renderer._asteroid_shapes == {}
