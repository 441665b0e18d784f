from space_shooter.entities import Bullet
from space_shooter.state import Outcome

from .conftest import run_ticks


def hold_fire(session, clock):
    """Pretend the boss just fired so no new boss bullet appears this tick"""
    session.state.boss.last_shot = clock()


def test_boss_fires_on_first_tick(level_two, clock):
    state = level_two.state
    boss = state.boss

    clock.advance()
    level_two.tick()

    assert len(state.boss_bullets) == 1
    shot = state.boss_bullets[0]
    # Spawned 30 below the boss, then fell once
    assert shot.x == boss.x
    assert shot.y == boss.y + 30 + 6
    assert boss.last_shot == clock()


def test_boss_fires_every_two_seconds(level_two, clock):
    state = level_two.state
    boss = state.boss

    clock.advance(0.5)
    level_two.tick()
    assert len(state.boss_bullets) == 1

    clock.advance(1.5)
    level_two.tick()
    assert len(state.boss_bullets) == 1

    clock.advance(0.5)
    level_two.tick()
    assert len(state.boss_bullets) == 2
    newest = state.boss_bullets[-1]
    assert (newest.x, newest.y) == (boss.x, boss.y + 30 + 6)


def test_boss_fires_exactly_two_seconds_after_last_shot(level_two, clock):
    state = level_two.state
    hold_fire(level_two, clock)

    clock.advance(2.0)
    level_two.tick()

    assert len(state.boss_bullets) == 1
    assert state.boss_bullets[0].y == state.boss.y + 30 + 6



def test_boss_holds_still_then_moves(level_two, clock):
    boss = level_two.state.boss
    start_x = boss.x

    clock.advance(1.0)
    level_two.tick()
    assert boss.x == start_x

    clock.advance(2.0)  # 3s: moving phase
    level_two.tick()
    assert boss.x == start_x + 2
    level_two.tick()
    assert boss.x == start_x + 4

    clock.advance(3.0)  # 6s: still again
    level_two.tick()
    assert boss.x == start_x + 4


def test_boss_reverses_at_margins(level_two, clock):
    state = level_two.state
    boss = state.boss
    width = state.config.width

    boss.x = width - 41
    clock.advance(3.0)
    level_two.tick()
    assert boss.x == width - 39
    assert not boss.moving_right

    level_two.tick()
    assert boss.x == width - 41

    boss.x = 41
    level_two.tick()
    assert boss.x == 39
    assert boss.moving_right


def test_boss_bullet_hitting_player_loses(level_two, clock, renderer):
    state = level_two.state
    state.boss_bullets = [Bullet(x=state.player.x, y=state.player.y - 6, vy=6)]

    clock.advance()
    level_two.tick()

    assert state.outcome == Outcome.LOSE
    assert renderer.messages == ["YOU LOSE"]


def test_boss_bullet_leaving_bottom_is_removed(level_two, clock):
    state = level_two.state
    hold_fire(level_two, clock)
    state.boss_bullets = [Bullet(x=100, y=718, vy=6)]
    clock.advance()
    level_two.tick()
    assert state.boss_bullets == []
    assert state.outcome == Outcome.LEVEL_TWO


def test_bullets_cancel_each_other(level_two, clock):
    state = level_two.state
    hold_fire(level_two, clock)
    state.bullets = [Bullet(x=500, y=400, vy=-8)]
    state.boss_bullets = [Bullet(x=500, y=384, vy=6)]

    clock.advance()
    level_two.tick()

    assert state.bullets == []
    assert state.boss_bullets == []
    assert state.outcome == Outcome.LEVEL_TWO


def test_one_boss_bullet_cancels_one_player_bullet(level_two, clock):
    state = level_two.state
    hold_fire(level_two, clock)
    state.bullets = [Bullet(x=500, y=400, vy=-8), Bullet(x=502, y=400, vy=-8)]
    state.boss_bullets = [Bullet(x=500, y=384, vy=6)]

    clock.advance()
    level_two.tick()

    assert len(state.bullets) == 1
    assert state.boss_bullets == []


def test_player_bullet_damages_boss(level_two, clock):
    state = level_two.state
    boss = state.boss
    state.bullets = [Bullet(x=boss.x, y=boss.y + 10, vy=-8)]

    clock.advance()
    level_two.tick()

    assert boss.hp == 3
    assert state.bullets == []
    assert level_two.snapshot()["boss_hp"] == 3
    assert state.outcome == Outcome.LEVEL_TWO


def test_last_hit_wins(level_two, clock, renderer):
    state = level_two.state
    boss = state.boss
    boss.hp = 1
    state.bullets = [Bullet(x=boss.x, y=boss.y + 10, vy=-8)]

    clock.advance()
    level_two.tick()

    assert state.outcome == Outcome.WIN
    assert state.bullets == []
    assert state.boss is None
    assert renderer.messages == ["YOU WIN"]
    assert level_two.snapshot()["state"] == "win"


def test_timeout_beats_winning_hit(level_two, clock):
    state = level_two.state
    boss = state.boss
    boss.hp = 1
    state.time_remaining = 0.001
    state.bullets = [Bullet(x=boss.x, y=boss.y + 10, vy=-8)]

    clock.advance()
    level_two.tick()

    assert state.outcome == Outcome.LOSE
    assert boss.hp == 1


def test_touching_the_boss_loses(level_two, clock):
    state = level_two.state
    hold_fire(level_two, clock)
    state.player.x = state.boss.x
    state.player.y = state.boss.y + 20

    clock.advance()
    level_two.tick()

    assert state.outcome == Outcome.LOSE


def test_contact_needs_close_centers(level_two, clock):
    state = level_two.state
    hold_fire(level_two, clock)
    # Boxes overlap (|dx| 52 < 55) but the centers are 52 apart
    state.player.x = state.boss.x + 52
    state.player.y = state.boss.y

    clock.advance()
    level_two.tick()

    assert state.outcome == Outcome.LEVEL_TWO


def test_out_of_ammo_loses(level_two, clock):
    state = level_two.state
    state.bullets_remaining = 0
    clock.advance()
    level_two.tick()
    assert state.outcome == Outcome.LOSE


def test_out_of_ammo_waits_for_bullets_in_flight(level_two, clock):
    state = level_two.state
    state.bullets_remaining = 0
    state.bullets = [Bullet(x=100, y=600, vy=-8)]
    clock.advance()
    level_two.tick()
    assert state.outcome == Outcome.LEVEL_TWO


def test_finished_session_no_longer_updates(level_two, clock):
    state = level_two.state
    state.bullets_remaining = 0
    clock.advance()
    level_two.tick()
    assert state.outcome == Outcome.LOSE

    time_left = state.time_remaining
    run_ticks(level_two, clock, 10)
    assert state.time_remaining == time_left
    assert state.outcome == Outcome.LOSE


def test_boss_and_bullets_are_drawn(level_two, clock, renderer):
    state = level_two.state
    state.bullets = [Bullet(x=100, y=600, vy=-8)]
    state.boss_bullets = [Bullet(x=200, y=300, vy=6)]
    renderer.calls = []

    clock.advance()
    level_two.tick()

    assert ("boss", state.boss.x, state.boss.y) in renderer.calls
    assert ("bullet", 100, 592, False) in renderer.calls
    assert ("bullet", 200, 306, True) in renderer.calls
