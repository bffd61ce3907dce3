from flapjack.game.characters import CHARACTERS
from flapjack.game.config import PIPE_GAP, HEIGHT
from flapjack.game.loop import FrameScheduler, LoopDriver, Phase
from flapjack.game.obstacles import Obstacle
from flapjack.game.score import MemoryHighScoreStore, ScoreTracker


def make_driver(high=0, **kw):
    scheduler = FrameScheduler()
    store = MemoryHighScoreStore(high)
    driver = LoopDriver(scheduler, ScoreTracker(store), seed=3, **kw)
    return driver, scheduler, store


def crash(driver, scheduler):
    driver.state.actor.y = -1000
    scheduler.run_frame()
    assert driver.phase is Phase.ENDED


def test_scheduler_runs_next_frame_and_cancels():
    s = FrameScheduler()
    ran = []
    h1 = s.request(lambda: ran.append(1))
    s.request(lambda: ran.append(2))
    s.cancel(h1)
    assert s.pending == 1
    assert s.run_frame() == 1
    assert ran == [2]
    assert s.pending == 0
    s.cancel(h1)  # already gone: no-op
    s.cancel(None)


def test_request_during_frame_waits_for_next_frame():
    s = FrameScheduler()
    count = []
    def tick():
        count.append(1)
        s.request(tick)
    s.request(tick)
    s.run_frame()
    s.run_frame()
    assert len(count) == 2
    assert s.pending == 1


def test_menu_until_selection():
    driver, scheduler, _ = make_driver()
    assert driver.phase is Phase.MENU
    assert scheduler.pending == 0
    driver.flap()
    driver.restart()
    driver.choose_new()
    assert scheduler.pending == 0
    driver.select(CHARACTERS[0])
    assert driver.phase is Phase.RUNNING
    assert driver.selection == CHARACTERS[0]
    assert scheduler.pending == 1


def test_one_tick_outstanding_while_playing():
    driver, scheduler, _ = make_driver()
    driver.select(CHARACTERS[1])
    driver.select(CHARACTERS[2])   # ignored while running
    assert driver.selection == CHARACTERS[1]
    for _ in range(10):
        driver.flap()
        scheduler.run_frame()
        assert scheduler.pending == 1
    assert driver.state.run.frame_count == 10


def test_restart_ignored_while_running():
    driver, scheduler, _ = make_driver()
    driver.select(CHARACTERS[0])
    scheduler.run_frame()
    driver.restart()
    assert driver.state.run.frame_count == 1
    assert scheduler.pending == 1


def test_ended_run_freezes_but_keeps_rendering():
    frames = []
    driver, scheduler, _ = make_driver(render_hook=lambda st: frames.append(st.run.ended))
    driver.select(CHARACTERS[0])
    crash(driver, scheduler)
    assert frames == [True]   # the colliding tick still renders the overlay
    y = driver.state.actor.y
    driver.flap()
    scheduler.run_frame()
    assert driver.state.actor.y == y
    assert frames == [True, True]
    assert scheduler.pending == 1


def test_restart_keeps_high_score():
    driver, scheduler, store = make_driver(high=12)
    driver.select(CHARACTERS[0])
    actor = driver.state.actor
    top = actor.y - PIPE_GAP / 2
    driver.state.obstacles.obstacles = [Obstacle(x=10, top=top, bottom=top + PIPE_GAP) for _ in range(5)]
    scheduler.run_frame()
    assert driver.state.run.score == 5
    crash(driver, scheduler)

    driver.restart()
    assert driver.phase is Phase.RUNNING
    assert driver.state.run.score == 0
    assert driver.state.run.ended is False
    assert driver.state.run.frame_count == 0
    assert len(driver.state.obstacles) == 0
    assert driver.high_score == 12
    assert store.value == 12
    assert scheduler.pending == 1


def test_new_best_persists_through_restart():
    driver, scheduler, store = make_driver(high=3)
    driver.select(CHARACTERS[0])
    top = driver.state.actor.y - PIPE_GAP / 2
    driver.state.obstacles.obstacles = [Obstacle(x=10, top=top, bottom=top + PIPE_GAP) for _ in range(5)]
    scheduler.run_frame()
    crash(driver, scheduler)
    driver.restart()
    assert driver.high_score == 5
    assert store.value == 5


def test_choose_new_returns_to_menu_without_ticks():
    driver, scheduler, _ = make_driver()
    driver.select(CHARACTERS[0])
    crash(driver, scheduler)
    driver.choose_new()
    assert driver.phase is Phase.MENU
    assert driver.selection is None
    assert scheduler.pending == 0
    assert driver.state.run.score == 0
    scheduler.run_frame()
    assert driver.state.run.frame_count == 0

    driver.select(CHARACTERS[4])
    assert scheduler.pending == 1
    scheduler.run_frame()
    assert scheduler.pending == 1
    assert driver.state.run.frame_count == 1


def test_resize_moves_spawn_edge():
    driver, scheduler, _ = make_driver()
    driver.select(CHARACTERS[0])
    driver.resize(900, HEIGHT)
    driver.state.run.frame_count = 119
    driver.state.actor.vy = -0.5   # hover so the bird stays mid-screen for this frame
    scheduler.run_frame()
    assert [o.x for o in driver.state.obstacles] == [900 - 5]
