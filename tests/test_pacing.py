from pathviz.app.pacing import FixedPacer, ReferencePacer, make_pacer, no_delay
from pathviz.config import Settings
from pathviz.core.types import RenderEvent, RunSummary, CURRENT, VISITED, PATH


def test_reference_pacing():
    pace = ReferencePacer(50, 30)
    assert pace(RenderEvent(CURRENT, 0, 0)) == 0
    assert pace(RenderEvent(VISITED, 0, 0)) == 50
    assert [pace(RenderEvent(PATH, 0, c)) for c in range(3)] == [30, 60, 90]
    assert pace(RunSummary(path_length=4, visited_count=9)) == 0


def test_fixed_pacing():
    pace = FixedPacer(20)
    assert pace(RenderEvent(CURRENT, 0, 0)) == 0
    assert pace(RenderEvent(VISITED, 0, 0)) == 20
    assert pace(RenderEvent(PATH, 0, 0)) == 20
    assert pace(RenderEvent(PATH, 0, 1)) == 20


def test_make_pacer_from_settings():
    assert isinstance(make_pacer(Settings()), ReferencePacer)
    assert isinstance(make_pacer(Settings(pacing="fixed", visit_delay_ms=7)), FixedPacer)
    assert make_pacer(Settings(pacing="none")) is no_delay


def test_each_run_gets_a_fresh_counter():
    a = make_pacer(Settings())
    a(RenderEvent(PATH, 0, 0)); a(RenderEvent(PATH, 0, 1))
    b = make_pacer(Settings())
    assert b(RenderEvent(PATH, 0, 0)) == 30
