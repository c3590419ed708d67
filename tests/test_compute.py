import json

import pytest

from conftest import make_record, write_year_file
from skyalmanac.compute import compute_frame, run, sweep_frames
from skyalmanac.data import AlmanacDataError
from skyalmanac.i18n import FALLBACK_FACTS, t
from skyalmanac.models import DayAstronomy, Phase, QueryInput, Viewport


def test_compute_frame_noon(day):
    frame = compute_frame(day, 720, Viewport(900, 360))
    assert frame.minutes == 720
    assert frame.sample.phase is Phase.DAY
    assert frame.sun.x == pytest.approx(450)
    assert frame.moon is not None
    assert frame.illumination_pct == 52
    assert frame.silhouette.kind == "partial"
    assert frame.stage_sentence == t("stage_almost_full", "he")


def test_compute_frame_wraps_minutes(day):
    assert compute_frame(day, 1440 + 60).minutes == 60
    assert compute_frame(day, 60).sun is None


def test_run_with_time(data_dir):
    frame = run(QueryInput(date="2024-04-23", time="21:30"), directory=data_dir)
    assert frame.minutes == 21 * 60 + 30
    assert frame.date == "2024-04-23"
    assert frame.hebrew_date == "ט״ו בניסן תשפ״ד"
    assert frame.sun is None
    assert frame.moon is not None
    assert frame.illumination_pct == 100
    assert frame.stage_sentence == t("stage_full", "he")
    # Previous sunset 19:14 and today's 19:15, both plus 20 minutes
    assert frame.hebrew_window == (1174, 1175)


def test_run_without_time_picks_moon_up_moment(data_dir):
    frame = run(QueryInput(date="2024-04-23"), directory=data_dir)
    assert frame.minutes == 15
    assert frame.moon is not None


def test_run_across_year_boundary(data_dir):
    frame = run(QueryInput(date="2024-01-01", time="12:00"), directory=data_dir, lang="en")
    assert frame.hebrew_window[0] == 16 * 60 + 44 + 20
    assert frame.stage_sentence == t("stage_shrinking", "en")


def test_run_errors(data_dir):
    with pytest.raises(AlmanacDataError):
        run(QueryInput(date="2024-06-01"), directory=data_dir)
    with pytest.raises(AlmanacDataError):
        run(QueryInput(date="2024-04-23", time="noon"), directory=data_dir)


def test_compute_frame_clamps_out_of_range_day():
    odd = DayAstronomy(360, 1080, 600, 1300, hebrew_day=0, illumination=1.4, waxing=True)
    frame = compute_frame(odd, 720)
    assert frame.illumination_pct == 100
    assert frame.silhouette.kind == "full"
    assert frame.stage_sentence == t("stage_born", "he")

    dark = DayAstronomy(360, 1080, 600, 1300, hebrew_day=31, illumination=-0.2, waxing=False)
    frame = compute_frame(dark, 720)
    assert frame.illumination_pct == 0
    assert frame.stage_sentence == t("stage_ending", "he")


def test_compute_frame_mode(day):
    assert compute_frame(day, 720).mode == "mode-day"
    assert compute_frame(day, 1060).mode == "mode-dusk"
    assert compute_frame(day, 0).mode == "mode-night"


def test_run_attaches_fallback_fact(data_dir):
    frame = run(QueryInput(date="2024-04-23", time="21:30"), directory=data_dir)
    assert frame.fact in FALLBACK_FACTS["he"]

    frame = run(QueryInput(date="2024-04-23", time="21:30"), directory=data_dir, lang="en")
    assert frame.fact in FALLBACK_FACTS["en"]


def test_run_reads_facts_file(data_dir):
    (data_dir / "facts.json").write_text(
        json.dumps(["לירח אין אטמוספרה."], ensure_ascii=False), encoding="utf-8"
    )
    frame = run(QueryInput(date="2024-04-23", time="21:30"), directory=data_dir)
    assert frame.fact == "לירח אין אטמוספרה."


def test_sweep_frames(data_dir):
    frames = sweep_frames(QueryInput(date="2024-04-23"), count=5, directory=data_dir)
    assert len(frames) == 5
    # Half an hour before the 18:40 moonrise, then 75 minutes past the next one
    assert frames[0].minutes == 1090
    assert frames[-1].minutes == (1090 + 1440 + 105) % 1440
    assert frames[0].moon is None
    assert all(f.date == "2024-04-23" for f in frames)
    assert frames[2].hebrew_window == (1174, 1175)


def test_sweep_frames_needs_two_ends(data_dir):
    assert len(sweep_frames(QueryInput(date="2024-04-23"), count=1, directory=data_dir)) == 2


def test_sweep_frames_without_moonrise(tmp_path):
    write_year_file(tmp_path, 2024, [make_record(gregorian="2024-05-01", moonrise=None)])
    assert sweep_frames(QueryInput(date="2024-05-01"), directory=tmp_path) == []
    with pytest.raises(AlmanacDataError):
        sweep_frames(QueryInput(date="2024-05-02"), directory=tmp_path)
