import pytest

from conftest import make_record, write_year_file
from skyalmanac.almanac import main


@pytest.fixture
def env_data_dir(data_dir, monkeypatch):
    monkeypatch.setenv("SKYALMANAC_DATA_DIR", str(data_dir))
    return data_dir


def test_single_frame_html(env_data_dir, tmp_path, capsys):
    out = tmp_path / "moon.html"
    assert main(["2024-04-23", "--time", "21:30", "--svg", "--out", str(out)]) == 0
    assert "<svg" in out.read_text(encoding="utf-8")
    assert f"Saved: {out}" in capsys.readouterr().out


def test_missing_date_exits_one(env_data_dir):
    assert main(["2024-06-01", "--svg"]) == 1


def test_sweep_writes_numbered_frames(env_data_dir, tmp_path):
    out = tmp_path / "sweep"
    argv = ["2024-04-23", "--sweep", "3", "--width", "200", "--height", "120", "--out", str(out)]
    assert main(argv) == 0
    assert sorted(p.name for p in out.iterdir()) == [
        "2024-04-23_000.png",
        "2024-04-23_001.png",
        "2024-04-23_002.png",
    ]


def test_sweep_without_moonrise(tmp_path, monkeypatch):
    write_year_file(tmp_path, 2024, [make_record(gregorian="2024-05-01", moonrise=None)])
    monkeypatch.setenv("SKYALMANAC_DATA_DIR", str(tmp_path))
    assert main(["2024-05-01", "--sweep", "4", "--out", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()
