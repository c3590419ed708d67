import pytest

from skyalmanac.i18n import stage_key, stage_sentence, t


def test_t_fallbacks():
    assert t("label_east", "en") == "East"
    assert t("label_east", "fr") == t("label_east", "he")
    assert t("no_such_key", "en") == "no_such_key"


def test_t_formats_arguments():
    assert t("label_illumination", "en", pct=42) == "42% illuminated"


@pytest.mark.parametrize(
    "day, key",
    [
        (1, "stage_born"),
        (3, "stage_born"),
        (4, "stage_growing"),
        (13, "stage_almost_full"),
        (15, "stage_full"),
        (17, "stage_shrinking"),
        (27, "stage_fading"),
        (28, "stage_ending"),
        (30, "stage_ending"),
    ],
)
def test_stage_key(day, key):
    assert stage_key(day) == key


def test_stage_sentence():
    assert stage_sentence(15, "en") == t("stage_full", "en")


@pytest.mark.parametrize("day, same_as", [(0, 1), (-4, 1), (31, 30), (99, 30)])
def test_stage_key_clamps_day(day, same_as):
    assert stage_key(day) == stage_key(same_as)
    assert stage_sentence(day, "he") == stage_sentence(same_as, "he")
