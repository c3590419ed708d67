"""Moon trivia: a flat JSON array of short strings, shown beside the sky."""

import json
import random
from pathlib import Path

from loguru import logger

from skyalmanac.config import data_dir
from skyalmanac.i18n import FALLBACK_FACTS


def load_facts(path: Path | None = None) -> list[str]:
    """Read the facts array. Never raises; unreadable files give an empty list."""
    path = path or data_dir() / "facts.json"
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("[facts] cannot read {}: {}", path, e)
        return []
    if not isinstance(raw, list):
        logger.warning("[facts] {} is not a list", path)
        return []
    return [item for item in raw if isinstance(item, str) and item.strip()]


def pick_fact(
    pool: list[str],
    previous: str | None = None,
    rng: random.Random | None = None,
    lang: str = "he",
) -> str:
    """Random fact, retrying a few times to avoid repeating ``previous``."""
    rng = rng or random.Random()
    pool = pool or FALLBACK_FACTS.get(lang, FALLBACK_FACTS["he"])
    choice = rng.choice(pool)
    attempts = 0
    while len(pool) > 1 and choice == previous and attempts < 5:
        choice = rng.choice(pool)
        attempts += 1
    return choice
