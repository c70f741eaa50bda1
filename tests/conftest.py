from datetime import time
from pathlib import Path

import pytest

from roborate.scheduling import BandSet, RateBand, TieredBandSet, WeekdayClassifier

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def day_night() -> BandSet:
    """Standard day/night bands from the shipped sample (rates per unit)."""
    return BandSet(
        {
            "standardDay": RateBand(time(7), time(23), 20),
            "standardNight": RateBand(time(23), time(7), 25),
        }
    )


@pytest.fixture
def weekly_bands(day_night: BandSet) -> TieredBandSet:
    extra = BandSet(
        {
            "extraDay": RateBand(time(7), time(23), 30),
            "extraNight": RateBand(time(23), time(7), 35),
        }
    )
    return TieredBandSet({"standard": day_night, "extra": extra}, WeekdayClassifier())
