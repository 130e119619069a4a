from dataclasses import dataclass
from datetime import date
from enum import Enum


class Season(str, Enum):
    FALL = "Fall"
    SPRING = "Spring"
    SUMMER = "Summer"


# Academic year rotation; Spring and Summer share the calendar year after Fall
_ROTATION = [Season.FALL, Season.SPRING, Season.SUMMER]


@dataclass(frozen=True)
class CreditPolicy:
    target: int = 15
    minimum: int = 12
    maximum: int = 18

    def __post_init__(self):
        if not 0 < self.minimum <= self.target <= self.maximum:
            raise ValueError(
                f"Invalid credit policy: need 0 < minimum ({self.minimum}) "
                f"<= target ({self.target}) <= maximum ({self.maximum})"
            )


@dataclass(frozen=True)
class TermSlot:
    season: Season
    year: int
    policy: CreditPolicy = CreditPolicy()

    @property
    def label(self) -> str:
        return f"{self.season.value} {self.year}"


def next_term_start(today: date, cutoff_month: int = 8) -> tuple[Season, int]:
    """Return the first term to plan for, given the current date.

    Before ``cutoff_month`` the upcoming Fall is still open; from the cutoff on,
    planning starts with the following Spring.
    """
    if today.month < cutoff_month:
        return Season.FALL, today.year
    return Season.SPRING, today.year + 1


def _advance(season: Season, year: int) -> tuple[Season, int]:
    nxt = _ROTATION[(_ROTATION.index(season) + 1) % len(_ROTATION)]
    if season == Season.FALL:
        year += 1
    return nxt, year


def generate_terms(
    start_season: Season,
    start_year: int,
    count: int,
    policy: CreditPolicy | None = None,
    include_summer: bool = False,
) -> list[TermSlot]:
    policy = policy or CreditPolicy()
    terms: list[TermSlot] = []
    season, year = start_season, start_year
    while len(terms) < count:
        if season != Season.SUMMER or include_summer:
            terms.append(TermSlot(season=season, year=year, policy=policy))
        season, year = _advance(season, year)
    return terms


def parse_term_label(label: str) -> tuple[Season, int] | None:
    parts = label.strip().split()
    if len(parts) < 2:
        return None
    try:
        season = Season(parts[0].title())
    except ValueError:
        return None
    year = None
    for part in reversed(parts):
        if part.isdigit() and len(part) == 4:
            year = int(part)
            break
    if year is None:
        return None
    return season, year
