# FID-based trait generation.
# Lower FIDs (early adopters) get better foils and less wear. The tables and
# seed arithmetic below are shared by the mint path, the metadata endpoint and
# the preview client, so they must not change.
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


class Foil(str, Enum):
    PRIZE = "Prize"
    STANDARD = "Standard"
    NONE = "None"

    def __str__(self):
        return self.value


class Wear(str, Enum):
    PRISTINE = "Pristine"
    MINT = "Mint"
    LIGHTLY_PLAYED = "Lightly Played"
    MODERATELY_PLAYED = "Moderately Played"
    HEAVILY_PLAYED = "Heavily Played"

    def __str__(self):
        return self.value


class Choice(NamedTuple):
    value: object
    weight: float


@dataclass(frozen=True)
class FidTraits:
    foil: Foil
    wear: Wear

    def to_dict(self) -> dict:
        return {"foil": self.foil.value, "wear": self.wear.value}


class InvalidSeedError(ValueError):
    """Raised when an FID or extra seed is NaN, infinite or past the float range."""


def _choices(values, weights) -> Tuple[Choice, ...]:
    return tuple(Choice(v, w) for v, w in zip(values, weights))


_FOILS = (Foil.PRIZE, Foil.STANDARD, Foil.NONE)
_WEARS = (
    Wear.PRISTINE,
    Wear.MINT,
    Wear.LIGHTLY_PLAYED,
    Wear.MODERATELY_PLAYED,
    Wear.HEAVILY_PLAYED,
)

# (upper bound inclusive, choices). The last band has no upper bound.
FOIL_BANDS = (
    (100, _choices(_FOILS, (100, 0, 0))),          # OG Legends
    (5000, _choices(_FOILS, (100, 0, 0))),
    (20000, _choices(_FOILS, (80, 20, 0))),
    (100000, _choices(_FOILS, (30, 60, 10))),
    (250000, _choices(_FOILS, (5, 35, 60))),
    (500000, _choices(_FOILS, (3, 25, 72))),
    (1200000, _choices(_FOILS, (1, 10, 89))),
    (None, _choices(_FOILS, (0, 5, 95))),
)

WEAR_BANDS = (
    (100, _choices(_WEARS, (100, 0, 0, 0, 0))),    # OG Legends
    (5000, _choices(_WEARS, (100, 0, 0, 0, 0))),
    (20000, _choices(_WEARS, (90, 10, 0, 0, 0))),
    (100000, _choices(_WEARS, (50, 40, 10, 0, 0))),
    (250000, _choices(_WEARS, (2, 18, 45, 30, 5))),
    (500000, _choices(_WEARS, (0, 5, 30, 55, 10))),
    (1200000, _choices(_WEARS, (0, 0, 5, 45, 50))),
    (None, _choices(_WEARS, (0, 0, 0, 10, 90))),
)

TIER_NAMES = (
    "OG Legend",
    "Super Early Adopter",
    "Early Adopter",
    "Established User",
    "Active User",
    "Regular User",
    "New User",
    "Very New User",
)


def _require_finite(name: str, value) -> None:
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints past the float range
        finite = False
    if not finite:
        raise InvalidSeedError(f"{name} must be a finite number, got {value!r}")


def seeded_random(seed: float) -> float:
    """Deterministic pseudo-random float in [0, 1) for a numeric seed."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def weighted_roll(seed: float, choices: Sequence[Tuple[T, float]]) -> T:
    """Pick one value from ordered (value, weight) pairs using `seed`.

    Choices are walked in the given order, so callers control tie-breaks.
    Zero-weight choices are skipped; if nothing triggers (float drift, or all
    weights zero) the last choice is returned.
    """
    if not choices:
        raise ValueError("weighted_roll needs at least one choice")

    total = sum(weight for _, weight in choices)
    roll = seeded_random(seed) * total

    for value, weight in choices:
        if weight <= 0:
            continue
        roll -= weight
        if roll <= 0:
            return value

    return choices[-1][0]


def _band_index(fid: float, bands) -> int:
    for i, (threshold, _) in enumerate(bands):
        if threshold is None or fid <= threshold:
            return i
    return len(bands) - 1


def get_foil_probabilities(fid: float) -> List[Choice]:
    """Ordered foil weights for the band `fid` falls into."""
    return list(FOIL_BANDS[_band_index(fid, FOIL_BANDS)][1])


def get_wear_probabilities(fid: float) -> List[Choice]:
    """Ordered wear weights for the band `fid` falls into."""
    return list(WEAR_BANDS[_band_index(fid, WEAR_BANDS)][1])


def get_fid_traits(fid: float, extra_seed: Optional[float] = None) -> FidTraits:
    """Roll foil and wear for an FID.

    Without `extra_seed` the result is fully deterministic, which is what mint
    and metadata use. Pass `extra_seed` (e.g. a timestamp) for reroll previews.
    The wear seed doubles the FID so the two rolls are not correlated.
    """
    _require_finite("fid", fid)
    if extra_seed is not None:
        _require_finite("extra_seed", extra_seed)

    if extra_seed:
        foil_seed = fid + extra_seed
        wear_seed = fid * 2 + extra_seed
    else:
        foil_seed = fid
        wear_seed = fid * 2

    _require_finite("foil seed", foil_seed)
    _require_finite("wear seed", wear_seed)

    foil = weighted_roll(foil_seed, get_foil_probabilities(fid))
    wear = weighted_roll(wear_seed, get_wear_probabilities(fid))
    return FidTraits(foil=Foil(foil), wear=Wear(wear))


def _format_odds(choices) -> str:
    return ", ".join(f"{weight}% {value.value}" for value, weight in choices if weight > 0)


def get_fid_trait_info(fid: float) -> str:
    """Human readable tier and odds for an FID, e.g. for the about-traits modal."""
    _require_finite("fid", fid)
    index = _band_index(fid, FOIL_BANDS)
    foil_odds = _format_odds(FOIL_BANDS[index][1])
    wear_odds = _format_odds(WEAR_BANDS[_band_index(fid, WEAR_BANDS)][1])
    return f"{TIER_NAMES[index]} - Foil: {foil_odds} | Wear: {wear_odds}"
