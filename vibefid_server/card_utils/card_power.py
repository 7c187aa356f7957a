import math
from typing import Dict

VIBEFID_POWER_CONFIG = {
    "rarity_base": {"mythic": 800, "legendary": 240, "epic": 80, "rare": 20, "common": 5},
    "wear_multiplier": {"pristine": 1.8, "mint": 1.4, "default": 1.0},
    "foil_multiplier": {"prize": 15.0, "standard": 2.5, "none": 1.0},
}

BOUNTY_PER_POWER = 10


def _round_half_up(value: float) -> int:
    # matches JavaScript Math.round, which the minted metadata was built with
    return int(math.floor(value + 0.5))


def power_breakdown(rarity: str, foil: str, wear: str) -> Dict[str, float]:
    """Base value and multipliers used for a card, keyed for display."""
    config = VIBEFID_POWER_CONFIG
    base = config["rarity_base"].get(str(rarity).lower(), config["rarity_base"]["common"])
    wear_mult = config["wear_multiplier"].get(str(wear).lower(), config["wear_multiplier"]["default"])
    foil_mult = config["foil_multiplier"].get(str(foil).lower(), config["foil_multiplier"]["none"])
    return {"base": base, "wear_multiplier": wear_mult, "foil_multiplier": foil_mult}


def calculate_power(rarity: str, foil: str, wear: str) -> int:
    parts = power_breakdown(rarity, foil, wear)
    raw = parts["base"] * parts["wear_multiplier"] * parts["foil_multiplier"]
    return max(1, _round_half_up(raw))


def calculate_bounty(power: int) -> int:
    return power * BOUNTY_PER_POWER
