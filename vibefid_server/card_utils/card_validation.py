# Server-side check that client-submitted card traits match what the server
# computes from the FID and Neynar score.
from dataclasses import dataclass, field
from typing import Dict, List

from .card import calculate_rarity_from_score
from .card_power import calculate_power
from .fid_traits import get_fid_traits

POWER_TOLERANCE = 1


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    corrected_values: Dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "corrected_values": dict(self.corrected_values),
        }


def expected_card_values(fid: int, neynar_score: float) -> Dict[str, object]:
    rarity = calculate_rarity_from_score(neynar_score)
    traits = get_fid_traits(fid)
    return {
        "rarity": rarity,
        "foil": traits.foil.value,
        "wear": traits.wear.value,
        "power": calculate_power(rarity, traits.foil.value, traits.wear.value),
    }


def validate_card_traits(fid: int, neynar_score: float, client_rarity: str,
                         client_foil: str, client_wear: str, client_power: int) -> ValidationResult:
    expected = expected_card_values(fid, neynar_score)
    errors = []

    if client_rarity != expected["rarity"]:
        errors.append(
            f"Invalid rarity: client={client_rarity}, expected={expected['rarity']} (score={neynar_score})"
        )
    if client_foil != expected["foil"]:
        errors.append(f"Invalid foil: client={client_foil}, expected={expected['foil']}")
    if client_wear != expected["wear"]:
        errors.append(f"Invalid wear: client={client_wear}, expected={expected['wear']}")
    if abs(client_power - expected["power"]) > POWER_TOLERANCE:
        errors.append(f"Invalid power: client={client_power}, expected={expected['power']}")

    return ValidationResult(valid=not errors, errors=errors, corrected_values=expected)
