import random

import pytest

from vibefid_server.card_utils.card import (
    RANKS_BY_RARITY,
    FidCard,
    calculate_rarity_from_score,
    generate_rank_from_rarity,
    get_suit_color,
    get_suit_from_fid,
    get_suit_symbol,
)
from vibefid_server.card_utils.card_power import calculate_bounty, calculate_power, power_breakdown


@pytest.mark.parametrize("score,rarity", [
    (0.0, "Common"),
    (0.69, "Common"),
    (0.70, "Rare"),
    (0.78, "Rare"),
    (0.79, "Epic"),
    (0.89, "Epic"),
    (0.90, "Legendary"),
    (0.98, "Legendary"),
    (0.99, "Mythic"),
    (1.0, "Mythic"),
])
def test_rarity_thresholds(score, rarity):
    assert calculate_rarity_from_score(score) == rarity


def test_suit_follows_fid():
    assert [get_suit_from_fid(f) for f in range(4, 8)] == ["hearts", "diamonds", "spades", "clubs"]
    assert get_suit_symbol("spades") == "♠"
    assert get_suit_color("diamonds") == "red"
    assert get_suit_color("clubs") == "black"


def test_rank_stays_inside_rarity_range():
    rng = random.Random(7)
    for rarity, ranks in RANKS_BY_RARITY.items():
        for _ in range(50):
            assert generate_rank_from_rarity(rarity, rng) in ranks
    assert generate_rank_from_rarity("Mythic") == "A"


def test_unknown_rarity_ranks_as_common():
    assert generate_rank_from_rarity("Shiny", random.Random(1)) in RANKS_BY_RARITY["Common"]


def test_power_table():
    assert calculate_power("Common", "None", "Heavily Played") == 5
    assert calculate_power("Common", "Prize", "Pristine") == 135
    assert calculate_power("Legendary", "Prize", "Pristine") == 6480
    assert calculate_power("Mythic", "Standard", "Mint") == 2800
    assert calculate_power("Epic", "None", "Moderately Played") == 80


def test_power_rounds_half_up():
    # 5 * 1.0 * 2.5 == 12.5
    assert calculate_power("Common", "Standard", "Lightly Played") == 13


def test_power_lookup_ignores_case_and_unknowns():
    assert calculate_power("LEGENDARY", "prize", "PRISTINE") == 6480
    assert calculate_power("Unknown", "Holo", "Scuffed") == 5


def test_power_breakdown_and_bounty():
    assert power_breakdown("Rare", "Standard", "Mint") == {
        "base": 20, "wear_multiplier": 1.4, "foil_multiplier": 2.5,
    }
    assert calculate_bounty(70) == 700


def test_fid_card_round_trips_a_db_row():
    row = {
        "fid": 3, "address": "0xabc", "username": "dwr", "display_name": "Dan",
        "bio": None, "neynar_score": 0.99, "power_badge": 1, "rarity": "Mythic",
        "foil": "Prize", "wear": "Pristine", "power": 21600, "suit": "clubs",
        "rank": "A", "image_url": "ipfs://video", "card_image_url": "ipfs://still",
        "minted_at": "2025-01-01 00:00:00",
    }
    card = FidCard.from_row(row)
    assert card.power_badge is True
    assert card.has_video
    assert card.to_dict() == {**row, "power_badge": True}


def test_card_without_thumbnail_has_no_video():
    card = FidCard(fid=9, username="u", display_name="U", rarity="Common", foil="None",
                   wear="Mint", power=7, suit="diamonds", rank="2", image_url="ipfs://png")
    assert not card.has_video
