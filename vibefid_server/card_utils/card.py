# VibeFID card value object plus the profile-derived card attributes.
# `rarity` comes from the Neynar score, `suit` from the FID, `rank` is rolled
# once per mint inside the rarity's rank range. Foil and wear live in
# fid_traits.py.
import random
from typing import Any, Dict, Optional

RARITIES = ("Common", "Rare", "Epic", "Legendary", "Mythic")
SUITS = ("hearts", "diamonds", "spades", "clubs")

RANKS_BY_RARITY = {
    "Common": ("2", "3", "4", "5", "6"),
    "Rare": ("7", "8"),
    "Epic": ("9", "10", "J"),
    "Legendary": ("Q", "K"),
    "Mythic": ("A",),
}

SUIT_SYMBOLS = {
    "hearts": "♥",
    "diamonds": "♦",
    "spades": "♠",
    "clubs": "♣",
}


def calculate_rarity_from_score(score: float) -> str:
    if score >= 0.99:
        return "Mythic"
    if score >= 0.90:
        return "Legendary"
    if score >= 0.79:
        return "Epic"
    if score >= 0.70:
        return "Rare"
    return "Common"


def get_suit_from_fid(fid: int) -> str:
    return SUITS[int(fid) % 4]


def generate_rank_from_rarity(rarity: str, rng: Optional[random.Random] = None) -> str:
    """Pick a rank uniformly from the rarity's range. Unknown rarities use Common."""
    rng = rng or random
    ranks = RANKS_BY_RARITY.get(rarity, RANKS_BY_RARITY["Common"])
    return rng.choice(ranks)


def get_suit_symbol(suit: str) -> str:
    return SUIT_SYMBOLS[suit]


def get_suit_color(suit: str) -> str:
    return "red" if suit in ("hearts", "diamonds") else "black"


class FidCard:
    """A minted VibeFID card as stored in the FarcasterCards table."""

    FIELDS = (
        "fid", "address", "username", "display_name", "bio", "neynar_score",
        "power_badge", "rarity", "foil", "wear", "power", "suit", "rank",
        "image_url", "card_image_url", "minted_at",
    )

    def __init__(self, fid: int, username: str, display_name: str, rarity: str,
                 foil: str, wear: str, power: int, suit: str, rank: str,
                 neynar_score: float = 0.0, power_badge: bool = False,
                 address: Optional[str] = None, bio: Optional[str] = None,
                 image_url: Optional[str] = None, card_image_url: Optional[str] = None,
                 minted_at: Optional[str] = None):
        self.fid = fid
        self.address = address
        self.username = username
        self.display_name = display_name
        self.bio = bio
        self.neynar_score = neynar_score
        self.power_badge = power_badge
        self.rarity = rarity
        self.foil = foil
        self.wear = wear
        self.power = power
        self.suit = suit
        self.rank = rank
        self.image_url = image_url
        self.card_image_url = card_image_url
        self.minted_at = minted_at

    @property
    def has_video(self) -> bool:
        # videos are uploaded as image_url with a still thumbnail in card_image_url
        return bool(self.card_image_url and self.image_url)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "FidCard":
        data = {k: row.get(k) for k in cls.FIELDS}
        data["power_badge"] = bool(data.get("power_badge"))
        data["neynar_score"] = data.get("neynar_score") or 0.0
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in self.FIELDS}
