from typing import Any, Dict

from .card import FidCard
from .card_power import calculate_bounty, calculate_power
from .fid_traits import get_fid_traits

DEFAULT_DESCRIPTION = "A unique VibeFID card from the Farcaster ecosystem"

METADATA_CACHE_CONTROL = "public, max-age=3600, s-maxage=300, stale-while-revalidate=60"


def resolve_traits(card: FidCard) -> Dict[str, str]:
    """Traits stored at mint time win; deterministic traits only fill gaps."""
    deterministic = get_fid_traits(card.fid)
    return {
        "foil": card.foil or deterministic.foil.value,
        "wear": card.wear or deterministic.wear.value,
    }


def build_card_metadata(card: FidCard, base_url: str) -> Dict[str, Any]:
    """
    Build ERC721 metadata for OpenSea from a stored card.

    Power is recomputed from the current rarity and the resolved traits so a
    rebalanced power table shows up without re-minting.
    """
    traits = resolve_traits(card)
    power = calculate_power(card.rarity, traits["foil"], traits["wear"])
    suit = card.suit or ""

    metadata = {
        "name": f"VibeFID #{card.fid}",
        "description": f"{card.display_name} (@{card.username}) - {card.bio or DEFAULT_DESCRIPTION}",
        # with a video the still card image is the thumbnail
        "image": card.card_image_url if card.has_video else card.image_url,
        "external_url": f"{base_url.rstrip('/')}/share/fid/{card.fid}",
        "attributes": [
            {"trait_type": "Rarity", "value": card.rarity},
            {"trait_type": "Foil", "value": traits["foil"]},
            {"trait_type": "Wear", "value": traits["wear"]},
            {"trait_type": "Power", "value": power, "display_type": "number"},
            {"trait_type": "Bounty", "value": calculate_bounty(power), "display_type": "number"},
            {"trait_type": "Suit", "value": suit[:1].upper() + suit[1:]},
            {"trait_type": "Rank", "value": card.rank},
            {
                "trait_type": "Neynar Score",
                "value": f"{card.neynar_score or 0:.2f}",
                "display_type": "number",
            },
            {"trait_type": "Power Badge", "value": "Yes" if card.power_badge else "No"},
        ],
    }

    if card.has_video:
        metadata["animation_url"] = card.image_url

    return metadata
