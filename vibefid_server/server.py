from fastapi import FastAPI, Path, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional

#logging stuff
from vibefid_logs.loggers import server_logger, mint_logger, metadata_logger
from vibefid_logs.endpoints import router as logs_router
from vibefid_logs.middleware import RequestLoggingMiddleware

from vibefid_server import config
from vibefid_server.server_classes import MAX_FID, MintCardRequest, ValidateCardRequest
from vibefid_server.card_utils.card import (
    FidCard,
    generate_rank_from_rarity,
    get_suit_from_fid,
)
from vibefid_server.card_utils.card_power import calculate_bounty, power_breakdown
from vibefid_server.card_utils.card_validation import expected_card_values, validate_card_traits
from vibefid_server.card_utils.fid_traits import (
    InvalidSeedError,
    get_fid_trait_info,
    get_fid_traits,
    get_foil_probabilities,
    get_wear_probabilities,
)
from vibefid_server.card_utils.metadata import METADATA_CACHE_CONTROL, build_card_metadata
from vibefid_server.utils.rate_limit import RateLimiter

# import our DB access functions
from vibefid_server.utils.db_access import (
    init_db,
    get_card_by_fid,
    create_card_entry,
    list_cards,
    count_cards,
)

app = FastAPI(title="VibeFID")
app.include_router(logs_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware, logger=server_logger)

mint_rate_limiter = RateLimiter("mint", config.MINT_RATE_LIMIT_MS)


@app.on_event("startup")
async def startup_event():
    init_db()
    server_logger.info("startup_complete", env=config.ENV, cards=count_cards())


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _odds_table(choices) -> list:
    return [{"value": value.value, "weight": weight} for value, weight in choices]


@app.get("/")
async def read_root():
    return {"service": "vibefid", "env": config.ENV}


@app.get("/traits/{fid}")
async def preview_traits(fid: int = Path(ge=1, le=MAX_FID), extra_seed: Optional[float] = None):
    """Roll foil/wear for an FID. `extra_seed` turns on reroll previews."""
    try:
        traits = get_fid_traits(fid, extra_seed)
    except InvalidSeedError as e:
        server_logger.warning("traits_invalid_seed", fid=fid, error=str(e))
        return _error(400, str(e))

    return {
        "fid": fid,
        **traits.to_dict(),
        "deterministic": not extra_seed,
    }


@app.get("/traits/{fid}/info")
async def trait_info(fid: int = Path(ge=1, le=MAX_FID)):
    return {
        "fid": fid,
        "tier": get_fid_trait_info(fid),
        "foil_odds": _odds_table(get_foil_probabilities(fid)),
        "wear_odds": _odds_table(get_wear_probabilities(fid)),
    }


@app.post("/cards/validate")
async def validate_card(req: ValidateCardRequest):
    result = validate_card_traits(
        req.fid, req.neynar_score, req.rarity, req.foil, req.wear, req.power
    )
    if not result.valid:
        mint_logger.warning("validate_mismatch", fid=req.fid, errors=result.errors)
    return result.to_dict()


@app.post("/cards/mint")
async def mint_card(req: MintCardRequest):
    """
    Register a minted card. Rarity, traits and power are computed here;
    whatever the client previewed must agree or the mint is refused.
    """
    mint_logger.info("mint_attempt", fid=req.fid, address=req.address)

    wait_ms = mint_rate_limiter.check(req.address)
    if wait_ms:

        #log code
        mint_logger.warning("mint_rate_limited", fid=req.fid, address=req.address, wait_ms=wait_ms)

        response = _error(429, f"Too many requests. Please wait {config.MINT_RATE_LIMIT_MS // 1000} seconds.")
        response.headers["Retry-After"] = str(max(1, -(-wait_ms // 1000)))
        return response

    if get_card_by_fid(req.fid):
        mint_logger.warning("mint_already_minted", fid=req.fid)
        return _error(409, f"FID {req.fid} has already been minted")

    expected = expected_card_values(req.fid, req.neynar_score)
    claimed = {k: getattr(req, k) for k in ("rarity", "foil", "wear", "power")}
    if any(v is not None for v in claimed.values()):
        result = validate_card_traits(
            req.fid,
            req.neynar_score,
            claimed["rarity"] if claimed["rarity"] is not None else expected["rarity"],
            claimed["foil"] if claimed["foil"] is not None else expected["foil"],
            claimed["wear"] if claimed["wear"] is not None else expected["wear"],
            claimed["power"] if claimed["power"] is not None else expected["power"],
        )
        if not result.valid:

            #log code
            mint_logger.warning("mint_trait_mismatch", fid=req.fid, errors=result.errors)

            return _error(400, "Card traits do not match server calculation",
                          errors=result.errors, corrected_values=result.corrected_values)

    card = FidCard(
        fid=req.fid,
        address=req.address.lower(),
        username=req.username,
        display_name=req.display_name,
        bio=req.bio,
        neynar_score=req.neynar_score,
        power_badge=req.power_badge,
        rarity=expected["rarity"],
        foil=expected["foil"],
        wear=expected["wear"],
        power=expected["power"],
        suit=get_suit_from_fid(req.fid),
        rank=generate_rank_from_rarity(expected["rarity"]),
        image_url=req.image_url,
        card_image_url=req.card_image_url,
    )

    if not create_card_entry(card):
        # lost a race with another mint of the same FID
        return _error(409, f"FID {req.fid} has already been minted")

    mint_logger.info("mint_success",
        fid=card.fid,
        rarity=card.rarity,
        foil=card.foil,
        wear=card.wear,
        power=card.power
    )

    stored = get_card_by_fid(card.fid)
    return JSONResponse(status_code=201, content={
        "message": "Card minted",
        "card": FidCard.from_row(stored).to_dict(),
        "bounty": calculate_bounty(card.power),
        "power_breakdown": power_breakdown(card.rarity, card.foil, card.wear),
    })


@app.get("/cards")
async def recent_cards(limit: int = Query(50, ge=1, le=200), offset: int = Query(0, ge=0)):
    cards = list_cards(limit=limit, offset=offset)
    return {"cards": cards, "count": len(cards), "total": count_cards()}


@app.get("/cards/{fid}")
async def get_card(fid: int = Path(ge=1, le=MAX_FID)):
    row = get_card_by_fid(fid)
    if not row:
        return _error(404, "Card not found")
    return {"card": FidCard.from_row(row).to_dict()}


@app.get("/metadata/fid/{fid}")
async def card_metadata(fid: int = Path(ge=1, le=MAX_FID)):
    """ERC721 metadata JSON for OpenSea."""
    row = get_card_by_fid(fid)
    if not row:
        metadata_logger.info("metadata_card_not_found", fid=fid)
        return _error(404, "Card not found")

    metadata = build_card_metadata(FidCard.from_row(row), config.PUBLIC_BASE_URL)
    metadata_logger.debug("metadata_served", fid=fid)
    return JSONResponse(
        status_code=200,
        content=metadata,
        headers={"Cache-Control": METADATA_CACHE_CONTROL},
    )
