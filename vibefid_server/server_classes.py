from pydantic import BaseModel, Field
from typing import Optional

# largest integer JavaScript clients can carry exactly
MAX_FID = 2 ** 53 - 1


class ValidateCardRequest(BaseModel):
    fid: int = Field(ge=1, le=MAX_FID)
    neynar_score: float = Field(ge=0)
    rarity: str
    foil: str
    wear: str
    power: int


class MintCardRequest(BaseModel):
    address: str = Field(min_length=1)
    fid: int = Field(ge=1, le=MAX_FID)
    username: str = Field(min_length=1)
    display_name: str
    neynar_score: float = Field(ge=0)
    bio: Optional[str] = None
    power_badge: bool = False
    image_url: Optional[str] = None
    card_image_url: Optional[str] = None
    # Values the client previewed. When sent they must match the server's.
    rarity: Optional[str] = None
    foil: Optional[str] = None
    wear: Optional[str] = None
    power: Optional[int] = None
