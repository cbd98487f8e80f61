"""
Listing and shopper preference models.

WHAT: Marketplace listing record plus the preferences used to filter it
WHY: One typed shape for listings regardless of where they were loaded from
HOW: Frozen Pydantic v2 models with enum fields and lenient input aliases
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class Condition(str, Enum):
    """Seller-declared condition, stored in its display form."""

    BRAND_NEW = "Brand New"
    LIKE_NEW = "Like New"
    USED_GOOD = "Used - Good"
    USED_FAIR = "Used - Fair"
    NEEDS_REPAIR = "Needs Repair"


# Short spellings accepted from feeds and API clients
CONDITION_ALIASES = {
    "new": Condition.BRAND_NEW,
    "likenew": Condition.LIKE_NEW,
    "good": Condition.USED_GOOD,
    "fair": Condition.USED_FAIR,
    "needsrepair": Condition.NEEDS_REPAIR,
}


class Quality(str, Enum):
    """Coarse quality grade used by the swipe filter."""

    POOR = "poor"
    USED = "used"
    GOOD = "good"
    LIKE_NEW = "like new"

    @property
    def rank(self) -> int:
        return QUALITY_RANKING[self]


QUALITY_RANKING = {
    Quality.POOR: 0,
    Quality.USED: 1,
    Quality.GOOD: 2,
    Quality.LIKE_NEW: 3,
}

DealStyle = Literal["polite", "balanced", "aggressive"]


def _coerce_quality(value):
    if isinstance(value, str) and value.strip().lower().replace("_", " ") == "like new":
        return Quality.LIKE_NEW
    return value


class Listing(BaseModel):
    """A single marketplace listing. Read-only once loaded."""

    id: str
    title: str
    description: str = ""
    condition: Condition = Condition.USED_GOOD
    quality: Quality = Quality.USED
    asking_price: float = Field(ge=0.0, description="Canonical numeric anchor")
    price: str = Field(description="Display price with currency symbol, e.g. '$120'")
    location: str = ""
    image_url: str | None = None
    additional_image_urls: list[str] = Field(default_factory=list)
    posted_at: str = ""
    seller_name: str | None = None
    notes_from_seller: str | None = None

    model_config = {"frozen": True}

    @field_validator("condition", mode="before")
    @classmethod
    def normalize_condition(cls, v):
        """Accept short condition spellings such as 'LikeNew' or 'NeedsRepair'."""
        if isinstance(v, str):
            key = v.replace(" ", "").replace("-", "").replace("_", "").lower()
            if key in CONDITION_ALIASES:
                return CONDITION_ALIASES[key]
        return v

    @field_validator("quality", mode="before")
    @classmethod
    def normalize_quality(cls, v):
        """Accept 'like_new' as well as 'like new'."""
        return _coerce_quality(v)

    @property
    def images(self) -> list[str]:
        """Primary image followed by any additional images."""
        images = [self.image_url] if self.image_url else []
        return images + [url for url in self.additional_image_urls if url]

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)


class UserPrefs(BaseModel):
    """Shopper preferences, supplied once per session."""

    max_price: float | None = Field(default=None, ge=0.0)
    min_quality: Quality | None = None
    preferred_locations: list[str] = Field(default_factory=list)
    deal_style: DealStyle | None = None

    @field_validator("min_quality", mode="before")
    @classmethod
    def normalize_min_quality(cls, v):
        return _coerce_quality(v)


class Constraints(BaseModel):
    """Hard requirements that are not preferences."""

    must_have_images: bool = False
