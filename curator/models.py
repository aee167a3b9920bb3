"""
Request / result types shared by the generator, the API and the frontend.

Model output itself is never validated against these types: raw items stay
plain dicts until the enricher maps them onto CuratedItem with defaults.
"""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Filter options offered by the UI (first entry is the default)
# ---------------------------------------------------------------------------

MEDIA_TYPES  = ["All", "Movie", "Book", "Art/Photo", "History"]
ERA_VIBES    = ["All", "Classic(<1980)", "Modern(1980-2010)", "Current(2010+)"]
NICHE_LEVELS = ["Major", "Deep(Maniac)"]
SCOPES       = ["Standard(Movie/Book)", "Quick(Music/Short)", "Epic(Series)"]


class Mode(str, Enum):
    NARRATIVE = "narrative"
    VISUAL    = "visual"


class Filters(BaseModel):
    """
    Soft constraints passed through to the prompt.

    Accepts both the current field names and the ones used by older
    clients (mediaType / media, eraVibe / era, nicheLevel / depth, time).
    """

    model_config = ConfigDict(frozen=True)

    media_type: str = Field(
        MEDIA_TYPES[0],
        validation_alias=AliasChoices("media_type", "mediaType", "media"),
    )
    era_vibe: str = Field(
        ERA_VIBES[0],
        validation_alias=AliasChoices("era_vibe", "eraVibe", "era"),
    )
    niche_level: str = Field(
        NICHE_LEVELS[0],
        validation_alias=AliasChoices("niche_level", "nicheLevel", "depth"),
    )
    scope: str = Field(
        SCOPES[0],
        validation_alias=AliasChoices("scope", "time"),
    )

    def active(self) -> dict[str, str]:
        """Return only the filters that differ from their default."""
        defaults = {
            "media_type":  MEDIA_TYPES[0],
            "era_vibe":    ERA_VIBES[0],
            "niche_level": NICHE_LEVELS[0],
            "scope":       SCOPES[0],
        }
        out = {}
        for name, default in defaults.items():
            value = (getattr(self, name) or "").strip()
            if value and value != default:
                out[name] = value
        return out


class CuratedItem(BaseModel):
    title: str = ""
    title_ja: str = ""
    title_en: str = ""
    creator: str = ""
    media_type: str = ""
    analysis: str = ""
    structural_insight: str = ""
    match_tags: list[str] = Field(default_factory=list)
    image_url: str | None = None
    retail_url: str


class ResultSet(BaseModel):
    input_analysis_tags: list[str] = Field(default_factory=list)
    results: list[CuratedItem] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "ResultSet":
        return cls()
