"""Default streaming services and TMDB provider-name normalization."""

from typing import Any, Iterable, List, Mapping, Optional

from rotatarr.providers.base import StreamingService

UNKNOWN_SERVICE = "Unknown"

_LOGO_BASE = "https://media.themoviedb.org/t/p/original"

DEFAULT_SERVICES: List[StreamingService] = [
    StreamingService(
        id="netflix",
        name="Netflix",
        cancel_url="https://www.netflix.com/YourAccount",
        logo_url=f"{_LOGO_BASE}/pbpMk2JmcoNnQwx5JGpXngfoWtp.jpg",
        aliases=["Netflix"],
    ),
    StreamingService(
        id="max",
        name="HBO",
        cancel_url="https://hbomax.com/subscription",
        logo_url=f"{_LOGO_BASE}/jbe4gVSfRlbPTdESXhEKpornsfu.jpg",
        aliases=["HBO Max", "Max"],
    ),
    StreamingService(
        id="disney-plus",
        name="Disney+",
        cancel_url="https://www.disneyplus.com/account",
        logo_url=f"{_LOGO_BASE}/97yvRBw1GzX7fXprcF80er19ot.jpg",
        aliases=["Disney Plus"],
    ),
    StreamingService(
        id="amazon",
        name="Prime Video",
        cancel_url="https://www.amazon.com/amazonprime",
        logo_url=f"{_LOGO_BASE}/pvske1MyAoymrs5bguRfVqYiM9a.jpg",
        aliases=["Amazon Prime Video", "Amazon"],
    ),
    StreamingService(
        id="apple-tv",
        name="Apple TV+",
        cancel_url="https://tv.apple.com/account",
        logo_url=f"{_LOGO_BASE}/mcbz1LgtErU9p4UdbZ0rG6RTWHX.jpg",
        aliases=["Apple TV Plus"],
    ),
    StreamingService(
        id="hulu",
        name="Hulu",
        cancel_url="https://www.hulu.com/account",
        logo_url=f"{_LOGO_BASE}/bxBlRPEPpMVDc4jMhSrTf2339DW.jpg",
    ),
    StreamingService(
        id="paramount",
        name="Paramount+",
        cancel_url="https://www.paramountplus.com/account/",
        logo_url=f"{_LOGO_BASE}/fts6X10Jn4QT0X6ac3udKEn2tJA.jpg",
        aliases=["Paramount Plus", "Paramount+ Essentials", "Paramount+ Premium"],
    ),
    StreamingService(
        id="peacock",
        name="Peacock",
        cancel_url="https://www.peacocktv.com/account",
        logo_url=f"{_LOGO_BASE}/2aGrp1xw3qhwCYvNGAJZPdjfeeX.jpg",
        aliases=["Peacock Premium"],
    ),
    StreamingService(
        id="youtube",
        name="YouTubeTV",
        cancel_url="https://tv.youtube.com/settings/subscriptions",
        logo_url=f"{_LOGO_BASE}/x9zOHTUkQzt3PgPVKbMH9CKBwLK.jpg",
        aliases=["YouTube", "YouTube TV"],
    ),
    StreamingService(
        id="amc",
        name="AMC+",
        cancel_url="https://www.amcplus.com/account",
        logo_url=f"{_LOGO_BASE}/ovmu6uot1XVvsemM2dDySXLiX57.jpg",
        aliases=["AMC Plus"],
    ),
]

# TMDB lists "watch X through Apple TV / Prime / Roku" as separate providers
CHANNEL_SUFFIXES = (
    " Originals Amazon Channel",
    " Apple TV Channel",
    " Apple TV channel",
    " Prime Channel",
    " Prime channel",
    " Amazon Channel",
    " Roku Premium Channel",
)

# Base name left after stripping a channel suffix -> canonical display name
BASE_TO_CANONICAL = {
    "Paramount Plus": "Paramount+",
    "Paramount+": "Paramount+",
    "Peacock": "Peacock",
    "Peacock Premium": "Peacock",
    "AMC Plus": "AMC+",
    "AMC+": "AMC+",
    "Disney Plus": "Disney+",
    "Disney+": "Disney+",
    "HBO Max": "Max",
    "Max": "Max",
    "Starz": "Starz",
    "Showtime": "Showtime",
    "MGM Plus": "MGM+",
    "MGM+": "MGM+",
}

# Tier names TMDB sometimes returns for direct providers
DISPLAY_NORMALIZE = {
    "Paramount Plus": "Paramount+",
    "Paramount Plus Essential": "Paramount+",
    "Paramount Plus Premium": "Paramount+",
    "Paramount Plus Basic with Ads": "Paramount+",
}


def is_channel_variant(name: str) -> bool:
    return any(suffix in name for suffix in CHANNEL_SUFFIXES)


def channel_variant_to_direct(name: str) -> str:
    """Map e.g. "Paramount Plus Apple TV Channel" to "Paramount+"."""
    base = name.strip()
    for suffix in CHANNEL_SUFFIXES:
        if suffix in base:
            base = base.replace(suffix, "").strip()
            break
    base = " ".join(base.split())
    return BASE_TO_CANONICAL.get(base, base or name)


def to_display_name(name: str) -> str:
    name = name.strip()
    return DISPLAY_NORMALIZE.get(name, name)


def get_flatrate_from_regions(
    watch_providers: Optional[Mapping[str, Any]],
    regions: Iterable[str] = ("US", "GB", "CA"),
) -> Optional[List[dict]]:
    """Return the subscription ("flatrate") providers for the first region that has any.

    ``watch_providers`` is TMDB's ``results`` mapping keyed by country code.
    Unreleased titles often have no US data, so listed regions are checked in
    order and then any other region.
    """
    if not watch_providers or not isinstance(watch_providers, Mapping):
        return None
    for code in regions:
        flatrate = (watch_providers.get(code) or {}).get("flatrate")
        if flatrate:
            return flatrate
    for region in watch_providers.values():
        flatrate = (region or {}).get("flatrate")
        if flatrate:
            return flatrate
    return None


def pick_primary_provider(flatrate: Optional[Iterable[Mapping[str, Any]]]) -> str:
    """Pick the service name a title should be planned under.

    Direct services win over channel variants; when only channel variants are
    listed the first one is mapped back to its direct service.
    """
    names = [
        (p.get("provider_name") or "").strip() for p in (flatrate or [])
    ]
    names = [n for n in names if n]
    if not names:
        return UNKNOWN_SERVICE

    for name in names:
        if not is_channel_variant(name):
            return to_display_name(name)
    return channel_variant_to_direct(names[0])
