# API module - Hotellook hotel search client
# One client per partner marker, signed closed methods, advisory rate limits

from .client import HotellookClient, create_client
from .models import (
    LookupRequest, PriceRequest, SearchRequest, SearchResultsRequest,
    LookupResponse, PriceResult, Country, City, Amenity, HotelList,
    SearchResults,
)
from .rate_limiter import RateLimitSnapshot, RateLimitState
from .signing import compute_signature, signed_query

__all__ = [
    "HotellookClient", "create_client",
    "LookupRequest", "PriceRequest", "SearchRequest", "SearchResultsRequest",
    "LookupResponse", "PriceResult", "Country", "City", "Amenity", "HotelList",
    "SearchResults",
    "RateLimitSnapshot", "RateLimitState",
    "compute_signature", "signed_query",
]
