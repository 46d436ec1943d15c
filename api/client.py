"""
Hotellook API Client
--------------------
Client for the Travelpayouts hotel search API (engine.hotellook.com).

Some methods are closed: they need a valid marker and token and send a
signed query. Static data methods (countries, cities, amenities, hotel
list, room types) return data that rarely changes and is safe to cache.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
import asyncio
import json

import httpx
from pydantic import TypeAdapter

from api.models import (
    Amenity,
    City,
    Country,
    HotelList,
    LookupRequest,
    LookupResponse,
    PriceRequest,
    PriceResult,
    SearchRequest,
    SearchResults,
    SearchResultsRequest,
    SearchStartResponse,
)
from api.rate_limiter import RateLimitSnapshot
from api.signing import encode_query, signed_query
from core.errors import EmptySearchIdentifierError, InvalidMarkerError, NoAccessError
from infra.config import ClientConfig
from infra.logging import RequestContext, get_logger

T = TypeVar("T")

PHOTO_URL = "https://photo.hotellook.com/image_v2/limit/h{hotel_id}_{photo_id}/{size}.jpg"

# Search id that reads the bundled demo results instead of calling the API.
DEMO_SEARCH_ID = -1


def _put_int(params: Dict[str, str], key: str, value: int) -> None:
    if value:
        params[key] = str(value)


def _put_str(params: Dict[str, str], key: str, value: str) -> None:
    if value:
        params[key] = value


class HotellookClient:
    """
    Hotellook API client.

    Rules:
    - A client without a marker cannot exist
    - Closed methods refuse to run without a token
    - Rate-limit headers are recorded, never enforced
    """

    def __init__(
        self,
        marker: int,
        token: str = "",
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not marker:
            raise InvalidMarkerError()

        self._marker = marker
        self._token = token
        self.config = config or ClientConfig()
        self._transport = transport
        self._rate_limits = RateLimitSnapshot()
        self._logger = get_logger("api.client")

    @property
    def marker(self) -> int:
        return self._marker

    @property
    def token(self) -> str:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    @property
    def requests_remaining(self) -> int:
        """Last seen X-Ratelimit-Remaining value."""
        return self._rate_limits.remaining

    @property
    def requests_limit(self) -> int:
        """Last seen X-Ratelimit-Limit value."""
        return self._rate_limits.limit

    @property
    def rate_limits(self) -> RateLimitSnapshot:
        return self._rate_limits

    def check_access(self) -> None:
        """Raise NoAccessError unless both marker and token are set."""
        if not self._token or not self._marker:
            raise NoAccessError()

    def with_signature(self, params: Optional[Mapping[str, str]] = None) -> str:
        """Return urlencoded params with marker and computed signature."""
        return signed_query(self._token, self._marker, params)

    # Transport

    async def _get(self, endpoint: str, query: str, signed: bool) -> bytes:
        """Issue one GET and return the raw body."""
        url = f"{self.config.base_url}{endpoint}?{query}"
        start_time = datetime.now()

        async with httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            transport=self._transport,
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
        ) as client:
            response = await client.get(url)
        body = response.content

        asyncio.get_running_loop().call_soon(
            self._rate_limits.update_from_headers, response.headers
        )

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
        self._logger.debug(
            f"GET {endpoint} -> {response.status_code} ({elapsed_ms:.0f} ms)",
            extra={
                "endpoint": endpoint,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
                "signed": signed,
            },
        )
        return body

    async def _fetch_public(self, endpoint: str, query: str, adapter: TypeAdapter, signed: bool = False) -> Any:
        body = await self._get(endpoint, query, signed)
        return adapter.validate_python(json.loads(body))

    async def _fetch_closed(self, endpoint: str, adapter: TypeAdapter, params: Optional[Mapping[str, str]] = None) -> Any:
        try:
            self.check_access()
        except NoAccessError:
            self._logger.warning(f"Refusing {endpoint}: marker and token required")
            raise

        body = await self._get(endpoint, self.with_signature(params), signed=True)
        try:
            return adapter.validate_python(json.loads(body))
        except ValueError as exc:
            # JSONDecodeError and pydantic ValidationError are both ValueErrors
            self._logger.warning(f"Undecodable response from {endpoint}, treating as rejected credentials")
            raise NoAccessError() from exc

    # Public methods

    async def lookup(self, req: LookupRequest) -> LookupResponse:
        """Find locations and hotels by name."""
        params = {
            "query": req.query,
            "lang": req.lang,
            "lookFor": req.look_for,
        }
        _put_int(params, "limit", req.limit)
        _put_int(params, "convertCase", req.convert_case)

        with RequestContext():
            return await self._fetch_public("lookup.json", encode_query(params), _adapter(LookupResponse))

    async def price(self, req: PriceRequest) -> List[PriceResult]:
        """Cached prices for a location or hotel over a date range."""
        params = {
            "location": req.location,
            "checkIn": req.check_in,
            "checkOut": req.check_out,
        }
        _put_int(params, "locationId", req.location_id)
        _put_int(params, "hotelId", req.hotel_id)
        _put_str(params, "hotel", req.hotel)
        _put_int(params, "adults", req.adults)
        _put_int(params, "children", req.children)
        _put_str(params, "currency", req.currency)
        _put_int(params, "infants", req.infants)
        _put_int(params, "limit", req.limit)
        _put_str(params, "clientIp", req.customer_ip)

        with RequestContext():
            return await self._fetch_public("cache.json", encode_query(params), _adapter(List[PriceResult]))

    async def search(self, req: SearchRequest) -> int:
        """Start a search session and return its id."""
        params = {
            "cityId": str(req.city_id),
            "checkIn": req.check_in,
            "checkOut": req.check_out,
            "adultsCount": str(req.adults_count),
            "childrenCount": str(req.children_count),
            "lang": req.lang,
            "currency": req.currency.upper(),
            "customerIp": req.customer_ip,
        }
        _put_int(params, "hotelId", req.hotel_id)
        _put_int(params, "waitForResult", req.wait_for_result)
        _put_str(params, "iata", req.iata)

        # One age per declared child, at most three; unknown ages go as 0.
        count = max(0, min(req.children_count, 3))
        for position in range(1, count + 1):
            age = req.child_ages[position - 1] if position <= len(req.child_ages) else 0
            params[f"childAge{position}"] = str(age)

        with RequestContext():
            resp = await self._fetch_public(
                "search/start.json", self.with_signature(params), _adapter(SearchStartResponse), signed=True
            )
        return resp.search_id

    async def fetch_search_results(self, req: SearchResultsRequest) -> SearchResults:
        """
        Poll a search session.

        Search id -1 returns the bundled demo results without touching
        the network, for trying the client without credentials.
        """
        if req.search_id == 0:
            raise EmptySearchIdentifierError()
        if req.search_id == DEMO_SEARCH_ID:
            return await self._load_demo_results()

        params = {"searchId": str(req.search_id)}
        _put_int(params, "limit", req.limit)
        _put_int(params, "offset", req.offset)
        _put_str(params, "sortBy", req.sort_by)
        if req.sort_asc == -1:
            params["sortAsc"] = "0"
        _put_int(params, "roomsCount", req.rooms_count)

        with RequestContext():
            return await self._fetch_public(
                "search/getResult.json", self.with_signature(params), _adapter(SearchResults), signed=True
            )

    async def _load_demo_results(self) -> SearchResults:
        path = self.config.demo_results_path
        self._logger.debug(f"Reading demo search results from {path}")
        body = await asyncio.to_thread(path.read_bytes)
        return SearchResults.model_validate_json(body)

    # Closed methods

    async def countries(self) -> List[Country]:
        with RequestContext():
            return await self._fetch_closed("static/countries.json", _adapter(List[Country]))

    async def cities(self) -> List[City]:
        """Fetch every city. Very long request."""
        with RequestContext():
            return await self._fetch_closed("static/locations.json", _adapter(List[City]))

    async def amenities(self) -> List[Amenity]:
        """Fetch available facilities."""
        with RequestContext():
            return await self._fetch_closed("static/amenities.json", _adapter(List[Amenity]))

    async def fetch_hotel_list(self, location_id: str) -> HotelList:
        with RequestContext():
            return await self._fetch_closed(
                "static/hotels.json", _adapter(HotelList), {"locationId": str(location_id)}
            )

    async def room_types(self) -> Any:
        """
        Fetch room types.

        Upstream publishes no schema for this method, so the decoded JSON
        is returned as is.
        """
        with RequestContext():
            return await self._fetch_closed("static/roomTypes.json", _adapter(Any))

    @staticmethod
    def photo_link(hotel_id: int, photo_id: int, size: str) -> str:
        """Build a hotel photo URL, e.g. size '800x520'."""
        return PHOTO_URL.format(hotel_id=hotel_id, photo_id=photo_id, size=size)


_adapters: Dict[Any, TypeAdapter] = {}


def _adapter(tp: Type[T]) -> TypeAdapter:
    if tp not in _adapters:
        _adapters[tp] = TypeAdapter(tp)
    return _adapters[tp]


def create_client(marker: int, token: str = "", config: Optional[ClientConfig] = None) -> Optional[HotellookClient]:
    """Create a client, or None when the marker is zero."""
    if not marker:
        return None
    return HotellookClient(marker, token=token, config=config)
