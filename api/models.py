"""
Request and Response Models
---------------------------
Requests are plain dataclasses; zero-valued optional fields are left out
of the query. Responses mirror the upstream JSON and are decoded with
pydantic. Missing or null fields take the zero value of their type.
"""

from dataclasses import dataclass, field
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Requests

@dataclass
class LookupRequest:
    """Location/hotel autocomplete query."""
    query: str
    lang: str = ""       # ISO language code, upstream default is en
    look_for: str = ""   # city, hotel or both (default both)
    limit: int = 0       # upstream default is 10
    convert_case: int = 0  # keyboard layout correction, upstream default 1


@dataclass
class PriceRequest:
    """Cached price query for a location or a single hotel."""
    location: str
    check_in: str   # YYYY-MM-DD
    check_out: str  # YYYY-MM-DD
    currency: str = ""
    location_id: int = 0
    hotel_id: int = 0
    hotel: str = ""
    adults: int = 0    # upstream default is 2
    children: int = 0  # ages 2-18
    infants: int = 0   # ages 0-2
    limit: int = 0
    customer_ip: str = ""


@dataclass
class SearchRequest:
    """Parameters for starting a search session."""
    city_id: int = 0
    hotel_id: int = 0
    iata: str = ""
    check_in: str = ""
    check_out: str = ""
    adults_count: int = 0
    children_count: int = 0
    child_ages: List[int] = field(default_factory=list)
    customer_ip: str = ""
    currency: str = ""
    lang: str = ""
    wait_for_result: int = 0


@dataclass
class SearchResultsRequest:
    """Poll a search session for its results."""
    search_id: int
    limit: int = 0
    offset: int = 0
    sort_by: str = ""    # popularity, price, name, guestScore or stars
    sort_asc: int = 0    # -1 sorts descending
    rooms_count: int = 0


# Responses

class UpstreamModel(BaseModel):
    """Base for every decoded response."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class StringCoordinates(UpstreamModel):
    lat: str = ""
    lon: str = ""


class Coordinates(UpstreamModel):
    lat: float = 0.0
    lon: float = 0.0


class LookupLocation(UpstreamModel):
    city_name: str = Field("", alias="cityName")
    full_name: str = Field("", alias="fullName")
    country_code: str = Field("", alias="countryCode")
    country_name: str = Field("", alias="countryName")
    iata: List[str] = Field(default_factory=list)
    id: str = ""
    hotels_count: str = Field("", alias="hotelsCount")
    location: StringCoordinates = Field(default_factory=StringCoordinates)
    score: float = Field(0.0, alias="_score")


class LookupHotel(UpstreamModel):
    # Upstream sends either a number or a string here.
    id: Any = None
    full_name: str = Field("", alias="fullName")
    location_name: str = Field("", alias="locationName")
    label: str = ""
    location_id: int = Field(0, alias="locationId")
    location: Coordinates = Field(default_factory=Coordinates)
    score: float = Field(0.0, alias="_score")


class LookupResults(UpstreamModel):
    locations: List[LookupLocation] = Field(default_factory=list)
    hotels: List[LookupHotel] = Field(default_factory=list)


class LookupResponse(UpstreamModel):
    status: str = ""
    results: LookupResults = Field(default_factory=LookupResults)


class Geo(UpstreamModel):
    lon: float = 0.0
    lat: float = 0.0


class PriceLocation(UpstreamModel):
    country: str = ""
    state: str = ""
    name: str = ""
    geo: Geo = Field(default_factory=Geo)


class PriceResult(UpstreamModel):
    stars: int = 0
    hotel_id: int = Field(0, alias="hotelId")
    hotel_name: str = Field("", alias="hotelName")
    price_avg: float = Field(0.0, alias="priceAvg")
    price_from: float = Field(0.0, alias="priceFrom")
    location_id: int = Field(0, alias="locationId")
    location: PriceLocation = Field(default_factory=PriceLocation)


class NameVariation(UpstreamModel):
    is_variation: str = Field("", alias="isVariation")
    name: str = ""


class Country(UpstreamModel):
    id: str = ""
    code: str = ""
    en: List[NameVariation] = Field(default_factory=list, alias="EN")
    ru: List[NameVariation] = Field(default_factory=list, alias="RU")


class City(UpstreamModel):
    id: str = ""  # location id
    code: str = ""
    country_id: str = Field("", alias="countryId")
    latitude: str = ""
    longitude: str = ""
    en: List[NameVariation] = Field(default_factory=list, alias="EN")
    ru: List[NameVariation] = Field(default_factory=list, alias="RU")


class Amenity(UpstreamModel):
    id: str = ""
    name: str = ""
    group_name: str = Field("", alias="groupName")


class Photo(UpstreamModel):
    url: str = ""
    width: int = 0
    height: int = 0


class LocalizedText(UpstreamModel):
    en: str = ""
    ru: str = ""


class Hotel(UpstreamModel):
    id: int = 0
    city_id: int = Field(0, alias="cityId")
    stars: int = 0
    price_from: float = Field(0.0, alias="pricefrom")
    rating: int = 0
    popularity: int = 0
    property_type: int = Field(0, alias="propertyType")
    check_in: str = Field("", alias="checkIn")
    check_out: str = Field("", alias="checkOut")
    distance: float = 0.0
    year_opened: int = Field(0, alias="yearOpened")
    year_renovated: int = Field(0, alias="yearRenovated")
    photo_count: int = Field(0, alias="photoCount")
    photos: List[Photo] = Field(default_factory=list)
    facilities: List[int] = Field(default_factory=list)
    short_facilities: List[str] = Field(default_factory=list, alias="shortFacilities")
    location: Coordinates = Field(default_factory=Coordinates)
    name: LocalizedText = Field(default_factory=LocalizedText)
    count_floors: int = Field(0, alias="cntFloors")
    count_rooms: int = Field(0, alias="cntRooms")
    address: LocalizedText = Field(default_factory=LocalizedText)
    link: str = ""


class HotelList(UpstreamModel):
    timestamp: float = Field(0.0, alias="gen_timestamp")
    hotels: List[Hotel] = Field(default_factory=list)


class SearchStartResponse(UpstreamModel):
    search_id: int = Field(0, alias="searchId")
    status: str = ""


class RoomOptions(UpstreamModel):
    available: int = 0           # rooms left
    breakfast: bool = False
    refundable: bool = False
    deposit: bool = False        # paid on the agency site at booking time
    card_required: bool = Field(False, alias="cardRequired")
    smoking: bool = False
    free_wifi: bool = Field(False, alias="freeWifi")
    hotel_website: bool = Field(False, alias="hotelWebsite")


class Room(UpstreamModel):
    agency_id: str = Field("", alias="agencyId")
    agency_name: str = Field("", alias="agencyName")
    booking_url: str = Field("", alias="bookingURL")
    type: str = ""
    tax: float = 0.0
    total: float = 0.0
    price: float = 0.0
    full_booking_url: str = Field("", alias="fullBookingURL")
    rating: int = 0
    description: str = Field("", alias="desc")
    options: RoomOptions = Field(default_factory=RoomOptions)


class SearchResultHotel(UpstreamModel):
    full_url: str = Field("", alias="fullUrl")  # carries the partner marker
    max_price_per_night: float = Field(0.0, alias="maxPricePerNight")
    min_price_total: float = Field(0.0, alias="minPriceTotal")
    max_price: float = Field(0.0, alias="maxPrice")
    photo_count: int = Field(0, alias="photoCount")
    guest_score: int = Field(0, alias="guestScore")
    address: str = ""
    id: int = 0
    price: float = 0.0  # average price per room
    name: str = ""
    url: str = ""
    popularity: int = 0
    location: Coordinates = Field(default_factory=Coordinates)
    stars: int = 0
    distance: float = 0.0  # to the city centre
    rooms: List[Room] = Field(default_factory=list)


class SearchResults(UpstreamModel):
    status: str = ""
    results: List[SearchResultHotel] = Field(default_factory=list, alias="result")
