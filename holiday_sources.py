#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Holiday sources: fetch public holidays for one country and one date.

Two implementations share the HolidaySource interface:
  - AbstractHolidaySource: https://holidays.abstractapi.com (API key, one request per day)
  - NagerHolidaySource:    https://date.nager.at (no key, one request per year, filtered locally)
"""

import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from http_client import http_get_json

ABSTRACT_API_URL = "https://holidays.abstractapi.com/v1/"
NAGER_API_URL = "https://date.nager.at/api/v3/PublicHolidays"

# Display names used as section titles for the Nager source.
# Keys are ISO-3166 alpha-2 codes; unknown codes are shown as-is.
COUNTRY_NAMES: Dict[str, str] = {
    "AD": "Andorra",
    "AR": "Argentina",
    "AT": "Austria",
    "AU": "Australia",
    "BE": "Belgium",
    "BG": "Bulgaria",
    "BR": "Brazil",
    "CA": "Canada",
    "CH": "Switzerland",
    "CL": "Chile",
    "CN": "China",
    "CO": "Colombia",
    "CZ": "Czechia",
    "DE": "Germany",
    "DK": "Denmark",
    "EE": "Estonia",
    "EG": "Egypt",
    "ES": "Spain",
    "FI": "Finland",
    "FR": "France",
    "GB": "United Kingdom",
    "UK": "United Kingdom",  # Alias for GB
    "GR": "Greece",
    "HK": "Hong Kong",
    "HR": "Croatia",
    "HU": "Hungary",
    "ID": "Indonesia",
    "IE": "Ireland",
    "IL": "Israel",
    "IN": "India",
    "IS": "Iceland",
    "IT": "Italy",
    "JP": "Japan",
    "KE": "Kenya",
    "KR": "South Korea",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "LV": "Latvia",
    "MA": "Morocco",
    "MX": "Mexico",
    "MY": "Malaysia",
    "NG": "Nigeria",
    "NL": "Netherlands",
    "NO": "Norway",
    "NZ": "New Zealand",
    "PE": "Peru",
    "PH": "Philippines",
    "PL": "Poland",
    "PT": "Portugal",
    "RO": "Romania",
    "RS": "Serbia",
    "RU": "Russia",
    "SE": "Sweden",
    "SG": "Singapore",
    "SI": "Slovenia",
    "SK": "Slovakia",
    "TH": "Thailand",
    "TR": "Turkey",
    "UA": "Ukraine",
    "US": "United States",
    "VN": "Vietnam",
    "ZA": "South Africa",
}

FetchJson = Callable[..., Any]


class HolidayFetchError(RuntimeError):
    """Fetching or decoding one country's holidays failed."""


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value else None


@dataclass(frozen=True)
class Holiday:
    name: str
    local_name: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    types: Tuple[str, ...] = ()
    country_code: Optional[str] = None
    counties: Optional[Tuple[str, ...]] = None
    local_first: bool = False

    def display_names(self) -> Tuple[str, Optional[str]]:
        """Return (primary, secondary) names for one message line."""
        if self.local_first:
            return self.local_name or self.name, self.name
        return self.name, self.local_name


def country_name(country_code: str) -> str:
    return COUNTRY_NAMES.get(country_code.upper(), country_code)


def parse_country_codes(arg: str) -> List[str]:
    # Accept comma-separated items like "US,UK, au"
    return [x.strip().upper() for x in arg.split(",") if x.strip()]


def _require_list(payload: Any, country_code: str) -> List[Any]:
    if not isinstance(payload, list):
        raise HolidayFetchError(
            f"Unexpected payload for {country_code}: expected a JSON array, got {type(payload).__name__}"
        )
    return payload


def _require_records(items: Iterable[Any], country_code: str) -> List[Dict[str, Any]]:
    items = list(items)
    for item in items:
        if not isinstance(item, dict) or not item.get("name"):
            raise HolidayFetchError(f"Malformed holiday record for {country_code}: {item!r}")
    return items


def _holiday_types(item: Dict[str, Any], country_code: str) -> Tuple[str, ...]:
    types = item.get("types")
    if types is None:
        return ()
    # A bare string is one category, not a sequence of characters.
    if isinstance(types, str):
        return (types,)
    if isinstance(types, list):
        return tuple(str(t) for t in types)
    raise HolidayFetchError(f"Malformed holiday types for {country_code}: {types!r}")


class HolidaySource(ABC):
    """Returns the holidays that fall on one date for one country."""

    name = ""

    @abstractmethod
    def fetch(self, country_code: str, day: date) -> List[Holiday]:
        """
        Fetch holidays for a single country and date.

        Raises:
            HolidayFetchError: On network, HTTP or payload errors
        """


class AbstractHolidaySource(HolidaySource):
    name = "abstract"

    def __init__(
        self,
        api_key: str,
        rate_limit_seconds: float = 1.0,
        fetch_json: FetchJson = http_get_json,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        self.rate_limit_seconds = rate_limit_seconds
        self.fetch_json = fetch_json
        self.sleep = sleep

    def fetch(self, country_code: str, day: date) -> List[Holiday]:
        params = {
            "api_key": self.api_key,
            "country": country_code,
            "year": str(day.year),
            "month": str(day.month),
            "day": str(day.day),
        }
        try:
            try:
                payload = self.fetch_json(ABSTRACT_API_URL, params)
            except RuntimeError as e:
                raise HolidayFetchError(str(e)) from e
            records = _require_records(_require_list(payload, country_code), country_code)
            return [self.to_holiday(item) for item in records]
        finally:
            # The free tier appears to allow about one request per second.
            if self.rate_limit_seconds > 0:
                self.sleep(self.rate_limit_seconds)

    @staticmethod
    def to_holiday(item: Dict[str, Any]) -> Holiday:
        return Holiday(
            name=str(item["name"]),
            local_name=_blank_to_none(item.get("name_local")),
            location=_blank_to_none(item.get("location")),
            date=_blank_to_none(item.get("date")),
            country_code=_blank_to_none(item.get("country")),
        )


class NagerHolidaySource(HolidaySource):
    name = "nager"

    def __init__(
        self,
        allowed_types: Iterable[str] = ("Public", "Optional"),
        fetch_json: FetchJson = http_get_json,
    ):
        self.allowed_types = frozenset(allowed_types)
        self.fetch_json = fetch_json

    def fetch(self, country_code: str, day: date) -> List[Holiday]:
        url = f"{NAGER_API_URL}/{day.year}/{country_code}"
        try:
            payload = self.fetch_json(url)
        except RuntimeError as e:
            raise HolidayFetchError(str(e)) from e

        target = day.isoformat()
        on_day = [
            item for item in _require_list(payload, country_code)
            if isinstance(item, dict) and item.get("date") == target
        ]
        return [
            self.to_holiday(item, country_code)
            for item in _require_records(on_day, country_code)
            if self.allowed_types.intersection(_holiday_types(item, country_code))
        ]

    @staticmethod
    def to_holiday(item: Dict[str, Any], country_code: str) -> Holiday:
        counties = item.get("counties")
        return Holiday(
            name=str(item["name"]),
            local_name=_blank_to_none(item.get("localName")),
            location=country_name(country_code),
            date=item.get("date"),
            types=_holiday_types(item, country_code),
            country_code=_blank_to_none(item.get("countryCode")) or country_code,
            counties=tuple(counties) if counties else None,
            local_first=True,
        )


def fetch_all(source: HolidaySource, country_codes: Iterable[str], day: date) -> List[Holiday]:
    """
    Fetch holidays for each country in order, skipping countries that fail.

    Args:
        source: Holiday source to query
        country_codes: Two-letter country codes, in the order to query them
        day: Date to fetch

    Returns:
        Holidays from every country that could be fetched, in request order
    """
    holidays: List[Holiday] = []
    for country_code in country_codes:
        try:
            holidays.extend(source.fetch(country_code, day))
        except HolidayFetchError as e:
            print(f"WARNING: error fetching holidays for country {country_code}", file=sys.stderr)
            print(f"  {e}", file=sys.stderr)
    return holidays
