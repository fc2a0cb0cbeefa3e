#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for holiday_sources.py

The HTTP layer is replaced by fake fetch functions, so no network is used.
"""

from datetime import date

import pytest

from holiday_sources import (
    ABSTRACT_API_URL,
    NAGER_API_URL,
    AbstractHolidaySource,
    Holiday,
    HolidayFetchError,
    NagerHolidaySource,
    country_name,
    fetch_all,
    parse_country_codes,
)


class FakeFetch:
    """Records calls and returns canned payloads keyed by country code."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, url, params=None):
        self.calls.append((url, params))
        if params is not None:
            key = params["country"]
        else:
            key = url.rsplit("/", 1)[-1]
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        return response


def nager_record(day, name, types, country_code, local_name=None):
    return {
        "date": day,
        "name": name,
        "localName": local_name if local_name is not None else name,
        "types": types,
        "counties": None,
        "countryCode": country_code,
    }


# --- parse_country_codes / country_name ---

def test_parse_country_codes_trims_and_uppercases():
    assert parse_country_codes("US, uk,,AU ") == ["US", "UK", "AU"]


def test_parse_country_codes_empty():
    assert parse_country_codes(" , ") == []


def test_country_name_resolves_known_and_alias_codes():
    assert country_name("US") == "United States"
    assert country_name("uk") == "United Kingdom"
    assert country_name("GB") == "United Kingdom"


def test_country_name_falls_back_to_code():
    assert country_name("XX") == "XX"


# --- AbstractHolidaySource ---

def test_abstract_sends_date_as_query_parameters_and_sleeps():
    fetch = FakeFetch({"US": []})
    sleeps = []
    source = AbstractHolidaySource("secret", 1.0, fetch_json=fetch, sleep=sleeps.append)

    assert source.fetch("US", date(2024, 7, 4)) == []

    url, params = fetch.calls[0]
    assert url == ABSTRACT_API_URL
    assert params == {"api_key": "secret", "country": "US", "year": "2024", "month": "7", "day": "4"}
    assert sleeps == [1.0]


def test_abstract_uses_configured_rate_limit():
    sleeps = []
    source = AbstractHolidaySource("k", 2.5, fetch_json=FakeFetch({"US": []}), sleep=sleeps.append)
    source.fetch("US", date(2024, 1, 1))
    assert sleeps == [2.5]


def test_abstract_zero_rate_limit_does_not_sleep():
    sleeps = []
    source = AbstractHolidaySource("k", 0, fetch_json=FakeFetch({"US": []}), sleep=sleeps.append)
    source.fetch("US", date(2024, 1, 1))
    assert sleeps == []


def test_abstract_normalizes_empty_strings_to_none():
    payload = [{"name": "Independence Day", "name_local": "", "country": "US", "location": ""}]
    source = AbstractHolidaySource("k", 0, fetch_json=FakeFetch({"US": payload}))

    [holiday] = source.fetch("US", date(2024, 7, 4))

    assert holiday.name == "Independence Day"
    assert holiday.local_name is None
    assert holiday.location is None
    assert holiday.country_code == "US"
    assert holiday.display_names() == ("Independence Day", None)


def test_abstract_keeps_local_name_as_secondary():
    payload = [{"name": "New Year's Day", "name_local": "Neujahr", "location": "Germany"}]
    source = AbstractHolidaySource("k", 0, fetch_json=FakeFetch({"DE": payload}))

    [holiday] = source.fetch("DE", date(2024, 1, 1))

    assert holiday.location == "Germany"
    assert holiday.display_names() == ("New Year's Day", "Neujahr")


def test_abstract_wraps_http_errors_and_still_sleeps():
    sleeps = []
    fetch = FakeFetch({"US": RuntimeError("HTTP 429 fetching ...")})
    source = AbstractHolidaySource("k", 1.0, fetch_json=fetch, sleep=sleeps.append)

    with pytest.raises(HolidayFetchError, match="HTTP 429"):
        source.fetch("US", date(2024, 1, 1))
    assert sleeps == [1.0]


def test_abstract_rejects_non_list_payload():
    source = AbstractHolidaySource("k", 0, fetch_json=FakeFetch({"US": {"error": "invalid key"}}))
    with pytest.raises(HolidayFetchError, match="expected a JSON array"):
        source.fetch("US", date(2024, 1, 1))


def test_abstract_rejects_record_without_name():
    source = AbstractHolidaySource("k", 0, fetch_json=FakeFetch({"US": [{"location": "US"}]}))
    with pytest.raises(HolidayFetchError, match="Malformed"):
        source.fetch("US", date(2024, 1, 1))


# --- NagerHolidaySource ---

def test_nager_requests_whole_year_by_path():
    fetch = FakeFetch({"US": []})
    NagerHolidaySource(fetch_json=fetch).fetch("US", date(2024, 1, 1))
    assert fetch.calls == [(f"{NAGER_API_URL}/2024/US", None)]


def test_nager_filters_by_exact_date_and_allowed_types():
    payload = [
        nager_record("2024-01-01", "New Year's Day", ["Public"], "US"),
        nager_record("2024-01-02", "Day After", ["Public"], "US"),
        nager_record("2024-01-01", "Bank Only", ["Bank"], "US"),
        nager_record("2024-01-01", "Optional Day", ["Bank", "Optional"], "US"),
        nager_record("2024-01-01", "No Types", [], "US"),
    ]
    source = NagerHolidaySource(fetch_json=FakeFetch({"US": payload}))

    holidays = source.fetch("US", date(2024, 1, 1))

    assert [h.name for h in holidays] == ["New Year's Day", "Optional Day"]


def test_nager_custom_allow_list():
    payload = [
        nager_record("2024-01-01", "Public Day", ["Public"], "GB"),
        nager_record("2024-01-01", "Bank Day", ["Bank"], "GB"),
    ]
    source = NagerHolidaySource(allowed_types=["Bank"], fetch_json=FakeFetch({"GB": payload}))

    assert [h.name for h in source.fetch("GB", date(2024, 1, 1))] == ["Bank Day"]


def test_nager_resolves_location_and_puts_local_name_first():
    payload = [
        {
            "date": "2024-01-01",
            "name": "New Year's Day",
            "localName": "Neujahr",
            "types": ["Public"],
            "counties": ["DE-BW"],
            "countryCode": "DE",
        }
    ]
    source = NagerHolidaySource(fetch_json=FakeFetch({"DE": payload}))

    [holiday] = source.fetch("DE", date(2024, 1, 1))

    assert holiday.location == "Germany"
    assert holiday.counties == ("DE-BW",)
    assert holiday.types == ("Public",)
    assert holiday.display_names() == ("Neujahr", "New Year's Day")


def test_nager_wraps_errors():
    source = NagerHolidaySource(fetch_json=FakeFetch({"ZZ": RuntimeError("HTTP 404 fetching ...")}))
    with pytest.raises(HolidayFetchError):
        source.fetch("ZZ", date(2024, 1, 1))


# --- fetch_all ---

def test_fetch_all_keeps_country_order():
    payloads = {
        "US": [nager_record("2024-01-01", "US Day", ["Public"], "US")],
        "DE": [nager_record("2024-01-01", "DE Day", ["Public"], "DE")],
    }
    source = NagerHolidaySource(fetch_json=FakeFetch(payloads))

    holidays = fetch_all(source, ["US", "DE"], date(2024, 1, 1))

    assert [h.name for h in holidays] == ["US Day", "DE Day"]


def test_fetch_all_skips_failing_country(capsys):
    payloads = {
        "XX": RuntimeError("Network error fetching ..."),
        "US": [nager_record("2024-01-01", "New Year's Day", ["Public"], "US")],
    }
    source = NagerHolidaySource(fetch_json=FakeFetch(payloads))

    holidays = fetch_all(source, ["XX", "US"], date(2024, 1, 1))

    assert [h.name for h in holidays] == ["New Year's Day"]
    assert "WARNING: error fetching holidays for country XX" in capsys.readouterr().err


def test_holiday_is_immutable():
    holiday = Holiday(name="Day")
    with pytest.raises(AttributeError):
        holiday.name = "Other"


def test_nager_ignores_malformed_records_on_other_dates():
    payload = [
        {"date": "2024-05-01", "types": ["Public"]},
        "not a record",
        nager_record("2024-01-01", "New Year's Day", ["Public"], "US"),
    ]
    source = NagerHolidaySource(fetch_json=FakeFetch({"US": payload}))

    assert [h.name for h in source.fetch("US", date(2024, 1, 1))] == ["New Year's Day"]


def test_nager_rejects_malformed_record_on_requested_date():
    payload = [{"date": "2024-01-01", "types": ["Public"]}]
    source = NagerHolidaySource(fetch_json=FakeFetch({"US": payload}))
    with pytest.raises(HolidayFetchError, match="Malformed"):
        source.fetch("US", date(2024, 1, 1))


def test_nager_string_types_is_a_single_category():
    payload = [
        nager_record("2024-01-01", "New Year's Day", "Public", "US"),
        nager_record("2024-01-01", "Letters Only", "PublicX", "US"),
    ]
    source = NagerHolidaySource(allowed_types=["Public"], fetch_json=FakeFetch({"US": payload}))

    [holiday] = source.fetch("US", date(2024, 1, 1))

    assert holiday.name == "New Year's Day"
    assert holiday.types == ("Public",)


def test_nager_string_types_do_not_match_by_character():
    payload = [nager_record("2024-01-01", "Odd", "Bank", "US")]
    source = NagerHolidaySource(allowed_types=["B", "a", "n", "k"], fetch_json=FakeFetch({"US": payload}))
    assert source.fetch("US", date(2024, 1, 1)) == []


def test_nager_rejects_non_list_types():
    payload = [nager_record("2024-01-01", "Odd", {"kind": "Public"}, "US")]
    source = NagerHolidaySource(fetch_json=FakeFetch({"US": payload}))
    with pytest.raises(HolidayFetchError, match="Malformed holiday types"):
        source.fetch("US", date(2024, 1, 1))
