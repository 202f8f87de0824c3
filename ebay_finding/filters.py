"""Aspect and item filter parsing.

Filters arrive flattened into the raw parameter mapping, either as a single
non-numbered filter::

    itemFilter.name=MaxPrice  itemFilter.value=500.0

or as numbered filters, each of which may itself carry numbered values::

    itemFilter(0).name=ListingType  itemFilter(0).value(0)=Auction
    itemFilter(1).name=MaxPrice     itemFilter(1).value=500.0

Both syntaxes for the same construct cannot be mixed. Numbered entries are
read from index 0 upwards and the scan stops at the first missing index.

Entry points: parse_aspect_filters(), parse_item_filters()
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from . import errors
from .config import (
    MAX_EXCLUDE_CATEGORIES,
    MAX_EXCLUDE_SELLERS,
    MAX_LOCATED_INS,
    MAX_SELLERS,
    SMALLEST_MAX_DISTANCE,
)
from .errors import (
    ConstraintError,
    FormatError,
    IncompleteParameterError,
    IndexSyntaxError,
    InvalidNumberError,
    UnsupportedValueError,
)
from .models import AspectFilter, ItemFilter
from .utils import (
    has_indexed_key,
    indexed_key,
    parse_float,
    parse_int,
    parse_utc_timestamp,
    scan_indexed,
)

# Global ID values, also accepted by the ListedIn item filter.
GLOBAL_IDS = (
    "EBAY-AT", "EBAY-AU", "EBAY-CH", "EBAY-DE", "EBAY-ENCA", "EBAY-ES", "EBAY-FR", "EBAY-FRBE",
    "EBAY-FRCA", "EBAY-GB", "EBAY-HK", "EBAY-IE", "EBAY-IN", "EBAY-IT", "EBAY-MOTOR", "EBAY-MY",
    "EBAY-NL", "EBAY-NLBE", "EBAY-PH", "EBAY-PL", "EBAY-SG", "EBAY-US",
)
CURRENCY_IDS = (
    "AUD", "CAD", "CHF", "CNY", "EUR", "GBP", "HKD", "INR", "MYR", "PHP", "PLN", "SEK", "SGD", "TWD", "USD",
)
CONDITION_IDS = (
    1000, 1500, 1750, 2000, 2010, 2020, 2030, 2500, 2750, 3000, 4000, 5000, 6000, 7000,
)
LISTING_TYPES = ("Auction", "AuctionWithBIN", "Classified", "FixedPrice", "StoreInventory", "All")
EXPEDITED_SHIPPING_TYPES = ("Expedited", "OneDayShipping")
SELLER_BUSINESS_TYPES = ("Business", "Private")

BOOLEAN_FILTERS = (
    "AuthorizedSellerOnly", "BestOfferOnly", "CharityOnly", "ExcludeAutoPay", "FreeShippingOnly",
    "HideDuplicateItems", "LocalPickupOnly", "LotsOnly", "ReturnsAcceptedOnly", "SoldItemsOnly",
)
PRICE_FILTERS = ("MaxPrice", "MinPrice")
BUYER_POSTAL_CODE = "buyerPostalCode"

Validator = Callable[[ItemFilter, Sequence[ItemFilter], Mapping[str, str]], None]


def validate_global_id(value: str) -> str:
    if value not in GLOBAL_IDS:
        raise UnsupportedValueError(errors.INVALID_GLOBAL_ID, value)
    return value


# ---------------------------------------------------------------------------
# Numbered / non-numbered resolution
# ---------------------------------------------------------------------------

def check_index_syntax(params: Mapping[str, str], bare_key: str, prefix: str, suffix: str = "") -> bool:
    """Return whether the bare key is used; fail if it is mixed with indexed keys."""
    bare = bare_key in params
    if bare and has_indexed_key(params, prefix, suffix):
        raise IndexSyntaxError(errors.INVALID_INDEX_SYNTAX, bare_key)
    return bare


def _parse_filter_values(params: Mapping[str, str], attr: str) -> Tuple[str, ...]:
    """Values for a filter attribute given as attr(0), attr(1), ... or a bare attr."""
    values = scan_indexed(params, attr)
    if attr in params:
        values.append(params[attr])
    if not values:
        raise IncompleteParameterError(errors.INCOMPLETE_FILTER_NAME_ONLY, attr)
    check_index_syntax(params, attr, attr)
    return tuple(values)


def parse_aspect_filters(params: Mapping[str, str]) -> Tuple[AspectFilter, ...]:
    """Aspect filters in input order.

    Value names without an aspect name never open a filter and are ignored.
    """
    if check_index_syntax(params, "aspectFilter.aspectName", "aspectFilter", ".aspectName"):
        values = _parse_filter_values(params, "aspectFilter.aspectValueName")
        return (AspectFilter(params["aspectFilter.aspectName"], values),)

    aspect_filters: List[AspectFilter] = []
    for i, name in enumerate(scan_indexed(params, "aspectFilter", ".aspectName")):
        values = _parse_filter_values(params, indexed_key("aspectFilter", i, ".aspectValueName"))
        aspect_filters.append(AspectFilter(name, values))
    return tuple(aspect_filters)


def _read_item_filter(params: Mapping[str, str], prefix: str, name: str) -> ItemFilter:
    values = _parse_filter_values(params, f"{prefix}.value")
    param_name = params.get(f"{prefix}.paramName")
    param_value = params.get(f"{prefix}.paramValue")
    if (param_name is None) != (param_value is None):
        raise IncompleteParameterError(errors.INCOMPLETE_ITEM_FILTER_PARAM, prefix)
    return ItemFilter(name=name, values=values, param_name=param_name, param_value=param_value)


def parse_item_filters(params: Mapping[str, str]) -> Tuple[ItemFilter, ...]:
    """Item filters in input order, each validated against its type's rules.

    All filters are read before any is validated, so cross-filter rules see
    the whole list regardless of which filter comes first.
    """
    if check_index_syntax(params, "itemFilter.name", "itemFilter", ".name"):
        item_filters = [_read_item_filter(params, "itemFilter", params["itemFilter.name"])]
    else:
        item_filters = [
            _read_item_filter(params, indexed_key("itemFilter", i), name)
            for i, name in enumerate(scan_indexed(params, "itemFilter", ".name"))
        ]

    for item_filter in item_filters:
        validator = _VALIDATORS.get(item_filter.name)
        if validator is None:
            raise UnsupportedValueError(errors.UNSUPPORTED_ITEM_FILTER_TYPE, item_filter.name)
        validator(item_filter, item_filters, params)
    return tuple(_share_price_currency(item_filters))


def _share_price_currency(item_filters: List[ItemFilter]) -> List[ItemFilter]:
    """Give both price filters the currency qualifier supplied on either one."""
    qualified = next(
        (f for f in item_filters if f.name in PRICE_FILTERS and f.param_value is not None), None
    )
    if qualified is None:
        return item_filters
    return [
        replace(f, param_name=qualified.param_name, param_value=qualified.param_value)
        if f.name in PRICE_FILTERS and f.param_value is None
        else f
        for f in item_filters
    ]


# ---------------------------------------------------------------------------
# Value checks
# ---------------------------------------------------------------------------

def _check_boolean(value: str) -> None:
    if value not in ("true", "false"):
        raise UnsupportedValueError(errors.INVALID_BOOLEAN_VALUE, value)


def _check_country_code(value: str) -> None:
    if len(value) != 2 or not all("A" <= ch <= "Z" for ch in value):
        raise UnsupportedValueError(errors.INVALID_COUNTRY_CODE, value)


def _check_currency(value: str) -> None:
    if value not in CURRENCY_IDS:
        raise UnsupportedValueError(errors.INVALID_CURRENCY_ID, value)


def _parse_min_int(value: str, minimum: int) -> int:
    number = parse_int(value)
    if number is None or number < minimum:
        raise InvalidNumberError(errors.INVALID_INTEGER, f"{value!r} (minimum value: {minimum})")
    return number


def _check_date_time(value: str, future: bool) -> None:
    moment = parse_utc_timestamp(value)
    if moment is None:
        raise FormatError(errors.INVALID_DATE_TIME, value)
    now = datetime.now(timezone.utc)
    if (future and moment < now) or (not future and moment > now):
        raise ConstraintError(errors.INVALID_DATE_TIME, value)


def _has_filter(item_filters: Sequence[ItemFilter], *names: str) -> bool:
    return any(f.name in names for f in item_filters)


# ---------------------------------------------------------------------------
# Per-type validators
# ---------------------------------------------------------------------------

def _boolean(item_filter, item_filters, params):
    for value in item_filter.values:
        _check_boolean(value)


def _available_to(item_filter, item_filters, params):
    for value in item_filter.values:
        _check_country_code(value)


def _condition(item_filter, item_filters, params):
    for value in item_filter.values:
        condition_id = parse_int(value)
        # Non-numeric values are condition names and are passed through as-is.
        if condition_id is not None and condition_id not in CONDITION_IDS:
            raise UnsupportedValueError(errors.INVALID_CONDITION, value)


def _currency(item_filter, item_filters, params):
    for value in item_filter.values:
        _check_currency(value)


def _future_date_time(item_filter, item_filters, params):
    for value in item_filter.values:
        _check_date_time(value, future=True)


def _mod_time_from(item_filter, item_filters, params):
    for value in item_filter.values:
        _check_date_time(value, future=False)


def _exclude_category(item_filter, item_filters, params):
    if len(item_filter.values) > MAX_EXCLUDE_CATEGORIES:
        raise ConstraintError(errors.MAX_EXCLUDE_CATEGORIES_EXCEEDED)
    for value in item_filter.values:
        _parse_min_int(value, 0)


def _exclude_seller(item_filter, item_filters, params):
    if len(item_filter.values) > MAX_EXCLUDE_SELLERS:
        raise ConstraintError(errors.MAX_EXCLUDE_SELLERS_EXCEEDED)
    if _has_filter(item_filters, "Seller", "TopRatedSellerOnly"):
        raise ConstraintError(errors.EXCLUDE_SELLER_WITH_SELLERS)


def _seller(item_filter, item_filters, params):
    if len(item_filter.values) > MAX_SELLERS:
        raise ConstraintError(errors.MAX_SELLERS_EXCEEDED)
    if _has_filter(item_filters, "ExcludeSeller", "TopRatedSellerOnly"):
        raise ConstraintError(errors.SELLER_WITH_OTHER_SELLERS)


def _top_rated_seller_only(item_filter, item_filters, params):
    for value in item_filter.values:
        _check_boolean(value)
    if _has_filter(item_filters, "Seller", "ExcludeSeller"):
        raise ConstraintError(errors.TOP_RATED_SELLER_WITH_SELLERS)


def _expedited_shipping_type(item_filter, item_filters, params):
    for value in item_filter.values:
        if value not in EXPEDITED_SHIPPING_TYPES:
            raise UnsupportedValueError(errors.INVALID_EXPEDITED_SHIPPING_TYPE, value)


def _numeric_range(max_name: str, min_name: str, minimum: int) -> Validator:
    """Validator for a Max*/Min* integer pair: each value >= minimum, max >= min."""

    def validate(item_filter, item_filters, params):
        for value in item_filter.values:
            _parse_min_int(value, minimum)
        bounds: Dict[str, int] = {}
        for f in item_filters:
            if f.name in (max_name, min_name):
                bounds[f.name] = _parse_min_int(f.values[0], minimum)
        if max_name in bounds and min_name in bounds and bounds[min_name] > bounds[max_name]:
            raise ConstraintError(
                errors.INVALID_NUMERIC_FILTER,
                f"{max_name!r} must be greater than or equal to {min_name!r}",
            )

    return validate


def _listing_type(item_filter, item_filters, params):
    values = item_filter.values
    seen = set()
    for value in values:
        if value == "All" and len(values) > 1:
            raise ConstraintError(errors.INVALID_ALL_LISTING_TYPE)
        if value not in LISTING_TYPES:
            raise UnsupportedValueError(errors.INVALID_LISTING_TYPE, value)
        if value in seen:
            raise ConstraintError(errors.DUPLICATE_LISTING_TYPE, value)
        seen.add(value)
        if {"Auction", "AuctionWithBIN"} <= seen:
            raise ConstraintError(errors.INVALID_AUCTION_LISTING_TYPES)


def _local_search_only(item_filter, item_filters, params):
    if BUYER_POSTAL_CODE not in params:
        raise ConstraintError(errors.BUYER_POSTAL_CODE_MISSING)
    if not _has_filter(item_filters, "MaxDistance"):
        raise ConstraintError(errors.MAX_DISTANCE_MISSING)
    for value in item_filter.values:
        _check_boolean(value)


def _located_in(item_filter, item_filters, params):
    if len(item_filter.values) > MAX_LOCATED_INS:
        raise ConstraintError(errors.MAX_LOCATED_INS_EXCEEDED)
    for value in item_filter.values:
        _check_country_code(value)


def _max_distance(item_filter, item_filters, params):
    if BUYER_POSTAL_CODE not in params:
        raise ConstraintError(errors.BUYER_POSTAL_CODE_MISSING)
    for value in item_filter.values:
        _parse_min_int(value, SMALLEST_MAX_DISTANCE)


def _max_handling_time(item_filter, item_filters, params):
    for value in item_filter.values:
        _parse_min_int(value, 1)


def _parse_price(item_filter: ItemFilter) -> float:
    """First price of a MaxPrice/MinPrice filter, checking its currency qualifier."""
    prices = []
    for value in item_filter.values:
        price = parse_float(value)
        if price is None:
            raise InvalidNumberError(errors.INVALID_PRICE, value)
        if price < 0.0:
            raise InvalidNumberError(errors.INVALID_PRICE, f"{price:f} (minimum value: 0.000000)")
        prices.append(price)
    if item_filter.param_name is not None and item_filter.param_name != "Currency":
        raise UnsupportedValueError(errors.INVALID_PRICE_PARAM_NAME, item_filter.param_name)
    if item_filter.param_value is not None:
        _check_currency(item_filter.param_value)
    return prices[0]


def _price(item_filter, item_filters, params):
    price = _parse_price(item_filter)
    related_name = "MinPrice" if item_filter.name == "MaxPrice" else "MaxPrice"
    for f in item_filters:
        if f.name != related_name:
            continue
        related = _parse_price(f)
        if item_filter.param_value and f.param_value and item_filter.param_value != f.param_value:
            raise ConstraintError(errors.PRICE_CURRENCY_MISMATCH, f"{item_filter.param_value} != {f.param_value}")
        if (item_filter.name == "MaxPrice" and price < related) or (
            item_filter.name == "MinPrice" and price > related
        ):
            raise ConstraintError(errors.INVALID_MAX_PRICE)


def _seller_business_type(item_filter, item_filters, params):
    if len(item_filter.values) > 1:
        raise ConstraintError(errors.MULTIPLE_SELLER_BUSINESS_TYPES)
    if item_filter.values[0] not in SELLER_BUSINESS_TYPES:
        raise UnsupportedValueError(errors.INVALID_SELLER_BUSINESS_TYPE, item_filter.values[0])


def _value_box_inventory(item_filter, item_filters, params):
    for value in item_filter.values:
        if value not in ("0", "1"):
            raise UnsupportedValueError(errors.INVALID_VALUE_BOX_INVENTORY, value)


def _listed_in(item_filter, item_filters, params):
    for value in item_filter.values:
        validate_global_id(value)


_VALIDATORS: Dict[str, Validator] = {
    **{name: _boolean for name in BOOLEAN_FILTERS},
    "AvailableTo": _available_to,
    "Condition": _condition,
    "Currency": _currency,
    "EndTimeFrom": _future_date_time,
    "EndTimeTo": _future_date_time,
    "ExcludeCategory": _exclude_category,
    "ExcludeSeller": _exclude_seller,
    "ExpeditedShippingType": _expedited_shipping_type,
    "FeedbackScoreMax": _numeric_range("FeedbackScoreMax", "FeedbackScoreMin", 0),
    "FeedbackScoreMin": _numeric_range("FeedbackScoreMax", "FeedbackScoreMin", 0),
    "ListedIn": _listed_in,
    "ListingType": _listing_type,
    "LocalSearchOnly": _local_search_only,
    "LocatedIn": _located_in,
    "MaxBids": _numeric_range("MaxBids", "MinBids", 0),
    "MinBids": _numeric_range("MaxBids", "MinBids", 0),
    "MaxDistance": _max_distance,
    "MaxHandlingTime": _max_handling_time,
    "MaxPrice": _price,
    "MinPrice": _price,
    "MaxQuantity": _numeric_range("MaxQuantity", "MinQuantity", 1),
    "MinQuantity": _numeric_range("MaxQuantity", "MinQuantity", 1),
    "ModTimeFrom": _mod_time_from,
    "Seller": _seller,
    "SellerBusinessType": _seller_business_type,
    "StartTimeFrom": _future_date_time,
    "StartTimeTo": _future_date_time,
    "TopRatedSellerOnly": _top_rated_seller_only,
    "ValueBoxInventory": _value_box_inventory,
}

ITEM_FILTER_TYPES = frozenset(_VALIDATORS)


def has_auction_listing(item_filters: Sequence[ItemFilter]) -> bool:
    return any(f.name == "ListingType" and "Auction" in f.values for f in item_filters)
