"""Per-operation validation and query serialization for the Finding API.

The five search operations share almost every rule. Each Operation only
supplies its name, the key its JSON response is wrapped in, and a reader for
its required identifying fields; validate() and serialize() do the rest.

Entry points: validate(), serialize(), encode_query(), get_operation()
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlencode

from . import errors
from .config import (
    MAX_CATEGORY_ID_LEN,
    MAX_CATEGORY_IDS,
    MAX_CUSTOM_ID_LEN,
    MAX_KEYWORD_LEN,
    MAX_KEYWORDS_LEN,
    MAX_PAGINATION_VALUE,
    MIN_KEYWORDS_LEN,
    MIN_PAGINATION_VALUE,
    MIN_POSTAL_CODE_LEN,
    RESPONSE_DATA_FORMAT,
    SERVICE_VERSION,
)
from .errors import (
    ConstraintError,
    FormatError,
    IncompleteParameterError,
    InvalidNumberError,
    MissingParameterError,
    UnsupportedValueError,
)
from .filters import (
    BUYER_POSTAL_CODE,
    check_index_syntax,
    has_auction_listing,
    parse_aspect_filters,
    parse_item_filters,
    validate_global_id,
)
from .models import Affiliate, FindingParams, ItemFilter, PaginationInput, ProductID
from .utils import is_valid_ean, is_valid_isbn, parse_int, scan_indexed, split_keywords

OUTPUT_SELECTORS = (
    "AspectHistogram", "CategoryHistogram", "ConditionHistogram", "GalleryInfo", "PictureURLLarge",
    "PictureURLSuperSize", "SellerInfo", "StoreInfo", "UnitPriceInfo",
)
SORT_ORDERS = (
    "BestMatch", "BidCountFewest", "BidCountMost", "CountryAscending", "CountryDescending",
    "CurrentPriceHighest", "DistanceNearest", "EndTimeSoonest", "PricePlusShippingHighest",
    "PricePlusShippingLowest", "StartTimeNewest", "WatchCountDecreaseSort",
)
PRODUCT_ID_TYPES = ("ReferenceID", "ISBN", "UPC", "EAN")
BE_FREE_NETWORK_ID, EBAY_PARTNER_NETWORK_ID = 2, 9
CAMPAIGN_ID_LEN = 10

_UNESCAPED_AMPERSAND = re.compile(r"&(?!amp;)")

RequiredReader = Callable[[Mapping[str, str]], Dict[str, Any]]


@dataclass(frozen=True)
class Operation:
    """What distinguishes one Finding API search operation from another."""

    name: str
    response_key: str
    read_required: RequiredReader
    aspect_filters: bool = True
    description_search: bool = False


# ---------------------------------------------------------------------------
# Identifying fields
# ---------------------------------------------------------------------------

def _has_category_ids(params: Mapping[str, str]) -> bool:
    return "categoryId" in params or "categoryId(0)" in params


def _validate_category_id(category_id: str) -> str:
    if len(category_id) > MAX_CATEGORY_ID_LEN:
        raise ConstraintError(errors.INVALID_CATEGORY_ID_LENGTH, category_id)
    if parse_int(category_id) is None:
        raise InvalidNumberError(errors.INVALID_CATEGORY_ID, category_id)
    return category_id


def parse_category_ids(params: Mapping[str, str]) -> Tuple[str, ...]:
    if check_index_syntax(params, "categoryId", "categoryId"):
        return (_validate_category_id(params["categoryId"]),)
    category_ids: List[str] = []
    for category_id in scan_indexed(params, "categoryId"):
        category_ids.append(_validate_category_id(category_id))
        if len(category_ids) > MAX_CATEGORY_IDS:
            raise ConstraintError(errors.MAX_CATEGORY_IDS_EXCEEDED)
    return tuple(category_ids)


def parse_keywords(params: Mapping[str, str]) -> str:
    keywords = params.get("keywords")
    if keywords is None:
        raise MissingParameterError(errors.KEYWORDS_MISSING)
    if not MIN_KEYWORDS_LEN <= len(keywords) <= MAX_KEYWORDS_LEN:
        raise ConstraintError(errors.INVALID_KEYWORDS_LENGTH)
    for keyword in split_keywords(keywords):
        if len(keyword) > MAX_KEYWORD_LEN:
            raise ConstraintError(errors.INVALID_KEYWORD_LENGTH)
    return keywords


def parse_product_id(params: Mapping[str, str]) -> ProductID:
    id_type = params.get("productId.@type")
    value = params.get("productId")
    if id_type is None or value is None:
        raise MissingParameterError(errors.PRODUCT_ID_MISSING)

    if id_type == "ReferenceID":
        if not value:
            raise ConstraintError(errors.INVALID_PRODUCT_ID_LENGTH)
    elif id_type == "ISBN":
        if len(value) not in (10, 13):
            raise ConstraintError(errors.INVALID_ISBN_LENGTH, value)
        if not is_valid_isbn(value):
            raise FormatError(errors.INVALID_ISBN, value)
    elif id_type == "UPC":
        if len(value) != 12:
            raise ConstraintError(errors.INVALID_UPC_LENGTH, value)
        if not is_valid_ean(value):
            raise FormatError(errors.INVALID_UPC, value)
    elif id_type == "EAN":
        if len(value) not in (8, 13):
            raise ConstraintError(errors.INVALID_EAN_LENGTH, value)
        if not is_valid_ean(value):
            raise FormatError(errors.INVALID_EAN, value)
    else:
        raise UnsupportedValueError(errors.UNSUPPORTED_PRODUCT_ID_TYPE, id_type)
    return ProductID(id_type=id_type, value=value)


def validate_store_name(store_name: str) -> str:
    if not store_name:
        raise ConstraintError(errors.INVALID_STORE_NAME_LENGTH)
    # Every '&' must open an "&amp;" entity.
    if _UNESCAPED_AMPERSAND.search(store_name):
        raise FormatError(errors.INVALID_STORE_NAME_AMPERSAND, store_name)
    return store_name


def _by_category(params: Mapping[str, str]) -> Dict[str, Any]:
    if not _has_category_ids(params):
        raise MissingParameterError(errors.CATEGORY_ID_MISSING)
    return {"category_ids": parse_category_ids(params)}


def _by_keywords(params: Mapping[str, str]) -> Dict[str, Any]:
    return {"keywords": parse_keywords(params)}


def _advanced(params: Mapping[str, str]) -> Dict[str, Any]:
    has_categories = _has_category_ids(params)
    has_keywords = "keywords" in params
    if not has_categories and not has_keywords:
        raise MissingParameterError(errors.CATEGORY_ID_KEYWORDS_MISSING)
    fields: Dict[str, Any] = {}
    if has_categories:
        fields["category_ids"] = parse_category_ids(params)
    if has_keywords:
        fields["keywords"] = parse_keywords(params)
    return fields


def _by_product(params: Mapping[str, str]) -> Dict[str, Any]:
    return {"product_id": parse_product_id(params)}


def _in_ebay_stores(params: Mapping[str, str]) -> Dict[str, Any]:
    has_categories = _has_category_ids(params)
    has_keywords = "keywords" in params
    has_store_name = "storeName" in params
    if not (has_categories or has_keywords or has_store_name):
        raise MissingParameterError(errors.CATEGORY_ID_KEYWORDS_STORE_NAME_MISSING)
    fields: Dict[str, Any] = {}
    if has_categories:
        fields["category_ids"] = parse_category_ids(params)
    if has_keywords:
        fields["keywords"] = parse_keywords(params)
    if has_store_name:
        fields["store_name"] = validate_store_name(params["storeName"])
    return fields


FIND_ITEMS_BY_CATEGORY = Operation("findItemsByCategory", "findItemsByCategoryResponse", _by_category)
FIND_ITEMS_BY_KEYWORDS = Operation("findItemsByKeywords", "findItemsByKeywordsResponse", _by_keywords)
FIND_ITEMS_ADVANCED = Operation(
    "findItemsAdvanced", "findItemsAdvancedResponse", _advanced, description_search=True
)
FIND_ITEMS_BY_PRODUCT = Operation(
    "findItemsByProduct", "findItemsByProductResponse", _by_product, aspect_filters=False
)
FIND_ITEMS_IN_EBAY_STORES = Operation(
    "findItemsIneBayStores", "findItemsIneBayStoresResponse", _in_ebay_stores
)

OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        FIND_ITEMS_BY_CATEGORY,
        FIND_ITEMS_BY_KEYWORDS,
        FIND_ITEMS_ADVANCED,
        FIND_ITEMS_BY_PRODUCT,
        FIND_ITEMS_IN_EBAY_STORES,
    )
}


def get_operation(name: str) -> Operation:
    """Look up an operation by its OPERATION-NAME; KeyError if unknown."""
    return OPERATIONS[name]


# ---------------------------------------------------------------------------
# Shared optional fields
# ---------------------------------------------------------------------------

def _parse_boolean(value: str) -> bool:
    if value not in ("true", "false"):
        raise UnsupportedValueError(errors.INVALID_BOOLEAN_VALUE, value)
    return value == "true"


def parse_output_selectors(params: Mapping[str, str]) -> Tuple[str, ...]:
    if check_index_syntax(params, "outputSelector", "outputSelector"):
        selectors = [params["outputSelector"]]
    else:
        selectors = scan_indexed(params, "outputSelector")
    for selector in selectors:
        if selector not in OUTPUT_SELECTORS:
            raise UnsupportedValueError(errors.INVALID_OUTPUT_SELECTOR, selector)
    return tuple(selectors)


def parse_affiliate(params: Mapping[str, str]) -> Affiliate:
    custom_id = params.get("affiliate.customId")
    if custom_id is not None and len(custom_id) > MAX_CUSTOM_ID_LEN:
        raise ConstraintError(errors.INVALID_CUSTOM_ID_LENGTH)

    geo_targeting = params.get("affiliate.geoTargeting")
    geo = _parse_boolean(geo_targeting) if geo_targeting is not None else None

    network_id = params.get("affiliate.networkId")
    tracking_id = params.get("affiliate.trackingId")
    if (network_id is None) != (tracking_id is None):
        raise IncompleteParameterError(errors.INCOMPLETE_AFFILIATE_PARAMS)
    if network_id is None:
        return Affiliate(custom_id=custom_id, geo_targeting=geo)

    network = parse_int(network_id)
    if network is None:
        raise InvalidNumberError(errors.INVALID_NETWORK_ID, network_id)
    if not BE_FREE_NETWORK_ID <= network <= EBAY_PARTNER_NETWORK_ID:
        raise InvalidNumberError(errors.INVALID_NETWORK_ID_RANGE, network_id)
    if network == EBAY_PARTNER_NETWORK_ID:
        # eBay Partner Network tracking IDs are 10-digit campaign IDs.
        if not (tracking_id.isascii() and tracking_id.isdigit()):
            raise FormatError(errors.INVALID_TRACKING_ID, tracking_id)
        if len(tracking_id) != CAMPAIGN_ID_LEN:
            raise FormatError(errors.INVALID_CAMPAIGN_ID, tracking_id)
    return Affiliate(custom_id=custom_id, geo_targeting=geo, network_id=network, tracking_id=tracking_id)


def parse_buyer_postal_code(params: Mapping[str, str]) -> Optional[str]:
    postal_code = params.get(BUYER_POSTAL_CODE)
    if postal_code is not None and len(postal_code) < MIN_POSTAL_CODE_LEN:
        raise ConstraintError(errors.INVALID_POSTAL_CODE, postal_code)
    return postal_code


def _parse_page_value(value: str, invalid: str, out_of_range: str) -> int:
    number = parse_int(value)
    if number is None:
        raise InvalidNumberError(invalid, value)
    if not MIN_PAGINATION_VALUE <= number <= MAX_PAGINATION_VALUE:
        raise InvalidNumberError(out_of_range, value)
    return number


def parse_pagination_input(params: Mapping[str, str]) -> PaginationInput:
    entries = params.get("paginationInput.entriesPerPage")
    page = params.get("paginationInput.pageNumber")
    return PaginationInput(
        entries_per_page=None if entries is None else _parse_page_value(
            entries, errors.INVALID_ENTRIES_PER_PAGE, errors.INVALID_ENTRIES_PER_PAGE_RANGE
        ),
        page_number=None if page is None else _parse_page_value(
            page, errors.INVALID_PAGE_NUMBER, errors.INVALID_PAGE_NUMBER_RANGE
        ),
    )


def validate_sort_order(
    sort_order: str, item_filters: Sequence[ItemFilter], has_buyer_postal_code: bool
) -> str:
    if sort_order not in SORT_ORDERS:
        raise UnsupportedValueError(errors.UNSUPPORTED_SORT_ORDER_TYPE, sort_order)
    if sort_order in ("BidCountFewest", "BidCountMost") and not has_auction_listing(item_filters):
        raise ConstraintError(errors.AUCTION_LISTING_MISSING)
    if sort_order == "DistanceNearest" and not has_buyer_postal_code:
        raise ConstraintError(errors.BUYER_POSTAL_CODE_MISSING)
    return sort_order


# ---------------------------------------------------------------------------
# Validation and serialization
# ---------------------------------------------------------------------------

def validate(operation: Operation, params: Mapping[str, str]) -> FindingParams:
    """Turn raw parameters into FindingParams, raising at the first violated rule.

    Order: operation-specific required fields, Global-ID, aspect filters,
    descriptionSearch, item filters, output selectors, affiliate, buyer postal
    code, pagination, sort order.
    """
    fields = operation.read_required(params)

    global_id = params.get("Global-ID")
    if global_id is not None:
        validate_global_id(global_id)
    if operation.aspect_filters:
        fields["aspect_filters"] = parse_aspect_filters(params)
    if operation.description_search and "descriptionSearch" in params:
        fields["description_search"] = _parse_boolean(params["descriptionSearch"])
    item_filters = parse_item_filters(params)
    output_selectors = parse_output_selectors(params)
    affiliate = parse_affiliate(params)
    buyer_postal_code = parse_buyer_postal_code(params)
    pagination_input = parse_pagination_input(params)
    sort_order = params.get("sortOrder")
    if sort_order is not None:
        validate_sort_order(sort_order, item_filters, buyer_postal_code is not None)

    return FindingParams(
        operation_name=operation.name,
        global_id=global_id,
        item_filters=item_filters,
        output_selectors=output_selectors,
        affiliate=affiliate,
        buyer_postal_code=buyer_postal_code,
        pagination_input=pagination_input,
        sort_order=sort_order,
        **fields,
    )


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def serialize(finding_params: FindingParams, app_id: str) -> List[Tuple[str, str]]:
    """Ordered query parameters for a validated request.

    Filters, category IDs and output selectors are always emitted in numbered
    form, whichever syntax the caller used.
    """
    fp = finding_params
    query: List[Tuple[str, str]] = []
    if fp.global_id is not None:
        query.append(("Global-ID", fp.global_id))
    query += [
        ("OPERATION-NAME", fp.operation_name),
        ("SERVICE-VERSION", SERVICE_VERSION),
        ("SECURITY-APPNAME", app_id),
        ("RESPONSE-DATA-FORMAT", RESPONSE_DATA_FORMAT),
    ]
    for i, aspect_filter in enumerate(fp.aspect_filters):
        query.append((f"aspectFilter({i}).aspectName", aspect_filter.aspect_name))
        for j, value in enumerate(aspect_filter.aspect_value_names):
            query.append((f"aspectFilter({i}).aspectValueName({j})", value))
    for i, category_id in enumerate(fp.category_ids):
        query.append((f"categoryId({i})", category_id))
    if fp.description_search is not None:
        query.append(("descriptionSearch", _bool_str(fp.description_search)))
    for i, item_filter in enumerate(fp.item_filters):
        query.append((f"itemFilter({i}).name", item_filter.name))
        for j, value in enumerate(item_filter.values):
            query.append((f"itemFilter({i}).value({j})", value))
        if item_filter.param_name is not None and item_filter.param_value is not None:
            query.append((f"itemFilter({i}).paramName", item_filter.param_name))
            query.append((f"itemFilter({i}).paramValue", item_filter.param_value))
    if fp.keywords is not None:
        query.append(("keywords", fp.keywords))
    for i, selector in enumerate(fp.output_selectors):
        query.append((f"outputSelector({i})", selector))
    if fp.product_id is not None:
        query.append(("productId.@type", fp.product_id.id_type))
        query.append(("productId", fp.product_id.value))
    if fp.store_name is not None:
        query.append(("storeName", fp.store_name))

    affiliate = fp.affiliate
    if affiliate.custom_id is not None:
        query.append(("affiliate.customId", affiliate.custom_id))
    if affiliate.geo_targeting is not None:
        query.append(("affiliate.geoTargeting", _bool_str(affiliate.geo_targeting)))
    if affiliate.network_id is not None and affiliate.tracking_id is not None:
        query.append(("affiliate.networkId", str(affiliate.network_id)))
        query.append(("affiliate.trackingId", affiliate.tracking_id))
    if fp.buyer_postal_code is not None:
        query.append((BUYER_POSTAL_CODE, fp.buyer_postal_code))
    if fp.pagination_input.entries_per_page is not None:
        query.append(("paginationInput.entriesPerPage", str(fp.pagination_input.entries_per_page)))
    if fp.pagination_input.page_number is not None:
        query.append(("paginationInput.pageNumber", str(fp.pagination_input.page_number)))
    if fp.sort_order is not None:
        query.append(("sortOrder", fp.sort_order))
    return query


def encode_query(query: Sequence[Tuple[str, str]]) -> str:
    """Form-encode query parameters, keeping their order."""
    return urlencode(list(query))


def build_url(base_url: str, query: Sequence[Tuple[str, str]]) -> str:
    """Append encoded query parameters to base_url, which may already hold a query."""
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{encode_query(query)}"
