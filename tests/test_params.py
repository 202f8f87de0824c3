import pytest

from ebay_finding import errors
from ebay_finding.errors import (
    ConstraintError,
    FormatError,
    IncompleteParameterError,
    IndexSyntaxError,
    InvalidNumberError,
    MissingParameterError,
    UnsupportedValueError,
)
from ebay_finding.models import Affiliate, PaginationInput, ProductID
from ebay_finding.params import (
    FIND_ITEMS_ADVANCED,
    FIND_ITEMS_BY_CATEGORY,
    FIND_ITEMS_BY_KEYWORDS,
    FIND_ITEMS_BY_PRODUCT,
    FIND_ITEMS_IN_EBAY_STORES,
    OPERATIONS,
    build_url,
    encode_query,
    get_operation,
    serialize,
    validate,
)

APP_ID = "test-app-id"

HEADER = [
    ("SERVICE-VERSION", "1.0.0"),
    ("SECURITY-APPNAME", APP_ID),
    ("RESPONSE-DATA-FORMAT", "JSON"),
]


def query(operation, params):
    return serialize(validate(operation, params), APP_ID)


def header(operation):
    return [("OPERATION-NAME", operation.name)] + HEADER


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def test_get_operation():
    assert get_operation("findItemsIneBayStores") is FIND_ITEMS_IN_EBAY_STORES
    assert set(OPERATIONS) == {
        "findItemsByCategory",
        "findItemsByKeywords",
        "findItemsAdvanced",
        "findItemsByProduct",
        "findItemsIneBayStores",
    }
    with pytest.raises(KeyError):
        get_operation("findCompletedItems")


# ---------------------------------------------------------------------------
# Category IDs
# ---------------------------------------------------------------------------

def test_category_id_is_required():
    with pytest.raises(MissingParameterError) as exc_info:
        validate(FIND_ITEMS_BY_CATEGORY, {"keywords": "harry potter"})
    assert exc_info.value.message == errors.CATEGORY_ID_MISSING


@pytest.mark.parametrize("n", [1, 2, 3])
def test_up_to_three_category_ids(n):
    params = {f"categoryId({i})": "1234567890"[: i + 1] for i in range(n)}
    assert len(validate(FIND_ITEMS_BY_CATEGORY, params).category_ids) == n


def test_four_category_ids_is_too_many():
    params = {f"categoryId({i})": str(i + 1) for i in range(4)}
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_CATEGORY, params)
    assert exc_info.value.message == errors.MAX_CATEGORY_IDS_EXCEEDED


@pytest.mark.parametrize("operation", [FIND_ITEMS_BY_CATEGORY, FIND_ITEMS_ADVANCED, FIND_ITEMS_IN_EBAY_STORES])
def test_mixed_category_id_syntax(operation):
    with pytest.raises(IndexSyntaxError):
        validate(operation, {"categoryId": "267", "categoryId(0)": "1"})


def test_category_id_length():
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_CATEGORY, {"categoryId": "12345678901"})
    assert exc_info.value.message == errors.INVALID_CATEGORY_ID_LENGTH


def test_category_id_must_be_numeric():
    with pytest.raises(InvalidNumberError) as exc_info:
        validate(FIND_ITEMS_BY_CATEGORY, {"categoryId": "books"})
    assert exc_info.value.message == errors.INVALID_CATEGORY_ID


def test_category_id_numbering_must_start_at_zero():
    with pytest.raises(MissingParameterError):
        validate(FIND_ITEMS_BY_CATEGORY, {"categoryId(1)": "267"})


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

def test_keywords_are_required():
    with pytest.raises(MissingParameterError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"categoryId": "267"})
    assert exc_info.value.message == errors.KEYWORDS_MISSING


@pytest.mark.parametrize("keywords", ["ab", "abcdefghi " * 35, "baseball " + "a" * 98])
def test_keywords_within_limits(keywords):
    assert validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": keywords}).keywords == keywords


@pytest.mark.parametrize("keywords", ["", "a", "abcdefghi " * 35 + "x"])
def test_keywords_length(keywords):
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": keywords})
    assert exc_info.value.message == errors.INVALID_KEYWORDS_LENGTH


@pytest.mark.parametrize("keywords", ["baseball " + "a" * 99, "(" + "b" * 99 + ")", "x,-" + "c" * 99])
def test_single_keyword_too_long(keywords):
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": keywords})
    assert exc_info.value.message == errors.INVALID_KEYWORD_LENGTH


# ---------------------------------------------------------------------------
# findItemsAdvanced
# ---------------------------------------------------------------------------

def test_advanced_needs_category_or_keywords():
    with pytest.raises(MissingParameterError) as exc_info:
        validate(FIND_ITEMS_ADVANCED, {"descriptionSearch": "true"})
    assert exc_info.value.message == errors.CATEGORY_ID_KEYWORDS_MISSING


@pytest.mark.parametrize("params", [{"categoryId": "267"}, {"keywords": "harry potter"}])
def test_advanced_accepts_either(params):
    validate(FIND_ITEMS_ADVANCED, params)


def test_advanced_description_search():
    params = {"categoryId": "267", "keywords": "ab", "descriptionSearch": "true"}
    assert query(FIND_ITEMS_ADVANCED, params) == header(FIND_ITEMS_ADVANCED) + [
        ("categoryId(0)", "267"),
        ("descriptionSearch", "true"),
        ("keywords", "ab"),
    ]


def test_advanced_description_search_must_be_boolean():
    with pytest.raises(UnsupportedValueError):
        validate(FIND_ITEMS_ADVANCED, {"keywords": "ab", "descriptionSearch": "yes"})


def test_description_search_only_applies_to_advanced():
    finding_params = validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "descriptionSearch": "yes"})
    assert finding_params.description_search is None


# ---------------------------------------------------------------------------
# findItemsByProduct
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "params",
    [{"productId": "53039031"}, {"productId.@type": "ReferenceID"}, {}],
)
def test_product_id_and_type_are_required(params):
    with pytest.raises(MissingParameterError) as exc_info:
        validate(FIND_ITEMS_BY_PRODUCT, params)
    assert exc_info.value.message == errors.PRODUCT_ID_MISSING


@pytest.mark.parametrize(
    "id_type, value",
    [
        ("ReferenceID", "53039031"),
        ("ISBN", "0131103628"),
        ("ISBN", "9780131101630"),
        ("UPC", "036000291452"),
        ("EAN", "4006381333931"),
        ("EAN", "73513537"),
    ],
)
def test_valid_product_ids(id_type, value):
    finding_params = validate(FIND_ITEMS_BY_PRODUCT, {"productId.@type": id_type, "productId": value})
    assert finding_params.product_id == ProductID(id_type, value)


@pytest.mark.parametrize(
    "id_type, value, error, message",
    [
        ("ReferenceID", "", ConstraintError, errors.INVALID_PRODUCT_ID_LENGTH),
        ("ISBN", "013110362", ConstraintError, errors.INVALID_ISBN_LENGTH),
        ("ISBN", "886154142X", FormatError, errors.INVALID_ISBN),
        ("ISBN", "9861541429", FormatError, errors.INVALID_ISBN),
        ("UPC", "03600029145", ConstraintError, errors.INVALID_UPC_LENGTH),
        ("UPC", "036000291453", FormatError, errors.INVALID_UPC),
        ("EAN", "400638133393", ConstraintError, errors.INVALID_EAN_LENGTH),
        ("EAN", "4006381333932", FormatError, errors.INVALID_EAN),
        ("ASIN", "B000000000", UnsupportedValueError, errors.UNSUPPORTED_PRODUCT_ID_TYPE),
    ],
)
def test_invalid_product_ids(id_type, value, error, message):
    with pytest.raises(error) as exc_info:
        validate(FIND_ITEMS_BY_PRODUCT, {"productId.@type": id_type, "productId": value})
    assert exc_info.value.message == message


def test_product_search_ignores_aspect_filters():
    params = {"productId.@type": "ReferenceID", "productId": "53039031", "aspectFilter.aspectName": "Size"}
    assert query(FIND_ITEMS_BY_PRODUCT, params) == header(FIND_ITEMS_BY_PRODUCT) + [
        ("productId.@type", "ReferenceID"),
        ("productId", "53039031"),
    ]


# ---------------------------------------------------------------------------
# findItemsIneBayStores
# ---------------------------------------------------------------------------

def test_store_search_needs_an_identifier():
    with pytest.raises(MissingParameterError) as exc_info:
        validate(FIND_ITEMS_IN_EBAY_STORES, {"outputSelector": "StoreInfo"})
    assert exc_info.value.message == errors.CATEGORY_ID_KEYWORDS_STORE_NAME_MISSING


@pytest.mark.parametrize("store_name", ["Tom &amp; Jerry", "&amp;&amp;", "Acme"])
def test_valid_store_names(store_name):
    assert validate(FIND_ITEMS_IN_EBAY_STORES, {"storeName": store_name}).store_name == store_name


@pytest.mark.parametrize(
    "store_name, error",
    [("", ConstraintError), ("Tom & Jerry", FormatError), ("Bob&apos;s", FormatError), ("A&amp", FormatError)],
)
def test_invalid_store_names(store_name, error):
    with pytest.raises(error):
        validate(FIND_ITEMS_IN_EBAY_STORES, {"storeName": store_name})


def test_store_search_serialization():
    params = {"storeName": "Tom &amp; Jerry", "keywords": "cartoon", "categoryId(0)": "267", "outputSelector": "StoreInfo"}
    assert query(FIND_ITEMS_IN_EBAY_STORES, params) == header(FIND_ITEMS_IN_EBAY_STORES) + [
        ("categoryId(0)", "267"),
        ("keywords", "cartoon"),
        ("outputSelector(0)", "StoreInfo"),
        ("storeName", "Tom &amp; Jerry"),
    ]


# ---------------------------------------------------------------------------
# Shared optional fields
# ---------------------------------------------------------------------------

def test_invalid_global_id():
    with pytest.raises(UnsupportedValueError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "Global-ID": "EBAY-XX"})
    assert exc_info.value.message == errors.INVALID_GLOBAL_ID


def test_output_selectors():
    assert validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "outputSelector": "SellerInfo"}).output_selectors == (
        "SellerInfo",
    )
    params = {"keywords": "ab", "outputSelector(0)": "SellerInfo", "outputSelector(1)": "GalleryInfo"}
    assert validate(FIND_ITEMS_BY_KEYWORDS, params).output_selectors == ("SellerInfo", "GalleryInfo")


def test_invalid_output_selector():
    with pytest.raises(UnsupportedValueError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "outputSelector(0)": "Everything"})
    assert exc_info.value.message == errors.INVALID_OUTPUT_SELECTOR


def test_mixed_output_selector_syntax():
    with pytest.raises(IndexSyntaxError):
        validate(
            FIND_ITEMS_BY_KEYWORDS,
            {"keywords": "ab", "outputSelector": "SellerInfo", "outputSelector(0)": "StoreInfo"},
        )


def test_affiliate():
    params = {
        "keywords": "ab",
        "affiliate.customId": "campaign-a",
        "affiliate.geoTargeting": "false",
        "affiliate.networkId": "2",
        "affiliate.trackingId": "anything",
    }
    assert validate(FIND_ITEMS_BY_KEYWORDS, params).affiliate == Affiliate("campaign-a", False, 2, "anything")


def test_partner_network_tracking_id():
    params = {"keywords": "ab", "affiliate.networkId": "9", "affiliate.trackingId": "1234567890"}
    assert validate(FIND_ITEMS_BY_KEYWORDS, params).affiliate == Affiliate(network_id=9, tracking_id="1234567890")


@pytest.mark.parametrize(
    "affiliate, error, message",
    [
        ({"affiliate.networkId": "9"}, IncompleteParameterError, errors.INCOMPLETE_AFFILIATE_PARAMS),
        ({"affiliate.trackingId": "1234567890"}, IncompleteParameterError, errors.INCOMPLETE_AFFILIATE_PARAMS),
        ({"affiliate.networkId": "x", "affiliate.trackingId": "1"}, InvalidNumberError, errors.INVALID_NETWORK_ID),
        ({"affiliate.networkId": "1", "affiliate.trackingId": "1"}, InvalidNumberError, errors.INVALID_NETWORK_ID_RANGE),
        ({"affiliate.networkId": "10", "affiliate.trackingId": "1"}, InvalidNumberError, errors.INVALID_NETWORK_ID_RANGE),
        ({"affiliate.networkId": "9", "affiliate.trackingId": "abcdefghij"}, FormatError, errors.INVALID_TRACKING_ID),
        ({"affiliate.networkId": "9", "affiliate.trackingId": "123"}, FormatError, errors.INVALID_CAMPAIGN_ID),
        ({"affiliate.customId": "x" * 257}, ConstraintError, errors.INVALID_CUSTOM_ID_LENGTH),
        ({"affiliate.geoTargeting": "yes"}, UnsupportedValueError, errors.INVALID_BOOLEAN_VALUE),
    ],
)
def test_invalid_affiliate(affiliate, error, message):
    with pytest.raises(error) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", **affiliate})
    assert exc_info.value.message == message


def test_buyer_postal_code_minimum_length():
    assert validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "buyerPostalCode": "111"}).buyer_postal_code == "111"
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "buyerPostalCode": "11"})
    assert exc_info.value.message == errors.INVALID_POSTAL_CODE


def test_pagination():
    params = {"keywords": "ab", "paginationInput.entriesPerPage": "100", "paginationInput.pageNumber": "+1"}
    assert validate(FIND_ITEMS_BY_KEYWORDS, params).pagination_input == PaginationInput(100, 1)


@pytest.mark.parametrize(
    "name, value, message",
    [
        ("paginationInput.entriesPerPage", "lots", errors.INVALID_ENTRIES_PER_PAGE),
        ("paginationInput.entriesPerPage", "0", errors.INVALID_ENTRIES_PER_PAGE_RANGE),
        ("paginationInput.entriesPerPage", "101", errors.INVALID_ENTRIES_PER_PAGE_RANGE),
        ("paginationInput.pageNumber", "1.5", errors.INVALID_PAGE_NUMBER),
        ("paginationInput.pageNumber", "-1", errors.INVALID_PAGE_NUMBER_RANGE),
        ("paginationInput.pageNumber", "101", errors.INVALID_PAGE_NUMBER_RANGE),
    ],
)
def test_invalid_pagination(name, value, message):
    with pytest.raises(InvalidNumberError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", name: value})
    assert exc_info.value.message == message


# ---------------------------------------------------------------------------
# Sort order
# ---------------------------------------------------------------------------

def test_unsupported_sort_order():
    with pytest.raises(UnsupportedValueError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, {"keywords": "ab", "sortOrder": "Cheapest"})
    assert exc_info.value.message == errors.UNSUPPORTED_SORT_ORDER_TYPE


@pytest.mark.parametrize("sort_order", ["BidCountFewest", "BidCountMost"])
def test_bid_count_sort_needs_auction_listing(sort_order):
    params = {"keywords": "ab", "sortOrder": sort_order}
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, params)
    assert exc_info.value.message == errors.AUCTION_LISTING_MISSING

    params.update({"itemFilter.name": "ListingType", "itemFilter.value(0)": "FixedPrice", "itemFilter.value(1)": "Auction"})
    assert validate(FIND_ITEMS_BY_KEYWORDS, params).sort_order == sort_order


def test_distance_nearest_needs_buyer_postal_code():
    params = {"keywords": "ab", "sortOrder": "DistanceNearest"}
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, params)
    assert exc_info.value.message == errors.BUYER_POSTAL_CODE_MISSING

    params["buyerPostalCode"] = "111"
    assert validate(FIND_ITEMS_BY_KEYWORDS, params).sort_order == "DistanceNearest"


# ---------------------------------------------------------------------------
# Validation order
# ---------------------------------------------------------------------------

def test_required_fields_are_checked_first():
    with pytest.raises(MissingParameterError):
        validate(FIND_ITEMS_BY_KEYWORDS, {"Global-ID": "EBAY-XX", "sortOrder": "Cheapest"})


def test_global_id_before_filters():
    params = {"keywords": "ab", "Global-ID": "EBAY-XX", "itemFilter.name": "Bogus", "itemFilter.value": "x"}
    with pytest.raises(UnsupportedValueError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, params)
    assert exc_info.value.message == errors.INVALID_GLOBAL_ID


def test_aspect_filters_before_item_filters():
    params = {"keywords": "ab", "aspectFilter(0).aspectName": "Size", "itemFilter.name": "Bogus", "itemFilter.value": "x"}
    with pytest.raises(IncompleteParameterError):
        validate(FIND_ITEMS_BY_KEYWORDS, params)


def test_index_conflict_is_reported_before_seller_exclusivity():
    params = {
        "keywords": "ab",
        "itemFilter.name": "Seller",
        "itemFilter.value": "0",
        "itemFilter(1).name": "ExcludeSeller",
        "itemFilter(1).value": "0",
    }
    with pytest.raises(IndexSyntaxError):
        validate(FIND_ITEMS_BY_KEYWORDS, params)


def test_max_distance_with_short_postal_code():
    params = {"keywords": "ab", "itemFilter.name": "MaxDistance", "itemFilter.value": "10", "buyerPostalCode": "12"}
    with pytest.raises(ConstraintError) as exc_info:
        validate(FIND_ITEMS_BY_KEYWORDS, params)
    assert exc_info.value.message == errors.INVALID_POSTAL_CODE


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

FULL_KEYWORDS_PARAMS = {
    "sortOrder": "PricePlusShippingLowest",
    "paginationInput.pageNumber": "2",
    "paginationInput.entriesPerPage": "50",
    "buyerPostalCode": "SW1A 1AA",
    "affiliate.trackingId": "1234567890",
    "affiliate.networkId": "9",
    "affiliate.geoTargeting": "true",
    "affiliate.customId": "abc",
    "outputSelector": "SellerInfo",
    "itemFilter.paramValue": "GBP",
    "itemFilter.paramName": "Currency",
    "itemFilter.value": "500.0",
    "itemFilter.name": "MaxPrice",
    "aspectFilter.aspectValueName": "M",
    "aspectFilter.aspectName": "Size",
    "keywords": "harry potter",
    "Global-ID": "EBAY-GB",
}


def test_serialization_order():
    assert query(FIND_ITEMS_BY_KEYWORDS, FULL_KEYWORDS_PARAMS) == [("Global-ID", "EBAY-GB")] + header(
        FIND_ITEMS_BY_KEYWORDS
    ) + [
        ("aspectFilter(0).aspectName", "Size"),
        ("aspectFilter(0).aspectValueName(0)", "M"),
        ("itemFilter(0).name", "MaxPrice"),
        ("itemFilter(0).value(0)", "500.0"),
        ("itemFilter(0).paramName", "Currency"),
        ("itemFilter(0).paramValue", "GBP"),
        ("keywords", "harry potter"),
        ("outputSelector(0)", "SellerInfo"),
        ("affiliate.customId", "abc"),
        ("affiliate.geoTargeting", "true"),
        ("affiliate.networkId", "9"),
        ("affiliate.trackingId", "1234567890"),
        ("buyerPostalCode", "SW1A 1AA"),
        ("paginationInput.entriesPerPage", "50"),
        ("paginationInput.pageNumber", "2"),
        ("sortOrder", "PricePlusShippingLowest"),
    ]


def test_bare_and_numbered_syntax_serialize_alike():
    bare = {"categoryId": "267", "itemFilter.name": "LotsOnly", "itemFilter.value": "true"}
    numbered = {"categoryId(0)": "267", "itemFilter(0).name": "LotsOnly", "itemFilter(0).value(0)": "true"}
    assert query(FIND_ITEMS_BY_CATEGORY, bare) == query(FIND_ITEMS_BY_CATEGORY, numbered)


def test_price_pair_serializes_with_matching_currency():
    params = {
        "keywords": "ab",
        "itemFilter(0).name": "MaxPrice",
        "itemFilter(0).value": "20",
        "itemFilter(1).name": "MinPrice",
        "itemFilter(1).value": "5",
        "itemFilter(1).paramName": "Currency",
        "itemFilter(1).paramValue": "EUR",
    }
    assert query(FIND_ITEMS_BY_KEYWORDS, params)[len(header(FIND_ITEMS_BY_KEYWORDS)):] == [
        ("itemFilter(0).name", "MaxPrice"),
        ("itemFilter(0).value(0)", "20"),
        ("itemFilter(0).paramName", "Currency"),
        ("itemFilter(0).paramValue", "EUR"),
        ("itemFilter(1).name", "MinPrice"),
        ("itemFilter(1).value(0)", "5"),
        ("itemFilter(1).paramName", "Currency"),
        ("itemFilter(1).paramValue", "EUR"),
        ("keywords", "ab"),
    ]


@pytest.mark.parametrize(
    "operation, params",
    [
        (FIND_ITEMS_BY_KEYWORDS, FULL_KEYWORDS_PARAMS),
        (FIND_ITEMS_ADVANCED, {"categoryId": "267", "keywords": "ab", "descriptionSearch": "false"}),
        (FIND_ITEMS_BY_PRODUCT, {"productId.@type": "ISBN", "productId": "0131103628"}),
        (FIND_ITEMS_IN_EBAY_STORES, {"storeName": "Tom &amp; Jerry"}),
    ],
)
def test_serialization_is_idempotent(operation, params):
    first = query(operation, params)
    assert query(operation, params) == first
    # The serialized form is itself valid input and serializes to itself.
    assert query(operation, dict(first)) == first


def test_encode_query_keeps_order():
    pairs = [("keywords", "harry potter"), ("storeName", "Tom &amp; Jerry"), ("categoryId(0)", "267")]
    assert encode_query(pairs) == "keywords=harry+potter&storeName=Tom+%26amp%3B+Jerry&categoryId%280%29=267"


def test_build_url():
    pairs = [("OPERATION-NAME", "findItemsByKeywords")]
    assert build_url("https://example.com/v1?REST-PAYLOAD", pairs) == (
        "https://example.com/v1?REST-PAYLOAD&OPERATION-NAME=findItemsByKeywords"
    )
    assert build_url("https://example.com/v1", pairs) == "https://example.com/v1?OPERATION-NAME=findItemsByKeywords"
