"""Exceptions raised while validating parameters or calling the Finding API.

Validation failures derive from ParamsError (status 400) and are raised at the
first violated rule. Coordinator failures (request construction, transport,
status, decoding) derive directly from FindingError (status 500).
"""

from typing import Optional

from .config import (
    MAX_CATEGORY_ID_LEN,
    MAX_CATEGORY_IDS,
    MAX_CUSTOM_ID_LEN,
    MAX_EXCLUDE_CATEGORIES,
    MAX_EXCLUDE_SELLERS,
    MAX_KEYWORD_LEN,
    MAX_KEYWORDS_LEN,
    MAX_LOCATED_INS,
    MAX_PAGINATION_VALUE,
    MAX_SELLERS,
    MIN_KEYWORDS_LEN,
    MIN_PAGINATION_VALUE,
)

# Required fields
CATEGORY_ID_MISSING = "category ID parameter is missing"
KEYWORDS_MISSING = "keywords parameter is missing"
CATEGORY_ID_KEYWORDS_MISSING = "both category ID and keywords parameters are missing"
PRODUCT_ID_MISSING = "product ID parameter or product ID type are missing"
CATEGORY_ID_KEYWORDS_STORE_NAME_MISSING = "category ID, keywords, and store name parameters are missing"
BUYER_POSTAL_CODE_MISSING = "buyerPostalCode is missing"
MAX_DISTANCE_MISSING = "MaxDistance item filter is missing when using LocalSearchOnly item filter"
AUCTION_LISTING_MISSING = "'Auction' listing type required for sorting by bid count"

# Syntax and pairing
INVALID_INDEX_SYNTAX = "invalid filter syntax: both index and non-index syntax are present"
INCOMPLETE_FILTER_NAME_ONLY = "incomplete filter: missing"
INCOMPLETE_ITEM_FILTER_PARAM = (
    "incomplete item filter: both paramName and paramValue must be specified together"
)
INCOMPLETE_AFFILIATE_PARAMS = (
    "incomplete affiliate: both network and tracking IDs must be specified together"
)

# Enumerations and formats
UNSUPPORTED_ITEM_FILTER_TYPE = "unsupported item filter type"
INVALID_BOOLEAN_VALUE = "invalid boolean value, allowed values are true and false"
INVALID_COUNTRY_CODE = "invalid country code"
INVALID_CONDITION = "invalid condition"
INVALID_CURRENCY_ID = "invalid currency ID"
INVALID_DATE_TIME = "invalid date time value"
INVALID_EXPEDITED_SHIPPING_TYPE = "invalid expedited shipping type"
INVALID_LISTING_TYPE = "invalid listing type"
DUPLICATE_LISTING_TYPE = "duplicate listing type"
INVALID_SELLER_BUSINESS_TYPE = "invalid seller business type"
INVALID_VALUE_BOX_INVENTORY = "invalid value box inventory"
INVALID_PRICE_PARAM_NAME = 'invalid price parameter name, must be "Currency"'
INVALID_GLOBAL_ID = "invalid global ID"
INVALID_OUTPUT_SELECTOR = "invalid output selector"
UNSUPPORTED_SORT_ORDER_TYPE = "invalid sort order type"
UNSUPPORTED_PRODUCT_ID_TYPE = "unsupported product ID type"
INVALID_CATEGORY_ID = "invalid category ID"
INVALID_POSTAL_CODE = "invalid postal code"
INVALID_STORE_NAME_LENGTH = "invalid store name length"
INVALID_STORE_NAME_AMPERSAND = "storeName contains unescaped '&' characters"
INVALID_PRODUCT_ID_LENGTH = "invalid product ID length"
INVALID_ISBN_LENGTH = "invalid ISBN length: must be either 10 or 13 characters"
INVALID_UPC_LENGTH = "invalid UPC length: must be 12 digits"
INVALID_EAN_LENGTH = "invalid EAN length: must be either 8 or 13 characters"
INVALID_CATEGORY_ID_LENGTH = (
    f"invalid category ID length: must be between 1 and {MAX_CATEGORY_ID_LEN} characters"
)
INVALID_KEYWORDS_LENGTH = (
    f"invalid keywords length: must be between {MIN_KEYWORDS_LEN} and {MAX_KEYWORDS_LEN} characters"
)
INVALID_KEYWORD_LENGTH = f"invalid keyword length: must be no more than {MAX_KEYWORD_LEN} characters"
INVALID_CUSTOM_ID_LENGTH = (
    f"invalid affiliate custom ID length: must be no more than {MAX_CUSTOM_ID_LEN} characters"
)
INVALID_TRACKING_ID = "invalid affiliate tracking ID"
INVALID_CAMPAIGN_ID = "invalid affiliate Campaign ID length: must be a 10-digit number"

# Numbers
INVALID_INTEGER = "invalid integer"
INVALID_PRICE = "invalid price"
INVALID_NETWORK_ID = "invalid affiliate network ID"
INVALID_NETWORK_ID_RANGE = "invalid affiliate network ID: must be between 2 and 9"
INVALID_ENTRIES_PER_PAGE = "invalid pagination entries per page"
INVALID_ENTRIES_PER_PAGE_RANGE = (
    "invalid pagination entries per page, "
    f"must be between {MIN_PAGINATION_VALUE} and {MAX_PAGINATION_VALUE}"
)
INVALID_PAGE_NUMBER = "invalid pagination page number"
INVALID_PAGE_NUMBER_RANGE = (
    f"invalid pagination page number, must be between {MIN_PAGINATION_VALUE} and {MAX_PAGINATION_VALUE}"
)

# Cross-field constraints
MAX_CATEGORY_IDS_EXCEEDED = f"maximum category IDs to specify is {MAX_CATEGORY_IDS}"
MAX_EXCLUDE_CATEGORIES_EXCEEDED = f"maximum categories to exclude is {MAX_EXCLUDE_CATEGORIES}"
MAX_EXCLUDE_SELLERS_EXCEEDED = f"maximum sellers to exclude is {MAX_EXCLUDE_SELLERS}"
MAX_SELLERS_EXCEEDED = f"maximum sellers to include is {MAX_SELLERS}"
MAX_LOCATED_INS_EXCEEDED = f"maximum countries to locate items in is {MAX_LOCATED_INS}"
MULTIPLE_SELLER_BUSINESS_TYPES = "multiple seller business types found"
INVALID_NUMERIC_FILTER = "invalid numeric item filter"
INVALID_MAX_PRICE = "maximum price must be greater than or equal to minimum price"
PRICE_CURRENCY_MISMATCH = "minimum and maximum price must use the same currency"
INVALID_ALL_LISTING_TYPE = "'All' listing type cannot be combined with other listing types"
INVALID_AUCTION_LISTING_TYPES = "'Auction' and 'AuctionWithBIN' listing types cannot be combined"
EXCLUDE_SELLER_WITH_SELLERS = (
    "'ExcludeSeller' item filter cannot be used together with either the Seller or "
    "TopRatedSellerOnly item filters"
)
SELLER_WITH_OTHER_SELLERS = (
    "'Seller' item filter cannot be used together with either the ExcludeSeller or "
    "TopRatedSellerOnly item filters"
)
TOP_RATED_SELLER_WITH_SELLERS = (
    "'TopRatedSellerOnly' item filter cannot be used together with either the Seller or "
    "ExcludeSeller item filters"
)

# Checksums
INVALID_ISBN = "invalid ISBN"
INVALID_UPC = "invalid UPC"
INVALID_EAN = "invalid EAN"

# Coordinator
INVALID_REQUEST = "invalid request"
FAILED_REQUEST = "failed to perform eBay Finding API request"
INVALID_STATUS = "failed to perform eBay Finding API request with status code"
DECODE_API_RESPONSE = "failed to decode eBay Finding API response body"


class FindingError(Exception):
    """Base error for everything this package raises."""

    kind = "finding_error"
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message, detail)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail is None:
            return f"ebay: {self.message}"
        return f"ebay: {self.message}: {self.detail}"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "detail": self.detail}


class ParamsError(FindingError):
    """Raw parameters do not form a legal request."""

    kind = "invalid_params"
    status_code = 400


class MissingParameterError(ParamsError):
    kind = "missing_parameter"


class IndexSyntaxError(ParamsError):
    kind = "index_syntax"


class IncompleteParameterError(ParamsError):
    kind = "incomplete_parameter"


class UnsupportedValueError(ParamsError):
    kind = "unsupported_value"


class InvalidNumberError(ParamsError):
    kind = "invalid_number"


class ConstraintError(ParamsError):
    kind = "constraint"


class FormatError(ParamsError):
    kind = "format"


class RequestBuildError(FindingError):
    kind = "request_build"


class TransportError(FindingError):
    kind = "transport"


class StatusError(FindingError):
    kind = "status"

    def __init__(self, response_status: int) -> None:
        super().__init__(INVALID_STATUS, str(response_status))
        self.response_status = response_status


class DecodeError(FindingError):
    kind = "decode"
