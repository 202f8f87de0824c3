from .client import FindingClient
from .errors import (
    ConstraintError,
    DecodeError,
    FindingError,
    FormatError,
    IncompleteParameterError,
    IndexSyntaxError,
    InvalidNumberError,
    MissingParameterError,
    ParamsError,
    RequestBuildError,
    StatusError,
    TransportError,
    UnsupportedValueError,
)
from .params import (
    FIND_ITEMS_ADVANCED,
    FIND_ITEMS_BY_CATEGORY,
    FIND_ITEMS_BY_KEYWORDS,
    FIND_ITEMS_BY_PRODUCT,
    FIND_ITEMS_IN_EBAY_STORES,
    OPERATIONS,
    Operation,
    encode_query,
    get_operation,
    serialize,
    validate,
)
from .response import (
    FindItemsAdvancedResponse,
    FindItemsByCategoryResponse,
    FindItemsByKeywordsResponse,
    FindItemsByProductResponse,
    FindItemsInEBayStoresResponse,
    FindItemsResponse,
)

__all__ = [
    "FindingClient",
    "Operation",
    "OPERATIONS",
    "FIND_ITEMS_BY_CATEGORY",
    "FIND_ITEMS_BY_KEYWORDS",
    "FIND_ITEMS_ADVANCED",
    "FIND_ITEMS_BY_PRODUCT",
    "FIND_ITEMS_IN_EBAY_STORES",
    "validate",
    "serialize",
    "encode_query",
    "get_operation",
    "FindingError",
    "ParamsError",
    "MissingParameterError",
    "IndexSyntaxError",
    "IncompleteParameterError",
    "UnsupportedValueError",
    "InvalidNumberError",
    "ConstraintError",
    "FormatError",
    "RequestBuildError",
    "TransportError",
    "StatusError",
    "DecodeError",
    "FindItemsResponse",
    "FindItemsByCategoryResponse",
    "FindItemsByKeywordsResponse",
    "FindItemsAdvancedResponse",
    "FindItemsByProductResponse",
    "FindItemsInEBayStoresResponse",
]
