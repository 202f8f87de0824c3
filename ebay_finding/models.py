# Validated request model for Finding API calls.
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class AspectFilter:
    """Facet constraint, e.g. Size in (M, L)."""
    aspect_name: str
    aspect_value_names: Tuple[str, ...]


@dataclass(frozen=True)
class ItemFilter:
    """Named item filter with one or more values.

    param_name/param_value are set together or not at all; only the price
    filters use them, to carry a Currency qualifier.
    """

    name: str
    values: Tuple[str, ...]
    param_name: Optional[str] = None
    param_value: Optional[str] = None


@dataclass(frozen=True)
class Affiliate:
    custom_id: Optional[str] = None
    geo_targeting: Optional[bool] = None
    network_id: Optional[int] = None  # set together with tracking_id
    tracking_id: Optional[str] = None


@dataclass(frozen=True)
class PaginationInput:
    entries_per_page: Optional[int] = None
    page_number: Optional[int] = None


@dataclass(frozen=True)
class ProductID:
    id_type: str  # "ReferenceID" | "ISBN" | "UPC" | "EAN"
    value: str


@dataclass(frozen=True)
class FindingParams:
    """Parameters for exactly one Finding API call, built by params.validate().

    Which identifying fields are set depends on the operation; everything else
    is shared by all five operations.
    """

    operation_name: str
    category_ids: Tuple[str, ...] = ()
    keywords: Optional[str] = None
    description_search: Optional[bool] = None
    product_id: Optional[ProductID] = None
    store_name: Optional[str] = None
    global_id: Optional[str] = None
    aspect_filters: Tuple[AspectFilter, ...] = ()
    item_filters: Tuple[ItemFilter, ...] = ()
    output_selectors: Tuple[str, ...] = ()
    affiliate: Affiliate = field(default_factory=Affiliate)
    buyer_postal_code: Optional[str] = None
    pagination_input: PaginationInput = field(default_factory=PaginationInput)
    sort_order: Optional[str] = None
