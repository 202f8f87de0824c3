"""pydantic models for Finding API JSON responses.

The service wraps nearly every scalar in a one-element list; the models keep
that shape so nothing is lost in decoding. Unknown keys are ignored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _FindingModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Price(_FindingModel):
    currency_id: Optional[str] = Field(None, alias="@currencyId")
    value: Optional[str] = Field(None, alias="__value__")


class Distance(_FindingModel):
    unit: Optional[str] = Field(None, alias="@unit")
    value: Optional[str] = Field(None, alias="__value__")


class GalleryURL(_FindingModel):
    gallery_size: Optional[str] = Field(None, alias="@gallerySize")
    value: Optional[str] = Field(None, alias="__value__")


class ProductIDValue(_FindingModel):
    type: Optional[str] = Field(None, alias="@type")
    value: Optional[str] = Field(None, alias="__value__")


class ErrorData(_FindingModel):
    category: List[str] = []
    domain: List[str] = []
    error_id: List[str] = []
    exception_id: List[str] = []
    message: List[str] = []
    parameter: List[str] = []
    severity: List[str] = []
    subdomain: List[str] = []


class ErrorMessage(_FindingModel):
    error: List[ErrorData] = []


class PaginationOutput(_FindingModel):
    entries_per_page: List[str] = []
    page_number: List[str] = []
    total_entries: List[str] = []
    total_pages: List[str] = []


class Condition(_FindingModel):
    condition_display_name: List[str] = []
    condition_id: List[str] = []


class DiscountPriceInfo(_FindingModel):
    minimum_advertised_price_exposure: List[str] = []
    original_retail_price: List[Price] = []
    pricing_treatment: List[str] = []
    sold_off_ebay: List[str] = []
    sold_on_ebay: List[str] = []


class ListingInfo(_FindingModel):
    best_offer_enabled: List[str] = []
    buy_it_now_available: List[str] = []
    buy_it_now_price: List[Price] = []
    converted_buy_it_now_price: List[Price] = []
    end_time: List[datetime] = []
    gift: List[str] = []
    listing_type: List[str] = []
    start_time: List[datetime] = []
    watch_count: List[str] = []


class Category(_FindingModel):
    category_id: List[str] = []
    category_name: List[str] = []


class SellerInfo(_FindingModel):
    feedback_rating_star: List[str] = []
    feedback_score: List[str] = []
    positive_feedback_percent: List[str] = []
    seller_user_name: List[str] = []
    top_rated_seller: List[str] = []


class SellingStatus(_FindingModel):
    bid_count: List[str] = []
    converted_current_price: List[Price] = []
    current_price: List[Price] = []
    selling_state: List[str] = []
    time_left: List[str] = []


class ShippingInfo(_FindingModel):
    expedited_shipping: List[str] = []
    handling_time: List[str] = []
    intermediated_shipping: List[str] = []
    one_day_shipping_available: List[str] = []
    shipping_service_cost: List[Price] = []
    shipping_type: List[str] = []
    ship_to_locations: List[str] = []


class Storefront(_FindingModel):
    store_name: List[str] = []
    store_url: List[str] = Field([], alias="storeURL")


class UnitPriceInfo(_FindingModel):
    quantity: List[str] = []
    type: List[str] = []


class SearchItem(_FindingModel):
    auto_pay: List[str] = []
    charity_id: List[str] = []
    compatibility: List[str] = []
    condition: List[Condition] = []
    country: List[str] = []
    discount_price_info: List[DiscountPriceInfo] = []
    distance: List[Distance] = []
    ebay_plus_enabled: List[str] = Field([], alias="eBayPlusEnabled")
    eek_status: List[str] = []
    gallery_info_container: List[GalleryURL] = []
    gallery_plus_picture_url: List[str] = Field([], alias="galleryPlusPictureURL")
    gallery_url: List[str] = Field([], alias="galleryURL")
    global_id: List[str] = []
    is_multi_variation_listing: List[str] = []
    item_id: List[str] = []
    listing_info: List[ListingInfo] = []
    location: List[str] = []
    payment_method: List[str] = []
    picture_url_large: List[str] = Field([], alias="pictureURLLarge")
    picture_url_super_size: List[str] = Field([], alias="pictureURLSuperSize")
    postal_code: List[str] = []
    primary_category: List[Category] = []
    product_id: List[ProductIDValue] = []
    returns_accepted: List[str] = []
    secondary_category: List[Category] = []
    seller_info: List[SellerInfo] = []
    selling_status: List[SellingStatus] = []
    shipping_info: List[ShippingInfo] = []
    store_info: List[Storefront] = []
    subtitle: List[str] = []
    title: List[str] = []
    top_rated_listing: List[str] = []
    unit_price: List[UnitPriceInfo] = []
    view_item_url: List[str] = Field([], alias="viewItemURL")


class SearchResult(_FindingModel):
    count: Optional[str] = Field(None, alias="@count")
    item: List[SearchItem] = []


class FindItemsResponse(_FindingModel):
    """One page of results, common to every search operation."""

    ack: List[str] = []
    error_message: List[ErrorMessage] = []
    item_search_url: List[str] = Field([], alias="itemSearchURL")
    pagination_output: List[PaginationOutput] = []
    search_result: List[SearchResult] = []
    timestamp: List[datetime] = []
    version: List[str] = []


class FindItemsByCategoryResponse(_FindingModel):
    items_response: List[FindItemsResponse] = Field([], alias="findItemsByCategoryResponse")

    def results(self) -> List[FindItemsResponse]:
        return self.items_response


class FindItemsByKeywordsResponse(_FindingModel):
    items_response: List[FindItemsResponse] = Field([], alias="findItemsByKeywordsResponse")

    def results(self) -> List[FindItemsResponse]:
        return self.items_response


class FindItemsAdvancedResponse(_FindingModel):
    items_response: List[FindItemsResponse] = Field([], alias="findItemsAdvancedResponse")

    def results(self) -> List[FindItemsResponse]:
        return self.items_response


class FindItemsByProductResponse(_FindingModel):
    items_response: List[FindItemsResponse] = Field([], alias="findItemsByProductResponse")

    def results(self) -> List[FindItemsResponse]:
        return self.items_response


class FindItemsInEBayStoresResponse(_FindingModel):
    items_response: List[FindItemsResponse] = Field([], alias="findItemsIneBayStoresResponse")

    def results(self) -> List[FindItemsResponse]:
        return self.items_response


# Keyed by the operation's response wrapper key.
RESPONSE_TYPES = {
    "findItemsByCategoryResponse": FindItemsByCategoryResponse,
    "findItemsByKeywordsResponse": FindItemsByKeywordsResponse,
    "findItemsAdvancedResponse": FindItemsAdvancedResponse,
    "findItemsByProductResponse": FindItemsByProductResponse,
    "findItemsIneBayStoresResponse": FindItemsInEBayStoresResponse,
}
