"""eBay Finding API client.

Provides:
- FindingClient: validates raw parameters, builds the request URL, performs
  the HTTP GET over httpx and decodes the JSON body into response models"""

from typing import Mapping, Optional, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from . import config, errors
from .errors import DecodeError, FindingError, ParamsError, RequestBuildError, StatusError, TransportError
from .params import (
    FIND_ITEMS_ADVANCED,
    FIND_ITEMS_BY_CATEGORY,
    FIND_ITEMS_BY_KEYWORDS,
    FIND_ITEMS_BY_PRODUCT,
    FIND_ITEMS_IN_EBAY_STORES,
    Operation,
    build_url,
    serialize,
    validate,
)
from .response import (
    RESPONSE_TYPES,
    FindItemsAdvancedResponse,
    FindItemsByCategoryResponse,
    FindItemsByKeywordsResponse,
    FindItemsByProductResponse,
    FindItemsInEBayStoresResponse,
)

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=BaseModel)


class FindingClient:
    """Async client for the five Finding API search operations."""

    def __init__(
        self,
        app_id: str = config.APP_ID,
        url: str = config.FINDING_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = config.HTTP_TIMEOUT,
    ) -> None:
        self.app_id = app_id
        self.url = url
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "FindingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        # Injected clients belong to the caller.
        if self._owns_http_client:
            await self._http.aclose()

    def build_url(self, operation: Operation, params: Mapping[str, str]) -> str:
        """Validate params and return the full request URL without sending anything."""
        try:
            finding_params = validate(operation, params)
        except ParamsError as e:
            logger.warning(
                "finding_params_rejected",
                operation=operation.name,
                kind=e.kind,
                message=e.message,
                detail=e.detail,
            )
            raise
        return build_url(self.url, serialize(finding_params, self.app_id))

    async def find_items(self, operation: Operation, params: Mapping[str, str]) -> BaseModel:
        """Run any search operation and decode its response."""
        response_type = RESPONSE_TYPES[operation.response_key]
        return await self._find(operation, params, response_type)

    async def find_items_by_category(self, params: Mapping[str, str]) -> FindItemsByCategoryResponse:
        return await self._find(FIND_ITEMS_BY_CATEGORY, params, FindItemsByCategoryResponse)

    async def find_items_by_keywords(self, params: Mapping[str, str]) -> FindItemsByKeywordsResponse:
        return await self._find(FIND_ITEMS_BY_KEYWORDS, params, FindItemsByKeywordsResponse)

    async def find_items_advanced(self, params: Mapping[str, str]) -> FindItemsAdvancedResponse:
        return await self._find(FIND_ITEMS_ADVANCED, params, FindItemsAdvancedResponse)

    async def find_items_by_product(self, params: Mapping[str, str]) -> FindItemsByProductResponse:
        return await self._find(FIND_ITEMS_BY_PRODUCT, params, FindItemsByProductResponse)

    async def find_items_in_ebay_stores(self, params: Mapping[str, str]) -> FindItemsInEBayStoresResponse:
        return await self._find(FIND_ITEMS_IN_EBAY_STORES, params, FindItemsInEBayStoresResponse)

    async def _find(self, operation: Operation, params: Mapping[str, str], response_type: Type[R]) -> R:
        url = self.build_url(operation, params)
        try:
            result = await self._send(operation, url, response_type)
        except FindingError as e:
            logger.error("finding_request_failed", operation=operation.name, kind=e.kind, detail=e.detail)
            raise
        logger.info(
            "finding_response",
            operation=operation.name,
            status_code=200,
            result_pages=len(result.results()),
        )
        return result

    async def _send(self, operation: Operation, url: str, response_type: Type[R]) -> R:
        try:
            request = self._http.build_request("GET", url)
        except httpx.InvalidURL as e:
            raise RequestBuildError(errors.INVALID_REQUEST, str(e)) from e

        # The URL carries the app ID, so only the parameter count is logged.
        logger.debug("finding_request", operation=operation.name, param_count=len(request.url.params))
        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(errors.FAILED_REQUEST, str(e)) from e

        if response.status_code != httpx.codes.OK:
            raise StatusError(response.status_code)

        try:
            return response_type.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(errors.DECODE_API_RESPONSE, str(e)) from e
