import httpx
import pytest

from ebay_finding import FindingClient

FUTURE = "2099-01-01T00:00:00.000Z"
PAST = "2000-01-01T00:00:00Z"

TEST_URL = "https://svcs.example.com/services/search/FindingService/v1?REST-PAYLOAD"


def search_payload(key: str = "findItemsByKeywordsResponse") -> dict:
    """A minimal successful Finding response body."""
    return {
        key: [
            {
                "ack": ["Success"],
                "version": ["1.13.0"],
                "timestamp": ["2023-06-01T10:00:00.000Z"],
                "searchResult": [
                    {
                        "@count": "1",
                        "item": [
                            {
                                "itemId": ["123456789"],
                                "title": ["Harry Potter and the Philosopher's Stone"],
                                "globalId": ["EBAY-US"],
                                "galleryURL": ["https://thumbs.example.com/1.jpg"],
                                "viewItemURL": ["https://www.example.com/itm/123456789"],
                                "sellingStatus": [
                                    {
                                        "currentPrice": [{"@currencyId": "USD", "__value__": "9.99"}],
                                        "sellingState": ["Active"],
                                    }
                                ],
                            }
                        ],
                    }
                ],
                "paginationOutput": [
                    {
                        "pageNumber": ["1"],
                        "entriesPerPage": ["100"],
                        "totalPages": ["1"],
                        "totalEntries": ["1"],
                    }
                ],
                "itemSearchURL": ["https://www.example.com/sch/i.html?_nkw=harry+potter"],
            }
        ]
    }


@pytest.fixture
def make_client():
    """Build a FindingClient whose HTTP traffic goes to the given handler."""

    def factory(handler, url: str = TEST_URL) -> FindingClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return FindingClient(app_id="test-app-id", url=url, http_client=http_client)

    return factory
