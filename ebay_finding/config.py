import os

FINDING_URL = os.getenv(
    "EBAY_FINDING_URL", "https://svcs.ebay.com/services/search/FindingService/v1?REST-PAYLOAD"
)
APP_ID = os.getenv("EBAY_APP_ID", "") # eBay application ID sent as SECURITY-APPNAME
SERVICE_VERSION = "1.0.0"
RESPONSE_DATA_FORMAT = "JSON"
HTTP_TIMEOUT = 5.0 # Seconds per request

ENVIRONMENT = os.getenv("FINDING_ENV", "development") # "development" logs to console, anything else as JSON
LOG_LEVEL = os.getenv("FINDING_LOG_LEVEL", "INFO")

MAX_CATEGORY_IDS = 3
MAX_CATEGORY_ID_LEN = 10
MIN_KEYWORDS_LEN, MAX_KEYWORDS_LEN = 2, 350
MAX_KEYWORD_LEN = 98 # Per token, after splitting on search operators
MAX_CUSTOM_ID_LEN = 256
MIN_POSTAL_CODE_LEN = 3
MIN_PAGINATION_VALUE, MAX_PAGINATION_VALUE = 1, 100

MAX_EXCLUDE_CATEGORIES = 25
MAX_EXCLUDE_SELLERS = 100
MAX_SELLERS = 100
MAX_LOCATED_INS = 25
SMALLEST_MAX_DISTANCE = 5
