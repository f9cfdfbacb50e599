"""Application constants."""

USER_AGENT = "locator-export/1.0 (+store-locator; contact: configured-email)"
NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
DEFAULT_DATABASE_ID = "267a86d999988078adcac47c306ab8ba"
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100
DEFAULT_OUTPUT_PATH = "stores.json"
DEFAULT_VALID_ACCOUNT_STATUSES = ("Customer", "Customer Overdue")
DEFAULT_PRODUCT_COLUMNS = (
    ("State of Mind 1G Customer", "State of Mind"),
    ("O-Yeah 1G Customer", "O-Yeah"),
    ("SUSHI Hash 1G Customer", "Sushi Hash"),
    ("SMACK 1G", "SMACK"),
    ("SMACK .5G", "SMACK"),
    ("ICHI- #JUAN 1G Customer", "ICHI"),
)
DEFAULT_PROPERTY_NAMES = {
    "name": "Dispensary Name",
    "status": "Account Status",
    "address": "Address",
    "city": "City",
    "last_order_date": "Last Order Date",
    "last_delivery_date": "Last Delivery Date",
    "map_location": "Map Location",
}
ENV_API_TOKEN = "NOTION_API_TOKEN"
ENV_DATABASE_ID = "NOTION_DATABASE_ID"
COMMANDS = ("export", "analyze")
OUTPUT_START_MARKER = "--- OUTPUT START ---"
OUTPUT_END_MARKER = "--- OUTPUT END ---"
RECENT_WINDOW_DAYS = 60
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 1
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "event",
    "status",
    "page",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
