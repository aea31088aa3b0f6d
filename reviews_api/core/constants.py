# reviews_api/core/constants.py
"""
Core application constants.

These values centralize common configuration-like constants such as:
- Pagination defaults.
- Common HTTP header names.
- Record-kind names accepted by the import and clear endpoints.
"""

# Pagination defaults
DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 50
MAX_LIMIT: int = 200
# Largest row offset handed to the store; pages past it are clamped
MAX_OFFSET: int = 2**53

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Critical review detection: comments containing the contrastive "dar" ("but")
CRITICAL_REVIEW_MARKER: str = "dar"
EMPTY_COMMENT_PLACEHOLDER: str = "[no comment text]"
UNKNOWN_REFERENCE_NAME: str = "Unknown"

# Record kinds addressable through /upload-csv/{kind} and /clear/{kind}
KIND_USERS: str = "users"
KIND_PRODUCTS: str = "products"
KIND_REVIEWS: str = "reviews"
KIND_SOFTWARE: str = "software"
