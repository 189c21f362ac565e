"""Structured log field names emitted by the fluent HTTP client."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"
SERVICE = "service"

HTTP_METHOD = "http_method"
HTTP_URL = "http_url"
HTTP_STATUS = "http_status"

# Record attributes copied into formatted output when present.
RECORD_FIELDS = (SERVICE, HTTP_METHOD, HTTP_URL, HTTP_STATUS)
