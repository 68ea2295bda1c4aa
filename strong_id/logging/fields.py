"""Canonical logging field names for identifier diagnostics.

Keeping names centralized keeps CLI output, library debug logs, and any
embedding service's log pipeline on one stable key set.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"
EVENT = "event"

# Identifier parse fields.
ID_TYPE = "id_type"
INPUT_LENGTH = "input_length"
ERROR_CODE = "error_code"
PARSE_REJECTED_EVENT = "identifier_parse_rejected"

# Conformance run fields.
CASE_KIND = "case_kind"
CASE_NAME = "case_name"
CASE_COUNT = "case_count"
FAILURE_COUNT = "failure_count"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
