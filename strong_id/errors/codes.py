"""Stable machine-readable error codes for identifier failures.

Every ``StrongIdError`` subclass exposes one of these as ``code`` so callers
at adapter boundaries (CLI, HTTP handlers, logs) can branch on a constant
instead of matching message text.
"""

# Base32 codec
INVALID_BYTE = "INVALID_BYTE"
INVALID_FIRST_BYTE = "INVALID_FIRST_BYTE"
INVALID_LENGTH = "INVALID_LENGTH"

# Identifier grammar
MISSING_PREFIX = "MISSING_PREFIX"
INVALID_PREFIX = "INVALID_PREFIX"
NO_PREFIX_EXPECTED = "NO_PREFIX_EXPECTED"

# Prefix validation
PREFIX_TOO_LONG = "PREFIX_TOO_LONG"
PREFIX_EXPECTED = "PREFIX_EXPECTED"
INCORRECT_PREFIX_CHARACTER = "INCORRECT_PREFIX_CHARACTER"

# Generic
INVALID_ARGUMENT = "INVALID_ARGUMENT"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
