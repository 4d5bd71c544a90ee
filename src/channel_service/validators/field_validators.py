"""
Reusable field types for request payloads and path parameters.

Identifiers handed to us by the chat platform are signed 64-bit integers and are
stored in BIGINT columns. Anything outside that range can never be stored, so it
is rejected at the request boundary (422) instead of surfacing later as a driver
overflow that would be classified as an internal error.
"""

from typing import Annotated
from pydantic import Field, StringConstraints

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# BIGINT-compatible identifier
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]

# Text label that must contain at least one non-whitespace character
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=False, min_length=1, pattern=r"\S")]
