"""
API Response Mapping

Translates engine results into JSON bodies and HTTP status codes.
Keeps the route handlers free of error-taxonomy knowledge.

STATUS POLICY:
==============
schema / extraction failure   -> 502  (upstream model produced bad output)
transport failure             -> 502, 504 when it was a timeout
configuration failure         -> 503
render failure                -> 500  (programming error)
"""

from typing import Any, Dict

from ..contracts.errors import GenerationError, GenerationErrorKind, TransportError
from ..engine import GenerationResult

_KIND_STATUS = {
    GenerationErrorKind.SCHEMA: 502,
    GenerationErrorKind.EXTRACTION: 502,
    GenerationErrorKind.TRANSPORT: 502,
    GenerationErrorKind.CONFIGURATION: 503,
    GenerationErrorKind.RENDER: 500,
}


def error_status(error: GenerationError) -> int:
    if isinstance(error, TransportError) and error.is_timeout:
        return 504
    return _KIND_STATUS.get(error.kind, 500)


def map_failure(result: GenerationResult) -> Dict[str, Any]:
    body = result.error.to_dict()
    if result.trace is not None:
        body["trace"] = result.trace.to_dict()
    return body


def map_success(result: GenerationResult) -> Dict[str, Any]:
    body: Dict[str, Any] = {"timeline": result.timeline.to_dict()}
    if result.estimate is not None:
        body["estimate"] = result.estimate.to_dict()
    if result.trace is not None:
        body["trace"] = result.trace.to_dict()
    return body
