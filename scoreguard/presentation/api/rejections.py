"""Translate core rejections into HTTP errors"""

from fastapi import HTTPException, status

from scoreguard.core.config import settings
from scoreguard.domain.results import Rejected, RejectionReason
from scoreguard.presentation.schemas.common_schemas import RejectionDetail

GENERIC_VALIDATION_REASON = "result_not_accepted"
GENERIC_VALIDATION_MESSAGE = "Result not accepted"

STATUS_CODES = {
    RejectionReason.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    RejectionReason.STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def rejection_to_http(rejected: Rejected) -> HTTPException:
    """Build the HTTP error for a rejection

    Validation reasons can be collapsed into one generic reason so clients
    cannot use the responses to tune forged scores.
    """
    reason, message = rejected.reason.value, rejected.message
    if rejected.reason.is_validation_failure and not settings.expose_rejection_reason:
        reason, message = GENERIC_VALIDATION_REASON, GENERIC_VALIDATION_MESSAGE

    headers = None
    if rejected.reason == RejectionReason.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}

    return HTTPException(
        status_code=STATUS_CODES.get(rejected.reason, status.HTTP_400_BAD_REQUEST),
        detail=RejectionDetail(reason=reason, message=message).model_dump(),
        headers=headers,
    )
