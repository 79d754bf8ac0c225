"""Contact form API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from domain.contact.service import ContactService
from .dependencies import get_contact_service
from .schemas import ContactFormRequest, ContactResponse, ErrorResponse


router = APIRouter(prefix="/api", tags=["Contact"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing fields or invalid token"},
    500: {"model": ErrorResponse, "description": "Record store or mail failure"},
}


@router.post("/send-email", response_model=ContactResponse, responses=_ERROR_RESPONSES)
def send_email(
    payload: ContactFormRequest,
    service: ContactService = Depends(get_contact_service),
):
    """Accept a contact form submission.

    Unknown and unverified senders are emailed a verification link and their
    message is held; verified senders' messages go straight to the
    administrator.
    """
    result = service.submit(payload.to_submission())
    return ContactResponse(success=True, message=result.message)


@router.get("/verify-email", response_model=ContactResponse, responses=_ERROR_RESPONSES)
def verify_email(
    token: Optional[str] = Query(None, description="Token from the verification link"),
    service: ContactService = Depends(get_contact_service),
):
    """Verify an email address and forward every held message."""
    result = service.verify(token)
    return ContactResponse(success=True, message=result.message)
