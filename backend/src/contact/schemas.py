"""Pydantic schemas for the contact form endpoints"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.contact.models import ContactSubmission


class ContactFormRequest(BaseModel):
    """Body of POST /api/send-email.

    Fields are optional at the schema level so that a blank or missing value
    is reported as a contact validation error listing every absent field,
    rather than as a generic schema error.
    """
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)
    email: Optional[str] = Field(None, max_length=254)
    phone: Optional[str] = Field(None, max_length=40)
    message: Optional[str] = Field(None, max_length=10_000)

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def single_line(cls, value: Optional[str]) -> Optional[str]:
        # These values end up in mail headers
        if value is not None and ("\r" in value or "\n" in value):
            raise ValueError("must not contain line breaks")
        return value

    def to_submission(self) -> ContactSubmission:
        return ContactSubmission(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            message=self.message,
        )


class ContactResponse(BaseModel):
    """Successful response for both contact endpoints."""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers in main."""
    success: bool = False
    error: str
    message: str
    missing_fields: Optional[List[str]] = None
