"""Pydantic model for an outbound transactional email."""

from pydantic import BaseModel, Field


class OutboundEmail(BaseModel):
    """Email in the shape the Resend API accepts: {from, to, subject, html}."""

    from_: str = Field(..., alias="from")
    to: list[str] = Field(default_factory=list)
    subject: str
    html: str

    model_config = {"populate_by_name": True}

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
