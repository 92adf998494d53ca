"""Pydantic schemas for tables, waiter calls, guest feedback and the site footer."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from restaurant_api.schemas.base import BaseResponse

FEEDBACK_MAX_LENGTH = 500


class TablesCreate(BaseModel):
    number_of_tables: Annotated[int, Field(ge=1, le=100)]


class TableResponse(BaseModel):
    id: int
    table_number: int
    menu_url: str | None
    # Where the rendered QR code can be fetched; None until one is generated
    qr_code_url: str | None
    created_at: datetime


class CallWaiterCreate(BaseModel):
    table_number: Annotated[int, Field(ge=1)]


class CallWaiterResponse(BaseResponse):
    id: int
    table_number: int
    created_at: datetime


class FeedbackCreate(BaseModel):
    # Length is checked after trimming, in the service
    message: str


class FeedbackResponse(BaseResponse):
    id: int
    message: str
    created_at: datetime


class SocialLink(BaseModel):
    label: Annotated[str, Field(max_length=100)]
    value: Annotated[str, Field(max_length=500)]
    display_name: Annotated[str, Field(max_length=100)] = ""


class FooterContact(BaseModel):
    phone: list[Annotated[str, Field(max_length=500)]] = Field(default_factory=list)
    email: list[Annotated[str, Field(max_length=500)]] = Field(default_factory=list)


class FooterLocation(BaseModel):
    address: list[Annotated[str, Field(max_length=500)]] = Field(default_factory=list)


class FooterFeatures(BaseModel):
    call_waiter_enabled: bool = True


class FooterSettings(BaseModel):
    """The public footer, grouped the way the menu page renders it."""

    social: list[SocialLink] = Field(default_factory=list)
    contact: FooterContact = Field(default_factory=FooterContact)
    location: FooterLocation = Field(default_factory=FooterLocation)
    features: FooterFeatures = Field(default_factory=FooterFeatures)


class FooterSettingsWrite(BaseModel):
    """Full replacement of the footer; omitted sections are cleared."""

    social: list[SocialLink] = Field(default_factory=list)
    contact: FooterContact | None = None
    location: FooterLocation | None = None
    features: FooterFeatures | None = None
