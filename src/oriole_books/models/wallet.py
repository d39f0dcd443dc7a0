"""Library membership (wallet pass) models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class WalletMembershipRequest(BaseModel):
    """Body for both creating and replacing a membership."""

    member_name: str
    member_number: str
    barcode_label: str | None = None
    barcode_value: str | None = None
    expires_at: datetime | None = None


class WalletMembership(BaseModel):
    id: UUID
    user_id: UUID
    pass_id: str
    pass_type_id: str
    apple_wallet_url: str | None = None
    google_wallet_url: str | None = None
    default_url: str | None = None
    qr_code_png_apple: str | None = None
    qr_code_png_google: str | None = None
    qr_code_svg_apple: str | None = None
    qr_code_svg_google: str | None = None
    pass_href_apple: str | None = None
    pass_href_google: str | None = None
    wallet_pin: str | None = None
    expires_at: datetime | None = None
    valid_until: datetime | None = None
    created_at: datetime
    updated_at: datetime
