"""Library membership service.

A membership backs the reader's wallet pass. Only the membership record is
managed here; the pass itself is served from the URLs the API returns.
"""

from __future__ import annotations

from oriole_books.client import LibraryClient
from oriole_books.models.wallet import WalletMembership, WalletMembershipRequest


class WalletService:
    def __init__(self, client: LibraryClient) -> None:
        self._client = client

    async def create(self, request: WalletMembershipRequest) -> WalletMembership:
        response = await self._client.post("/wallet", json=request.model_dump(mode="json", exclude_none=True))
        return WalletMembership(**response.json())

    async def get_mine(self) -> WalletMembership:
        response = await self._client.get("/wallet/me")
        return WalletMembership(**response.json())

    async def update_mine(self, request: WalletMembershipRequest) -> WalletMembership:
        response = await self._client.put("/wallet/me", json=request.model_dump(mode="json", exclude_none=True))
        return WalletMembership(**response.json())

    async def delete_mine(self) -> None:
        await self._client.delete("/wallet/me")
