"""Reader profile service."""

from __future__ import annotations

from oriole_books.client import LibraryClient
from oriole_books.models.users import User, UserUpdate


class UserService:
    """Service for the signed-in reader's profile and library card."""

    def __init__(self, client: LibraryClient) -> None:
        self._client = client

    async def me(self) -> User:
        response = await self._client.get("/users/me")
        return User(**response.json())

    async def update_me(self, update: UserUpdate) -> User:
        response = await self._client.put("/users/me", json=update.model_dump(exclude_none=True))
        return User(**response.json())
