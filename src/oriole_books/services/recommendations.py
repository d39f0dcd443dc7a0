"""Personal book recommendations."""

from __future__ import annotations

from oriole_books.client import LibraryClient
from oriole_books.models.books import BookDetail


class RecommendationService:
    def __init__(self, client: LibraryClient) -> None:
        self._client = client

    async def list(self, skip: int | None = None, limit: int | None = None) -> list[BookDetail]:
        """Books suggested for the signed-in reader, with their copies."""
        params = {k: v for k, v in {"skip": skip, "limit": limit}.items() if v is not None}
        response = await self._client.get("/recommendations", params=params or None)
        return [BookDetail(**item) for item in response.json()]
