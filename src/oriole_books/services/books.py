"""Book catalog service."""

from __future__ import annotations

from uuid import UUID

from oriole_books.barcode import normalize
from oriole_books.client import LibraryClient
from oriole_books.models.books import (
    Book,
    BookDetail,
    BookInstance,
    CreateBookInstanceRequest,
    CreateBookRequest,
)


class BookService:
    """Service for browsing and maintaining the book catalog."""

    def __init__(self, client: LibraryClient) -> None:
        self._client = client

    async def list(self, skip: int | None = None, limit: int | None = None) -> list[Book]:
        """List catalog books. The catalog is public, so no token is needed."""
        params = {k: v for k, v in {"skip": skip, "limit": limit}.items() if v is not None}
        response = await self._client.get("/books", params=params or None, authenticated=False)
        return [Book(**item) for item in response.json()]

    async def get_by_isbn(self, isbn: str) -> BookDetail:
        response = await self._client.get(f"/books/isbn/{isbn}", authenticated=False)
        return BookDetail(**response.json())

    async def lookup_scanned(self, raw_barcode: str) -> BookDetail:
        """Normalize a scanner payload and look the book up by the result."""
        return await self.get_by_isbn(normalize(raw_barcode))

    async def create(self, request: CreateBookRequest) -> Book:
        response = await self._client.post("/books", json=request.model_dump(exclude_none=True))
        return Book(**response.json())

    async def add_instance(self, book_id: UUID, request: CreateBookInstanceRequest) -> BookInstance:
        response = await self._client.post(f"/books/{book_id}/instances", json=request.model_dump())
        return BookInstance(**response.json())
