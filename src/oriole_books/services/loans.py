"""Loan management service."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from oriole_books.client import LibraryClient
from oriole_books.models.loans import Loan, LoanDetail, ReserveLoanRequest


class LoanService:
    """Service for reserving, issuing and returning book instances."""

    def __init__(self, client: LibraryClient) -> None:
        self._client = client

    async def reserve(self, book_instance_id: UUID, due_date: datetime) -> Loan:
        body = ReserveLoanRequest(book_instance_id=book_instance_id, due_date=due_date)
        response = await self._client.post("/loans/reserve", json=body.model_dump(mode="json"))
        return Loan(**response.json())

    async def issue(self, loan_id: UUID) -> Loan:
        response = await self._client.post(f"/loans/{loan_id}/issue")
        return Loan(**response.json())

    async def return_loan(self, loan_id: UUID) -> Loan:
        response = await self._client.post(f"/loans/{loan_id}/return")
        return Loan(**response.json())

    async def my_loans(self, include_returned: bool | None = None) -> list[LoanDetail]:
        """List the current user's loans, optionally including returned ones."""
        params = None
        if include_returned is not None:
            params = {"include_returned": str(include_returned).lower()}
        response = await self._client.get("/loans/my", params=params)
        return [LoanDetail(**item) for item in response.json()]

    async def all_loans(self) -> list[Loan]:
        response = await self._client.get("/loans/all")
        return [Loan(**item) for item in response.json()]
