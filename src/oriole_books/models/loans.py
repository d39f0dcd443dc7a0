"""Loan data models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class ReserveLoanRequest(BaseModel):
    book_instance_id: UUID
    due_date: datetime


class Loan(BaseModel):
    id: UUID
    user_id: UUID
    book_instance_id: UUID
    reserved_at: datetime
    issued_at: datetime | None = None
    due_date: datetime
    returned_at: datetime | None = None
    status: str
    created_at: datetime
    updated_at: datetime


class LoanDetail(Loan):
    book_title: str | None = None
    book_author: str | None = None
    inventory_number: str | None = None
