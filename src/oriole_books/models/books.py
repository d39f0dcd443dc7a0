"""Catalog data models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class CreateBookRequest(BaseModel):
    title: str
    author: str
    isbn: str
    description: str | None = None
    genre: str | None = None


class CreateBookInstanceRequest(BaseModel):
    inventory_number: str
    storage_location: str


class BookInstance(BaseModel):
    id: UUID
    book_id: UUID
    inventory_number: str
    storage_location: str
    status: str  # available, reserved, issued
    created_at: datetime
    updated_at: datetime


class Book(BaseModel):
    id: UUID
    title: str
    author: str
    isbn: str
    description: str | None = None
    genre: str | None = None
    created_at: datetime
    updated_at: datetime
    instance_count: int = 0


class BookDetail(BaseModel):
    id: UUID
    title: str
    author: str
    isbn: str
    description: str | None = None
    genre: str | None = None
    created_at: datetime
    updated_at: datetime
    instances: list[BookInstance] = []
