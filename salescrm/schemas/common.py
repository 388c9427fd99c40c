# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Common schema types."""

import uuid

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class AssignmentRequest(BaseModel):
    """Assign a record to a user, or unassign it with null."""

    user_id: uuid.UUID | None


class BulkRowError(BaseModel):
    """A row of a bulk import that was not inserted."""

    index: int
    error: str


class BulkImportResult(BaseModel):
    """Outcome of a bulk import. Good rows are inserted even when others fail."""

    inserted_count: int
    errors: list[BulkRowError]


class DeletedCount(BaseModel):
    deleted_count: int
