# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from salescrm.api.v1 import (
    auth,
    communications,
    customers,
    follow_ups,
    leads,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(
    communications.router, prefix="/communications", tags=["communications"]
)
api_router.include_router(
    follow_ups.router, prefix="/follow-ups", tags=["follow-ups"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
