"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Alert(BaseModel):
    """Flash-style failure message returned instead of a resource."""

    alert: str = Field(..., description="Human-readable explanation of the failure.")
