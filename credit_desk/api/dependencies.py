"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import HTTPException, Request

from credit_desk.config import settings
from credit_desk.utils.date_utils import today_in


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Current date in the business timezone, used when a request carries no reference date"""
    try:
        return today_in(settings.business_timezone)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
