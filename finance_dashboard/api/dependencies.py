"""Dependency injection for FastAPI endpoints"""

from datetime import datetime

from fastapi import Request

from finance_dashboard.domain.dashboard import Dashboard
from finance_dashboard.domain.market import MockQuoteGenerator
from finance_dashboard.infrastructure.clients.crypto import CryptoClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_dashboard(request: Request) -> Dashboard:
    """The single dashboard session held by the application"""
    return request.app.state.dashboard


def get_quote_generator(request: Request) -> MockQuoteGenerator:
    return request.app.state.quote_generator


def get_crypto_client() -> CryptoClient:
    """Provide crypto price API client instance"""
    return CryptoClient()


def get_now() -> datetime:
    """Local wall-clock time used for week windows"""
    return datetime.now()
