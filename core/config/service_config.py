#!/usr/bin/env python3
"""Service configuration for peer services

Endpoints of the services the order platform calls over HTTP, plus the
settings of the outbound side effects (email delivery, simulated payment latency).
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Peer service endpoints and side-effect settings"""

    # ===========================================
    # Peer Services
    # ===========================================
    # Product catalog (owns stock levels)
    product_service_url: str = "http://localhost:8215"

    # Order service (payment hand-off target)
    order_service_url: str = "http://localhost:8210"

    # ===========================================
    # Email delivery
    # ===========================================
    email_enabled: bool = False
    email_api_url: str = "https://api.resend.com"
    email_api_key: Optional[str] = None
    email_from: str = "orders@shop.local"
    html_emails: bool = False

    # ===========================================
    # Payment simulation
    # ===========================================
    # Multiplier applied to each processor's simulated latency (0 disables the wait)
    payment_latency_scale: float = 1.0

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        return cls(
            product_service_url=os.getenv("PRODUCT_SERVICE_URL", "http://localhost:8215"),
            order_service_url=os.getenv("ORDER_SERVICE_URL", "http://localhost:8210"),

            email_enabled=_bool(os.getenv("EMAIL_ENABLED", "false")),
            email_api_url=os.getenv("EMAIL_API_URL", "https://api.resend.com"),
            email_api_key=os.getenv("EMAIL_API_KEY") or os.getenv("RESEND_API_KEY"),
            email_from=os.getenv("EMAIL_FROM", "orders@shop.local"),
            html_emails=_bool(os.getenv("NOTIFICATION_HTML_EMAILS", "false")),

            payment_latency_scale=_float(os.getenv("PAYMENT_LATENCY_SCALE", "1.0"), 1.0),
        )
