"""
Notification Service Clients Module

Outbound delivery clients
"""

from .email_client import EmailClient

__all__ = [
    "EmailClient",
]
