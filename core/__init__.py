#!/usr/bin/env python3
"""
Core Module for the Order Platform Microservices

Shared infrastructure used by every service.

COMPONENTS:
    - config/: Environment-driven configuration dataclasses
    - config_manager.py: Per-service configuration view
    - logger.py: Service logger setup
    - nats_client.py: NATS JetStream event bus for the order lifecycle
    - postgres_client.py: asyncpg pool wrapper

USAGE:
    from core.config_manager import ConfigManager

    # Initialize configuration for a service
    config = ConfigManager("order_service")
"""

__version__ = "1.0.0"
