"""
Configuration Manager

Per-service view over the platform configuration. Every microservice builds one
at import time:

    config_manager = ConfigManager("order_service")
    config = config_manager.get_service_config()
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .config import PlatformConfig, get_settings

logger = logging.getLogger(__name__)


# Default ports per service
SERVICE_PORTS: Dict[str, int] = {
    "notification_service": 8206,
    "payment_service": 8207,
    "order_service": 8210,
    "product_service": 8215,
}


@dataclass
class ServiceSettings:
    """Resolved settings for one running microservice"""
    service_name: str
    service_host: str
    service_port: int
    debug: bool
    log_level: str
    environment: str
    nats_enabled: bool
    nats_url: str
    database_url: str
    product_service_url: str
    order_service_url: str
    email_enabled: bool
    email_api_url: str
    email_api_key: Optional[str]
    email_from: str
    html_emails: bool
    payment_latency_scale: float


class ConfigManager:
    """Resolves host/port and peer endpoints for a single service"""

    def __init__(self, service_name: str, settings: Optional[PlatformConfig] = None):
        self.service_name = service_name
        self.settings = settings or get_settings()

    def _env_prefix(self) -> str:
        return self.service_name.upper()

    def get_service_config(self) -> ServiceSettings:
        """Build the settings for this service, honouring <SERVICE>_HOST / <SERVICE>_PORT overrides"""
        host, port = self.discover_service(
            service_name=self.service_name,
            default_host=self.settings.default_host,
            default_port=SERVICE_PORTS.get(self.service_name, self.settings.default_port),
            env_host_key=f"{self._env_prefix()}_HOST",
            env_port_key=f"{self._env_prefix()}_PORT",
        )
        infra = self.settings.infrastructure
        services = self.settings.services

        return ServiceSettings(
            service_name=self.service_name,
            service_host=host,
            service_port=port,
            debug=self.settings.debug,
            log_level=self.settings.logging.log_level,
            environment=self.settings.environment,
            nats_enabled=infra.nats_enabled,
            nats_url=infra.nats_servers,
            database_url=infra.postgres_dsn,
            product_service_url=services.product_service_url,
            order_service_url=services.order_service_url,
            email_enabled=services.email_enabled,
            email_api_url=services.email_api_url,
            email_api_key=services.email_api_key,
            email_from=services.email_from,
            html_emails=services.html_emails,
            payment_latency_scale=services.payment_latency_scale,
        )

    def discover_service(
        self,
        service_name: str,
        default_host: str,
        default_port: int,
        env_host_key: Optional[str] = None,
        env_port_key: Optional[str] = None,
    ) -> Tuple[str, int]:
        """
        Resolve a service endpoint.

        Priority: environment variables -> defaults
        """
        host = os.getenv(env_host_key) if env_host_key else None
        port_value = os.getenv(env_port_key) if env_port_key else None

        port = default_port
        if port_value:
            try:
                port = int(port_value)
            except ValueError:
                logger.warning(f"Invalid port for {service_name}: {port_value!r}, using {default_port}")

        return host or default_host, port

    def print_config_summary(self):
        """Log the resolved configuration (secrets masked)"""
        config = self.get_service_config()
        logger.info(f"Configuration for {config.service_name} ({config.environment})")
        logger.info(f"  listen:   {config.service_host}:{config.service_port}")
        logger.info(f"  nats:     {config.nats_url} (enabled={config.nats_enabled})")
        logger.info(f"  products: {config.product_service_url}")
        logger.info(f"  orders:   {config.order_service_url}")
        logger.info(f"  email:    enabled={config.email_enabled} key={'set' if config.email_api_key else 'unset'}")
