"""
Notification Microservice

Responsibilities:
- Consuming order lifecycle events
- Sending order emails and recording each delivery attempt
- Notification history queries
"""

from fastapi import FastAPI, HTTPException, Depends, Path, Query, status
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from core.config_manager import ConfigManager
from core.logger import setup_service_logger
from core.nats_client import get_event_bus
from .notification_service import NotificationService
from .protocols import NotificationNotFoundError, NotificationServiceError
from .models import Notification, NotificationListResponse, NotificationServiceStatus

# Initialize configuration
config_manager = ConfigManager("notification_service")
config = config_manager.get_service_config()

logger = setup_service_logger("notification_service")

# Global state
notification_service: Optional[NotificationService] = None
event_bus = None
subscriptions: List[str] = []
SERVICE_PORT = config.service_port


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global notification_service, event_bus, subscriptions

    from .factory import create_notification_service
    from .events import NotificationEventHandlers, register_event_handlers

    notification_service = await create_notification_service(config=config_manager)

    if config.nats_enabled:
        try:
            event_bus = await get_event_bus("notification_service", config=config_manager)
            handlers = NotificationEventHandlers(notification_service)
            subscriptions = await register_event_handlers(event_bus, handlers)
            logger.info(f"✅ Subscribed to {len(subscriptions)} order event queues")
        except Exception as e:
            logger.warning(f"⚠️  Failed to set up event subscriptions: {e}. Running without event consumption.")
            event_bus = None

    logger.info(f"✅ Notification Service started on port {SERVICE_PORT}")

    yield

    # Cleanup
    if event_bus:
        await event_bus.close()
        logger.info("Event bus closed")
    await notification_service.cleanup()
    await notification_service.repository.db.close()
    logger.info("Notification Service shutting down...")


app = FastAPI(
    title="Notification Service",
    description="Order notification microservice",
    version="1.0.0",
    lifespan=lifespan
)


def get_notification_service() -> NotificationService:
    """Get notification service instance"""
    if notification_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification service not initialized"
        )
    return notification_service


# ====================
# Health
# ====================

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "notification_service",
        "port": SERVICE_PORT,
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/health/detailed", response_model=NotificationServiceStatus)
async def detailed_health_check(service: NotificationService = Depends(get_notification_service)):
    """Detailed health check with database connectivity and subscriptions"""
    health_data = await service.health_check()
    return NotificationServiceStatus(
        port=SERVICE_PORT,
        database_connected=health_data["status"] == "healthy",
        email_enabled=config.email_enabled,
        subscriptions=subscriptions,
        timestamp=health_data["timestamp"]
    )


# ====================
# Notifications
# ====================

@app.get("/api/v1/notifications", response_model=NotificationListResponse)
async def list_notifications(
    limit: int = Query(50, ge=1, le=100, description="Maximum results"),
    offset: int = Query(0, ge=0, description="Offset"),
    service: NotificationService = Depends(get_notification_service)
):
    """List notifications"""
    notifications = await service.list_notifications(limit=limit, offset=offset)
    return NotificationListResponse(notifications=notifications, count=len(notifications))


@app.get("/api/v1/notifications/order/{order_id}", response_model=List[Notification])
async def get_order_notifications(
    order_id: int = Path(..., description="Order ID"),
    service: NotificationService = Depends(get_notification_service)
):
    """Notifications produced for an order"""
    return await service.get_notifications_by_order(order_id)


@app.get("/api/v1/notifications/customer/{customer_email}", response_model=List[Notification])
async def get_customer_notifications(
    customer_email: str = Path(..., description="Customer email"),
    service: NotificationService = Depends(get_notification_service)
):
    """Notifications sent to a customer"""
    return await service.get_notifications_by_customer(customer_email)


@app.get("/api/v1/notifications/{notification_id}", response_model=Notification)
async def get_notification(
    notification_id: int = Path(..., description="Notification ID"),
    service: NotificationService = Depends(get_notification_service)
):
    """Get notification details"""
    return await service.get_notification(notification_id)


# Error handlers
@app.exception_handler(NotificationNotFoundError)
async def not_found_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(NotificationServiceError)
async def service_error_handler(request, exc):
    logger.error(f"Notification service error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)}
    )


if __name__ == "__main__":
    uvicorn.run(
        "microservices.notification_service.main:app",
        host=config.service_host,
        port=SERVICE_PORT,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
