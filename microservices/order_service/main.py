"""
Order Microservice

Responsibilities:
- Order creation and lifecycle state
- Publishing order lifecycle events
- Stock adjustment on delivery
"""

from fastapi import FastAPI, HTTPException, Depends, status, Query, Path, Body
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List

from core.config_manager import ConfigManager
from core.logger import setup_service_logger
from core.nats_client import get_event_bus
from .order_service import OrderService
from .protocols import (
    OrderServiceError, OrderValidationError, OrderNotFoundError, OrderConcurrencyError
)
from .models import (
    Order, OrderCreateRequest, OrderStatusUpdateRequest, OrderPaymentRequest,
    OrderListResponse, OrderServiceStatus
)

# Initialize configuration
config_manager = ConfigManager("order_service")
config = config_manager.get_service_config()

# Setup loggers (use actual service name)
logger = setup_service_logger("order_service")


class OrderMicroservice:
    """Order microservice core class"""

    def __init__(self):
        self.order_service = None
        self.event_bus = None

    async def initialize(self, event_bus=None):
        """Initialize the microservice"""
        from .factory import create_order_service

        try:
            self.event_bus = event_bus
            self.order_service = await create_order_service(config=config_manager, event_bus=event_bus)
            logger.info("Order microservice initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize order microservice: {e}")
            raise

    async def shutdown(self):
        """Shutdown the microservice"""
        try:
            inventory_client = self.order_service.inventory_client if self.order_service else None
            if inventory_client:
                await inventory_client.drain()
                await inventory_client.close()
            if self.event_bus:
                await self.event_bus.close()
                logger.info("Event bus closed")
            if self.order_service:
                await self.order_service.repository.db.close()
            logger.info("Order microservice shutdown completed")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")


# Global microservice instance
order_microservice = OrderMicroservice()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    event_bus = None
    if config.nats_enabled:
        try:
            event_bus = await get_event_bus("order_service", config=config_manager)
            logger.info("✅ Event bus initialized successfully")
        except Exception as e:
            logger.warning(f"⚠️  Failed to initialize event bus: {e}. Continuing without event publishing.")
            event_bus = None

    await order_microservice.initialize(event_bus=event_bus)

    yield

    await order_microservice.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Order Service",
    description="Order lifecycle microservice",
    version="1.0.0",
    lifespan=lifespan
)


# Dependency injection
def get_order_service() -> OrderService:
    """Get order service instance"""
    if not order_microservice.order_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Order service not initialized"
        )
    return order_microservice.order_service


# Health check endpoints
@app.get("/health")
async def health_check():
    """Service health check"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "port": config.service_port,
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/health/detailed", response_model=OrderServiceStatus)
async def detailed_health_check(
    order_service: OrderService = Depends(get_order_service)
):
    """Detailed health check with database connectivity and publish-failure count"""
    health_data = await order_service.health_check()
    return OrderServiceStatus(
        port=config.service_port,
        database_connected=health_data["status"] == "healthy",
        event_bus_connected=health_data["event_bus"] == "connected",
        publish_failures=health_data["publish_failures"],
        timestamp=health_data["timestamp"]
    )


# Order endpoints

@app.post("/api/v1/orders", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: OrderCreateRequest,
    order_service: OrderService = Depends(get_order_service)
):
    """Create a new order (returned CONFIRMED)"""
    return await order_service.create_order(request)


@app.get("/api/v1/orders", response_model=OrderListResponse)
async def list_orders(
    limit: int = Query(50, ge=1, le=100, description="Maximum results"),
    offset: int = Query(0, ge=0, description="Offset"),
    order_service: OrderService = Depends(get_order_service)
):
    """List orders"""
    orders = await order_service.list_orders(limit=limit, offset=offset)
    return OrderListResponse(orders=orders, count=len(orders), limit=limit, offset=offset)


@app.get("/api/v1/orders/customer/{customer_email}", response_model=List[Order])
async def get_customer_orders(
    customer_email: str = Path(..., description="Customer email"),
    order_service: OrderService = Depends(get_order_service)
):
    """Get orders placed by a customer"""
    return await order_service.get_orders_by_customer(customer_email)


@app.get("/api/v1/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: int = Path(..., description="Order ID"),
    order_service: OrderService = Depends(get_order_service)
):
    """Get order details"""
    return await order_service.get_order(order_id)


@app.put("/api/v1/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: int = Path(..., description="Order ID"),
    request: OrderStatusUpdateRequest = Body(...),
    order_service: OrderService = Depends(get_order_service)
):
    """Set order status"""
    return await order_service.update_order_status(order_id, request.status)


@app.put("/api/v1/orders/{order_id}/payment", response_model=Order)
async def record_payment(
    order_id: int = Path(..., description="Order ID"),
    request: OrderPaymentRequest = Body(...),
    order_service: OrderService = Depends(get_order_service)
):
    """Record a completed payment against an order"""
    return await order_service.record_payment(order_id, request.payment_id)


# Error handlers
@app.exception_handler(OrderValidationError)
async def validation_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderNotFoundError)
async def not_found_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderConcurrencyError)
async def concurrency_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderServiceError)
async def service_error_handler(request, exc):
    logger.error(f"Order service error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)}
    )


if __name__ == "__main__":
    # Print configuration summary for debugging
    config_manager.print_config_summary()

    uvicorn.run(
        "microservices.order_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
