"""
Payment Microservice

Responsibilities:
- Payment method dispatch and (simulated) charging
- Payment ledger
- Marking orders PAID after a completed payment
"""

from fastapi import FastAPI, HTTPException, Depends, Path, Query, status
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from core.config_manager import ConfigManager
from core.logger import setup_service_logger
from .payment_service import PaymentService
from .protocols import (
    PaymentValidationError, PaymentProcessingError, PaymentNotFoundError, PaymentServiceError
)
from .models import Payment, ProcessPaymentRequest, PaymentListResponse, PaymentServiceStatus

# Initialize configuration
config_manager = ConfigManager("payment_service")
config = config_manager.get_service_config()

logger = setup_service_logger("payment_service")

if config.debug:
    config_manager.print_config_summary()

# Global state
payment_service: Optional[PaymentService] = None
SERVICE_PORT = config.service_port


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global payment_service

    from .factory import create_payment_service

    payment_service = await create_payment_service(config=config_manager)
    logger.info(f"✅ Payment Service started on port {SERVICE_PORT}")

    yield

    # Cleanup
    if payment_service.order_client:
        try:
            await payment_service.order_client.close()
            logger.info("Order client closed")
        except Exception as e:
            logger.error(f"Error closing order client: {e}")

    await payment_service.repository.db.close()
    logger.info("Payment Service shutting down...")


app = FastAPI(
    title="Payment Service",
    description="Payment processing and ledger microservice",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


def get_payment_service() -> PaymentService:
    """Get payment service instance"""
    if payment_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment service not initialized"
        )
    return payment_service


# ====================
# Health
# ====================

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "payment_service",
        "port": SERVICE_PORT,
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/health/detailed", response_model=PaymentServiceStatus)
async def detailed_health_check(service: PaymentService = Depends(get_payment_service)):
    """Detailed health check with database connectivity"""
    health_data = await service.health_check()
    return PaymentServiceStatus(
        port=SERVICE_PORT,
        database_connected=health_data["status"] == "healthy",
        timestamp=health_data["timestamp"]
    )


# ====================
# Payments
# ====================

@app.post("/api/v1/payments/process", response_model=Payment, status_code=status.HTTP_201_CREATED)
async def process_payment(
    request: ProcessPaymentRequest,
    service: PaymentService = Depends(get_payment_service)
):
    """Process a payment for an order"""
    return await service.process_payment(request)


@app.get("/api/v1/payments", response_model=PaymentListResponse)
async def list_payments(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: PaymentService = Depends(get_payment_service)
):
    """List payments"""
    payments = await service.list_payments(limit=limit, offset=offset)
    return PaymentListResponse(payments=payments, count=len(payments))


@app.get("/api/v1/payments/order/{order_id}", response_model=Payment)
async def get_payment_by_order(
    order_id: int = Path(..., description="Order ID"),
    service: PaymentService = Depends(get_payment_service)
):
    """Most recent payment for an order"""
    return await service.get_payment_by_order(order_id)


@app.get("/api/v1/payments/order/{order_id}/history", response_model=List[Payment])
async def get_order_payment_history(
    order_id: int = Path(..., description="Order ID"),
    service: PaymentService = Depends(get_payment_service)
):
    """All payments recorded for an order"""
    return await service.list_payments_by_order(order_id)


@app.get("/api/v1/payments/{payment_id}", response_model=Payment)
async def get_payment(
    payment_id: int = Path(..., description="Payment ID"),
    service: PaymentService = Depends(get_payment_service)
):
    """Get payment by ID"""
    return await service.get_payment(payment_id)


# ====================
# Error handlers
# ====================

@app.exception_handler(PaymentValidationError)
async def validation_error_handler(request, exc):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(PaymentProcessingError)
async def processing_error_handler(request, exc):
    content = {"detail": str(exc)}
    if exc.payment is not None:
        content["payment"] = exc.payment.model_dump(mode="json")
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content)


@app.exception_handler(PaymentNotFoundError)
async def not_found_error_handler(request, exc):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(PaymentServiceError)
async def service_error_handler(request, exc):
    logger.error(f"Payment service error: {exc}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


if __name__ == "__main__":
    uvicorn.run(
        "microservices.payment_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
