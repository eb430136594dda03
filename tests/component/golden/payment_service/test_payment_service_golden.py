"""
Payment Service Component Golden Tests

PaymentService with an in-memory ledger and zero simulated latency.

Usage:
    pytest tests/component/golden/payment_service -v
"""
from decimal import Decimal

import pytest

from microservices.payment_service.payment_service import PaymentService
from microservices.payment_service.models import PaymentMethod, PaymentStatus, ProcessPaymentRequest
from microservices.payment_service.processors import build_processors
from microservices.payment_service.protocols import (
    PaymentNotFoundError,
    PaymentProcessingError,
    UnsupportedPaymentMethodError,
    InvalidPaymentDetailsError,
)
from .mocks import MockPaymentRepository, MockOrderClient

pytestmark = [pytest.mark.component, pytest.mark.golden, pytest.mark.asyncio]


@pytest.fixture
def mock_repo():
    return MockPaymentRepository()


@pytest.fixture
def mock_order_client():
    return MockOrderClient()


@pytest.fixture
def service(mock_repo, mock_order_client):
    return PaymentService(repository=mock_repo, order_client=mock_order_client, latency_scale=0)


def _request(method="CREDIT_CARD", details="4111111111111111", amount="24.98", order_id=1):
    return ProcessPaymentRequest(
        order_id=order_id,
        amount=Decimal(amount),
        payment_method=method,
        payment_details=details,
    )


class _ExplodingProcessor:
    """Processor whose gateway call fails"""

    def __init__(self, method):
        self.method = method

    def validate(self, details):
        return True

    def process(self, amount, order_id, details):
        raise RuntimeError("gateway timeout")


# =============================================================================
# PaymentService.process_payment()
# =============================================================================

class TestProcessPaymentGolden:

    async def test_credit_card_completes(self, service, mock_repo):
        payment = await service.process_payment(_request())

        assert payment.status == PaymentStatus.COMPLETED
        assert payment.method == PaymentMethod.CREDIT_CARD
        assert payment.amount == Decimal("24.98")
        assert payment.card_last_four_digits == "1111"
        assert payment.transaction_id.startswith("CC-")
        assert len(payment.transaction_id) == len("CC-") + 8
        assert len(mock_repo.payments) == 1

    @pytest.mark.parametrize("method,details,prefix", [
        ("PAYPAL", "buyer@example.com", "PP-"),
        ("BANK_TRANSFER", "12345678901234", "BT-"),
        ("CASH_ON_DELIVERY", None, "COD-"),
    ])
    async def test_other_methods_complete(self, service, method, details, prefix):
        payment = await service.process_payment(_request(method=method, details=details))

        assert payment.status == PaymentStatus.COMPLETED
        assert payment.transaction_id.startswith(prefix)
        assert payment.card_last_four_digits is None

    async def test_method_name_is_case_insensitive(self, service):
        payment = await service.process_payment(_request(method="credit_card"))
        assert payment.method == PaymentMethod.CREDIT_CARD

    async def test_unsupported_method_records_nothing(self, service, mock_repo):
        with pytest.raises(UnsupportedPaymentMethodError):
            await service.process_payment(_request(method="BITCOIN"))

        assert mock_repo.payments == {}

    async def test_invalid_details_leave_failed_entry(self, service, mock_repo, mock_order_client):
        with pytest.raises(PaymentProcessingError) as exc_info:
            await service.process_payment(_request(details="4111-1111"))

        assert isinstance(exc_info.value.__cause__, InvalidPaymentDetailsError)
        assert exc_info.value.payment.status == PaymentStatus.FAILED
        assert [p.status for p in mock_repo.payments.values()] == [PaymentStatus.FAILED]
        assert mock_order_client.recorded == []

    async def test_non_ascii_card_digits_fail(self, service, mock_repo):
        with pytest.raises(PaymentProcessingError):
            await service.process_payment(_request(details="٤١١١" * 4))

        payment = mock_repo.payments[1]
        assert payment.status == PaymentStatus.FAILED
        assert payment.transaction_id is None
        assert payment.card_last_four_digits is None

    async def test_missing_card_number_fails(self, service, mock_repo):
        with pytest.raises(PaymentProcessingError):
            await service.process_payment(_request(details=None))

        assert mock_repo.payments[1].status == PaymentStatus.FAILED

    async def test_processor_exception_leaves_failed_entry(self, mock_repo):
        processors = build_processors(latency_scale=0)
        processors[PaymentMethod.CREDIT_CARD] = _ExplodingProcessor(PaymentMethod.CREDIT_CARD)
        service = PaymentService(repository=mock_repo, processors=processors)

        with pytest.raises(PaymentProcessingError, match="gateway timeout"):
            await service.process_payment(_request())

        payment = mock_repo.payments[1]
        assert payment.status == PaymentStatus.FAILED
        assert payment.transaction_id is None

    async def test_recorded_processing_before_charge(self, service, mock_repo):
        await service.process_payment(_request())

        create_call = mock_repo._call_log[0]
        assert create_call["method"] == "create_payment"
        assert create_call["kwargs"]["status"] == PaymentStatus.PROCESSING

    async def test_ledger_entry_records_payment_method(self, service, mock_repo):
        await service.process_payment(_request())

        create_call = mock_repo._call_log[0]
        assert create_call["kwargs"]["method"] == PaymentMethod.CREDIT_CARD
        assert mock_repo.get_call_count("create_payment") == 1
        assert mock_repo.get_call_count("update_payment") == 1

    async def test_completed_payment_is_handed_to_order_service(self, service, mock_order_client):
        payment = await service.process_payment(_request(order_id=9))

        assert mock_order_client.recorded == [{"order_id": 9, "payment_id": payment.id}]

    async def test_order_hand_off_failure_keeps_payment_completed(self, service, mock_order_client):
        mock_order_client.set_error(ConnectionError("order service down"))

        payment = await service.process_payment(_request())

        assert payment.status == PaymentStatus.COMPLETED

    async def test_order_rejection_keeps_payment_completed(self, service, mock_order_client):
        mock_order_client.set_result(None)

        payment = await service.process_payment(_request())

        assert payment.status == PaymentStatus.COMPLETED

    async def test_no_order_client(self, mock_repo):
        service = PaymentService(repository=mock_repo, latency_scale=0)
        payment = await service.process_payment(_request())
        assert payment.status == PaymentStatus.COMPLETED


# =============================================================================
# Queries
# =============================================================================

class TestPaymentQueriesGolden:

    async def test_get_payment(self, service):
        created = await service.process_payment(_request())
        assert (await service.get_payment(created.id)).id == created.id

    async def test_get_missing_payment(self, service):
        with pytest.raises(PaymentNotFoundError):
            await service.get_payment(123)

    async def test_payment_by_order_is_most_recent(self, service):
        with pytest.raises(PaymentProcessingError):
            await service.process_payment(_request(details="bad"))
        retry = await service.process_payment(_request())

        latest = await service.get_payment_by_order(1)
        history = await service.list_payments_by_order(1)

        assert latest.id == retry.id
        assert [p.status for p in history] == [PaymentStatus.COMPLETED, PaymentStatus.FAILED]

    async def test_payment_by_order_without_payments(self, service):
        with pytest.raises(PaymentNotFoundError):
            await service.get_payment_by_order(1)

    async def test_health(self, service, mock_repo):
        assert (await service.health_check())["status"] == "healthy"
        mock_repo.set_error(ConnectionError("db down"))
        assert (await service.health_check())["status"] == "unhealthy"
