"""
Email Client Component Golden Tests
"""
import pytest

from microservices.notification_service.clients import EmailClient

pytestmark = [pytest.mark.component, pytest.mark.golden, pytest.mark.asyncio]

API_URL = "https://mail.test"


def _client(http_client, enabled=True):
    return EmailClient(
        api_url=API_URL,
        api_key="re_test",
        from_email="orders@shop.test",
        enabled=enabled,
        http_client=http_client,
    )


class TestEmailClientGolden:

    async def test_plain_text_payload(self, mock_http_client):
        client = _client(mock_http_client)

        assert await client.send_email("jane@example.com", "Hi", "Body") is True

        request = mock_http_client.assert_request_made("POST", f"{API_URL}/emails")
        assert request["json"] == {
            "from": "orders@shop.test",
            "to": ["jane@example.com"],
            "subject": "Hi",
            "text": "Body",
        }

    async def test_html_payload(self, mock_http_client):
        client = _client(mock_http_client)

        await client.send_email("jane@example.com", "Hi", "<p>Body</p>", is_html=True)

        assert mock_http_client.get_last_request()["json"]["html"] == "<p>Body</p>"

    async def test_provider_error_is_false(self, mock_http_client):
        mock_http_client.set_default_response(422, {"message": "invalid from"})

        assert await _client(mock_http_client).send_email("jane@example.com", "Hi", "Body") is False

    async def test_transport_error_raises(self, mock_http_client):
        mock_http_client.set_error(ConnectionError("refused"))

        with pytest.raises(ConnectionError):
            await _client(mock_http_client).send_email("jane@example.com", "Hi", "Body")

    async def test_disabled_reports_success_without_sending(self, mock_http_client):
        client = _client(mock_http_client, enabled=False)

        assert await client.send_email("jane@example.com", "Hi", "Body") is True
        mock_http_client.assert_no_requests()
