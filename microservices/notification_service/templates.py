"""
Notification Templates

Fixed catalog of order notification templates, one per notification type.
Templates use ``{{variable}}`` placeholders; every type has a plain-text and an
HTML rendition sharing the same subject.
"""

import html
import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from .models import NotificationType, RenderedMessage

STORE_NAME = "E-Commerce Store"
DATE_FORMAT = "%b %d, %Y %H:%M"

_VARIABLE_PATTERN = re.compile(r'\{\{(\w+)\}\}')


def replace_template_variables(content: str, variables: Dict[str, Any]) -> str:
    """Replace ``{{name}}`` placeholders; unknown names are left untouched"""
    if not variables:
        return content

    def replace_var(match):
        var_name = match.group(1)
        return str(variables.get(var_name, match.group(0)))

    return _VARIABLE_PATTERN.sub(replace_var, content)


def format_amount(amount: Optional[Decimal]) -> str:
    if amount is None:
        return "0.00"
    return str(Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# ====================
# Plain-text catalog
# ====================

SUBJECTS: Dict[NotificationType, str] = {
    NotificationType.ORDER_CREATED: "Order Created - Order #{{order_id}}",
    NotificationType.ORDER_CONFIRMED: "Order Confirmed - Order #{{order_id}}",
    NotificationType.ORDER_PAID: "Payment Received - Order #{{order_id}}",
    NotificationType.ORDER_SHIPPED: "Order Shipped - Order #{{order_id}}",
    NotificationType.ORDER_DELIVERED: "Order Delivered - Order #{{order_id}}",
}

TEXT_BODIES: Dict[NotificationType, str] = {
    NotificationType.ORDER_CREATED: (
        "Dear {{customer_name}},\n\n"
        "Your order #{{order_id}} has been created successfully.\n\n"
        "Order Total: ${{total_amount}}\n"
        "Shipping Address: {{shipping_address}}\n\n"
        "Thank you for shopping with us!"
    ),
    NotificationType.ORDER_CONFIRMED: (
        "Dear {{customer_name}},\n\n"
        "Your order #{{order_id}} has been confirmed.\n\n"
        "We are processing your order and will notify you once it's shipped.\n\n"
        "Order Total: ${{total_amount}}"
    ),
    NotificationType.ORDER_PAID: (
        "Dear {{customer_name}},\n\n"
        "We have received your payment for order #{{order_id}}.\n\n"
        "Amount Paid: ${{total_amount}}\n"
        "Payment Method: {{payment_method}}\n\n"
        "Your order will be shipped soon!"
    ),
    NotificationType.ORDER_SHIPPED: (
        "Dear {{customer_name}},\n\n"
        "Great news! Your order #{{order_id}} has been shipped.\n\n"
        "Shipping Address: {{shipping_address}}\n\n"
        "Your order will arrive soon. Thank you for your patience!"
    ),
    NotificationType.ORDER_DELIVERED: (
        "Dear {{customer_name}},\n\n"
        "Your order #{{order_id}} has been delivered.\n\n"
        "We hope you love it! If anything is wrong with your order, please contact us.\n\n"
        "Thank you for choosing " + STORE_NAME + "!"
    ),
}


# ====================
# HTML catalog
# ====================

BASE_HTML = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f4f4f4; }
        .container { background-color: #ffffff; border-radius: 8px; padding: 30px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .header { text-align: center; padding-bottom: 20px; border-bottom: 2px solid #4CAF50; }
        .header h1 { color: #4CAF50; margin: 0; font-size: 28px; }
        .content { padding: 20px 0; }
        .order-info { background-color: #f9f9f9; padding: 15px; border-radius: 5px; margin: 15px 0; }
        .order-info p { margin: 8px 0; }
        .label { font-weight: bold; color: #555; }
        .footer { text-align: center; padding-top: 20px; border-top: 1px solid #ddd; color: #777; font-size: 12px; }
        .status-badge { display: inline-block; padding: 5px 10px; border-radius: 3px; font-weight: bold; font-size: 14px; color: white; }
        .status-created { background-color: #2196F3; }
        .status-confirmed { background-color: #FF9800; }
        .status-paid { background-color: #4CAF50; }
        .status-shipped { background-color: #9C27B0; }
        .status-delivered { background-color: #00BCD4; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>&#128722; """ + STORE_NAME + """</h1>
        </div>
        <div class="content">
{{content}}
        </div>
        <div class="footer">
            <p>This is an automated message from """ + STORE_NAME + """</p>
            <p>&copy; {{year}} """ + STORE_NAME + """. All rights reserved.</p>
            <p>If you have any questions, please contact our support team.</p>
        </div>
    </div>
</body>
</html>
"""


def _info_row(label: str, value: str) -> str:
    return f'<p><span class="label">{label}:</span> <span class="value">{value}</span></p>'


def _badge(css: str, text: str) -> str:
    return _info_row("Status", f'<span class="status-badge status-{css}">{text}</span>')


HTML_BODIES: Dict[NotificationType, str] = {
    NotificationType.ORDER_CREATED: "\n".join([
        "<h2>Order Created Successfully!</h2>",
        "<p>Dear <strong>{{customer_name}}</strong>,</p>",
        "<p>Thank you for your order! Your order has been successfully placed.</p>",
        '<div class="order-info">',
        _info_row("Order Number", "#{{order_id}}"),
        _badge("created", "ORDER CREATED"),
        _info_row("Total Amount", "${{total_amount}}"),
        _info_row("Shipping Address", "{{shipping_address}}"),
        _info_row("Order Date", "{{date}}"),
        "</div>",
        "<p>We'll send you another email once your order is confirmed and being prepared for shipment.</p>",
    ]),
    NotificationType.ORDER_CONFIRMED: "\n".join([
        "<h2>Order Confirmed!</h2>",
        "<p>Dear <strong>{{customer_name}}</strong>,</p>",
        "<p>Great news! Your order has been confirmed and is being prepared.</p>",
        '<div class="order-info">',
        _info_row("Order Number", "#{{order_id}}"),
        _badge("confirmed", "ORDER CONFIRMED"),
        _info_row("Total Amount", "${{total_amount}}"),
        "</div>",
        "<p>We'll notify you once payment is confirmed and your items are ready to ship.</p>",
    ]),
    NotificationType.ORDER_PAID: "\n".join([
        "<h2>Payment Received!</h2>",
        "<p>Dear <strong>{{customer_name}}</strong>,</p>",
        "<p>We have successfully received your payment. Thank you!</p>",
        '<div class="order-info">',
        _info_row("Order Number", "#{{order_id}}"),
        _badge("paid", "PAYMENT CONFIRMED"),
        _info_row("Amount Paid", "${{total_amount}}"),
        _info_row("Payment Method", "{{payment_method}}"),
        _info_row("Payment Date", "{{date}}"),
        "</div>",
        "<p>Your order will be shipped soon.</p>",
    ]),
    NotificationType.ORDER_SHIPPED: "\n".join([
        "<h2>Order Shipped!</h2>",
        "<p>Dear <strong>{{customer_name}}</strong>,</p>",
        "<p>Your order has been shipped and is on its way to you.</p>",
        '<div class="order-info">',
        _info_row("Order Number", "#{{order_id}}"),
        _badge("shipped", "SHIPPED"),
        _info_row("Shipping Address", "{{shipping_address}}"),
        _info_row("Shipped Date", "{{date}}"),
        "</div>",
        "<p>Your package should arrive within 3-5 business days.</p>",
    ]),
    NotificationType.ORDER_DELIVERED: "\n".join([
        "<h2>Order Delivered!</h2>",
        "<p>Dear <strong>{{customer_name}}</strong>,</p>",
        "<p>Your order has been successfully delivered. We hope you love it!</p>",
        '<div class="order-info">',
        _info_row("Order Number", "#{{order_id}}"),
        _badge("delivered", "DELIVERED"),
        _info_row("Delivered Date", "{{date}}"),
        "</div>",
        "<p>If you have any issues with your order, please don't hesitate to contact us.</p>",
    ]),
}


# ====================
# Rendering
# ====================

def build_variables(
    order_id: int,
    customer_name: str,
    total_amount: Optional[Decimal] = None,
    shipping_address: Optional[str] = None,
    payment_method: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """Template variables for one order"""
    now = now or datetime.now()
    return {
        "order_id": str(order_id),
        "customer_name": customer_name or "",
        "total_amount": format_amount(total_amount),
        "shipping_address": shipping_address or "",
        "payment_method": payment_method or "",
        "date": now.strftime(DATE_FORMAT),
        "year": str(now.year),
    }


def render_text(notification_type: NotificationType, variables: Dict[str, Any]) -> RenderedMessage:
    return RenderedMessage(
        subject=replace_template_variables(SUBJECTS[notification_type], variables),
        body=replace_template_variables(TEXT_BODIES[notification_type], variables),
        is_html=False,
    )


def render_html(notification_type: NotificationType, variables: Dict[str, Any]) -> RenderedMessage:
    """Render the HTML email; variable values are escaped"""
    escaped = {key: html.escape(str(value)) for key, value in variables.items()}
    content = replace_template_variables(HTML_BODIES[notification_type], escaped)
    body = replace_template_variables(BASE_HTML, {"content": content, "year": escaped.get("year", "")})
    return RenderedMessage(
        subject=replace_template_variables(SUBJECTS[notification_type], variables),
        body=body,
        is_html=True,
    )


def render(notification_type: NotificationType, variables: Dict[str, Any], as_html: bool = False) -> RenderedMessage:
    if as_html:
        return render_html(notification_type, variables)
    return render_text(notification_type, variables)
