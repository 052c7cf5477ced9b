# storefront_api/services/email_templates.py
"""
HTML email bodies sent through the notifier.

Every interpolated value goes through ``html.escape``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from html import escape
from typing import Optional, Sequence

STORE_NAME = "Apple Treats"
CURRENCY_SYMBOL = "₵"

_FONT = "font-family: 'Roboto', Arial, sans-serif;"
_BRAND = "#014086"


@dataclass(frozen=True)
class EmailLine:
    name: str
    quantity: int
    price: Decimal
    selected_options: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class EmailAddress:
    address: str
    city: str
    region: str
    zip_code: str
    country: str


@dataclass(frozen=True)
class OrderEmail:
    order_id: str
    customer_name: str
    customer_email: str
    date: str
    items: Sequence[EmailLine]
    subtotal: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal
    shipping_address: EmailAddress


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


def format_date(value: Optional[datetime]) -> str:
    """``Oct 19, 2026`` style date, or an empty string."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def format_money(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def _item_row(item: EmailLine) -> str:
    options = ""
    if item.selected_options:
        joined = " · ".join(escape(opt) for opt in item.selected_options)
        options = f'<br/><span style="font-size: 12px; color: #888;">{joined}</span>'
    cell = f"padding: 14px 16px; border-bottom: 1px solid #f0f0f0; {_FONT}"
    return (
        "<tr>"
        f'<td style="{cell} font-size: 14px; color: #333;">{escape(item.name)}{options}</td>'
        f'<td style="{cell} font-size: 13px; color: #888;">{item.quantity}</td>'
        f'<td style="{cell} font-size: 14px; color: #1a1a1a; font-weight: 500; text-align: right;">'
        f"{escape(format_money(item.price * item.quantity))}</td>"
        "</tr>"
    )


def _summary_row(label: str, amount: Decimal) -> str:
    cell = f"padding: 10px 16px; font-size: 14px; color: #666; border-bottom: 1px solid #f0f0f0; {_FONT}"
    return (
        "<tr>"
        f'<td style="{cell}">{label}</td>'
        f'<td style="{cell} text-align: right;">{escape(format_money(amount))}</td>'
        "</tr>"
    )


def build_order_confirmation_email(order: OrderEmail) -> RenderedEmail:
    """
    Invoice-style confirmation: header with order code and date, greeting,
    shipping block, line items and the totals table.
    """
    code = escape(order.order_id)
    name = escape(order.customer_name)
    addr = order.shipping_address
    item_rows = "".join(_item_row(item) for item in order.items)
    summary_rows = "".join(
        [
            _summary_row("Subtotal", order.subtotal),
            _summary_row("Shipping", order.shipping_cost),
            _summary_row("Tax", order.tax),
        ]
    )
    th = (
        "font-size: 10px; text-transform: uppercase; letter-spacing: 1.5px; color: #ffffff; "
        f"font-weight: 700; padding: 12px 16px; background-color: {_BRAND}; {_FONT}"
    )
    total_cell = (
        "padding: 14px 16px; font-size: 18px; font-weight: 900; color: #ffffff; "
        f"background-color: {_BRAND}; {_FONT}"
    )

    html = f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Order Confirmation - {code}</title>
</head>
<body style="margin: 0; padding: 0; background-color: #f5f5f7; {_FONT}">
<table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="background-color: #f5f5f7;">
<tr><td align="center" style="padding: 40px 16px;">
<table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="max-width: 640px; background: #ffffff; border: 1px solid #e0e0e0;">
    <tr>
        <td style="background-color: {_BRAND}; padding: 32px 36px;">
            <table role="presentation" width="100%" cellpadding="0" cellspacing="0"><tr>
                <td>
                    <div style="font-size: 24px; font-weight: 900; color: #ffffff; text-transform: uppercase; {_FONT}">{STORE_NAME}</div>
                    <div style="font-size: 11px; color: rgba(255,255,255,0.7); margin-top: 4px; text-transform: uppercase; {_FONT}">Premium Apple Products</div>
                </td>
                <td style="text-align: right; vertical-align: top;">
                    <div style="font-size: 11px; text-transform: uppercase; letter-spacing: 3px; color: rgba(255,255,255,0.8); {_FONT}">Invoice</div>
                    <div style="font-size: 16px; font-weight: 700; color: #ffffff; font-family: 'Roboto Mono', monospace;">{code}</div>
                    <div style="font-size: 13px; color: rgba(255,255,255,0.75); margin-top: 4px; {_FONT}">{escape(order.date)}</div>
                </td>
            </tr></table>
        </td>
    </tr>
    <tr>
        <td style="padding: 32px 36px 0;">
            <p style="font-size: 16px; color: #1a1a1a; margin: 0 0 8px; font-weight: 500; {_FONT}">Hi {name},</p>
            <p style="font-size: 14px; color: #666; margin: 0; line-height: 1.6; {_FONT}">Thank you for your order! Here's your confirmation and invoice.</p>
        </td>
    </tr>
    <tr>
        <td style="padding: 28px 36px;">
            <table role="presentation" width="100%" cellpadding="0" cellspacing="0"><tr>
                <td style="vertical-align: top; width: 50%;">
                    <div style="font-size: 10px; text-transform: uppercase; color: {_BRAND}; font-weight: 700; margin-bottom: 10px; {_FONT}">Shipping To</div>
                    <p style="font-size: 14px; line-height: 1.7; color: #444; margin: 0; {_FONT}">
                        <strong style="color: #1a1a1a; font-weight: 500;">{name}</strong><br />
                        {escape(addr.address)}<br />
                        {escape(addr.city)}, {escape(addr.region)} {escape(addr.zip_code)}<br />
                        {escape(addr.country)}
                    </p>
                </td>
                <td style="vertical-align: top; text-align: right;">
                    <div style="font-size: 10px; text-transform: uppercase; color: {_BRAND}; font-weight: 700; margin-bottom: 10px; {_FONT}">Payment</div>
                    <span style="display: inline-block; padding: 4px 14px; font-size: 11px; font-weight: 700; text-transform: uppercase; background: #dcfce7; color: #15803d; border: 1px solid #bbf7d0; {_FONT}">Paid</span>
                </td>
            </tr></table>
        </td>
    </tr>
    <tr>
        <td style="padding: 0 36px;">
            <table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="border: 1px solid #e0e0e0; border-collapse: collapse;">
                <thead><tr>
                    <th style="text-align: left; {th}">Item</th>
                    <th style="text-align: left; {th}">Qty</th>
                    <th style="text-align: right; {th}">Amount</th>
                </tr></thead>
                <tbody>
                    {item_rows}
                </tbody>
            </table>
        </td>
    </tr>
    <tr>
        <td style="padding: 24px 36px;">
            <table role="presentation" cellpadding="0" cellspacing="0" style="margin-left: auto; width: 260px; border: 1px solid #e0e0e0; border-collapse: collapse;">
                {summary_rows}
                <tr>
                    <td style="{total_cell}">Total</td>
                    <td style="{total_cell} text-align: right;">{escape(format_money(order.total))}</td>
                </tr>
            </table>
        </td>
    </tr>
    <tr>
        <td style="background-color: #f5f5f7; padding: 24px 36px; text-align: center; border-top: 1px solid #e0e0e0;">
            <p style="font-size: 13px; color: #888; margin: 0; {_FONT}">Thank you for shopping with <strong style="color: {_BRAND};">{STORE_NAME}</strong>.</p>
        </td>
    </tr>
</table>
</td></tr>
</table>
</body>
</html>"""

    subject = f"Order Confirmed — {order.order_id} | {STORE_NAME}"
    return RenderedEmail(subject=subject, html=html)


__all__ = [
    "EmailLine",
    "EmailAddress",
    "OrderEmail",
    "RenderedEmail",
    "format_date",
    "format_money",
    "build_order_confirmation_email",
]
