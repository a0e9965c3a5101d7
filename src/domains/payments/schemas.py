"""Input schemas for payment tools."""

from domains.common import (
    ADDRESS,
    AMOUNT,
    APPLICATION_CONTEXT,
    CARD_NUMBER,
    CURRENCY_CODE,
    DATE_TIME,
    DECIMAL_VALUE,
    EMAIL,
    NAME,
    SECURITY_CODE,
    URL,
)
from shared.schema import array, closed_object, integer, string

CREATE_PAYMENT_TOKEN = closed_object(
    {
        "customer": closed_object({
            "id": string(),
            "email_address": EMAIL,
            "phone": closed_object(
                {
                    "phone_number": string(),
                    "phone_type": string(enum=["HOME", "WORK", "MOBILE", "OTHER"]),
                },
                ["phone_number", "phone_type"],
            ),
        }),
        "payment_source": closed_object(
            {
                "card": closed_object(
                    {
                        "number": CARD_NUMBER,
                        "expiry": string(pattern=r"^\d{4}$", description="YYMM"),
                        "name": string(),
                        "security_code": SECURITY_CODE,
                        "billing_address": ADDRESS,
                    },
                    ["number", "expiry", "name", "security_code"],
                ),
            },
            ["card"],
        ),
    },
    ["customer", "payment_source"],
)

CREATE_ORDER = closed_object(
    {
        "intent": string(enum=["CAPTURE", "AUTHORIZE"]),
        "purchase_units": array(
            closed_object(
                {
                    "reference_id": string(),
                    "description": string(),
                    "custom_id": string(),
                    "invoice_id": string(),
                    "amount": AMOUNT,
                    "payee": closed_object({
                        "email_address": EMAIL,
                        "merchant_id": string(),
                    }),
                    "shipping": closed_object(
                        {"name": NAME, "address": ADDRESS},
                        ["name", "address"],
                    ),
                },
                ["amount"],
            ),
            min_items=1,
        ),
        "payer": closed_object({
            "name": NAME,
            "email_address": EMAIL,
            "payer_id": string(),
            "address": ADDRESS,
        }),
        "application_context": APPLICATION_CONTEXT,
    },
    ["intent", "purchase_units"],
)

CAPTURE_ORDER = closed_object(
    {
        "order_id": string(min_length=1),
        "payment_source": closed_object(
            {
                "token": closed_object(
                    {"id": string(), "type": string()},
                    ["id", "type"],
                ),
            },
            ["token"],
        ),
    },
    ["order_id"],
)

# v1 payments use {total, currency} amounts
PAYMENT_AMOUNT = closed_object(
    {"total": DECIMAL_VALUE, "currency": CURRENCY_CODE},
    ["total", "currency"],
)

CREATE_PAYMENT = closed_object(
    {
        "intent": string(enum=["sale", "authorize", "order"]),
        "payer": closed_object(
            {
                "payment_method": string(enum=["paypal", "credit_card"]),
                "funding_instruments": array(
                    closed_object(
                        {
                            "credit_card": closed_object(
                                {
                                    "number": CARD_NUMBER,
                                    "type": string(),
                                    "expire_month": integer(minimum=1, maximum=12),
                                    "expire_year": integer(minimum=2000),
                                    "cvv2": SECURITY_CODE,
                                    "first_name": string(),
                                    "last_name": string(),
                                    "billing_address": ADDRESS,
                                },
                                [
                                    "number",
                                    "type",
                                    "expire_month",
                                    "expire_year",
                                    "cvv2",
                                    "first_name",
                                    "last_name",
                                ],
                            ),
                        },
                        ["credit_card"],
                    ),
                ),
            },
            ["payment_method"],
        ),
        "transactions": array(
            closed_object(
                {
                    "amount": PAYMENT_AMOUNT,
                    "description": string(),
                    "custom": string(),
                    "invoice_number": string(),
                    "item_list": closed_object({
                        "items": array(
                            closed_object(
                                {
                                    "name": string(),
                                    "sku": string(),
                                    "price": string(),
                                    "currency": CURRENCY_CODE,
                                    "quantity": integer(minimum=1),
                                },
                                ["name", "price", "currency", "quantity"],
                            ),
                        ),
                        "shipping_address": ADDRESS,
                    }),
                },
                ["amount"],
            ),
            min_items=1,
        ),
        "redirect_urls": closed_object(
            {"return_url": URL, "cancel_url": URL},
            ["return_url", "cancel_url"],
        ),
    },
    ["intent", "payer", "transactions", "redirect_urls"],
)

CREATE_SUBSCRIPTION = closed_object(
    {
        "plan_id": string(min_length=1),
        "start_time": DATE_TIME,
        "quantity": string(),
        "shipping_amount": AMOUNT,
        "subscriber": closed_object(
            {
                "name": NAME,
                "email_address": EMAIL,
                "shipping_address": ADDRESS,
            },
            ["name", "email_address"],
        ),
        "application_context": APPLICATION_CONTEXT,
    },
    ["plan_id", "subscriber"],
)
