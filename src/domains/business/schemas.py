"""Input schemas for business tools."""

from domains.common import ADDRESS, AMOUNT, CURRENCY_CODE, DATE_TIME, DECIMAL_VALUE, EMAIL, URL
from shared.schema import array, boolean, closed_object, number, string

PRODUCT_CATEGORIES = [
    "ACCOMMODATION", "ACCESSORIES", "APPAREL", "ART", "AUTOMOTIVE", "BABY",
    "BOOKS", "COLLECTIBLES", "COMPUTER", "CRAFTS", "ELECTRONICS",
    "ENTERTAINMENT", "FITNESS", "FOOD", "FURNITURE", "GIFT_CARDS", "HEALTH",
    "HOME", "JEWELRY", "MERCHANDISE", "MUSIC", "OFFICE", "OTHER", "PETS",
    "PHOTOGRAPHY", "SERVICES", "SOFTWARE", "SPORTS", "TICKETS", "TOYS",
    "TRAVEL", "VIDEO_GAMES",
]

RECIPIENT_TYPES = ["EMAIL", "PHONE", "PAYPAL_ID"]

PAYMENT_TERMS = [
    "DUE_ON_RECEIPT", "DUE_ON_DATE_SPECIFIED", "NET_10", "NET_15", "NET_30",
    "NET_45", "NET_60", "NET_90",
]

PHONE = closed_object(
    {
        "country_code": string(),
        "national_number": string(),
        "extension_number": string(),
        "phone_type": string(enum=["FAX", "HOME", "MOBILE", "OTHER", "PAGER"]),
    },
    ["national_number"],
)

PERSON_NAME = closed_object({
    "given_name": string(max_length=140),
    "surname": string(max_length=140),
})

CREATE_PRODUCT = closed_object(
    {
        "name": string(min_length=1, max_length=127),
        "description": string(max_length=256),
        "type": string(enum=["PHYSICAL", "DIGITAL", "SERVICE"]),
        "category": string(enum=PRODUCT_CATEGORIES),
        "image_url": URL,
        "home_url": URL,
    },
    ["name", "type"],
)

CREATE_INVOICE = closed_object(
    {
        "detail": closed_object(
            {
                "invoice_number": string(max_length=25),
                "reference": string(max_length=60),
                "invoice_date": DATE_TIME,
                "currency_code": CURRENCY_CODE,
                "note": string(max_length=4000),
                "term": string(max_length=4000),
                "memo": string(max_length=4000),
                "payment_term": closed_object(
                    {
                        "term_type": string(enum=PAYMENT_TERMS),
                        "due_date": DATE_TIME,
                    },
                    ["term_type"],
                ),
            },
            ["currency_code"],
        ),
        "invoicer": closed_object({
            "name": PERSON_NAME,
            "address": ADDRESS,
            "email_address": string(format="email", max_length=260),
            "phones": array(PHONE),
            "website": string(format="uri", max_length=2048),
            "tax_id": string(max_length=100),
            "logo_url": string(format="uri", max_length=2048),
        }),
        "primary_recipients": array(
            closed_object({
                "billing_info": closed_object({
                    "name": PERSON_NAME,
                    "address": ADDRESS,
                    "email_address": string(format="email", max_length=260),
                    "phones": array(PHONE),
                }),
                "shipping_info": closed_object({
                    "name": PERSON_NAME,
                    "address": ADDRESS,
                }),
            }),
        ),
        "items": array(
            closed_object(
                {
                    "name": string(max_length=200),
                    "description": string(max_length=1000),
                    "quantity": number(positive=True),
                    "unit_amount": AMOUNT,
                    "tax": AMOUNT,
                    "discount": AMOUNT,
                    "unit_of_measure": string(max_length=20),
                },
                ["name", "quantity", "unit_amount"],
            ),
        ),
        "configuration": closed_object({
            "partial_payment": closed_object(
                {
                    "allow_partial_payment": boolean(),
                    "minimum_amount_due": AMOUNT,
                },
                ["allow_partial_payment"],
            ),
            "allow_tip": boolean(),
            "tax_calculated_after_discount": boolean(),
            "tax_inclusive": boolean(),
        }),
        "amount": closed_object({
            "breakdown": closed_object({
                "custom": closed_object(
                    {"label": string(max_length=25), "amount": AMOUNT},
                    ["label", "amount"],
                ),
                "shipping": AMOUNT,
                "discount": AMOUNT,
            }),
        }),
    },
    ["detail"],
)

# Payouts use {value, currency} amounts
PAYOUT_AMOUNT = closed_object(
    {"value": DECIMAL_VALUE, "currency": CURRENCY_CODE},
    ["value", "currency"],
)

CREATE_PAYOUT = closed_object(
    {
        "sender_batch_header": closed_object(
            {
                "sender_batch_id": string(max_length=50),
                "email_subject": string(max_length=255),
                "email_message": string(max_length=1000),
                "recipient_type": string(enum=RECIPIENT_TYPES),
            },
            ["sender_batch_id"],
        ),
        "items": array(
            closed_object(
                {
                    "recipient_type": string(enum=RECIPIENT_TYPES),
                    "amount": PAYOUT_AMOUNT,
                    "note": string(max_length=1000),
                    "receiver": string(max_length=127),
                    "sender_item_id": string(max_length=50),
                },
                ["amount", "receiver"],
            ),
            min_items=1,
        ),
    },
    ["sender_batch_header", "items"],
)

GET_PRODUCT = closed_object({"product_id": string(min_length=1)}, ["product_id"])

GET_INVOICE = closed_object({"invoice_id": string(min_length=1)}, ["invoice_id"])
