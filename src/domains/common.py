"""Schema fragments shared by several PayPal domains."""

from shared.schema import closed_object, string

CURRENCY_CODE = string(min_length=3, max_length=3, description="ISO 4217 currency code")
DECIMAL_VALUE = string(pattern=r"^\d+\.?\d*$", description="Decimal amount, e.g. 10.00")
COUNTRY_CODE = string(min_length=2, max_length=2, description="ISO 3166-1 country code")
CARD_NUMBER = string(pattern=r"^\d{13,19}$")
SECURITY_CODE = string(pattern=r"^\d{3,4}$")
EMAIL = string(format="email")
URL = string(format="uri")
DATE_TIME = string(format="date-time")

AMOUNT = closed_object(
    {"currency_code": CURRENCY_CODE, "value": DECIMAL_VALUE},
    ["currency_code", "value"],
)

ADDRESS = closed_object(
    {
        "address_line_1": string(),
        "address_line_2": string(),
        "admin_area_1": string(),
        "admin_area_2": string(),
        "postal_code": string(),
        "country_code": COUNTRY_CODE,
    },
    ["country_code"],
)

NAME = closed_object(
    {"given_name": string(), "surname": string()},
    ["given_name"],
)

APPLICATION_CONTEXT = closed_object({
    "brand_name": string(),
    "locale": string(),
    "landing_page": string(enum=["LOGIN", "BILLING", "NO_PREFERENCE"]),
    "shipping_preference": string(
        enum=["GET_FROM_FILE", "NO_SHIPPING", "SET_PROVIDED_ADDRESS"]
    ),
    "user_action": string(enum=["CONTINUE", "PAY_NOW"]),
    "return_url": URL,
    "cancel_url": URL,
})

NO_ARGUMENTS = closed_object({})
