"""Input schemas for identity and web experience profile tools."""

from domains.common import NO_ARGUMENTS, URL
from shared.schema import boolean, closed_object, integer, string

PROFILE_ID = string(min_length=1)

FLOW_CONFIG = closed_object({
    "landing_page_type": string(enum=["billing", "login"]),
    "bank_txn_pending_url": URL,
    "user_action": string(enum=["commit", "continue"]),
    "return_uri_http_method": string(enum=["GET", "POST"]),
})

INPUT_FIELDS = closed_object({
    "allow_note": boolean(),
    "no_shipping": integer(minimum=0, maximum=2),
    "address_override": integer(minimum=0, maximum=1),
})

PRESENTATION = closed_object({
    "brand_name": string(max_length=127),
    "logo_image": URL,
    "locale_code": string(pattern=r"^[a-z]{2}[-_][A-Z]{2}$"),
    "return_url_label": string(max_length=50),
    "note_to_seller_label": string(max_length=50),
})

GET_USERINFO = NO_ARGUMENTS

CREATE_WEB_PROFILE = closed_object(
    {
        "name": string(min_length=1, max_length=50),
        "temporary": boolean(),
        "flow_config": FLOW_CONFIG,
        "input_fields": INPUT_FIELDS,
        "presentation": PRESENTATION,
    },
    ["name"],
)

GET_WEB_PROFILES = NO_ARGUMENTS

GET_WEB_PROFILE = closed_object({"profile_id": PROFILE_ID}, ["profile_id"])

UPDATE_WEB_PROFILE = closed_object(
    {
        "profile_id": PROFILE_ID,
        "name": string(min_length=1, max_length=50),
        "flow_config": FLOW_CONFIG,
        "input_fields": INPUT_FIELDS,
        "presentation": PRESENTATION,
    },
    ["profile_id"],
)

DELETE_WEB_PROFILE = closed_object({"profile_id": PROFILE_ID}, ["profile_id"])
