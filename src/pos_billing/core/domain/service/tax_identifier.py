"""GSTIN structural validation and decomposition.

Layout of the 15 characters (``22AAAAA0000A1Z5``)::

    [0:2]   state code
    [2:12]  PAN of the registered entity (5 letters, 4 digits, 1 letter)
    [12]    entity number for the same PAN, 1-9 then A-Z
    [13]    always "Z"
    [14]    check character

Only the shape is checked; the check character is not verified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from returns.result import Failure, Result, Success

from pos_billing.core.domain.model.errors import ValidationError

GSTIN_LENGTH = 15
UNKNOWN_REGION = "Unknown"

_GSTIN_RE = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]")

REGION_NAMES: dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "26": "Dadra and Nagar Haveli and Daman and Diu",
    "27": "Maharashtra",
    "28": "Andhra Pradesh (old)",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
}


@dataclass(frozen=True)
class TaxIdentifier:
    value: str
    region_code: str
    region_name: str
    identity_number: str
    entity_code: str
    check_char: str


def validate(identifier: Any) -> bool:
    if not isinstance(identifier, str) or len(identifier) != GSTIN_LENGTH:
        return False
    return _GSTIN_RE.fullmatch(identifier) is not None


def extract_region_code(identifier: Any) -> str | None:
    if not isinstance(identifier, str) or len(identifier) < 2:
        return None
    return identifier[:2]


def extract_identity_number(identifier: Any) -> str | None:
    if not isinstance(identifier, str) or len(identifier) < 12:
        return None
    return identifier[2:12]


def region_name(code: Any) -> str:
    if not isinstance(code, str):
        return UNKNOWN_REGION
    return REGION_NAMES.get(code, UNKNOWN_REGION)


def normalize(raw: str) -> str:
    """Form input is accepted in any case and with stray whitespace."""
    return raw.strip().upper()


def parse(identifier: Any) -> Result[TaxIdentifier, ValidationError]:
    if not validate(identifier):
        return Failure(ValidationError("invalid GSTIN format", field="tax_id"))

    code = identifier[:2]
    return Success(
        TaxIdentifier(
            value=identifier,
            region_code=code,
            region_name=region_name(code),
            identity_number=identifier[2:12],
            entity_code=identifier[12],
            check_char=identifier[14],
        )
    )
