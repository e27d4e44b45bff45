"""
Pricing error taxonomy
"""

from enum import Enum
from typing import Dict


class PricingErrorKind(str, Enum):
    """Reasons a pricing request or promo code is rejected"""
    NO_MODALITY_SELECTED = "NoModalitySelected"
    INVALID_CODE = "InvalidCode"
    NOT_YET_VALID_CODE = "NotYetValidCode"
    EXPIRED_CODE = "ExpiredCode"
    EXHAUSTED_CODE = "ExhaustedCode"
    RESTRICTED_TO_NEW_MEMBERS = "RestrictedToNewMembers"
    INVALID_OVERRIDE = "InvalidOverride"


ERROR_MESSAGES: Dict[PricingErrorKind, str] = {
    PricingErrorKind.NO_MODALITY_SELECTED: "Select at least one modality",
    PricingErrorKind.INVALID_CODE: "Invalid promo code",
    PricingErrorKind.NOT_YET_VALID_CODE: "Promo code is not valid yet",
    PricingErrorKind.EXPIRED_CODE: "Promo code has expired",
    PricingErrorKind.EXHAUSTED_CODE: "Promo code has no uses left",
    PricingErrorKind.RESTRICTED_TO_NEW_MEMBERS: "Promo code is only for new members",
    PricingErrorKind.INVALID_OVERRIDE: "Plan price override is invalid",
}


def error_message(kind: PricingErrorKind) -> str:
    """Human-readable message for an error kind"""
    return ERROR_MESSAGES[kind]
