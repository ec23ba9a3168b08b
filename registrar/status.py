"""Registration status values and the payment confirmation rule."""
from __future__ import annotations

import enum
import logging

from registrar.config import PAYMENT_CONFIRMATION_THRESHOLD

LOGGER = logging.getLogger(__name__)


class RegistrationStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


STATUS_VALUES: tuple[str, ...] = tuple(status.value for status in RegistrationStatus)


def derive_status(
    payment: int,
    requested: RegistrationStatus | str | None = None,
    threshold: int = PAYMENT_CONFIRMATION_THRESHOLD,
) -> RegistrationStatus:
    """Return the status a registration must be stored with.

    A payment above ``threshold`` always confirms the registration. Otherwise
    the requested status is kept, falling back to ``Pending``.
    """

    if payment is not None and payment > threshold:
        if requested is not None and requested != RegistrationStatus.CONFIRMED:
            LOGGER.debug("Payment %s overrides requested status %s", payment, requested)
        return RegistrationStatus.CONFIRMED
    if requested is None:
        return RegistrationStatus.PENDING
    return RegistrationStatus(requested)


__all__ = ["RegistrationStatus", "STATUS_VALUES", "derive_status"]
