"""Payment methods.

``settle()`` returns True when the amount was collected and False when it
was declined; the Store turns False into PaymentDeclinedError. Cash and
card settlements are simulated and always succeed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from shop.domain.exceptions import ValidationError
from shop.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class PaymentKind(Enum):
    CASH = "CASH"
    CARD = "CARD"


@dataclass(frozen=True)
class PaymentMethod:

    kind: PaymentKind
    card_number: str | None = None

    def __post_init__(self) -> None:
        if self.kind is PaymentKind.CARD:
            digits = "".join(ch for ch in self.card_number or "" if ch.isdigit())
            if len(digits) < 4:
                raise ValidationError("Card number must contain at least 4 digits")

    @staticmethod
    def cash() -> PaymentMethod:
        return PaymentMethod(PaymentKind.CASH)

    @staticmethod
    def card(number: str) -> PaymentMethod:
        return PaymentMethod(PaymentKind.CARD, number)

    @property
    def masked_number(self) -> str | None:
        if self.card_number is None:
            return None
        digits = "".join(ch for ch in self.card_number if ch.isdigit())
        return f"**** {digits[-4:]}"

    def describe(self) -> str:
        if self.kind is PaymentKind.CARD:
            return f"Card {self.masked_number}"
        return "Cash"

    def settle(self, amount: Money) -> bool:
        if self.kind is PaymentKind.CARD:
            logger.info("Card payment of %s settled on %s", amount, self.masked_number)
        else:
            logger.info("Cash payment of %s settled", amount)
        return True
