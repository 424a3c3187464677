"""
Inbound response messages.

Responses are built from the decoded JSON body with ``from_dict``. The
gateway is the authority on what it returns, so values are read as-is
and absent paths simply come back as None.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .enums import Secure3DStatus
from .helpers import parse_datetime, structure_get

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Secure3D:
    """3-D Secure result, plus the ACS redirect details when a challenge is needed."""
    status: str | None = field(default=None)
    acs_url: str | None = field(default=None)
    pa_req: str | None = field(default=None)

    @classmethod
    def from_dict(cls, data, fallback_to_transaction_status: bool = False) -> 'Secure3D':
        """Build from a transaction response (or a flat dict).

        Reads ``3DSecure.status``, ``acsUrl`` and ``paReq``. The top-level
        ``status`` is the transaction status, so it is only used in place of a
        missing 3-D Secure status when ``fallback_to_transaction_status`` is set.
        """
        status = structure_get(data, '3DSecure.status')

        if status is None and fallback_to_transaction_status:
            status = structure_get(data, 'status')
            if status is not None:
                logger.warning('No 3DSecure.status in response; using transaction status "%s"', status)

        return cls(
            status=status,
            acs_url=structure_get(data, 'acsUrl'),
            pa_req=structure_get(data, 'paReq'),
        )

    @property
    def known_status(self) -> Secure3DStatus | None:
        """The matching Secure3DStatus member, or None for an unlisted status."""
        if self.status is None:
            return None
        try:
            return Secure3DStatus(self.status)
        except ValueError:
            return None

    def pa_request_fields(self, term_url: str | None = None) -> dict:
        """Fields to POST to the ACS URL.

        ``md`` is always sent empty until the gateway supports it.
        ``term_url`` is where the ACS returns the customer afterwards.
        """
        fields = {
            'paReq': self.pa_req,
            'md': '',
        }

        if term_url is not None:
            fields['TermUrl'] = term_url

        return fields


@dataclass(frozen=True)
class CardIdentifierResponse:
    """A tokenised card, valid until ``expiry``."""
    card_identifier: str | None
    expiry: datetime | None
    card_type: str | None = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, 'expiry', parse_datetime(self.expiry, 'expiry'))

    def is_expired(self, now: datetime | None = None) -> bool:
        """True if there is no expiry or it has already passed."""
        if self.expiry is None:
            return True

        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        return now >= self.expiry

    @classmethod
    def from_dict(cls, data) -> 'CardIdentifierResponse':
        return cls(
            card_identifier=structure_get(data, 'cardIdentifier'),
            expiry=structure_get(data, 'expiry'),
            card_type=structure_get(data, 'cardType'),
        )


@dataclass(frozen=True)
class PaymentResponse:
    """Result of a payment or deferred transaction request."""
    transaction_id: str | None = field(default=None)
    transaction_type: str | None = field(default=None)
    status: str | None = field(default=None)
    status_code: str | None = field(default=None)
    status_detail: str | None = field(default=None)
    retrieval_reference: int | None = field(default=None)
    bank_response_code: str | None = field(default=None)
    bank_authorisation_code: str | None = field(default=None)
    card_type: str | None = field(default=None)
    last_four_digits: str | None = field(default=None)
    expiry_date: str | None = field(default=None)
    total_amount: int | None = field(default=None)
    currency: str | None = field(default=None)
    secure_3d: Secure3D = field(default_factory=Secure3D)

    STATUS_OK = 'Ok'
    STATUS_3D_AUTH = '3DAuth'

    @property
    def is_successful(self) -> bool:
        return self.status == self.STATUS_OK

    @property
    def requires_3d_secure_redirect(self) -> bool:
        return bool(self.secure_3d.acs_url)

    @classmethod
    def from_dict(cls, data) -> 'PaymentResponse':
        response = cls(
            transaction_id=structure_get(data, 'transactionId'),
            transaction_type=structure_get(data, 'transactionType'),
            status=structure_get(data, 'status'),
            status_code=structure_get(data, 'statusCode'),
            status_detail=structure_get(data, 'statusDetail'),
            retrieval_reference=structure_get(data, 'retrievalReference'),
            bank_response_code=structure_get(data, 'bankResponseCode'),
            bank_authorisation_code=structure_get(data, 'bankAuthorisationCode'),
            card_type=structure_get(data, 'paymentMethod.card.cardType'),
            last_four_digits=structure_get(data, 'paymentMethod.card.lastFourDigits'),
            expiry_date=structure_get(data, 'paymentMethod.card.expiryDate'),
            total_amount=structure_get(data, 'amount.totalAmount'),
            currency=structure_get(data, 'currency'),
            secure_3d=Secure3D.from_dict(data),
        )
        logger.debug('Parsed %s response %s with status %s', response.transaction_type, response.transaction_id, response.status)
        return response
