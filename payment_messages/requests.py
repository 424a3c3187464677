"""
Outbound request messages.

A request is a frozen dataclass. ``with_*`` methods return a new request
via ``dataclasses.replace``, which runs the same validation as the
constructor, so an invalid value fails at the point it is set and the
original request is left as it was.

Usage:
    payment = Payment(
        payment_method=CardPaymentMethod(session_key, card_identifier),
        vendor_tx_code='ORDER-1001',
        amount=Amount(1999, 'GBP'),
        description='Order 1001',
        billing_address=address,
        customer=Person('Sam', 'Jones'),
    ).with_entry_method('Ecommerce')
    payload = payment.to_dict()
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from .enums import InstructionType, TransactionType, validate_enum
from .exceptions import ValidationError
from .models import Address, Amount, CardPaymentMethod, CredentialType, Person

logger = logging.getLogger(__name__)


VENDOR_TX_CODE_MAX_LENGTH = 40
DESCRIPTION_MAX_LENGTH = 100


@dataclass(frozen=True)
class Payment:
    """A payment (or deferred payment) transaction request."""

    # Field-name prefixes applied to the composed value objects.
    BILLING_ADDRESS_PREFIX = ''
    CUSTOMER_PREFIX = 'customer'
    SHIPPING_ADDRESS_PREFIX = 'shipping'
    SHIPPING_RECIPIENT_PREFIX = 'recipient'

    resource_path = 'transactions'

    payment_method: CardPaymentMethod
    vendor_tx_code: str
    amount: Amount
    description: str
    billing_address: Address
    customer: Person
    shipping_address: Address | None = field(default=None)
    shipping_recipient: Person | None = field(default=None)
    transaction_type: str = field(default=TransactionType.PAYMENT)
    entry_method: str | None = field(default=None)
    recurring_indicator: str | None = field(default=None)
    gift_aid: bool = field(default=False)
    apply_avs_cvc_check: str | None = field(default=None)
    apply_3d_secure: str | None = field(default=None)
    credential_type: CredentialType | None = field(default=None)
    referrer_id: str | None = field(default=None)

    def __post_init__(self):
        if not self.vendor_tx_code:
            raise ValidationError('vendorTxCode', self.vendor_tx_code, 'Field "vendorTxCode" is mandatory but not set.')
        if len(self.vendor_tx_code) > VENDOR_TX_CODE_MAX_LENGTH:
            raise ValidationError(
                'vendorTxCode',
                self.vendor_tx_code,
                f'vendorTxCode must be at most {VENDOR_TX_CODE_MAX_LENGTH} characters.',
            )

        if not self.description:
            raise ValidationError('description', self.description, 'Field "description" is mandatory but not set.')
        if len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                'description',
                self.description,
                f'description must be at most {DESCRIPTION_MAX_LENGTH} characters.',
            )

        for field_name, value, expected in (
            ('paymentMethod', self.payment_method, CardPaymentMethod),
            ('amount', self.amount, Amount),
            ('billingAddress', self.billing_address, Address),
            ('customer', self.customer, Person),
        ):
            if not isinstance(value, expected):
                raise ValidationError(field_name, value, f'{field_name} must be a {expected.__name__}.')

        for field_name, value, expected in (
            ('shippingAddress', self.shipping_address, Address),
            ('shippingRecipient', self.shipping_recipient, Person),
            ('credentialType', self.credential_type, CredentialType),
        ):
            if value is not None and not isinstance(value, expected):
                raise ValidationError(field_name, value, f'{field_name} must be a {expected.__name__} or None.')

        # Each request holds its own copies, prefixed for where they are sent.
        self._set('billing_address', self.billing_address.with_field_prefix(self.BILLING_ADDRESS_PREFIX))
        self._set('customer', self.customer.with_field_prefix(self.CUSTOMER_PREFIX))
        if self.shipping_address is not None:
            self._set('shipping_address', self.shipping_address.with_field_prefix(self.SHIPPING_ADDRESS_PREFIX))
        if self.shipping_recipient is not None:
            self._set('shipping_recipient', self.shipping_recipient.with_field_prefix(self.SHIPPING_RECIPIENT_PREFIX))

        self._set('transaction_type', validate_enum('transactionType', self.transaction_type))

        for attr, field_name in (
            ('entry_method', 'entryMethod'),
            ('recurring_indicator', 'recurringIndicator'),
            ('apply_avs_cvc_check', 'applyAvsCvcCheck'),
            ('apply_3d_secure', 'apply3DSecure'),
        ):
            value = getattr(self, attr)
            if value is not None:
                self._set(attr, validate_enum(field_name, value))

        self._set('gift_aid', bool(self.gift_aid))

    def _set(self, attr: str, value) -> None:
        object.__setattr__(self, attr, value)

    # ------------------------------------------------------------------ #
    # Copy-on-write mutators                                               #
    # ------------------------------------------------------------------ #

    def with_entry_method(self, entry_method) -> 'Payment':
        return dataclasses.replace(self, entry_method=entry_method)

    def with_recurring_indicator(self, recurring_indicator) -> 'Payment':
        return dataclasses.replace(self, recurring_indicator=recurring_indicator)

    def with_gift_aid(self, gift_aid) -> 'Payment':
        return dataclasses.replace(self, gift_aid=gift_aid)

    def with_apply_avs_cvc_check(self, apply_avs_cvc_check) -> 'Payment':
        return dataclasses.replace(self, apply_avs_cvc_check=apply_avs_cvc_check)

    def with_apply_3d_secure(self, apply_3d_secure) -> 'Payment':
        return dataclasses.replace(self, apply_3d_secure=apply_3d_secure)

    def with_shipping_address(self, shipping_address: Address | None) -> 'Payment':
        return dataclasses.replace(self, shipping_address=shipping_address)

    def with_shipping_recipient(self, shipping_recipient: Person | None) -> 'Payment':
        return dataclasses.replace(self, shipping_recipient=shipping_recipient)

    def with_description(self, description: str) -> 'Payment':
        return dataclasses.replace(self, description=description)

    def with_referrer_id(self, referrer_id: str | None) -> 'Payment':
        return dataclasses.replace(self, referrer_id=referrer_id)

    def with_credential_type(self, credential_type: CredentialType | None) -> 'Payment':
        return dataclasses.replace(self, credential_type=credential_type)

    # ------------------------------------------------------------------ #
    # Serialisation                                                        #
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict:
        """Return the request body, in wire field order.

        Mandatory fields are always present; optional fields only when set.
        """
        body = {
            'transactionType': self.transaction_type,
            'paymentMethod': self.payment_method.to_dict(),
            'vendorTxCode': self.vendor_tx_code,
            'amount': self.amount.value,
            'currency': self.amount.currency,
            'description': self.description,
            'billingAddress': self.billing_address.to_dict(),
        }

        # Customer names and contact details sit at the top level.
        body.update(self.customer.to_dict())

        if self.shipping_address is not None:
            shipping_details = self.shipping_address.to_dict()
            if self.shipping_recipient is not None:
                shipping_details.update(self.shipping_recipient.names_dict())
            body['shippingDetails'] = shipping_details

        if self.entry_method:
            body['entryMethod'] = self.entry_method

        if self.recurring_indicator:
            body['recurringIndicator'] = self.recurring_indicator

        if self.gift_aid:
            body['giftAid'] = True

        if self.apply_avs_cvc_check:
            body['applyAvsCvcCheck'] = self.apply_avs_cvc_check

        if self.apply_3d_secure:
            body['apply3DSecure'] = self.apply_3d_secure

        if self.credential_type is not None:
            body['credentialType'] = self.credential_type.to_dict()

        if self.referrer_id:
            body['referrerId'] = self.referrer_id

        logger.debug('Built %s request body for vendorTxCode=%s', self.transaction_type, self.vendor_tx_code)
        return body


@dataclass(frozen=True)
class Instruction:
    """An instruction against an existing transaction (void, abort, release, cancel).

    A release must say how much of the deferred amount to take.
    """
    transaction_id: str
    instruction_type: str
    amount: Amount | None = field(default=None)

    def __post_init__(self):
        if not self.transaction_id:
            raise ValidationError('transactionId', self.transaction_id, 'Field "transactionId" is mandatory but not set.')

        object.__setattr__(self, 'instruction_type', validate_enum('instructionType', self.instruction_type))

        if self.instruction_type == InstructionType.RELEASE and self.amount is None:
            raise ValidationError('amount', None, 'An amount is required for a release instruction.')

    @property
    def resource_path(self) -> str:
        return f'transactions/{self.transaction_id}/instructions'

    def to_dict(self) -> dict:
        body = {'instructionType': self.instruction_type}

        if self.amount is not None:
            body['amount'] = self.amount.value

        return body
