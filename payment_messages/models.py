"""
Value objects composed into gateway requests.

Every model validates itself when it is created and is frozen afterwards.
Models that are sent under a field-name prefix (addresses and people)
hand out re-prefixed copies through ``with_field_prefix`` instead of
changing themselves.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .enums import CofUsage, InitiatedType, MitType, validate_enum
from .exceptions import ValidationError
from .helpers import prefixed_field_name, structure_get
from .lookups import is_valid_country, is_valid_currency, is_valid_state


# Currencies without minor units (no pence/cents).
ZERO_DECIMAL_CURRENCIES = {
    'BIF', 'CLP', 'DJF', 'GNF', 'JPY', 'KMF', 'KRW', 'MGA', 'PYG',
    'RWF', 'VND', 'VUV', 'XAF', 'XOF', 'XPF'
}


class FieldPrefixed:
    """Mixin for frozen dataclasses that carry a ``field_prefix`` field."""

    field_prefix: str

    def with_field_prefix(self, field_prefix: str | None):
        """Return a copy whose ``to_dict`` keys use ``field_prefix``."""
        return dataclasses.replace(self, field_prefix=field_prefix or '')

    def _name(self, field_name: str) -> str:
        return prefixed_field_name(self.field_prefix, field_name)


@dataclass(frozen=True)
class Address(FieldPrefixed):
    """Billing or shipping address.

    Rules checked on creation:
      * address1, city and country are mandatory;
      * country must be an ISO 3166-1 alpha-2 code;
      * state is mandatory (ISO 3166-2) for US and must be blank elsewhere;
      * postal code may only be left out for Ireland (IE).
    """
    address1: str
    address2: str | None = field(default=None)
    city: str | None = field(default=None)
    postal_code: str | None = field(default=None)
    country: str | None = field(default=None)
    state: str | None = field(default=None)
    field_prefix: str = field(default='')

    def __post_init__(self):
        for field_name, value in (('address1', self.address1), ('city', self.city), ('country', self.country)):
            if not value:
                raise ValidationError(field_name, value, f'Field "{field_name}" is mandatory but not set.')

        if not is_valid_country(self.country):
            raise ValidationError('country', self.country, f'Country code "{self.country}" is not recognised.')

        if self.country == 'US':
            if not self.state:
                raise ValidationError('state', self.state, 'State must be provided for US country.')
            if not is_valid_state(self.country, self.state):
                raise ValidationError(
                    'state',
                    self.state,
                    f'State code "{self.state}" for country "{self.country}" is not recognised.',
                )
        elif self.state:
            raise ValidationError('state', self.state, 'State must be left blank for non-US countries.')

        if self.country != 'IE' and not self.postal_code:
            raise ValidationError('postalCode', self.postal_code, 'Postal code is mandatory for non-IE countries.')

    def to_dict(self) -> dict:
        """Return the address fields for a payload, skipping empty optionals."""
        body = {self._name('address1'): self.address1}

        if self.address2:
            body[self._name('address2')] = self.address2

        body[self._name('city')] = self.city

        if self.postal_code:
            body[self._name('postalCode')] = self.postal_code

        body[self._name('country')] = self.country

        if self.state:
            body[self._name('state')] = self.state

        return body

    @classmethod
    def from_dict(cls, data, field_prefix: str = '') -> 'Address':
        """Build an Address from decoded data, reading names under ``field_prefix``.

        Reads address1, address2, city, postalCode, country and state;
        anything missing defaults to None (and fails validation if mandatory).
        """
        def get(name):
            return structure_get(data, prefixed_field_name(field_prefix, name))

        return cls(
            address1=get('address1'),
            address2=get('address2'),
            city=get('city'),
            postal_code=get('postalCode'),
            country=get('country'),
            state=get('state'),
        )


@dataclass(frozen=True)
class Person(FieldPrefixed):
    """A customer or shipping recipient. First and last names are required."""
    first_name: str
    last_name: str
    email: str | None = field(default=None)
    phone: str | None = field(default=None)
    field_prefix: str = field(default='')

    def __post_init__(self):
        for field_name, value in (('firstName', self.first_name), ('lastName', self.last_name)):
            if not value:
                raise ValidationError(field_name, value, f'Field "{field_name}" is mandatory but not set.')

    def names_dict(self) -> dict:
        """Only the name fields, as sent for a shipping recipient."""
        return {
            self._name('firstName'): self.first_name,
            self._name('lastName'): self.last_name,
        }

    def to_dict(self) -> dict:
        body = self.names_dict()

        if self.email:
            body[self._name('email')] = self.email

        if self.phone:
            body[self._name('phone')] = self.phone

        return body

    @classmethod
    def from_dict(cls, data, field_prefix: str = '') -> 'Person':
        def get(name):
            return structure_get(data, prefixed_field_name(field_prefix, name))

        return cls(
            first_name=get('firstName'),
            last_name=get('lastName'),
            email=get('email'),
            phone=get('phone'),
        )


@dataclass(frozen=True)
class Amount:
    """A money amount in the currency's minor unit.

    Examples:
        Amount(1234, 'GBP')            -> 12.34 GBP
        Amount.from_major('1000', 'JPY') -> Amount(1000, 'JPY')
    """
    value: int
    currency: str

    def __post_init__(self):
        if not is_valid_currency(self.currency):
            raise ValidationError('currency', self.currency, f'Currency code "{self.currency}" is not recognised.')

        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise ValidationError('amount', self.value, 'Amount must be a non-negative integer in minor units.')

    @property
    def is_zero_decimal(self) -> bool:
        return self.currency in ZERO_DECIMAL_CURRENCIES

    @classmethod
    def from_major(cls, amount_major, currency: str) -> 'Amount':
        """Convert a major-unit decimal amount into an Amount.

        Examples:
            12.34 GBP -> Amount(1234, 'GBP')
            1000 JPY  -> Amount(1000, 'JPY')
        """
        try:
            amount = Decimal(str(amount_major))
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError('amount', amount_major, f'Amount "{amount_major}" is not a number.') from None

        if not amount.is_finite():
            raise ValidationError('amount', amount_major, f'Amount "{amount_major}" is not a number.')

        if currency not in ZERO_DECIMAL_CURRENCIES:
            amount = amount * 100

        return cls(int(amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)), currency)

    def to_major(self) -> Decimal:
        if self.is_zero_decimal:
            return Decimal(self.value)
        return Decimal(self.value) / 100


@dataclass(frozen=True)
class CardPaymentMethod:
    """Card details tokenised client-side, sent as the ``paymentMethod``."""
    merchant_session_key: str
    card_identifier: str
    save: bool | None = field(default=None)
    reusable: bool | None = field(default=None)

    def __post_init__(self):
        for field_name, value in (
            ('merchantSessionKey', self.merchant_session_key),
            ('cardIdentifier', self.card_identifier),
        ):
            if not value:
                raise ValidationError(field_name, value, f'Field "{field_name}" is mandatory but not set.')

    def to_dict(self) -> dict:
        card = {
            'merchantSessionKey': self.merchant_session_key,
            'cardIdentifier': self.card_identifier,
        }

        if self.save is not None:
            card['save'] = bool(self.save)

        if self.reusable is not None:
            card['reusable'] = bool(self.reusable)

        return {'card': card}


@dataclass(frozen=True)
class CredentialType:
    """Credential-on-file details, required when storing or reusing a card.

    Use one of the ``for_*`` presets for the common cases.
    """
    cof_usage: str
    initiated_type: str
    mit_type: str | None = field(default=None)
    recurring_expiry: str | None = field(default=None)
    recurring_frequency: str | None = field(default=None)
    purchase_instal_data: str | None = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, 'cof_usage', validate_enum('cofUsage', self.cof_usage))
        object.__setattr__(self, 'initiated_type', validate_enum('initiatedType', self.initiated_type))
        if self.mit_type is not None:
            object.__setattr__(self, 'mit_type', validate_enum('mitType', self.mit_type))

    @classmethod
    def for_new_reusable_card(cls) -> 'CredentialType':
        return cls(CofUsage.FIRST, InitiatedType.CIT)

    @classmethod
    def for_customer_reusing_card(cls) -> 'CredentialType':
        return cls(CofUsage.SUBSEQUENT, InitiatedType.CIT, MitType.UNSCHEDULED)

    @classmethod
    def for_merchant_reusing_card(cls) -> 'CredentialType':
        return cls(CofUsage.SUBSEQUENT, InitiatedType.MIT, MitType.UNSCHEDULED)

    def to_dict(self) -> dict:
        body = {
            'cofUsage': self.cof_usage,
            'initiatedType': self.initiated_type,
        }

        optional = (
            ('mitType', self.mit_type),
            ('recurringExpiry', self.recurring_expiry),
            ('recurringFrequency', self.recurring_frequency),
            ('purchaseInstalData', self.purchase_instal_data),
        )
        for name, value in optional:
            if value is not None:
                body[name] = value

        return body
