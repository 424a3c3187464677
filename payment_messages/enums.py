"""
Enumerated field values accepted by the gateway.

Using str-based enums means members can be dropped straight into a
payload (they compare equal to their wire value). Every enumerated
request field is registered in ENUM_FIELDS under its wire name so that
``validate_enum`` can check any of them the same way.
"""

from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class LookupEnum(str, Enum):
    """str enum that also resolves member names and declared aliases.

    EntryMethod('Ecommerce'), EntryMethod('ECOMMERCE') and
    EntryMethod('ecommerce') all give EntryMethod.ECOMMERCE.
    """

    @classmethod
    def aliases(cls) -> dict:
        """Extra spellings accepted for members, keyed by lower-cased alias."""
        return {}

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            value = str(value)
        key = value.strip().lower()

        for member in cls:
            if key in (member.value.lower(), member.name.lower(), member.name.replace('_', '').lower()):
                return member

        return cls.aliases().get(key)

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class EntryMethod(LookupEnum):
    ECOMMERCE       = 'Ecommerce'
    MAIL_ORDER      = 'MailOrder'
    TELEPHONE_ORDER = 'TelephoneOrder'


class RecurringIndicator(LookupEnum):
    RECURRING  = 'Recurring'
    INSTALMENT = 'Instalment'


class ApplyAvsCvcCheck(LookupEnum):
    USE_MSP_SETTING      = 'UseMSPSetting'
    FORCE                = 'Force'
    DISABLE              = 'Disable'
    FORCE_IGNORING_RULES = 'ForceIgnoringRules'


class Apply3DSecure(LookupEnum):
    USE_MSP_SETTING      = 'UseMSPSetting'
    FORCE                = 'Force'
    DISABLE              = 'Disable'
    FORCE_IGNORING_RULES = 'ForceIgnoringRules'

    @classmethod
    def aliases(cls) -> dict:
        # Numeric codes used by the older Direct protocol.
        return {
            '0': cls.USE_MSP_SETTING,
            '1': cls.FORCE,
            '2': cls.DISABLE,
            '3': cls.FORCE_IGNORING_RULES,
        }


class TransactionType(LookupEnum):
    PAYMENT  = 'Payment'
    DEFERRED = 'Deferred'


class InstructionType(LookupEnum):
    VOID    = 'void'
    ABORT   = 'abort'
    RELEASE = 'release'
    CANCEL  = 'cancel'


class CofUsage(LookupEnum):
    FIRST      = 'First'
    SUBSEQUENT = 'Subsequent'


class InitiatedType(LookupEnum):
    CIT = 'CIT'
    MIT = 'MIT'

    @classmethod
    def aliases(cls) -> dict:
        return {
            'consumerinitiated': cls.CIT,
            'customerinitiated': cls.CIT,
            'merchantinitiated': cls.MIT,
        }


class MitType(LookupEnum):
    RECURRING       = 'Recurring'
    INSTALMENT      = 'Instalment'
    UNSCHEDULED     = 'Unscheduled'
    INCREMENTAL     = 'Incremental'
    DELAYED_CHARGE  = 'DelayedCharge'
    NO_SHOW         = 'NoShow'
    REAUTHORISATION = 'Reauthorisation'
    RESUBMISSION    = 'Resubmission'


class Secure3DStatus(LookupEnum):
    """3-D Secure outcomes the gateway is known to return.

    Responses are not checked against this list; it is here for comparison.
    """
    AUTHENTICATED       = 'Authenticated'
    FORCE               = 'Force'
    NOT_CHECKED         = 'NotChecked'
    NOT_AUTHENTICATED   = 'NotAuthenticated'
    ERROR               = 'Error'
    CARD_NOT_ENROLLED   = 'CardNotEnrolled'
    ISSUER_NOT_ENROLLED = 'IssuerNotEnrolled'


ENUM_FIELDS: dict[str, type[LookupEnum]] = {
    'entryMethod': EntryMethod,
    'recurringIndicator': RecurringIndicator,
    'applyAvsCvcCheck': ApplyAvsCvcCheck,
    'apply3DSecure': Apply3DSecure,
    'transactionType': TransactionType,
    'instructionType': InstructionType,
    'cofUsage': CofUsage,
    'initiatedType': InitiatedType,
    'mitType': MitType,
}


def accepted_values(field_name: str) -> list[str]:
    """Return the canonical values accepted for an enumerated field."""
    return ENUM_FIELDS[field_name].values()


def validate_enum(field_name: str, value) -> str:
    """Return the canonical wire value of ``value`` for ``field_name``.

    Raises KeyError if the field is not enumerated, and ValidationError
    (naming the field, the value and the accepted values) if the value
    matches nothing.
    """
    enum_cls = ENUM_FIELDS[field_name]

    try:
        return enum_cls(value).value
    except ValueError:
        raise ValidationError(
            field_name,
            value,
            f'Unknown {field_name} "{value}"; require one of {", ".join(enum_cls.values())}',
            accepted=enum_cls.values(),
        ) from None
