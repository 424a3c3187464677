from .config import GatewaySettings
from .enums import (
    Apply3DSecure,
    ApplyAvsCvcCheck,
    CofUsage,
    EntryMethod,
    InitiatedType,
    InstructionType,
    MitType,
    RecurringIndicator,
    Secure3DStatus,
    TransactionType,
    validate_enum,
)
from .exceptions import ValidationError
from .helpers import prefixed_field_name, structure_get
from .models import Address, Amount, CardPaymentMethod, CredentialType, Person
from .requests import Instruction, Payment
from .responses import CardIdentifierResponse, PaymentResponse, Secure3D

__all__ = [
    'Address', 'Amount', 'Apply3DSecure', 'ApplyAvsCvcCheck', 'CardIdentifierResponse',
    'CardPaymentMethod', 'CofUsage', 'CredentialType', 'EntryMethod', 'GatewaySettings',
    'InitiatedType', 'Instruction', 'InstructionType', 'MitType', 'Payment', 'PaymentResponse',
    'Person', 'RecurringIndicator', 'Secure3D', 'Secure3DStatus', 'TransactionType',
    'ValidationError', 'prefixed_field_name', 'structure_get', 'validate_enum',
]
