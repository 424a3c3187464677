"""Shared test fixtures."""
import pytest

from payment_messages.models import Address, Amount, CardPaymentMethod, Person
from payment_messages.requests import Payment


@pytest.fixture
def uk_address():
    return Address('221B Baker St', '', 'London', 'NW16XE', 'GB', '')


@pytest.fixture
def us_address():
    return Address('1 Infinite Loop', 'Building 2', 'Cupertino', '95014', 'US', 'CA')


@pytest.fixture
def customer():
    return Person('Jane', 'Doe', email='jane.doe@example.com', phone='0207 946 0000')


@pytest.fixture
def recipient():
    return Person('John', 'Smith', email='john@example.com')


@pytest.fixture
def card():
    return CardPaymentMethod('M1E996F5-A9BC-41FE-B088-E5B73DB94277', 'C6F92981-8C2D-457A-AA1E-16EBCD6D3AC6')


@pytest.fixture
def payment(card, uk_address, customer):
    return Payment(
        payment_method=card,
        vendor_tx_code='ORDER-1001',
        amount=Amount(1999, 'GBP'),
        description='Order 1001',
        billing_address=uk_address,
        customer=customer,
    )
