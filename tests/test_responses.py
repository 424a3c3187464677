"""Tests for parsing gateway responses."""
import logging
from datetime import datetime, timedelta, timezone

import pytest

from payment_messages.enums import Secure3DStatus
from payment_messages.exceptions import ValidationError
from payment_messages.responses import CardIdentifierResponse, PaymentResponse, Secure3D


PAYMENT_RESPONSE = {
    'transactionId': 'T6569400-1516-0A3F-E3FA-7F222CC79221',
    'transactionType': 'Payment',
    'status': 'Ok',
    'statusCode': '0000',
    'statusDetail': 'The Authorisation was Successful.',
    'retrievalReference': 13371693,
    'bankResponseCode': '00',
    'bankAuthorisationCode': '999777',
    'paymentMethod': {
        'card': {
            'cardType': 'Visa',
            'lastFourDigits': '0006',
            'expiryDate': '0330',
        },
    },
    'amount': {'totalAmount': 1999, 'saleAmount': 1999, 'surchargeAmount': 0},
    'currency': 'GBP',
    '3DSecure': {'status': 'Authenticated'},
}


class TestSecure3D:
    def test_pa_request_fields(self):
        secure = Secure3D.from_dict({
            '3DSecure': {'status': 'Authenticated'},
            'acsUrl': 'https://acs.example',
            'paReq': 'abc',
        })
        assert secure.status == 'Authenticated'
        assert secure.acs_url == 'https://acs.example'
        assert secure.pa_request_fields('https://return.example') == {
            'paReq': 'abc',
            'md': '',
            'TermUrl': 'https://return.example',
        }

    def test_pa_request_fields_without_term_url(self):
        secure = Secure3D('Force', 'https://acs.example', 'abc')
        assert secure.pa_request_fields() == {'paReq': 'abc', 'md': ''}
        assert secure.pa_request_fields() == secure.pa_request_fields()

    def test_status_not_validated(self):
        assert Secure3D.from_dict({'3DSecure': {'status': 'SomethingNew'}}).status == 'SomethingNew'

    def test_known_status(self):
        assert Secure3D('NotChecked').known_status is Secure3DStatus.NOT_CHECKED
        assert Secure3D('SomethingNew').known_status is None
        assert Secure3D().known_status is None

    def test_no_fallback_by_default(self):
        assert Secure3D.from_dict({'status': 'Ok'}).status is None

    def test_fallback_to_transaction_status(self, caplog):
        with caplog.at_level(logging.WARNING, logger='payment_messages.responses'):
            secure = Secure3D.from_dict({'status': '3DAuth'}, fallback_to_transaction_status=True)
        assert secure.status == '3DAuth'
        assert 'transaction status' in caplog.text

    def test_nested_status_wins_over_fallback(self):
        data = {'status': 'Ok', '3DSecure': {'status': 'Authenticated'}}
        assert Secure3D.from_dict(data, fallback_to_transaction_status=True).status == 'Authenticated'


class TestCardIdentifierResponse:
    def test_from_dict(self):
        response = CardIdentifierResponse.from_dict({
            'cardIdentifier': 'C6F92981-8C2D-457A-AA1E-16EBCD6D3AC6',
            'expiry': '2015-08-11T11:45:16.285+01:00',
            'cardType': 'Visa',
        })
        assert response.card_identifier == 'C6F92981-8C2D-457A-AA1E-16EBCD6D3AC6'
        assert response.card_type == 'Visa'
        assert response.expiry == datetime(2015, 8, 11, 10, 45, 16, 285000, tzinfo=timezone.utc)

    def test_expired_when_in_past(self):
        past = (datetime.now(timezone.utc) - timedelta(minutes=5)).isoformat()
        assert CardIdentifierResponse('cid', past, 'Visa').is_expired()

    def test_not_expired_when_in_future(self):
        future = datetime.now(timezone.utc) + timedelta(minutes=5)
        assert not CardIdentifierResponse('cid', future, 'Visa').is_expired()

    def test_expired_when_absent(self):
        assert CardIdentifierResponse.from_dict({'cardIdentifier': 'cid'}).is_expired()

    def test_explicit_now(self):
        response = CardIdentifierResponse('cid', '2030-01-01T12:00:00Z')
        assert not response.is_expired(datetime(2030, 1, 1, 11, 59))
        assert response.is_expired(datetime(2030, 1, 1, 12, 0, 1, tzinfo=timezone.utc))

    def test_unparseable_expiry(self):
        with pytest.raises(ValidationError) as exc:
            CardIdentifierResponse('cid', 'soon')
        assert exc.value.field == 'expiry'


class TestPaymentResponse:
    def test_from_dict(self):
        response = PaymentResponse.from_dict(PAYMENT_RESPONSE)
        assert response.transaction_id == 'T6569400-1516-0A3F-E3FA-7F222CC79221'
        assert response.transaction_type == 'Payment'
        assert response.status_code == '0000'
        assert response.retrieval_reference == 13371693
        assert response.bank_authorisation_code == '999777'
        assert response.card_type == 'Visa'
        assert response.last_four_digits == '0006'
        assert response.expiry_date == '0330'
        assert response.total_amount == 1999
        assert response.currency == 'GBP'
        assert response.secure_3d.status == 'Authenticated'
        assert response.is_successful
        assert not response.requires_3d_secure_redirect

    def test_3d_secure_redirect(self):
        response = PaymentResponse.from_dict({
            'statusCode': '2007',
            'statusDetail': 'Please redirect your customer to the ACSURL to complete the 3DS Transaction',
            'transactionId': 'T1',
            'acsUrl': 'https://acs.example/pareq',
            'paReq': 'eJxVUtt',
            'status': '3DAuth',
        })
        assert response.requires_3d_secure_redirect
        assert not response.is_successful
        assert response.secure_3d.status is None
        assert response.secure_3d.pa_request_fields('https://shop.example/3ds')['paReq'] == 'eJxVUtt'

    def test_missing_everything(self):
        response = PaymentResponse.from_dict({})
        assert response.transaction_id is None
        assert response.card_type is None
        assert response.secure_3d == Secure3D()
