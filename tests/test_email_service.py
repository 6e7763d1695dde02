"""
Tests for the email service facade and its factories.
"""

from unittest.mock import Mock

import pytest

from brevo_mailer.exceptions import (
    HttpTransportError,
    IncompleteDsnError,
    InvalidArgumentError,
    UnsupportedSchemeError,
)
from brevo_mailer.mime import Address, Email, SentMessage
from brevo_mailer.providers.brevo_adapter import BrevoAdapter
from brevo_mailer.providers.email_adapter import EmailAdapter
from brevo_mailer.providers.email_service import (
    EmailService,
    create_email_service,
    create_email_service_from_dsn,
)


def make_service(status_code=201, body=None):
    response = Mock(status_code=status_code, text='{}')
    response.json.return_value = body if body is not None else {'messageId': 'foobar'}
    session = Mock()
    session.post.return_value = response
    return EmailService(BrevoAdapter('ACCESS_KEY', session=session)), session


class TestSendEmail:

    def test_success(self):
        service, session = make_service()

        response = service.send_email(
            to='Bob <bob@system.com>',
            from_email='alice@system.com',
            subject='Hello',
            body='Hello Bob!',
            html_body='<p>Hello Bob!</p>',
            tags=['welcome', 'b2b'],
            template_id=12,
            params={'name': 'Bob'},
            metadata={'custom': '{"id": 1}'},
            headers={'X-Campaign': 'spring'}
        )

        assert response.success is True
        assert response.message_id == 'foobar'

        payload = session.post.call_args[1]['json']
        assert payload['to'] == [{'email': 'bob@system.com', 'name': 'Bob'}]
        assert payload['sender'] == {'email': 'alice@system.com'}
        assert payload['tags'] == ['welcome', 'b2b']
        assert payload['templateId'] == 12
        assert payload['params'] == {'name': 'Bob'}
        assert payload['headers'] == {'X-Mailin-Custom': '{"id": 1}', 'X-Campaign': 'spring'}

    def test_provider_error_is_returned_not_raised(self):
        service, _ = make_service(418, {'message': "i'm a teapot"})

        response = service.send_email(to='bob@system.com', from_email='alice@system.com', subject='Hi', body='x')

        assert response.success is False
        assert response.error == "Unable to send an email: i'm a teapot (code 418)."
        assert response.status_code == 418

    def test_missing_sender_is_returned_not_raised(self):
        service, session = make_service()

        response = service.send_email(to='bob@system.com', subject='Hi', body='x')

        assert response.success is False
        assert 'sender' in response.error
        session.post.assert_not_called()

    def test_invalid_address(self):
        service, session = make_service()

        response = service.send_email(to='not-an-address', from_email='alice@system.com', subject='Hi')

        assert response.success is False
        session.post.assert_not_called()

    def test_send_prepared_message(self):
        adapter = Mock(spec=EmailAdapter)
        adapter.get_provider_name.return_value = 'Fake'
        email = Email(from_addresses=[Address('alice@system.com')], to=[Address('bob@system.com')])
        adapter.send.return_value = SentMessage(original=email, envelope=None, message_id='id-1')

        response = EmailService(adapter).send(email)

        assert response.success is True
        assert response.message_id == 'id-1'
        adapter.send.assert_called_once_with(email, None)

    def test_send_prepared_message_failure(self):
        adapter = Mock(spec=EmailAdapter)
        adapter.get_provider_name.return_value = 'Fake'
        adapter.send.side_effect = HttpTransportError('Could not reach the remote Brevo server.')

        response = EmailService(adapter).send(Email(to=[Address('bob@system.com')]))

        assert response.success is False
        assert response.error == 'Could not reach the remote Brevo server.'
        assert response.status_code is None


class TestFactories:

    def test_create_from_config(self):
        service = create_email_service({'brevo_key': 'KEY', 'brevo_host': 'example.com', 'brevo_port': 99})

        assert isinstance(service.adapter, BrevoAdapter)
        assert service.adapter.api_key == 'KEY'
        assert str(service.adapter) == 'brevo+api://example.com:99'

    def test_missing_key(self):
        with pytest.raises(InvalidArgumentError, match='API key'):
            create_email_service({'brevo_host': 'example.com'})

    def test_unknown_provider(self):
        with pytest.raises(InvalidArgumentError, match='Unsupported email provider'):
            create_email_service({'email_provider': 'pigeon', 'brevo_key': 'KEY'})

    def test_create_from_dsn_default_host(self):
        service = create_email_service_from_dsn('brevo+api://KEY@default')

        assert service.adapter.api_key == 'KEY'
        assert str(service.adapter) == 'brevo+api://api.brevo.com'

    def test_create_from_dsn_custom_host_and_port(self):
        service = create_email_service_from_dsn('brevo+api://KEY@example.com:8984')

        assert service.adapter.get_endpoint() == 'example.com:8984'

    def test_dsn_unsupported_scheme(self):
        with pytest.raises(UnsupportedSchemeError):
            create_email_service_from_dsn('sendgrid+api://KEY@default')

    def test_dsn_without_key(self):
        with pytest.raises(IncompleteDsnError):
            create_email_service_from_dsn('brevo+api://default')

    def test_register_adapter_requires_email_adapter(self):
        with pytest.raises(TypeError):
            EmailService.register_adapter('bogus', dict)

    def test_register_adapter(self, monkeypatch):
        monkeypatch.setattr(EmailService, 'ADAPTERS', dict(EmailService.ADAPTERS))

        class CustomAdapter(BrevoAdapter):
            pass

        EmailService.register_adapter('Custom', CustomAdapter)
        service = create_email_service({'email_provider': 'custom', 'brevo_key': 'KEY'})

        assert isinstance(service.adapter, CustomAdapter)
