import hashlib
import hmac
import json

import pytest
import requests
from django.contrib.auth.models import User
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from user_dashboard.models import KycRequest, KycAuditLog
from .credentials import sign_sumsub_request
from .services import ProviderError, SumsubService


def make_image(name='selfie.png'):
    return SimpleUploadedFile(name, b'\x89PNG\r\n\x1a\nfake', content_type='image/png')


def make_pdf(name='id.pdf'):
    return SimpleUploadedFile(name, b'%PDF-1.4 fake', content_type='application/pdf')


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        return self._payload


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='kyc@example.com', email='kyc@example.com', password='Secret#123'
    )


@pytest.fixture
def signed_in_client(client, user):
    client.force_login(user)
    return client


class TestSumsubSignature:
    def test_matches_hmac_over_joined_parts(self):
        body = '{"a":1}'
        expected = hmac.new(
            b'secret', b'1700000000\nPOST\n/resources/accessTokens/sdk\n{"a":1}', hashlib.sha256
        ).hexdigest()
        assert sign_sumsub_request('secret', 1700000000, 'POST', '/resources/accessTokens/sdk', body) == expected

    @pytest.mark.django_db
    def test_body_is_compact_and_ordered(self):
        body = SumsubService.build_body('user-1', 'a@b.com', '+2348000000000', 'basic-kyc')
        assert body == (
            '{"applicantIdentifiers":{"email":"a@b.com","phone":"+2348000000000"},'
            '"ttlInSecs":600,"userId":"user-1","levelName":"basic-kyc","externalActionId":"user-1"}'
        )

    @pytest.mark.django_db
    def test_signed_headers(self, settings):
        headers = SumsubService.signed_headers('{}', ts=1700000000)
        assert headers['X-App-Token'] == settings.SUMSUB_APP_TOKEN
        assert headers['X-App-Access-Ts'] == '1700000000'
        assert headers['X-App-Access-Sig'] == sign_sumsub_request(
            settings.SUMSUB_SECRET_KEY, 1700000000, 'POST', '/resources/accessTokens/sdk', '{}'
        )


@pytest.mark.django_db
class TestSumsubTokenView:
    payload = {
        'externalUserId': 'user-1',
        'email': 'a@b.com',
        'phone': '+2348000000000',
        'levelName': 'basic-kyc',
    }

    def post(self, client, data):
        return client.post(
            reverse('kyc_integration:sumsub_token'),
            data=json.dumps(data),
            content_type='application/json',
        )

    def test_requires_login(self, client):
        response = self.post(client, self.payload)
        assert response.status_code == 401

    def test_missing_fields(self, signed_in_client):
        response = self.post(signed_in_client, {'email': 'a@b.com'})
        assert response.status_code == 400
        assert response.json()['error'] == 'Missing required fields: externalUserId, email, phone, levelName'

    def test_success_relays_token(self, signed_in_client, monkeypatch):
        captured = {}

        def fake_post(url, data=None, headers=None, timeout=None):
            captured['url'] = url
            captured['headers'] = headers
            captured['data'] = data
            return FakeResponse(200, {'token': 'tok-123', 'userId': 'user-1'})

        monkeypatch.setattr('kyc_integration.services.requests.post', fake_post)

        response = self.post(signed_in_client, self.payload)

        assert response.status_code == 200
        assert response.json() == {'token': 'tok-123', 'userId': 'user-1'}
        assert captured['url'] == 'https://api.sumsub.com/resources/accessTokens/sdk'
        assert 'X-App-Access-Sig' in captured['headers']
        sent = json.loads(captured['data'])
        assert sent['externalActionId'] == 'user-1'

    def test_upstream_error_status_relayed(self, signed_in_client, monkeypatch):
        monkeypatch.setattr(
            'kyc_integration.services.requests.post',
            lambda *a, **k: FakeResponse(401, {'description': 'Invalid signature', 'code': 401}),
        )
        response = self.post(signed_in_client, self.payload)
        assert response.status_code == 401
        assert response.json()['description'] == 'Invalid signature'

    def test_network_error_is_500(self, signed_in_client, monkeypatch):
        def boom(*args, **kwargs):
            raise requests.ConnectionError('connection refused')

        monkeypatch.setattr('kyc_integration.services.requests.post', boom)
        response = self.post(signed_in_client, self.payload)
        assert response.status_code == 500
        assert 'connection refused' in response.json()['error']

    def test_invalid_json(self, signed_in_client):
        response = signed_in_client.post(
            reverse('kyc_integration:sumsub_token'), data='not json', content_type='application/json'
        )
        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid request format. Expected JSON.'

    def test_undecodable_body(self, signed_in_client):
        response = signed_in_client.post(
            reverse('kyc_integration:sumsub_token'), data=b'\xff\xfe\xfa', content_type='application/json'
        )
        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid request format. Expected JSON.'

    def test_provider_error_body(self):
        assert ProviderError('down').as_response_body() == {'error': 'down'}


@pytest.mark.django_db
class TestSmileIdSubmitView:
    def test_creates_pending_review_request(self, signed_in_client, user):
        response = signed_in_client.post(reverse('kyc_integration:smileid_submit'), {
            'userId': str(user.pk),
            'documentType': 'passport',
            'documentValue': 'A1234567',
            'documentFile': make_pdf(),
            'selfieFile': make_image(),
        })

        assert response.status_code == 200
        assert response.json() == {'success': True, 'status': 'pending_review'}
        kyc_request = KycRequest.objects.get(user=user)
        assert kyc_request.status == 'pending_review'
        assert kyc_request.smile_id_job_id == 'smile-job-id-placeholder'
        assert kyc_request.result is None
        assert kyc_request.document_file.name
        assert kyc_request.selfie_file.name
        assert KycAuditLog.objects.filter(kyc_request=kyc_request, action='submitted').exists()

    def test_missing_files_is_500(self, signed_in_client):
        response = signed_in_client.post(reverse('kyc_integration:smileid_submit'), {
            'documentType': 'bvn',
            'documentValue': '12345678901',
        })
        assert response.status_code == 500
        assert response.json()['error'] == 'Please upload both ID document and selfie.'
        assert not KycRequest.objects.exists()

    def test_cannot_submit_for_someone_else(self, signed_in_client, user):
        response = signed_in_client.post(reverse('kyc_integration:smileid_submit'), {
            'userId': str(user.pk + 100),
            'documentType': 'bvn',
            'documentValue': '12345678901',
            'documentFile': make_pdf(),
            'selfieFile': make_image(),
        })
        assert response.status_code == 403

    def test_pending_request_blocks_new_submission(self, signed_in_client, user):
        KycRequest.objects.create(user=user, document_type='bvn', document_value='12345678901')
        response = signed_in_client.post(reverse('kyc_integration:smileid_submit'), {
            'documentType': 'bvn',
            'documentValue': '12345678901',
            'documentFile': make_pdf(),
            'selfieFile': make_image(),
        })
        assert response.status_code == 409

    @pytest.mark.parametrize('overrides,error', [
        ({'documentValue': 'x'}, 'BVN must be exactly 11 digits'),
        (
            {'documentFile': SimpleUploadedFile('a.exe', b'MZ', content_type='application/octet-stream')},
            'ID document must be an image or PDF.',
        ),
        ({'selfieFile': make_pdf('s.pdf')}, 'Selfie must be an image.'),
    ])
    def test_rejects_invalid_submission(self, signed_in_client, overrides, error):
        data = {
            'documentType': 'bvn',
            'documentValue': '12345678901',
            'documentFile': make_pdf(),
            'selfieFile': make_image(),
        }
        data.update(overrides)

        response = signed_in_client.post(reverse('kyc_integration:smileid_submit'), data)

        assert response.status_code == 500
        assert response.json()['error'] == error
        assert not KycRequest.objects.exists()
