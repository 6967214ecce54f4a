from datetime import timedelta
from decimal import Decimal

import pytest
from constance.test import override_config
from django.contrib.auth.models import User
from django.core import mail
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from wallet.models import Wallet, WalletTransaction
from .kyc_review import KycReviewService
from .kyc_utils import (
    can_start_kyc,
    format_kyc_status_message,
    get_kyc_status,
    validate_document_value,
    validate_upload,
)
from .models import KycRequest, KycAuditLog
from .templatetags.kyc_tags import kyc_status_badge


def make_image(name='selfie.png', size=None):
    content = b'\x89PNG\r\n\x1a\nfake' if size is None else b'0' * size
    return SimpleUploadedFile(name, content, content_type='image/png')


def make_pdf(name='id.pdf'):
    return SimpleUploadedFile(name, b'%PDF-1.4 fake', content_type='application/pdf')


@pytest.fixture
def user(db):
    user = User.objects.create_user(
        username='tola@example.com', email='tola@example.com', password='Secret#123'
    )
    user.profile.full_name = 'Tola Ade'
    user.profile.save()
    return user


@pytest.fixture
def reviewer(db):
    return User.objects.create_user(
        username='admin@belfx.com', email='admin@belfx.com', password='Secret#123', is_staff=True
    )


@pytest.fixture
def signed_in_client(client, user):
    client.force_login(user)
    return client


class TestDocumentValidation:
    @pytest.mark.parametrize('document_type,value,ok', [
        ('bvn', '12345678901', True),
        ('bvn', '1234567890', False),
        ('bvn', '1234567890a', False),
        ('national_id', '98765432109', True),
        ('passport', 'A12345', True),
        ('passport', 'A1234', False),
        ('passport', 'A12-345', False),
        ('drivers_license', 'LAG12', True),
        ('drivers_license', 'LAG1', False),
        ('unknown', '12345678901', False),
    ])
    def test_rules_per_type(self, document_type, value, ok):
        assert validate_document_value(value, document_type)[0] is ok

    def test_blank_value(self):
        assert validate_document_value('  ', 'bvn') == (False, 'Document number is required')

    @pytest.mark.django_db
    def test_upload_types(self):
        assert validate_upload(make_pdf(), allow_pdf=True)[0] is True
        assert validate_upload(make_pdf(), allow_pdf=False, label='Selfie') == (False, 'Selfie must be an image.')
        assert validate_upload(None, label='Selfie') == (False, 'Selfie is required.')

    @pytest.mark.django_db
    @override_config(KYC_MAX_UPLOAD_MB=1)
    def test_upload_size_limit(self):
        ok, error = validate_upload(make_image(size=1024 * 1024 + 1), label='Selfie')
        assert ok is False
        assert error == 'Selfie is too large (max 1MB).'


@pytest.mark.django_db
class TestKycStatus:
    def test_no_request_is_pending_submission(self, user):
        assert get_kyc_status(user) == 'pending_submission'
        assert can_start_kyc(user)[0] is True

    def test_latest_request_wins(self, user):
        KycRequest.objects.create(
            user=user, document_type='bvn', document_value='12345678901', status='rejected',
            created_at=timezone.now() - timedelta(days=2)
        )
        KycRequest.objects.create(user=user, document_type='bvn', document_value='12345678901')
        assert get_kyc_status(user) == 'pending_review'
        assert can_start_kyc(user)[0] is False

    def test_rejected_can_resubmit(self, user):
        KycRequest.objects.create(
            user=user, document_type='bvn', document_value='12345678901', status='rejected'
        )
        assert can_start_kyc(user)[0] is True

    def test_banner_copy(self):
        assert format_kyc_status_message('rejected')['action'] == 'Resubmit KYC'
        assert format_kyc_status_message('pending_review')['action'] is None
        assert format_kyc_status_message('pending_submission')['action'] == 'Complete KYC Now'

    def test_status_badge(self):
        assert 'Under Review' in kyc_status_badge('pending_review')
        assert 'Not Verified' in kyc_status_badge('something-else')


@pytest.mark.django_db
class TestKycReview:
    def test_approve_clears_reason_and_emails(self, user, reviewer):
        kyc_request = KycRequest.objects.create(
            user=user, document_type='bvn', document_value='12345678901',
            rejection_reason='old reason'
        )

        KycReviewService.approve(kyc_request, reviewer)

        kyc_request.refresh_from_db()
        assert kyc_request.status == 'approved'
        assert kyc_request.rejection_reason is None
        assert kyc_request.reviewed_by == reviewer
        assert kyc_request.reviewed_at is not None
        assert KycAuditLog.objects.filter(kyc_request=kyc_request, action='approved').exists()
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['tola@example.com']
        assert 'approved' in mail.outbox[0].subject

    def test_reject_defaults_reason(self, user, reviewer):
        kyc_request = KycRequest.objects.create(
            user=user, document_type='passport', document_value='A123456'
        )

        KycReviewService.reject(kyc_request, reviewer, reason='   ')

        kyc_request.refresh_from_db()
        assert kyc_request.status == 'rejected'
        assert kyc_request.rejection_reason == 'Rejected by admin'
        assert len(mail.outbox) == 1
        assert 'Rejected by admin' in mail.outbox[0].body

    def test_filter_requests(self, user):
        KycRequest.objects.create(user=user, document_type='bvn', document_value='12345678901')
        KycRequest.objects.create(
            user=user, document_type='bvn', document_value='12345678901', status='approved'
        )
        assert KycReviewService.filter_requests().count() == 1
        assert KycReviewService.filter_requests('approved').count() == 1
        assert KycReviewService.filter_requests('all').count() == 2


@pytest.mark.django_db
class TestDashboard:
    def test_requires_login(self, client):
        response = client.get(reverse('user_dashboard:home'))
        assert response.status_code == 302
        assert reverse('Login') in response.url

    def test_welcome_and_kyc_banner(self, signed_in_client):
        response = signed_in_client.get(reverse('user_dashboard:home'))
        assert response.status_code == 200
        content = response.content.decode()
        assert 'Welcome, Tola Ade' in content
        assert response.context['kyc_status'] == 'pending_submission'
        assert 'Complete KYC Now' in content
        assert response.context['is_kyc_approved'] is False

    def test_welcome_falls_back_to_email(self, signed_in_client, user):
        user.profile.full_name = ''
        user.profile.save()
        response = signed_in_client.get(reverse('user_dashboard:home'))
        assert 'Welcome, tola@example.com' in response.content.decode()

    def test_approved_user_sees_no_banner(self, signed_in_client, user):
        KycRequest.objects.create(
            user=user, document_type='bvn', document_value='12345678901', status='approved'
        )
        response = signed_in_client.get(reverse('user_dashboard:home'))
        assert response.context['kyc_banner'] is None
        assert response.context['is_kyc_approved'] is True

    def test_wallets_and_recent_activity(self, signed_in_client, user):
        Wallet.objects.create(user=user, currency_code='NGN', balance=Decimal('500.00'))
        WalletTransaction.objects.create(
            user=user, transaction_type='p2p_sell', amount=Decimal('20.00'), currency_code='NGN'
        )
        response = signed_in_client.get(reverse('user_dashboard:home'))
        assert len(response.context['wallets']) == 5
        assert len(response.context['recent_transactions']) == 1
        assert '₦500.00' in response.content.decode()

    def test_wallet_failure_renders_empty_state(self, signed_in_client, monkeypatch):
        def boom(user):
            raise RuntimeError('db down')

        monkeypatch.setattr('user_dashboard.views.WalletService.display_wallets', boom)
        response = signed_in_client.get(reverse('user_dashboard:home'))
        assert response.status_code == 200
        assert response.context['wallets_error'] is True


@pytest.mark.django_db
class TestKycFlow:
    def test_full_flow_creates_request(self, signed_in_client, user):
        response = signed_in_client.post(reverse('kyc:details'), {
            'document_type': 'bvn', 'document_value': '12345678901',
        })
        assert response.status_code == 302
        assert response.url == reverse('kyc:document')

        response = signed_in_client.post(reverse('kyc:document'), {'document_file': make_pdf()})
        assert response.url == reverse('kyc:selfie')

        response = signed_in_client.post(reverse('kyc:selfie'), {'selfie_file': make_image()})
        assert response.url == reverse('kyc:review')

        response = signed_in_client.get(reverse('kyc:review'))
        assert response.status_code == 200
        assert '12345678901' in response.content.decode()

        response = signed_in_client.post(reverse('kyc:review'))
        assert response.status_code == 302
        assert response.url == reverse('kyc:status')

        kyc_request = KycRequest.objects.get(user=user)
        assert kyc_request.status == 'pending_review'
        assert kyc_request.document_type == 'bvn'
        assert kyc_request.document_value == '12345678901'
        assert kyc_request.smile_id_job_id == 'smile-job-id-placeholder'
        assert 'kyc_draft' not in signed_in_client.session

    def test_invalid_details_rerender(self, signed_in_client):
        response = signed_in_client.post(reverse('kyc:details'), {
            'document_type': 'bvn', 'document_value': '123',
        })
        assert response.status_code == 200
        assert 'BVN must be exactly 11 digits' in response.content.decode()

    def test_selfie_must_be_image(self, signed_in_client):
        signed_in_client.post(reverse('kyc:details'), {
            'document_type': 'passport', 'document_value': 'A1234567',
        })
        signed_in_client.post(reverse('kyc:document'), {'document_file': make_pdf()})
        response = signed_in_client.post(reverse('kyc:selfie'), {'selfie_file': make_pdf('selfie.pdf')})
        assert response.url == reverse('kyc:selfie')
        assert not signed_in_client.session['kyc_draft'].get('selfie_file')

    def test_submit_when_parked_files_are_gone(self, signed_in_client):
        signed_in_client.post(reverse('kyc:details'), {
            'document_type': 'bvn', 'document_value': '12345678901',
        })
        signed_in_client.post(reverse('kyc:document'), {'document_file': make_pdf()})
        signed_in_client.post(reverse('kyc:selfie'), {'selfie_file': make_image()})
        default_storage.delete(signed_in_client.session['kyc_draft']['selfie_file'])

        response = signed_in_client.post(reverse('kyc:review'), follow=True)
        assert 'Please upload both ID document and selfie.' in response.content.decode()
        assert not KycRequest.objects.exists()

    def test_steps_require_previous_step(self, signed_in_client):
        for step in ('kyc:document', 'kyc:selfie', 'kyc:review'):
            response = signed_in_client.get(reverse(step))
            assert response.url == reverse('kyc:details')

        signed_in_client.post(reverse('kyc:details'), {
            'document_type': 'bvn', 'document_value': '12345678901',
        })
        response = signed_in_client.get(reverse('kyc:review'))
        assert response.status_code == 302
        assert response.url == reverse('kyc:document')
        response = signed_in_client.post(reverse('kyc:review'))
        assert response.url == reverse('kyc:document')
        assert not KycRequest.objects.exists()

        signed_in_client.post(reverse('kyc:document'), {'document_file': make_pdf()})
        response = signed_in_client.get(reverse('kyc:review'))
        assert response.url == reverse('kyc:selfie')

    def test_pending_request_blocks_flow(self, signed_in_client, user):
        KycRequest.objects.create(user=user, document_type='bvn', document_value='12345678901')
        response = signed_in_client.get(reverse('kyc:details'))
        assert response.status_code == 302
        assert response.url == reverse('kyc:status')

    def test_status_page(self, signed_in_client, user):
        KycRequest.objects.create(user=user, document_type='bvn', document_value='12345678901')
        response = signed_in_client.get(reverse('kyc:status'))
        assert response.status_code == 200
        assert 'under review' in response.content.decode()

    def test_cancel_discards_draft(self, signed_in_client):
        signed_in_client.post(reverse('kyc:details'), {
            'document_type': 'bvn', 'document_value': '12345678901',
        })
        response = signed_in_client.post(reverse('kyc:cancel'))
        assert response.url == reverse('kyc:status')
        assert 'kyc_draft' not in signed_in_client.session
