from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.contrib.sessions.models import Session
from django.core import mail
from django.test import Client
from django.urls import reverse
from freezegun import freeze_time

from user_dashboard.models import KycRequest
from wallet.models import WalletTransaction
from .permissions import is_platform_admin
from .reports import ReportService, month_windows
from .services import AdminUserService


def make_user(email, full_name='', password='Secret#123', **extra):
    user = User.objects.create_user(username=email, email=email, password=password, **extra)
    if full_name:
        user.profile.full_name = full_name
        user.profile.save()
    return user


@pytest.fixture
def admin_user(db):
    user = make_user('ops@belfx.com', 'Ops Lead')
    user.profile.is_admin = True
    user.profile.save()
    return user


@pytest.fixture
def member(db):
    return make_user('ada@example.com', 'Ada Obi')


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


@pytest.mark.django_db
class TestPermissions:
    def test_admin_sources(self, member):
        assert is_platform_admin(member) is False

        member.profile.is_admin = True
        member.profile.save()
        assert is_platform_admin(member) is True

        assert is_platform_admin(make_user('staff@example.com', is_staff=True)) is True
        assert is_platform_admin(make_user('admin@belfx.com')) is True

    def test_anonymous_redirects_to_admin_login(self, client):
        response = client.get(reverse('admin_panel:users'))
        assert response.status_code == 302
        assert response.url.startswith(reverse('admin_panel:login'))

    def test_member_is_sent_to_dashboard(self, client, member):
        client.force_login(member)
        response = client.get(reverse('admin_panel:users'))
        assert response.status_code == 302
        assert response.url == reverse('user_dashboard:home')

    def test_login_refuses_non_admin(self, client, member):
        response = client.post(reverse('admin_panel:login'), {
            'email': 'ada@example.com', 'password': 'Secret#123',
        })
        assert response.status_code == 200
        assert response.context['login_error'] == 'Unauthorized'
        assert '_auth_user_id' not in client.session

    def test_login_accepts_admin(self, client, admin_user):
        response = client.post(reverse('admin_panel:login'), {
            'email': 'OPS@belfx.com', 'password': 'Secret#123',
        })
        assert response.status_code == 302
        assert response.url == reverse('admin_panel:users')


@pytest.mark.django_db
class TestUsersTab:
    def test_search_matches_name_and_email(self, admin_user, member):
        make_user('bola@example.com', 'Bola Tinubu')
        assert list(AdminUserService.search_profiles('ada')) == [member.profile]
        assert list(AdminUserService.search_profiles('BOLA@')) == [User.objects.get(email='bola@example.com').profile]
        assert AdminUserService.search_profiles('').count() == 3

    def test_list_and_drawer(self, admin_client, member):
        response = admin_client.get(reverse('admin_panel:users'), {'q': 'ada'})
        assert response.status_code == 200
        assert list(response.context['profiles']) == [member.profile]

        response = admin_client.get(reverse('admin_panel:user_detail', args=[member.pk]))
        assert response.context['drawer_profile'] == member.profile
        assert 'No transactions' in response.content.decode()

    def test_suspend_ends_sessions(self, admin_client, member):
        member_client = Client()
        member_client.force_login(member)
        assert Session.objects.count() == 2

        response = admin_client.post(
            reverse('admin_panel:user_status', args=[member.pk]), {'status': 'suspended'}
        )

        assert response.status_code == 302
        member.profile.refresh_from_db()
        assert member.profile.is_suspended
        assert Session.objects.count() == 1

    def test_cannot_suspend_self(self, admin_client, admin_user):
        admin_client.post(
            reverse('admin_panel:user_status', args=[admin_user.pk]), {'status': 'suspended'}
        )
        admin_user.profile.refresh_from_db()
        assert not admin_user.profile.is_suspended


@pytest.mark.django_db
class TestKycTab:
    def test_defaults_to_pending(self, admin_client, member):
        KycRequest.objects.create(user=member, document_type='bvn', document_value='12345678901')
        KycRequest.objects.create(
            user=member, document_type='bvn', document_value='12345678901', status='rejected'
        )
        response = admin_client.get(reverse('admin_panel:kyc'))
        assert response.context['status_filter'] == 'pending_review'
        assert len(response.context['kyc_requests']) == 1

        response = admin_client.get(reverse('admin_panel:kyc'), {'status': 'all'})
        assert len(response.context['kyc_requests']) == 2

    def test_approve(self, admin_client, admin_user, member):
        kyc_request = KycRequest.objects.create(
            user=member, document_type='bvn', document_value='12345678901'
        )
        response = admin_client.post(reverse('admin_panel:kyc_approve', args=[kyc_request.pk]))
        assert response.status_code == 302

        kyc_request.refresh_from_db()
        assert kyc_request.status == 'approved'
        assert kyc_request.reviewed_by == admin_user
        assert mail.outbox[0].to == ['ada@example.com']

    def test_reject_with_reason(self, admin_client, member):
        kyc_request = KycRequest.objects.create(
            user=member, document_type='passport', document_value='A1234567'
        )
        admin_client.post(
            reverse('admin_panel:kyc_reject', args=[kyc_request.pk]),
            {'reason': 'Document is blurry'}
        )

        kyc_request.refresh_from_db()
        assert kyc_request.status == 'rejected'
        assert kyc_request.rejection_reason == 'Document is blurry'
        assert 'Document is blurry' in mail.outbox[0].body

    def test_approve_requires_post(self, admin_client, member):
        kyc_request = KycRequest.objects.create(
            user=member, document_type='bvn', document_value='12345678901'
        )
        response = admin_client.get(reverse('admin_panel:kyc_approve', args=[kyc_request.pk]))
        assert response.status_code == 405


@pytest.mark.django_db
class TestSettingsTab:
    def test_toggle_admin(self, admin_client, member):
        admin_client.post(reverse('admin_panel:toggle_admin', args=[member.pk]))
        member.profile.refresh_from_db()
        assert member.profile.is_admin is True

    def test_cannot_remove_own_rights(self, admin_client, admin_user):
        response = admin_client.post(
            reverse('admin_panel:toggle_admin', args=[admin_user.pk]), follow=True
        )
        admin_user.profile.refresh_from_db()
        assert admin_user.profile.is_admin is True
        assert 'You cannot remove your own admin rights.' in response.content.decode()


@pytest.mark.django_db
class TestReports:
    def test_month_windows(self):
        with freeze_time('2026-03-15 12:00:00'):
            windows = month_windows(3)
        assert [start.strftime('%b %Y') for start, _ in windows] == ['Jan 2026', 'Feb 2026', 'Mar 2026']

    def test_build_counts_current_month(self):
        with freeze_time('2026-03-15 12:00:00'):
            user = make_user('ngozi@example.com')
            WalletTransaction.objects.create(
                user=user, transaction_type='deposit', amount=Decimal('150.00'),
                currency_code='NGN', status='completed'
            )
            WalletTransaction.objects.create(
                user=user, transaction_type='deposit', amount=Decimal('99.00'),
                currency_code='NGN', status='pending'
            )
            KycRequest.objects.create(user=user, document_type='bvn', document_value='12345678901')
            report = ReportService.build()

        assert report['signups'][-1] == {'month': 'Mar 2026', 'count': 1}
        ngn = report['currencies'].index('NGN')
        assert report['volume'][-1]['totals'][ngn] == Decimal('150.00')
        assert report['kyc_counts'] == {'pending_review': 1, 'approved': 0, 'rejected': 0}

    def test_exports(self, admin_client):
        response = admin_client.get(reverse('admin_panel:export_report', args=['csv']))
        assert response['Content-Type'] == 'text/csv'
        assert 'User signups' in response.content.decode()

        response = admin_client.get(reverse('admin_panel:export_report', args=['pdf']))
        assert response['Content-Type'] == 'application/pdf'
        assert response.content.startswith(b'%PDF')
