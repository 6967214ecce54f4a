import json
import re
import time
from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.contrib.sessions.models import Session
from django.core import mail
from django.test import Client
from django.urls import reverse
from django.utils import timezone

from authentication.models import Profile
from authentication.services.registration_service import RegistrationService
from authentication.tasks import cleanup_expired_sessions


def confirm_link(message):
    return re.search(r'https?://[^\s"<]+/user/confirm/[^\s"<]+', message.body).group(0)


@pytest.fixture
def user(db):
    user = User.objects.create_user(
        username='chidi@example.com', email='chidi@example.com', password='Secret#123'
    )
    user.profile.full_name = 'Chidi Okeke'
    user.profile.save()
    return user


@pytest.mark.django_db
class TestRegisterApi:
    url = '/api/register-user'

    def _post(self, client, payload):
        return client.post(self.url, data=json.dumps(payload), content_type='application/json')

    def test_creates_inactive_user_and_sends_confirmation(self, client):
        response = self._post(client, {
            'email': 'New.User@Example.com', 'password': 'Secret#123', 'fullName': 'New User',
        })

        assert response.status_code == 200
        assert response.json()['message'] == RegistrationService.SUCCESS_MESSAGE

        user = User.objects.get(username='new.user@example.com')
        assert user.is_active is False
        assert user.profile.full_name == 'New User'
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['new.user@example.com']

    def test_duplicate_email(self, client, user):
        response = self._post(client, {
            'email': 'CHIDI@example.com', 'password': 'Secret#123', 'fullName': 'Someone',
        })
        assert response.status_code == 409
        assert response.json()['errorCode'] == 'EMAIL_ALREADY_EXISTS'

    def test_missing_fields(self, client):
        response = self._post(client, {'email': 'a@example.com'})
        assert response.status_code == 400
        assert 'Missing required fields' in response.json()['message']

    def test_short_password(self, client):
        response = self._post(client, {
            'email': 'a@example.com', 'password': 'short', 'fullName': 'A Person',
        })
        assert response.status_code == 400
        assert response.json()['message'] == 'Password must be at least 8 characters long.'

    def test_invalid_json(self, client):
        response = client.post(self.url, data='not json', content_type='application/json')
        assert response.status_code == 400
        assert response.json()['message'] == 'Invalid request format. Expected JSON.'

    def test_get_not_allowed(self, client):
        assert client.get(self.url).status_code == 405


@pytest.mark.django_db
class TestRegisterForm:
    def test_password_policy(self, client):
        response = client.post(reverse('Register'), {
            'full_name': 'Bad Password', 'email': 'bad@example.com',
            'password': 'alllowercase', 'confirm_password': 'alllowercase',
        })
        assert response.status_code == 200
        content = response.content.decode()
        assert 'Password must contain an uppercase letter' in content
        assert 'Password must contain a number' in content
        assert not User.objects.filter(email='bad@example.com').exists()

    def test_passwords_must_match(self, client):
        response = client.post(reverse('Register'), {
            'full_name': 'Mismatch', 'email': 'mm@example.com',
            'password': 'Secret#123', 'confirm_password': 'Secret#124',
        })
        assert 'Passwords do not match' in response.content.decode()

    def test_register_then_confirm_then_login(self, client):
        response = client.post(reverse('Register'), {
            'full_name': 'Amaka Eze', 'email': 'amaka@example.com',
            'password': 'Secret#123', 'confirm_password': 'Secret#123',
        })
        assert response.status_code == 302
        assert response.url == reverse('Login')

        response = client.post(reverse('Login'), {'email': 'amaka@example.com', 'password': 'Secret#123'})
        assert 'Email not confirmed' in response.content.decode()

        response = client.get(confirm_link(mail.outbox[0]))
        assert response.status_code == 302
        assert User.objects.get(email='amaka@example.com').is_active is True

        response = client.post(reverse('Login'), {'email': 'AMAKA@example.com', 'password': 'Secret#123'})
        assert response.status_code == 302
        assert response.url == reverse('user_dashboard:home')

    def test_bad_confirmation_link(self, client, user):
        response = client.get(reverse('confirm_email', args=['MQ', 'bad-token']), follow=True)
        assert 'This confirmation link is invalid or has expired.' in response.content.decode()


@pytest.mark.django_db
class TestLoginLogout:
    def test_login_page(self, client):
        assert client.get(reverse('Login')).status_code == 200

    def test_invalid_credentials(self, client, user):
        response = client.post(reverse('Login'), {'email': 'chidi@example.com', 'password': 'Wrong#123'})
        assert response.status_code == 200
        assert 'Invalid login credentials' in response.content.decode()

    def test_next_is_honoured(self, client, user):
        response = client.post(
            reverse('Login') + '?next=/wallet/',
            {'email': 'chidi@example.com', 'password': 'Secret#123'}
        )
        assert response.url == '/wallet/'

    def test_suspended_user_cannot_login(self, client, user):
        user.profile.status = Profile.STATUS_SUSPENDED
        user.profile.save()
        response = client.post(reverse('Login'), {'email': 'chidi@example.com', 'password': 'Secret#123'})
        assert 'Your account has been suspended' in response.content.decode()
        assert '_auth_user_id' not in client.session

    def test_signed_in_user_skips_auth_pages(self, client, user):
        client.force_login(user)
        response = client.get(reverse('Login'))
        assert response.url == reverse('user_dashboard:home')

    def test_logout(self, client, user):
        client.force_login(user)
        response = client.post(reverse('Logout'))
        assert response.url == reverse('index')
        assert '_auth_user_id' not in client.session

    def test_logout_requires_post(self, client, user):
        client.force_login(user)
        assert client.get(reverse('Logout')).status_code == 405


@pytest.mark.django_db
class TestForgotPassword:
    def test_sends_reset_link(self, client, user):
        response = client.post(reverse('forget_password'), {'email': 'chidi@example.com'})
        assert response.status_code == 302
        assert len(mail.outbox) == 1
        assert '/user/reset/' in mail.outbox[0].body

    def test_unknown_email_looks_the_same(self, client, db):
        response = client.post(reverse('forget_password'), {'email': 'nobody@example.com'}, follow=True)
        assert 'Password Reset Email Sent' in response.content.decode()
        assert len(mail.outbox) == 0


@pytest.mark.django_db
class TestSessionSecurity:
    def test_idle_timeout_logs_out(self, client, user, settings):
        settings.SESSION_IDLE_TIMEOUT = 60
        client.force_login(user)
        session = client.session
        session['last_activity'] = time.time() - 120
        session.save()

        response = client.get(reverse('user_dashboard:home'))

        assert response.status_code == 302
        assert response.url == reverse('Login')
        assert '_auth_user_id' not in client.session

    def test_activity_is_tracked(self, client, user):
        client.force_login(user)
        client.get(reverse('user_dashboard:home'))
        assert client.session['last_activity'] > 0
        assert client.session['session_metadata_stored'] is True

    def test_suspended_user_is_signed_out(self, client, user):
        client.force_login(user)
        user.profile.status = Profile.STATUS_SUSPENDED
        user.profile.save()

        response = client.get(reverse('user_dashboard:home'))

        assert response.url == reverse('Login')
        assert '_auth_user_id' not in client.session

    def test_cleanup_expired_sessions(self, client, user):
        client.force_login(user)
        Session.objects.update(expire_date=timezone.now() - timedelta(days=1))
        cleanup_expired_sessions()
        assert Session.objects.count() == 0


@pytest.mark.django_db
class TestProfile:
    def test_signal_creates_profile(self, db):
        user = User.objects.create_user(username='x@example.com', email='X@example.com', password='p')
        assert user.profile.email == 'x@example.com'
        assert user.profile.is_admin is False

    def test_initials(self, user):
        assert user.profile.initials == 'CO'


@pytest.mark.django_db
class TestCreatePlatformAdmin:
    def test_creates_admin(self, monkeypatch):
        from django.core.management import call_command

        monkeypatch.setenv('DJANGO_SUPERUSER_PASSWORD', 'Secret#123')
        call_command('create_platform_admin', email='Boss@belfx.com')

        user = User.objects.get(username='boss@belfx.com')
        assert user.is_superuser
        assert user.profile.is_admin

    def test_promotes_existing_user(self, user, monkeypatch):
        from django.core.management import call_command

        monkeypatch.delenv('DJANGO_SUPERUSER_PASSWORD', raising=False)
        call_command('create_platform_admin', email='chidi@example.com')

        user.refresh_from_db()
        assert user.is_staff
        assert user.profile.is_admin
        assert user.profile.full_name == 'Chidi Okeke'


@pytest.mark.django_db
class TestProfileAdminActions:
    def _run(self, client, action, *profiles):
        return client.post(reverse('admin:authentication_profile_changelist'), {
            'action': action,
            '_selected_action': [profile.pk for profile in profiles],
        }, follow=True)

    def test_suspend_ends_sessions_but_not_own_account(self, client, user):
        boss = User.objects.create_superuser(
            username='boss@belfx.com', email='boss@belfx.com', password='Secret#123'
        )
        Client().force_login(user)
        client.force_login(boss)

        response = self._run(client, 'suspend_users', user.profile, boss.profile)

        user.profile.refresh_from_db()
        boss.profile.refresh_from_db()
        assert user.profile.status == Profile.STATUS_SUSPENDED
        assert boss.profile.status == Profile.STATUS_ACTIVE
        assert Session.objects.count() == 1
        assert 'You cannot suspend your own account.' in response.content.decode()

    def test_activate(self, client, user):
        boss = User.objects.create_superuser(
            username='boss@belfx.com', email='boss@belfx.com', password='Secret#123'
        )
        user.profile.status = Profile.STATUS_SUSPENDED
        user.profile.save()
        client.force_login(boss)

        self._run(client, 'activate_users', user.profile)

        user.profile.refresh_from_db()
        assert user.profile.status == Profile.STATUS_ACTIVE
