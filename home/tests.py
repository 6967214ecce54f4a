import pytest
from django.contrib.auth.models import AnonymousUser, User
from django.test import RequestFactory
from django.urls import reverse

from .content import FAQ_ITEMS
from .context_processors import site_navigation


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='kemi@example.com', email='kemi@example.com', password='Secret#123'
    )


@pytest.mark.django_db
class TestLanding:
    def test_anonymous_sees_landing(self, client):
        response = client.get(reverse('index'))
        assert response.status_code == 200
        content = response.content.decode()
        assert 'Trade NGN, USD, CAD, GBP, and EUR directly with peers' in content
        assert 'Robust Security' in content
        assert len(response.context['faq_items']) == 5

    def test_signed_in_goes_to_dashboard(self, client, user):
        client.force_login(user)
        response = client.get(reverse('index'))
        assert response.status_code == 302
        assert response.url == reverse('user_dashboard:home')

    def test_static_pages(self, client):
        assert client.get(reverse('terms')).status_code == 200
        assert client.get(reverse('privacy')).status_code == 200

    def test_faq_ids_are_unique(self):
        assert len({item['id'] for item in FAQ_ITEMS}) == len(FAQ_ITEMS)


@pytest.mark.django_db
class TestSiteNavigation:
    def _context(self, user):
        request = RequestFactory().get('/')
        request.user = user
        return site_navigation(request)

    def test_anonymous(self):
        context = self._context(AnonymousUser())
        assert context['user_initials'] is None
        assert [link['label'] for link in context['nav_links']] == [
            'Features', 'How It Works', 'About Us', 'FAQ'
        ]
        assert context['nav_links'][0]['url'] == reverse('landing') + '#features'

    def test_initials_from_full_name(self, user):
        user.profile.full_name = 'Kemi Adeyemi Bello'
        user.profile.save()
        assert self._context(user)['user_initials'] == 'KAB'

    def test_initials_fall_back_to_email(self, user):
        user.profile.full_name = ''
        user.profile.save()
        assert self._context(user)['user_initials'] == 'K'

    def test_initials_default(self, user):
        user.email = ''
        user.save()
        user.profile.full_name = ''
        user.profile.email = ''
        user.profile.save()
        assert self._context(user)['user_initials'] == 'U'
