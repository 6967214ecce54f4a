from django.urls import reverse

from .content import SECTION_LINKS


def site_navigation(request):
    """
    Header navigation shared by every page. Section links point at anchors
    on the landing page; the account menu depends on who is signed in.
    """
    landing_url = reverse('landing')
    nav_links = [
        {'label': label, 'url': f"{landing_url}#{anchor}"}
        for anchor, label in SECTION_LINKS
    ]

    user = getattr(request, 'user', None)
    initials = None
    account_email = None
    if user is not None and user.is_authenticated:
        profile = getattr(user, 'profile', None)
        if profile is not None:
            initials = profile.initials
        else:
            initials = user.email[0].upper() if user.email else 'U'
        account_email = user.email

    return {
        'nav_links': nav_links,
        'user_initials': initials,
        'account_email': account_email,
    }
