from django.shortcuts import render, redirect

from .content import ABOUT, FAQ_ITEMS, FEATURES, STEPS


def Home(request):
    """Signed-in users go to their dashboard; everyone else sees the landing page."""
    if request.user.is_authenticated:
        return redirect('user_dashboard:home')
    return landing(request)


def landing(request):
    context = {
        'features': FEATURES,
        'steps': STEPS,
        'about': ABOUT,
        'faq_items': FAQ_ITEMS,
    }
    return render(request, 'home/landing.html', context)


def terms(request):
    return render(request, 'home/terms.html')


def privacy(request):
    return render(request, 'home/privacy.html')
