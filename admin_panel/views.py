# admin_panel/views.py
import logging

from constance import config
from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.core.exceptions import PermissionDenied
from django.core.paginator import Paginator
from django.shortcuts import render, redirect, get_object_or_404
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from authentication.models import Profile
from user_dashboard.kyc_review import KycReviewService
from user_dashboard.kyc_utils import get_client_ip
from user_dashboard.models import KycRequest
from .download_service import DownloadService
from .forms import AdminLoginForm, KycRejectForm, KYC_FILTER_CHOICES
from .permissions import admin_required, is_platform_admin
from .reports import ReportService
from .services import AdminUserService

logger = logging.getLogger(__name__)


def _page_size():
    return config.ADMIN_USERS_PAGE_SIZE or 25


def _admin_context(request, tab, **extra):
    context = {
        'tab': tab,
        'admin_profile': getattr(request.user, 'profile', None),
    }
    context.update(extra)
    return context


def admin_login(request):
    if request.user.is_authenticated and is_platform_admin(request.user):
        return redirect('admin_panel:users')

    form = AdminLoginForm(request.POST or None)
    login_error = None

    if request.method == 'POST' and form.is_valid():
        user = authenticate(
            request,
            username=form.cleaned_data['email'],
            password=form.cleaned_data['password'],
        )
        if user is None:
            login_error = 'Invalid login credentials'
        elif not is_platform_admin(user):
            logger.warning(f"Non-admin user {user.pk} tried to sign in to the admin panel")
            login_error = 'Unauthorized'
        elif getattr(user, 'profile', None) is not None and user.profile.is_suspended:
            login_error = 'Your account has been suspended. Please contact support.'
        else:
            login(request, user)
            logger.info(f"Admin {user.pk} signed in to the admin panel")
            next_url = request.GET.get('next')
            if next_url and url_has_allowed_host_and_scheme(
                next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
            ):
                return redirect(next_url)
            return redirect('admin_panel:users')

    return render(request, 'admin_panel/login.html', {'form': form, 'login_error': login_error})


@require_POST
def admin_logout(request):
    logout(request)
    messages.info(request, 'You have been successfully logged out.')
    return redirect('admin_panel:login')


@admin_required
def users(request, user_id=None):
    """
    User table with search; user_id opens the profile drawer.
    """
    query = request.GET.get('q', '').strip()
    profiles = AdminUserService.search_profiles(query)
    page_obj = Paginator(profiles, _page_size()).get_page(request.GET.get('page'))

    drawer_profile = None
    drawer_transactions = []
    if user_id is not None:
        drawer_profile = get_object_or_404(Profile.objects.select_related('owner'), owner_id=user_id)
        drawer_transactions = AdminUserService.user_transactions(drawer_profile.owner)

    return render(request, 'admin_panel/users.html', _admin_context(
        request, 'users',
        page_obj=page_obj,
        profiles=page_obj.object_list,
        query=query,
        drawer_profile=drawer_profile,
        drawer_transactions=drawer_transactions,
    ))


@admin_required
@require_POST
def user_status(request, user_id):
    profile = get_object_or_404(Profile, owner_id=user_id)
    status = request.POST.get('status')

    try:
        AdminUserService.set_status(profile, status, request.user)
    except PermissionDenied as e:
        messages.error(request, str(e))
    except ValueError as e:
        messages.error(request, str(e))
    else:
        label = 'suspended' if profile.is_suspended else 'activated'
        messages.success(request, f'{profile.display_name} has been {label}.')

    return redirect('admin_panel:user_detail', user_id=user_id)


@admin_required
def kyc(request, pk=None):
    """
    KYC requests filtered by status (pending_review by default);
    pk opens the review panel for one request.
    """
    status_filter = request.GET.get('status', KycRequest.STATUS_PENDING_REVIEW)
    if status_filter not in dict(KYC_FILTER_CHOICES):
        status_filter = KycRequest.STATUS_PENDING_REVIEW

    requests_qs = KycReviewService.filter_requests(status_filter)
    page_obj = Paginator(requests_qs, _page_size()).get_page(request.GET.get('page'))

    selected = None
    if pk is not None:
        selected = get_object_or_404(
            KycRequest.objects.select_related('user', 'user__profile', 'reviewed_by'), pk=pk
        )

    return render(request, 'admin_panel/kyc.html', _admin_context(
        request, 'kyc',
        page_obj=page_obj,
        kyc_requests=page_obj.object_list,
        status_filter=status_filter,
        filter_choices=KYC_FILTER_CHOICES,
        selected=selected,
        reject_form=KycRejectForm(),
    ))


@admin_required
@require_POST
def kyc_approve(request, pk):
    kyc_request = get_object_or_404(KycRequest, pk=pk)
    KycReviewService.approve(kyc_request, request.user, ip_address=get_client_ip(request))
    messages.success(request, f'KYC approved for {kyc_request.user.email}.')
    return redirect('admin_panel:kyc')


@admin_required
@require_POST
def kyc_reject(request, pk):
    kyc_request = get_object_or_404(KycRequest, pk=pk)
    form = KycRejectForm(request.POST)
    reason = form.cleaned_data['reason'] if form.is_valid() else ''
    KycReviewService.reject(kyc_request, request.user, reason=reason, ip_address=get_client_ip(request))
    messages.success(request, f'KYC rejected for {kyc_request.user.email}.')
    return redirect('admin_panel:kyc')


@admin_required
def admin_settings(request):
    profiles = Profile.objects.select_related('owner').order_by('-is_admin', 'full_name', 'email')
    return render(request, 'admin_panel/settings.html', _admin_context(
        request, 'settings',
        profiles=profiles,
    ))


@admin_required
@require_POST
def toggle_admin(request, user_id):
    profile = get_object_or_404(Profile, owner_id=user_id)
    try:
        AdminUserService.toggle_admin(profile, request.user)
    except PermissionDenied as e:
        messages.error(request, str(e))
    else:
        role = 'an admin' if profile.is_admin else 'a regular user'
        messages.success(request, f'{profile.display_name} is now {role}.')
    return redirect('admin_panel:settings')


@admin_required
def reports(request):
    report = ReportService.build()
    volume_rows = [
        {'month': row['month'], 'cells': list(zip(report['currencies'], row['totals']))}
        for row in report['volume']
    ]
    return render(request, 'admin_panel/reports.html', _admin_context(
        request, 'reports',
        report=report,
        volume_rows=volume_rows,
    ))


@admin_required
def export_report(request, fmt):
    report = ReportService.build()
    if fmt == 'pdf':
        return DownloadService.report_pdf(report)
    return DownloadService.report_csv(report)


@admin_required
def more(request):
    return render(request, 'admin_panel/more.html', _admin_context(request, 'more'))
