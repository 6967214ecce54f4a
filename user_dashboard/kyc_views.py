# user_dashboard/kyc_views.py
import logging
from functools import wraps

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect
from django.views.decorators.http import require_POST

from authentication.decorators import login_required_with_message
from kyc_integration.services import SmileIdentityService
from .kyc_drafts import KycDraft
from .kyc_utils import (
    can_start_kyc,
    get_client_ip,
    get_latest_kyc_request,
    validate_document_value,
    validate_upload,
)
from .models import KycRequest

logger = logging.getLogger(__name__)


STEPS = [
    (1, 'Details'),
    (2, 'ID Upload'),
    (3, 'Selfie'),
    (4, 'Review'),
]


def kyc_step(view_func):
    """Signed-in users without a pending or approved request only."""
    @login_required_with_message()
    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        allowed, reason = can_start_kyc(request.user)
        if not allowed:
            messages.info(request, reason)
            return redirect('kyc:status')
        return view_func(request, *args, **kwargs)
    return wrapped_view


def _step_context(step, draft, **extra):
    context = {
        'steps': STEPS,
        'current_step': step,
        'draft': draft,
        'doc_type_choices': KycRequest.DOC_TYPE_CHOICES,
    }
    context.update(extra)
    return context


def _missing_step(draft, upto):
    """Redirect to the earliest step before `upto` the draft has not completed, else None."""
    prerequisites = [
        ('kyc:details', draft.has_details, 'Please enter your document details first.'),
        ('kyc:document', bool(draft.document_file), 'Please upload your ID document first.'),
        ('kyc:selfie', bool(draft.selfie_file), 'Please upload your selfie first.'),
    ]
    for step, done, message in prerequisites:
        if step == upto:
            break
        if not done:
            messages.warning(draft.request, message)
            return redirect(step)
    return None


@login_required_with_message()
def kyc_status(request):
    """
    Landing page of the flow: latest request and whether a new one can start.
    """
    latest = get_latest_kyc_request(request.user)
    can_start, reason = can_start_kyc(request.user)

    context = {
        'kyc_request': latest,
        'kyc_status': latest.status if latest else KycRequest.STATUS_PENDING_SUBMISSION,
        'can_start': can_start,
        'reason': reason,
    }
    return render(request, 'user_dashboard/kyc_status.html', context)


@kyc_step
def kyc_details(request):
    """
    Step 1: document type and number.
    """
    draft = KycDraft(request)

    if request.method == 'POST':
        document_type = request.POST.get('document_type', KycRequest.DOC_TYPE_BVN)
        document_value = request.POST.get('document_value', '').strip()

        is_valid, error_msg = validate_document_value(document_value, document_type)
        if not is_valid:
            messages.error(request, error_msg)
            return render(request, 'user_dashboard/kyc_details.html', _step_context(
                1, draft,
                posted_type=document_type,
                posted_value=document_value,
            ))

        draft.set_details(document_type, document_value)
        return redirect('kyc:document')

    return render(request, 'user_dashboard/kyc_details.html', _step_context(
        1, draft,
        posted_type=draft.document_type,
        posted_value=draft.document_value,
    ))


@kyc_step
def kyc_document(request):
    """
    Step 2: ID document upload (image or PDF).
    """
    draft = KycDraft(request)

    missing = _missing_step(draft, upto='kyc:document')
    if missing:
        return missing

    if request.method == 'POST':
        document = request.FILES.get('document_file')
        is_valid, error_msg = validate_upload(document, allow_pdf=True, label='ID document')
        if not is_valid:
            messages.error(request, error_msg)
            return redirect('kyc:document')

        draft.store_document(document)
        return redirect('kyc:selfie')

    return render(request, 'user_dashboard/kyc_document.html', _step_context(2, draft))


@kyc_step
def kyc_selfie(request):
    """
    Step 3: selfie upload (images only).
    """
    draft = KycDraft(request)

    missing = _missing_step(draft, upto='kyc:selfie')
    if missing:
        return missing

    if request.method == 'POST':
        selfie = request.FILES.get('selfie_file')
        is_valid, error_msg = validate_upload(selfie, allow_pdf=False, label='Selfie')
        if not is_valid:
            messages.error(request, error_msg)
            return redirect('kyc:selfie')

        draft.store_selfie(selfie)
        return redirect('kyc:review')

    return render(request, 'user_dashboard/kyc_selfie.html', _step_context(3, draft))


@kyc_step
def kyc_review(request):
    """
    Step 4: review and submit for Smile ID verification.
    """
    draft = KycDraft(request)

    missing = _missing_step(draft, upto='kyc:review')
    if missing:
        return missing

    if request.method == 'POST':
        if not draft.has_files or not draft.files_exist():
            messages.error(request, 'Please upload both ID document and selfie.')
            return redirect('kyc:review')

        document, selfie = draft.open_files()
        try:
            SmileIdentityService.submit_job(
                request.user,
                draft.document_type,
                draft.document_value,
                document,
                selfie,
                ip_address=get_client_ip(request),
            )
        except ValidationError as e:
            messages.error(request, ' '.join(e.messages))
            return redirect('kyc:review')
        except Exception:
            logger.exception(f"KYC submission failed for user {request.user.pk}")
            messages.error(request, 'KYC submission failed. Please try again.')
            return redirect('kyc:review')
        finally:
            document.close()
            selfie.close()

        draft.clear()
        messages.success(
            request,
            "Your KYC is under review. We'll notify you once it's complete."
        )
        return redirect('kyc:status')

    return render(request, 'user_dashboard/kyc_review.html', _step_context(4, draft))


@login_required_with_message()
@require_POST
def kyc_cancel(request):
    """Discard the draft and any parked uploads."""
    KycDraft(request).clear()
    messages.info(request, 'Your KYC draft was discarded.')
    return redirect('kyc:status')
