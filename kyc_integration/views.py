# kyc_integration/views.py

import json
import logging

from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.http import require_POST

from user_dashboard.kyc_utils import can_start_kyc, get_client_ip, validate_upload
from .services import ProviderError, SmileIdentityService, SumsubService

logger = logging.getLogger(__name__)


SUMSUB_REQUIRED_FIELDS = ('externalUserId', 'email', 'phone', 'levelName')


def _unauthenticated():
    return JsonResponse({'error': 'Authentication required.'}, status=401)


@require_POST
def smileid_submit(request):
    """
    Multipart KYC submission: userId, documentType, documentValue,
    documentFile, selfieFile.
    """
    if not request.user.is_authenticated:
        return _unauthenticated()

    user_id = request.POST.get('userId')
    if user_id and str(user_id) != str(request.user.pk):
        logger.warning(f"User {request.user.pk} tried to submit KYC for user {user_id}")
        return JsonResponse(
            {'error': 'You can only submit KYC for your own account.'}, status=403
        )

    allowed, reason = can_start_kyc(request.user)
    if not allowed:
        return JsonResponse({'error': reason}, status=409)

    document = request.FILES.get('documentFile')
    selfie = request.FILES.get('selfieFile')
    if document is not None and selfie is not None:
        for uploaded, allow_pdf, label in ((document, True, 'ID document'), (selfie, False, 'Selfie')):
            is_valid, error_msg = validate_upload(uploaded, allow_pdf=allow_pdf, label=label)
            if not is_valid:
                return JsonResponse({'error': error_msg}, status=500)

    try:
        SmileIdentityService.submit_job(
            request.user,
            request.POST.get('documentType', ''),
            request.POST.get('documentValue', ''),
            document,
            selfie,
            ip_address=get_client_ip(request),
        )
    except ValidationError as e:
        return JsonResponse({'error': ' '.join(e.messages)}, status=500)
    except Exception as e:
        logger.exception(f"Smile ID submission failed for user {request.user.pk}")
        return JsonResponse({'error': str(e) or 'Unknown error'}, status=500)

    return JsonResponse({'success': True, 'status': 'pending_review'})


@require_POST
def sumsub_token(request):
    """
    JSON body: externalUserId, email, phone, levelName.
    Relays Sumsub's response, including its status on failure.
    """
    if not request.user.is_authenticated:
        return _unauthenticated()

    try:
        data = json.loads(request.body or b'{}')
    except ValueError:
        return JsonResponse({'error': 'Invalid request format. Expected JSON.'}, status=400)

    if not isinstance(data, dict) or not all(data.get(field) for field in SUMSUB_REQUIRED_FIELDS):
        return JsonResponse(
            {'error': 'Missing required fields: externalUserId, email, phone, levelName'},
            status=400
        )

    try:
        token = SumsubService.request_access_token(
            data['externalUserId'],
            data['email'],
            data['phone'],
            data['levelName'],
        )
    except ProviderError as e:
        return JsonResponse(e.as_response_body(), status=e.status)

    return JsonResponse(token, status=200)
