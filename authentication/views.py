import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .decorators import anonymous_required
from .services.auth_service import AuthManager
from .services.password_service import PasswordService
from .services.registration_service import RegistrationService, RegistrationError

logger = logging.getLogger(__name__)

# Auth views

@anonymous_required
def Login(request): return AuthManager.login_view(request)

@anonymous_required
def Register(request): return AuthManager.register_view(request)

def confirm_email(request, uidb64, token): return AuthManager.confirm_email_view(request, uidb64, token)

@require_POST
def Logout(request): return AuthManager.logout_view(request)

# Password reset views

@anonymous_required
def forget_password(request): return PasswordService.forget_password(request)


@csrf_exempt
@require_POST
def register_user_api(request):
    """
    JSON sign-up endpoint used by the registration form's fetch() call.
    Always answers with JSON, including for configuration and parse errors.
    """
    logger.info("[API /api/register-user] Received POST request.")

    try:
        body = json.loads(request.body or b'')
        if not isinstance(body, dict):
            raise ValueError("Expected a JSON object")
    except ValueError as e:
        logger.error(f"[API /api/register-user] Error parsing request JSON: {str(e)}")
        return JsonResponse({'message': 'Invalid request format. Expected JSON.'}, status=400)

    email = body.get('email')
    password = body.get('password')
    full_name = body.get('fullName')

    try:
        RegistrationService.register_user(email, password, full_name, request=request)
    except RegistrationError as e:
        logger.warning(f"[API /api/register-user] Registration refused for {email}: {e.message}")
        payload = {'message': e.message}
        if e.error_code:
            payload['errorCode'] = e.error_code
        return JsonResponse(payload, status=e.status)
    except Exception as e:
        logger.error(f"[API /api/register-user] Unhandled exception: {str(e)}", exc_info=True)
        return JsonResponse(
            {'message': 'An unexpected server error occurred. Please try again later.'},
            status=500,
        )

    return JsonResponse({'message': RegistrationService.SUCCESS_MESSAGE}, status=200)
