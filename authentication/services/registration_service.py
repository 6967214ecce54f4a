import logging

from django.conf import settings
from django.contrib.auth.models import User
from django.contrib.auth.tokens import default_token_generator
from django.db import IntegrityError, transaction
from django.urls import reverse
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_encode, urlsafe_base64_decode

from authentication.models import Profile
from authentication.tasks import send_account_confirmation_task

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Registration failed; carries the HTTP status and message shown to the user."""

    def __init__(self, message, status=400, error_code=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.error_code = error_code


class EmailAlreadyExistsError(RegistrationError):
    def __init__(self):
        super().__init__(
            RegistrationService.EMAIL_EXISTS_MESSAGE,
            status=409,
            error_code='EMAIL_ALREADY_EXISTS',
        )


class RegistrationService:
    EMAIL_EXISTS_MESSAGE = (
        "This email address is already registered. Please try logging in, "
        "or reset your password if you've forgotten it."
    )
    SUCCESS_MESSAGE = (
        "Almost there! We've sent a confirmation link to your email. "
        "Please check your inbox (and spam folder)."
    )
    MIN_PASSWORD_LENGTH = 8

    @staticmethod
    def email_exists(email):
        return User.objects.filter(username__iexact=email).exists() or \
            User.objects.filter(email__iexact=email).exists()

    @staticmethod
    def register_user(email, password, full_name, request=None):
        """
        Create an inactive user and its profile, then email a confirmation link.

        Args:
            email: Email address (becomes the username)
            password: Raw password
            full_name: Display name stored on the profile
            request: Optional request used to build an absolute confirmation URL

        Returns:
            User object

        Raises:
            RegistrationError: If validation fails
            EmailAlreadyExistsError: If the email is already registered
        """
        if not email or not password or not full_name:
            raise RegistrationError("Missing required fields: email, password, or full name.")

        if not isinstance(password, str) or len(password) < RegistrationService.MIN_PASSWORD_LENGTH:
            raise RegistrationError("Password must be at least 8 characters long.")

        email = str(email).strip().lower()
        full_name = str(full_name).strip()

        if RegistrationService.email_exists(email):
            logger.info(f"Registration refused, email already registered: {email}")
            raise EmailAlreadyExistsError()

        try:
            with transaction.atomic():
                user = RegistrationService._create_user(email, password, full_name)
        except IntegrityError:
            logger.info(f"Registration raced with an existing account: {email}")
            raise EmailAlreadyExistsError()

        logger.info(f"User {email} created successfully. ID: {user.pk}")

        confirm_url = RegistrationService.build_confirmation_url(user, request)
        try:
            send_account_confirmation_task.delay(user.pk, confirm_url)
        except Exception as e:
            logger.error(f"Could not queue confirmation email for user {user.pk}: {str(e)}")

        return user

    @staticmethod
    def _create_user(email, password, full_name):
        first_name, _, last_name = full_name.partition(' ')
        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            first_name=first_name[:150],
            last_name=last_name.strip()[:150],
            is_active=False,
        )

        profile, _ = Profile.objects.get_or_create(owner=user)
        profile.full_name = full_name
        profile.email = email
        profile.save()
        return user

    @staticmethod
    def build_confirmation_url(user, request=None):
        uidb64 = urlsafe_base64_encode(force_bytes(user.pk))
        token = default_token_generator.make_token(user)
        path = reverse('confirm_email', kwargs={'uidb64': uidb64, 'token': token})
        if request is not None:
            return request.build_absolute_uri(path)
        return f"{settings.SITE_URL.rstrip('/')}{path}"

    @staticmethod
    def confirm_email(uidb64, token):
        """
        Activate the account behind a confirmation link.

        Returns:
            User object if the link is valid, otherwise None
        """
        try:
            user_id = force_str(urlsafe_base64_decode(uidb64))
            user = User.objects.get(pk=user_id)
        except (TypeError, ValueError, OverflowError, User.DoesNotExist):
            return None

        if not default_token_generator.check_token(user, token):
            logger.warning(f"Invalid confirmation token for user {user.pk}")
            return None

        if not user.is_active:
            user.is_active = True
            user.save(update_fields=['is_active'])
            logger.info(f"User {user.pk} confirmed their email")
        return user
