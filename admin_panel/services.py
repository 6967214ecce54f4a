import logging

from django.core.exceptions import PermissionDenied
from django.db.models import Q

from authentication.models import Profile
from authentication.utils.session_utils import invalidate_all_user_sessions
from wallet.models import WalletTransaction

logger = logging.getLogger(__name__)


class AdminUserService:
    """
    User management for the admin panel.
    """

    @staticmethod
    def search_profiles(query=''):
        """
        All profiles newest first; query matches full name or email,
        case-insensitive substring.
        """
        profiles = Profile.objects.select_related('owner').order_by('-created_at')
        query = (query or '').strip()
        if query:
            profiles = profiles.filter(
                Q(full_name__icontains=query)
                | Q(email__icontains=query)
                | Q(owner__email__icontains=query)
            )
        return profiles

    @staticmethod
    def user_transactions(user, limit=50):
        return list(
            WalletTransaction.objects.filter(user=user).order_by('-created_at')[:limit]
        )

    @staticmethod
    def set_status(profile, status, actor):
        """
        Suspend or reactivate a user. Suspension ends every open session.
        """
        if status not in dict(Profile.STATUS_CHOICES):
            raise ValueError(f"Unknown status: {status}")
        if profile.owner_id == actor.pk and status == Profile.STATUS_SUSPENDED:
            raise PermissionDenied("You cannot suspend your own account.")

        profile.status = status
        profile.save(update_fields=['status', 'updated_at'])

        if status == Profile.STATUS_SUSPENDED:
            ended = invalidate_all_user_sessions(profile.owner)
            logger.info(f"User {profile.owner_id} suspended by {actor.pk}; {ended} session(s) ended")
        else:
            logger.info(f"User {profile.owner_id} activated by {actor.pk}")
        return profile

    @staticmethod
    def toggle_admin(profile, actor):
        """
        Flip the is_admin flag. Admins cannot remove their own rights.
        """
        if profile.owner_id == actor.pk and profile.is_admin:
            raise PermissionDenied("You cannot remove your own admin rights.")

        profile.is_admin = not profile.is_admin
        profile.save(update_fields=['is_admin', 'updated_at'])
        logger.info(
            f"Admin rights for user {profile.owner_id} set to {profile.is_admin} by {actor.pk}"
        )
        return profile
