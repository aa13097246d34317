from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q

User = get_user_model()

class UsernameOrEmailBackend(ModelBackend):
    """
    Password login where the identifier may be either the username or the
    email address. Anonymized accounts never authenticate.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = username or kwargs.get(User.USERNAME_FIELD) or kwargs.get('email')
        if not identifier or password is None:
            return None

        user = (
            User.objects.filter(Q(username=identifier) | Q(email__iexact=identifier))
            .order_by('id')
            .first()
        )
        if user is None:
            # Run the hasher once to keep timing comparable for unknown users
            User().set_password(password)
            return None

        if user.is_deleted:
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
