from django.db import models
from django.contrib.auth.models import AbstractUser
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

class User(AbstractUser):
    """
    Custom User Model for JobOnFire.
    Every account is either a Candidate or an Employer; the matching
    profile is created at registration.
    """

    class Roles(models.TextChoices):
        CANDIDATE = 'CANDIDATE', _('Candidate')
        EMPLOYER = 'EMPLOYER', _('Employer')

    email = models.EmailField(_("Email Address"), unique=True)
    role = models.CharField(
        max_length=20,
        choices=Roles.choices,
        default=Roles.CANDIDATE
    )
    register_date = models.DateTimeField(default=timezone.now)

    # Set when the account has been anonymized; the row stays for history
    is_deleted = models.BooleanField(default=False)

    REQUIRED_FIELDS = ['email']

    def __str__(self):
        return f"{self.username} ({self.role})"

    @property
    def is_candidate(self):
        return self.role == self.Roles.CANDIDATE

    @property
    def is_employer(self):
        return self.role == self.Roles.EMPLOYER
