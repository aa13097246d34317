from django.db import models
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Localization(models.Model):
    """
    A postal address with optional coordinates. Shared by employer offices
    and job offers.
    """
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    street = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)

    def __str__(self):
        return ", ".join(part for part in [self.street, self.city, self.state] if part) or f"Location {self.pk}"


class EmployerProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='employer_profile'
    )
    company_name = models.CharField(max_length=100)
    company_image_url = models.URLField(blank=True, null=True)
    company_logo = models.ImageField(upload_to='company_logos/', blank=True, null=True)
    industry = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True, null=True)
    contract_type = models.JSONField(default=list, blank=True)  # values from CONTRACT_TYPES
    contact_phone = models.CharField(max_length=30, blank=True, null=True)
    contact_email = models.EmailField(blank=True, null=True)
    benefits = models.JSONField(default=list, blank=True)

    localizations = models.ManyToManyField(Localization, blank=True, related_name='employer_profiles')

    def __str__(self):
        return self.company_name


class CandidateProfile(models.Model):
    """
    Extended profile for Candidates: personal data, experience and skills.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='candidate_profile'
    )
    name = models.CharField(max_length=50, blank=True, null=True)
    last_name = models.CharField(max_length=50, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    birthday = models.DateField(blank=True, null=True)
    experience = models.JSONField(blank=True, null=True)  # [{company, position, startDate, ...}]
    skills = models.JSONField(blank=True, null=True)  # [{name, level}]
    education = models.JSONField(blank=True, null=True)
    phone_number = models.BigIntegerField(blank=True, null=True)
    place = models.CharField(max_length=100, blank=True, null=True)

    def __str__(self):
        full_name = " ".join(part for part in [self.name, self.last_name] if part)
        return f"Candidate: {full_name or self.user.username}"


class ProfileLink(models.Model):
    candidate_profile = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name='profile_links')
    name = models.CharField(max_length=100)
    url = models.URLField()

    def __str__(self):
        return f"{self.name}: {self.url}"


class CandidateCV(models.Model):
    candidate_profile = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name='cvs')
    name = models.CharField(max_length=255)
    cv_file = models.FileField(upload_to='cvs/', blank=True, null=True)
    cv_json = models.JSONField(blank=True, null=True)
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class JobOfferQuerySet(models.QuerySet):
    def open(self):
        """Active offers that have not expired yet."""
        return self.filter(is_active=True, expire_date__gte=timezone.now())


class JobOffer(models.Model):
    employer_profile = models.ForeignKey(EmployerProfile, on_delete=models.CASCADE, related_name='job_offers')
    localization = models.ForeignKey(
        Localization,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='job_offers'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    job_level = models.JSONField(default=list, blank=True)
    contract_type = models.CharField(max_length=100, blank=True)
    salary = models.CharField(max_length=200, blank=True)
    create_date = models.DateTimeField(default=timezone.now)
    expire_date = models.DateTimeField()
    working_mode = models.JSONField(default=list, blank=True)
    workload = models.CharField(max_length=100, blank=True)
    responsibilities = models.JSONField(default=list, blank=True)
    requirements = models.JSONField(default=list, blank=True)
    what_we_offer = models.JSONField(default=list, blank=True)
    application_url = models.URLField(blank=True)
    tags = models.JSONField(default=list, blank=True)

    # Offers with applications are never deleted, only switched off
    is_active = models.BooleanField(default=True)

    objects = JobOfferQuerySet.as_manager()

    class Meta:
        ordering = ['-create_date']

    def __str__(self):
        return f"{self.name} ({'active' if self.is_active else 'inactive'})"


class ApplicationForJobOffer(models.Model):
    class Status(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        ACCEPTED = 'ACCEPTED', _('Accepted')
        REJECTED = 'REJECTED', _('Rejected')
        CANCELED = 'CANCELED', _('Canceled')

    job_offer = models.ForeignKey(JobOffer, on_delete=models.PROTECT, related_name='applications')
    candidate_profile = models.ForeignKey(CandidateProfile, on_delete=models.CASCADE, related_name='applications')
    cv = models.ForeignKey(CandidateCV, on_delete=models.SET_NULL, null=True, blank=True, related_name='applications')
    message = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('job_offer', 'candidate_profile')  # Prevent double applying
        ordering = ['-id']

    def __str__(self):
        return f"{self.candidate_profile} -> {self.job_offer.name} ({self.status})"


class ApplicationResponse(models.Model):
    application = models.OneToOneField(
        ApplicationForJobOffer,
        on_delete=models.CASCADE,
        related_name='response'
    )
    response = models.TextField()
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Response to application {self.application_id}"
