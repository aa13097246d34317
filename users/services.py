import logging
import re
import time

from django.db import transaction

from jobs.models import CandidateProfile, EmployerProfile

logger = logging.getLogger(__name__)

ANONYMIZED_USERNAME_RE = re.compile(r'^deleted_user_\d+_\d+$')
ANONYMIZED_EMAIL_RE = re.compile(r'^deleted_\d+_\d+@anonymized\.local$')


def build_anonymized_identifiers(user_id, timestamp=None):
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return {
        "username": f"deleted_user_{user_id}_{timestamp}",
        "email": f"deleted_{user_id}_{timestamp}@anonymized.local",
    }


def is_anonymized_username(username):
    return bool(ANONYMIZED_USERNAME_RE.match(username or ''))


def is_anonymized_email(email):
    return bool(ANONYMIZED_EMAIL_RE.match(email or ''))


@transaction.atomic
def anonymize_account(user):
    """
    Strip personal data from an account while keeping its rows, so
    applications and job offers stay consistent for the other side.
    """
    identifiers = build_anonymized_identifiers(user.id)

    candidate_profile = CandidateProfile.objects.filter(user=user).first()
    if candidate_profile:
        CandidateProfile.objects.filter(pk=candidate_profile.pk).update(
            name=None,
            last_name=None,
            description=None,
            birthday=None,
            experience=None,
            skills=None,
            education=None,
            phone_number=None,
            place=None,
        )
        candidate_profile.profile_links.all().delete()
        candidate_profile.cvs.update(is_deleted=True)

    employer_profile = EmployerProfile.objects.filter(user=user).first()
    if employer_profile:
        EmployerProfile.objects.filter(pk=employer_profile.pk).update(
            company_name=f"Deleted company {user.id}",
            company_image_url=None,
            company_logo=None,
            industry=[],
            description=None,
            contract_type=[],
            contact_phone=None,
            contact_email=None,
            benefits=[],
        )
        employer_profile.job_offers.update(is_active=False)

    user.username = identifiers['username']
    user.email = identifiers['email']
    user.first_name = ''
    user.last_name = ''
    user.set_unusable_password()
    user.is_deleted = True
    user.is_active = False
    user.save()

    logger.info("Account %s anonymized", user.id)
    return {
        "user_id": user.id,
        "had_candidate_profile": candidate_profile is not None,
        "had_employer_profile": employer_profile is not None,
        "anonymized_username": identifiers['username'],
        "anonymized_email": identifiers['email'],
    }
