from rest_framework.exceptions import NotFound

from .models import CandidateProfile, EmployerProfile


def get_employer_profile(user):
    try:
        return user.employer_profile
    except EmployerProfile.DoesNotExist:
        raise NotFound("Employer profile not found.")


def get_candidate_profile(user):
    try:
        return user.candidate_profile
    except CandidateProfile.DoesNotExist:
        raise NotFound("Candidate profile not found.")
