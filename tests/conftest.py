import pytest
from rest_framework.test import APIClient

from tests.factories import CandidateProfileFactory, EmployerProfileFactory


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def employer(db):
    """Employer profile of the logged-in employer."""
    return EmployerProfileFactory()


@pytest.fixture
def candidate(db):
    """Candidate profile of the logged-in candidate."""
    return CandidateProfileFactory()


@pytest.fixture
def employer_client(employer):
    client = APIClient()
    client.force_authenticate(user=employer.user)
    return client


@pytest.fixture
def candidate_client(candidate):
    client = APIClient()
    client.force_authenticate(user=candidate.user)
    return client


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / 'media')
