import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status

from jobs.models import CandidateCV
from jobs.pdf import cv_context
from tests.factories import ApplicationFactory, CandidateCVFactory, LocalizationFactory

pytestmark = pytest.mark.django_db


# --- Employer profile ---

def test_employer_profile_update(employer, employer_client):
    response = employer_client.put(reverse('employer-profile'), {
        'company_name': 'Fire Tech',
        'industry': ['Software'],
        'contract_type': ['B2B contract'],
        'benefits': ['Remote work'],
    }, format='json')

    assert response.status_code == status.HTTP_200_OK
    employer.refresh_from_db()
    assert employer.company_name == 'Fire Tech'
    assert employer.contract_type == ['B2B contract']


def test_employer_profile_rejects_unknown_contract_type(employer_client):
    response = employer_client.put(reverse('employer-profile'), {
        'company_name': 'Fire Tech',
        'contract_type': ['Handshake'],
    }, format='json')

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_locations_are_scoped_to_employer(employer, employer_client):
    created = employer_client.post(reverse('employer-locations'), {'city': 'Gdansk', 'latitude': 54.35},
                                   format='json')
    assert created.status_code == status.HTTP_201_CREATED
    assert employer.localizations.filter(city='Gdansk').exists()

    foreign = LocalizationFactory()
    response = employer_client.delete(reverse('employer-location-detail', args=[foreign.id]))
    assert response.status_code == status.HTTP_404_NOT_FOUND

    own_id = created.data['id']
    response = employer_client.delete(reverse('employer-location-detail', args=[own_id]))
    assert response.status_code == status.HTTP_200_OK
    assert not employer.localizations.filter(pk=own_id).exists()


def test_candidate_cannot_open_employer_profile(candidate_client):
    response = candidate_client.get(reverse('employer-profile'))

    assert response.status_code == status.HTTP_403_FORBIDDEN


# --- Candidate profile ---

def test_candidate_profile_replaces_links(candidate, candidate_client):
    candidate.profile_links.create(name='Old', url='https://old.example.com')

    response = candidate_client.put(reverse('candidate-profile'), {
        'name': 'Ewa',
        'skills': [{'name': 'Python', 'level': 'EXPERT'}],
        'profile_links': [{'name': 'GitHub', 'url': 'https://github.com/ewa'}],
    }, format='json')

    assert response.status_code == status.HTTP_200_OK
    assert list(candidate.profile_links.values_list('name', flat=True)) == ['GitHub']
    candidate.refresh_from_db()
    assert candidate.name == 'Ewa'


def test_candidate_profile_rejects_bad_skill_level(candidate_client):
    response = candidate_client.put(reverse('candidate-profile'), {
        'skills': [{'name': 'Python', 'level': 'GURU'}],
    }, format='json')

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert 'skills' in response.data['errors']


def test_candidate_stats(candidate, candidate_client):
    ApplicationFactory(candidate_profile=candidate)

    response = candidate_client.get(reverse('candidate-stats'))

    assert response.data['stats']['total_applications'] == 1
    assert response.data['stats']['pending_applications'] == 1
    assert response.data['stats']['total_cvs'] == 1


# --- CVs ---

def test_upload_pdf_cv(candidate, candidate_client):
    upload = SimpleUploadedFile('resume.pdf', b'%PDF-1.4 test', content_type='application/pdf')

    response = candidate_client.post(reverse('candidate-cv-list'), {'name': 'Main', 'cv_file': upload},
                                     format='multipart')

    assert response.status_code == status.HTTP_201_CREATED
    assert CandidateCV.objects.get(pk=response.data['id']).candidate_profile == candidate


def test_upload_rejects_other_file_types(candidate_client):
    upload = SimpleUploadedFile('resume.exe', b'MZ', content_type='application/octet-stream')

    response = candidate_client.post(reverse('candidate-cv-list'), {'name': 'Bad', 'cv_file': upload},
                                     format='multipart')

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert 'cv_file' in response.data['errors']


def test_cv_requires_file_or_json(candidate_client):
    response = candidate_client.post(reverse('candidate-cv-list'), {'name': 'Empty'}, format='json')

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_cv_is_soft(candidate, candidate_client):
    cv = CandidateCVFactory(candidate_profile=candidate)

    response = candidate_client.delete(reverse('candidate-cv-detail', args=[cv.id]))

    assert response.status_code == status.HTTP_204_NO_CONTENT
    cv.refresh_from_db()
    assert cv.is_deleted is True
    listing = candidate_client.get(reverse('candidate-cv-list'))
    assert listing.data == []


def test_cv_pdf_download(candidate, candidate_client):
    cv = CandidateCVFactory(candidate_profile=candidate, cv_json={
        'fullName': 'Anna Nowak',
        'position': 'Frontend Developer',
        'skills': ['React', 'TypeScript'],
        'experience': [{'position': 'Developer', 'company': 'CodeWave', 'description': 'Built things'}],
    })

    response = candidate_client.get(reverse('candidate-cv-pdf', args=[cv.id]))

    assert response.status_code == status.HTTP_200_OK
    assert response['Content-Type'] == 'application/pdf'
    assert response.content.startswith(b'%PDF')


def test_cv_pdf_needs_json_content(candidate, candidate_client):
    cv = CandidateCVFactory(candidate_profile=candidate, cv_json=None)

    response = candidate_client.get(reverse('candidate-cv-pdf', args=[cv.id]))

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_cv_context_accepts_plain_strings():
    context = cv_context({'skills': 'React, Jest', 'experience': 'Line one\nLine two', 'interests': 'Chess'})

    assert context['skills'] == ['React', 'Jest']
    assert [item['description'] for item in context['experience']] == [['Line one'], ['Line two']]
    assert context['interests'] == ['Chess']
