"""
Deleting a job offer: deactivate when candidates applied, otherwise delete
the offer with its questions, answers and recruitment test.
"""
from contextlib import contextmanager
from unittest import mock

import pytest
from django.urls import reverse
from rest_framework import status

from jobs.models import ApplicationForJobOffer, JobOffer
from jobs.services import (
    Deactivated, Deleted, DjangoJobOfferStore, JobOfferLifecycle, JobOfferNotFound, delete_or_deactivate_job_offer,
)
from recruitment.models import CandidateAnswer, RecruitmentQuestion, RecruitmentTest
from tests.factories import (
    ApplicationFactory, CandidateAnswerFactory, JobOfferFactory, RecruitmentQuestionFactory, RecruitmentTestFactory,
)


class RecordingStore:
    """In-memory store that records every call, including transaction boundaries."""

    def __init__(self, exists=True, application_count=0, question_ids=()):
        self.exists = exists
        self.application_count = application_count
        self._question_ids = list(question_ids)
        self.calls = []

    @contextmanager
    def atomic(self):
        self.calls.append('begin')
        yield
        self.calls.append('commit')

    def lock_job_offer(self, job_offer_id):
        self.calls.append('lock_job_offer')
        return self.exists

    def count_applications(self, job_offer_id):
        self.calls.append('count_applications')
        return self.application_count

    def deactivate(self, job_offer_id):
        self.calls.append('deactivate')

    def question_ids(self, job_offer_id):
        self.calls.append('question_ids')
        return self._question_ids

    def delete_answers(self, question_ids):
        self.calls.append('delete_answers')

    def delete_questions(self, question_ids):
        self.calls.append('delete_questions')

    def delete_test(self, job_offer_id):
        self.calls.append('delete_test')

    def delete_job_offer(self, job_offer_id):
        self.calls.append('delete_job_offer')


# --- Resolver against a recording store ---

def test_offer_with_applications_is_only_deactivated():
    store = RecordingStore(application_count=3, question_ids=[1, 2])

    result = JobOfferLifecycle(store).remove(7)

    assert result == Deactivated(job_offer_id=7, application_count=3)
    assert store.calls == ['begin', 'lock_job_offer', 'count_applications', 'deactivate', 'commit']


def test_offer_without_applications_is_deleted_in_dependency_order():
    store = RecordingStore(application_count=0, question_ids=[1, 2])

    result = JobOfferLifecycle(store).remove(7)

    assert result == Deleted(job_offer_id=7)
    assert store.calls == [
        'begin',
        'lock_job_offer',
        'count_applications',
        'question_ids',
        'delete_answers',
        'delete_questions',
        'delete_test',
        'delete_job_offer',
        'commit',
    ]


def test_offer_without_questions_skips_answer_and_question_deletes():
    store = RecordingStore(application_count=0, question_ids=[])

    JobOfferLifecycle(store).remove(7)

    assert 'delete_answers' not in store.calls
    assert 'delete_questions' not in store.calls
    assert store.calls[-3:] == ['delete_test', 'delete_job_offer', 'commit']


def test_missing_offer_raises_without_mutating():
    store = RecordingStore(exists=False)

    with pytest.raises(JobOfferNotFound):
        JobOfferLifecycle(store).remove(99)

    assert store.calls == ['begin', 'lock_job_offer']


def test_mock_store_receives_the_offer_id():
    store = mock.MagicMock()
    store.lock_job_offer.return_value = True
    store.count_applications.return_value = 0
    store.question_ids.return_value = [4]

    JobOfferLifecycle(store).remove(12)

    store.delete_answers.assert_called_once_with([4])
    store.delete_questions.assert_called_once_with([4])
    store.delete_test.assert_called_once_with(12)
    store.delete_job_offer.assert_called_once_with(12)
    store.deactivate.assert_not_called()


def test_outcome_as_dict():
    assert Deactivated(job_offer_id=1, application_count=2).as_dict() == {
        "mode": "deactivated",
        "job_offer_id": 1,
        "application_count": 2,
    }
    assert Deleted(job_offer_id=1).as_dict() == {"mode": "deleted", "job_offer_id": 1, "application_count": 0}


# --- Resolver against the database ---

@pytest.mark.django_db
def test_deactivation_keeps_every_row():
    answer = CandidateAnswerFactory()
    job_offer = answer.application.job_offer
    RecruitmentTestFactory(job_offer=job_offer)

    result = delete_or_deactivate_job_offer(job_offer.id)

    assert result.mode == 'deactivated'
    assert result.application_count == 1
    job_offer.refresh_from_db()
    assert job_offer.is_active is False
    assert ApplicationForJobOffer.objects.filter(job_offer=job_offer).count() == 1
    assert RecruitmentQuestion.objects.filter(job_offer=job_offer).exists()
    assert CandidateAnswer.objects.filter(pk=answer.pk).exists()
    assert RecruitmentTest.objects.filter(job_offer=job_offer).exists()


@pytest.mark.django_db
def test_deletion_removes_questions_answers_and_test():
    job_offer = JobOfferFactory()
    first_question = RecruitmentQuestionFactory(job_offer=job_offer)
    second_question = RecruitmentQuestionFactory(job_offer=job_offer)
    RecruitmentTestFactory(job_offer=job_offer)
    # Answers pointing at this offer's questions from applications elsewhere
    stray_answers = [
        CandidateAnswerFactory(question=first_question),
        CandidateAnswerFactory(question=second_question),
    ]

    result = delete_or_deactivate_job_offer(job_offer.id)

    assert result == Deleted(job_offer_id=job_offer.id)
    assert not JobOffer.objects.filter(pk=job_offer.pk).exists()
    assert not RecruitmentQuestion.objects.filter(job_offer_id=job_offer.pk).exists()
    assert not CandidateAnswer.objects.filter(pk__in=[a.pk for a in stray_answers]).exists()
    assert not RecruitmentTest.objects.filter(job_offer_id=job_offer.pk).exists()
    # The other offers and their applications are untouched
    assert ApplicationForJobOffer.objects.filter(pk__in=[a.application_id for a in stray_answers]).count() == 2


@pytest.mark.django_db
def test_deactivating_twice_gives_the_same_outcome():
    application = ApplicationFactory()
    job_offer_id = application.job_offer_id

    first = delete_or_deactivate_job_offer(job_offer_id)
    second = delete_or_deactivate_job_offer(job_offer_id)

    assert first == Deactivated(job_offer_id=job_offer_id, application_count=1)
    assert second == first
    job_offer = JobOffer.objects.get(pk=job_offer_id)
    assert job_offer.is_active is False
    assert ApplicationForJobOffer.objects.filter(pk=application.pk).exists()


@pytest.mark.django_db
def test_deleting_twice_raises_not_found():
    job_offer = JobOfferFactory()
    delete_or_deactivate_job_offer(job_offer.id)

    with pytest.raises(JobOfferNotFound):
        delete_or_deactivate_job_offer(job_offer.id)


@pytest.mark.django_db
def test_failed_delete_rolls_back_the_whole_cascade():
    job_offer = JobOfferFactory()
    question = RecruitmentQuestionFactory(job_offer=job_offer)
    answer = CandidateAnswerFactory(question=question)
    RecruitmentTestFactory(job_offer=job_offer)

    with mock.patch.object(DjangoJobOfferStore, 'delete_job_offer', side_effect=RuntimeError("db down")):
        with pytest.raises(RuntimeError):
            delete_or_deactivate_job_offer(job_offer.id)

    assert JobOffer.objects.filter(pk=job_offer.pk).exists()
    assert RecruitmentQuestion.objects.filter(pk=question.pk).exists()
    assert CandidateAnswer.objects.filter(pk=answer.pk).exists()
    assert RecruitmentTest.objects.filter(job_offer=job_offer).exists()


# --- DELETE /api/job-offers/<id>/ ---

@pytest.mark.django_db
def test_delete_endpoint_reports_deactivation(employer, employer_client):
    application = ApplicationFactory(job_offer__employer_profile=employer)
    url = reverse('job-offer-detail', args=[application.job_offer_id])

    response = employer_client.delete(url)

    assert response.status_code == status.HTTP_200_OK
    assert response.data['result'] == {
        "mode": "deactivated",
        "job_offer_id": application.job_offer_id,
        "application_count": 1,
    }
    assert response.data['message']


@pytest.mark.django_db
def test_delete_endpoint_deletes_unused_offer(employer, employer_client):
    job_offer = JobOfferFactory(employer_profile=employer)

    response = employer_client.delete(reverse('job-offer-detail', args=[job_offer.id]))

    assert response.status_code == status.HTTP_200_OK
    assert response.data['result']['mode'] == 'deleted'
    assert not JobOffer.objects.filter(pk=job_offer.pk).exists()


@pytest.mark.django_db
def test_delete_endpoint_hides_other_employers_offers(employer_client):
    job_offer = JobOfferFactory()

    response = employer_client.delete(reverse('job-offer-detail', args=[job_offer.id]))

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert JobOffer.objects.filter(pk=job_offer.pk).exists()


@pytest.mark.django_db
def test_deactivated_offer_leaves_public_listing(employer, employer_client, api_client):
    application = ApplicationFactory(job_offer__employer_profile=employer)
    job_offer_id = application.job_offer_id

    employer_client.delete(reverse('job-offer-detail', args=[job_offer_id]))

    listing = api_client.get(reverse('public-job-offer-list'))
    assert job_offer_id not in [offer['id'] for offer in listing.data['results']]
    detail = api_client.get(reverse('public-job-offer-detail', args=[job_offer_id]))
    assert detail.status_code == status.HTTP_404_NOT_FOUND
