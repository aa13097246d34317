import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Count

from recruitment.models import CandidateAnswer, RecruitmentQuestion, RecruitmentTest
from .models import ApplicationForJobOffer, ApplicationResponse, JobOffer

logger = logging.getLogger(__name__)


class JobOfferNotFound(Exception):
    def __init__(self, job_offer_id):
        super().__init__(f"Job offer {job_offer_id} does not exist")
        self.job_offer_id = job_offer_id


class ApplicationError(Exception):
    """A candidate or employer action on an application broke a business rule."""

    def __init__(self, message, status_code=400, **details):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


# --- JOB OFFER LIFECYCLE ---

@dataclass(frozen=True)
class Deactivated:
    """The offer had applications: it was switched off and every row kept."""
    job_offer_id: int
    application_count: int

    mode = 'deactivated'

    def as_dict(self):
        return {
            "mode": self.mode,
            "job_offer_id": self.job_offer_id,
            "application_count": self.application_count,
        }


@dataclass(frozen=True)
class Deleted:
    """The offer had no applications: it was removed with its questions, answers and test."""
    job_offer_id: int
    application_count: int = 0

    mode = 'deleted'

    def as_dict(self):
        return {
            "mode": self.mode,
            "job_offer_id": self.job_offer_id,
            "application_count": self.application_count,
        }


class DjangoJobOfferStore:
    """
    Database operations used by JobOfferLifecycle, backed by the Django ORM.
    Swap in another object with the same methods to run the rule elsewhere.
    """

    def atomic(self):
        return transaction.atomic()

    def lock_job_offer(self, job_offer_id):
        """Row-lock the offer until the surrounding transaction ends. False if it does not exist."""
        locked = list(
            JobOffer.objects.select_for_update().filter(pk=job_offer_id).values_list('pk', flat=True)
        )
        return bool(locked)

    def count_applications(self, job_offer_id):
        return ApplicationForJobOffer.objects.filter(job_offer_id=job_offer_id).count()

    def deactivate(self, job_offer_id):
        JobOffer.objects.filter(pk=job_offer_id).update(is_active=False)

    def question_ids(self, job_offer_id):
        return list(RecruitmentQuestion.objects.filter(job_offer_id=job_offer_id).values_list('id', flat=True))

    def delete_answers(self, question_ids):
        CandidateAnswer.objects.filter(question_id__in=question_ids).delete()

    def delete_questions(self, question_ids):
        RecruitmentQuestion.objects.filter(id__in=question_ids).delete()

    def delete_test(self, job_offer_id):
        RecruitmentTest.objects.filter(job_offer_id=job_offer_id).delete()

    def delete_job_offer(self, job_offer_id):
        JobOffer.objects.filter(pk=job_offer_id).delete()


class JobOfferLifecycle:
    """
    Decides how a job offer leaves the board.

    An offer that candidates applied to is only deactivated, so their
    applications stay queryable. An offer nobody applied to is hard deleted
    together with the rows it exclusively owns. The count, the decision and
    the mutation share one transaction holding a lock on the offer row;
    creating an application takes the same lock, so the count cannot go
    stale between the check and the delete.
    """

    def __init__(self, store=None):
        self.store = store or DjangoJobOfferStore()

    def remove(self, job_offer_id):
        store = self.store

        with store.atomic():
            if not store.lock_job_offer(job_offer_id):
                raise JobOfferNotFound(job_offer_id)

            application_count = store.count_applications(job_offer_id)

            if application_count > 0:
                store.deactivate(job_offer_id)
                outcome = Deactivated(job_offer_id=job_offer_id, application_count=application_count)
            else:
                question_ids = store.question_ids(job_offer_id)
                if question_ids:
                    # Answers reference questions, so they go first
                    store.delete_answers(question_ids)
                    store.delete_questions(question_ids)
                store.delete_test(job_offer_id)
                store.delete_job_offer(job_offer_id)
                outcome = Deleted(job_offer_id=job_offer_id)

        logger.info("Job offer %s %s (applications: %s)", job_offer_id, outcome.mode, outcome.application_count)
        return outcome


def delete_or_deactivate_job_offer(job_offer_id, store=None):
    return JobOfferLifecycle(store).remove(job_offer_id)


# --- APPLICATIONS ---

STATUS_KEYS = {
    ApplicationForJobOffer.Status.PENDING: 'pending',
    ApplicationForJobOffer.Status.ACCEPTED: 'accepted',
    ApplicationForJobOffer.Status.REJECTED: 'rejected',
    ApplicationForJobOffer.Status.CANCELED: 'canceled',
}


def application_status_summary(queryset):
    """
    Count applications per status.
    Returns {total, pending, accepted, rejected, canceled}.
    """
    summary = {"total": 0, "pending": 0, "accepted": 0, "rejected": 0, "canceled": 0}
    for row in queryset.order_by().prefetch_related(None).values('status').annotate(count=Count('id')):
        key = STATUS_KEYS.get(row['status'])
        if key:
            summary[key] = row['count']
        summary['total'] += row['count']
    return summary


class ApplicationManager:
    """
    Writes on applications and their answers. Each method runs in its own
    transaction.
    """

    @staticmethod
    def _check_answers(job_offer, answers):
        valid_ids = set(job_offer.questions.values_list('id', flat=True))
        invalid = [a['recruitment_question_id'] for a in answers if a['recruitment_question_id'] not in valid_ids]
        if invalid:
            raise ApplicationError(
                "Some questions do not belong to this job offer.",
                invalid_question_ids=invalid,
            )

    @staticmethod
    def _create_answers(application, answers):
        CandidateAnswer.objects.bulk_create([
            CandidateAnswer(
                application=application,
                question_id=a['recruitment_question_id'],
                answer=a.get('answer') or '',
            )
            for a in answers
        ])

    @classmethod
    def apply(cls, candidate_profile, job_offer_id, cv, message='', answers=None):
        """
        Submit an application with optional answers to the offer's questions.
        Locks the job offer row so a concurrent delete sees this application.
        """
        answers = answers or []

        with transaction.atomic():
            job_offer = JobOffer.objects.select_for_update().open().filter(pk=job_offer_id).first()
            if job_offer is None:
                raise JobOfferNotFound(job_offer_id)

            if cv.candidate_profile_id != candidate_profile.id or cv.is_deleted:
                raise ApplicationError("CV not found or does not belong to this candidate.", status_code=404)

            if ApplicationForJobOffer.objects.filter(job_offer=job_offer, candidate_profile=candidate_profile).exists():
                raise ApplicationError("You have already applied for this job offer.")

            if answers:
                cls._check_answers(job_offer, answers)

            application = ApplicationForJobOffer.objects.create(
                job_offer=job_offer,
                candidate_profile=candidate_profile,
                cv=cv,
                message=message or '',
            )
            cls._create_answers(application, answers)

        logger.info("Application %s created for job offer %s", application.id, job_offer_id)
        return application

    @classmethod
    @transaction.atomic
    def replace_answers(cls, application, answers):
        if application.status != ApplicationForJobOffer.Status.PENDING:
            raise ApplicationError("Answers can only be changed on PENDING applications.")

        cls._check_answers(application.job_offer, answers)
        application.answers.all().delete()
        cls._create_answers(application, answers)
        return application

    @staticmethod
    def update_by_candidate(application, status=None, message=None):
        """Candidates may edit their message or cancel a PENDING application."""
        if status and status != ApplicationForJobOffer.Status.CANCELED:
            raise ApplicationError("Candidates can only cancel their applications.", status_code=403)

        if application.status != ApplicationForJobOffer.Status.PENDING:
            raise ApplicationError("Only PENDING applications can be changed.")

        if status:
            application.status = status
        if message is not None:
            application.message = message
        application.save(update_fields=['status', 'message'])
        return application

    @staticmethod
    @transaction.atomic
    def withdraw(application):
        """Delete a PENDING or CANCELED application together with its answers."""
        if application.status not in (ApplicationForJobOffer.Status.PENDING, ApplicationForJobOffer.Status.CANCELED):
            raise ApplicationError("Only PENDING or CANCELED applications can be deleted.")

        application_id = application.id
        application.answers.all().delete()
        application.delete()
        logger.info("Application %s withdrawn", application_id)

    @staticmethod
    @transaction.atomic
    def set_status(application, status, response=None):
        """Employer decision on an application, with an optional written response."""
        if status not in (
            ApplicationForJobOffer.Status.PENDING,
            ApplicationForJobOffer.Status.ACCEPTED,
            ApplicationForJobOffer.Status.REJECTED,
        ):
            raise ApplicationError("Invalid application status.")

        application.status = status
        application.save(update_fields=['status'])

        if response and response.strip():
            ApplicationResponse.objects.update_or_create(
                application=application,
                defaults={'response': response},
            )
        return application
