import logging

from django.db import IntegrityError, transaction

from jobs.models import JobOffer
from .models import CandidateAnswer, RecruitmentTest

logger = logging.getLogger(__name__)


class RecruitmentTestExists(Exception):
    def __init__(self, job_offer_id):
        super().__init__(f"Job offer {job_offer_id} already has a recruitment test")
        self.job_offer_id = job_offer_id


@transaction.atomic
def delete_question(question):
    """Remove a question together with every candidate answer to it."""
    question_id = question.id
    CandidateAnswer.objects.filter(question_id=question_id).delete()
    question.delete()
    logger.info("Recruitment question %s deleted", question_id)


def create_recruitment_test(job_offer, test_json):
    """
    Attach a test to a job offer. An offer holds at most one test; a second
    one raises RecruitmentTestExists.
    """
    try:
        with transaction.atomic():
            JobOffer.objects.select_for_update().get(pk=job_offer.pk)
            if RecruitmentTest.objects.filter(job_offer=job_offer).exists():
                raise RecruitmentTestExists(job_offer.pk)
            test = RecruitmentTest.objects.create(job_offer=job_offer, test_json=test_json)
    except IntegrityError:
        raise RecruitmentTestExists(job_offer.pk)

    logger.info("Recruitment test %s created for job offer %s", test.id, job_offer.pk)
    return test
