from django.db import models


class RecruitmentQuestion(models.Model):
    """
    An employer-authored question attached to a job offer, answered by
    candidates while applying.
    """
    job_offer = models.ForeignKey('jobs.JobOffer', on_delete=models.PROTECT, related_name='questions')
    question = models.TextField()

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.question[:80]


class CandidateAnswer(models.Model):
    application = models.ForeignKey(
        'jobs.ApplicationForJobOffer',
        on_delete=models.PROTECT,
        related_name='answers'
    )
    question = models.ForeignKey(RecruitmentQuestion, on_delete=models.PROTECT, related_name='answers')
    answer = models.TextField(blank=True)

    def __str__(self):
        return f"Answer to question {self.question_id} (application {self.application_id})"


class RecruitmentTest(models.Model):
    # At most one test per job offer
    job_offer = models.OneToOneField('jobs.JobOffer', on_delete=models.PROTECT, related_name='recruitment_test')
    test_json = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Recruitment test for job offer {self.job_offer_id}"
