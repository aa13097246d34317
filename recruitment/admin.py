from django.contrib import admin
from .models import CandidateAnswer, RecruitmentQuestion, RecruitmentTest


admin.site.register(RecruitmentQuestion)
admin.site.register(CandidateAnswer)
admin.site.register(RecruitmentTest)
