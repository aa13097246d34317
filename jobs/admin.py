from django.contrib import admin
from .models import (
    ApplicationForJobOffer, ApplicationResponse, CandidateCV, CandidateProfile, EmployerProfile, JobOffer,
    Localization, ProfileLink,
)


admin.site.register(Localization)
admin.site.register(EmployerProfile)
admin.site.register(CandidateProfile)
admin.site.register(ProfileLink)
admin.site.register(CandidateCV)
admin.site.register(ApplicationForJobOffer)
admin.site.register(ApplicationResponse)


@admin.register(JobOffer)
class JobOfferAdmin(admin.ModelAdmin):
    list_display = ('name', 'employer_profile', 'is_active', 'expire_date')
    list_filter = ('is_active',)
    search_fields = ('name', 'employer_profile__company_name')
