from django.db import models
from django.utils.translation import gettext_lazy as _


class Meeting(models.Model):
    class Type(models.TextChoices):
        ONLINE = 'ONLINE', _('Online')
        OFFLINE = 'OFFLINE', _('Offline')

    application = models.ForeignKey(
        'jobs.ApplicationForJobOffer',
        on_delete=models.CASCADE,
        related_name='meetings'
    )
    date_time = models.DateTimeField()
    type = models.CharField(max_length=10, choices=Type.choices)
    contributors = models.TextField(blank=True, null=True)
    online_meeting_url = models.URLField(blank=True, null=True)
    message = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-date_time']

    def __str__(self):
        return f"{self.get_type_display()} meeting on {self.date_time:%Y-%m-%d %H:%M}"
