from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin
from .models import User
from .services import anonymize_account


@admin.register(User)
class JobOnFireUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'is_deleted', 'is_staff')
    list_filter = ('role', 'is_deleted', 'is_staff')
    fieldsets = UserAdmin.fieldsets + (
        ('JobOnFire', {'fields': ('role', 'register_date', 'is_deleted')}),
    )
    actions = ['anonymize_accounts']

    # Accounts are anonymized, never deleted
    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description="Anonymize selected accounts")
    def anonymize_accounts(self, request, queryset):
        count = 0
        for user in queryset.filter(is_deleted=False):
            anonymize_account(user)
            count += 1
        self.message_user(request, f"{count} account(s) anonymized.", messages.SUCCESS)
