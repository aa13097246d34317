from rest_framework import permissions

class IsCandidate(permissions.BasePermission):
    """
    Only authenticated users with the CANDIDATE role.
    """
    message = "Access restricted to candidates."

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.is_candidate
        )

class IsEmployer(permissions.BasePermission):
    """
    Only authenticated users with the EMPLOYER role.
    """
    message = "Access restricted to employers."

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.is_employer
        )
