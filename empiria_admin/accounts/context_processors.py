# accounts/context_processors.py


def admin_user(request):
    """
    Injects the guarded admin row into every template as ``admin_user``.
    Only set on views wrapped with ``admin_required``.
    """
    return {"admin_user": getattr(request, "admin_user", None)}
