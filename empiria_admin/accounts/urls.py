from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    # Identity provider
    path("auth/login/", views.login, name="login"),
    path("auth/callback/", views.callback, name="callback"),
    path("auth/logout/", views.logout, name="logout"),
    path("unauthorized/", views.unauthorized, name="unauthorized"),
    # Users
    path("dashboard/users/", views.user_list, name="user_list"),
    path("dashboard/users/<uuid:user_id>/", views.user_detail, name="user_detail"),
    path(
        "dashboard/users/<uuid:user_id>/role/",
        views.user_update_role,
        name="user_update_role",
    ),
    path(
        "dashboard/users/<uuid:user_id>/delete/",
        views.user_soft_delete,
        name="user_soft_delete",
    ),
]
