from django.apps import apps
from django.contrib import admin
from django.urls import path, re_path
from django.conf import settings
from django.conf.urls.static import static
from projects.views import ProjectViewSet

projects_app = apps.get_app_config("projects")
injected = {"store": projects_app.store, "trigger": projects_app.trigger}


urlpatterns = [
    path('admin/', admin.site.urls),
    re_path(
        r"^api/projects/?$",
        ProjectViewSet.as_view({"post": "create"}, **injected),
        name="projects-list",
    ),
    re_path(
        r"^api/projects/(?P<pk>[^/.]+)/?$",
        ProjectViewSet.as_view({"get": "retrieve"}, **injected),
        name="projects-detail",
    ),
    re_path(
        r"^api/projects/(?P<pk>[^/.]+)/process/?$",
        ProjectViewSet.as_view({"post": "process"}, **injected),
        name="projects-process",
    ),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
