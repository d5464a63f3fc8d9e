# studio_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from studio_core.clients.api.views import ClientViewSet
from studio_core.iam.api.session import SessionBootstrapView, SessionSelectView, SignOutView
from studio_core.marketing.api.views import CampaignViewSet
from studio_core.studios.api.views import (
    DashboardStatsView,
    LoyaltyConfigView,
    StudioSettingsView,
    UpcomingVisitsView,
)
from studio_core.visits.api.views import VisitViewSet

router = DefaultRouter()

router.register(r"clients", ClientViewSet, basename="clients")
router.register(r"visits", VisitViewSet, basename="visits")
router.register(r"marketing/campaigns", CampaignViewSet, basename="campaigns")

urlpatterns = [
    # Session (unscoped)
    path("session/bootstrap/", SessionBootstrapView.as_view(), name="session-bootstrap"),
    path("session/select/", SessionSelectView.as_view(), name="session-select"),
    path("session/sign-out/", SignOutView.as_view(), name="session-sign-out"),

    path("studio/settings/", StudioSettingsView.as_view(), name="studio-settings"),
    path("studio/loyalty/", LoyaltyConfigView.as_view(), name="studio-loyalty"),
    path("studio/dashboard/stats/", DashboardStatsView.as_view(), name="studio-dashboard-stats"),
    path("studio/dashboard/upcoming/", UpcomingVisitsView.as_view(), name="studio-dashboard-upcoming"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
