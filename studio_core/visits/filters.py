# studio_core/visits/filters.py
import django_filters

from studio_core.visits.models import Visit


class VisitFilter(django_filters.FilterSet):
    client = django_filters.UUIDFilter(field_name="client_id")
    professional = django_filters.NumberFilter(field_name="professional_id")
    performed_from = django_filters.DateFilter(field_name="performed_date", lookup_expr="gte")
    performed_to = django_filters.DateFilter(field_name="performed_date", lookup_expr="lte")

    class Meta:
        model = Visit
        fields = ["client", "professional", "status", "service_type"]
