from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from registry import reference
from registry.api.serializers import (
    CitizenSerializer,
    MilitarySerializer,
    ReminderSerializer,
    RequestSerializer,
    SeedHolidaysSerializer,
)
from registry.query.criteria import FilterCriteria
from registry.services.citizen_service import CitizenService
from registry.services.military_service import MilitaryService
from registry.services.reminder_service import ReminderService
from registry.services.request_service import RequestService
from registry.services.statistics_service import StatisticsService

STATUS_BY_ERROR = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "store": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def actor_of(request):
    """Primary key of the signed-in user, stamped on writes as ``created_by``."""
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return str(user.pk)
    return None


def failure_response(result):
    body = {"message": result["message"]}
    if result.get("field"):
        body["field"] = result["field"]
    return Response(
        body, status=STATUS_BY_ERROR.get(result.get("error"), status.HTTP_400_BAD_REQUEST)
    )


def page_number(params):
    try:
        return int(params.get("page", 1))
    except (TypeError, ValueError):
        raise ValueError("Page must be a number")


class RecordListView(APIView):
    """
    Paginated search and creation.

    GET  ?search=<term>&page=<n>&<filter>=<value>...
    POST <record payload>

    A failed load answers 503 with a "could not load" message; a search with no
    matches answers 200 with empty results and a "no results" message.
    """

    service_class = None
    serializer_class = None

    def get(self, request):
        service = self.service_class()
        try:
            page = page_number(request.query_params)
        except ValueError as e:
            return Response({"message": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        criteria = FilterCriteria.from_params(service.search, request.query_params)
        result = service.list(request.query_params.get("search", ""), criteria, page)

        if result["success"]:
            return Response({"message": result["message"], **result["data"]}, status=status.HTTP_200_OK)
        else:
            return failure_response(result)

    def post(self, request):
        serializer = self.serializer_class(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        service = self.service_class()
        result = service.create(serializer.validated_data, actor=actor_of(request))

        if result["success"]:
            return Response(result["data"], status=status.HTTP_201_CREATED)
        else:
            return failure_response(result)


class RecordDetailView(APIView):
    """GET, PUT, PATCH and DELETE on one record."""

    service_class = None
    serializer_class = None

    def get(self, request, record_id):
        result = self.service_class().get(record_id)

        if result["success"]:
            return Response(result["data"], status=status.HTTP_200_OK)
        else:
            return failure_response(result)

    def put(self, request, record_id):
        return self._update(request, record_id, partial=False)

    def patch(self, request, record_id):
        return self._update(request, record_id, partial=True)

    def _update(self, request, record_id, partial):
        serializer = self.serializer_class(data=request.data, partial=partial)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.service_class().update(
            record_id, serializer.validated_data, actor=actor_of(request)
        )

        if result["success"]:
            return Response(result["data"], status=status.HTTP_200_OK)
        else:
            return failure_response(result)

    def delete(self, request, record_id):
        result = self.service_class().delete(record_id, actor=actor_of(request))

        if result["success"]:
            return Response({"message": result["message"]}, status=status.HTTP_200_OK)
        else:
            return failure_response(result)


class RecordLookupView(APIView):
    """
    Short picker list matched on name fields.

    GET ?search=<term>&limit=<n>
    """

    service_class = None

    def get(self, request):
        try:
            limit = int(request.query_params["limit"]) if "limit" in request.query_params else None
        except ValueError:
            return Response({"message": "Limit must be a number"}, status=status.HTTP_400_BAD_REQUEST)

        result = self.service_class().lookup(request.query_params.get("search", ""), limit)

        if result["success"]:
            return Response({"results": result["data"]}, status=status.HTTP_200_OK)
        else:
            return failure_response(result)


class RecordGroupingView(APIView):
    """
    Facet counts for the rows a list search would return.

    GET ?search=<term>&<filter>=<value>...
    """

    service_class = None

    def get(self, request):
        service = self.service_class()
        criteria = FilterCriteria.from_params(service.search, request.query_params)
        result = service.groupings(request.query_params.get("search", ""), criteria)

        if result["success"]:
            return Response(result["data"], status=status.HTTP_200_OK)
        else:
            return failure_response(result)


class CitizenListView(RecordListView):
    service_class = CitizenService
    serializer_class = CitizenSerializer


class CitizenDetailView(RecordDetailView):
    service_class = CitizenService
    serializer_class = CitizenSerializer


class CitizenLookupView(RecordLookupView):
    service_class = CitizenService


class CitizenGroupingView(RecordGroupingView):
    service_class = CitizenService


class MilitaryListView(RecordListView):
    service_class = MilitaryService
    serializer_class = MilitarySerializer


class MilitaryDetailView(RecordDetailView):
    service_class = MilitaryService
    serializer_class = MilitarySerializer


class MilitaryLookupView(RecordLookupView):
    service_class = MilitaryService


class MilitaryGroupingView(RecordGroupingView):
    service_class = MilitaryService


class RequestListView(RecordListView):
    service_class = RequestService
    serializer_class = RequestSerializer


class RequestDetailView(RecordDetailView):
    service_class = RequestService
    serializer_class = RequestSerializer


class RequestLookupView(RecordLookupView):
    service_class = RequestService


class OverdueRequestsView(APIView):
    """
    Pending requests sent at least ``REGISTRY_OVERDUE_DAYS`` days ago.

    GET /api/v1/requests/overdue/
    """

    def get(self, request):
        result = RequestService().overdue()

        if result["success"]:
            return Response(
                {"results": result["data"], "count": len(result["data"])},
                status=status.HTTP_200_OK,
            )
        else:
            return failure_response(result)


class ReminderListView(RecordListView):
    service_class = ReminderService
    serializer_class = ReminderSerializer


class ReminderDetailView(RecordDetailView):
    service_class = ReminderService
    serializer_class = ReminderSerializer


class ReminderLookupView(RecordLookupView):
    service_class = ReminderService


class ReminderToggleView(APIView):
    """POST /api/v1/reminders/{id}/toggle/"""

    def post(self, request, record_id):
        result = ReminderService().toggle_complete(record_id, actor=actor_of(request))

        if result["success"]:
            return Response(result["data"], status=status.HTTP_200_OK)
        else:
            return failure_response(result)


class SeedHolidayRemindersView(APIView):
    """
    Create reminders for the holidays of a year (current year by default).

    POST /api/v1/reminders/seed-holidays/
    {"year": 2025}
    """

    def post(self, request):
        serializer = SeedHolidaysSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = ReminderService().seed_holiday_reminders(
            serializer.validated_data.get("year"), actor=actor_of(request)
        )

        if result["success"]:
            return Response(
                {"message": result["message"], **result["data"]}, status=status.HTTP_201_CREATED
            )
        else:
            return failure_response(result)


class SeedOverdueRemindersView(APIView):
    """POST /api/v1/reminders/seed-overdue/"""

    def post(self, request):
        result = ReminderService().seed_overdue_reminders(actor=actor_of(request))

        if result["success"]:
            return Response(
                {"message": result["message"], **result["data"]}, status=status.HTTP_201_CREATED
            )
        else:
            return failure_response(result)


class StatisticsView(APIView):
    """
    Dashboard statistics.

    GET /api/v1/statistics/?window=week|month|year|<days>
    """

    def get(self, request):
        window = request.query_params.get("window", "month")
        if window.isdigit():
            window = int(window)

        result = StatisticsService().dashboard(window)

        if result["success"]:
            return Response(result["data"], status=status.HTTP_200_OK)
        else:
            return failure_response(result)


class ReferenceDataView(APIView):
    """Valid-value lists for the record forms. GET /api/v1/reference/"""

    def get(self, request):
        return Response(
            {
                "municipalities": reference.MUNICIPALITIES,
                "electoral_districts": reference.ELECTORAL_DISTRICTS,
                "military_ranks": reference.MILITARY_RANKS,
                "esso_letters": reference.ESSO_LETTERS,
                "esso_years": reference.esso_years(),
                "request_categories": reference.REQUEST_CATEGORIES,
                "request_statuses": reference.REQUEST_STATUSES,
                "reminder_types": reference.REMINDER_TYPES,
            },
            status=status.HTTP_200_OK,
        )
