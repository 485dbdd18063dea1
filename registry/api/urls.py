from django.urls import path

from registry.api.views import (
    CitizenDetailView,
    CitizenGroupingView,
    CitizenListView,
    CitizenLookupView,
    MilitaryDetailView,
    MilitaryGroupingView,
    MilitaryListView,
    MilitaryLookupView,
    OverdueRequestsView,
    ReferenceDataView,
    ReminderDetailView,
    ReminderListView,
    ReminderLookupView,
    ReminderToggleView,
    RequestDetailView,
    RequestListView,
    RequestLookupView,
    SeedHolidayRemindersView,
    SeedOverdueRemindersView,
    StatisticsView,
)

urlpatterns = [
    # Citizens
    path("citizens/", CitizenListView.as_view(), name="citizen-list"),
    path("citizens/lookup/", CitizenLookupView.as_view(), name="citizen-lookup"),
    path("citizens/groupings/", CitizenGroupingView.as_view(), name="citizen-groupings"),
    path("citizens/<str:record_id>/", CitizenDetailView.as_view(), name="citizen-detail"),
    # Military personnel
    path("military/", MilitaryListView.as_view(), name="military-list"),
    path("military/lookup/", MilitaryLookupView.as_view(), name="military-lookup"),
    path("military/groupings/", MilitaryGroupingView.as_view(), name="military-groupings"),
    path("military/<str:record_id>/", MilitaryDetailView.as_view(), name="military-detail"),
    # Requests
    path("requests/", RequestListView.as_view(), name="request-list"),
    path("requests/lookup/", RequestLookupView.as_view(), name="request-lookup"),
    path("requests/overdue/", OverdueRequestsView.as_view(), name="request-overdue"),
    path("requests/<str:record_id>/", RequestDetailView.as_view(), name="request-detail"),
    # Reminders
    path("reminders/", ReminderListView.as_view(), name="reminder-list"),
    path("reminders/lookup/", ReminderLookupView.as_view(), name="reminder-lookup"),
    path(
        "reminders/seed-holidays/",
        SeedHolidayRemindersView.as_view(),
        name="reminder-seed-holidays",
    ),
    path(
        "reminders/seed-overdue/",
        SeedOverdueRemindersView.as_view(),
        name="reminder-seed-overdue",
    ),
    path(
        "reminders/<str:record_id>/toggle/", ReminderToggleView.as_view(), name="reminder-toggle"
    ),
    path("reminders/<str:record_id>/", ReminderDetailView.as_view(), name="reminder-detail"),
    # Dashboard and reference data
    path("statistics/", StatisticsView.as_view(), name="statistics"),
    path("reference/", ReferenceDataView.as_view(), name="reference-data"),
]
