from django.contrib import admin

from registry.models import Citizen, MilitaryPersonnel, Reminder, Request, UserProfile


@admin.register(Citizen)
class CitizenAdmin(admin.ModelAdmin):
    list_display = ("surname", "name", "mobile_phone", "municipality", "area", "created_at")
    list_filter = ("municipality", "electoral_district", "area")
    search_fields = ("surname", "name", "mobile_phone", "landline_phone", "email")
    readonly_fields = ("created_at", "updated_at", "created_by")


@admin.register(MilitaryPersonnel)
class MilitaryPersonnelAdmin(admin.ModelAdmin):
    list_display = ("surname", "name", "rank", "esso", "service_unit", "send_date")
    list_filter = ("rank", "esso_year", "esso_letter")
    search_fields = ("surname", "name", "esso", "military_id", "service_unit")
    readonly_fields = ("esso", "created_at", "updated_at", "created_by")
    fieldsets = (
        ("Person", {"fields": ("surname", "name", "rank", "military_id")}),
        ("Service", {"fields": ("service_unit", "wish", "send_date")}),
        ("ESSO", {"fields": ("esso_year", "esso_letter", "esso")}),
        (
            "Additional Information",
            {"fields": ("comments", "created_at", "updated_at", "created_by"), "classes": ("collapse",)},
        ),
    )


@admin.register(Request)
class RequestAdmin(admin.ModelAdmin):
    list_display = ("request_type", "status", "citizen", "military_personnel", "send_date", "completion_date")
    list_filter = ("status", "send_date")
    search_fields = ("request_type", "description", "notes")
    readonly_fields = ("created_at", "updated_at", "created_by")


@admin.register(Reminder)
class ReminderAdmin(admin.ModelAdmin):
    list_display = ("reminder_date", "title", "reminder_type", "is_completed")
    list_filter = ("reminder_type", "is_completed")
    search_fields = ("title", "description")
    readonly_fields = ("created_at", "created_by")


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "full_name", "role", "is_active", "last_login_at", "last_login_ip")
    list_filter = ("role", "is_active")
    search_fields = ("user__username", "full_name")
    readonly_fields = ("last_login_at", "last_login_ip", "created_at", "updated_at")
