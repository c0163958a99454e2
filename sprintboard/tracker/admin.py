from django.contrib import admin
from .models import (
    ActivityLog, Component, Issue, Label, Notification, Project, ProjectMember,
    SavedFilter, Sprint, Version, Workflow, WorkflowTransition,
)

admin.site.register(Label)
admin.site.register(Component)
admin.site.register(SavedFilter)


class MemberInline(admin.TabularInline):
    model = ProjectMember
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("key", "name", "lead", "created_at")
    search_fields = ("key", "name")
    readonly_fields = ("last_issue_number",)
    inlines = [MemberInline]


@admin.register(Issue)
class IssueAdmin(admin.ModelAdmin):
    list_display = ("key", "title", "type", "priority", "status", "assignee", "sprint", "updated_at")
    list_filter = ("project", "type", "priority", "status")
    search_fields = ("title", "project__key")
    readonly_fields = ("issue_number", "time_spent")  # assigned by the service / work logs
    raw_id_fields = ("parent", "assignee", "reporter")


@admin.register(Sprint)
class SprintAdmin(admin.ModelAdmin):
    list_display = ("name", "project", "status", "start_date", "end_date", "completed_at")
    list_filter = ("project", "status")
    readonly_fields = ("committed_points", "completed_points", "completed_at")


@admin.register(Version)
class VersionAdmin(admin.ModelAdmin):
    list_display = ("name", "project", "status", "release_date")
    list_filter = ("project", "status")


class TransitionInline(admin.TabularInline):
    model = WorkflowTransition
    extra = 0


@admin.register(Workflow)
class WorkflowAdmin(admin.ModelAdmin):
    list_display = ("name", "project")
    inlines = [TransitionInline]


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ("issue", "user", "action", "field", "created_at")
    list_filter = ("action",)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("user", "kind", "title", "is_read", "created_at")
    list_filter = ("kind", "is_read")
