# ============================================
# tracker/serializers/issue.py
# ============================================
from rest_framework import serializers
from tracker.constants import ISSUE_TYPES, PRIORITIES, STATUSES, IssueStatus
from tracker.models import Component, Issue, Label, Sprint, Version
from tracker.serializers.common import (
    DurationDisplayField, DurationField, User, UserSummarySerializer, meta_dict,
)


class _IssueInputFields(serializers.Serializer):
    """Fields shared by create and update; every one optional here"""
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=Issue.IssueType.choices, required=False)
    priority = serializers.ChoiceField(choices=Issue.Priority.choices, required=False)
    status = serializers.ChoiceField(choices=Issue.Status.choices, required=False)
    assignee = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)
    parent = serializers.PrimaryKeyRelatedField(queryset=Issue.objects.all(), required=False, allow_null=True)
    sprint = serializers.PrimaryKeyRelatedField(queryset=Sprint.objects.all(), required=False, allow_null=True)
    fix_version = serializers.PrimaryKeyRelatedField(queryset=Version.objects.all(), required=False, allow_null=True)
    affects_version = serializers.PrimaryKeyRelatedField(queryset=Version.objects.all(), required=False, allow_null=True)
    labels = serializers.PrimaryKeyRelatedField(queryset=Label.objects.all(), many=True, required=False)
    components = serializers.PrimaryKeyRelatedField(queryset=Component.objects.all(), many=True, required=False)
    story_points = serializers.IntegerField(min_value=0, max_value=100, required=False, allow_null=True)
    original_estimate = DurationField(required=False, allow_null=True)
    time_remaining = DurationField(required=False, allow_null=True)
    start_date = serializers.DateField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)
    sort_order = serializers.IntegerField(required=False)


class IssueCreateSerializer(_IssueInputFields):
    title = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(choices=Issue.IssueType.choices, default=Issue.IssueType.TASK)
    priority = serializers.ChoiceField(choices=Issue.Priority.choices, default=Issue.Priority.MEDIUM)
    status = serializers.ChoiceField(choices=Issue.Status.choices, default=IssueStatus.TODO)


class IssueUpdateSerializer(_IssueInputFields):
    pass


class IssueBulkUpdateSerializer(serializers.Serializer):
    issue_ids = serializers.ListField(child=serializers.IntegerField(), min_length=1, max_length=500)
    status = serializers.ChoiceField(choices=Issue.Status.choices, required=False)
    priority = serializers.ChoiceField(choices=Issue.Priority.choices, required=False)
    type = serializers.ChoiceField(choices=Issue.IssueType.choices, required=False)
    assignee = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)
    sprint = serializers.PrimaryKeyRelatedField(queryset=Sprint.objects.all(), required=False, allow_null=True)

    def validate(self, attrs):
        if len(attrs) == 1:
            raise serializers.ValidationError("Nothing to update")
        return attrs


class _NamedRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class LabelRefSerializer(_NamedRefSerializer):
    color = serializers.CharField()


class IssueListOutputSerializer(serializers.ModelSerializer):
    """Lighter serializer for list, board and backlog views"""
    key = serializers.CharField(read_only=True)
    assignee = UserSummarySerializer(read_only=True)
    type_meta = serializers.SerializerMethodField()
    priority_meta = serializers.SerializerMethodField()
    status_meta = serializers.SerializerMethodField()

    class Meta:
        model = Issue
        fields = [
            'id', 'key', 'issue_number', 'project', 'title', 'type', 'type_meta',
            'priority', 'priority_meta', 'status', 'status_meta', 'assignee',
            'parent', 'sprint', 'story_points', 'start_date', 'due_date',
            'sort_order', 'created_at', 'updated_at'
        ]

    def get_type_meta(self, obj):
        return meta_dict(ISSUE_TYPES, obj.type)

    def get_priority_meta(self, obj):
        return meta_dict(PRIORITIES, obj.priority)

    def get_status_meta(self, obj):
        return meta_dict(STATUSES, obj.status)


class IssueOutputSerializer(IssueListOutputSerializer):
    reporter = UserSummarySerializer(read_only=True)
    project_key = serializers.CharField(source='project.key', read_only=True)
    parent_key = serializers.SerializerMethodField()
    sprint_name = serializers.CharField(source='sprint.name', read_only=True, default=None)
    labels = LabelRefSerializer(many=True, read_only=True)
    components = _NamedRefSerializer(many=True, read_only=True)
    original_estimate_display = DurationDisplayField(source='original_estimate')
    time_spent_display = DurationDisplayField(source='time_spent')
    time_remaining_display = DurationDisplayField(source='time_remaining')

    class Meta(IssueListOutputSerializer.Meta):
        fields = IssueListOutputSerializer.Meta.fields + [
            'description', 'reporter', 'project_key', 'parent_key', 'sprint_name',
            'fix_version', 'affects_version', 'labels', 'components',
            'original_estimate', 'original_estimate_display',
            'time_spent', 'time_spent_display',
            'time_remaining', 'time_remaining_display',
        ]

    def get_parent_key(self, obj):
        return obj.parent.key if obj.parent_id else None
