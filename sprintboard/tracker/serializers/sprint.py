# ============================================
# tracker/serializers/sprint.py
# ============================================
from rest_framework import serializers
from tracker.constants import SPRINT_STATUSES
from tracker.models import Sprint
from tracker.serializers.common import meta_dict
from tracker.serializers.issue import IssueListOutputSerializer


class SprintCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    goal = serializers.CharField(required=False, allow_blank=True, default='')
    start_date = serializers.DateTimeField(required=False, allow_null=True)
    end_date = serializers.DateTimeField(required=False, allow_null=True)


class SprintUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    goal = serializers.CharField(required=False, allow_blank=True)
    start_date = serializers.DateTimeField(required=False, allow_null=True)
    end_date = serializers.DateTimeField(required=False, allow_null=True)

    def to_internal_value(self, data):
        if 'status' in data:
            raise serializers.ValidationError(
                {'status': ["Use the start / complete actions to change sprint status"]}
            )
        return super().to_internal_value(data)


class SprintOutputSerializer(serializers.ModelSerializer):
    status_meta = serializers.SerializerMethodField()
    issue_count = serializers.IntegerField(read_only=True, required=False)
    done_count = serializers.IntegerField(read_only=True, required=False)
    total_points = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Sprint
        fields = [
            'id', 'project', 'name', 'goal', 'status', 'status_meta',
            'start_date', 'end_date', 'completed_at',
            'committed_points', 'completed_points',
            'issue_count', 'done_count', 'total_points', 'created_at'
        ]

    def get_status_meta(self, obj):
        return meta_dict(SPRINT_STATUSES, obj.status)


class SprintCompletionSerializer(serializers.Serializer):
    sprint = SprintOutputSerializer()
    completed_issues = serializers.IntegerField()
    moved_to_backlog = serializers.IntegerField()


class SprintReportSerializer(serializers.Serializer):
    sprint = SprintOutputSerializer()
    completed = IssueListOutputSerializer(many=True)
    incomplete = IssueListOutputSerializer(many=True)
    stats = serializers.SerializerMethodField()

    def get_stats(self, report):
        return {
            'total_issues': report.total,
            'completed_issues': len(report.completed),
            'incomplete_issues': len(report.incomplete),
            'total_points': report.completed_points + report.incomplete_points,
            'completed_points': report.completed_points,
            'incomplete_points': report.incomplete_points,
            'percent': report.percent,
        }


class VelocityPointSerializer(serializers.Serializer):
    sprint_id = serializers.IntegerField(source='sprint.id')
    sprint_name = serializers.CharField(source='sprint.name')
    committed = serializers.IntegerField()
    completed = serializers.IntegerField()


class BurndownPointSerializer(serializers.Serializer):
    day = serializers.DateField()
    ideal = serializers.FloatField()
    remaining = serializers.IntegerField(allow_null=True)
