# ============================================
# tracker/serializers/board.py
# ============================================
"""Output shapes for the board, backlog, epics and roadmap views."""
from rest_framework import serializers
from tracker.constants import STATUSES, SwimlaneBy
from tracker.models import BoardConfig
from tracker.serializers.issue import IssueListOutputSerializer
from tracker.serializers.sprint import SprintOutputSerializer


class BoardConfigSerializer(serializers.ModelSerializer):
    class Meta:
        model = BoardConfig
        fields = ['swimlane_by', 'wip_limits', 'column_order']


class BoardConfigUpdateSerializer(serializers.Serializer):
    swimlane_by = serializers.ChoiceField(choices=SwimlaneBy.choices, required=False)
    wip_limits = serializers.DictField(
        child=serializers.IntegerField(min_value=0, allow_null=True), required=False
    )
    column_order = serializers.ListField(
        child=serializers.ChoiceField(choices=STATUSES.keys()), required=False, allow_empty=False
    )


class BoardColumnSerializer(serializers.Serializer):
    status = serializers.CharField()
    label = serializers.CharField()
    color = serializers.CharField()
    visible = serializers.BooleanField()
    wip_limit = serializers.IntegerField(allow_null=True)
    count = serializers.IntegerField()
    over_limit = serializers.BooleanField()
    issues = IssueListOutputSerializer(many=True)


class SwimlaneSerializer(serializers.Serializer):
    key = serializers.CharField(allow_null=True)
    label = serializers.CharField()
    count = serializers.IntegerField()
    issue_ids = serializers.SerializerMethodField()

    def get_issue_ids(self, lane):
        return [i.id for i in lane.issues]


class BacklogGroupSerializer(serializers.Serializer):
    sprint = SprintOutputSerializer(allow_null=True)
    label = serializers.CharField()
    count = serializers.IntegerField()
    story_points = serializers.IntegerField()
    issues = IssueListOutputSerializer(many=True)


class EpicProgressSerializer(serializers.Serializer):
    epic = IssueListOutputSerializer()
    total = serializers.IntegerField()
    done = serializers.IntegerField()
    percent = serializers.IntegerField()
    has_children = serializers.BooleanField()
    story_points = serializers.IntegerField()
    done_points = serializers.IntegerField()


class BarGeometrySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
    left_pct = serializers.FloatField()
    width_pct = serializers.FloatField()


class MonthHeaderSerializer(serializers.Serializer):
    label = serializers.CharField()
    start = serializers.DateField()
    days = serializers.IntegerField()
    width_pct = serializers.FloatField()


class RoadmapRowSerializer(serializers.Serializer):
    issue = IssueListOutputSerializer()
    scheduled = serializers.BooleanField()
    bar = BarGeometrySerializer(allow_null=True)
    progress = EpicProgressSerializer(allow_null=True)
