# ============================================
# tracker/serializers/activity.py
# ============================================
from rest_framework import serializers
from tracker.constants import LINK_TYPES, LinkType
from tracker.models import ActivityLog, Attachment, Issue, IssueLink, Watcher, WorkLog
from tracker.serializers.common import DurationDisplayField, DurationField, UserSummarySerializer


class ActivityOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    issue_key = serializers.CharField(source='issue.key', read_only=True)

    class Meta:
        model = ActivityLog
        fields = ['id', 'issue', 'issue_key', 'user', 'action', 'field', 'old_value', 'new_value', 'created_at']


class LinkCreateSerializer(serializers.Serializer):
    target = serializers.PrimaryKeyRelatedField(queryset=Issue.objects.all())
    link_type = serializers.ChoiceField(choices=LinkType.choices)


class LinkOutputSerializer(serializers.ModelSerializer):
    """Seen from ``direction``: outgoing rows show the link label, incoming ones its inverse"""
    label = serializers.SerializerMethodField()
    direction = serializers.SerializerMethodField()
    issue = serializers.SerializerMethodField()

    class Meta:
        model = IssueLink
        fields = ['id', 'source', 'target', 'link_type', 'label', 'direction', 'issue', 'created_at']

    def _incoming(self, obj):
        return self.context.get('direction') == 'incoming'

    def get_direction(self, obj):
        return 'incoming' if self._incoming(obj) else 'outgoing'

    def get_label(self, obj):
        meta = LINK_TYPES.get(obj.link_type)
        return (meta.inverse or meta.label) if self._incoming(obj) else meta.label

    def get_issue(self, obj):
        other = obj.source if self._incoming(obj) else obj.target
        return {'id': other.id, 'key': other.key, 'title': other.title, 'status': other.status}


class WatcherOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = Watcher
        fields = ['id', 'issue', 'user', 'created_at']


class WorkLogCreateSerializer(serializers.Serializer):
    time_spent = DurationField()
    description = serializers.CharField(required=False, allow_blank=True, default='')
    started_at = serializers.DateTimeField(required=False, allow_null=True)


class WorkLogOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    time_spent_display = DurationDisplayField(source='time_spent')

    class Meta:
        model = WorkLog
        fields = ['id', 'issue', 'user', 'time_spent', 'time_spent_display', 'description', 'started_at', 'created_at']


class AttachmentUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


class AttachmentOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    url = serializers.SerializerMethodField()

    class Meta:
        model = Attachment
        fields = ['id', 'issue', 'user', 'filename', 'mime_type', 'size', 'url', 'created_at']

    def get_url(self, obj):
        if not obj.file:
            return None
        request = self.context.get('request')
        url = obj.file.url
        return request.build_absolute_uri(url) if request else url
