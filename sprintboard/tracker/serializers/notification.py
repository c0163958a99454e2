# ============================================
# tracker/serializers/notification.py
# ============================================
from rest_framework import serializers
from tracker.models import Notification, Project, SavedFilter


class NotificationOutputSerializer(serializers.ModelSerializer):
    issue_key = serializers.SerializerMethodField()

    class Meta:
        model = Notification
        fields = ['id', 'kind', 'title', 'message', 'issue', 'issue_key', 'is_read', 'created_at']

    def get_issue_key(self, obj):
        return obj.issue.key if obj.issue_id else None


class SavedFilterCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    project = serializers.PrimaryKeyRelatedField(queryset=Project.objects.all(), required=False, allow_null=True)
    criteria = serializers.DictField()


class SavedFilterOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = SavedFilter
        fields = ['id', 'name', 'project', 'criteria', 'created_at']
