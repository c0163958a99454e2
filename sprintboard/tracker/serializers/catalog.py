# ============================================
# tracker/serializers/catalog.py
# ============================================
from rest_framework import serializers
from tracker.constants import VERSION_STATUSES, VersionStatus
from tracker.models import Component, Label, Version
from tracker.serializers.common import User, UserSummarySerializer, meta_dict

COLOR_RE = r'^#[0-9A-Fa-f]{6}$'


class LabelInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    color = serializers.RegexField(COLOR_RE, required=False)


class LabelOutputSerializer(serializers.ModelSerializer):
    issue_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Label
        fields = ['id', 'project', 'name', 'color', 'issue_count', 'created_at']


class ComponentInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    lead = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)


class ComponentOutputSerializer(serializers.ModelSerializer):
    lead = UserSummarySerializer(read_only=True)
    issue_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Component
        fields = ['id', 'project', 'name', 'description', 'lead', 'issue_count', 'created_at']


class VersionInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=VersionStatus.choices, required=False)
    start_date = serializers.DateField(required=False, allow_null=True)
    release_date = serializers.DateField(required=False, allow_null=True)


class VersionReleaseSerializer(serializers.Serializer):
    release_date = serializers.DateField(required=False, allow_null=True)


class VersionOutputSerializer(serializers.ModelSerializer):
    status_meta = serializers.SerializerMethodField()
    issue_count = serializers.IntegerField(read_only=True, required=False)
    done_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Version
        fields = [
            'id', 'project', 'name', 'description', 'status', 'status_meta',
            'start_date', 'release_date', 'issue_count', 'done_count', 'created_at'
        ]

    def get_status_meta(self, obj):
        return meta_dict(VERSION_STATUSES, obj.status)


class IssueLabelAddSerializer(serializers.Serializer):
    label = serializers.PrimaryKeyRelatedField(queryset=Label.objects.all())


class IssueComponentAddSerializer(serializers.Serializer):
    component = serializers.PrimaryKeyRelatedField(queryset=Component.objects.all())
