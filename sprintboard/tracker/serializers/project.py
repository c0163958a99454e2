# ============================================
# tracker/serializers/project.py
# ============================================
from rest_framework import serializers
from tracker.constants import PROJECT_ROLES, ProjectRole
from tracker.models import Project, ProjectMember
from tracker.serializers.common import User, UserSummarySerializer


class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    key = serializers.CharField(max_length=10, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    lead = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)
    avatar_color = serializers.RegexField(r'^#[0-9A-Fa-f]{6}$', required=False)


class ProjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    key = serializers.CharField(max_length=10, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    lead = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)
    avatar_color = serializers.RegexField(r'^#[0-9A-Fa-f]{6}$', required=False)


class ProjectOutputSerializer(serializers.ModelSerializer):
    lead = UserSummarySerializer(read_only=True)
    issue_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'key', 'description', 'lead', 'avatar_color',
            'issue_count', 'created_at', 'updated_at'
        ]


class MemberCreateSerializer(serializers.Serializer):
    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    role = serializers.ChoiceField(choices=ProjectRole.choices, default=ProjectRole.MEMBER)


class MemberUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=ProjectRole.choices)


class MemberOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    role_meta = serializers.SerializerMethodField()

    class Meta:
        model = ProjectMember
        fields = ['id', 'project', 'user', 'role', 'role_meta', 'created_at']

    def get_role_meta(self, obj):
        meta = PROJECT_ROLES.get(obj.role)
        return {'label': meta.label, 'description': meta.description, 'known': meta.known}
