# ============================================
# tracker/serializers/comment.py
# ============================================
from rest_framework import serializers
from tracker.models import Comment
from tracker.serializers.common import UserSummarySerializer


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField()


class CommentUpdateSerializer(serializers.Serializer):
    content = serializers.CharField()


class CommentOutputSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'issue', 'author', 'content', 'created_at', 'updated_at']
