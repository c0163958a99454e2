# ============================================
# tracker/selectors/notification.py
# ============================================
from typing import Optional
from django.db.models import QuerySet
from tracker.models import Notification, SavedFilter


class NotificationSelector:

    @staticmethod
    def get_for_user(user_id: int, unread_only: bool = False) -> QuerySet:
        queryset = Notification.objects.filter(user_id=user_id).select_related('issue__project')
        if unread_only:
            queryset = queryset.filter(is_read=False)
        return queryset

    @staticmethod
    def unread_count(user_id: int) -> int:
        return Notification.objects.filter(user_id=user_id, is_read=False).count()

    @staticmethod
    def get_by_id(notification_id: int, user_id: int) -> Optional[Notification]:
        """Only the recipient can see a notification"""
        try:
            return Notification.objects.get(id=notification_id, user_id=user_id)
        except Notification.DoesNotExist:
            return None


class SavedFilterSelector:

    @staticmethod
    def get_for_user(user_id: int, project_id: int = None) -> QuerySet:
        queryset = SavedFilter.objects.filter(user_id=user_id)
        if project_id:
            queryset = queryset.filter(project_id=project_id)
        return queryset

    @staticmethod
    def get_by_id(filter_id: int, user_id: int) -> Optional[SavedFilter]:
        try:
            return SavedFilter.objects.get(id=filter_id, user_id=user_id)
        except SavedFilter.DoesNotExist:
            return None
