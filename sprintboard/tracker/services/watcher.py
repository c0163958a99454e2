# ============================================
# tracker/services/watcher.py
# ============================================
from typing import List, Optional

from tracker.models import Issue, Watcher


class WatcherService:

    @staticmethod
    def watch(*, issue: Issue, user) -> Optional[Watcher]:
        """Idempotent; anonymous users are ignored"""
        if user is None or not getattr(user, 'pk', None):
            return None
        watcher, _ = Watcher.objects.get_or_create(issue=issue, user=user)
        return watcher

    @staticmethod
    def unwatch(*, issue: Issue, user) -> bool:
        deleted, _ = Watcher.objects.filter(issue=issue, user=user).delete()
        return bool(deleted)

    @staticmethod
    def watcher_ids(issue: Issue, exclude_user_id: int = None) -> List[int]:
        queryset = Watcher.objects.filter(issue=issue)
        if exclude_user_id:
            queryset = queryset.exclude(user_id=exclude_user_id)
        return list(queryset.values_list('user_id', flat=True))
