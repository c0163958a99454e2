# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from django.db import transaction

from tracker.models import Issue, Notification

log = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def notify(
        *,
        recipients: Iterable[int],
        kind: str,
        title: str,
        message: str = "",
        issue: Optional[Issue] = None,
        actor_id: Optional[int] = None,
    ) -> List[Notification]:
        """
        One in-app notification per distinct recipient. The actor never
        notifies themselves.
        """
        user_ids = [uid for uid in dict.fromkeys(recipients or []) if uid and uid != actor_id]
        if not user_ids:
            return []
        rows = Notification.objects.bulk_create([
            Notification(user_id=uid, issue=issue, kind=kind, title=title[:200], message=message)
            for uid in user_ids
        ])
        log.info("[notify] %s -> %d recipient(s)", kind, len(rows))
        return rows

    @staticmethod
    def mark_read(notification: Notification) -> Notification:
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return notification

    @staticmethod
    @transaction.atomic
    def mark_all_read(user_id: int) -> int:
        return Notification.objects.filter(user_id=user_id, is_read=False).update(is_read=True)
