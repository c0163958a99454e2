# ============================================
# tracker/services/link.py
# ============================================
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from tracker.models import ActivityLog, Issue, IssueLink
from tracker.services.activity import ActivityService


class LinkService:

    @staticmethod
    @transaction.atomic
    def create_link(*, source: Issue, target: Issue, link_type: str, user=None) -> IssueLink:
        if source.pk == target.pk:
            raise ValidationError({'target': ["An issue cannot be linked to itself"]})
        try:
            with transaction.atomic():
                link = IssueLink.objects.create(source=source, target=target, link_type=link_type)
        except IntegrityError:
            raise ValidationError({'target': ["These issues are already linked this way"]})

        ActivityService.log(
            issue=source,
            user=user,
            action=ActivityLog.Action.LINKED,
            field=link_type,
            new_value=target.key,
        )
        return link

    @staticmethod
    def delete_link(*, link: IssueLink) -> None:
        link.delete()
