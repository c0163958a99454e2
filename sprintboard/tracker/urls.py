# ============================================
# tracker/urls.py
# ============================================
from django.urls import path
from tracker.views.project import (
    ProjectListCreateAPIView,
    ProjectDetailAPIView,
    MemberListCreateAPIView,
    MemberDetailAPIView,
)
from tracker.views.issue import (
    ProjectIssueListCreateAPIView,
    IssueSearchAPIView,
    RecentIssuesAPIView,
    MyIssuesAPIView,
    IssueBulkUpdateAPIView,
    IssueDetailAPIView,
    IssueChildrenAPIView,
    IssueLabelsAPIView,
    IssueLabelDetailAPIView,
    IssueComponentsAPIView,
    IssueComponentDetailAPIView,
)
from tracker.views.comment import (
    CommentListCreateAPIView,
    CommentDetailAPIView
)
from tracker.views.sprint import (
    SprintListCreateAPIView,
    SprintDetailAPIView,
    SprintStartAPIView,
    SprintCompleteAPIView,
    SprintIssuesAPIView,
    SprintReportAPIView,
    SprintBurndownAPIView,
)
from tracker.views.board import (
    BoardAPIView,
    BoardConfigAPIView,
    BacklogAPIView,
    EpicListAPIView,
    RoadmapAPIView,
    VelocityAPIView,
)
from tracker.views.workflow import (
    RegistryAPIView,
    WorkflowAPIView,
    WorkflowTransitionsAPIView,
)
from tracker.views.catalog import (
    LabelListCreateAPIView,
    LabelDetailAPIView,
    ComponentListCreateAPIView,
    ComponentDetailAPIView,
    VersionListCreateAPIView,
    VersionDetailAPIView,
    VersionReleaseAPIView,
)
from tracker.views.activity import (
    IssueActivityAPIView,
    ProjectActivityAPIView,
    IssueLinkListCreateAPIView,
    IssueLinkDetailAPIView,
    WatcherListAPIView,
    WatchAPIView,
    WorkLogListCreateAPIView,
    WorkLogDetailAPIView,
    AttachmentListCreateAPIView,
    AttachmentDetailAPIView,
)
from tracker.views.notification import (
    NotificationListAPIView,
    NotificationUnreadCountAPIView,
    NotificationMarkAllReadAPIView,
    NotificationReadAPIView,
    SavedFilterListCreateAPIView,
    SavedFilterDetailAPIView,
)

app_name = 'tracker'

urlpatterns = [
    path('registries/', RegistryAPIView.as_view(), name='registries'),

    # Current user
    path('me/assigned/', MyIssuesAPIView.as_view(), {'relation': 'assigned'}, name='my-assigned'),
    path('me/reported/', MyIssuesAPIView.as_view(), {'relation': 'reported'}, name='my-reported'),
    path('me/watching/', MyIssuesAPIView.as_view(), {'relation': 'watching'}, name='my-watching'),

    # Projects
    path('projects/', ProjectListCreateAPIView.as_view(), name='project-list-create'),
    path('projects/<int:project_id>/', ProjectDetailAPIView.as_view(), name='project-detail'),
    path('projects/<int:project_id>/members/', MemberListCreateAPIView.as_view(), name='member-list-create'),
    path('members/<int:member_id>/', MemberDetailAPIView.as_view(), name='member-detail'),
    path('projects/<int:project_id>/activity/', ProjectActivityAPIView.as_view(), name='project-activity'),

    # Issues
    path('projects/<int:project_id>/issues/', ProjectIssueListCreateAPIView.as_view(), name='issue-list-create'),
    path('issues/search/', IssueSearchAPIView.as_view(), name='issue-search'),
    path('issues/recent/', RecentIssuesAPIView.as_view(), name='issue-recent'),
    path('issues/bulk/', IssueBulkUpdateAPIView.as_view(), name='issue-bulk-update'),
    path('issues/<int:issue_id>/', IssueDetailAPIView.as_view(), name='issue-detail'),
    path('issues/<int:issue_id>/children/', IssueChildrenAPIView.as_view(), name='issue-children'),
    path('issues/<int:issue_id>/labels/', IssueLabelsAPIView.as_view(), name='issue-labels'),
    path('issues/<int:issue_id>/labels/<int:label_id>/', IssueLabelDetailAPIView.as_view(), name='issue-label-detail'),
    path('issues/<int:issue_id>/components/', IssueComponentsAPIView.as_view(), name='issue-components'),
    path('issues/<int:issue_id>/components/<int:component_id>/', IssueComponentDetailAPIView.as_view(),
         name='issue-component-detail'),
    path('issues/<int:issue_id>/activity/', IssueActivityAPIView.as_view(), name='issue-activity'),

    # Comments
    path('issues/<int:issue_id>/comments/', CommentListCreateAPIView.as_view(), name='comment-list-create'),
    path('comments/<int:comment_id>/', CommentDetailAPIView.as_view(), name='comment-detail'),

    # Links, watchers, work logs, attachments
    path('issues/<int:issue_id>/links/', IssueLinkListCreateAPIView.as_view(), name='link-list-create'),
    path('links/<int:link_id>/', IssueLinkDetailAPIView.as_view(), name='link-detail'),
    path('issues/<int:issue_id>/watchers/', WatcherListAPIView.as_view(), name='watcher-list'),
    path('issues/<int:issue_id>/watch/', WatchAPIView.as_view(), name='issue-watch'),
    path('issues/<int:issue_id>/worklogs/', WorkLogListCreateAPIView.as_view(), name='worklog-list-create'),
    path('worklogs/<int:worklog_id>/', WorkLogDetailAPIView.as_view(), name='worklog-detail'),
    path('issues/<int:issue_id>/attachments/', AttachmentListCreateAPIView.as_view(), name='attachment-list-create'),
    path('attachments/<int:attachment_id>/', AttachmentDetailAPIView.as_view(), name='attachment-detail'),

    # Sprints
    path('projects/<int:project_id>/sprints/', SprintListCreateAPIView.as_view(), name='sprint-list-create'),
    path('sprints/<int:sprint_id>/', SprintDetailAPIView.as_view(), name='sprint-detail'),
    path('sprints/<int:sprint_id>/start/', SprintStartAPIView.as_view(), name='sprint-start'),
    path('sprints/<int:sprint_id>/complete/', SprintCompleteAPIView.as_view(), name='sprint-complete'),
    path('sprints/<int:sprint_id>/issues/', SprintIssuesAPIView.as_view(), name='sprint-issues'),
    path('sprints/<int:sprint_id>/report/', SprintReportAPIView.as_view(), name='sprint-report'),
    path('sprints/<int:sprint_id>/burndown/', SprintBurndownAPIView.as_view(), name='sprint-burndown'),

    # Board and reports
    path('projects/<int:project_id>/board/', BoardAPIView.as_view(), name='board'),
    path('projects/<int:project_id>/board-config/', BoardConfigAPIView.as_view(), name='board-config'),
    path('projects/<int:project_id>/backlog/', BacklogAPIView.as_view(), name='backlog'),
    path('projects/<int:project_id>/epics/', EpicListAPIView.as_view(), name='epic-list'),
    path('projects/<int:project_id>/roadmap/', RoadmapAPIView.as_view(), name='roadmap'),
    path('projects/<int:project_id>/velocity/', VelocityAPIView.as_view(), name='velocity'),

    # Workflow
    path('projects/<int:project_id>/workflow/', WorkflowAPIView.as_view(), name='workflow'),
    path('projects/<int:project_id>/workflow/transitions/<str:from_status>/', WorkflowTransitionsAPIView.as_view(),
         name='workflow-transitions'),

    # Labels, components, versions
    path('projects/<int:project_id>/labels/', LabelListCreateAPIView.as_view(), name='label-list-create'),
    path('labels/<int:label_id>/', LabelDetailAPIView.as_view(), name='label-detail'),
    path('projects/<int:project_id>/components/', ComponentListCreateAPIView.as_view(), name='component-list-create'),
    path('components/<int:component_id>/', ComponentDetailAPIView.as_view(), name='component-detail'),
    path('projects/<int:project_id>/versions/', VersionListCreateAPIView.as_view(), name='version-list-create'),
    path('versions/<int:version_id>/', VersionDetailAPIView.as_view(), name='version-detail'),
    path('versions/<int:version_id>/release/', VersionReleaseAPIView.as_view(), name='version-release'),

    # Notifications and saved filters
    path('notifications/', NotificationListAPIView.as_view(), name='notification-list'),
    path('notifications/unread-count/', NotificationUnreadCountAPIView.as_view(), name='notification-unread-count'),
    path('notifications/mark-all-read/', NotificationMarkAllReadAPIView.as_view(), name='notification-mark-all-read'),
    path('notifications/<int:notification_id>/read/', NotificationReadAPIView.as_view(), name='notification-read'),
    path('saved-filters/', SavedFilterListCreateAPIView.as_view(), name='saved-filter-list-create'),
    path('saved-filters/<int:filter_id>/', SavedFilterDetailAPIView.as_view(), name='saved-filter-detail'),
]
