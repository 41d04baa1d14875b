"""
URL configuration for the Groups app.
"""
from django.urls import include, path
from rest_framework.routers import SimpleRouter

from apps.groups.views import GroupMemberViewSet, GroupViewSet, LeaveGroupView

app_name = 'groups'

router = SimpleRouter()
router.register(r'', GroupViewSet, basename='group')

# Nested routes for members
member_list = GroupMemberViewSet.as_view({
    'get': 'list',
    'post': 'create',
})
member_detail = GroupMemberViewSet.as_view({
    'patch': 'partial_update',
    'delete': 'destroy',
})

urlpatterns = [
    path(
        '<uuid:group_pk>/members/',
        member_list,
        name='group-member-list',
    ),
    path(
        '<uuid:group_pk>/members/<uuid:pk>/',
        member_detail,
        name='group-member-detail',
    ),
    path(
        '<uuid:group_pk>/leave/',
        LeaveGroupView.as_view(),
        name='group-leave',
    ),
    path('', include(router.urls)),
]
