from nacos.domains.members.services.member_service import (
    approve_member,
    change_member_role,
    create_member,
    deactivate_member,
    delete_member,
    department_choices,
    get_member,
    list_members,
    membership_counts,
    outranks,
    project_count_for,
    reject_member,
    update_member,
)

__all__ = [
    "approve_member",
    "change_member_role",
    "create_member",
    "deactivate_member",
    "delete_member",
    "department_choices",
    "get_member",
    "list_members",
    "membership_counts",
    "outranks",
    "project_count_for",
    "reject_member",
    "update_member",
]
