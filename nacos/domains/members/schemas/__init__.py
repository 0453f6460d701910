from nacos.domains.members.schemas.member_schemas import (
    LEVELS,
    SORTABLE_COLUMNS,
    MemberForm,
    MemberListFilter,
)

__all__ = ["LEVELS", "SORTABLE_COLUMNS", "MemberForm", "MemberListFilter"]
