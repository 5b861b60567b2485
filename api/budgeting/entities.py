"""
Metadata for the nine budgeting tables.

Not-found messages are the ones clients see when a referenced row is missing.
"""

from __future__ import annotations

from crud.metadata import EntityMeta, FlagRoute, ForeignKey
from integrity.registry import EntityKind

from . import schemas

BUDGETS_FK = ForeignKey("budgets_id", EntityKind.BUDGETS, "data budgets not found")
BUDGET_POSTS_FK = ForeignKey("budget_posts_id", EntityKind.BUDGET_POSTS, "data budget post not found")
ACTIVITIES_FK = ForeignKey("activities_id", EntityKind.ACTIVITIES, "data activities not found")
BUDGET_DETAILS_FK = ForeignKey("budget_details_id", EntityKind.BUDGET_DETAILS, "data budget details not found")

ACTIVITIES = EntityMeta(
    kind=EntityKind.ACTIVITIES,
    prefix="/activities",
    tag="activities",
    columns=("name", "description", "is_active"),
    schema=schemas.ActivityPayload,
    not_found_message="activities not found",
    unique_column="name",
    flags=(FlagRoute("active", "is_active", schemas.ActivePayload),),
)

BUDGETS = EntityMeta(
    kind=EntityKind.BUDGETS,
    prefix="/budgets",
    tag="budgets",
    columns=("name", "description", "periode", "is_approved", "units_id"),
    schema=schemas.BudgetPayload,
    not_found_message="data budgets not found",
    unique_column="name",
    flags=(FlagRoute("approve", "is_approved", schemas.ApprovalPayload),),
)

BUDGET_POSTS = EntityMeta(
    kind=EntityKind.BUDGET_POSTS,
    prefix="/budget-posts",
    tag="budget-posts",
    columns=("name", "description", "is_active"),
    schema=schemas.BudgetPostPayload,
    not_found_message="budget posts not found",
    unique_column="name",
    flags=(FlagRoute("active", "is_active", schemas.ActivePayload),),
)

BUDGET_CAPS = EntityMeta(
    kind=EntityKind.BUDGET_CAPS,
    prefix="/budget-caps",
    tag="budget-caps",
    columns=("budgets_id", "budget_posts_id", "amount"),
    schema=schemas.BudgetCapPayload,
    not_found_message="budget caps not found",
    foreign_keys=(BUDGETS_FK, BUDGET_POSTS_FK),
)

BUDGET_DETAILS = EntityMeta(
    kind=EntityKind.BUDGET_DETAILS,
    prefix="/budget-details",
    tag="budget-details",
    columns=(
        "budgets_id",
        "activities_id",
        "description",
        "target",
        "quantity",
        "unit_value",
        "total",
        "terms",
    ),
    schema=schemas.BudgetDetailPayload,
    not_found_message="budget details not found",
    foreign_keys=(ACTIVITIES_FK, BUDGETS_FK),
)

BUDGET_DETAILS_POSTS = EntityMeta(
    kind=EntityKind.BUDGET_DETAILS_POSTS,
    prefix="/budget-details-posts",
    tag="budget-details-posts",
    columns=("budget_details_id", "budget_posts_id", "planned_amount", "approved_amount", "usage_amount"),
    schema=schemas.BudgetDetailPostPayload,
    not_found_message="budget details posts not found",
    foreign_keys=(BUDGET_DETAILS_FK, BUDGET_POSTS_FK),
)

BUDGET_DETAILS_POSTS_RECOMMENDATIONS = EntityMeta(
    kind=EntityKind.BUDGET_DETAILS_POSTS_RECOMMENDATIONS,
    prefix="/budget-details-posts-recommendations",
    tag="budget-details-posts-recommendations",
    columns=("budget_details_posts_id", "user_groups_id", "recommendation"),
    schema=schemas.RecommendationPayload,
    not_found_message="budget details posts recommendations not found",
    foreign_keys=(
        ForeignKey(
            "budget_details_posts_id",
            EntityKind.BUDGET_DETAILS_POSTS,
            "data budget details posts not found",
        ),
    ),
)

FUND_REQUESTS = EntityMeta(
    kind=EntityKind.FUND_REQUESTS,
    prefix="/fund-requests",
    tag="fund-requests",
    columns=("budget_posts_id", "date", "type", "amount", "status"),
    schema=schemas.FundRequestPayload,
    not_found_message="fund requests not found",
    foreign_keys=(BUDGET_POSTS_FK,),
)

FUND_REQUEST_DETAILS = EntityMeta(
    kind=EntityKind.FUND_REQUEST_DETAILS,
    prefix="/fund-request-details",
    tag="fund-request-details",
    columns=("fund_requests_id", "activities_id", "budget_details_id", "amount", "recommendation"),
    schema=schemas.FundRequestDetailPayload,
    not_found_message="fund request details not found",
    foreign_keys=(
        ForeignKey("fund_requests_id", EntityKind.FUND_REQUESTS, "data fund request not found"),
        ACTIVITIES_FK,
        BUDGET_DETAILS_FK,
    ),
)

ALL: tuple[EntityMeta, ...] = (
    ACTIVITIES,
    BUDGETS,
    BUDGET_POSTS,
    BUDGET_CAPS,
    BUDGET_DETAILS,
    BUDGET_DETAILS_POSTS,
    BUDGET_DETAILS_POSTS_RECOMMENDATIONS,
    FUND_REQUESTS,
    FUND_REQUEST_DETAILS,
)
