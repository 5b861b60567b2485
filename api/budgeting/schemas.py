"""
Request payloads for the budgeting tables.

Fields default to their zero value so a missing field reaches the model
validator and gets the same message as an explicitly empty one. Rules are
checked in order; the first failure is the message returned to the client.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, model_validator

MAX_TEXT_LENGTH = 255


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _check_name_description(name: str, description: str) -> None:
    _require(name != "", "name must be filled")
    _require(len(name) <= MAX_TEXT_LENGTH, f"max length name {MAX_TEXT_LENGTH}")
    _require(len(description) <= MAX_TEXT_LENGTH, f"max length description {MAX_TEXT_LENGTH}")


class ActivityPayload(BaseModel):
    name: str = ""
    description: str = ""
    is_active: bool = False

    @model_validator(mode="after")
    def check_fields(self) -> ActivityPayload:
        _check_name_description(self.name, self.description)
        return self


class BudgetPayload(BaseModel):
    name: str = ""
    description: str = ""
    periode: str = ""
    is_approved: bool = False
    units_id: int = 0

    @model_validator(mode="after")
    def check_fields(self) -> BudgetPayload:
        _check_name_description(self.name, self.description)
        _require(self.periode != "", "periode must be filled")
        _require(self.units_id > 0, "units id must be filled and valid")
        return self


class BudgetPostPayload(BaseModel):
    name: str = ""
    description: str = ""
    is_active: bool = False

    @model_validator(mode="after")
    def check_fields(self) -> BudgetPostPayload:
        _check_name_description(self.name, self.description)
        return self


class BudgetCapPayload(BaseModel):
    budgets_id: int = 0
    budget_posts_id: int = 0
    amount: float = 0

    @model_validator(mode="after")
    def check_fields(self) -> BudgetCapPayload:
        _require(self.budgets_id > 0, "budgets id must be greater than 0")
        _require(self.budget_posts_id > 0, "budget posts id must be greater than 0")
        _require(self.amount > 0, "amount must be greater than 0")
        return self


class BudgetDetailPayload(BaseModel):
    budgets_id: int = 0
    activities_id: int = 0
    description: str = ""
    target: datetime | None = None
    quantity: float = 0
    unit_value: float = 0
    total: float = 0
    terms: float = 0

    @model_validator(mode="after")
    def check_fields(self) -> BudgetDetailPayload:
        _require(self.budgets_id > 0, "budgets id must be greater than 0")
        _require(self.activities_id > 0, "activities id must be greater than 0")
        _require(self.description != "", "description must be filled")
        return self


class BudgetDetailPostPayload(BaseModel):
    budget_details_id: int = 0
    budget_posts_id: int = 0
    planned_amount: float = 0
    approved_amount: float = 0
    usage_amount: float = 0

    @model_validator(mode="after")
    def check_fields(self) -> BudgetDetailPostPayload:
        _require(self.budget_details_id > 0, "budget details id must be greater than 0")
        _require(self.budget_posts_id > 0, "budget posts id must be greater than 0")
        _require(self.planned_amount > 0, "planned amount must be greater than 0")
        _require(self.approved_amount > 0, "approved amount must be greater than 0")
        _require(self.usage_amount > 0, "usage amount must be greater than 0")
        return self


class RecommendationPayload(BaseModel):
    budget_details_posts_id: int = 0
    user_groups_id: int = 0
    recommendation: float = 0

    @model_validator(mode="after")
    def check_fields(self) -> RecommendationPayload:
        _require(self.budget_details_posts_id > 0, "budget details posts id must be greater than 0")
        _require(self.user_groups_id > 0, "user groups id must be greater than 0")
        _require(self.recommendation > 0, "recommendation must be greater than 0")
        return self


class FundRequestPayload(BaseModel):
    budget_posts_id: int = 0
    date: datetime | None = None
    type: str = ""
    amount: float = 0
    status: str = ""

    @model_validator(mode="after")
    def check_fields(self) -> FundRequestPayload:
        _require(self.budget_posts_id > 0, "budget posts id must be greater than 0")
        _require(self.date is not None, "date must be filled")
        _require(self.type != "", "type must be filled")
        _require(self.amount > 0, "amount must be greater than 0")
        _require(self.status != "", "status must be filled")
        return self


class FundRequestDetailPayload(BaseModel):
    fund_requests_id: int = 0
    activities_id: int = 0
    budget_details_id: int = 0
    amount: float = 0
    recommendation: str = ""

    @model_validator(mode="after")
    def check_fields(self) -> FundRequestDetailPayload:
        _require(self.fund_requests_id > 0, "fund requests id must be greater than 0")
        _require(self.activities_id > 0, "activities id must be greater than 0")
        _require(self.budget_details_id > 0, "budget details id must be greater than 0")
        _require(self.amount > 0, "amount must be greater than 0")
        _require(self.recommendation != "", "recommendation must be filled")
        return self


class ActivePayload(BaseModel):
    is_active: bool = False


class ApprovalPayload(BaseModel):
    is_approved: bool = False
