from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssignmentConfig(BaseModel):
    """Per-repository settings read from ``.github/auto_assign.yml``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    add_assignees: Union[Literal["author"], bool] = Field(False, alias="addAssignees")
    add_reviewers: bool = Field(True, alias="addReviewers")
    reviewers: List[str] = Field(default_factory=list)
    assignees: Optional[List[str]] = None
    number_of_reviewers: int = Field(0, alias="numberOfReviewers")
    number_of_assignees: Optional[int] = Field(None, alias="numberOfAssignees")
    skip_keywords: List[str] = Field(default_factory=list, alias="skipKeywords")

    @field_validator("reviewers", "skip_keywords", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        # `reviewers:` with nothing under it parses to None in YAML
        return [] if value is None else value

    @property
    def assign_author(self) -> bool:
        return self.add_assignees == "author"

    @property
    def assignee_pool(self) -> List[str]:
        return self.assignees or self.reviewers

    @property
    def assignee_count(self) -> int:
        if self.number_of_assignees is None:
            return self.number_of_reviewers
        return self.number_of_assignees

    def matching_skip_keyword(self, title: str) -> Optional[str]:
        lowered = (title or "").lower()
        for keyword in self.skip_keywords:
            if keyword and keyword.lower() in lowered:
                return keyword
        return None
