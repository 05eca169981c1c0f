from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Node(BaseModel):
    """One person on a board page and, for branch rows, their direct reports."""

    name: str
    title: str = ""
    children: List["Node"] = Field(default_factory=list)


class Board(BaseModel):
    company_name: str = Field("", description="Filled in by the caller after extraction")
    boards: List[Node] = Field(default_factory=list, description="Board members, no hierarchy")
    members: List[Node] = Field(default_factory=list, description="Branch parents with their reports")
    # Reserved for a whole-company hierarchy; always empty for now.
    company_tree: List[Node] = Field(default_factory=list)


class Company(BaseModel):
    name: str
    url: str
    # Reserved for subsidiaries/branches; always empty for now.
    children: List["Company"] = Field(default_factory=list)
    board: Optional[Board] = None


Node.model_rebuild()
Company.model_rebuild()
