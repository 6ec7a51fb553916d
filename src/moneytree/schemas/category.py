"""Pydantic schemas for category API requests and responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from moneytree.categories.kinds import RootKind
from moneytree.categories.tree import CategoryNode

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class CategoryCreateRequest(BaseModel):
    """Request to create a category under an existing parent."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    parent_id: UUID = Field(..., description="Parent category (a system root or one of your categories)")
    color: str | None = Field(None, pattern=HEX_COLOR, description="Display color (#rrggbb)")
    icon: str | None = Field(None, min_length=1, max_length=50, description="Icon name")


class CategoryUpdateRequest(BaseModel):
    """Request to rename or restyle a category. Parent and owner are fixed."""

    name: str | None = Field(None, min_length=1, max_length=255, description="Display name")
    color: str | None = Field(None, pattern=HEX_COLOR, description="Display color (#rrggbb)")
    icon: str | None = Field(None, min_length=1, max_length=50, description="Icon name")


class CategoryResponse(BaseModel):
    """Category data for API responses."""

    id: UUID
    name: str
    parent_id: UUID | None = Field(None, description="Parent category; null for system roots")
    owner_id: UUID | None = Field(None, description="Owning user; null for system roots")
    root_kind: RootKind | None = Field(None, description="Set only on the Income and Expense roots")
    color: str
    icon: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryTreeEntry(CategoryResponse):
    """One category of the forest, positioned by ``parent_id`` and ``depth``."""

    depth: int = Field(..., ge=0, description="Distance from the system root; 0 for roots")
    is_leaf: bool = Field(..., description="True when nothing is nested beneath it")


class CategoryTreeResult(BaseModel):
    """The category forest visible to the current user.

    Entries are flat and in depth-first order: each root is followed by its
    subtree, and every category follows its parent. Clients nest entries by
    ``parent_id``; the list stays flat so arbitrarily deep trees serialize.
    """

    categories: list[CategoryTreeEntry]

    @classmethod
    def from_forest(cls, forest: list[CategoryNode]) -> "CategoryTreeResult":
        entries = []
        for root in forest:
            for node, depth in root.depth_first():
                base = CategoryResponse.model_validate(node.category)
                entries.append(
                    CategoryTreeEntry(**base.model_dump(), depth=depth, is_leaf=node.is_leaf)
                )
        return cls(categories=entries)
