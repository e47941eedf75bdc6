"""Catalog schemas"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from ..models.tool import ToolStatus, PricingModel


class CategoryRef(BaseModel):
    """Read-only view of a category"""

    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True


class UseCaseRef(BaseModel):
    """Read-only view of a use-case"""

    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True


class ToolSnapshot(BaseModel):
    """
    Detached view of a tool with everything the engines read

    Built from ORM rows so ranking and linking never touch a session.
    """

    id: int
    name: str
    slug: str
    status: str
    is_featured: bool = False
    pricing_model: str = PricingModel.FREEMIUM.value
    short_description: Optional[str] = None
    target_audience: List[str] = []
    key_features: List[str] = []
    integrations: List[str] = []
    primary_category_id: int
    primary_category: CategoryRef
    use_cases: List[UseCaseRef] = []

    class Config:
        from_attributes = True

    @field_validator("target_audience", "key_features", "integrations", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @property
    def is_active(self) -> bool:
        return self.status == ToolStatus.ACTIVE.value

    @property
    def use_case_slugs(self) -> List[str]:
        return [u.slug for u in self.use_cases]


class CuratedEdge(BaseModel):
    """Curated alternative edge with its target tool resolved"""

    alternative: ToolSnapshot
    manual_score: float
    note: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Admin write schemas

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None


class UseCaseCreate(CategoryCreate):
    pass


class ToolCreate(BaseModel):
    """Schema for creating a tool"""

    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    category_slug: str
    status: ToolStatus = ToolStatus.DRAFT
    is_featured: bool = False
    pricing_model: PricingModel = PricingModel.FREEMIUM
    short_description: Optional[str] = None
    target_audience: List[str] = []
    key_features: List[str] = []
    integrations: List[str] = []
    use_case_slugs: List[str] = []


class ToolUpdate(BaseModel):
    """Schema for updating a tool"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category_slug: Optional[str] = None
    status: Optional[ToolStatus] = None
    is_featured: Optional[bool] = None
    pricing_model: Optional[PricingModel] = None
    short_description: Optional[str] = None
    target_audience: Optional[List[str]] = None
    key_features: Optional[List[str]] = None
    integrations: Optional[List[str]] = None
    use_case_slugs: Optional[List[str]] = None


class CuratedAlternativeCreate(BaseModel):
    alternative_slug: str
    manual_score: float = 0.0
    note: Optional[str] = Field(None, max_length=2000)


class CuratedAlternativeResponse(BaseModel):
    id: int
    tool_slug: str
    alternative_slug: str
    manual_score: float
    note: Optional[str]
    updated_at: datetime
