"""Catalog administration endpoints (categories, use-cases, tools, curated edges)"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from ..schemas.catalog import (
    CategoryCreate,
    CategoryRef,
    UseCaseCreate,
    UseCaseRef,
    ToolCreate,
    ToolUpdate,
    ToolSnapshot,
    CuratedAlternativeCreate,
    CuratedAlternativeResponse,
)
from ..models import Category, UseCase, Tool, CuratedAlternative
from ..utils.database import get_db
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

REQUIRED_TOOL_FIELDS = {"name", "status", "pricing_model", "is_featured"}


def _get_tool_or_404(db: Session, slug: str) -> Tool:
    tool = db.query(Tool).filter(Tool.slug == slug).first()
    if not tool:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tool not found"
        )
    return tool


def _get_category_or_400(db: Session, slug: str) -> Category:
    category = db.query(Category).filter(Category.slug == slug).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown category: {slug}"
        )
    return category


def _get_use_cases_or_400(db: Session, slugs: List[str]) -> List[UseCase]:
    wanted = list(dict.fromkeys(slugs))
    if not wanted:
        return []

    use_cases = db.query(UseCase).filter(UseCase.slug.in_(wanted)).all()
    missing = set(wanted) - {u.slug for u in use_cases}
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown use-cases: {', '.join(sorted(missing))}"
        )
    return use_cases


def _curated_response(edge: CuratedAlternative) -> CuratedAlternativeResponse:
    return CuratedAlternativeResponse(
        id=edge.id,
        tool_slug=edge.tool.slug,
        alternative_slug=edge.alternative.slug,
        manual_score=edge.manual_score,
        note=edge.note,
        updated_at=edge.updated_at,
    )


# Categories and use-cases

@router.post("/categories/", response_model=CategoryRef, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    """Create a category"""

    if db.query(Category).filter(Category.slug == category.slug).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category slug already exists"
        )

    db_category = Category(**category.model_dump())
    db.add(db_category)
    db.commit()
    db.refresh(db_category)

    return db_category


@router.get("/categories/", response_model=List[CategoryRef])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name.asc()).all()


@router.post("/use-cases/", response_model=UseCaseRef, status_code=status.HTTP_201_CREATED)
def create_use_case(use_case: UseCaseCreate, db: Session = Depends(get_db)):
    """Create a use-case"""

    if db.query(UseCase).filter(UseCase.slug == use_case.slug).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Use-case slug already exists"
        )

    db_use_case = UseCase(**use_case.model_dump())
    db.add(db_use_case)
    db.commit()
    db.refresh(db_use_case)

    return db_use_case


# Tools

@router.post("/tools/", response_model=ToolSnapshot, status_code=status.HTTP_201_CREATED)
def create_tool(tool: ToolCreate, db: Session = Depends(get_db)):
    """Create a tool (usually from an approved submission)"""

    if db.query(Tool).filter(Tool.slug == tool.slug).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Tool slug already exists"
        )

    category = _get_category_or_400(db, tool.category_slug)
    use_cases = _get_use_cases_or_400(db, tool.use_case_slugs)

    data = tool.model_dump(exclude={"category_slug", "use_case_slugs"})
    data["status"] = tool.status.value
    data["pricing_model"] = tool.pricing_model.value

    db_tool = Tool(**data, primary_category=category, use_cases=use_cases)
    db.add(db_tool)
    db.commit()
    db.refresh(db_tool)

    logger.info("Tool created", slug=db_tool.slug, status=db_tool.status)
    return db_tool


@router.get("/tools/", response_model=List[ToolSnapshot])
def list_tools(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    status_filter: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List tools with optional category and status filters"""

    query = db.query(Tool).options(selectinload(Tool.use_cases))

    if category:
        query = query.join(Tool.primary_category).filter(Category.slug == category)

    if status_filter:
        query = query.filter(Tool.status == status_filter.upper())

    return query.order_by(Tool.name.asc()).offset(skip).limit(limit).all()


@router.get("/tools/{slug}", response_model=ToolSnapshot)
def get_tool(slug: str, db: Session = Depends(get_db)):
    """Get a specific tool"""
    return _get_tool_or_404(db, slug)


@router.patch("/tools/{slug}", response_model=ToolSnapshot)
def update_tool(slug: str, tool_update: ToolUpdate, db: Session = Depends(get_db)):
    """Update a tool; only provided fields change"""

    tool = _get_tool_or_404(db, slug)

    update_data = tool_update.model_dump(exclude_unset=True)

    category_slug = update_data.pop("category_slug", None)
    if category_slug is not None:
        tool.primary_category = _get_category_or_400(db, category_slug)

    use_case_slugs = update_data.pop("use_case_slugs", None)
    if use_case_slugs is not None:
        tool.use_cases = _get_use_cases_or_400(db, use_case_slugs)

    for field, value in update_data.items():
        if value is None and field in REQUIRED_TOOL_FIELDS:
            continue
        if field in ("status", "pricing_model"):
            value = value.value
        setattr(tool, field, value)

    db.commit()
    db.refresh(tool)

    return tool


# Curated alternatives

@router.get("/tools/{slug}/curated", response_model=List[CuratedAlternativeResponse])
def list_curated_alternatives(slug: str, db: Session = Depends(get_db)):
    """List curated alternatives for a tool, highest manual score first"""

    tool = _get_tool_or_404(db, slug)
    edges = (
        db.query(CuratedAlternative)
        .filter(CuratedAlternative.tool_id == tool.id)
        .order_by(CuratedAlternative.manual_score.desc(), CuratedAlternative.updated_at.desc())
        .all()
    )

    return [_curated_response(edge) for edge in edges]


@router.post("/tools/{slug}/curated", response_model=CuratedAlternativeResponse)
def upsert_curated_alternative(
    slug: str, curated: CuratedAlternativeCreate, db: Session = Depends(get_db)
):
    """Create or update a curated edge from this tool to another"""

    tool = _get_tool_or_404(db, slug)
    alternative = _get_tool_or_404(db, curated.alternative_slug)

    if alternative.id == tool.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A tool cannot be its own alternative"
        )

    edge = (
        db.query(CuratedAlternative)
        .filter(
            CuratedAlternative.tool_id == tool.id,
            CuratedAlternative.alternative_id == alternative.id,
        )
        .first()
    )

    if edge:
        edge.manual_score = curated.manual_score
        edge.note = curated.note
    else:
        edge = CuratedAlternative(
            tool_id=tool.id,
            alternative_id=alternative.id,
            manual_score=curated.manual_score,
            note=curated.note,
        )
        db.add(edge)

    db.commit()
    db.refresh(edge)

    logger.info(
        "Curated alternative saved",
        tool=tool.slug,
        alternative=alternative.slug,
        manual_score=edge.manual_score,
    )
    return _curated_response(edge)


@router.delete("/tools/{slug}/curated/{alternative_slug}", status_code=status.HTTP_204_NO_CONTENT)
def delete_curated_alternative(slug: str, alternative_slug: str, db: Session = Depends(get_db)):
    """Delete a curated edge"""

    tool = _get_tool_or_404(db, slug)
    alternative = _get_tool_or_404(db, alternative_slug)

    edge = (
        db.query(CuratedAlternative)
        .filter(
            CuratedAlternative.tool_id == tool.id,
            CuratedAlternative.alternative_id == alternative.id,
        )
        .first()
    )
    if not edge:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Curated alternative not found"
        )

    db.delete(edge)
    db.commit()

    return None
