"""Read-only catalog store used by the ranking and linking engines"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from ..models import Tool, ToolStatus, Category, UseCase, CuratedAlternative
from ..models.base import utcnow
from ..schemas.catalog import ToolSnapshot, CategoryRef, UseCaseRef, CuratedEdge


class CatalogStore(ABC):
    """
    Read-only access to tools, categories, use-cases and curated edges

    Every tool listing returns ACTIVE tools only, ordered featured-first
    and then by name.
    """

    @abstractmethod
    def get_tool_by_slug(self, slug: str) -> Optional[ToolSnapshot]:
        """Return the tool with this slug regardless of status, or None"""

    @abstractmethod
    def list_tools_by_category(
        self, category_id: int, exclude_id: Optional[int] = None, limit: int = 120
    ) -> List[ToolSnapshot]:
        """Active tools whose primary category is category_id"""

    @abstractmethod
    def list_tools_by_category_or_use_cases(
        self,
        category_id: int,
        use_case_ids: Sequence[int],
        exclude_id: Optional[int] = None,
        limit: int = 200,
    ) -> List[ToolSnapshot]:
        """Active tools in the category or sharing at least one use-case"""

    @abstractmethod
    def list_curated_edges(self, tool_id: int, limit: int = 24) -> List[CuratedEdge]:
        """Curated edges from tool_id, highest manual score then most recent first"""

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> Optional[CategoryRef]:
        pass

    @abstractmethod
    def get_use_case_by_slug(self, slug: str) -> Optional[UseCaseRef]:
        pass

    @abstractmethod
    def list_tools_by_category_and_use_case(
        self,
        category_id: int,
        use_case_id: int,
        limit: int = 12,
        offset: int = 0,
        pricing_models: Optional[Sequence[str]] = None,
    ) -> List[ToolSnapshot]:
        """Active tools in the category tagged with the use-case"""

    @abstractmethod
    def count_tools_by_category_and_use_case(
        self,
        category_id: int,
        use_case_id: int,
        pricing_models: Optional[Sequence[str]] = None,
    ) -> int:
        pass


class SqlCatalogStore(CatalogStore):
    """CatalogStore backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def _tools(self):
        return self.db.query(Tool).options(
            joinedload(Tool.primary_category),
            selectinload(Tool.use_cases),
        )

    def _active_tools(self):
        return self._tools().filter(Tool.status == ToolStatus.ACTIVE.value)

    @staticmethod
    def _ordered(query):
        return query.order_by(Tool.is_featured.desc(), Tool.name.asc(), Tool.id.asc())

    @staticmethod
    def _snapshots(rows: Iterable[Tool]) -> List[ToolSnapshot]:
        return [ToolSnapshot.model_validate(row) for row in rows]

    def get_tool_by_slug(self, slug: str) -> Optional[ToolSnapshot]:
        tool = self._tools().filter(Tool.slug == slug).first()
        if not tool:
            return None
        return ToolSnapshot.model_validate(tool)

    def list_tools_by_category(
        self, category_id: int, exclude_id: Optional[int] = None, limit: int = 120
    ) -> List[ToolSnapshot]:
        query = self._active_tools().filter(Tool.primary_category_id == category_id)
        if exclude_id is not None:
            query = query.filter(Tool.id != exclude_id)
        return self._snapshots(self._ordered(query).limit(limit).all())

    def list_tools_by_category_or_use_cases(
        self,
        category_id: int,
        use_case_ids: Sequence[int],
        exclude_id: Optional[int] = None,
        limit: int = 200,
    ) -> List[ToolSnapshot]:
        conditions = [Tool.primary_category_id == category_id]
        if use_case_ids:
            conditions.append(Tool.use_cases.any(UseCase.id.in_(list(use_case_ids))))

        query = self._active_tools().filter(or_(*conditions))
        if exclude_id is not None:
            query = query.filter(Tool.id != exclude_id)
        return self._snapshots(self._ordered(query).limit(limit).all())

    def list_curated_edges(self, tool_id: int, limit: int = 24) -> List[CuratedEdge]:
        rows = (
            self.db.query(CuratedAlternative)
            .options(
                joinedload(CuratedAlternative.alternative).joinedload(Tool.primary_category),
                joinedload(CuratedAlternative.alternative).selectinload(Tool.use_cases),
            )
            .filter(CuratedAlternative.tool_id == tool_id)
            .order_by(
                CuratedAlternative.manual_score.desc(),
                CuratedAlternative.updated_at.desc(),
                CuratedAlternative.id.desc(),
            )
            .limit(limit)
            .all()
        )

        return [
            CuratedEdge(
                alternative=ToolSnapshot.model_validate(row.alternative),
                manual_score=row.manual_score,
                note=row.note,
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    def get_category_by_slug(self, slug: str) -> Optional[CategoryRef]:
        category = self.db.query(Category).filter(Category.slug == slug).first()
        return CategoryRef.model_validate(category) if category else None

    def get_use_case_by_slug(self, slug: str) -> Optional[UseCaseRef]:
        use_case = self.db.query(UseCase).filter(UseCase.slug == slug).first()
        return UseCaseRef.model_validate(use_case) if use_case else None

    def _category_use_case_query(self, category_id, use_case_id, pricing_models):
        query = self._active_tools().filter(
            Tool.primary_category_id == category_id,
            Tool.use_cases.any(UseCase.id == use_case_id),
        )
        if pricing_models:
            query = query.filter(Tool.pricing_model.in_(list(pricing_models)))
        return query

    def list_tools_by_category_and_use_case(
        self,
        category_id: int,
        use_case_id: int,
        limit: int = 12,
        offset: int = 0,
        pricing_models: Optional[Sequence[str]] = None,
    ) -> List[ToolSnapshot]:
        query = self._category_use_case_query(category_id, use_case_id, pricing_models)
        return self._snapshots(self._ordered(query).offset(offset).limit(limit).all())

    def count_tools_by_category_and_use_case(
        self,
        category_id: int,
        use_case_id: int,
        pricing_models: Optional[Sequence[str]] = None,
    ) -> int:
        return self.db.query(Tool.id).filter(
            Tool.status == ToolStatus.ACTIVE.value,
            Tool.primary_category_id == category_id,
            Tool.use_cases.any(UseCase.id == use_case_id),
            *([Tool.pricing_model.in_(list(pricing_models))] if pricing_models else []),
        ).count()


class InMemoryCatalogStore(CatalogStore):
    """
    CatalogStore over plain snapshots held in memory

    Useful for fixtures and for running the engines without a database.
    """

    def __init__(self):
        self.categories: Dict[str, CategoryRef] = {}
        self.use_cases: Dict[str, UseCaseRef] = {}
        self.tools: Dict[str, ToolSnapshot] = {}
        self.curated: Dict[int, List[CuratedEdge]] = {}

    def add_category(self, category: CategoryRef) -> CategoryRef:
        self.categories[category.slug] = category
        return category

    def add_use_case(self, use_case: UseCaseRef) -> UseCaseRef:
        self.use_cases[use_case.slug] = use_case
        return use_case

    def add_tool(self, tool: ToolSnapshot) -> ToolSnapshot:
        self.tools[tool.slug] = tool
        return tool

    def add_curated_edge(
        self,
        tool_slug: str,
        alternative_slug: str,
        manual_score: float = 0.0,
        note: Optional[str] = None,
        updated_at: Optional[datetime] = None,
    ) -> CuratedEdge:
        source = self.tools[tool_slug]
        edge = CuratedEdge(
            alternative=self.tools[alternative_slug],
            manual_score=manual_score,
            note=note,
            updated_at=updated_at or utcnow(),
        )
        self.curated.setdefault(source.id, []).append(edge)
        return edge

    @staticmethod
    def _ordered(tools: Iterable[ToolSnapshot]) -> List[ToolSnapshot]:
        return sorted(tools, key=lambda t: (not t.is_featured, t.name, t.id))

    def _active(self) -> List[ToolSnapshot]:
        return [t for t in self.tools.values() if t.is_active]

    def get_tool_by_slug(self, slug: str) -> Optional[ToolSnapshot]:
        return self.tools.get(slug)

    def list_tools_by_category(
        self, category_id: int, exclude_id: Optional[int] = None, limit: int = 120
    ) -> List[ToolSnapshot]:
        matches = [
            t for t in self._active()
            if t.primary_category_id == category_id and t.id != exclude_id
        ]
        return self._ordered(matches)[:limit]

    def list_tools_by_category_or_use_cases(
        self,
        category_id: int,
        use_case_ids: Sequence[int],
        exclude_id: Optional[int] = None,
        limit: int = 200,
    ) -> List[ToolSnapshot]:
        wanted = set(use_case_ids)
        matches = [
            t for t in self._active()
            if t.id != exclude_id
            and (t.primary_category_id == category_id or wanted & {u.id for u in t.use_cases})
        ]
        return self._ordered(matches)[:limit]

    def list_curated_edges(self, tool_id: int, limit: int = 24) -> List[CuratedEdge]:
        edges = sorted(
            self.curated.get(tool_id, []),
            key=lambda e: (e.manual_score, e.updated_at or datetime.min),
            reverse=True,
        )
        return edges[:limit]

    def get_category_by_slug(self, slug: str) -> Optional[CategoryRef]:
        return self.categories.get(slug)

    def get_use_case_by_slug(self, slug: str) -> Optional[UseCaseRef]:
        return self.use_cases.get(slug)

    def _category_use_case_matches(self, category_id, use_case_id, pricing_models):
        return [
            t for t in self._active()
            if t.primary_category_id == category_id
            and use_case_id in {u.id for u in t.use_cases}
            and (not pricing_models or t.pricing_model in pricing_models)
        ]

    def list_tools_by_category_and_use_case(
        self,
        category_id: int,
        use_case_id: int,
        limit: int = 12,
        offset: int = 0,
        pricing_models: Optional[Sequence[str]] = None,
    ) -> List[ToolSnapshot]:
        matches = self._category_use_case_matches(category_id, use_case_id, pricing_models)
        return self._ordered(matches)[offset:offset + limit]

    def count_tools_by_category_and_use_case(
        self,
        category_id: int,
        use_case_id: int,
        pricing_models: Optional[Sequence[str]] = None,
    ) -> int:
        return len(self._category_use_case_matches(category_id, use_case_id, pricing_models))
