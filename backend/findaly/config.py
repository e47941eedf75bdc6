"""Configuration settings for the Findaly decision engine"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from typing import Optional


class RankingConfig(BaseModel):
    """Weights, bonuses and pool sizes used by the alternatives ranker"""

    max_curated: int = 24
    category_pool_limit: int = 120
    min_pool_size: int = 8
    broad_pool_limit: int = 200
    max_results: int = 12

    use_case_weight: float = 50.0
    audience_weight: float = 20.0
    features_weight: float = 25.0
    integrations_cap: int = 5
    integrations_weight: float = 1.0
    featured_bonus: float = 2.0

    curated_min_score: float = -10.0
    curated_max_score: float = 30.0
    curated_bonus: float = 8.0


class ToolPageLimits(BaseModel):
    alt_tools: int = 5
    comparisons: int = 3
    best: int = 4


class AlternativesPageLimits(BaseModel):
    top_alternatives: int = 8
    comparisons: int = 5


class CategoryPageLimits(BaseModel):
    tools: int = 24
    top_tools_for_pairs: int = 4
    best: int = 8
    use_cases: int = 10
    comparisons: int = 6
    alternatives: int = 6


class BestPageLimits(BaseModel):
    pool: int = 12
    tools: int = 8
    comparisons: int = 6
    alternatives: int = 6


class LinkingLimits(BaseModel):
    """Per page kind caps for every internal link group"""

    tool: ToolPageLimits = Field(default_factory=ToolPageLimits)
    alternatives: AlternativesPageLimits = Field(default_factory=AlternativesPageLimits)
    category: CategoryPageLimits = Field(default_factory=CategoryPageLimits)
    best: BestPageLimits = Field(default_factory=BestPageLimits)


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Findaly Decision Engine"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Database Settings
    POSTGRES_USER: str = "findaly"
    POSTGRES_PASSWORD: str = "findaly_pass"
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "findaly"
    DATABASE_URL_OVERRIDE: Optional[str] = None  # e.g. sqlite:///./findaly.db
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Redis Settings
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None

    @property
    def REDIS_URL(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Cache Settings
    CACHE_BACKEND: str = "memory"  # memory or redis
    LINK_CACHE_TTL: int = 60 * 60 * 12  # 12 hours

    # Rate limiting
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Ranking Settings
    RANKING_MAX_CURATED: int = 24
    RANKING_CATEGORY_POOL_LIMIT: int = 120
    RANKING_MIN_POOL_SIZE: int = 8
    RANKING_BROAD_POOL_LIMIT: int = 200
    RANKING_MAX_RESULTS: int = 12
    RANKING_USE_CASE_WEIGHT: float = 50.0
    RANKING_AUDIENCE_WEIGHT: float = 20.0
    RANKING_FEATURES_WEIGHT: float = 25.0
    RANKING_INTEGRATIONS_CAP: int = 5
    RANKING_INTEGRATIONS_WEIGHT: float = 1.0
    RANKING_FEATURED_BONUS: float = 2.0
    RANKING_CURATED_MIN_SCORE: float = -10.0
    RANKING_CURATED_MAX_SCORE: float = 30.0
    RANKING_CURATED_BONUS: float = 8.0

    # Internal link limits per page kind
    LINK_TOOL_ALT_TOOLS: int = 5
    LINK_TOOL_COMPARISONS: int = 3
    LINK_TOOL_BEST: int = 4
    LINK_ALTERNATIVES_TOP: int = 8
    LINK_ALTERNATIVES_COMPARISONS: int = 5
    LINK_CATEGORY_TOOLS: int = 24
    LINK_CATEGORY_TOP_TOOLS_FOR_PAIRS: int = 4
    LINK_CATEGORY_BEST: int = 8
    LINK_CATEGORY_USE_CASES: int = 10
    LINK_CATEGORY_COMPARISONS: int = 6
    LINK_CATEGORY_ALTERNATIVES: int = 6
    LINK_BEST_POOL: int = 12
    LINK_BEST_TOOLS: int = 8
    LINK_BEST_COMPARISONS: int = 6
    LINK_BEST_ALTERNATIVES: int = 6

    # Best-for listing
    BEST_PAGE_SIZE: int = 12
    BEST_MAX_PAGE: int = 200

    class Config:
        env_file = ".env"
        case_sensitive = True

    def ranking_config(self) -> RankingConfig:
        return RankingConfig(
            max_curated=self.RANKING_MAX_CURATED,
            category_pool_limit=self.RANKING_CATEGORY_POOL_LIMIT,
            min_pool_size=self.RANKING_MIN_POOL_SIZE,
            broad_pool_limit=self.RANKING_BROAD_POOL_LIMIT,
            max_results=self.RANKING_MAX_RESULTS,
            use_case_weight=self.RANKING_USE_CASE_WEIGHT,
            audience_weight=self.RANKING_AUDIENCE_WEIGHT,
            features_weight=self.RANKING_FEATURES_WEIGHT,
            integrations_cap=self.RANKING_INTEGRATIONS_CAP,
            integrations_weight=self.RANKING_INTEGRATIONS_WEIGHT,
            featured_bonus=self.RANKING_FEATURED_BONUS,
            curated_min_score=self.RANKING_CURATED_MIN_SCORE,
            curated_max_score=self.RANKING_CURATED_MAX_SCORE,
            curated_bonus=self.RANKING_CURATED_BONUS,
        )

    def linking_limits(self) -> LinkingLimits:
        return LinkingLimits(
            tool=ToolPageLimits(
                alt_tools=self.LINK_TOOL_ALT_TOOLS,
                comparisons=self.LINK_TOOL_COMPARISONS,
                best=self.LINK_TOOL_BEST,
            ),
            alternatives=AlternativesPageLimits(
                top_alternatives=self.LINK_ALTERNATIVES_TOP,
                comparisons=self.LINK_ALTERNATIVES_COMPARISONS,
            ),
            category=CategoryPageLimits(
                tools=self.LINK_CATEGORY_TOOLS,
                top_tools_for_pairs=self.LINK_CATEGORY_TOP_TOOLS_FOR_PAIRS,
                best=self.LINK_CATEGORY_BEST,
                use_cases=self.LINK_CATEGORY_USE_CASES,
                comparisons=self.LINK_CATEGORY_COMPARISONS,
                alternatives=self.LINK_CATEGORY_ALTERNATIVES,
            ),
            best=BestPageLimits(
                pool=self.LINK_BEST_POOL,
                tools=self.LINK_BEST_TOOLS,
                comparisons=self.LINK_BEST_COMPARISONS,
                alternatives=self.LINK_BEST_ALTERNATIVES,
            ),
        )


settings = Settings()
