from skill_exchange.schemas.common import CamelModel, ErrorResponse, MessageResponse, RatingSummaryOut
from skill_exchange.schemas.review import (
	ReviewCreate,
	ReviewCreateResponse,
	ReviewDeleteResponse,
	ReviewListResponse,
	ReviewRead,
)
from skill_exchange.schemas.skill import (
	Pagination,
	SkillCreate,
	SkillListResponse,
	SkillMutationResponse,
	SkillRead,
	SkillResponse,
	SkillUpdate,
)
from skill_exchange.schemas.stats import CategoryStat, CategoryStatsResponse, OverviewStats, OverviewStatsResponse, TopRatedSkill

__all__ = [
	"CamelModel",
	"ErrorResponse",
	"MessageResponse",
	"RatingSummaryOut",
	"ReviewCreate",
	"ReviewCreateResponse",
	"ReviewDeleteResponse",
	"ReviewListResponse",
	"ReviewRead",
	"Pagination",
	"SkillCreate",
	"SkillListResponse",
	"SkillMutationResponse",
	"SkillRead",
	"SkillResponse",
	"SkillUpdate",
	"CategoryStat",
	"CategoryStatsResponse",
	"OverviewStats",
	"OverviewStatsResponse",
	"TopRatedSkill",
]
