from skill_exchange.models.review import Review
from skill_exchange.models.skill import Skill

__all__ = [
	"Review",
	"Skill",
]
