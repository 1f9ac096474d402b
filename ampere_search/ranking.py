"""
Ranking module.
Scores a surviving content item against the query text.
"""

from .models import ContentItem


class Ranker:
	"""
	Computes match scores from title signals:
	- base: every surviving item starts here
	- prefix bonus: title starts with the query
	- exact bonus: title equals the query (on top of the prefix bonus)
	With no query text every item gets the base score.
	"""

	def __init__(
		self,
		base_score: float = 0.5,
		prefix_bonus: float = 0.3,
		exact_bonus: float = 0.2,
		max_score: float = 1.0,
	):
		self.base_score = base_score
		self.prefix_bonus = prefix_bonus
		self.exact_bonus = exact_bonus
		self.max_score = max_score

	def score(self, item: ContentItem, query_lower: str) -> float:
		"""
		Score one item. query_lower must already be trimmed and lowercased.
		"""
		score = self.base_score
		if query_lower:
			title = item.title.lower()
			if title.startswith(query_lower):
				score += self.prefix_bonus
			if title == query_lower:
				score += self.exact_bonus
		# Clamp
		return min(self.max_score, score)
