from .recommendation import recommend_difficulty, recommend_operations

__all__ = ["recommend_difficulty", "recommend_operations"]
