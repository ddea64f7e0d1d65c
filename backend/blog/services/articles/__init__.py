from .dto import ArticleCreateIn, ArticleOut
from .service import ArticleService

__all__ = ["ArticleCreateIn", "ArticleOut", "ArticleService"]
