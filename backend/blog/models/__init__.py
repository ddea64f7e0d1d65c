from blog.models.article import Article
from blog.models.comment import Comment
from blog.models.engagement import ArticleBookmark, ArticleLike
from blog.models.user import User

__all__ = [
    "Article",
    "ArticleBookmark",
    "ArticleLike",
    "Comment",
    "User",
]
