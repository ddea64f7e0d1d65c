from .dto import BookmarkedArticleOut, ToggleStatus
from .service import BookmarkService, LikeService, ToggleService

__all__ = [
    "BookmarkService",
    "BookmarkedArticleOut",
    "LikeService",
    "ToggleService",
    "ToggleStatus",
]
