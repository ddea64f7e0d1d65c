from .dto import CommentOut
from .service import CommentService

__all__ = ["CommentOut", "CommentService"]
