"""Comment moderation - pending-first comments with one level of replies."""

from .component import CommentComponent, validate_comment
from .models import CreateCommentInput

__all__ = ["CommentComponent", "CreateCommentInput", "validate_comment"]
