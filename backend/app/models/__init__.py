# Models package init
# Both models are imported here so the Post <-> Comment relationship resolves
# no matter which one a caller imports first.
from app.models.post import Post
from app.models.comment import Comment

__all__ = ["Post", "Comment"]
