"""Comments on posts, owned by their author."""

from app.application.resources.definition import ResourceDefinition
from app.application.schemas.comment import CommentCreate, CommentUpdate

COMMENTS = ResourceDefinition(
    name="comments",
    label="Comment",
    create_schema=CommentCreate,
    update_schema=CommentUpdate,
    owner_scoped=True,
    searchable_fields=("content",),
    filterable_fields=("postId",),
    references={"postId": "posts"},
)
