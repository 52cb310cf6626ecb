"""Blog posts, owned by their author."""

from app.application.resources.definition import ResourceDefinition
from app.application.schemas.post import PostCreate, PostUpdate

POSTS = ResourceDefinition(
    name="posts",
    label="Post",
    create_schema=PostCreate,
    update_schema=PostUpdate,
    owner_scoped=True,
    searchable_fields=("title", "content", "excerpt"),
    filterable_fields=("category",),
)
