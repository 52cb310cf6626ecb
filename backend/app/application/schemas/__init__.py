from .comment import CommentCreate, CommentUpdate
from .contact import ContactCreate, ContactUpdate
from .envelope import ApiResponse, ErrorResponse, FieldErrorSchema
from .fields import Email, PayloadModel, Password, Phone
from .post import PostCategory, PostCreate, PostUpdate
from .user import UserCreate, UserUpdate

__all__ = [
    "CommentCreate",
    "CommentUpdate",
    "ContactCreate",
    "ContactUpdate",
    "ApiResponse",
    "ErrorResponse",
    "FieldErrorSchema",
    "Email",
    "PayloadModel",
    "Password",
    "Phone",
    "PostCategory",
    "PostCreate",
    "PostUpdate",
    "UserCreate",
    "UserUpdate",
]
