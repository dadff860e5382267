"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentUseCase
from .change_user_group import ChangeUserGroupRequest, ChangeUserGroupUseCase
from .common import AuthorItem, CommentItem, CommentResponse
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .edit_comment import EditCommentRequest, EditCommentUseCase
from .get_comment import GetCommentRequest, GetCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase

__all__ = [
    "AddCommentRequest",
    "AddCommentUseCase",
    "AuthorItem",
    "ChangeUserGroupRequest",
    "ChangeUserGroupUseCase",
    "CommentItem",
    "CommentResponse",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "EditCommentRequest",
    "EditCommentUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
]
