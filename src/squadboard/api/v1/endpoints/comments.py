# src/squadboard/api/v1/endpoints/comments.py
"""Comment actions."""

from __future__ import annotations

from typing import Any

from squadboard.api.v1.actions import action
from squadboard.api.v1.dependencies import RequestContext
from squadboard.schemas.post import CommentCreate, CommentRef, CommentResponse, PostRef
from squadboard.services.comments import CommentThreads


@action("GET", "get_comments")
def get_comments(ctx: RequestContext) -> dict[str, Any]:
    """List a post's comments, oldest first."""
    payload = ctx.parse(PostRef)
    comments = CommentThreads(ctx.db).list_comments(payload.post_id)
    return {
        "comments": [
            CommentResponse.model_validate(comment).model_dump(mode="json")
            for comment in comments
        ]
    }


@action("POST", "add_comment")
def add_comment(ctx: RequestContext) -> dict[str, Any]:
    """Comment on a post as the caller."""
    author = ctx.require_account()
    payload = ctx.parse(CommentCreate)
    comment = CommentThreads(ctx.db).add_comment(payload.post_id, author, payload.body)
    return {
        "comment_id": comment.id,
        "comment": CommentResponse.model_validate(comment).model_dump(mode="json"),
    }


@action("POST", "delete_comment")
def delete_comment(ctx: RequestContext) -> dict[str, Any]:
    """Delete a comment written by the caller (any comment for administrators)."""
    requestor = ctx.require_account()
    payload = ctx.parse(CommentRef)
    CommentThreads(ctx.db).delete_comment(payload.post_id, payload.comment_id, requestor)
    return {}
