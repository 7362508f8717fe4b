# src/squadboard/api/v1/endpoints/posts.py
"""Post actions: feed, create, delete and like toggling."""

from __future__ import annotations

from typing import Any

from squadboard.api.v1.actions import action
from squadboard.api.v1.dependencies import RequestContext
from squadboard.schemas.post import PostCreate, PostRef, PostResponse
from squadboard.services.likes import LikeLedger
from squadboard.services.posts import PostBoard


@action("GET", "", "list_posts")
def list_posts(ctx: RequestContext) -> dict[str, Any]:
    """List the newest posts with the caller's like state."""
    views = PostBoard(ctx.db).list_recent(ctx.actor_id)
    return {
        "posts": [
            PostResponse.model_validate(view.post)
            .model_copy(update={"liked": view.liked})
            .model_dump(mode="json")
            for view in views
        ]
    }


@action("POST", "create_post")
def create_post(ctx: RequestContext) -> dict[str, Any]:
    """Publish a post as the caller."""
    author = ctx.require_account()
    payload = ctx.parse(PostCreate)
    post = PostBoard(ctx.db).create_post(author, payload.body, payload.tagline, payload.images)
    return {"post": PostResponse.model_validate(post).model_dump(mode="json")}


@action("POST", "delete_post")
def delete_post(ctx: RequestContext) -> dict[str, Any]:
    """Delete one of the caller's posts (any post for administrators)."""
    requestor = ctx.require_account()
    payload = ctx.parse(PostRef)
    PostBoard(ctx.db).delete_post(payload.post_id, requestor)
    return {}


@action("POST", "like")
def like(ctx: RequestContext) -> dict[str, Any]:
    """Toggle the caller's like; anonymous callers are keyed by address."""
    payload = ctx.parse(PostRef)
    outcome = LikeLedger(ctx.db).toggle_like(payload.post_id, ctx.actor_id)
    return {"liked": outcome.liked, "like_count": outcome.like_count}
