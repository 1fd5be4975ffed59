"""Creator posts, likes and public creator pages."""

import logging

from showcase.errors import NotFound, PermissionDenied, ValidationError
from showcase.extensions import db
from showcase.models.creator import Creator, Plan, Post, PostLike
from showcase.services.payouts import get_creator
from showcase.validation import validate_string

logger = logging.getLogger(__name__)

MAX_POSTS = 50


def _optional_bool(value, field, default):
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{field} must be a boolean", field=field)
    return value


def create_post(user, data):
    if get_creator(user) is None:
        raise PermissionDenied("Only creators can create posts")

    content = data.get("content")
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("Content is required", field="content")

    post = Post(
        author_id=user.id,
        title=validate_string(data.get("title"), "title", max_length=255, required=False),
        content=content.strip(),
        image_url=validate_string(data.get("imageUrl"), "imageUrl", max_length=1024, required=False),
        video_url=validate_string(data.get("videoUrl"), "videoUrl", max_length=1024, required=False),
        is_premium=_optional_bool(data.get("isPremium"), "isPremium", False),
        is_published=_optional_bool(data.get("isPublished"), "isPublished", True),
    )
    db.session.add(post)
    db.session.commit()
    logger.info(f"Post {post.id} created by user {user.id}")
    return post


def published_posts(author_id):
    return (
        Post.query
        .filter_by(author_id=author_id, is_published=True)
        .order_by(Post.created_at.desc())
        .limit(MAX_POSTS)
        .all()
    )


def active_plans(user_id):
    return (
        Plan.query
        .join(Creator, Plan.creator_id == Creator.id)
        .filter(Creator.user_id == user_id, Plan.is_active.is_(True))
        .order_by(Plan.price_cents.asc())
        .all()
    )


def toggle_like(user, post_id):
    """Like the post, or remove the like if it already exists. Returns the new state."""
    if not post_id:
        raise ValidationError("Post ID required", field="postId")
    post = db.session.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found")

    existing = PostLike.query.filter_by(post_id=post.id, user_id=user.id).first()
    if existing is not None:
        db.session.delete(existing)
        liked = False
    else:
        db.session.add(PostLike(post_id=post.id, user_id=user.id))
        liked = True
    db.session.commit()
    return liked
