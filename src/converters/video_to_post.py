"""
Conversion of imported YouTube videos into blog posts.

Two routes are offered.  :meth:`VideoConverter.convert` asks the backend to
fetch the transcript and run its own Gemini conversion.
:meth:`VideoConverter.convert_locally` reads the stored transcript, generates
the post here with :class:`services.gemini_client.TranscriptBlogWriter` and
creates the blog post through the admin API, which lets an operator review
prompts and output without touching the server.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from models.blog_post import BlogPostDraft
from services.gemini_client import TranscriptBlogWriter
from src.client.admin_api import convert_video, create_blog_post, get_video
from src.utils.cache import BLOG_POSTS_KEY, YOUTUBE_VIDEOS_KEY, ListingCache
from src.utils.errors import report_error, report_ok
from src.utils.notifications import Notifier
from src.utils.text import plain_text


class VideoConverter:
    def __init__(
        self,
        config: Dict[str, Any],
        *,
        writer: Optional[TranscriptBlogWriter] = None,
        cache: Optional[ListingCache] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.config = config
        self.writer = writer
        self.cache = cache or ListingCache()
        self.notifier = notifier or Notifier()

    def convert(
        self,
        video_id: str,
        *,
        category_id: str,
        title: Optional[str] = None,
        summary: bool = True,
        tags: bool = True,
    ) -> Dict[str, Any]:
        subject = {"id": video_id, "category_id": category_id}
        try:
            response = convert_video(
                self.config["admin"], video_id, category_id=category_id, title=title, summary=summary, tags=tags
            )
        except Exception as e:
            report_error("CONVERT_FAILED", subject, e)
            self.notifier.error("Error", f"Failed to convert video to blog post: {getattr(e, 'message', None) or e}")
            raise
        self.cache.invalidate(YOUTUBE_VIDEOS_KEY)
        self.cache.invalidate(BLOG_POSTS_KEY)
        report_ok("VIDEO_CONVERTED", subject, {"blog_post_id": response.get("blogPostId")})
        self.notifier.success("Success", "Video converted to a blog post. Check blog management to see the result.")
        return response

    def convert_locally(
        self,
        video_id: str,
        *,
        category_id: Optional[int] = None,
        title: Optional[str] = None,
        summary: bool = True,
        tags: bool = True,
    ) -> Dict[str, Any]:
        if self.writer is None:
            raise RuntimeError("Local conversion needs a TranscriptBlogWriter")
        subject: Dict[str, Any] = {"id": video_id, "category_id": category_id}
        try:
            video = get_video(self.config["admin"], video_id)
            post_title = title or plain_text(video.get("title") or "")
            subject["title"] = post_title
            content = self.writer.convert_transcript_to_blog_post(
                post_title, video.get("transcript") or "", include_summary=summary, generate_tags=tags
            )
            draft = BlogPostDraft(
                title=post_title,
                content=content.content,
                excerpt=content.summary,
                featured_image=video.get("thumbnail"),
                category_id=category_id if category_id is not None else video.get("categoryId"),
                tags=content.tags,
            )
            response = create_blog_post(self.config["admin"], draft.to_payload())
        except Exception as e:
            report_error("CONVERT_FAILED", subject, e)
            self.notifier.error("Error", f"Failed to convert video to blog post: {getattr(e, 'message', None) or e}")
            raise
        self.cache.invalidate(BLOG_POSTS_KEY)
        report_ok("VIDEO_CONVERTED", subject, {"blog_post_id": response.get("id"), "local": True})
        self.notifier.success("Success", f'Blog post "{draft.title}" created from video {video_id}')
        return response
