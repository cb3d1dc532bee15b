"""Comment model: the content submitted to comment-check and submit-spam/ham."""

from __future__ import annotations

from datetime import datetime
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from akismet.errors import ValidationError


class CommentType:
    """Common ``comment_type`` values. Akismet accepts any string."""

    COMMENT: Final[str] = "comment"
    FORUM_POST: Final[str] = "forum-post"
    REPLY: Final[str] = "reply"
    BLOG_POST: Final[str] = "blog-post"
    CONTACT_FORM: Final[str] = "contact-form"
    SIGNUP: Final[str] = "signup"
    MESSAGE: Final[str] = "message"


class UserRole:
    """``user_role`` values with special meaning to Akismet."""

    # Administrators are never flagged as spam.
    ADMIN: Final[str] = "administrator"


class RecheckReason:
    """``recheck_reason`` values for comments checked more than once."""

    EDIT: Final[str] = "edit"


# Comment attribute -> wire field, in the order fields are sent.
_OPTIONAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("referrer", "referrer"),
    ("permalink", "permalink"),
    ("type", "comment_type"),
    ("author", "comment_author"),
    ("author_email", "comment_author_email"),
    ("author_url", "comment_author_url"),
    ("content", "comment_content"),
    ("date_gmt", "comment_date_gmt"),
    ("post_modified_gmt", "comment_post_modified_gmt"),
    ("blog_lang", "blog_lang"),
    ("blog_charset", "blog_charset"),
    ("user_role", "user_role"),
)


def _is_blank(value: str) -> bool:
    return not value.strip()


class Comment(BaseModel):
    """A comment (or any user-submitted content) to classify or report.

    At least one of ``user_ip`` or ``user_agent`` must be set by the time the
    comment is sent; this is checked by :meth:`to_form`, not at construction,
    so a comment may be filled in incrementally.

    Example:
        comment = Comment(
            user_ip="127.0.0.1",
            user_agent="Mozilla/5.0",
            type=CommentType.COMMENT,
            content="It means a lot that you would take the time to review our software.",
        )
    """

    model_config = ConfigDict(validate_assignment=True)

    user_ip: str = ""
    user_agent: str = ""
    referrer: str = ""
    permalink: str = ""
    #: Free-form; see :class:`CommentType` for common values.
    type: str = ""
    author: str = ""
    author_email: str = ""
    author_url: str = ""
    content: str = ""
    #: ISO 8601 timestamp, see :func:`date_to_gmt`.
    date_gmt: str = ""
    post_modified_gmt: str = ""
    #: Comma-separated ISO 639-1 codes, e.g. ``"en, fr_ca"``.
    blog_lang: str = ""
    blog_charset: str = ""
    user_role: str = ""
    #: Marks the request as a test so it does not train the classifier.
    is_test: bool = False
    recheck_reason: str = ""
    #: Extra form fields sent verbatim; they override standard fields on collision.
    other: dict[str, str] = Field(default_factory=dict)

    def to_form(self, blog: str) -> dict[str, str]:
        """Serialize into the ordered form fields of a comment request.

        Blank optional fields are omitted entirely. ``other`` is merged last.

        Raises:
            ValidationError: If both ``user_ip`` and ``user_agent`` are blank.
        """
        if _is_blank(self.user_ip) and _is_blank(self.user_agent):
            raise ValidationError(
                "user_ip and/or user_agent are required",
                hint="Set Comment.user_ip or Comment.user_agent before sending.",
            )

        form = {
            "blog": blog,
            "user_ip": self.user_ip,
            "user_agent": self.user_agent,
        }
        for attr, wire_name in _OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if not _is_blank(value):
                form[wire_name] = value
        if self.is_test:
            form["is_test"] = "1"
        if not _is_blank(self.recheck_reason):
            form["recheck_reason"] = self.recheck_reason

        form.update(self.other)
        return form


def date_to_gmt(value: datetime) -> str:
    """Format a datetime as an ISO 8601 timestamp with UTC offset.

    Naive datetimes are taken to be in local time; aware ones keep their
    offset. Sub-second precision is dropped, e.g. ``2019-05-21T14:42:07-07:00``.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.replace(microsecond=0).isoformat()
