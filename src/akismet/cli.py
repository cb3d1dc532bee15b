"""Command-line sample: verify a key, check a comment, report spam or ham.

Usage:
    akismet --key 123YourAPIKey --blog https://example.com verify
    akismet check --ip 127.0.0.1 --agent "Mozilla/5.0" --content "..." --submit
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from akismet.client import Akismet
from akismet.comment import Comment
from akismet.config import Config
from akismet.errors import AkismetError

if TYPE_CHECKING:
    from collections.abc import Sequence


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key, value


def _add_comment_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ip", default="", help="Commenter IP address")
    parser.add_argument("--agent", default="", help="Commenter browser user agent")
    parser.add_argument("--referrer", default="")
    parser.add_argument("--permalink", default="")
    parser.add_argument("--type", default="", help="e.g. comment, forum-post, signup")
    parser.add_argument("--author", default="")
    parser.add_argument("--email", default="", help="Author email")
    parser.add_argument("--url", default="", help="Author URL")
    parser.add_argument("--content", default="")
    parser.add_argument(
        "--date-gmt", default="", help="Comment timestamp, ISO 8601 with offset"
    )
    parser.add_argument(
        "--modified-gmt", default="", help="Post last-modified timestamp, ISO 8601"
    )
    parser.add_argument("--lang", default="", help="Blog language, e.g. en")
    parser.add_argument("--charset", default="", help="Blog charset, e.g. UTF-8")
    parser.add_argument("--role", default="", help="Commenter role on the site")
    parser.add_argument(
        "--recheck-reason", default="", help="e.g. edit"
    )
    parser.add_argument(
        "--test", action="store_true", help="Mark as a test request (no training)"
    )
    parser.add_argument(
        "--other",
        type=_key_value,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra form field; may be repeated",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="akismet", description="Akismet anti-spam service client"
    )
    parser.add_argument("--key", default=None, help="API key (or AKISMET_API_KEY)")
    parser.add_argument("--blog", default=None, help="Site URL (or AKISMET_BLOG)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log HTTP traffic (key redacted)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("verify", help="Verify the API key and blog URL")

    check = commands.add_parser("check", help="Check whether a comment is spam")
    _add_comment_arguments(check)
    check.add_argument(
        "--submit",
        action="store_true",
        help="Report the verdict back via submit-spam/submit-ham",
    )

    spam = commands.add_parser("spam", help="Submit a comment as spam")
    _add_comment_arguments(spam)

    ham = commands.add_parser("ham", help="Submit a comment as ham")
    _add_comment_arguments(ham)
    return parser


def comment_from_args(args: argparse.Namespace) -> Comment:
    return Comment(
        user_ip=args.ip,
        user_agent=args.agent,
        referrer=args.referrer,
        permalink=args.permalink,
        type=args.type,
        author=args.author,
        author_email=args.email,
        author_url=args.url,
        content=args.content,
        date_gmt=args.date_gmt,
        post_modified_gmt=args.modified_gmt,
        blog_lang=args.lang,
        blog_charset=args.charset,
        user_role=args.role,
        is_test=args.test,
        recheck_reason=args.recheck_reason,
        other=dict(args.other),
    )


def _report_failure(akismet: Akismet) -> None:
    result = akismet.last_result
    if result is None:
        return
    if result.transport_error:
        print(f"Could not reach Akismet: {result.transport_error}", file=sys.stderr)
    if akismet.error:
        print(f"Akismet error: {akismet.error}", file=sys.stderr)
    if akismet.debug_help:
        print(f"Debug help: {akismet.debug_help}", file=sys.stderr)


def _run(akismet: Akismet, args: argparse.Namespace) -> int:
    if not akismet.verify_key():
        print("Invalid API Key.", file=sys.stderr)
        _report_failure(akismet)
        return 1
    if args.command == "verify":
        print("Valid API key.")
        return 0

    comment = comment_from_args(args)

    if args.command == "spam":
        if akismet.submit_spam(comment):
            print("The comment has been submitted as SPAM to Akismet.")
            return 0
        _report_failure(akismet)
        return 1

    if args.command == "ham":
        if akismet.submit_ham(comment):
            print("The comment has been submitted as HAM to Akismet.")
            return 0
        _report_failure(akismet)
        return 1

    is_spam = akismet.check_comment(comment)
    if not is_spam and akismet.response.lower() != "false":
        # No verdict: unreachable service or an error reply such as "invalid".
        _report_failure(akismet)
        return 1

    if is_spam:
        print("The comment is SPAM according to Akismet.")
        if akismet.is_discard:
            print("Akismet recommends discarding it outright.")
        if args.submit and akismet.submit_spam(comment):
            print("The comment has been submitted as SPAM to Akismet.")
    else:
        print("The comment is not SPAM (HAM) according to Akismet.")
        if args.submit and akismet.submit_ham(comment):
            print("The comment has been submitted as HAM to Akismet.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    try:
        config = Config(api_key=args.key, blog=args.blog)
        with Akismet(config=config) as akismet:
            return _run(akismet, args)
    except AkismetError as exc:
        message = f"{exc}. {exc.hint}" if exc.hint else str(exc)
        print(message, file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
