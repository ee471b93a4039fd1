"""Prompt identifier parsing.

Accepted forms:

- ``prompt`` : a prompt in the default repository
- ``repo/prompt/sub/path`` : a prompt in a registered repository
- ``https://host/user/repo[/tree/<ref>]/prompt/sub/path`` : a prompt fetched
  directly from a remote repository
"""

from dataclasses import dataclass
from urllib.parse import urlparse

from prompt_kit.errors import InvalidIdentifierError

# Path segments that introduce a ref on hosted git web UIs
REF_MARKERS = ("tree", "blob")


@dataclass(frozen=True)
class ParsedIdentifier:
    """Structured form of a user-supplied prompt identifier."""

    repository: str
    prompt: str
    is_url: bool
    original_url: str | None = None
    ref: str | None = None


def is_url_identifier(identifier: str) -> bool:
    """Check whether an identifier uses the URL form."""
    return "://" in identifier


def parse_prompt_identifier(identifier: str) -> ParsedIdentifier:
    """Parse a prompt identifier into repository and prompt path.

    Args:
        identifier: Raw identifier from the command line

    Returns:
        ParsedIdentifier. ``repository`` is empty for bare prompt names.

    Raises:
        InvalidIdentifierError: If the identifier does not match any accepted form
    """
    if not identifier or not identifier.strip():
        raise InvalidIdentifierError(identifier, "identifier is empty")

    if is_url_identifier(identifier):
        return _parse_url_identifier(identifier)

    if "/" in identifier:
        repository, _, prompt = identifier.partition("/")
        prompt = prompt.strip("/")
        if not repository:
            raise InvalidIdentifierError(identifier, "repository name is empty")
        if not prompt:
            raise InvalidIdentifierError(identifier, "prompt path is empty")
        return ParsedIdentifier(repository=repository, prompt=prompt, is_url=False)

    return ParsedIdentifier(repository="", prompt=identifier, is_url=False)


def _parse_url_identifier(identifier: str) -> ParsedIdentifier:
    parsed = urlparse(identifier)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidIdentifierError(identifier, "URL is missing a scheme or host")

    segments = [segment for segment in parsed.path.split("/") if segment]
    if len(segments) < 3:
        raise InvalidIdentifierError(
            identifier, "URL must contain user, repository and prompt path"
        )

    repository = segments[1].removesuffix(".git")
    rest = segments[2:]

    ref: str | None = None
    if rest[0] in REF_MARKERS:
        if len(rest) < 2:
            raise InvalidIdentifierError(identifier, f"'{rest[0]}' segment is missing a ref")
        ref = rest[1]
        rest = rest[2:]

    prompt = "/".join(rest)
    if not prompt:
        raise InvalidIdentifierError(identifier, "prompt path is empty")

    return ParsedIdentifier(
        repository=repository,
        prompt=prompt,
        is_url=True,
        original_url=identifier,
        ref=ref,
    )
