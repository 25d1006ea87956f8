"""
Version resolution and validation.

A requested version is either taken verbatim or, when absent, resolved by
polling the ``LATEST_RELEASE`` endpoint. Whatever comes out is validated as a
version *constraint* expression, so ranges such as ``^2.0`` or
``>=2.40 <3.0`` are accepted as well as exact versions.

Constraint syntax follows Composer's grammar:

- OR groups separated by ``||`` (or ``|``)
- AND constraints separated by commas or whitespace
- wildcards (``*``, ``2.*``), tilde (``~2.4``) and caret (``^2.0``) ranges
- hyphen ranges (``2.0 - 2.41``)
- comparators (``>``, ``>=``, ``<``, ``<=``, ``=``, ``==``, ``!=``, ``<>``)
- ``@stability`` flags, ``v`` prefixes and ``dev-<branch>`` names

Individual versions are checked with :mod:`packaging.version`.
"""

import logging
import re
from typing import List, Optional, Tuple

import requests
from packaging.version import InvalidVersion, Version

from chromedriver_installer.core.download import substitute
from chromedriver_installer.core.exceptions import InvalidVersionError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://chromedriver.storage.googleapis.com"
LATEST_RELEASE_URL_TEMPLATE = "{{base}}/LATEST_RELEASE"

Constraint = Tuple[str, str]

_OPERATORS = ("<>", "!=", ">=", "<=", ">", "<", "==", "=")
_BRANCH_ALIASES = ("master", "trunk", "default")
_MAX_RELEASE_SEGMENTS = 4

_STABILITY_FLAG = re.compile(r"@(?:stable|rc|beta|alpha|dev)$", re.IGNORECASE)
_REFERENCE = re.compile(r"#\S+$")
_OR_SPLIT = re.compile(r"\s*\|\|?\s*")
_AND_SPLIT = re.compile(r"\s*,\s*|\s+")
_BARE_OPERATOR = re.compile(r"^(?:<>|!=|>=?|<=?|==?|~>?|\^)$")
_WILDCARD = re.compile(r"^v?[xX*](?:\.[xX*])*$")
_TILDE = re.compile(r"^~>?\s*v?(?P<release>\d+(?:\.\d+){0,3})(?P<rest>.*)$")
_CARET = re.compile(r"^\^\s*v?(?P<release>\d+(?:\.\d+){0,3})(?P<rest>.*)$")
_X_RANGE = re.compile(r"^v?(?P<release>\d+(?:\.\d+){0,2})(?:\.[xX*])+$")
_COMPARATOR = re.compile(r"^(?P<op><>|!=|>=?|<=?|==?)?\s*(?P<version>.+)$")
_DEV_BRANCH = re.compile(r"^dev-\S+$")
_POST_RELEASE = re.compile(r"(?<=\d)[._-]?(?:patch|pl|p)(?=[.-]?\d|$)", re.IGNORECASE)
_STABLE_SUFFIX = re.compile(r"[._-]?stable$", re.IGNORECASE)
_BUILD_METADATA = re.compile(r"\+\S+$")


def resolve_version(
    requested: Optional[str],
    base_url: str = DEFAULT_BASE_URL,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Resolve the version to install.

    An explicit version is returned verbatim. Otherwise a single GET against
    the latest-release endpoint is made and its body, stripped of whitespace,
    is the version. A failed request yields an empty string, which then fails
    validation.

    Args:
        requested: Explicit version, or None/empty for the latest release
        base_url: Base URL of the release storage
        session: Optional requests session (defaults to module-level requests)

    Returns:
        Version string (possibly empty if the latest release lookup failed)
    """
    if requested:
        return requested

    http = session or requests
    url = substitute(LATEST_RELEASE_URL_TEMPLATE, {"base": base_url})

    logger.info("Polling for the latest version of ChromeDriver")

    try:
        response = http.get(url)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Failed to fetch latest ChromeDriver release from {url}: {e}")
        return ""

    return response.text.strip()


def validate_version(version: str) -> None:
    """
    Validate a version or version constraint string.

    Args:
        version: Version string to check

    Raises:
        InvalidVersionError: If the string is not a valid constraint
    """
    parse_constraints(version)


def parse_constraints(expression: str) -> List[List[Constraint]]:
    """
    Parse a version constraint expression.

    Args:
        expression: Constraint expression (e.g. '2.41', '^2.0 || ~3.1')

    Returns:
        List of OR alternatives, each a list of (operator, version) pairs
        that must all hold. A match-all wildcard is ``("*", "*")``.

    Raises:
        InvalidVersionError: If the expression cannot be parsed

    Example:
        >>> parse_constraints("^2.0")
        [[('>=', '2.0'), ('<', '3')]]
    """
    if expression is None or not expression.strip():
        raise InvalidVersionError(expression or "")

    alternatives = []
    for or_part in _OR_SPLIT.split(expression.strip()):
        if not or_part:
            raise InvalidVersionError(expression)

        constraints = []
        for token in _split_and(or_part, expression):
            constraints.extend(_parse_constraint(token, expression))
        alternatives.append(constraints)

    return alternatives


def _split_and(part: str, expression: str) -> List[str]:
    """Split an OR alternative into its AND-ed constraints."""
    tokens = _AND_SPLIT.split(part.strip())
    if any(not token for token in tokens):
        raise InvalidVersionError(expression)

    merged: List[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if _BARE_OPERATOR.match(token):
            # '>= 2.0' is one constraint
            if i + 1 >= len(tokens):
                raise InvalidVersionError(expression)
            merged.append(token + tokens[i + 1])
            i += 2
        elif token in ("-", "as") and merged and i + 1 < len(tokens):
            merged[-1] = f"{merged[-1]} {token} {tokens[i + 1]}"
            i += 2
        else:
            merged.append(token)
            i += 1

    return merged


def _parse_constraint(constraint: str, expression: str) -> List[Constraint]:
    """Parse a single constraint into its (operator, version) bounds."""
    constraint = _STABILITY_FLAG.sub("", constraint)
    if not constraint:
        raise InvalidVersionError(expression)

    if " as " in constraint:
        constraint = constraint.split(" as ", 1)[0]

    if " - " in constraint:
        lower, upper = constraint.split(" - ", 1)
        return [
            (">=", normalize_version(lower, expression)),
            ("<=", normalize_version(upper, expression)),
        ]

    if _WILDCARD.match(constraint):
        return [("*", "*")]

    match = _TILDE.match(constraint)
    if match:
        lower = normalize_version(match.group("release") + match.group("rest"), expression)
        release = _release_parts(match.group("release"))
        # ~2 and ~2.4 allow minor bumps, ~2.4.1 only patch bumps
        position = max(len(release) - 2, 0)
        return [(">=", lower), ("<", _bump(release, position))]

    match = _CARET.match(constraint)
    if match:
        lower = normalize_version(match.group("release") + match.group("rest"), expression)
        release = _release_parts(match.group("release"))
        position = 0
        while position < len(release) - 1 and release[position] == 0:
            position += 1
        return [(">=", lower), ("<", _bump(release, position))]

    match = _X_RANGE.match(constraint)
    if match:
        release = _release_parts(match.group("release"))
        lower = ".".join(str(part) for part in release)
        return [(">=", lower), ("<", _bump(release, len(release) - 1))]

    match = _COMPARATOR.match(constraint)
    if match:
        operator = match.group("op") or "=="
        if operator == "=":
            operator = "=="
        return [(operator, normalize_version(match.group("version"), expression))]

    raise InvalidVersionError(expression)


def normalize_version(version: str, expression: Optional[str] = None) -> str:
    """
    Normalize a single version string.

    Args:
        version: Version such as '2.41', 'v2.41.578700', '1.0-beta2', 'dev-main'
        expression: Full expression to report on error (defaults to version)

    Returns:
        Normalized version string

    Raises:
        InvalidVersionError: If the version cannot be parsed
    """
    candidate = _REFERENCE.sub("", version.strip())

    if _DEV_BRANCH.match(candidate):
        return candidate
    if candidate.lower() in _BRANCH_ALIASES:
        return f"dev-{candidate}"

    candidate = _BUILD_METADATA.sub("", candidate)
    candidate = _STABLE_SUFFIX.sub("", candidate)
    candidate = _POST_RELEASE.sub(".post", candidate)

    try:
        parsed = Version(candidate)
    except InvalidVersion:
        raise InvalidVersionError(expression or version) from None

    if parsed.epoch or len(parsed.release) > _MAX_RELEASE_SEGMENTS:
        raise InvalidVersionError(expression or version)

    return str(parsed)


def _release_parts(release: str) -> List[int]:
    return [int(part) for part in release.split(".")]


def _bump(release: List[int], position: int) -> str:
    """Upper bound obtained by incrementing ``release[position]``."""
    bumped = release[:position] + [release[position] + 1]
    return ".".join(str(part) for part in bumped)


__all__ = [
    "DEFAULT_BASE_URL",
    "resolve_version",
    "validate_version",
    "parse_constraints",
    "normalize_version",
]
