"""Resolve an input URL to the GitHub repository it refers to."""

from __future__ import annotations

import logging
from urllib.parse import ParseResult, urlparse

from reuse_score.errors import RegistryError
from reuse_score.models import RepositoryIdentity
from reuse_score.registry.base import RegistryPort
from reuse_score.registry.client import declared_repository_url

logger = logging.getLogger(__name__)

_REGISTRY_HOST_MARKER = "npmjs"
_HOSTING_HOST_MARKER = "github"


def _split(url: str) -> ParseResult | None:
    try:
        return urlparse(url)
    except ValueError as exc:
        logger.warning("Malformed URL %r: %s", url, exc)
        return None


def _path_segments(url: str) -> list[str]:
    parsed = _split(url)
    if parsed is None:
        return []
    return [segment for segment in parsed.path.split("/") if segment]


def _host(url: str) -> str:
    parsed = _split(url)
    if parsed is None:
        return ""
    return (parsed.hostname or "").lower()


def is_registry_url(url: str) -> bool:
    return _REGISTRY_HOST_MARKER in _host(url)


def is_hosting_url(url: str) -> bool:
    return _HOSTING_HOST_MARKER in _host(url)


def parse_hosting_url(url: str) -> RepositoryIdentity:
    """Take the final two path segments of a GitHub URL as (owner, name).

    A trailing ``.git`` is stripped from the name.
    """
    segments = _path_segments(url)
    if len(segments) < 2:
        return RepositoryIdentity.unresolved()
    owner, name = segments[-2], segments[-1]
    name = name.removesuffix(".git")
    if not owner or not name:
        return RepositoryIdentity.unresolved()
    return RepositoryIdentity(owner=owner, name=name)


def _normalize_declared_url(declared: str) -> str:
    """Turn npm repository shorthands into something urlparse understands.

    ``git+https://github.com/o/r.git`` -> ``https://github.com/o/r.git``
    ``git@github.com:o/r.git``        -> ``https://github.com/o/r.git``
    ``github:o/r``                    -> ``https://github.com/o/r``
    """
    url = declared.strip().removeprefix("git+")
    if url.startswith("git@"):
        host, _, path = url.removeprefix("git@").partition(":")
        return f"https://{host}/{path}"
    if url.startswith("github:"):
        return f"https://github.com/{url.removeprefix('github:')}"
    if "://" not in url and url.count("/") == 1:
        # Bare "owner/repo" shorthand defaults to GitHub.
        return f"https://github.com/{url}"
    return url


async def _resolve_registry_url(url: str, registry: RegistryPort) -> RepositoryIdentity:
    segments = _path_segments(url)
    if not segments:
        return RepositoryIdentity.unresolved()
    package_name = segments[-1]
    if len(segments) >= 2 and segments[-2].startswith("@"):
        package_name = f"{segments[-2]}/{segments[-1]}"

    try:
        package = await registry.get_package(package_name)
    except RegistryError as exc:
        logger.warning("Registry lookup for '%s' failed: %s", package_name, exc)
        return RepositoryIdentity.unresolved()

    if package is None:
        logger.warning("Package '%s' not found in registry", package_name)
        return RepositoryIdentity.unresolved()

    declared = declared_repository_url(package)
    if not declared:
        logger.warning("Package '%s' declares no repository", package_name)
        return RepositoryIdentity.unresolved()

    normalized = _normalize_declared_url(declared)
    if not is_hosting_url(normalized):
        logger.warning(
            "Package '%s' declares a repository outside GitHub: %s", package_name, declared
        )
        return RepositoryIdentity.unresolved()

    identity = parse_hosting_url(normalized)
    if not identity.is_resolved:
        return identity
    # Declared names carry suffixes such as ".git"; keep everything before the first dot.
    name = (identity.name or "").split(".")[0]
    if not name:
        return RepositoryIdentity.unresolved()
    return RepositoryIdentity(owner=identity.owner, name=name)


async def resolve_identity(url: str, registry: RegistryPort) -> RepositoryIdentity:
    """Resolve a GitHub or npm URL to a RepositoryIdentity.

    npm package URLs are looked up in the registry and resolved through the
    repository URL the package declares. Anything else that is not a GitHub
    URL resolves to an identity with no owner and no name.
    """
    if is_registry_url(url):
        identity = await _resolve_registry_url(url, registry)
    elif is_hosting_url(url):
        identity = parse_hosting_url(url)
    else:
        logger.warning("Unrecognized URL, expected GitHub or npm: %s", url)
        return RepositoryIdentity.unresolved()

    if not identity.is_resolved:
        logger.warning("Could not resolve repository for %s", url)
    return identity
