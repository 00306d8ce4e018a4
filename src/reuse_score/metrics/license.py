"""License metric: is the repository's license compatible with LGPL-2.1?"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from reuse_score.errors import GitHubQueryError, RegistryError, SchemaError
from reuse_score.github.base import GraphQLPort
from reuse_score.github.schemas import LICENSE_QUERY, LicenseResponse, parse_license_response
from reuse_score.metrics.base import elapsed_since, start_clock
from reuse_score.models import MetricResult, RepositoryIdentity
from reuse_score.registry.base import RegistryPort
from reuse_score.registry.client import declared_license

logger = logging.getLogger(__name__)

COMPATIBLE_SPDX_IDS: frozenset[str] = frozenset(
    {
        "LGPL-2.1-only",
        "LGPL-2.1-or-later",
        "LGPL-3.0-only",
        "LGPL-3.0-or-later",
        "MIT",
        "BSD-2-Clause",
        "BSD-3-Clause",
        "ISC",
        "Zlib",
        "Artistic-2.0",
        "GPL-2.0-only",
        "GPL-2.0-or-later",
        "GPL-3.0-only",
        "GPL-3.0-or-later",
        "MPL-2.0",
        "Unlicense",
        "CC0-1.0",
    }
)

# GitHub reports unrecognized license files with this name and a NOASSERTION id.
_UNRECOGNIZED_LICENSE_NAME = "Other"


def is_compatible(spdx_id: str | None) -> bool:
    if not spdx_id:
        return False
    return spdx_id in COMPATIBLE_SPDX_IDS


def needs_registry_fallback(response: LicenseResponse) -> bool:
    info = response.license_info
    return info is None or not info.spdx_id or info.name == _UNRECOGNIZED_LICENSE_NAME


async def _registry_license_score(package_name: str, registry: RegistryPort) -> float:
    try:
        package = await registry.get_package(package_name)
    except RegistryError as exc:
        logger.warning("Registry license lookup for '%s' failed: %s", package_name, exc)
        return 0.0
    if package is None:
        return 0.0
    return 1.0 if is_compatible(declared_license(package)) else 0.0


async def score_license(response: LicenseResponse, registry: RegistryPort) -> float:
    """Score a license response, consulting the registry only when GitHub can't tell.

    1. A compatible SPDX id scores 1.
    2. Missing license info, a missing SPDX id, or GitHub's "Other" falls back
       to the ``license`` field of the package named in package.json. No
       package name means 0 without a registry call.
    3. Anything else scores 0.
    """
    info = response.license_info
    if info is not None and is_compatible(info.spdx_id):
        return 1.0
    if needs_registry_fallback(response):
        package_name = response.manifest_package_name
        if package_name is None:
            return 0.0
        return await _registry_license_score(package_name, registry)
    return 0.0


@dataclass(frozen=True, slots=True)
class LicenseMetric:
    """Fetcher for the License metric."""

    github: GraphQLPort
    registry: RegistryPort

    async def __call__(self, identity: RepositoryIdentity) -> MetricResult:
        if not identity.is_resolved:
            return MetricResult.failed()

        start = start_clock()
        try:
            data = await self.github.execute(
                LICENSE_QUERY,
                {"owner": identity.owner, "name": identity.name},
            )
            response = parse_license_response(data)
        except (GitHubQueryError, SchemaError) as exc:
            logger.warning(
                "License query for %s/%s failed: %s", identity.owner, identity.name, exc
            )
            return MetricResult.failed()

        score = await score_license(response, self.registry)
        return MetricResult.of(score, elapsed_since(start))
