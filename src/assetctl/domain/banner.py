"""Banner context — the values interpolated into the license comment."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from assetctl.config.models import PackageConfig

SOURCE_DATE_EPOCH = "SOURCE_DATE_EPOCH"


def copyright_year(source_date_epoch: str | None = None) -> int:
    """Current UTC year, or the year of *source_date_epoch* when given.

    Honouring ``SOURCE_DATE_EPOCH`` keeps banners stable for reproducible builds.

    Raises:
        ValueError: If *source_date_epoch* is not an integer timestamp.
    """
    if source_date_epoch:
        try:
            ts = int(source_date_epoch)
        except ValueError as exc:
            msg = f"{SOURCE_DATE_EPOCH} must be an integer, got {source_date_epoch!r}"
            raise ValueError(msg) from exc
        return datetime.fromtimestamp(ts, UTC).year
    return datetime.now(UTC).year


def banner_context(package: PackageConfig, year: int) -> dict[str, Any]:
    """Template variables for the banner: ``pkg`` plus ``year``."""
    pkg = package.model_dump()
    pkg["title"] = package.display_title
    return {"pkg": pkg, "year": year}
