"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
import os

from datasheet_finance.domain.constants import (
    DEFAULT_GROUP_BY,
    FIELD_ROLES,
    GROUP_BY_OPTIONS,
)
from datasheet_finance.infrastructure.logging.logger import get_app_logger


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for the datasheet finance adapters.

    Attributes:
        view_id: Datasheet view whose fields and records are read.
        currency: Display currency code; amounts are never converted.
        group_by: Default chart grouping.
        show_transactions: Whether the dashboard lists transactions.
        read_only: Whether record creation is refused.
        role_overrides: Explicit role to field id bindings.
    """

    view_id: str = "default"
    currency: str = "USD"
    group_by: str = DEFAULT_GROUP_BY
    show_transactions: bool = True
    read_only: bool = False
    role_overrides: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        view_id = os.getenv("DATASHEET_VIEW_ID", "default").strip() or "default"
        currency = os.getenv("DASHBOARD_CURRENCY", "USD").strip().upper()
        group_by = cls._parse_group_by(
            os.getenv("DASHBOARD_GROUP_BY", DEFAULT_GROUP_BY),
            logger=logger,
        )
        show_transactions = cls._parse_bool(
            "DASHBOARD_SHOW_TRANSACTIONS",
            default=True,
            logger=logger,
        )
        read_only = cls._parse_bool(
            "DATASHEET_READ_ONLY",
            default=False,
            logger=logger,
        )
        overrides = cls._parse_overrides(
            os.getenv("FIELD_ROLE_OVERRIDES", ""),
            logger=logger,
        )
        return cls(
            view_id=view_id,
            currency=currency or "USD",
            group_by=group_by,
            show_transactions=show_transactions,
            read_only=read_only,
            role_overrides=overrides,
        )

    @staticmethod
    def _parse_group_by(raw_value: str, logger) -> str:
        """Validate the chart grouping.

        Args:
            raw_value: Raw grouping value.
            logger: Logger used for warnings.

        Returns:
            str: The grouping, or the default when it is not supported.
        """
        value = raw_value.strip().lower()
        if value in GROUP_BY_OPTIONS:
            return value
        logger.warning(
            f"Unsupported DASHBOARD_GROUP_BY={raw_value!r}; "
            f"using {DEFAULT_GROUP_BY!r}"
        )
        return DEFAULT_GROUP_BY

    @staticmethod
    def _parse_bool(name: str, default: bool, logger) -> bool:
        raw_value = os.getenv(name)
        if raw_value is None or not raw_value.strip():
            return default
        value = raw_value.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean {name}={raw_value!r}; using {default}")
        return default

    @staticmethod
    def _parse_overrides(raw_value: str, logger) -> dict[str, str]:
        """Parse ``role=field_id`` pairs separated by commas.

        Args:
            raw_value: Raw FIELD_ROLE_OVERRIDES value.
            logger: Logger used for warnings.

        Returns:
            dict[str, str]: Valid overrides; malformed entries are skipped.
        """
        overrides: dict[str, str] = {}
        for entry in raw_value.split(","):
            if not entry.strip():
                continue
            role, sep, field_id = entry.partition("=")
            role = role.strip().lower()
            field_id = field_id.strip()
            if not sep or role not in FIELD_ROLES or not field_id:
                logger.warning(f"Ignoring malformed role override {entry!r}")
                continue
            overrides[role] = field_id
        return overrides


__all__ = ["DashboardSettings"]
