"""Project domain: site information, site-wide settings and the subscription plan."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from datotools.catalog.common import as_list
from datotools.services.contracts import OperationContract, ReadContract
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "project"


class GetInfo(ReadContract):
    pass


class UpdateSiteSettings(OperationContract):
    settings: dict[str, Any] = Field(
        min_length=1,
        description="Site attributes to change (name, locales, timezone, ...).",
    )


class ListSubscription(ReadContract):
    pass


OPERATIONS = [
    OperationConfig(
        "get_info",
        GetInfo,
        lambda s, a: s.find_site(),
        Variant.CUSTOM,
        "Project",
        read_only=True,
    ),
    OperationConfig(
        "update_site_settings",
        UpdateSiteSettings,
        lambda s, a: s.update_site(a.settings),
        Variant.UPDATE,
        "Project",
    ),
    OperationConfig(
        "list_subscription_features",
        ListSubscription,
        lambda s, a: s.list_subscription_features(),
        Variant.LIST,
        "Subscription feature",
        transform=as_list,
    ),
    OperationConfig(
        "list_usages_and_limits",
        ListSubscription,
        lambda s, a: s.list_subscription_limits(),
        Variant.LIST,
        "Subscription limit",
        transform=as_list,
    ),
]
