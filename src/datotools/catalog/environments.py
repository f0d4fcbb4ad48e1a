"""Environments domain: sandboxes, forks, promotion and maintenance mode."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from datotools.catalog.common import ENVIRONMENT_ID_PATTERN, as_list
from datotools.services.contracts import OperationContract, ReadContract
from datotools.services.factory import OperationConfig, Variant

DOMAIN = "environments"
ENTITY = "Environment"


def environment_id(description: str) -> Any:
    return Field(min_length=1, pattern=ENVIRONMENT_ID_PATTERN, description=description)


class ListEnvironments(ReadContract):
    pass


class EnvironmentTarget(OperationContract):
    environment_id: str = environment_id("ID of the environment.")


class RetrieveEnvironment(ReadContract):
    environment_id: str = environment_id("ID of the environment.")


class DestroyEnvironment(EnvironmentTarget):
    confirmation: Literal["confirm"] | None = Field(
        default=None, description="Pass 'confirm' to acknowledge the deletion."
    )


class ForkEnvironment(EnvironmentTarget):
    new_id: str = environment_id("ID of the new sandbox environment.")
    fast: bool = Field(default=False, description="Fork without copying records.")
    force: bool = Field(default=False, description="Fork even if there are warnings.")


class RenameEnvironment(EnvironmentTarget):
    new_id: str = environment_id("New ID of the environment.")


class MaintenanceStatus(ReadContract):
    pass


class ActivateMaintenance(OperationContract):
    force: bool = Field(default=False, description="Activate even with active jobs.")


class DeactivateMaintenance(OperationContract):
    pass


def _fork(session: Any, args: ForkEnvironment) -> Any:
    return session.fork_environment(
        args.environment_id, args.new_id, fast=args.fast, force=args.force
    )


OPERATIONS = [
    OperationConfig(
        "list",
        ListEnvironments,
        lambda s, a: s.list_environments(),
        Variant.LIST,
        ENTITY,
        transform=as_list,
    ),
    OperationConfig(
        "retrieve",
        RetrieveEnvironment,
        lambda s, a: s.find_environment(a.environment_id),
        Variant.RETRIEVE,
        ENTITY,
        id_field="environment_id",
    ),
    OperationConfig(
        "fork", ForkEnvironment, _fork, Variant.CREATE, ENTITY, id_field="environment_id"
    ),
    OperationConfig(
        "promote",
        EnvironmentTarget,
        lambda s, a: s.promote_environment(a.environment_id),
        Variant.UPDATE,
        ENTITY,
        id_field="environment_id",
    ),
    OperationConfig(
        "rename",
        RenameEnvironment,
        lambda s, a: s.rename_environment(a.environment_id, a.new_id),
        Variant.UPDATE,
        ENTITY,
        id_field="environment_id",
    ),
    OperationConfig(
        "destroy",
        DestroyEnvironment,
        lambda s, a: s.destroy_environment(a.environment_id),
        Variant.DELETE,
        ENTITY,
        id_field="environment_id",
        success_message="Environment deleted.",
    ),
    OperationConfig(
        "maintenance_status",
        MaintenanceStatus,
        lambda s, a: s.maintenance_mode(),
        Variant.CUSTOM,
        "Maintenance mode",
        read_only=True,
    ),
    OperationConfig(
        "maintenance_activate",
        ActivateMaintenance,
        lambda s, a: s.activate_maintenance_mode(force=a.force),
        Variant.CUSTOM,
        "Maintenance mode",
    ),
    OperationConfig(
        "maintenance_deactivate",
        DeactivateMaintenance,
        lambda s, a: s.deactivate_maintenance_mode(),
        Variant.CUSTOM,
        "Maintenance mode",
    ),
]
