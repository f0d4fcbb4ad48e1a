"""Schema Registry: one validation contract per (domain, action) pair.

The registry is an explicit object passed to the handler factory and the
router; there is no module-level schema map. Registering a pair that
already exists replaces the prior contract.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from datotools.domain.errors import SchemaNotFoundError, ValidationIssue

Contract = type[BaseModel]


@dataclass(frozen=True)
class Validation:
    """Outcome of ``SchemaRegistry.validate``.

    Exactly one of ``args`` (parsed model) or ``issues`` is meaningful.
    """

    ok: bool
    args: BaseModel | None = None
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.ok:
            return ""
        first = self.issues[0]
        extra = len(self.issues) - 1
        suffix = f" (and {extra} more)" if extra else ""
        return f"Invalid arguments: {first.path}: {first.message}{suffix}"


def issues_from(exc: ValidationError) -> list[ValidationIssue]:
    """Convert a pydantic ValidationError into path/message issues."""
    issues = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err.get("loc", ()) if part != "__root__")
        issues.append(ValidationIssue(path=path or "input", message=err.get("msg", "invalid")))
    return issues or [ValidationIssue(path="input", message=str(exc))]


class SchemaRegistry:
    """Thread-safe store of operation contracts."""

    def __init__(self) -> None:
        self._contracts: dict[tuple[str, str], Contract] = {}
        self._lock = threading.Lock()

    def register(self, domain: str, action: str, contract: Contract) -> None:
        _check_contract(domain, action, contract)
        with self._lock:
            self._contracts[(domain, action)] = contract

    def register_bulk(self, domain: str, contracts: Mapping[str, Contract]) -> None:
        """Install every contract of *domain* or none of them."""
        for action, contract in contracts.items():
            _check_contract(domain, action, contract)
        with self._lock:
            updated = dict(self._contracts)
            for action, contract in contracts.items():
                updated[(domain, action)] = contract
            self._contracts = updated

    def get(self, domain: str, action: str) -> Contract:
        try:
            return self._contracts[(domain, action)]
        except KeyError:
            raise SchemaNotFoundError(domain, action) from None

    def has(self, domain: str, action: str) -> bool:
        return (domain, action) in self._contracts

    def domains(self) -> list[str]:
        return sorted({domain for domain, _ in self._contracts})

    def actions(self, domain: str) -> list[str]:
        return sorted(action for d, action in self._contracts if d == domain)

    def describe(self, domain: str, action: str) -> dict[str, Any]:
        """JSON Schema of one contract, using wire (camelCase) names."""
        return self.get(domain, action).model_json_schema(by_alias=True)

    def validate(self, domain: str, action: str, args: Any) -> Validation:
        """Parse *args* through the contract of (domain, action).

        Raises ``SchemaNotFoundError`` for an unregistered pair. Passing an
        already-parsed instance of the contract returns it unchanged.
        """
        contract = self.get(domain, action)
        if isinstance(args, contract):
            return Validation(ok=True, args=args)
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            return Validation(
                ok=False,
                issues=[
                    ValidationIssue(
                        path="input",
                        message=f"Expected an object, got {type(args).__name__}",
                    )
                ],
            )
        try:
            parsed = contract.model_validate(dict(args))
        except ValidationError as exc:
            return Validation(ok=False, issues=issues_from(exc))
        return Validation(ok=True, args=parsed)


def _check_contract(domain: str, action: str, contract: Any) -> None:
    if not domain or not action:
        raise ValueError("domain and action must be non-empty")
    if not (isinstance(contract, type) and issubclass(contract, BaseModel)):
        raise TypeError(f"Contract for {domain}.{action} must be a pydantic model class")
