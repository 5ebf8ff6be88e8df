"""Field unification: vendor-native records onto the canonical schema."""

from __future__ import annotations

from typing import Any

from crm_common_core.config_enums import CRMProviderType

from services.dynamic_object_service.internal_models import Account, FieldMapping
from services.dynamic_object_service.protocols import FieldMappingStoreProtocol

_MISSING = object()

# Keys the unifier manages itself; never copied into ``additional``.
_RESERVED_KEYS = frozenset({"associations", "properties"})


def remote_id_field(provider: CRMProviderType, object_type: str) -> str:
    if provider == CRMProviderType.SALESFORCE:
        return "Id"
    if provider == CRMProviderType.MS_DYNAMICS_365_SALES:
        return f"{object_type}id"
    return "id"


def read_path(obj: dict[str, Any], path: str) -> Any:
    """Read a dotted path (``Owner.Name``); returns _MISSING when absent."""
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def value_map_key(value: str | int | bool) -> str:
    """Key a scalar the way it is written in a JSON value map (``true``, ``3``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def apply_account_overrides(
    mappings: list[FieldMapping],
    account: Account,
    object_type: str,
) -> list[FieldMapping]:
    """Account-level overrides replace the source of a target field, or add one."""
    overrides = account.field_mapping_config.for_object(object_type)
    if not overrides:
        return mappings

    merged: dict[str, FieldMapping] = {m.target_field: m for m in mappings}
    for target_field, source_field in overrides.items():
        existing = merged.get(target_field)
        merged[target_field] = FieldMapping(
            source_field=source_field,
            target_field=target_field,
            value_map=existing.value_map if existing else None,
        )
    return list(merged.values())


class FieldMappingUnifier:
    """Unifies records using the tenant's schema mapping.

    Output shape::

        {"id": <remote id>, <target>: <value>, ..., "additional": {<unmapped>: ..}}

    plus ``associations`` when the record carries them. Records without any
    configured mapping keep every vendor field under ``additional``.
    """

    def __init__(self, mapping_store: FieldMappingStoreProtocol) -> None:
        self._store = mapping_store

    async def unify(
        self,
        obj: dict[str, Any],
        *,
        provider: CRMProviderType,
        object_type: str,
        schema_mapping_id: str | None,
        account: Account,
    ) -> dict[str, Any]:
        obj = obj or {}
        mappings = apply_account_overrides(
            self._store.get_field_mappings(schema_mapping_id, object_type, provider),
            account,
            object_type,
        )

        id_field = remote_id_field(provider, object_type)
        unified: dict[str, Any] = {"id": obj.get(id_field)}
        consumed: set[str] = {id_field}

        for mapping in mappings:
            value = read_path(obj, mapping.source_field)
            consumed.add(mapping.source_field.split(".", 1)[0])
            if value is _MISSING:
                continue
            if mapping.value_map and isinstance(value, str | int | bool):
                value = mapping.value_map.get(value_map_key(value), value)
            unified[mapping.target_field] = value

        unified["additional"] = {
            key: value
            for key, value in obj.items()
            if key not in consumed and key not in _RESERVED_KEYS
        }
        if "associations" in obj:
            unified["associations"] = obj["associations"]
        return unified
