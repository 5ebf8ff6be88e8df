"""Field mapping store backed by a JSON document.

Document layout::

    {
      "<schema_mapping_id>": {
        "<object_type>": {
          "<provider>": [
            {"source_field": "...", "target_field": "...", "value_map": {...}}
          ]
        }
      }
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from crm_common_core.config_enums import CRMProviderType
from crm_service_libs.logging_utils import create_service_logger
from pydantic import TypeAdapter

from services.dynamic_object_service.internal_models import FieldMapping

logger = create_service_logger("dynamic_object_service.field_mapping_store")

_MAPPING_LIST = TypeAdapter(list[FieldMapping])


class FileFieldMappingStore:
    """Read-only mapping store; the document is parsed once at construction."""

    def __init__(self, document: dict[str, Any]) -> None:
        self._mappings: dict[tuple[str, str, str], list[FieldMapping]] = {}
        for schema_mapping_id, objects in document.items():
            for object_type, providers in (objects or {}).items():
                for provider, entries in (providers or {}).items():
                    key = (schema_mapping_id, object_type, CRMProviderType(provider).value)
                    self._mappings[key] = _MAPPING_LIST.validate_python(entries or [])

    @classmethod
    def from_file(cls, path: Path) -> FileFieldMappingStore:
        if not path.exists():
            logger.warning("Field mapping file not found, unification uses no mappings", path=str(path))
            return cls({})
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        logger.info("Loaded field mappings", path=str(path), schemas=len(document))
        return cls(document)

    def get_field_mappings(
        self,
        schema_mapping_id: str | None,
        object_type: str,
        provider: CRMProviderType,
    ) -> list[FieldMapping]:
        if not schema_mapping_id:
            return []
        return list(self._mappings.get((schema_mapping_id, object_type, provider.value), []))
