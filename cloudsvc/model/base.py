# cloudsvc/model/base.py
"""
Common base of every document element.

Keys the model doesn't declare are kept as loaded (values included, null and
dates too) and written back unchanged. Declared optional fields left at None
are omitted from the output instead of being written as null.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)


class DocumentElement(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_unset_optionals(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> Dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if getattr(self, name) is None:
                key = (field.alias or name) if info.by_alias else name
                data.pop(key, None)
        return data
