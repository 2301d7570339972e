"""
UUID7 Pydantic type

uuid_utils.UUID has no Pydantic integration. UtilsUUID7 adds validation,
serialization and an OpenAPI schema so it can be used directly in request
models, path parameters and headers:

    class ReservationResponse(BaseModel):
        reservation_id: UtilsUUID7   # "019a3fa5-..." <-> uuid_utils.UUID
"""

from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


def _to_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except Exception as e:
        raise ValueError(f'Invalid UUID: {value}') from e


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # JSON mode only ever sees strings; python mode also accepts UUID objects
        # (uuid_utils.UUID or stdlib uuid.UUID coming back from asyncpg).
        # The schema must stay convertible to JSON schema for OpenAPI, so no
        # with_info_plain_validator_function here.
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(_to_uuid),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(_to_uuid),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # Skip handler(schema): the internal validator chain is irrelevant to OpenAPI
        return {'type': 'string', 'format': 'uuid'}
