"""Render schema trees as JSON schema documents."""
import collections
import json
from typing import Any, MutableMapping, cast

from constraint_schema.common import Stripped, assert_never
from constraint_schema.schema._types import (
    SchemaNode,
    NodeKind,
    StringSchema,
    NumberSchema,
    IntegerSchema,
    BooleanSchema,
    ArraySchema,
    ObjectSchema,
    AllOfSchema,
    OneOfSchema,
    NotSchema,
    SchemaNodeUnion,
)

#: Meta-schema of the generated documents
SCHEMA_DRAFT = "https://json-schema.org/draft/2019-09/schema"


def to_jsonable(node: SchemaNode) -> MutableMapping[str, Any]:
    """
    Convert the schema ``node`` to a JSON-able mapping.

    The attributes which have not been set are omitted. The keywords are ordered
    with the ``type`` first so that the output is stable and easy to read.
    """
    that = cast(SchemaNodeUnion, node)

    definition = collections.OrderedDict()  # type: MutableMapping[str, Any]

    if isinstance(that, StringSchema):
        definition["type"] = NodeKind.STRING.value

        if that.min_length is not None:
            definition["minLength"] = that.min_length

        if that.max_length is not None:
            definition["maxLength"] = that.max_length

        if that.pattern is not None:
            definition["pattern"] = that.pattern

        if that.format is not None:
            definition["format"] = that.format.value

        if that.const is not None:
            definition["const"] = that.const

    elif isinstance(that, NumberSchema):
        definition["type"] = NodeKind.NUMBER.value
        if that.const is not None:
            definition["const"] = that.const

    elif isinstance(that, IntegerSchema):
        definition["type"] = NodeKind.INTEGER.value
        if that.const is not None:
            definition["const"] = that.const

    elif isinstance(that, BooleanSchema):
        definition["type"] = NodeKind.BOOLEAN.value
        if that.const is not None:
            definition["const"] = that.const

    elif isinstance(that, ArraySchema):
        definition["type"] = NodeKind.ARRAY.value

        if that.items is not None:
            definition["items"] = to_jsonable(that.items)

        if that.min_items is not None:
            definition["minItems"] = that.min_items

    elif isinstance(that, ObjectSchema):
        definition["type"] = NodeKind.OBJECT.value

        if that.properties is not None:
            definition["properties"] = collections.OrderedDict(
                (name, to_jsonable(prop)) for name, prop in that.properties.items()
            )

        if len(that.required) > 0:
            definition["required"] = list(that.required)

        if that.additional_properties is not None:
            definition["additionalProperties"] = that.additional_properties

    elif isinstance(that, AllOfSchema):
        # NOTE:
        # JSON schema forbids an empty ``allOf``. A conjunction of no schemas
        # accepts every value, so we render it as the empty schema.
        if len(that.schemas) > 0:
            definition["allOf"] = [to_jsonable(schema) for schema in that.schemas]

    elif isinstance(that, OneOfSchema):
        definition["oneOf"] = [to_jsonable(schema) for schema in that.schemas]

    elif isinstance(that, NotSchema):
        definition["not"] = to_jsonable(that.schema)

    else:
        assert_never(that)

    return definition


def generate(node: SchemaNode) -> Stripped:
    """Generate the JSON schema document with ``node`` as its root."""
    schema = collections.OrderedDict(
        [("$schema", SCHEMA_DRAFT)]
    )  # type: MutableMapping[str, Any]
    schema.update(to_jsonable(node))

    return Stripped(json.dumps(schema, indent=2))
