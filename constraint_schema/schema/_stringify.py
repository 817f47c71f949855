"""Represent schema trees as strings for testing or debugging."""

import collections.abc
import enum
import io
import textwrap
from typing import Any, List, Optional, Tuple, cast

from constraint_schema.common import assert_never, indent_but_first_line
from constraint_schema.schema._types import (
    SchemaNode,
    SchemaNodeUnion,
    StringSchema,
    NumberSchema,
    IntegerSchema,
    BooleanSchema,
    ArraySchema,
    ObjectSchema,
    AllOfSchema,
    OneOfSchema,
    NotSchema,
)


def _attributes(node: SchemaNode) -> List[Tuple[str, Any]]:
    """List the attributes of ``node`` in the order of the constructor arguments."""
    that = cast(SchemaNodeUnion, node)

    if isinstance(that, StringSchema):
        return [
            ("min_length", that.min_length),
            ("max_length", that.max_length),
            ("pattern", that.pattern),
            ("format", that.format),
            ("const", that.const),
        ]

    elif isinstance(that, (NumberSchema, IntegerSchema, BooleanSchema)):
        return [("const", that.const)]

    elif isinstance(that, ArraySchema):
        return [("items", that.items), ("min_items", that.min_items)]

    elif isinstance(that, ObjectSchema):
        return [
            ("properties", that.properties),
            ("required", list(that.required)),
            ("additional_properties", that.additional_properties),
        ]

    elif isinstance(that, (AllOfSchema, OneOfSchema)):
        return [("schemas", list(that.schemas))]

    elif isinstance(that, NotSchema):
        return [("schema", that.schema)]

    else:
        assert_never(that)

    raise AssertionError("Should not have gotten here")


def _dump_node(node: SchemaNode) -> str:
    attributes = _attributes(node)

    # Every public attribute of the node must be listed.
    listed = {name for name, _ in attributes}
    stored = {name for name in vars(node) if not name.startswith("_")}
    assert listed == stored, (
        f"Expected the dumped attributes of {node.__class__.__name__!r} "
        f"to be {sorted(stored)}, but got {sorted(listed)}"
    )

    writer = io.StringIO()
    writer.write(f"{node.__class__.__name__}(\n")

    for i, (name, value) in enumerate(attributes):
        writer.write(f"  {name}={indent_but_first_line(_dump_value(value), '  ')}")

        if i == len(attributes) - 1:
            writer.write(")")
        else:
            writer.write(",\n")

    return writer.getvalue()


def _dump_value(value: Any) -> str:
    if value is None or isinstance(value, (bool, int, float, str)):
        return repr(value)

    if isinstance(value, enum.Enum):
        return repr(value.value)

    if isinstance(value, SchemaNode):
        return _dump_node(value)

    if isinstance(value, collections.abc.Mapping):
        if len(value) == 0:
            return "{}"

        entries = [
            textwrap.indent(f"{key!r}: {_dump_value(item)}", "  ")
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(entries) + "}"

    if isinstance(value, list):
        if len(value) == 0:
            return "[]"

        items = [textwrap.indent(_dump_value(item), "  ") for item in value]
        return "[\n" + ",\n".join(items) + "]"

    raise AssertionError(f"Unexpected value in a schema tree: {value!r}")


def dump(that: Optional[SchemaNode]) -> str:
    """Produce a string representation of the schema tree for testing or debugging."""
    if that is None:
        return repr(None)

    return _dump_node(that)
