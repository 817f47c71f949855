"""Provide the nodes of a JSON schema tree."""
import abc
import enum
from typing import Final, Optional, OrderedDict, Sequence, Union

from icontract import require, DBC

from constraint_schema.common import assert_union_of_descendants_exhaustive


class NodeKind(enum.Enum):
    """List the kinds of typed schema nodes by their JSON type names."""

    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"


class StringFormat(enum.Enum):
    """List the string formats which we can infer."""

    EMAIL = "email"
    URI_REFERENCE = "uri-reference"


class SchemaNode(DBC):
    """Represent a node in a JSON schema tree."""

    @abc.abstractmethod
    def __repr__(self) -> str:
        # Signal that this class is a purely abstract one
        raise NotImplementedError()


class StringSchema(SchemaNode):
    """Describe a string value."""

    min_length: Final[Optional[int]]
    max_length: Final[Optional[int]]
    pattern: Final[Optional[str]]
    format: Final[Optional[StringFormat]]
    const: Final[Optional[str]]

    # fmt: off
    @require(
        lambda min_length, max_length:
        not (min_length is not None and max_length is not None)
        or min_length <= max_length
    )
    # fmt: on
    def __init__(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        pattern: Optional[str] = None,
        format: Optional[StringFormat] = None,  # pylint: disable=redefined-builtin
        const: Optional[str] = None,
    ) -> None:
        """Initialize with the given values."""
        self.min_length = min_length
        self.max_length = max_length
        self.pattern = pattern
        self.format = format
        self.const = const

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class NumberSchema(SchemaNode):
    """Describe a number value."""

    const: Final[Optional[float]]

    def __init__(self, const: Optional[float] = None) -> None:
        """Initialize with the given values."""
        self.const = const

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class IntegerSchema(SchemaNode):
    """Describe an integer value."""

    const: Final[Optional[int]]

    def __init__(self, const: Optional[int] = None) -> None:
        """Initialize with the given values."""
        self.const = const

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class BooleanSchema(SchemaNode):
    """Describe a boolean value."""

    const: Final[Optional[bool]]

    def __init__(self, const: Optional[bool] = None) -> None:
        """Initialize with the given values."""
        self.const = const

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class ArraySchema(SchemaNode):
    """Describe an array, optionally with homogeneous items."""

    items: Final[Optional[SchemaNode]]
    min_items: Final[Optional[int]]

    @require(lambda min_items: min_items is None or min_items >= 0)
    def __init__(
        self, items: Optional[SchemaNode] = None, min_items: Optional[int] = None
    ) -> None:
        """Initialize with the given values."""
        self.items = items
        self.min_items = min_items

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class ObjectSchema(SchemaNode):
    """
    Describe an object by its properties.

    The :py:attr:`additional_properties` is left as None if not specified so that
    we can distinguish it from extra properties being explicitly disallowed.
    """

    #: Properties in the order of their declaration
    properties: Final[Optional[OrderedDict[str, SchemaNode]]]

    #: Names of the required properties, each listed once
    required: Final[Sequence[str]]

    additional_properties: Final[Optional[bool]]

    @require(lambda required: len(set(required)) == len(required))
    def __init__(
        self,
        properties: Optional[OrderedDict[str, SchemaNode]] = None,
        required: Sequence[str] = (),
        additional_properties: Optional[bool] = None,
    ) -> None:
        """Initialize with the given values."""
        self.properties = properties
        self.required = required
        self.additional_properties = additional_properties

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class AllOfSchema(SchemaNode):
    """Require a value to comply to all the schemas."""

    schemas: Final[Sequence[SchemaNode]]

    def __init__(self, schemas: Sequence[SchemaNode]) -> None:
        """Initialize with the given values."""
        self.schemas = schemas

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class OneOfSchema(SchemaNode):
    """Require a value to comply to exactly one of the schemas."""

    schemas: Final[Sequence[SchemaNode]]

    @require(lambda schemas: len(schemas) > 0)
    def __init__(self, schemas: Sequence[SchemaNode]) -> None:
        """Initialize with the given values."""
        self.schemas = schemas

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


class NotSchema(SchemaNode):
    """Require a value not to comply to the schema."""

    schema: Final[SchemaNode]

    def __init__(self, schema: SchemaNode) -> None:
        """Initialize with the given values."""
        self.schema = schema

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


SchemaNodeUnion = Union[
    StringSchema,
    NumberSchema,
    IntegerSchema,
    BooleanSchema,
    ArraySchema,
    ObjectSchema,
    AllOfSchema,
    OneOfSchema,
    NotSchema,
]
assert_union_of_descendants_exhaustive(union=SchemaNodeUnion, base_class=SchemaNode)
