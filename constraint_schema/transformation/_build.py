"""Transform a group of constraints into a schema node."""
import collections
from typing import List, MutableMapping, Optional, OrderedDict, Sequence

from constraint_schema import constraints, schema
from constraint_schema.common import UnsupportedConstraintError, assert_never
from constraint_schema.transformation import _guess

#: Crockford's base32 representation of a ULID
ULID_PATTERN = "[0-7][0-9A-HJKMNP-TV-Z]{25}"

#: Number of characters in a ULID
ULID_LENGTH = 26


def _build_string(
    constraints_of_group: Sequence[constraints.Constraint],
) -> schema.StringSchema:
    """Fold the constraints into a string schema, the later constraints win."""
    min_length = None  # type: Optional[int]
    max_length = None  # type: Optional[int]
    pattern = None  # type: Optional[str]
    string_format = None  # type: Optional[schema.StringFormat]

    for constraint in constraints_of_group:
        for kind in constraints.kind_chain(type(constraint)):
            if kind is constraints.Length:
                assert isinstance(constraint, constraints.Length)
                min_length = constraint.min_value
                max_length = constraint.max_value

            elif kind is constraints.Regex:
                assert isinstance(constraint, constraints.Regex)
                pattern = constraint.pattern

            elif kind is constraints.Email:
                string_format = schema.StringFormat.EMAIL

            elif kind is constraints.Url:
                # NOTE:
                # We accept relative references as well, not only absolute URLs.
                string_format = schema.StringFormat.URI_REFERENCE

            elif kind is constraints.Ulid:
                min_length = ULID_LENGTH
                max_length = ULID_LENGTH
                pattern = ULID_PATTERN

    return schema.StringSchema(
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        format=string_format,
    )


def _build_object(
    constraints_of_group: Sequence[constraints.Constraint],
) -> schema.ObjectSchema:
    """Fold the collection constraints into an object schema."""
    properties = collections.OrderedDict()  # type: OrderedDict[str, schema.SchemaNode]

    # NOTE:
    # We use an ordered dictionary as an ordered set so that each required name is
    # listed only once, in the order of the declaration.
    required = collections.OrderedDict()  # type: MutableMapping[str, None]

    additional_properties = None  # type: Optional[bool]

    for constraint in constraints_of_group:
        if not constraints.is_of_kind(constraint, constraints.Collection):
            continue

        assert isinstance(constraint, constraints.Collection)

        if constraint.allow_extra_fields:
            additional_properties = True

        for name, field in constraint.fields.items():
            if isinstance(field, constraints.RequiredField):
                required[name] = None
            elif isinstance(field, (constraints.OptionalField, constraints.PlainField)):
                pass
            else:
                assert_never(field)

            if not constraint.allow_missing_fields:
                required[name] = None

            properties[name] = transform(field.constraints)

    return schema.ObjectSchema(
        properties=properties if len(properties) > 0 else None,
        required=list(required),
        additional_properties=additional_properties,
    )


def _build_array(
    constraints_of_group: Sequence[constraints.Constraint],
) -> schema.ArraySchema:
    """Build the array schema where the last each-element constraint wins."""
    items = None  # type: Optional[schema.SchemaNode]

    for constraint in constraints_of_group:
        if constraints.is_of_kind(constraint, constraints.All):
            assert isinstance(constraint, constraints.All)
            items = transform(constraint.constraints)

    return schema.ArraySchema(items=items)


def _not_blank() -> schema.NotSchema:
    """
    Build the schema rejecting the blank values.

    The blank values are an empty array, an empty string, the string ``"0"``,
    the number zero and ``false``.
    """
    return schema.NotSchema(
        schema.OneOfSchema(
            [
                schema.ArraySchema(min_items=1),
                schema.StringSchema(min_length=1),
                schema.NotSchema(schema.StringSchema(const="0")),
                schema.NotSchema(schema.NumberSchema(const=0)),
                schema.NotSchema(schema.BooleanSchema(const=False)),
            ]
        )
    )


def _build_generic(
    constraints_of_group: Sequence[constraints.Constraint],
) -> schema.AllOfSchema:
    """
    Build the conjunction of the value assertions without type information.

    The constraints which we do not understand are ignored.
    """
    schemas = []  # type: List[schema.SchemaNode]

    for constraint in constraints_of_group:
        if constraints.is_of_kind(constraint, constraints.NotBlank):
            schemas.append(_not_blank())

    return schema.AllOfSchema(schemas)


def transform(
    constraints_of_group: Sequence[constraints.Constraint],
) -> schema.SchemaNode:
    """
    Transform the constraint group into the equivalent schema node.

    The nested constraints of collections and each-element constraints are
    transformed recursively.

    :raise:
        :py:class:`TypeConflictError` if the constraints imply different types,
        and :py:class:`UnsupportedConstraintError` if we can not build a schema
        for the implied type
    """
    node_kind = _guess.infer_kind(constraints_of_group)

    if node_kind is None:
        return _build_generic(constraints_of_group)

    elif node_kind is schema.NodeKind.STRING:
        return _build_string(constraints_of_group)

    elif node_kind is schema.NodeKind.OBJECT:
        return _build_object(constraints_of_group)

    elif node_kind is schema.NodeKind.ARRAY:
        return _build_array(constraints_of_group)

    elif (
        node_kind is schema.NodeKind.BOOLEAN
        or node_kind is schema.NodeKind.INTEGER
        or node_kind is schema.NodeKind.NUMBER
    ):
        raise UnsupportedConstraintError(
            f"Not supported constraints for the type {node_kind.value!r}: "
            + ", ".join(
                constraint.__class__.__name__ for constraint in constraints_of_group
            )
        )

    else:
        assert_never(node_kind)

    raise AssertionError("Should not have gotten here")
