"""Parse constraint declarations given as JSON-able values."""
import collections.abc
from typing import (
    Any,
    Callable,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Set,
    Tuple,
)

from icontract import ensure

from constraint_schema.common import Error
from constraint_schema.constraints._types import (
    Constraint,
    Length,
    Regex,
    Email,
    Url,
    Ulid,
    NotBlank,
    DeclaredType,
    All,
    Collection,
    FieldUnion,
    PlainField,
    OptionalField,
    RequiredField,
)


def _type_name(jsonable: Any) -> str:
    """Name the JSON type of the ``jsonable`` for error messages."""
    if jsonable is None:
        return "null"
    elif isinstance(jsonable, bool):
        return "a boolean"
    elif isinstance(jsonable, (int, float)):
        return "a number"
    elif isinstance(jsonable, str):
        return "a string"
    elif isinstance(jsonable, collections.abc.Mapping):
        return "an object"
    elif isinstance(jsonable, collections.abc.Sequence):
        return "an array"
    else:
        return type(jsonable).__name__


_Parser = Callable[
    [Mapping[str, Any], str], Tuple[Optional[Constraint], Optional[Error]]
]


def _check_properties(
    jsonable: Mapping[str, Any], expected: Set[str], path: str
) -> Optional[Error]:
    """Check that ``jsonable`` has no properties other than ``expected`` and kind."""
    unexpected = sorted(key for key in jsonable if key not in expected and key != "kind")
    if len(unexpected) > 0:
        return Error(
            path,
            f"Unexpected properties for the kind {jsonable['kind']!r}: {unexpected}",
        )

    return None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _optional_bound(
    jsonable: Mapping[str, Any], key: str, path: str
) -> Tuple[Optional[Tuple[Optional[int]]], Optional[Error]]:
    """Read an optional non-negative integer, wrapped in a tuple if valid."""
    value = jsonable.get(key, None)
    if value is None:
        return (None,), None

    if isinstance(value, bool) or not isinstance(value, int):
        return None, Error(
            f"{path}.{key}", f"Expected an integer, but got {_type_name(value)}"
        )

    if value < 0:
        return None, Error(
            f"{path}.{key}", f"Expected a non-negative integer, but got {value}"
        )

    return (value,), None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _parse_length(
    jsonable: Mapping[str, Any], path: str
) -> Tuple[Optional[Constraint], Optional[Error]]:
    error = _check_properties(jsonable, {"min", "max"}, path)
    if error is not None:
        return None, error

    min_wrapped, error = _optional_bound(jsonable, "min", path)
    if error is not None:
        return None, error

    max_wrapped, error = _optional_bound(jsonable, "max", path)
    if error is not None:
        return None, error

    assert min_wrapped is not None and max_wrapped is not None
    min_value = min_wrapped[0]
    max_value = max_wrapped[0]

    if min_value is None and max_value is None:
        return None, Error(
            path, "Expected at least one of the properties 'min' and 'max'"
        )

    if min_value is not None and max_value is not None and min_value > max_value:
        return None, Error(
            path,
            f"Expected 'min' to be at most 'max', "
            f"but got min {min_value} and max {max_value}",
        )

    return Length(min_value=min_value, max_value=max_value), None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _parse_regex(
    jsonable: Mapping[str, Any], path: str
) -> Tuple[Optional[Constraint], Optional[Error]]:
    error = _check_properties(jsonable, {"pattern"}, path)
    if error is not None:
        return None, error

    pattern = jsonable.get("pattern", None)
    if not isinstance(pattern, str):
        return None, Error(
            f"{path}.pattern", f"Expected a string, but got {_type_name(pattern)}"
        )

    return Regex(pattern=pattern), None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _parse_declared_type(
    jsonable: Mapping[str, Any], path: str
) -> Tuple[Optional[Constraint], Optional[Error]]:
    error = _check_properties(jsonable, {"type"}, path)
    if error is not None:
        return None, error

    type_name = jsonable.get("type", None)
    if not isinstance(type_name, str) or len(type_name) == 0:
        return None, Error(
            f"{path}.type",
            f"Expected a non-empty string, but got {_type_name(type_name)}",
        )

    return DeclaredType(type_name=type_name), None


def _parser_without_properties(factory: Callable[[], Constraint]) -> _Parser:
    """Make a parser for the constraint kinds which carry no attributes."""

    @ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
    def parse(
        jsonable: Mapping[str, Any], path: str
    ) -> Tuple[Optional[Constraint], Optional[Error]]:
        error = _check_properties(jsonable, set(), path)
        if error is not None:
            return None, error

        return factory(), None

    return parse


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _parse_all(
    jsonable: Mapping[str, Any], path: str
) -> Tuple[Optional[Constraint], Optional[Error]]:
    error = _check_properties(jsonable, {"constraints"}, path)
    if error is not None:
        return None, error

    if "constraints" not in jsonable:
        return None, Error(path, "The property 'constraints' is missing")

    constraints, error = _constraints_from_jsonable(
        jsonable["constraints"], f"{path}.constraints"
    )
    if error is not None:
        return None, error

    assert constraints is not None
    return All(constraints=constraints), None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _parse_field(jsonable: Any, path: str) -> Tuple[Optional[FieldUnion], Optional[Error]]:
    """Parse the constraints of a field, possibly wrapped as optional or required."""
    if isinstance(jsonable, collections.abc.Mapping) and jsonable.get("kind", None) in (
        "Optional",
        "Required",
    ):
        error = _check_properties(jsonable, {"constraints"}, path)
        if error is not None:
            return None, error

        if "constraints" not in jsonable:
            return None, Error(path, "The property 'constraints' is missing")

        constraints, error = _constraints_from_jsonable(
            jsonable["constraints"], f"{path}.constraints"
        )
        if error is not None:
            return None, error

        assert constraints is not None

        if jsonable["kind"] == "Optional":
            return OptionalField(constraints), None

        return RequiredField(constraints), None

    constraints, error = _constraints_from_jsonable(jsonable, path)
    if error is not None:
        return None, error

    assert constraints is not None
    return PlainField(constraints), None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _parse_collection(
    jsonable: Mapping[str, Any], path: str
) -> Tuple[Optional[Constraint], Optional[Error]]:
    error = _check_properties(
        jsonable, {"fields", "allowExtraFields", "allowMissingFields"}, path
    )
    if error is not None:
        return None, error

    fields_jsonable = jsonable.get("fields", None)
    if not isinstance(fields_jsonable, collections.abc.Mapping):
        return None, Error(
            f"{path}.fields",
            f"Expected an object, but got {_type_name(fields_jsonable)}",
        )

    flags = dict()  # type: MutableMapping[str, bool]
    for key in ("allowExtraFields", "allowMissingFields"):
        value = jsonable.get(key, False)
        if not isinstance(value, bool):
            return None, Error(
                f"{path}.{key}", f"Expected a boolean, but got {_type_name(value)}"
            )
        flags[key] = value

    fields = collections.OrderedDict()  # type: MutableMapping[str, FieldUnion]
    errors = []  # type: List[Error]

    for name, field_jsonable in fields_jsonable.items():
        field, error = _parse_field(field_jsonable, f"{path}.fields.{name}")
        if error is not None:
            errors.append(error)
            continue

        assert field is not None
        fields[name] = field

    if len(errors) > 0:
        return None, Error(path, "Failed to parse the fields", underlying=errors)

    return (
        Collection(
            fields=fields,
            allow_extra_fields=flags["allowExtraFields"],
            allow_missing_fields=flags["allowMissingFields"],
        ),
        None,
    )


_PARSE_BY_KIND = {
    "Length": _parse_length,
    "Regex": _parse_regex,
    "Email": _parser_without_properties(Email),
    "Url": _parser_without_properties(Url),
    "Ulid": _parser_without_properties(Ulid),
    "NotBlank": _parser_without_properties(NotBlank),
    "Type": _parse_declared_type,
    "All": _parse_all,
    "Collection": _parse_collection,
}  # type: Mapping[str, _Parser]


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _constraint_from_jsonable(
    jsonable: Any, path: str
) -> Tuple[Optional[Constraint], Optional[Error]]:
    """Parse a single constraint from a JSON object with a ``kind``."""
    if not isinstance(jsonable, collections.abc.Mapping):
        return None, Error(
            path, f"Expected a JSON object, but got {_type_name(jsonable)}"
        )

    kind = jsonable.get("kind", None)
    if kind is None:
        return None, Error(path, "The property 'kind' is missing")

    if not isinstance(kind, str):
        return None, Error(
            f"{path}.kind", f"Expected a string, but got {_type_name(kind)}"
        )

    parse = _PARSE_BY_KIND.get(kind, None)
    if parse is None:
        return None, Error(
            f"{path}.kind",
            f"Unexpected constraint kind {kind!r}; "
            f"expected one of: {sorted(_PARSE_BY_KIND)}",
        )

    return parse(jsonable, path)


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _constraints_from_jsonable(
    jsonable: Any, path: str
) -> Tuple[Optional[List[Constraint]], Optional[Error]]:
    """Parse a lone constraint or an array of constraints into a list."""
    if isinstance(jsonable, collections.abc.Mapping):
        constraint, error = _constraint_from_jsonable(jsonable, path)
        if error is not None:
            return None, error

        assert constraint is not None
        return [constraint], None

    if not isinstance(jsonable, collections.abc.Sequence) or isinstance(
        jsonable, (str, bytes)
    ):
        return None, Error(
            path,
            f"Expected a JSON object or an array of JSON objects, "
            f"but got {_type_name(jsonable)}",
        )

    constraints = []  # type: List[Constraint]
    errors = []  # type: List[Error]

    for i, item in enumerate(jsonable):
        constraint, error = _constraint_from_jsonable(item, f"{path}[{i}]")
        if error is not None:
            errors.append(error)
            continue

        assert constraint is not None
        constraints.append(constraint)

    if len(errors) > 0:
        return None, Error(path, "Failed to parse the constraints", underlying=errors)

    return constraints, None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def constraints_from_jsonable(
    jsonable: Any,
) -> Tuple[Optional[List[Constraint]], Optional[Error]]:
    """
    Parse the constraint declaration given as a JSON-able value.

    The ``jsonable`` is either a single JSON object or an array of them. Each object
    is discriminated by its property ``kind``. For example:

    .. code-block:: json

        {
            "kind": "Collection",
            "fields": {
                "name": {"kind": "Required", "constraints": [
                    {"kind": "Length", "min": 3}
                ]},
                "email": {"kind": "Email"}
            },
            "allowExtraFields": true
        }
    """
    return _constraints_from_jsonable(jsonable, "$")
