"""Provide the catalog of the validation constraints."""
import collections
import collections.abc
from typing import (
    Any,
    Final,
    List,
    Mapping,
    Optional,
    OrderedDict,
    Sequence,
    Type,
    Union,
)

from icontract import require, ensure, DBC

from constraint_schema.common import MalformedConstraintError


class Constraint(DBC):
    """
    Represent the universal root of all constraint kinds.

    The root carries no schema meaning. Each constraint kind specializes exactly
    one ancestor kind so that the kinds form a single-rooted tree.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        bases = [base for base in cls.__bases__ if issubclass(base, Constraint)]
        if len(bases) != 1:
            raise TypeError(
                f"Expected the constraint kind {cls.__name__!r} to specialize "
                f"exactly one constraint kind, but it specializes: "
                f"{[base.__name__ for base in bases]}"
            )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at 0x{id(self):x}>"


def parent_kind(kind: Type[Constraint]) -> Optional[Type[Constraint]]:
    """Return the constraint kind which ``kind`` specializes, or None for the root."""
    if kind is Constraint:
        return None

    for base in kind.__bases__:
        if issubclass(base, Constraint):
            return base

    raise AssertionError(f"Unexpected constraint kind without a parent: {kind}")


@ensure(lambda result: result[-1] is Constraint)
@ensure(lambda kind, result: result[0] is kind)
def kind_chain(kind: Type[Constraint]) -> Sequence[Type[Constraint]]:
    """
    List the constraint kinds from ``kind`` up to and including the root.

    The first element is ``kind`` itself, followed by its parent, grand-parent
    *etc.* The last element is always :py:class:`Constraint`.
    """
    result = []  # type: List[Type[Constraint]]

    current = kind  # type: Optional[Type[Constraint]]
    while current is not None:
        result.append(current)
        current = parent_kind(current)

    return result


def is_of_kind(constraint: Constraint, kind: Type[Constraint]) -> bool:
    """Check whether ``constraint`` is of ``kind`` or one of its specializations."""
    return any(ancestor is kind for ancestor in kind_chain(type(constraint)))


def normalize_constraints(value: Any) -> List[Constraint]:
    """
    Normalize a lone constraint or a sequence of constraints into a list.

    :raise: :py:class:`MalformedConstraintError` if ``value`` is neither
    """
    if isinstance(value, Constraint):
        return [value]

    if isinstance(value, collections.abc.Sequence) and not isinstance(
        value, (str, bytes)
    ):
        result = []  # type: List[Constraint]
        for i, item in enumerate(value):
            if not isinstance(item, Constraint):
                raise MalformedConstraintError(
                    f"Expected only constraints in the sequence, "
                    f"but got at index {i}: {item!r}"
                )
            result.append(item)

        return result

    raise MalformedConstraintError(
        f"Expected a constraint or a sequence of constraints, but got: {value!r}"
    )


class Length(Constraint):
    """Constrain the length of a string, with both bounds inclusive."""

    #: Inclusive lower bound, if any
    min_value: Final[Optional[int]]

    #: Inclusive upper bound, if any
    max_value: Final[Optional[int]]

    # fmt: off
    @require(
        lambda min_value, max_value:
        min_value is not None or max_value is not None,
        "At least one bound given",
        error=MalformedConstraintError
    )
    @require(
        lambda min_value, max_value:
        (min_value is None or min_value >= 0)
        and (max_value is None or max_value >= 0),
        "Bounds non-negative",
        error=MalformedConstraintError
    )
    @require(
        lambda min_value, max_value:
        not (min_value is not None and max_value is not None)
        or min_value <= max_value,
        error=MalformedConstraintError
    )
    # fmt: on
    def __init__(
        self, min_value: Optional[int] = None, max_value: Optional[int] = None
    ) -> None:
        """Initialize with the given values."""
        self.min_value = min_value
        self.max_value = max_value


class Regex(Constraint):
    """Constrain a string to match a regular expression."""

    pattern: Final[str]

    def __init__(self, pattern: str) -> None:
        """Initialize with the given values."""
        self.pattern = pattern


class Email(Constraint):
    """Constrain a string to be an e-mail address."""


class Url(Constraint):
    """Constrain a string to be a URL."""


class Ulid(Constraint):
    """Constrain a string to be a Universally Unique Lexicographically Sortable ID."""


class NotBlank(Constraint):
    """Constrain a value not to be blank."""


class DeclaredType(Constraint):
    """
    Declare explicitly the primitive type of a value.

    The ``type_name`` is one of the names such as ``int``, ``string`` or
    ``array``. Which names are understood is decided at the time of the type
    inference.
    """

    type_name: Final[str]

    @require(lambda type_name: len(type_name) > 0, error=MalformedConstraintError)
    def __init__(self, type_name: str) -> None:
        """Initialize with the given values."""
        self.type_name = type_name


class All(Constraint):
    """Apply the nested constraints to each element of a collection."""

    #: Constraints applied to every element
    constraints: Final[Sequence[Constraint]]

    def __init__(self, constraints: Union[Constraint, Sequence[Constraint]]) -> None:
        """Initialize with the given values."""
        self.constraints = normalize_constraints(constraints)


class Field(DBC):
    """
    Represent the constraints of a single field in a :py:class:`Collection`.

    Fields are not constraint kinds themselves. They only wrap the field
    constraints with the information whether the field is optional or required.
    """

    #: Constraints on the value of the field
    constraints: Final[Sequence[Constraint]]

    def __init__(self, constraints: Union[Constraint, Sequence[Constraint]]) -> None:
        """Initialize with the given values."""
        self.constraints = normalize_constraints(constraints)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.constraints!r})"


class PlainField(Field):
    """Represent a field without an explicit optional or required marker."""


class OptionalField(Field):
    """Represent a field which can be missing."""


class RequiredField(Field):
    """Represent a field which must be present."""


FieldUnion = Union[PlainField, OptionalField, RequiredField]


def as_field(value: Any) -> FieldUnion:
    """
    Wrap ``value`` as a field unless it is already wrapped.

    :raise: :py:class:`MalformedConstraintError` if ``value`` is neither a field,
        a constraint nor a sequence of constraints
    """
    if isinstance(value, (PlainField, OptionalField, RequiredField)):
        return value

    return PlainField(normalize_constraints(value))


class Collection(Constraint):
    """
    Constrain a mapping by the constraints on its individual fields.

    The order of the fields is preserved as declared.
    """

    #: Constraints of the individual fields
    fields: Final[OrderedDict[str, FieldUnion]]

    #: If set, fields not listed in :py:attr:`fields` are allowed
    allow_extra_fields: Final[bool]

    #: If set, the fields listed in :py:attr:`fields` can be missing
    allow_missing_fields: Final[bool]

    def __init__(
        self,
        fields: Mapping[str, Any],
        allow_extra_fields: bool = False,
        allow_missing_fields: bool = False,
    ) -> None:
        """Initialize with the given values."""
        if not isinstance(fields, collections.abc.Mapping):
            raise MalformedConstraintError(
                f"Expected the fields of a collection to be a mapping, "
                f"but got: {fields!r}"
            )

        normalized = collections.OrderedDict()  # type: OrderedDict[str, FieldUnion]
        for name, value in fields.items():
            if not isinstance(name, str):
                raise MalformedConstraintError(
                    f"Expected the field names of a collection to be strings, "
                    f"but got: {name!r}"
                )

            normalized[name] = as_field(value)

        self.fields = normalized
        self.allow_extra_fields = allow_extra_fields
        self.allow_missing_fields = allow_missing_fields
