"""Infer the kind of the schema node which a group of constraints describes."""
import collections
from typing import List, Mapping, MutableMapping, Optional, Sequence, Type

from constraint_schema import constraints, schema
from constraint_schema.common import TypeConflictError, UnsupportedConstraintError

# NOTE:
# The type ``numeric`` covers both integers and floats and implies no node kind.
_NODE_KIND_BY_TYPE_NAME = {
    "bool": schema.NodeKind.BOOLEAN,
    "boolean": schema.NodeKind.BOOLEAN,
    "int": schema.NodeKind.INTEGER,
    "integer": schema.NodeKind.INTEGER,
    "long": schema.NodeKind.INTEGER,
    "float": schema.NodeKind.NUMBER,
    "double": schema.NodeKind.NUMBER,
    "real": schema.NodeKind.NUMBER,
    "string": schema.NodeKind.STRING,
    "array": schema.NodeKind.ARRAY,
    "numeric": None,
}  # type: Mapping[str, Optional[schema.NodeKind]]

_NODE_KIND_BY_CONSTRAINT_KIND = {
    constraints.Length: schema.NodeKind.STRING,
    constraints.Regex: schema.NodeKind.STRING,
    constraints.Email: schema.NodeKind.STRING,
    constraints.Url: schema.NodeKind.STRING,
    constraints.Ulid: schema.NodeKind.STRING,
    constraints.Collection: schema.NodeKind.OBJECT,
    constraints.All: schema.NodeKind.ARRAY,
}  # type: Mapping[Type[constraints.Constraint], schema.NodeKind]


def _node_kind_of_declared_type(
    declared_type: constraints.DeclaredType,
) -> Optional[schema.NodeKind]:
    if declared_type.type_name not in _NODE_KIND_BY_TYPE_NAME:
        raise UnsupportedConstraintError(
            f"Unsupported type {declared_type.type_name!r} "
            f"in the constraint {declared_type.__class__.__name__}; "
            f"expected one of: {sorted(_NODE_KIND_BY_TYPE_NAME)}"
        )

    return _NODE_KIND_BY_TYPE_NAME[declared_type.type_name]


def kind_of_single(constraint: constraints.Constraint) -> Optional[schema.NodeKind]:
    """
    Infer the kind of the schema node implied by a single ``constraint``.

    We walk the chain of constraint kinds from the concrete kind up to the root so
    that specializations of a known kind are classified as the kind itself.

    Return None if the ``constraint`` carries no type information.
    """
    if constraints.is_of_kind(constraint, constraints.DeclaredType):
        assert isinstance(constraint, constraints.DeclaredType)
        return _node_kind_of_declared_type(constraint)

    for kind in constraints.kind_chain(type(constraint)):
        node_kind = _NODE_KIND_BY_CONSTRAINT_KIND.get(kind, None)
        if node_kind is not None:
            return node_kind

    return None


def infer_kind(
    constraints_of_group: Sequence[constraints.Constraint],
) -> Optional[schema.NodeKind]:
    """
    Infer the single kind of the schema node described by the constraint group.

    Return None if none of the constraints carries type information.

    :raise: :py:class:`TypeConflictError` if the constraints imply different kinds
    """
    constraint_names_by_kind = (
        collections.OrderedDict()
    )  # type: MutableMapping[schema.NodeKind, List[str]]

    for constraint in constraints_of_group:
        node_kind = kind_of_single(constraint)
        if node_kind is None:
            continue

        if node_kind not in constraint_names_by_kind:
            constraint_names_by_kind[node_kind] = []

        constraint_names_by_kind[node_kind].append(constraint.__class__.__name__)

    if len(constraint_names_by_kind) > 1:
        raise TypeConflictError(
            kinds=[
                (node_kind.value, constraint_names)
                for node_kind, constraint_names in constraint_names_by_kind.items()
            ]
        )

    if len(constraint_names_by_kind) == 0:
        return None

    return next(iter(constraint_names_by_kind))
