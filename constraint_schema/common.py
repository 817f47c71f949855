"""Provide common functions and types for the transformation."""
import inspect
import io
import textwrap
from typing import Any, Optional, List, NoReturn, Sequence, Tuple, cast

from icontract import require


class Rstripped(str):
    """
    Represent a block of text without trailing whitespace.

    The block can be both single-line or multi-line.
    """

    @require(
        lambda block: not block.endswith("\n")
        and not block.endswith(" ")
        and not block.endswith("\t")
    )
    def __new__(cls, block: str) -> "Rstripped":
        return cast(Rstripped, block)


def is_stripped(text: str) -> bool:
    """Check that the ``text`` does not have leading and trailing whitespace."""
    return (
        not text.startswith("\n")
        and not text.startswith(" ")
        and not text.startswith("\t")
    ) and (
        not text.endswith("\n") and not text.endswith(" ") and not text.endswith("\t")
    )


class Stripped(Rstripped):
    """
    Represent a block of text without leading and trailing whitespace.

    The block of text can be both single-line and multi-line.
    """

    @require(lambda block: is_stripped(block))
    def __new__(cls, block: str) -> "Stripped":
        return cast(Stripped, block)


class Error:
    """
    Represent an unexpected input.

    For example, a constraint declaration can be valid JSON, but we can only
    understand a subset of possible JSON objects.
    """

    def __init__(
        self,
        path: Optional[str],
        message: str,
        underlying: Optional[List["Error"]] = None,
    ) -> None:
        self.path = path
        self.message = message
        self.underlying = underlying

    def __repr__(self) -> str:
        return (
            f"Error("
            f"path={self.path!r}, "
            f"message={self.message!r}, "
            f"underlying={self.underlying!r})"
        )


def error_message(error: Error) -> str:
    """Generate the error message, including the underlying errors, indented."""
    prefix = ""
    if error.path is not None:
        prefix = f"At {error.path}: "

    if error.underlying is None or len(error.underlying) == 0:
        return f"{prefix}{error.message}"

    writer = io.StringIO()
    writer.write(f"{prefix}{error.message}\n")
    for i, underlying_error in enumerate(error.underlying):
        if i > 0:
            writer.write("\n")
        indented = textwrap.indent(error_message(underlying_error), "  ")
        writer.write(indented)

    return writer.getvalue()


class ConstraintSchemaError(Exception):
    """Signal that a group of constraints can not be transformed to a schema."""


class TypeConflictError(ConstraintSchemaError):
    """
    Signal that a constraint group describes more than one schema type.

    The rules of such a field are self-contradictory, *e.g.*, a field can not
    be both a string and an object.
    """

    @require(lambda kinds: len(kinds) > 1)
    def __init__(self, kinds: Sequence[Tuple[str, Sequence[str]]]) -> None:
        """
        Initialize with the conflicting ``kinds``.

        Each entry pairs the name of an inferred node kind with the names of
        the constraint kinds which implied it.
        """
        self.kinds = kinds

        parts = [
            f"{kind} (from {', '.join(constraint_names)})"
            for kind, constraint_names in kinds
        ]
        super().__init__(f"Type conflict between: {'; '.join(parts)}")


class UnsupportedConstraintError(ConstraintSchemaError):
    """Signal that we have no schema builder for a group of constraints."""


class MalformedConstraintError(ConstraintSchemaError, TypeError):
    """Signal that a constraint has been constructed with invalid attributes."""


def assert_never(value: NoReturn) -> NoReturn:
    """
    Signal to mypy to perform an exhaustive matching.

    Please see the following page for more details:
    https://hakibenita.com/python-mypy-exhaustive-checking
    """
    assert False, f"Unhandled value: {value} ({type(value).__name__})"


def indent_but_first_line(text: str, indention: str) -> str:
    """
    Indent all but the first of the given ``text`` by ``indention``.

    For example, this helps you insert indented blocks into formatted string literals.
    """
    indented_lines = []  # type: List[str]
    for i, line in enumerate(text.splitlines()):
        if i == 0:
            indented_lines.append(line)
        else:
            if len(line) > 0:
                indented_lines.append(indention + line)
            else:
                indented_lines.append(line)

    return "\n".join(indented_lines)


def assert_union_of_descendants_exhaustive(union: Any, base_class: Any) -> None:
    """
    Check that the ``union`` covers all the concrete subclasses of ``base_class``.

    Make sure you put the assertion at the end of the module where no new classes are
    defined.

    See also for more details: https://hakibenita.com/python-mypy-exhaustive-checking
    """
    if inspect.isclass(union):
        union_map = {id(union): union}
    elif hasattr(union, "__args__"):
        union_map = {id(cls): cls for cls in union.__args__}
    else:
        raise NotImplementedError(f"We do not know how to handle the union: {union}")

    # We have to recursively figure out the subclasses.
    concrete_subclasses = []  # type: List[Any]

    stack = base_class.__subclasses__()  # type: List[Any]

    while len(stack) > 0:
        sub_cls = stack.pop()
        if not inspect.isabstract(sub_cls):
            concrete_subclasses.append(sub_cls)

        stack.extend(sub_cls.__subclasses__())

    subclass_map = {id(sub_cls): sub_cls for sub_cls in concrete_subclasses}

    union_set = set(union_map.keys())
    subclass_set = set(subclass_map.keys())

    if union_set != subclass_set:
        union_diff_names = [
            union_map[cls_id].__name__ for cls_id in union_set.difference(subclass_set)
        ]

        subclass_diff_names = [
            subclass_map[cls_id].__name__
            for cls_id in subclass_set.difference(union_set)
        ]

        raise AssertionError(
            f"The following classes were listed in the union, "
            f"but they are not concrete sub-classes "
            f"of {base_class.__name__!r}: {union_diff_names}.\n\n"
            f"The following concrete sub-classes of {base_class.__name__!r} were "
            f"not listed in the union: {subclass_diff_names}"
        )
