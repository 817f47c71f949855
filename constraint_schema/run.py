"""Load constraint declarations and report the errors in a unified way."""
import io
import json
import pathlib
import textwrap
from typing import List, Optional, Sequence, TextIO, Tuple

from icontract import require, ensure

from constraint_schema import constraints
from constraint_schema.common import error_message


# fmt: off
@require(
    lambda errors: all(
        len(error) > 0 and not error.startswith("\n")
        # This is necessary so that we do not have double bullet point.
        and not error.startswith("*") and not error.endswith("\n")
        for error in errors
    )
)
@require(lambda message: not message.endswith(":"))
@require(lambda message: not message.endswith("\n"))
@require(lambda message: not message.startswith("\n") and not message.startswith("*"))
# fmt: on
def write_error_report(message: str, errors: Sequence[str], stderr: TextIO) -> None:
    """
    Write the report (main ``message`` and details as ``errors``) to ``stderr``.

    This method helps us to have a unified way of showing errors.
    """
    stderr.write(f"{message}:\n")
    for error in errors:
        indented = textwrap.indent(error, "  ")
        indented = "* " + indented[2:]
        stderr.write(f"{indented}\n")


@require(lambda input_path: input_path.exists() and input_path.is_file())
@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def load_constraints(
    input_path: pathlib.Path,
) -> Tuple[Optional[List[constraints.Constraint]], Optional[str]]:
    """Load the constraint declaration from the JSON file at ``input_path``."""
    text = input_path.read_text(encoding="utf-8")

    try:
        jsonable = json.loads(text)
    except json.JSONDecodeError as exception:
        return None, (
            f"Failed to parse the constraint declaration as JSON: "
            f"invalid syntax at line {exception.lineno} "
            f"and column {exception.colno}: {exception.msg}\n"
        )

    loaded, error = constraints.constraints_from_jsonable(jsonable)
    if error is not None:
        writer = io.StringIO()
        write_error_report(
            message=f"Failed to understand the constraint declaration {input_path}",
            errors=[error_message(error)],
            stderr=writer,
        )
        return None, writer.getvalue()

    assert loaded is not None

    return loaded, None
