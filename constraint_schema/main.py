"""Transform validation constraints into the equivalent JSON schema."""

import argparse
import pathlib
import sys
from typing import Optional, TextIO

import constraint_schema
from constraint_schema import run, schema, transformation
from constraint_schema.common import ConstraintSchemaError

assert constraint_schema.__doc__ == __doc__


class Parameters:
    """Represent the program parameters."""

    def __init__(
        self,
        input_path: pathlib.Path,
        output_path: Optional[pathlib.Path],
    ) -> None:
        """Initialize with the given values."""
        self.input_path = input_path
        self.output_path = output_path


def execute(params: Parameters, stdout: TextIO, stderr: TextIO) -> int:
    """Run the program."""
    # region Basic checks
    if not params.input_path.exists():
        stderr.write(f"The --input does not exist: {params.input_path}\n")
        return 1

    if not params.input_path.is_file():
        stderr.write(f"The --input does not point to a file: {params.input_path}\n")
        return 1

    if params.output_path is not None and params.output_path.is_dir():
        stderr.write(
            f"The --output points to a directory, but expected a file: "
            f"{params.output_path}\n"
        )
        return 1

    # endregion

    # region Load

    loaded, error_message = run.load_constraints(input_path=params.input_path)
    if error_message is not None:
        stderr.write(error_message)
        return 1

    assert loaded is not None

    # endregion

    # region Transform

    try:
        node = transformation.transform(loaded)
    except ConstraintSchemaError as exception:
        run.write_error_report(
            message=f"Failed to transform the constraints from {params.input_path}",
            errors=[str(exception)],
            stderr=stderr,
        )
        return 1

    text = schema.generate(node)

    # endregion

    # region Write

    if params.output_path is None:
        stdout.write(text)
        stdout.write("\n")
        return 0

    try:
        params.output_path.parent.mkdir(parents=True, exist_ok=True)
        params.output_path.write_text(text + "\n", encoding="utf-8")
    except OSError as exception:
        run.write_error_report(
            message=f"Failed to write the JSON schema to {params.output_path}",
            errors=[str(exception)],
            stderr=stderr,
        )
        return 1

    stdout.write(f"Schema generated to: {params.output_path}\n")

    # endregion

    return 0


def main(prog: str) -> int:
    """
    Execute the main routine.

    :param prog: name of the program to be displayed in the help
    :return: exit code
    """
    parser = argparse.ArgumentParser(prog=prog, description=__doc__)
    parser.add_argument(
        "--input",
        help="path to the JSON file declaring the constraints of a field",
        required=True,
    )
    parser.add_argument(
        "--output",
        help="path to the generated JSON schema; if not set, written to STDOUT",
    )
    parser.add_argument(
        "--version", help="show the current version and exit", action="store_true"
    )

    # NOTE:
    # The module ``argparse`` is not flexible enough to understand special options such
    # as ``--version`` so we manually hard-wire.
    if "--version" in sys.argv and "--help" not in sys.argv:
        print(constraint_schema.__version__)
        return 0

    args = parser.parse_args()

    params = Parameters(
        input_path=pathlib.Path(args.input),
        output_path=pathlib.Path(args.output) if args.output is not None else None,
    )

    return execute(params=params, stdout=sys.stdout, stderr=sys.stderr)


def entry_point() -> int:
    """Provide an entry point for a console script."""
    return main(prog="constraint-schema")


if __name__ == "__main__":
    sys.exit(main(prog="constraint-schema"))
