#!/usr/bin/env python3

"""Check that the metadata in setup.py and constraint_schema/__init__.py agree."""
import os
import pathlib
import subprocess
import sys
from typing import List

import constraint_schema

#: Map the development status classifiers to ``__status__``
STATUS_BY_CLASSIFIER = {
    "Development Status :: 1 - Planning": "Planning",
    "Development Status :: 2 - Pre-Alpha": "Pre-Alpha",
    "Development Status :: 3 - Alpha": "Alpha",
    "Development Status :: 4 - Beta": "Beta",
    "Development Status :: 5 - Production/Stable": "Production/Stable",
    "Development Status :: 6 - Mature": "Mature",
    "Development Status :: 7 - Inactive": "Inactive",
}


def query_setup_py(setup_py_pth: pathlib.Path, option: str) -> str:
    """Run ``setup.py`` with the query ``option`` and return its output."""
    return subprocess.check_output(
        [sys.executable, str(setup_py_pth), f"--{option}"], encoding="utf-8"
    ).strip()


def main() -> int:
    """Execute the main routine."""
    repo_root = pathlib.Path(os.path.realpath(__file__)).parent.parent

    setup_py_pth = repo_root / "setup.py"
    if not setup_py_pth.exists():
        raise RuntimeError(f"Could not find the setup.py: {setup_py_pth}")

    errors = []  # type: List[str]

    for field, in_init in [
        ("version", constraint_schema.__version__),
        ("author", constraint_schema.__author__),
        ("license", constraint_schema.__license__),
        ("description", constraint_schema.__doc__),
    ]:
        in_setup_py = query_setup_py(setup_py_pth, field)
        if in_setup_py != in_init:
            errors.append(
                f"The {field} in setup.py is {in_setup_py!r}, "
                f"while in constraint_schema/__init__.py it is {in_init!r}"
            )

    statuses = [
        STATUS_BY_CLASSIFIER[classifier]
        for classifier in query_setup_py(setup_py_pth, "classifiers").splitlines()
        if classifier in STATUS_BY_CLASSIFIER
    ]

    if len(statuses) != 1:
        errors.append(
            f"Expected exactly one development status classifier in setup.py, "
            f"but got {len(statuses)}"
        )
    elif statuses[0] != constraint_schema.__status__:
        errors.append(
            f"Expected the status {statuses[0]!r} according to setup.py "
            f"in constraint_schema/__init__.py, "
            f"but found: {constraint_schema.__status__!r}"
        )

    for error in errors:
        print(error, file=sys.stderr)

    return 0 if len(errors) == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
