"""Run constraint-schema as Python module."""

import sys

import constraint_schema.main

if __name__ == "__main__":
    # The ``prog`` needs to be set in the argparse.
    # Otherwise the program name in the help shown to the user will be ``__main__``.
    sys.exit(constraint_schema.main.main(prog="constraint_schema"))
