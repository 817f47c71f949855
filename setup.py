"""A setuptools based setup module.

See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""
import os

from setuptools import find_packages, setup

# pylint: disable=redefined-builtin

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "README.rst"), encoding="utf-8") as fid:
    long_description = fid.read()

with open(os.path.join(here, "requirements.txt"), encoding="utf-8") as fid:
    install_requires = [line for line in fid.read().splitlines() if line.strip()]

setup(
    name="constraint-schema",
    # Synchronize with constraint_schema/__init__.py!
    version="0.1.0",
    description="Transform validation constraints into the equivalent JSON schema.",
    long_description=long_description,
    author="Constraint Schema Developers",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    license="License :: OSI Approved :: MIT License",
    keywords="json schema validation constraints transformation",
    packages=find_packages(exclude=["tests", "tests.*", "continuous_integration"]),
    install_requires=install_requires,
    extras_require={
        "dev": [
            "black==24.8.0",
            "mypy==1.11.2",
            "pylint==3.2.7",
            "coverage>=7,<8",
            "jsonschema>=4.18,<5",
            "types-jsonschema",
        ],
    },
    python_requires=">=3.9",
    package_data={"constraint_schema": ["py.typed"]},
    data_files=[(".", ["LICENSE", "README.rst", "requirements.txt"])],
    entry_points={
        "console_scripts": [
            "constraint-schema=constraint_schema.main:entry_point",
        ]
    },
)
