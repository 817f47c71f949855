# pylint: disable=missing-docstring

import textwrap
import unittest

from constraint_schema import constraints, schema, transformation
from constraint_schema.common import TypeConflictError, UnsupportedConstraintError


class CompanyEmail(constraints.Email):
    """Specialize the e-mail constraint for the tests."""


class EachElement(constraints.All):
    """Specialize the each-element constraint for the tests."""


class Test_generic(unittest.TestCase):
    def test_empty(self) -> None:
        node = transformation.transform([])

        self.assertEqual(
            textwrap.dedent(
                """\
                AllOfSchema(
                  schemas=[])"""
            ),
            schema.dump(node),
        )

    def test_unknown_value_constraints_ignored(self) -> None:
        node = transformation.transform([constraints.DeclaredType("numeric")])

        assert isinstance(node, schema.AllOfSchema)
        self.assertEqual(0, len(node.schemas))

    def test_not_blank(self) -> None:
        node = transformation.transform([constraints.NotBlank()])

        assert isinstance(node, schema.AllOfSchema)
        self.assertEqual(1, len(node.schemas))

        negation = node.schemas[0]
        assert isinstance(negation, schema.NotSchema)

        one_of = negation.schema
        assert isinstance(one_of, schema.OneOfSchema)
        self.assertEqual(5, len(one_of.schemas))

        self.assertEqual(
            {
                "allOf": [
                    {
                        "not": {
                            "oneOf": [
                                {"type": "array", "minItems": 1},
                                {"type": "string", "minLength": 1},
                                {"not": {"type": "string", "const": "0"}},
                                {"not": {"type": "number", "const": 0}},
                                {"not": {"type": "boolean", "const": False}},
                            ]
                        }
                    }
                ]
            },
            schema.to_jsonable(node),
        )

    def test_one_term_per_not_blank(self) -> None:
        node = transformation.transform(
            [constraints.NotBlank(), constraints.NotBlank()]
        )

        assert isinstance(node, schema.AllOfSchema)
        self.assertEqual(2, len(node.schemas))
        self.assertIsNot(node.schemas[0], node.schemas[1])


class Test_string(unittest.TestCase):
    def test_length_and_pattern(self) -> None:
        node = transformation.transform(
            [
                constraints.Length(min_value=3, max_value=10),
                constraints.Regex(pattern="^[a-z]+$"),
            ]
        )

        self.assertEqual(
            textwrap.dedent(
                """\
                StringSchema(
                  min_length=3,
                  max_length=10,
                  pattern='^[a-z]+$',
                  format=None,
                  const=None)"""
            ),
            schema.dump(node),
        )

    def test_email(self) -> None:
        node = transformation.transform([constraints.Email()])

        assert isinstance(node, schema.StringSchema)
        self.assertIs(schema.StringFormat.EMAIL, node.format)
        self.assertIsNone(node.min_length)
        self.assertIsNone(node.max_length)
        self.assertIsNone(node.pattern)

    def test_url_accepts_relative_references(self) -> None:
        node = transformation.transform([constraints.Url()])

        assert isinstance(node, schema.StringSchema)
        self.assertIs(schema.StringFormat.URI_REFERENCE, node.format)

    def test_last_format_wins(self) -> None:
        node = transformation.transform([constraints.Email(), constraints.Url()])

        assert isinstance(node, schema.StringSchema)
        self.assertIs(schema.StringFormat.URI_REFERENCE, node.format)

    def test_specialization_handled_as_its_ancestor(self) -> None:
        node = transformation.transform([CompanyEmail()])

        assert isinstance(node, schema.StringSchema)
        self.assertIs(schema.StringFormat.EMAIL, node.format)

    def test_ulid_alone(self) -> None:
        node = transformation.transform([constraints.Ulid()])

        self.assertEqual(
            textwrap.dedent(
                """\
                StringSchema(
                  min_length=26,
                  max_length=26,
                  pattern='[0-7][0-9A-HJKMNP-TV-Z]{25}',
                  format=None,
                  const=None)"""
            ),
            schema.dump(node),
        )

    def test_ulid_overrides_earlier_length_and_pattern(self) -> None:
        node = transformation.transform(
            [
                constraints.Length(min_value=1, max_value=100),
                constraints.Regex(pattern="^.*$"),
                constraints.Ulid(),
            ]
        )

        assert isinstance(node, schema.StringSchema)
        self.assertEqual(26, node.min_length)
        self.assertEqual(26, node.max_length)
        self.assertEqual(transformation.ULID_PATTERN, node.pattern)

    def test_later_length_overrides_ulid(self) -> None:
        node = transformation.transform(
            [constraints.Ulid(), constraints.Length(min_value=26, max_value=30)]
        )

        assert isinstance(node, schema.StringSchema)
        self.assertEqual(26, node.min_length)
        self.assertEqual(30, node.max_length)
        self.assertEqual(transformation.ULID_PATTERN, node.pattern)

    def test_length_with_a_single_bound_resets_the_other(self) -> None:
        node = transformation.transform(
            [
                constraints.Length(min_value=3, max_value=10),
                constraints.Length(max_value=5),
            ]
        )

        assert isinstance(node, schema.StringSchema)
        self.assertIsNone(node.min_length)
        self.assertEqual(5, node.max_length)

    def test_declared_string_type_without_other_constraints(self) -> None:
        node = transformation.transform([constraints.DeclaredType("string")])

        self.assertEqual(
            textwrap.dedent(
                """\
                StringSchema(
                  min_length=None,
                  max_length=None,
                  pattern=None,
                  format=None,
                  const=None)"""
            ),
            schema.dump(node),
        )


class Test_object(unittest.TestCase):
    def test_required_and_missing_fields(self) -> None:
        node = transformation.transform(
            [
                constraints.Collection(
                    fields={
                        "name": constraints.RequiredField(
                            constraints.Length(min_value=3, max_value=10)
                        ),
                        "email": constraints.OptionalField(constraints.Email()),
                        "nickname": constraints.Length(max_value=20),
                    },
                    allow_missing_fields=True,
                )
            ]
        )

        self.assertEqual(
            textwrap.dedent(
                """\
                ObjectSchema(
                  properties={
                    'name': StringSchema(
                      min_length=3,
                      max_length=10,
                      pattern=None,
                      format=None,
                      const=None),
                    'email': StringSchema(
                      min_length=None,
                      max_length=None,
                      pattern=None,
                      format='email',
                      const=None),
                    'nickname': StringSchema(
                      min_length=None,
                      max_length=20,
                      pattern=None,
                      format=None,
                      const=None)},
                  required=[
                    'name'],
                  additional_properties=None)"""
            ),
            schema.dump(node),
        )

    def test_missing_fields_disallowed_marks_all_required(self) -> None:
        node = transformation.transform(
            [
                constraints.Collection(
                    fields={
                        "b": constraints.RequiredField(constraints.Email()),
                        "a": constraints.OptionalField(constraints.Email()),
                        "c": constraints.Email(),
                    }
                )
            ]
        )

        assert isinstance(node, schema.ObjectSchema)
        self.assertListEqual(["b", "a", "c"], list(node.required))
        assert node.properties is not None
        self.assertListEqual(["b", "a", "c"], list(node.properties))

    def test_required_listed_once_over_collections(self) -> None:
        node = transformation.transform(
            [
                constraints.Collection(
                    fields={"name": constraints.RequiredField(constraints.Email())}
                ),
                constraints.Collection(
                    fields={
                        "name": constraints.RequiredField(constraints.Email()),
                        "other": constraints.Email(),
                    }
                ),
            ]
        )

        assert isinstance(node, schema.ObjectSchema)
        self.assertListEqual(["name", "other"], list(node.required))

    def test_additional_properties(self) -> None:
        allowed = transformation.transform(
            [constraints.Collection(fields={}, allow_extra_fields=True)]
        )
        assert isinstance(allowed, schema.ObjectSchema)
        self.assertIs(True, allowed.additional_properties)

        unspecified = transformation.transform([constraints.Collection(fields={})])
        assert isinstance(unspecified, schema.ObjectSchema)
        self.assertIsNone(unspecified.additional_properties)

    def test_no_fields(self) -> None:
        node = transformation.transform([constraints.Collection(fields={})])

        self.assertEqual(
            textwrap.dedent(
                """\
                ObjectSchema(
                  properties=None,
                  required=[],
                  additional_properties=None)"""
            ),
            schema.dump(node),
        )

    def test_field_without_constraints(self) -> None:
        node = transformation.transform(
            [constraints.Collection(fields={"anything": []})]
        )

        assert isinstance(node, schema.ObjectSchema)
        assert node.properties is not None
        anything = node.properties["anything"]
        assert isinstance(anything, schema.AllOfSchema)
        self.assertEqual(0, len(anything.schemas))

    def test_nested_collection(self) -> None:
        node = transformation.transform(
            [
                constraints.Collection(
                    fields={
                        "address": constraints.Collection(
                            fields={"city": constraints.Length(min_value=1)},
                            allow_missing_fields=True,
                        )
                    },
                    allow_missing_fields=True,
                )
            ]
        )

        assert isinstance(node, schema.ObjectSchema)
        assert node.properties is not None
        address = node.properties["address"]
        assert isinstance(address, schema.ObjectSchema)
        assert address.properties is not None
        city = address.properties["city"]
        assert isinstance(city, schema.StringSchema)
        self.assertEqual(1, city.min_length)

    def test_unsupported_type_of_a_field_propagates(self) -> None:
        with self.assertRaises(UnsupportedConstraintError) as context:
            transformation.transform(
                [
                    constraints.Collection(
                        fields={
                            "name": constraints.RequiredField(
                                constraints.Length(min_value=3, max_value=10)
                            ),
                            "age": constraints.OptionalField(
                                constraints.DeclaredType("int")
                            ),
                        },
                        allow_extra_fields=False,
                        allow_missing_fields=False,
                    )
                ]
            )

        self.assertIn("DeclaredType", str(context.exception))
        self.assertIn("'integer'", str(context.exception))

    def test_conflict_in_a_field_propagates(self) -> None:
        with self.assertRaises(TypeConflictError):
            transformation.transform(
                [
                    constraints.Collection(
                        fields={
                            "name": [
                                constraints.Email(),
                                constraints.All(constraints.Email()),
                            ]
                        }
                    )
                ]
            )


class Test_array(unittest.TestCase):
    def test_items(self) -> None:
        node = transformation.transform(
            [constraints.All(constraints.Length(min_value=2, max_value=4))]
        )

        self.assertEqual(
            textwrap.dedent(
                """\
                ArraySchema(
                  items=StringSchema(
                    min_length=2,
                    max_length=4,
                    pattern=None,
                    format=None,
                    const=None),
                  min_items=None)"""
            ),
            schema.dump(node),
        )

    def test_last_each_element_wins(self) -> None:
        node = transformation.transform(
            [constraints.All(constraints.Email()), EachElement(constraints.Url())]
        )

        assert isinstance(node, schema.ArraySchema)
        assert isinstance(node.items, schema.StringSchema)
        self.assertIs(schema.StringFormat.URI_REFERENCE, node.items.format)

    def test_declared_array_without_items(self) -> None:
        node = transformation.transform([constraints.DeclaredType("array")])

        assert isinstance(node, schema.ArraySchema)
        self.assertIsNone(node.items)

    def test_array_of_objects(self) -> None:
        node = transformation.transform(
            [
                constraints.All(
                    constraints.Collection(
                        fields={"id": constraints.Ulid()}, allow_extra_fields=True
                    )
                )
            ]
        )

        self.assertEqual(
            {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {
                            "type": "string",
                            "minLength": 26,
                            "maxLength": 26,
                            "pattern": "[0-7][0-9A-HJKMNP-TV-Z]{25}",
                        }
                    },
                    "required": ["id"],
                    "additionalProperties": True,
                },
            },
            schema.to_jsonable(node),
        )


class Test_unexpected(unittest.TestCase):
    def test_conflict(self) -> None:
        with self.assertRaises(TypeConflictError):
            transformation.transform(
                [constraints.Length(min_value=1), constraints.Collection(fields={})]
            )

    def test_unsupported_primitive_types(self) -> None:
        for type_name in ["bool", "int", "float"]:
            with self.assertRaises(UnsupportedConstraintError, msg=type_name):
                transformation.transform(
                    [constraints.DeclaredType(type_name), constraints.NotBlank()]
                )

    def test_unsupported_message_names_the_constraints(self) -> None:
        with self.assertRaises(UnsupportedConstraintError) as context:
            transformation.transform(
                [constraints.DeclaredType("bool"), constraints.NotBlank()]
            )

        self.assertEqual(
            "Not supported constraints for the type 'boolean': "
            "DeclaredType, NotBlank",
            str(context.exception),
        )


class Test_idempotence(unittest.TestCase):
    def test_same_tree_on_repeated_runs(self) -> None:
        group = [
            constraints.Collection(
                fields={
                    "id": constraints.RequiredField(constraints.Ulid()),
                    "tags": constraints.OptionalField(
                        constraints.All(
                            [constraints.Length(max_value=8), constraints.Regex("^#")]
                        )
                    ),
                    "comment": constraints.NotBlank(),
                },
                allow_extra_fields=True,
                allow_missing_fields=True,
            )
        ]

        first = schema.dump(transformation.transform(group))
        second = schema.dump(transformation.transform(group))

        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
