# pylint: disable=missing-docstring

import unittest

from constraint_schema import constraints
from constraint_schema.common import MalformedConstraintError


class CompanyEmail(constraints.Email):
    """Specialize the e-mail constraint for the tests."""


class InternalCompanyEmail(CompanyEmail):
    """Specialize the specialization for the tests."""


class Test_kind_chain(unittest.TestCase):
    def test_root(self) -> None:
        self.assertListEqual(
            [constraints.Constraint],
            list(constraints.kind_chain(constraints.Constraint)),
        )
        self.assertIsNone(constraints.parent_kind(constraints.Constraint))

    def test_concrete_kind(self) -> None:
        self.assertListEqual(
            [constraints.Length, constraints.Constraint],
            list(constraints.kind_chain(constraints.Length)),
        )

    def test_specialization(self) -> None:
        self.assertListEqual(
            [InternalCompanyEmail, CompanyEmail, constraints.Email, constraints.Constraint],
            list(constraints.kind_chain(InternalCompanyEmail)),
        )
        self.assertIs(CompanyEmail, constraints.parent_kind(InternalCompanyEmail))

    def test_is_of_kind(self) -> None:
        self.assertTrue(
            constraints.is_of_kind(InternalCompanyEmail(), constraints.Email)
        )
        self.assertTrue(constraints.is_of_kind(constraints.Email(), constraints.Email))
        self.assertFalse(constraints.is_of_kind(constraints.Email(), CompanyEmail))
        self.assertFalse(constraints.is_of_kind(constraints.Url(), constraints.Email))

    def test_multiple_specialization_rejected(self) -> None:
        with self.assertRaises(TypeError):
            # pylint: disable=unused-variable
            class EmailAndUrl(constraints.Email, constraints.Url):
                pass


class Test_normalize_constraints(unittest.TestCase):
    def test_lone_constraint(self) -> None:
        email = constraints.Email()
        self.assertListEqual([email], constraints.normalize_constraints(email))

    def test_sequence(self) -> None:
        email = constraints.Email()
        url = constraints.Url()
        self.assertListEqual([email, url], constraints.normalize_constraints((email, url)))

    def test_empty_sequence(self) -> None:
        self.assertListEqual([], constraints.normalize_constraints([]))

    def test_string_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.normalize_constraints("Email")

    def test_non_constraint_item_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.normalize_constraints([constraints.Email(), 42])


class Test_length(unittest.TestCase):
    def test_only_min(self) -> None:
        length = constraints.Length(min_value=3)
        self.assertEqual(3, length.min_value)
        self.assertIsNone(length.max_value)

    def test_no_bounds_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.Length()

    def test_inverted_bounds_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.Length(min_value=10, max_value=3)

    def test_negative_bound_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.Length(min_value=-1)


class Test_collection(unittest.TestCase):
    def test_fields_normalized(self) -> None:
        email = constraints.Email()
        length = constraints.Length(max_value=5)
        ulid = constraints.Ulid()

        collection = constraints.Collection(
            fields={
                "email": email,
                "code": [length],
                "identifier": constraints.RequiredField(ulid),
                "nickname": constraints.OptionalField([]),
            }
        )

        self.assertListEqual(
            ["email", "code", "identifier", "nickname"], list(collection.fields)
        )

        self.assertIsInstance(collection.fields["email"], constraints.PlainField)
        self.assertListEqual([email], list(collection.fields["email"].constraints))

        self.assertIsInstance(collection.fields["code"], constraints.PlainField)
        self.assertListEqual([length], list(collection.fields["code"].constraints))

        self.assertIsInstance(
            collection.fields["identifier"], constraints.RequiredField
        )
        self.assertListEqual([ulid], list(collection.fields["identifier"].constraints))

        self.assertIsInstance(collection.fields["nickname"], constraints.OptionalField)
        self.assertListEqual([], list(collection.fields["nickname"].constraints))

        self.assertFalse(collection.allow_extra_fields)
        self.assertFalse(collection.allow_missing_fields)

    def test_malformed_field_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.Collection(fields={"something": 42})

    def test_non_string_field_name_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.Collection(fields={1: constraints.Email()})  # type: ignore

    def test_fields_not_a_mapping_rejected(self) -> None:
        with self.assertRaises(MalformedConstraintError):
            constraints.Collection(fields=[constraints.Email()])  # type: ignore


class Test_all(unittest.TestCase):
    def test_lone_constraint_normalized(self) -> None:
        url = constraints.Url()
        self.assertListEqual([url], list(constraints.All(url).constraints))


if __name__ == "__main__":
    unittest.main()
