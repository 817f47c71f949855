"""Provide the validation constraints which are transformed into a schema."""

from constraint_schema.constraints import _jsonization, _types

Constraint = _types.Constraint
Length = _types.Length
Regex = _types.Regex
Email = _types.Email
Url = _types.Url
Ulid = _types.Ulid
NotBlank = _types.NotBlank
DeclaredType = _types.DeclaredType
All = _types.All
Collection = _types.Collection

Field = _types.Field
PlainField = _types.PlainField
OptionalField = _types.OptionalField
RequiredField = _types.RequiredField
FieldUnion = _types.FieldUnion

parent_kind = _types.parent_kind
kind_chain = _types.kind_chain
is_of_kind = _types.is_of_kind
normalize_constraints = _types.normalize_constraints
as_field = _types.as_field

constraints_from_jsonable = _jsonization.constraints_from_jsonable
