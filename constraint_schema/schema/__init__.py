"""Provide the JSON schema trees produced from the constraints."""

from constraint_schema.schema import _jsonization, _stringify, _types

NodeKind = _types.NodeKind
StringFormat = _types.StringFormat

SchemaNode = _types.SchemaNode
StringSchema = _types.StringSchema
NumberSchema = _types.NumberSchema
IntegerSchema = _types.IntegerSchema
BooleanSchema = _types.BooleanSchema
ArraySchema = _types.ArraySchema
ObjectSchema = _types.ObjectSchema
AllOfSchema = _types.AllOfSchema
OneOfSchema = _types.OneOfSchema
NotSchema = _types.NotSchema
SchemaNodeUnion = _types.SchemaNodeUnion

SCHEMA_DRAFT = _jsonization.SCHEMA_DRAFT
to_jsonable = _jsonization.to_jsonable
generate = _jsonization.generate

dump = _stringify.dump
