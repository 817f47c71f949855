"""Transform the validation constraints into the equivalent JSON schema nodes."""

from constraint_schema.transformation import _build, _guess

kind_of_single = _guess.kind_of_single
infer_kind = _guess.infer_kind

ULID_PATTERN = _build.ULID_PATTERN
ULID_LENGTH = _build.ULID_LENGTH
transform = _build.transform
