import re

import pytest

from kubevet.core.errors import FormatError, MissingFieldError, StructuralError
from kubevet.core.fields import child_by_key, require_field
from kubevet.core.models import ErrorKind, Mapping, Scalar, Sequence, TypeTag
from kubevet.validator.scalars import (
    require_choice,
    require_int,
    require_mapping,
    require_pattern,
    require_range,
    require_sequence,
    require_string,
)


def scalar(value, tag=TypeTag.STR, line=3, quoted=False):
    return Scalar(value=value, tag=tag, line=line, quoted=quoted)


def test_child_by_key_first_match_wins():
    first, second = scalar("a"), scalar("b")
    mapping = Mapping(pairs=(("name", first), ("other", scalar("x")), ("name", second)), line=1)

    assert child_by_key(mapping, "name") is first
    assert child_by_key(mapping, "missing") is None


def test_require_field_reports_missing_without_line():
    with pytest.raises(MissingFieldError) as exc:
        require_field(Mapping(line=4), "image", "spec.containers[0].image")

    diagnostic = exc.value.to_diagnostic()
    assert diagnostic.line == 0
    assert diagnostic.message == "spec.containers[0].image is required"
    assert diagnostic.kind is ErrorKind.MISSING


def test_shape_checks():
    mapping, sequence = Mapping(line=2), Sequence(line=5)
    assert require_mapping(mapping, "spec") is mapping
    assert require_sequence(sequence, "containers") is sequence

    with pytest.raises(StructuralError, match="^spec must be object$") as exc:
        require_mapping(sequence, "spec")
    assert exc.value.line == 5

    with pytest.raises(StructuralError, match="^ports must be array$"):
        require_sequence(scalar("80"), "ports")


@pytest.mark.parametrize("node", [
    scalar("123", TypeTag.INT),
    scalar("true", TypeTag.BOOL),
    scalar("", TypeTag.NULL),
    Mapping(),
])
def test_require_string_strict_rejects_non_strings(node):
    with pytest.raises(FormatError, match="^image must be string$"):
        require_string(node, "image")


def test_require_string_free_form_accepts_bare_numbers():
    assert require_string(scalar("123", TypeTag.INT), "metadata.name", free_form=True) == "123"
    assert require_string(scalar("1.5", TypeTag.FLOAT), "metadata.name", free_form=True) == "1.5"
    with pytest.raises(FormatError):
        require_string(scalar("false", TypeTag.BOOL), "metadata.name", free_form=True)


@pytest.mark.parametrize("text, expected", [
    ("80", 80),
    ("-1", -1),
    ("0x1F", 31),
    ("0o17", 15),
    ("1_000", 1000),
])
def test_require_int_parses_int_tagged_scalars(text, expected):
    assert require_int(scalar(text, TypeTag.INT), "port") == expected


def test_require_int_rejects_quoted_numbers_by_default():
    quoted = scalar("4", TypeTag.STR, quoted=True)
    with pytest.raises(FormatError, match="^cpu must be int$") as exc:
        require_int(quoted, "cpu")
    assert exc.value.line == 3

    assert require_int(quoted, "cpu", coerce_quoted=True) == 4


@pytest.mark.parametrize("node", [
    scalar("four", TypeTag.STR),
    scalar("1.5", TypeTag.FLOAT),
    Sequence(),
])
def test_require_int_rejects_non_ints_even_when_coercing(node):
    with pytest.raises(FormatError):
        require_int(node, "cpu", coerce_quoted=True)


def test_require_range_is_inclusive():
    assert require_range(1, 1, 65535, "port") == 1
    assert require_range(65535, 1, 65535, "port") == 65535
    with pytest.raises(FormatError, match="^port value out of range$"):
        require_range(65536, 1, 65535, "port", line=9)


def test_require_pattern_and_choice_messages():
    regex = re.compile(r"^\d+(Gi|Mi|Ki)$")
    assert require_pattern("1Gi", regex, "memory") == "1Gi"
    with pytest.raises(FormatError, match=r"^memory has invalid format '1GB'$"):
        require_pattern("1GB", regex, "memory")

    assert require_choice("TCP", ("TCP", "UDP"), "protocol") == "TCP"
    with pytest.raises(FormatError, match=r"^protocol has unsupported value 'SCTP'$"):
        require_choice("SCTP", ("TCP", "UDP"), "protocol")
