import json

import pytest

from kubevet.core.config import DEFAULT_SCHEMA, SchemaConfig, load_schema_config
from kubevet.core.engine import ValidationEngine
from kubevet.core.errors import SchemaConfigError


def test_defaults():
    assert DEFAULT_SCHEMA.api_version == "v1"
    assert DEFAULT_SCHEMA.kind == "Pod"
    assert DEFAULT_SCHEMA.os_names == ("linux", "windows")
    assert DEFAULT_SCHEMA.protocols == ("TCP", "UDP")
    assert (DEFAULT_SCHEMA.port_min, DEFAULT_SCHEMA.port_max) == (1, 65535)
    assert DEFAULT_SCHEMA.coerce_quoted_ints is False
    assert DEFAULT_SCHEMA.fail_fast is False


def test_from_dict_overrides_and_compiles_patterns():
    config = SchemaConfig.from_dict({
        "image_pattern": r"^docker\.io/.+:.+$",
        "protocols": ["TCP"],
        "coerce_quoted_ints": True,
    })
    assert config.image_pattern.search("docker.io/app:1")
    assert config.protocols == ("TCP",)
    assert config.coerce_quoted_ints is True
    # Untouched values keep their defaults
    assert config.memory_pattern.pattern == DEFAULT_SCHEMA.memory_pattern.pattern


@pytest.mark.parametrize("data", [
    {"unknown": 1},
    {"image_pattern": "("},
    {"protocols": "TCP"},
    {"port_min": "1"},
    {"fail_fast": "yes"},
    {"kind": 5},
    {"port_min": 10, "port_max": 5},
])
def test_from_dict_rejects_bad_values(data):
    with pytest.raises(SchemaConfigError):
        SchemaConfig.from_dict(data)


def test_load_schema_config_from_file(tmp_path, valid_pod):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({"image_pattern": r"^docker\.io/[^:]+:.+$"}))

    engine = ValidationEngine(load_schema_config(path))
    text = valid_pod.replace("registry.bigbrother.io/web:1.0", "docker.io/web:1.0")
    assert engine.validate_text(text) == []


def test_load_schema_config_errors(tmp_path):
    with pytest.raises(SchemaConfigError):
        load_schema_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(SchemaConfigError):
        load_schema_config(broken)

    listed = tmp_path / "list.json"
    listed.write_text("[]")
    with pytest.raises(SchemaConfigError, match="JSON object"):
        load_schema_config(listed)
