import pytest
from bookkit.config import load_config, parse_config_text, config_from_dict
from bookkit.errors import ConfigError
from bookkit.schema import Schema, kind_of, validate

def test_load_default_config(book_root):
    cfg = load_config(root=book_root)
    assert cfg.output_directory == book_root / "out"
    assert cfg.settings["book"] == {"title": "T"}
    assert cfg.source == book_root / "book-config.json"

def test_load_toml_config(tmp_path):
    path = tmp_path / "book.toml"
    path.write_text('[output]\ndirectory = "site"\n', encoding="utf-8")
    cfg = load_config(path, tmp_path)
    assert cfg.output_directory == tmp_path / "site"

def test_absolute_output_kept(tmp_path):
    cfg = config_from_dict({"output": {"directory": str(tmp_path / "abs")}}, tmp_path / "elsewhere")
    assert cfg.output_directory == tmp_path / "abs"

def test_missing_directory_field(tmp_path):
    with pytest.raises(ConfigError) as info:
        config_from_dict({"output": {}}, tmp_path)
    assert "Missing required field directory at $.output" in str(info.value)
    assert info.value.path == "$.output"

def test_wrong_type_and_empty_directory(tmp_path):
    with pytest.raises(ConfigError, match="Expected string got number at"):
        config_from_dict({"output": {"directory": 3}}, tmp_path)
    with pytest.raises(ConfigError, match="non-empty"):
        config_from_dict({"output": {"directory": "  "}}, tmp_path)

def test_unparsable_and_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot parse json"):
        parse_config_text("{nope")
    with pytest.raises(ConfigError, match="must be an object"):
        parse_config_text("[1, 2]")
    with pytest.raises(ConfigError, match="Cannot read configuration"):
        load_config(root=tmp_path)

def test_kind_of_and_extra_settings(tmp_path):
    assert kind_of(True) == "bool"
    assert kind_of(1.5) == "number"
    cfg = config_from_dict({"output": {"directory": "o", "clean": True}, "theme": "dark"}, tmp_path)
    assert cfg.settings["theme"] == "dark"
    validate(Schema(type="object", properties={"a": Schema(type="number")}), {"a": 1, "b": 2})
