import json
import math

from models import FireConfig, LifeStyle
from storage import ConfigStore, _sanitize_json_compat, load_config, read_config, save_config


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {
        "deposit": math.nan,
        "lifeStyles": [{"yearCost": float("inf")}, 1],
    }

    clean = _sanitize_json_compat(payload)

    assert clean == {"deposit": None, "lifeStyles": [{"yearCost": None}, 1]}


def test_load_config_missing_file_returns_defaults(tmp_path):
    config = load_config(str(tmp_path / "missing.json"))

    assert config == FireConfig()
    assert config.deposit == 100000
    assert config.annual_income == 120000
    assert config.life_style == LifeStyle("普通生活方式", 60000, 4.0, 2.229)


def test_save_config_writes_camel_case_keys(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = FireConfig(250000, 90000, [LifeStyle("简朴生活", 36000, 3.5, 2.0)])

    save_config(str(path), config)

    with path.open("r", encoding="utf-8") as handle:
        stored = json.load(handle)

    assert stored == {
        "deposit": 250000,
        "annualIncome": 90000,
        "lifeStyles": [
            {"desc": "简朴生活", "yearCost": 36000, "interestRate": 3.5, "inflationRate": 2.0},
        ],
    }
    assert not (tmp_path / "nested" / "config.json.tmp").exists()


def test_save_then_load_preserves_config(tmp_path):
    path = str(tmp_path / "config.json")
    config = FireConfig(1234.5, 0, [LifeStyle("frugal", 30000, 5, 3)])

    save_config(path, config)

    assert load_config(path) == config


def test_save_config_stores_nan_as_null(tmp_path):
    path = tmp_path / "config.json"

    save_config(str(path), FireConfig(deposit=math.nan))

    assert json.loads(path.read_text(encoding="utf-8"))["deposit"] is None
    # null falls back to the default on the way back in
    assert load_config(str(path)).deposit == 100000


def test_load_config_corrupt_file_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(str(path)) == FireConfig()


def test_load_config_empty_file_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("   ", encoding="utf-8")

    assert load_config(str(path)) == FireConfig()


def test_load_config_wrong_shape_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_config(str(path)) == FireConfig()


def test_load_config_fills_missing_fields(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"deposit": 5, "lifeStyles": [{"desc": "x", "yearCost": 10}]}), encoding="utf-8")

    config = load_config(str(path))

    assert config.deposit == 5
    assert config.annual_income == 120000
    assert config.life_style == LifeStyle("x", 10, 4.0, 2.229)


def test_load_config_empty_life_styles_uses_default(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"lifeStyles": []}), encoding="utf-8")

    assert load_config(str(path)).life_style == LifeStyle.default()


def test_store_skips_unchanged_saves(tmp_path):
    path = tmp_path / "config.json"
    store = ConfigStore(str(path))
    config = store.load()

    store.save(config)
    path.write_text("{}", encoding="utf-8")
    store.save(config)

    assert path.read_text(encoding="utf-8") == "{}"

    config.deposit = 42
    store.save(config)

    assert json.loads(path.read_text(encoding="utf-8"))["deposit"] == 42


def test_store_rewrites_corrupt_file_on_first_save(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    store = ConfigStore(str(path))

    config = store.load()
    store.save(config)

    assert config == FireConfig()
    assert load_config(str(path)) == FireConfig()
    assert json.loads(path.read_text(encoding="utf-8"))["deposit"] == 100000


def test_store_skips_save_after_reading_valid_file(tmp_path):
    path = tmp_path / "config.json"
    save_config(str(path), FireConfig(deposit=9))
    store = ConfigStore(str(path))

    config = store.load()
    path.write_text("{}", encoding="utf-8")
    store.save(config)

    assert path.read_text(encoding="utf-8") == "{}"


def test_read_config_returns_none_when_unusable(tmp_path):
    path = tmp_path / "config.json"

    assert read_config(str(path)) is None
    path.write_text("{not json", encoding="utf-8")
    assert read_config(str(path)) is None


def test_store_uses_environment_path(tmp_path, monkeypatch):
    path = tmp_path / "from_env.json"
    monkeypatch.setenv("FIRE_CALCULATOR_CONFIG", str(path))

    store = ConfigStore()
    store.save(FireConfig(deposit=7))

    assert store.path == str(path)
    assert load_config(str(path)).deposit == 7
