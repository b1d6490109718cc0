import pytest

from boss_ttk.config import ConfigError, _deep_merge, apply_cli_overrides, env_overrides, load_configs

def test_deep_merge_simple():
    a = {"boss": {"hit_points": 571, "defense_level": 180}, "race_attacker": {"loadout": "arma"}}
    b = {"boss": {"defense_level": 200}, "race_attacker": {"max_damage_roll": 80}}
    c = _deep_merge(a, b)
    assert c["boss"]["hit_points"] == 571 and c["boss"]["defense_level"] == 200
    assert c["race_attacker"]["loadout"] == "arma" and c["race_attacker"]["max_damage_roll"] == 80

def test_env_overrides_parsing(monkeypatch):
    monkeypatch.setenv("BOSS_TTK__BOSS__HIT_POINTS", "600")
    monkeypatch.setenv("BOSS_TTK__SPECS", "0,1")
    monkeypatch.setenv("BOSS_TTK__RACE_ATTACKER__LOADOUT", "masori")
    d = env_overrides()
    assert d["boss"]["hit_points"] == 600
    assert d["specs"] == "0,1"
    assert d["race_attacker"]["loadout"] == "masori"

def test_cli_overrides_skip_unset_flags():
    out = apply_cli_overrides({"trials": 10, "seed": 3}, {"trials": None, "seed": 5})
    assert out == {"trials": 10, "seed": 5}

def test_yaml_and_json_files_merge(tmp_path):
    y = tmp_path / "base.yaml"
    y.write_text("trials: 500\nboss:\n  hit_points: 600\n", encoding="utf-8")
    j = tmp_path / "over.json"
    j.write_text('{"boss": {"defense_level": 200}, "specs": [1]}', encoding="utf-8")
    cfg = load_configs([str(y), str(j)])
    assert cfg == {"trials": 500, "boss": {"hit_points": 600, "defense_level": 200}, "specs": [1]}

def test_bad_files_raise(tmp_path):
    with pytest.raises(ConfigError):
        load_configs([str(tmp_path / "missing.yaml")])
    listy = tmp_path / "list.yaml"
    listy.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_configs([str(listy)])
    broken = tmp_path / "broken.yaml"
    broken.write_text("boss: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_configs([str(broken)])

def test_empty_file_is_empty_config(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_configs([str(empty)]) == {}
