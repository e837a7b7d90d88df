import tomlkit

from kappagotchi.config.config import (
    DEFAULTS_PATH, get_state_path, load_config, load_rules, save_config,
)


def test_defaults_load(tmp_path):
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg["main"]["state_file"] == "state.json"
    assert cfg["rules"]["tz_offset_minutes"] == 540
    assert DEFAULTS_PATH.exists()


def test_user_config_is_deep_merged(tmp_path):
    user = tmp_path / "config.toml"
    user.write_text('[rules.fishing]\nboy_rate = 0.9\n[ticker]\ninterval = 5.0\n', encoding="utf-8")
    cfg = load_config(user)
    assert cfg["rules"]["fishing"]["boy_rate"] == 0.9
    assert cfg["rules"]["fishing"]["roll_resolution"] == 1000
    assert cfg["ticker"]["interval"] == 5.0
    assert load_rules(cfg).fishing.boy_threshold == 900


def test_env_var_selects_user_config(tmp_path, monkeypatch):
    user = tmp_path / "env.toml"
    user.write_text('[main]\nseed = 7\n', encoding="utf-8")
    monkeypatch.setenv("KAPPA_CONFIG", str(user))
    assert load_config()["main"]["seed"] == 7


def test_broken_user_config_is_ignored(tmp_path):
    user = tmp_path / "broken.toml"
    user.write_text("[rules\nnot toml", encoding="utf-8")
    assert load_config(user)["rules"]["coins"]["ad_reward"] == 100


def test_save_config_round_trip(tmp_path):
    target = tmp_path / "nested" / "config.toml"
    assert save_config({"main": {"seed": 3}}, target)
    assert tomlkit.loads(target.read_text(encoding="utf-8")).unwrap() == {"main": {"seed": 3}}
    assert not target.with_name("config.toml.tmp").exists()


def test_get_state_path_creates_base_dir(tmp_path):
    cfg = {"main": {"base_dir": str(tmp_path / "home"), "state_file": "save.json"}}
    path = get_state_path(cfg)
    assert path == tmp_path / "home" / "save.json"
    assert path.parent.is_dir()
