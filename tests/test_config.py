import pytest

from dupelink.config import (
    DEFAULT_LINK_LIMIT,
    DupelinkConfig,
    Mode,
    ScriptDialect,
    default_config,
    load_config,
    validate_config,
)
from dupelink.errors import ConfigError


def test_defaults():
    cfg = default_config()
    assert cfg.scan.mode is Mode.REPORT
    assert cfg.scan.skip_zero_length is True
    assert cfg.engine.signature_bytes == 32768
    assert cfg.engine.compare_chunk_bytes == 65536
    assert cfg.engine.link_limit is None
    assert DEFAULT_LINK_LIMIT == 1023


def test_instances_do_not_share_sections():
    first = DupelinkConfig()
    first.scan.mode = Mode.DELETE
    assert DupelinkConfig().scan.mode is Mode.REPORT


def test_load_yaml(tmp_path):
    path = tmp_path / "dupelink.yaml"
    path.write_text(
        "scan:\n  mode: hardlink\n  allow_readonly: true\n"
        "engine:\n  link_limit: 64\n"
        "script:\n  dialect: sh\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.scan.mode is Mode.HARDLINK
    assert cfg.scan.allow_readonly is True
    assert cfg.engine.link_limit == 64
    assert cfg.script.dialect is ScriptDialect.SH
    assert cfg.links_wanted and cfg.eliminating


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == default_config()


def test_bad_value_is_a_config_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("scan:\n  mode: shred\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_file_is_a_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "change",
    [
        lambda c: (setattr(c.scan, "mode", Mode.DISCOVER), setattr(c.script, "path", "x.bat")),
        lambda c: (setattr(c.scan, "mode", Mode.DISCOVER), setattr(c.scan, "allow_readonly", True)),
        lambda c: setattr(c.scan, "mode", Mode.SCRIPT),
        lambda c: setattr(c.engine, "signature_bytes", 0),
        lambda c: setattr(c.engine, "compare_chunk_bytes", -1),
        lambda c: setattr(c.engine, "link_limit", 0),
    ],
)
def test_validate_rejects(change):
    cfg = default_config()
    change(cfg)
    with pytest.raises(ConfigError):
        validate_config(cfg)


def test_validate_accepts_defaults():
    cfg = default_config()
    assert validate_config(cfg) is cfg
