import textwrap

from goldfile.config import refresh_config


def test_defaults_without_pyproject(tmp_path):
    cfg = refresh_config(tmp_path)

    assert cfg.golden_dir == "goldens"
    assert cfg.tolerance == 0.0
    assert cfg.update_goldens is False
    assert cfg.write_failures is True
    assert cfg.failures_dir == "failures"


def test_config_loads_from_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        textwrap.dedent(
            """
            [tool.goldfile]
            golden_dir = "test/goldens"
            tolerance = 0.02
            update_goldens = true
            failures_dir = "diffs"
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    cfg = refresh_config()

    assert cfg.golden_dir == "test/goldens"
    assert cfg.tolerance == 0.02
    assert cfg.update_goldens is True
    assert cfg.failures_dir == "diffs"


def test_env_overrides_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[tool.goldfile]\ntolerance = 0.5\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GOLDFILE_TOLERANCE", "0.1")
    monkeypatch.setenv("GOLDFILE_WRITE_FAILURES", "off")

    cfg = refresh_config()

    assert cfg.tolerance == 0.1
    assert cfg.write_failures is False


def test_tolerance_is_clamped(tmp_path, monkeypatch):
    monkeypatch.setenv("GOLDFILE_TOLERANCE", "7")
    assert refresh_config(tmp_path).tolerance == 1.0

    monkeypatch.setenv("GOLDFILE_TOLERANCE", "not-a-number")
    assert refresh_config(tmp_path).tolerance == 0.0


def test_config_found_in_parent_directory(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text('[tool.goldfile]\ngolden_dir = "shots"\n', encoding="utf-8")
    nested = tmp_path / "tests" / "widgets"
    nested.mkdir(parents=True)

    assert refresh_config(nested).golden_dir == "shots"


def test_non_finite_tolerance_falls_back_to_default(tmp_path, monkeypatch):
    for value in ("nan", "inf", "-inf"):
        monkeypatch.setenv("GOLDFILE_TOLERANCE", value)
        assert refresh_config(tmp_path).tolerance == 0.0

    monkeypatch.delenv("GOLDFILE_TOLERANCE")
    (tmp_path / "pyproject.toml").write_text("[tool.goldfile]\ntolerance = nan\n", encoding="utf-8")
    assert refresh_config(tmp_path).tolerance == 0.0
