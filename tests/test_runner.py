import logging

import pytest

from flagwatch import runner
from flagwatch.errors import FileScanError, InternalError
from flagwatch.models import FlagwatchConfig
from flagwatch.runner import EXIT_POLICY_VIOLATION, EXIT_SUCCESS, exit_code_for, run


def test_end_to_end(sample_repo):
    result = run(str(sample_repo), FlagwatchConfig())

    assert result.flags_detected == 2
    assert [r.name for r in result.flags_missing] == ["FEATURE_MISSING"]
    assert [d.name for d in result.flags_unused] == ["FEATURE_UNUSED"]
    assert [r.name for r in result.all_flags] == ["FEATURE_NEW_UI", "FEATURE_MISSING"]
    assert result.dead_conditionals == ()


def test_excluded_tree_contributes_nothing(make_tree):
    root = make_tree({
        "src/app.ts": "process.env.FEATURE_A",
        "node_modules/lib/index.js": "process.env.FEATURE_VENDOR; if (true) {}",
        ".env": "FEATURE_A=1\n",
    })
    result = run(str(root), FlagwatchConfig())
    assert [r.name for r in result.all_flags] == ["FEATURE_A"]
    assert result.dead_conditionals == ()
    assert not result.has_issues


def test_bad_file_is_skipped_with_warning(make_tree, caplog):
    root = make_tree({"src/ok.ts": "process.env.FEATURE_OK\n"})
    (root / "src" / "bad.ts").write_bytes(b"\xff\xfe process.env.FEATURE_BAD")

    with caplog.at_level(logging.WARNING, logger="flagwatch"):
        result = run(str(root), FlagwatchConfig())

    assert [r.name for r in result.all_flags] == ["FEATURE_OK"]
    assert any("bad.ts" in rec.getMessage() for rec in caplog.records)


def test_invalid_pattern_skips_every_file(make_tree, caplog):
    root = make_tree({"a.ts": "flags.x", "b.ts": "flags.y"})
    config = FlagwatchConfig(flag_patterns=("flags\\.([a-z",))

    with caplog.at_level(logging.WARNING, logger="flagwatch"):
        result = run(str(root), config)

    assert result.all_flags == ()
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_missing_root_propagates(tmp_path):
    with pytest.raises(FileScanError):
        run(str(tmp_path / "missing"), FlagwatchConfig())


def test_unexpected_failure_is_wrapped(sample_repo, monkeypatch):
    def boom(*args, **kwargs):
        raise KeyError("boom")

    monkeypatch.setattr(runner, "analyze_flags", boom)
    with pytest.raises(InternalError) as exc_info:
        run(str(sample_repo), FlagwatchConfig())
    assert isinstance(exc_info.value.__cause__, KeyError)


def test_parallel_matches_sequential(make_tree):
    files = {f"src/m{i:02d}.ts": f"process.env.FEATURE_{chr(65 + i)}\nif (true) {{}}\n" for i in range(12)}
    files[".env"] = "FEATURE_A=1\nFEATURE_Z=1\n"
    root = make_tree(files)

    sequential = run(str(root), FlagwatchConfig(), max_workers=1)
    parallel = run(str(root), FlagwatchConfig(), max_workers=4)

    assert parallel == sequential
    assert parallel.flags_detected == 12


def test_exit_codes(sample_repo, tmp_path):
    dirty = run(str(sample_repo), FlagwatchConfig())
    assert exit_code_for(dirty, strict=False) == EXIT_SUCCESS
    assert exit_code_for(dirty, strict=True) == EXIT_POLICY_VIOLATION

    clean_dir = tmp_path / "clean"
    clean_dir.mkdir()
    clean = run(str(clean_dir), FlagwatchConfig())
    assert exit_code_for(clean, strict=True) == EXIT_SUCCESS
