"""Tests for devmount.cli — CLI entrypoint and the resolve command."""

import pytest

from devmount.cli import main
from devmount.cli._resolve import parse_mounts
from devmount.mounts import MountPoint


@pytest.fixture
def dist(tmp_path):
    """A build output directory on disk."""
    (tmp_path / "app.js").write_text("console.log(1)")
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")
    (docs / "home.html").write_text("<h1>Home</h1>")
    return tmp_path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_resolve_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_resolve_missing_url(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve"])
        assert exc_info.value.code == 2

    def test_bad_mount(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "/app.js", "--mount", "no-equals-sign"])
        assert exc_info.value.code == 2
        assert "expected PUBLIC=OUTPUT" in capsys.readouterr().err

    def test_index_and_no_index_conflict(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "/", "--index", "a.html", "--no-index"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "devmount" in captured.out


class TestCLIResolve:
    def test_prints_resolved_file(self, dist, capsys: pytest.CaptureFixture[str]) -> None:
        main(["resolve", "/assets/app.js", "--mount", f"/assets/={dist}"])
        assert capsys.readouterr().out.strip() == f"{dist}/app.js"

    def test_directory_index(self, dist, capsys: pytest.CaptureFixture[str]) -> None:
        main(["resolve", "/docs/", "--mount", f"/={dist}"])
        assert capsys.readouterr().out.strip() == f"{dist}/docs/index.html"

    def test_custom_index(self, dist, capsys: pytest.CaptureFixture[str]) -> None:
        main(["resolve", "/docs/", "--mount", f"/={dist}", "--index", "home.html"])
        assert capsys.readouterr().out.strip() == f"{dist}/docs/home.html"

    def test_no_index(self, dist, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "/docs/", "--mount", f"/={dist}", "--no-index"])
        assert exc_info.value.code == 1
        assert "not found: /docs/" in capsys.readouterr().err

    def test_first_mount_wins(self, dist, tmp_path_factory, capsys: pytest.CaptureFixture[str]) -> None:
        other = tmp_path_factory.mktemp("other")
        (other / "app.js").write_text("other")
        main(["resolve", "/app.js", "--mount", f"/={other}", "--mount", f"/={dist}"])
        assert capsys.readouterr().out.strip() == f"{other}/app.js"

    def test_not_found_exits_one(self, dist, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "/missing.js", "--mount", f"/={dist}"])
        assert exc_info.value.code == 1
        assert "not found: /missing.js" in capsys.readouterr().err

    def test_default_mount_is_cwd(self, dist, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.chdir(dist)
        main(["resolve", "/app.js"])
        assert capsys.readouterr().out.strip() == "app.js"


class TestParseMounts:
    def test_parses_pairs_in_order(self) -> None:
        assert parse_mounts(["/a/=/dist/a", "auto=/dist"]) == (
            MountPoint("/a/", "/dist/a"),
            MountPoint("auto", "/dist"),
        )

    def test_empty_public_path_allowed(self) -> None:
        assert parse_mounts(["=/dist"]) == (MountPoint("", "/dist"),)

    @pytest.mark.parametrize("spec", ["/a/", "/a/="])
    def test_invalid(self, spec: str) -> None:
        with pytest.raises(ValueError, match="invalid mount"):
            parse_mounts([spec])
