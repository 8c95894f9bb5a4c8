"""Tests for loading a project directory as virtual files."""

import logging

import pytest
from ts_preview.project import load_project_dir


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "node_modules" / "react").mkdir(parents=True)
    (tmp_path / "index.ts").write_text("import './src/app';")
    (tmp_path / "src" / "app.tsx").write_text("export default 1;")
    (tmp_path / "package.json").write_text('{"dependencies": {}}')
    (tmp_path / "README.md").write_text("# readme")
    (tmp_path / "node_modules" / "react" / "index.js").write_text("")
    return tmp_path


class TestLoadProjectDir:
    def test_loads_sources(self, project):
        files = load_project_dir(project)
        assert [f.path for f in files] == ["/index.ts", "/package.json", "/src/app.tsx"]
        assert files[0].code == "import './src/app';"

    def test_custom_excludes(self, project):
        files = load_project_dir(project, excludes=("src",))
        assert "/src/app.tsx" not in [f.path for f in files]
        assert "/node_modules/react/index.js" in [f.path for f in files]

    def test_non_utf8_skipped(self, project, caplog):
        (project / "bad.ts").write_bytes(b"\xff\xfe\x00")

        with caplog.at_level(logging.WARNING):
            files = load_project_dir(project)

        assert "/bad.ts" not in [f.path for f in files]
        assert "non-UTF-8" in caplog.text

    def test_missing_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            load_project_dir(tmp_path / "nope")
