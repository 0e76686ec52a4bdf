import shutil

from folio.build import BuildResult
from folio.cli import _SKELETON_DIR
from folio.content import DirectoryReadError, SiteContent
from folio.watcher import SiteWatcher, _ChangeHandler


class DummyEvent:
    def __init__(self, path, is_directory=False):
        self.src_path = path
        self.is_directory = is_directory


def make_result(tmp_path):
    return BuildResult(
        pages=[tmp_path / "dist" / "index.html"],
        output_dir=tmp_path / "dist",
        content=SiteContent([], [], [], []),
    )


def test_watcher_reads_directories_from_config(tmp_path):
    (tmp_path / "folio.yaml").write_text(
        "content_dir: src\noutput_dir: site\n", encoding="utf-8"
    )
    watcher = SiteWatcher(tmp_path)
    assert watcher.output_dir == tmp_path / "site"
    assert watcher.watch_dirs[0] == tmp_path / "src"


def test_change_handler_skips_output(tmp_path):
    watcher = SiteWatcher(tmp_path)
    watcher.output_dir.mkdir()

    called = []
    watcher.rebuild = lambda: called.append("rebuild")
    handler = _ChangeHandler(watcher)

    handler.on_any_event(DummyEvent(str(watcher.output_dir / "index.html")))
    handler.on_any_event(DummyEvent(str(tmp_path / "content"), is_directory=True))
    assert not called

    handler.on_any_event(DummyEvent(str(tmp_path / "content" / "blog" / "a.md")))
    assert called == ["rebuild"]


def test_change_handler_root_files(tmp_path):
    watcher = SiteWatcher(tmp_path)
    called = []
    watcher.rebuild = lambda: called.append("rebuild")
    handler = _ChangeHandler(watcher)

    handler.on_any_event(DummyEvent(str(tmp_path / "notes.txt")))
    assert not called
    handler.on_any_event(DummyEvent(str(tmp_path / "folio.yaml")))
    assert called == ["rebuild"]


def test_rebuild_guard(monkeypatch, tmp_path):
    watcher = SiteWatcher(tmp_path)
    calls = []

    def fake_build(root):
        calls.append(root)
        return make_result(tmp_path)

    monkeypatch.setattr("folio.watcher.build_site", fake_build)
    watcher._debounce_seconds = 0.0

    sigs = [("a",), ("a",), ("b",)]

    def fake_sig():
        return sigs.pop(0) if sigs else ("b",)

    watcher._compute_signature = fake_sig
    assert watcher.rebuild() is not None
    watcher._rebuilding = True
    assert watcher.rebuild() is None  # skipped due to rebuilding flag
    watcher._rebuilding = False
    assert watcher.rebuild() is None  # skipped due to same signature
    assert watcher.rebuild() is not None  # signature changed -> rebuild
    assert calls == [tmp_path, tmp_path]


def test_rebuild_failure_keeps_watching(monkeypatch, tmp_path, capsys):
    watcher = SiteWatcher(tmp_path)
    watcher._debounce_seconds = 0.0
    watcher._compute_signature = lambda: ("sig",)

    def failing_build(root):
        raise DirectoryReadError(root / "content" / "ideas", "missing")

    monkeypatch.setattr("folio.watcher.build_site", failing_build)
    assert watcher.rebuild() is None
    assert "Build failed:" in capsys.readouterr().out
    assert watcher._rebuilding is False
    # the failed signature is not remembered, so the next change retries
    assert watcher._last_signature is None


def test_start_watcher_schedules_existing_dirs(monkeypatch, tmp_path):
    (tmp_path / "content").mkdir()
    (tmp_path / "templates").mkdir()
    scheduled = []

    class DummyObserver:
        def schedule(self, handler, path, recursive=False):
            scheduled.append((path, recursive))

        def start(self):
            scheduled.append("started")

        def stop(self):
            scheduled.append("stopped")

        def join(self):
            scheduled.append("joined")

    monkeypatch.setattr("folio.watcher.Observer", DummyObserver)
    watcher = SiteWatcher(tmp_path)
    watcher._start_watcher()
    watcher.stop()
    assert scheduled == [
        (str(tmp_path / "content"), True),
        (str(tmp_path / "templates"), True),
        (str(tmp_path), False),
        "started",
        "stopped",
        "joined",
    ]


def test_compute_signature_tracks_sources(tmp_path):
    watcher = SiteWatcher(tmp_path)
    (tmp_path / "content" / "blog").mkdir(parents=True)
    (tmp_path / "content" / "blog" / "a.md").write_text("hi", encoding="utf-8")
    (tmp_path / "folio.yaml").write_text("title: t", encoding="utf-8")
    broken = tmp_path / "content" / "missing.txt"
    broken.symlink_to(tmp_path / "nope.txt")

    sig = watcher._compute_signature()
    assert sig is not None
    names = [entry[0] for entry in sig]
    assert "folio.yaml" in names
    assert any(name.endswith("a.md") for name in names)
    assert not any("missing.txt" in name for name in names)


def test_compute_signature_empty(tmp_path):
    watcher = SiteWatcher(tmp_path)
    assert watcher._compute_signature() is None


def make_project(tmp_path):
    project = tmp_path / "site"
    shutil.copytree(_SKELETON_DIR, project)
    return project


def test_rebuild_reports_invalid_config(tmp_path, capsys):
    project = make_project(tmp_path)
    watcher = SiteWatcher(project)
    watcher._debounce_seconds = 0.0
    (project / "folio.yaml").write_text("title: [unclosed\n", encoding="utf-8")

    assert watcher.rebuild() is None
    assert "Build failed:" in capsys.readouterr().out
    assert watcher._rebuilding is False


def test_rebuild_reports_undecodable_content(tmp_path, capsys):
    project = make_project(tmp_path)
    watcher = SiteWatcher(project)
    watcher._debounce_seconds = 0.0
    (project / "content" / "ideas" / "broken.md").write_bytes(b"\xff\xfe- [ ] **A** - b\n")

    assert watcher.rebuild() is None
    assert "Build failed:" in capsys.readouterr().out

    # fixing the file makes the next change build again
    (project / "content" / "ideas" / "broken.md").write_text(
        "- [ ] **A** - b\n", encoding="utf-8"
    )
    assert watcher.rebuild() is not None
