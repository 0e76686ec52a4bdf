"""Watch mode for Folio.

Rebuilds the whole site whenever a source file changes. There is no partial
rebuild: each change triggers a full build_site run into a fresh output
directory.

Key classes:
- SiteWatcher: Owns the watchdog observer and the rebuild gate.
- _ChangeHandler: File system event handler for triggering rebuilds.
"""

from __future__ import annotations

import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .build import BUILD_ERRORS, BuildResult, build_site
from .config import CONFIG_FILE, load_config


class SiteWatcher:
    """Rebuilds the site on source changes.

    Attributes:
        project_root: Root directory of the project.
        output_dir: Directory the site is built into (ignored by the watcher).
        _observer: File system observer for changes.
    """

    def __init__(self, project_root: Path):
        """Initialize the watcher.

        Args:
            project_root: Root directory of the project.
        """
        self.project_root = project_root
        config = load_config(project_root)
        self.output_dir = project_root / config.output_dir
        self.watch_dirs = [
            project_root / config.content_dir,
            project_root / config.templates_dir,
            project_root / config.public_dir,
        ]
        self._observer: Observer | None = None
        self._rebuilding = False
        self._last_rebuild_at = 0.0
        self._last_signature: tuple | None = None
        self._debounce_seconds = 0.05

    def start(self) -> None:  # pragma: no cover - integration path
        self._last_signature = self._compute_signature()
        self._start_watcher()
        print("Watching for changes...")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._observer:
            self._observer.stop()
            self._observer.join()

    def _start_watcher(self) -> None:
        handler = _ChangeHandler(self)
        observer = Observer()
        for watch_path in self.watch_dirs:
            if watch_path.exists():
                observer.schedule(handler, str(watch_path), recursive=True)
        # Root holds folio.yaml
        observer.schedule(handler, str(self.project_root), recursive=False)
        observer.start()
        self._observer = observer

    def rebuild(self) -> BuildResult | None:
        """Run a full build unless one is running or nothing changed.

        Build failures are reported and swallowed so watching continues.

        Returns:
            The BuildResult, or None when the rebuild was skipped or failed.
        """
        now = time.time()
        if self._rebuilding or (now - self._last_rebuild_at) < self._debounce_seconds:
            return None
        signature = self._compute_signature()
        if signature is not None and signature == self._last_signature:
            return None
        self._rebuilding = True
        try:
            print("Change detected; rebuilding...")
            result = build_site(self.project_root)
            self._last_signature = signature
            print(f"Built {len(result.pages)} pages into {result.output_dir}")
            return result
        except BUILD_ERRORS as exc:
            print(f"Build failed: {exc}")
            return None
        finally:
            self._rebuilding = False
            self._last_rebuild_at = time.time()

    def _compute_signature(self) -> tuple | None:
        entries: list[tuple] = []
        candidates: list[Path] = [self.project_root / CONFIG_FILE]
        for root in self.watch_dirs:
            if root.exists():
                candidates.extend(sorted(root.rglob("*")))
        for path in candidates:
            if path.is_dir() or not path.exists():
                continue
            try:
                stat = path.stat()
            except OSError:
                continue
            rel = path.relative_to(self.project_root)
            entries.append((str(rel), stat.st_mtime_ns, stat.st_size))
        return tuple(entries) if entries else None


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: SiteWatcher):
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event):
        if event.is_directory:
            return
        path = Path(event.src_path)
        # Skip changes in the output directory
        try:
            path.relative_to(self.watcher.output_dir)
            return
        except ValueError:
            pass
        if path.parent == self.watcher.project_root and path.name != CONFIG_FILE:
            return
        self.watcher.rebuild()
