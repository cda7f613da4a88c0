"""
Project watcher — reload projects when their file changes on disk.

Mtime polling rather than OS file notifications: a handful of stat()
calls per poll, no extra dependency, identical behaviour everywhere.

Each change triggers exactly one ``reload()``. A file that disappears
produces one failed reload; the project keeps its last good state and
is reloaded again once the file comes back.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from ewproj.core.services.project_file import Project, ReloadResult

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 2.0

ReloadCallback = Callable[[Project, ReloadResult], None]

# (mtime_ns, size), or None while the file is missing
_Signature = tuple[int, int] | None


def _signature(path: Path) -> _Signature:
    try:
        st = path.stat()
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size)


class ProjectWatcher:
    """Polls watched projects and reloads the ones that changed.

    Usage::

        watcher = ProjectWatcher(on_reload=refresh_ui)
        for project in create_projects_from(workspace):
            watcher.watch(project)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(
        self,
        interval: float = DEFAULT_INTERVAL_S,
        on_reload: ReloadCallback | None = None,
    ):
        self.interval = interval
        self.on_reload = on_reload
        self._lock = threading.Lock()
        self._watched: dict[Path, tuple[Project, _Signature]] = {}
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def projects(self) -> list[Project]:
        with self._lock:
            return [project for project, _ in self._watched.values()]

    def watch(self, project: Project) -> None:
        """Start tracking a project from its file's current state."""
        with self._lock:
            self._watched[project.path] = (project, _signature(project.path))
        logger.debug("Watching %s", project.path)

    def unwatch(self, project: Project) -> None:
        with self._lock:
            self._watched.pop(project.path, None)

    def poll_once(self) -> list[ReloadResult]:
        """Check every watched file once and reload the changed ones."""
        with self._lock:
            snapshot = list(self._watched.items())

        results: list[ReloadResult] = []
        for path, (project, previous) in snapshot:
            current = _signature(path)
            if current == previous:
                continue

            logger.debug("Change detected in %s", path)
            result = project.reload()
            results.append(result)

            with self._lock:
                # Skip the update if the project was unwatched meanwhile
                if path in self._watched:
                    self._watched[path] = (project, current)

            if self.on_reload is not None:
                try:
                    self.on_reload(project, result)
                except Exception as e:
                    logger.error("on_reload callback failed for %s: %s", path, e)

        return results

    def start(self) -> threading.Thread:
        """Poll in a daemon thread until ``stop()`` is called."""
        if self._thread is not None and self._thread.is_alive():
            return self._thread

        self._stop.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="ewproj-watcher",
        )
        self._thread.start()
        logger.info("Project watcher started (poll every %.1fs)", self.interval)
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Project watcher stopped")

    def _poll_loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.poll_once()
            except Exception as e:
                logger.error("Watcher poll failed: %s", e)
