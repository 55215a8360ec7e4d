'''
Implements the '--watch/-w' mode of the command-line tool: keep running, and re-render the output
whenever the source file changes.
'''

from .progress import Progress

import watchdog.events
import watchdog.observers

import os.path
import threading
import time
from typing import Callable


NAME = 'watching' # For progress/error messages

POLL_INTERVAL = 0.5 # seconds


class SourceWatcher(watchdog.events.FileSystemEventHandler):
    def __init__(self, src_file: str, rebuild: Callable[[], bool], progress: Progress):
        self._src_file = os.path.abspath(src_file)
        self._rebuild = rebuild
        self._progress = progress
        self._lock = threading.Lock()
        self._last_mtime = self._mtime()
        self._observer = None
        self._rebuild_n = 0


    @property
    def rebuild_n(self): return self._rebuild_n


    def _mtime(self):
        try:
            return os.path.getmtime(self._src_file)
        except OSError:
            return None


    def rebuild_if_changed(self):
        with self._lock:
            mtime = self._mtime()
            if mtime is None or mtime == self._last_mtime:
                return False
            self._last_mtime = mtime
            self._rebuild_n += 1
            self._progress.progress(NAME, msg = f'{os.path.basename(self._src_file)} changed')
            self._rebuild()
            return True


    def _is_source(self, path):
        return os.path.abspath(path) == self._src_file


    def on_closed(self, event):
        '''Fired when something else finishes writing to a file.'''
        if self._is_source(event.src_path):
            self.rebuild_if_changed()

    def on_modified(self, event):
        '''
        Not every platform reports 'closed' events, so we act on 'modified' too. The modification
        time check avoids building twice for one change.
        '''
        if self._is_source(event.src_path):
            self.rebuild_if_changed()

    def on_created(self, event):
        self.on_modified(event)

    def on_moved(self, event):
        # Editors often save by writing a temporary file and renaming it over the original.
        if self._is_source(getattr(event, 'dest_path', '')):
            self.rebuild_if_changed()


    def start(self):
        if self._observer is None:
            self._observer = watchdog.observers.Observer()
            self._observer.schedule(self, os.path.dirname(self._src_file))
            self._observer.start()


    def stop(self):
        observer = self._observer
        self._observer = None
        if observer is not None:
            observer.stop()
            observer.join()


    def run(self):
        self.start()
        self._progress.progress(
            NAME,
            msg = f'monitoring {os.path.basename(self._src_file)} for changes',
            advice = 'Press Ctrl-C to quit.')
        try:
            while True:
                time.sleep(POLL_INTERVAL)
        except KeyboardInterrupt: # Ctrl-C
            pass
        finally:
            self.stop()
