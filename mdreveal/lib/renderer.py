'''
The Renderer is the underlying markdown-to-HTML conversion capability: Python Markdown, set up
with soft line breaks, GitHub-flavoured syntax and the new-tab link policy.

There is one process-wide instance, Renderer.current(), whose Markdown object is configured the
first time it's needed. Calling configure() again has no further effect.
'''

from .progress import Progress
import markdown

from typing import ClassVar, Dict, List, Optional


NAME = 'renderer' # For progress/error messages

BASE_EXTENSIONS = [
    'nl2br',                        # Soft line breaks become <br>
    'tables',
    'fenced_code',
    'pymdownx.tilde',               # ~~strikethrough~~
    'pymdownx.tasklist',            # - [x] task items
    'pymdownx.magiclink',           # Bare URL autolinking
    'mdreveal.ext.link_targets',
]

BASE_EXTENSION_CONFIGS = {
    'pymdownx.tilde': {'subscript': False},
}


class Renderer:
    _current: ClassVar[Optional['Renderer']] = None

    def __init__(self,
                 extensions: Optional[List] = None,
                 extension_configs: Optional[Dict] = None,
                 progress: Optional[Progress] = None):
        self.extensions = list(BASE_EXTENSIONS if extensions is None else extensions)
        self.extension_configs = dict(BASE_EXTENSION_CONFIGS if extension_configs is None
                                      else extension_configs)
        self.progress = progress or Progress(quiet = True)
        self._md = None


    @classmethod
    def current(cls) -> 'Renderer':
        if cls._current is None:
            cls._current = cls()
        return cls._current


    def set_current(self):
        Renderer._current = self


    @property
    def is_configured(self) -> bool:
        return self._md is not None


    def build(self, *extra_extensions) -> markdown.Markdown:
        '''
        Creates a new Markdown instance with the base configuration, plus any extra extensions
        (e.g., reveal blocks).
        '''
        return markdown.Markdown(
            extensions = [*self.extensions, *extra_extensions],
            extension_configs = self.extension_configs)


    def configure(self) -> markdown.Markdown:
        if self._md is None:
            self.progress.progress(NAME, msg = 'configuring Python Markdown')
            self._md = self.build()
        return self._md


    def convert(self, text: str) -> str:
        md = self.configure()
        md.reset()
        return md.convert(text)
