'''
The markdown pipeline: extract 'private' blocks (or drop them, for shared documents), then
'spoiler' blocks, then convert everything else with Python Markdown.
'''

from .progress import Progress
from .renderer import Renderer
from mdreveal.ext.reveal_blocks import RevealBlocksExtension

import markdown

from typing import Dict, Optional


class Pipeline:
    def __init__(self,
                 renderer: Optional[Renderer] = None,
                 progress: Optional[Progress] = None):
        self.renderer = renderer or Renderer.current()
        self.progress = progress or self.renderer.progress
        self._instances: Dict[bool, markdown.Markdown] = {}


    def markdown_instance(self, is_shared: bool) -> markdown.Markdown:
        md = self._instances.get(is_shared)
        if md is None:
            md = self.renderer.build(
                RevealBlocksExtension(
                    shared = is_shared,
                    renderer = self.renderer,
                    progress = self.progress))
            self._instances[is_shared] = md
        return md


    def render(self, text, is_shared: bool = False) -> str:
        source = '' if text is None else str(text)
        md = self.markdown_instance(bool(is_shared))
        md.reset()
        return md.convert(source)



_default_pipeline: Optional[Pipeline] = None

def render_markdown(text, is_shared: bool = False) -> str:
    '''
    Renders markdown 'text' (which may be None) to HTML, with spoiler and private blocks
    converted to hidden reveal blocks. If 'is_shared' is True, private blocks are omitted.
    '''
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = Pipeline()
    return _default_pipeline.render(text, is_shared)
