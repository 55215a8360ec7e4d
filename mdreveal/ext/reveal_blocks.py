'''
# Reveal Blocks Extension

Lets authors mark parts of a document as hidden-by-default "reveal blocks", using fences:

    :::spoiler
    The butler did it.
    :::

    :::private
    Only the *author* should see this without asking.
    :::

Each block is replaced, before any other block parsing, by an HTML fragment:

    <div class="reveal-block reveal-block--spoiler" data-kind="spoiler" data-block-id="spoiler-1"
         data-revealed="false" data-armed="false" data-armed-until="0">
        <div class="reveal-content">...rendered markdown...</div>
        <div class="reveal-warning"></div>
    </div>

The block content is itself rendered as markdown (via the Renderer), so lists, emphasis, code,
etc. work inside it. The data-* attributes are the initial state for the reveal controller
(mdreveal.lib.reveal), which later drives the click-twice-to-reveal protocol.

If the 'shared' option is True, blocks of the 'suppressible' kinds (by default just 'private')
are removed from the output altogether.

Fences that are opened but never closed are left alone, and will appear as literal text.
'''

from mdreveal.lib.progress import Progress
from mdreveal.lib.renderer import Renderer
import markdown

import html
import itertools
import re


NAME = 'mdreveal.reveal_blocks' # For progress/error messages

BLOCK_CLASS = 'reveal-block'
CONTENT_CLASS = 'reveal-content'
WARNING_CLASS = 'reveal-warning'

DEFAULT_KINDS = ['private', 'spoiler']
DEFAULT_SUPPRESSIBLE = ['private']

_PLACEHOLDER_REGEX = re.compile(re.escape(markdown.util.HTML_PLACEHOLDER).replace('%s', '([0-9]+)'))


def fence_regex(kind: str):
    return re.compile(
        rf'''
        ^:::{re.escape(kind)}[ \t]*\n   # Opening fence, on its own line
        (?:(?P<content>.*?)\n)??        # Content (possibly none at all)
        :::[ \t]*$                      # Closing fence, on its own line
        ''',
        re.MULTILINE | re.DOTALL | re.VERBOSE)


def open_fence_regex(kind: str):
    return re.compile(rf'^:::{re.escape(kind)}[ \t]*$', re.MULTILINE)


def block_html(kind: str, block_id: str, content_html: str) -> str:
    kind = html.escape(kind)
    return (
        f'<div class="{BLOCK_CLASS} {BLOCK_CLASS}--{kind}" data-kind="{kind}" '
        f'data-block-id="{html.escape(block_id)}" '
        'data-revealed="false" data-armed="false" data-armed-until="0">'
        f'<div class="{CONTENT_CLASS}">{content_html}</div>'
        f'<div class="{WARNING_CLASS}"></div>'
        '</div>'
    )


def extract_blocks(text, kind, render, *, suppress = False, stash = None, ids = None):
    '''
    Replaces every ':::kind ... :::' block in 'text' with a reveal-block HTML fragment, or with
    nothing if 'suppress' is True. 'render' converts the block's (stripped) markdown content to
    HTML. If given, 'stash' receives each fragment and returns the text to substitute in its
    place. 'ids' supplies the block numbers.

    Returns the new text and the number of blocks found.
    '''
    ids = ids or itertools.count(1)
    count = 0

    def replace(match):
        nonlocal count
        count += 1
        if suppress:
            return ''

        content_html = render((match.group('content') or '').strip())
        fragment = block_html(kind, f'{kind}-{next(ids)}', content_html)
        return stash(fragment) if stash else fragment

    return fence_regex(kind).sub(replace, text), count



class RevealBlocksPreprocessor(markdown.preprocessors.Preprocessor):
    def __init__(self, md, kind, suppress, renderer, progress):
        super().__init__(md)
        self.kind = kind
        self.suppress = suppress
        self.renderer = renderer
        self.progress = progress

    def run(self, lines):
        text, _ = extract_blocks(
            '\n'.join(lines),
            self.kind,
            self._render,
            suppress = self.suppress,
            stash = self._stash)

        unterminated = len(open_fence_regex(self.kind).findall(text))
        if unterminated:
            self.progress.warning(
                NAME,
                msg = f'{unterminated} unterminated ":::{self.kind}" block(s); left as literal text')

        return text.split('\n')

    def _render(self, content):
        # A block of an earlier kind may already be sitting in this content as a placeholder. The
        # renderer has its own stash (and strips placeholder delimiters), so put the fragment back
        # as raw HTML first.
        content = _PLACEHOLDER_REGEX.sub(
            lambda match: self.md.htmlStash.rawHtmlBlocks[int(match.group(1))],
            content)
        return self.renderer.convert(content)

    def _stash(self, fragment):
        # Blank lines either side make the placeholder a paragraph of its own, which the raw HTML
        # postprocessor then swaps for the (block-level) fragment.
        return f'\n\n{self.md.htmlStash.store(fragment)}\n\n'



class RevealBlocksExtension(markdown.Extension):
    def __init__(self, **kwargs):
        self.config = {
            'kinds': [
                list(DEFAULT_KINDS),
                'Block kinds to recognise, in the order they are extracted.'
            ],
            'suppressible': [
                list(DEFAULT_SUPPRESSIBLE),
                'Block kinds that are removed entirely when "shared" is True.'
            ],
            'shared': [
                False,
                'Whether the document is being rendered for an audience other than its owner.'
            ],
            'renderer': [
                Renderer.current(),
                'Object with a convert(text) method, used to render block content.'
            ],
            'progress': [
                Progress(),
                'An object accepting progress messages.'
            ],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        renderer = self.getConfig('renderer')
        progress = self.getConfig('progress')
        shared = bool(self.getConfig('shared'))
        suppressible = set(self.getConfig('suppressible'))
        kinds = list(self.getConfig('kinds'))

        # Priorities must fall between normalize_whitespace (30) and fenced_code_block (25), so
        # that we see the raw text before anything else parses it.
        for i, kind in enumerate(kinds):
            proc = RevealBlocksPreprocessor(
                md,
                kind = kind,
                suppress = shared and kind in suppressible,
                renderer = renderer,
                progress = progress)
            md.preprocessors.register(proc, f'mdreveal.reveal_blocks.{kind}', 29 - i * 0.1)



def makeExtension(**kwargs):
    return RevealBlocksExtension(**kwargs)
