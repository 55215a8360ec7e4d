from ..util.mock_progress import MockProgress
from ..util.hamcrest_elements import is_block
from mdreveal.lib.pipeline import Pipeline, render_markdown
from mdreveal.lib.renderer import Renderer
import mdreveal

import unittest
from hamcrest import *

import lxml.html
from textwrap import dedent


class PipelineTestCase(unittest.TestCase):

    def setUp(self):
        self.progress = MockProgress()
        self.pipeline = Pipeline(renderer = Renderer(progress = self.progress),
                                 progress = self.progress)


    def render(self, markdown_text, is_shared = False):
        return self.pipeline.render(dedent(markdown_text).strip(), is_shared)


    def blocks(self, html):
        root = lxml.html.fragment_fromstring(html, create_parent = 'div')
        return root.find_class('reveal-block')


    def test_example(self):
        html = self.pipeline.render(':::spoiler\nSecret **text**\n:::')

        [block] = self.blocks(html)
        assert_that(block, is_block('spoiler', **{'data-armed-until': '0'}))
        assert_that(html, contains_string(
            '<div class="reveal-content"><p>Secret <strong>text</strong></p></div>'))
        assert_that(html, contains_string('<div class="reveal-warning"></div>'))


    def test_missing_input(self):
        assert_that(self.pipeline.render(None), is_(''))
        assert_that(self.pipeline.render(None, True), is_(''))
        assert_that(self.pipeline.render(''), is_(''))


    def test_private(self):
        source = r'''
            Public text

            :::private
            My *secret* plans
            :::

            :::spoiler
            Chapter 3 twist
            :::
            '''

        html = self.render(source)
        assert_that(self.blocks(html), contains_exactly(is_block('private'), is_block('spoiler')))
        assert_that(html, contains_string('<em>secret</em>'))

        html = self.render(source, is_shared = True)
        assert_that(self.blocks(html), contains_exactly(is_block('spoiler')))
        assert_that(html, is_not(contains_string('secret')))
        assert_that(html, is_not(contains_string('reveal-block--private')))
        assert_that(html, contains_string('<p>Public text</p>'))


    def test_private_removed_completely(self):
        assert_that(self.render(':::private\nAll of it\n:::', is_shared = True), is_(''))


    def test_shared_and_unshared_alternate(self):
        source = ':::private\nSecret\n:::'
        for _ in range(2):
            assert_that(self.blocks(self.render(source)), has_length(1))
            assert_that(self.render(source, is_shared = True), is_(''))


    def test_block_ids_per_document(self):
        source = ':::spoiler\nA\n:::\n\n:::spoiler\nB\n:::\n\n:::private\nC\n:::'
        for _ in range(2):
            ids = [block.get('data-block-id') for block in self.blocks(self.render(source))]
            assert_that(ids, contains_exactly('spoiler-1', 'spoiler-2', 'private-1'))


    def test_surrounding_markdown(self):
        html = self.render(
            r'''
            # Title

            First line
            second line

            :::spoiler
            [A link](https://example.com/)
            :::

            [Another](https://example.org/)
            ''')

        assert_that(html, contains_string('<h1>Title</h1>'))
        self.assertRegex(html, r'<p>First line<br\s*/?>\s*second line</p>')

        root = lxml.html.fragment_fromstring(html, create_parent = 'div')
        links = root.findall('.//a')
        assert_that(links, has_length(2))
        for link in links:
            assert_that(link.get('target'), is_('_blank'))
            assert_that(link.get('rel'), is_('noopener noreferrer'))


    def test_unterminated_left_visible(self):
        self.progress = MockProgress(expect_warning = True)
        pipeline = Pipeline(renderer = Renderer(progress = self.progress), progress = self.progress)

        html = pipeline.render(':::spoiler\nVisible after all')
        assert_that(self.blocks(html), empty())
        assert_that(html, contains_string(':::spoiler'))
        assert_that(html, contains_string('Visible after all'))
        assert_that(self.progress.warning_messages, has_length(1))


    def test_default_entry_point(self):
        html = render_markdown(':::spoiler\nSecret\n:::')
        assert_that(self.blocks(html), contains_exactly(is_block('spoiler')))
        assert_that(mdreveal.render_markdown(':::private\nX\n:::', True), is_(''))
        assert_that(mdreveal.render_markdown(None), is_(''))
