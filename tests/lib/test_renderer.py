from ..util.mock_progress import MockProgress
from mdreveal.ext.link_targets import LinkTargetsTreeProcessor
from mdreveal.lib.renderer import Renderer

import unittest
from hamcrest import *

from textwrap import dedent


class RendererTestCase(unittest.TestCase):

    def setUp(self):
        self.progress = MockProgress()
        self.renderer = Renderer(progress = self.progress)


    def test_configure_once(self):
        assert_that(self.renderer.is_configured, is_(False))
        md1 = self.renderer.configure()
        md2 = self.renderer.configure()
        self.renderer.convert('text')

        assert_that(md2, same_instance(md1))
        assert_that(self.renderer.configure(), same_instance(md1))
        assert_that(self.progress.progress_messages, has_length(1))

        link_procs = [proc for proc in md1.treeprocessors
                      if isinstance(proc, LinkTargetsTreeProcessor)]
        assert_that(link_procs, has_length(1))

        html = self.renderer.convert('[link](https://example.com/)')
        assert_that(html.count('target='), is_(1))
        assert_that(html.count('noopener'), is_(1))


    def test_current(self):
        current = Renderer.current()
        assert_that(Renderer.current(), same_instance(current))

        try:
            self.renderer.set_current()
            assert_that(Renderer.current(), same_instance(self.renderer))
        finally:
            current.set_current()


    def test_soft_line_breaks(self):
        html = self.renderer.convert('Line one\nLine two')
        self.assertRegex(html, r'<p>Line one<br\s*/?>\s*Line two</p>')


    def test_gfm(self):
        html = self.renderer.convert(dedent(
            r'''
            ~~gone~~

            | A | B |
            |---|---|
            | 1 | 2 |

            ```python
            x = 1
            ```

            - [x] done
            - [ ] not done

            See https://example.com/ for more.
            ''').strip())

        assert_that(html, contains_string('<del>gone</del>'))
        assert_that(html, contains_string('<table>'))
        assert_that(html, contains_string('<td>1</td>'))
        self.assertRegex(html, r'<pre><code class="language-python">x = 1\s*</code></pre>')
        assert_that(html, contains_string('task-list-item'))
        self.assertRegex(html, r'<a [^>]*href="https://example\.com/"')
        assert_that(html, contains_string('target="_blank"'))


    def test_independent_conversions(self):
        # Reference definitions, etc., mustn't leak from one conversion to the next.
        self.renderer.convert('[a][ref]\n\n[ref]: https://example.com/')
        html = self.renderer.convert('[a][ref]')
        assert_that(html, is_not(contains_string('<a ')))
