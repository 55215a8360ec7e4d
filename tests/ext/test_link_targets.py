import unittest
from hamcrest import *

import lxml.html
import markdown

from textwrap import dedent


class LinkTargetsTestCase(unittest.TestCase):

    def run_markdown(self, markdown_text, other_extensions = [], **kwargs):
        md = markdown.Markdown(
            extensions = ['mdreveal.ext.link_targets', *other_extensions],
            extension_configs = {'mdreveal.ext.link_targets': kwargs}
        )
        return md.convert(dedent(markdown_text).strip())


    def links(self, html):
        return lxml.html.fragment_fromstring(html, create_parent = 'div').findall('.//a')


    def test_links(self):
        html = self.run_markdown(
            r'''
            A [link](https://example.com/) and <https://example.org/>, and a
            [reference][1].

            [1]: /relative/page "Title"
            ''')

        links = self.links(html)
        assert_that(links, has_length(3))
        for link in links:
            assert_that(link.get('target'), is_('_blank'))
            assert_that(link.get('rel'), is_('noopener noreferrer'))


    def test_existing_rel(self):
        html = self.run_markdown(
            r'''
            [link](https://example.com/){rel="author noopener"}
            ''',
            other_extensions = ['attr_list'])

        [link] = self.links(html)
        assert_that(link.get('rel').split(), contains_exactly('author', 'noopener', 'noreferrer'))


    def test_alt_target(self):
        html = self.run_markdown('[link](https://example.com/)', target = 'elsewhere')
        [link] = self.links(html)
        assert_that(link.get('target'), is_('elsewhere'))


    def test_no_href(self):
        html = self.run_markdown('<a name="anchor"></a>Text')
        assert_that(html, is_not(contains_string('target=')))
