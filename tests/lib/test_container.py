from mdreveal.lib.container import ClickEvent, Container

import unittest
from hamcrest import *

import lxml.html


class ContainerTestCase(unittest.TestCase):

    def test_from_html(self):
        container = Container.from_html('<p>One</p><div class="x"><span>Two</span></div>')
        assert_that([e.tag for e in container.root], contains_exactly('p', 'div'))
        assert_that(container.to_html(), is_('<p>One</p><div class="x"><span>Two</span></div>'))


    def test_empty(self):
        for html in ['', '   ', None]:
            container = Container.from_html(html)
            assert_that(list(container.root), empty())
            assert_that(container.to_html(), is_(''))


    def test_insert_html(self):
        container = Container.from_html('<p>One</p>')
        container.insert_html('<p>Two</p>')
        assert_that([e.text for e in container.root], contains_exactly('One', 'Two'))


    def test_listeners(self):
        container = Container.from_html('<p><em>Text</em></p>')
        received = []

        def listener1(event): received.append((1, event))
        def listener2(event): received.append((2, event))

        container.add_listener(listener1)
        container.add_listener(listener2)
        container.add_listener(listener1)  # Not added twice
        assert_that(container.listeners, contains_exactly(listener1, listener2))

        target = container.root.find('.//em')
        event = container.click(target)
        assert_that(event, instance_of(ClickEvent))
        assert_that(event.target, same_instance(target))
        assert_that(event.container, same_instance(container))
        assert_that(received, contains_exactly((1, event), (2, event)))

        container.remove_listener(listener1)
        container.remove_listener(listener1)  # No error
        received.clear()
        container.click(target)
        assert_that([n for n, _ in received], contains_exactly(2))


    def test_contains(self):
        container = Container.from_html('<p><em>Text</em></p>')
        assert_that(container.contains(container.root.find('.//em')), is_(True))
        assert_that(container.contains(container.root), is_(False))
        assert_that(container.contains(lxml.html.Element('p')), is_(False))
        assert_that(container.contains('text'), is_(False))
        assert_that(container.contains(None), is_(False))


    def test_select(self):
        container = Container.from_html(
            '<div class="a b"></div><div class="a--c"></div><p><span class="a"></span></p>')
        assert_that([e.tag for e in container.select('.a')], contains_exactly('div', 'span'))


    def test_remove(self):
        container = Container.from_html('<p>One</p><div>Gone</div><p>Two</p>')
        div = container.root.find('div')
        container.remove(div)
        assert_that(container.contains(div), is_(False))
        assert_that(container.to_html(), is_('<p>One</p><p>Two</p>'))
