'''
A Container is the region of a page into which rendered HTML is inserted. It holds an lxml
element tree, a list of click listeners, and dispatches click events to those listeners.

Listeners are registered on the container only, not on individual elements. A click on any
element inside the container reaches every listener, which can then work out (from the event's
target and its ancestors) what was clicked.
'''

from dataclasses import dataclass
from io import StringIO
from typing import Any, Callable, List

import lxml.etree
import lxml.html
from lxml.cssselect import CSSSelector


_parser = lxml.html.HTMLParser(default_doctype = False,
                               remove_comments = True)


@dataclass
class ClickEvent:
    target: Any
    container: 'Container'


Listener = Callable[[ClickEvent], None]


def parse_fragments(html: str) -> List[lxml.html.HtmlElement]:
    if not html or not html.strip():
        return []

    body = lxml.html.parse(StringIO(f'<html><body>{html}</body></html>'), _parser).find('body')
    elements = list(body)
    if body.text and body.text.strip():
        # Keep any leading text, as a paragraph, rather than silently dropping it.
        para = lxml.html.Element('p')
        para.text = body.text
        elements.insert(0, para)
    return elements


class Container:
    def __init__(self, root = None):
        self.root = root if root is not None else lxml.html.Element('div')
        self._listeners: List[Listener] = []


    @classmethod
    def from_html(cls, html: str, tag: str = 'div') -> 'Container':
        container = cls(lxml.html.Element(tag))
        container.insert_html(html)
        return container


    def insert_html(self, html: str):
        self.root.extend(parse_fragments(html))


    @property
    def listeners(self) -> List[Listener]:
        return list(self._listeners)


    def add_listener(self, listener: Listener):
        if listener not in self._listeners:
            self._listeners.append(listener)


    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)


    def contains(self, element) -> bool:
        if not lxml.etree.iselement(element):
            return False
        return any(ancestor is self.root for ancestor in element.iterancestors())


    def click(self, target) -> ClickEvent:
        event = ClickEvent(target = target, container = self)
        for listener in list(self._listeners):
            listener(event)
        return event


    def select(self, selector: str) -> List[lxml.html.HtmlElement]:
        return CSSSelector(selector)(self.root)


    def remove(self, element):
        parent = element.getparent()
        if parent is not None:
            # Preserve the tail text, which belongs to the surrounding content.
            if element.tail:
                previous = element.getprevious()
                if previous is not None:
                    previous.tail = (previous.tail or '') + element.tail
                else:
                    parent.text = (parent.text or '') + element.tail
            parent.remove(element)


    def to_html(self) -> str:
        return ''.join(
            lxml.etree.tostring(elem, encoding = 'unicode', method = 'html')
            for elem in self.root)
