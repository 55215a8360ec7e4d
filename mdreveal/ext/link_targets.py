'''
# Link Targets Extension

Rewrites every hyperlink in the document so that it opens in a new browsing context, without
giving the new page a reference back to this one, and without sending a Referer header. That is,
each <a href="..."> element gains target="_blank" and rel="noopener noreferrer".

Existing 'rel' values are kept; the two policy tokens are added if they are missing.
'''

import markdown


REL_TOKENS = ['noopener', 'noreferrer']


class LinkTargetsTreeProcessor(markdown.treeprocessors.Treeprocessor):
    def __init__(self, md, target):
        super().__init__(md)
        self.target = target

    def run(self, root):
        for element in root.iter('a'):
            if element.get('href') is None:
                continue # Named anchors aren't links.

            element.set('target', self.target)
            rel = (element.get('rel') or '').split()
            rel.extend(token for token in REL_TOKENS if token not in rel)
            element.set('rel', ' '.join(rel))

        return None



class LinkTargetsExtension(markdown.Extension):
    def __init__(self, **kwargs):
        self.config = {
            'target': ['_blank', 'The browsing context in which links will open.'],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # Must run after 'inline' (priority 20), which creates the <a> elements, and 'attr_list' (8),
        # which may assign 'rel' attributes of its own.
        md.treeprocessors.register(
            LinkTargetsTreeProcessor(md, self.getConfig('target')), 'mdreveal.link_targets', 5)



def makeExtension(**kwargs):
    return LinkTargetsExtension(**kwargs)
