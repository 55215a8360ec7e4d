from . import progress as prog, watch
from .pipeline import Pipeline
from .renderer import Renderer

import lxml.html

import argparse
import html
import os
import os.path
import sys


VERSION = '0.1.0'

NAME = 'mdreveal'  # For errors/warnings

STYLESHEET = r'''
    .reveal-block {
        border: 1px dashed #999;
        border-radius: 0.5ex;
        padding: 0.5em 1em;
        margin: 1em 0;
        cursor: pointer;
    }
    .reveal-block--private {
        border-color: #c44;
    }
    .reveal-block[data-revealed="false"] > .reveal-content {
        display: none;
    }
    .reveal-block[data-revealed="true"] {
        cursor: auto;
    }
    .reveal-block[data-armed="true"] > .reveal-warning {
        font-weight: bold;
    }
    .reveal-block[data-revealed="true"] > .reveal-warning {
        display: none;
    }
'''

PAGE_TEMPLATE = '''<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8" />
<title>{title}</title>
<style>{style}</style>
</head>
<body>
{content}
</body>
</html>
'''


def find_title(content_html: str, default: str) -> str:
    if content_html.strip():
        root = lxml.html.fragment_fromstring(content_html, create_parent = 'div')
        for n in range(1, 7):
            for heading in root.iter(f'h{n}'):
                text = heading.text_content().strip()
                if text:
                    return text
    return default


def standalone_page(content_html: str, default_title: str) -> str:
    return PAGE_TEMPLATE.format(
        title = html.escape(find_title(content_html, default_title)),
        style = STYLESHEET,
        content = content_html)


def render_file(src_file: str,
                target_file: str,
                pipeline: Pipeline,
                progress: prog.Progress,
                *,
                is_shared: bool = False,
                standalone: bool = False) -> bool:
    try:
        with open(src_file, encoding = 'utf-8') as reader:
            source = reader.read()
    except OSError as e:
        progress.error(NAME, msg = f'cannot read "{src_file}"', exception = e, show_traceback = False)
        return False

    content_html = pipeline.render(source, is_shared)
    if standalone:
        base_name = os.path.splitext(os.path.basename(src_file))[0]
        content_html = standalone_page(content_html, base_name)

    try:
        with open(target_file, 'w', encoding = 'utf-8') as writer:
            writer.write(content_html)
    except OSError as e:
        progress.error(NAME, msg = f'cannot write "{target_file}"', exception = e, show_traceback = False)
        return False

    progress.progress(NAME, msg = f'wrote {os.path.basename(target_file)}')
    return True


def main():
    parser = argparse.ArgumentParser(
        prog        = 'mdreveal',
        description = ('Render a markdown (.md) file to HTML, converting ":::spoiler" and '
                       '":::private" blocks into hidden, click-twice-to-reveal sections.'),
        formatter_class = argparse.RawDescriptionHelpFormatter)

    parser.add_argument(
        '-v', '--version', action = 'version',
        version = f'mdreveal {VERSION}')

    parser.add_argument(
        'input', metavar = 'INPUT.md', type = str,
        help = 'Input markdown (.md) file')

    parser.add_argument(
        '-o', '--output', metavar = 'OUTPUT.html', type = str,
        help = 'Output HTML file. (By default, this is based on the input filename.)')

    parser.add_argument(
        '-s', '--shared', action = 'store_true',
        help = ('Render for an audience other than the author. ":::private" blocks are left out '
                'of the output completely.'))

    parser.add_argument(
        '--standalone', action = 'store_true',
        help = 'Output a complete HTML page (with a stylesheet), rather than an HTML fragment.')

    parser.add_argument(
        '-w', '--watch', action = 'store_true',
        help = 'Keep running, and re-render automatically when the input file changes.')

    args = parser.parse_args()

    progress = prog.Progress()
    src_file = os.path.abspath(args.input)
    base_name = os.path.splitext(src_file)[0]

    if args.output:
        out = os.path.abspath(args.output)
        if os.path.isdir(out):
            target_file = os.path.join(out, os.path.basename(base_name)) + '.html'
        else:
            target_file = out
    else:
        target_file = base_name + '.html'

    go = True

    if not os.path.exists(src_file):
        go = False
        progress.error(NAME, msg = f'"{args.input}" not found')

    elif not os.path.isfile(src_file):
        go = False
        progress.error(NAME, msg = f'"{args.input}" is not a file')

    elif not os.access(src_file, os.R_OK):
        go = False
        progress.error(NAME, msg = f'"{args.input}" is not readable')

    if target_file == src_file:
        go = False
        progress.error(NAME, msg = 'the output file would overwrite the input file')

    elif os.path.exists(target_file):
        if not os.access(target_file, os.W_OK):
            go = False
            progress.error(NAME, msg = f'cannot write output: "{target_file}" is not writable')
    else:
        directory = os.path.dirname(target_file)
        if not os.access(directory, os.W_OK):
            go = False
            progress.error(NAME, msg = f'cannot write output: "{directory}" is not writable')

    if not go:
        sys.exit(1)

    pipeline = Pipeline(renderer = Renderer.current(), progress = progress)

    def rebuild():
        return render_file(src_file, target_file, pipeline, progress,
                           is_shared = args.shared, standalone = args.standalone)

    ok = rebuild()

    if args.watch:
        watch.SourceWatcher(src_file, rebuild, progress).run()

    elif not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
