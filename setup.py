import os
from setuptools import setup

def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()

setup(
    name = 'mdreveal',
    version = '0.1.0',
    description = 'Python Markdown extensions and a click-twice reveal controller for spoiler and private blocks.',
    long_description = read('README.md'),
    long_description_content_type = 'text/markdown',
    license = 'MIT',
    keywords = 'markdown spoiler',
    python_requires = '>=3.8',
    install_requires=[
        'markdown', 'lxml', 'cssselect', 'pymdown-extensions', 'watchdog'
    ],
    extras_require = {
        'test': ['pytest', 'PyHamcrest'],
    },
    packages = [
        'mdreveal', 'mdreveal.lib', 'mdreveal.ext'
    ],
    entry_points = {
        'console_scripts': ['mdreveal=mdreveal.lib.cli:main'],
        'markdown.extensions': [
            'mdreveal.reveal_blocks = mdreveal.ext.reveal_blocks:RevealBlocksExtension',
            'mdreveal.link_targets = mdreveal.ext.link_targets:LinkTargetsExtension',
        ]
    },
    classifiers = [
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Text Processing :: Markup :: Markdown',
    ]
)
