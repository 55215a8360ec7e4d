'''
Options for the reveal controller.

Options may be given as a RevealOptions object, as a mapping (using either the Python spellings,
e.g. 'reveal_window_ms', or the camelCase spellings used by web front-ends, e.g. 'revealWindowMs'),
or not at all. Each field falls back to its default independently.
'''

from .progress import Progress

from dataclasses import dataclass
import math
from typing import Any, Mapping, Optional, Union


NAME = 'mdreveal.options' # For progress/error messages

DEFAULT_WARNING_TEXT = 'Click once more within 3 seconds to reveal this spoiler.'
DEFAULT_PRIVATE_WARNING_TEXT = 'Click once more within 3 seconds to reveal this private section.'
DEFAULT_REVEAL_WINDOW_MS = 3000

ALIASES = {
    'warningText':        'warning_text',
    'privateWarningText': 'private_warning_text',
    'revealWindowMs':     'reveal_window_ms',
}


@dataclass(frozen = True)
class RevealOptions:
    warning_text: str = DEFAULT_WARNING_TEXT
    private_warning_text: str = DEFAULT_PRIVATE_WARNING_TEXT
    reveal_window_ms: float = DEFAULT_REVEAL_WINDOW_MS

    def warning_for(self, kind: str) -> str:
        return self.private_warning_text if kind == 'private' else self.warning_text


def window_ms(value, progress: Optional[Progress] = None) -> float:
    '''Returns 'value' as a positive, finite number of milliseconds, or else the default.'''
    if value is None:
        return DEFAULT_REVEAL_WINDOW_MS

    ms = None
    if not isinstance(value, bool):
        try:
            ms = float(value)
        except (TypeError, ValueError):
            pass

    if ms is None or not math.isfinite(ms) or ms <= 0:
        if progress:
            progress.warning(
                NAME,
                msg = f'Invalid reveal window {value!r}; using {DEFAULT_REVEAL_WINDOW_MS} ms')
        return DEFAULT_REVEAL_WINDOW_MS

    return int(ms) if ms.is_integer() else ms


def make_options(options: Union[RevealOptions, Mapping[str, Any], None] = None,
                 progress: Optional[Progress] = None) -> RevealOptions:
    if isinstance(options, RevealOptions):
        options = {
            'warning_text':         options.warning_text,
            'private_warning_text': options.private_warning_text,
            'reveal_window_ms':     options.reveal_window_ms,
        }

    fields = {ALIASES.get(key, key): value for key, value in (options or {}).items()}

    warning_text = fields.get('warning_text')
    private_warning_text = fields.get('private_warning_text')

    return RevealOptions(
        warning_text = str(warning_text) if warning_text else DEFAULT_WARNING_TEXT,
        private_warning_text = (str(private_warning_text) if private_warning_text
                                else DEFAULT_PRIVATE_WARNING_TEXT),
        reveal_window_ms = window_ms(fields.get('reveal_window_ms'), progress))
