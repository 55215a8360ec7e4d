'''
Logging/error handling infrastructure.
'''

from dataclasses import dataclass
import shutil
import traceback
from typing import List


RESET = '\033[0m'


def wrap(text, width):
    start_of_line = True

    if text == '':
        yield (True, '')
    while text:
        newline_index = text.find('\n')
        if newline_index != -1 and newline_index <= width:
            yield (start_of_line, text[:newline_index])
            text = text[newline_index + 1:]
            start_of_line = True
        else:
            yield (start_of_line, text[:width])
            text = text[width:]
            start_of_line = False


@dataclass
class Details:
    title: str
    content: str


class Message:
    def __init__(self, location: str, msg: str, details_list: List[Details] = []):
        self._location = location
        self._msg = msg
        self._details_list = details_list

    @property
    def location(self):
        return self._location

    @property
    def msg(self):
        return self._msg

    @property
    def details_list(self):
        return list(self._details_list)

    def print(self):
        print(f'{self.LOCATION_COLOUR}{self.TAG}{self._location}:{RESET} {self.MSG_COLOUR}{self._msg}{RESET}')

        terminal_width = shutil.get_terminal_size(fallback = (80, 40)).columns
        inner_width = terminal_width - 6

        first = True
        for details in self._details_list:
            if first:
                print(f'  ┌─{"─" * inner_width}─┐')
                first = False
            else:
                print(f'  ├─{"─" * inner_width}─┤')

            for _, line in wrap(details.content.rstrip(), inner_width):
                print(f'  │ {line}{" " * (inner_width - len(line))} │')

        if not first:
            print(f'  └─{"─" * inner_width}─┘')

    def __str__(self):
        return f'{self.TAG}{self._location}: {self._msg}'


class ProgressMsg(Message):
    LOCATION_COLOUR = '\033[32m'
    MSG_COLOUR = ''
    TAG = ''

class WarningMsg(Message):
    LOCATION_COLOUR = '\033[33;1m'
    MSG_COLOUR = '\033[37;1m'
    TAG = '[!] '

class ErrorMsg(Message):
    LOCATION_COLOUR = '\033[31;1m'
    MSG_COLOUR = '\033[37;1m'
    TAG = '[!!] '



class Progress:
    '''
    Receives progress, warning and error messages from the extensions, the reveal controller and
    the command-line tool. Messages are printed to the console (unless 'quiet' is set), and
    warnings and errors are also retained for later inspection.
    '''

    def __init__(self, quiet = False):
        self._quiet = quiet
        self._warnings = []
        self._errors = []


    def show(self, msg: Message):
        if not self._quiet:
            msg.print()
        if isinstance(msg, ErrorMsg):
            self._errors.append(msg)
        elif isinstance(msg, WarningMsg):
            self._warnings.append(msg)
        return msg


    def progress(self, location, *, msg, advice = None):
        details_list = []
        if advice:
            details_list.append(Details('Advice', advice))
        return self.show(ProgressMsg(location, msg, details_list))


    def warning(self, location, *, msg):
        return self.show(WarningMsg(location, msg))


    def error(self, location, *, msg = None, exception = None, show_traceback = True):
        details_list = []
        if exception:
            msg = f'{msg}: {str(exception)} ({exception.__class__.__name__})' if msg else str(exception)
            if show_traceback:
                details_list.append(Details('Traceback', ''.join(traceback.format_exc())))

        elif not msg:
            msg = 'error'

        return self.show(ErrorMsg(location, msg, details_list))


    def get_warnings(self):
        return list(self._warnings)


    def get_errors(self):
        return list(self._errors)


    def clear_errors(self):
        self._errors.clear()
