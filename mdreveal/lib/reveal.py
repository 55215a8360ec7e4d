'''
The reveal controller: turns clicks on a container into reveal decisions for the reveal blocks
inside it, using a click-twice-to-confirm protocol.

Each block moves through:

    HIDDEN --(click)--> ARMED --(click before the window expires)--> REVEALED
                          |
                          +--(window expires)--> HIDDEN

A click on an ARMED block at or after its expiry time re-arms it rather than revealing it (even
if the auto-disarm callback hasn't run yet). REVEALED is final.

Per-block state lives in BlockState records, owned by the controller and keyed by the block's
'data-block-id'. After every transition, the record is mirrored onto the element's data-revealed,
data-armed and data-armed-until attributes, for styling.
'''

from .container import ClickEvent, Container
from .options import RevealOptions, make_options
from .progress import Progress
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from mdreveal.ext.reveal_blocks import BLOCK_CLASS, WARNING_CLASS

import lxml.etree

from dataclasses import dataclass, field
import enum
import itertools
from typing import Any, Dict, Optional


NAME = 'mdreveal.reveal' # For progress/error messages

ID_ATTR = 'data-block-id'
KIND_ATTR = 'data-kind'
REVEALED_ATTR = 'data-revealed'
ARMED_ATTR = 'data-armed'
ARMED_UNTIL_ATTR = 'data-armed-until'


class Status(enum.Enum):
    HIDDEN = 'hidden'
    ARMED = 'armed'
    REVEALED = 'revealed'


@dataclass
class BlockState:
    block_id: str
    kind: str
    element: Any = field(repr = False)
    revealed: bool = False
    armed: bool = False
    armed_until: float = 0
    timer: Optional[TimerHandle] = field(default = None, repr = False)

    @property
    def status(self) -> Status:
        if self.revealed:
            return Status.REVEALED
        return Status.ARMED if self.armed else Status.HIDDEN


def has_class(element, css_class: str) -> bool:
    return css_class in (element.get('class') or '').split()


def block_kind(element) -> str:
    kind = element.get(KIND_ATTR)
    if kind:
        return kind
    return 'private' if has_class(element, f'{BLOCK_CLASS}--private') else 'spoiler'


def format_ms(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class RevealController:
    def __init__(self,
                 container: Container,
                 options = None,
                 *,
                 scheduler: Optional[Scheduler] = None,
                 progress: Optional[Progress] = None):
        self.container = container
        self.progress = progress or Progress(quiet = True)
        self.options: RevealOptions = make_options(options, self.progress)
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler or AsyncioScheduler()
        self._states: Dict[str, BlockState] = {}
        self._ids = itertools.count(1)
        self._attached = False


    @property
    def attached(self) -> bool:
        return self._attached


    def attach(self) -> 'RevealController':
        if not self._attached:
            self.container.add_listener(self.handle_click)
            self._attached = True
            self._show_prompts()
        return self


    def update(self, options):
        self.options = make_options(options, self.progress)
        if self._attached:
            self._show_prompts()


    def destroy(self):
        self.container.remove_listener(self.handle_click)
        self._attached = False

        for state in self._states.values():
            self._disarm(state)
            self._sync(state)
        self._states.clear()

        if self._owns_scheduler:
            self.scheduler.close()


    def blocks(self):
        return self.container.select(f'.{BLOCK_CLASS}')


    def state(self, block) -> BlockState:
        '''Returns the state record for a block element, or a block ID.'''
        if isinstance(block, str):
            return self._states[block]
        return self._state_for(block)


    def handle_click(self, event: ClickEvent):
        if not self._attached:
            return

        element = self._find_block(getattr(event, 'target', None))
        if element is None:
            return

        state = self._state_for(element)
        if state.revealed:
            return

        now = self.scheduler.now()
        if state.armed and now < state.armed_until:
            # Confirming click.
            self._disarm(state)
            state.revealed = True
            self._set_warning(state, '')
            self._sync(state)
            self.progress.progress(NAME, msg = f'revealed {state.block_id}')
            return

        # Arming click (first click, or a click after the window has expired).
        self._disarm(state)
        window = self.options.reveal_window_ms
        state.armed = True
        state.armed_until = now + window
        handle = None

        def expire():
            self._expire(state.block_id, handle)

        handle = state.timer = self.scheduler.call_later(window, expire)
        self._set_warning(state, self.options.warning_for(state.kind))
        self._sync(state)


    def _expire(self, block_id, handle):
        state = self._states.get(block_id)
        if state is None or state.timer is not handle:
            return # Superseded, or already cleaned up.

        state.timer = None
        if not self.container.contains(state.element):
            # The block was removed from the page while armed.
            del self._states[block_id]
            return

        state.armed = False
        state.armed_until = 0
        self._set_warning(state, '')
        self._sync(state)


    def _disarm(self, state: BlockState):
        if state.timer is not None:
            state.timer.cancel()
        state.timer = None
        state.armed = False
        state.armed_until = 0


    def _find_block(self, target):
        if not lxml.etree.iselement(target) or not self.container.contains(target):
            return None

        for element in itertools.chain([target], target.iterancestors()):
            if element is self.container.root:
                return None
            if has_class(element, BLOCK_CLASS):
                return element
        return None


    def _state_for(self, element) -> BlockState:
        block_id = element.get(ID_ATTR)
        state = self._states.get(block_id) if block_id else None
        if state is not None and state.element is element:
            return state

        self._prune()
        state = self._states.get(block_id) if block_id else None
        if not block_id or state is not None:
            # No ID, or the same ID on two different elements (e.g., two documents rendered into
            # one container).
            block_id = f'{block_id or "block"}.{next(self._ids)}'
            element.set(ID_ATTR, block_id)

        state = BlockState(block_id = block_id,
                           kind = block_kind(element),
                           element = element,
                           revealed = element.get(REVEALED_ATTR) == 'true')
        self._states[block_id] = state
        return state


    def _prune(self):
        # Drop the records of blocks no longer in the container.
        for block_id, state in list(self._states.items()):
            if not self.container.contains(state.element):
                self._disarm(state)
                del self._states[block_id]


    def _show_prompts(self):
        self._prune()
        for element in self.blocks():
            state = self._state_for(element)
            if not state.revealed:
                self._set_warning(state, self.options.warning_for(state.kind))


    def _set_warning(self, state: BlockState, text: str):
        for child in state.element:
            if has_class(child, WARNING_CLASS):
                child.text = text or None


    def _sync(self, state: BlockState):
        state.element.set(REVEALED_ATTR, 'true' if state.revealed else 'false')
        state.element.set(ARMED_ATTR, 'true' if state.armed else 'false')
        state.element.set(ARMED_UNTIL_ATTR, format_ms(state.armed_until))



def attach(container, options = None, *, scheduler = None, progress = None) -> RevealController:
    '''
    Starts handling clicks on reveal blocks within 'container' (a Container, or an lxml element
    which will be wrapped in one). Returns the controller, which has update() and destroy().
    '''
    if not isinstance(container, Container):
        container = Container(container)
    return RevealController(container, options, scheduler = scheduler, progress = progress).attach()
