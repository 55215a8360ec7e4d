'''
# API entry point

Render markdown with render_markdown(); insert the result into a Container; then call attach()
to handle clicks on the reveal blocks inside it.
'''

from .lib.container import ClickEvent, Container
from .lib.options import RevealOptions
from .lib.pipeline import Pipeline, render_markdown
from .lib.progress import Progress
from .lib.renderer import Renderer
from .lib.reveal import BlockState, RevealController, Status, attach
from .lib.scheduler import AsyncioScheduler
