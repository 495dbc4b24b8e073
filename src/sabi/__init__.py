""" sabi: script compiler and statement engine for interactive stories

A script is compiled into an Act: a set of named scenes, each an ordered list
of statements. Statements are lines of dialogue or narration, stage commands
(backgrounds, actors, gui, audio, scene and act changes) and log statements.

The Interpreter walks the active scene one statement per tick and turns each
statement into a command for the collaborators (UI, audio, actor and
background controllers) subscribed on the CommandBus. It never renders
anything itself.

Pacing is external. A line of dialogue blocks the script until a collaborator
releases it, as do animated actor changes. Rewind steps back to the previous
line of dialogue using the run's history.

Scripts are addressed by ScriptId(chapter, act) and loaded from
<root>/<chapter>/<act>.sabi into a ScriptLibrary.
"""

from .errors import SabiError, ParseError, BuildError, DuplicateSceneError, EmptyActError, EvaluationError, DispatchError, NotFoundError, ScriptStateError
from .commands import SabiState
from .loader import ScriptId, ScriptLibrary
from .collaborator import Collaborator, CommandBus
from .interpreter import Interpreter
