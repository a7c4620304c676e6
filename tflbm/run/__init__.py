from .run import Run, RunState
