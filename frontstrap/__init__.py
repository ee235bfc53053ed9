"""frontstrap -- bootstrap a React + TypeScript front-end project.

Quick usage::

    import asyncio
    from frontstrap import Config, ScaffoldInput, ScaffoldOrchestrator

    orchestrator = ScaffoldOrchestrator(Config())
    summary = asyncio.run(
        orchestrator.run(ScaffoldInput(project_name="demo", tests_answer="yes"))
    )
"""

from frontstrap.config import Config
from frontstrap.errors import OrchestrationError
from frontstrap.models import ProjectContext, ScaffoldInput, ScaffoldSummary, Step
from frontstrap.orchestrator import ScaffoldOrchestrator, main

__all__ = [
    "Config",
    "OrchestrationError",
    "ProjectContext",
    "ScaffoldInput",
    "ScaffoldOrchestrator",
    "ScaffoldSummary",
    "Step",
    "main",
]

__version__ = "0.1.0"
