"""frontstrap scaffolder -- the collaborators the orchestrator drives.

Key classes:
    PrerequisiteChecker          - PATH lookup for required executables
    ConfigTemplateEmitter        - Atomic writer for rendered artifacts
    ScriptPatcher                - Non-destructive merge into package.json scripts
    ConditionalFeatureInstaller  - Optional feature bundles (Jest tests)
    TemplateRenderer             - Jinja2 rendering of the bundled templates
"""

from .emitter import ConfigTemplateEmitter
from .features import ConditionalFeatureInstaller, build_tests_feature
from .manifest import ScriptPatcher
from .prerequisites import PrerequisiteChecker
from .templates import TemplateRenderer

__all__ = [
    "ConfigTemplateEmitter",
    "ConditionalFeatureInstaller",
    "build_tests_feature",
    "ScriptPatcher",
    "PrerequisiteChecker",
    "TemplateRenderer",
]
