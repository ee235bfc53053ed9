"""Optional feature bundles installed only when the user selects them.

A bundle is data: the dev-dependencies to add, the config artifacts to emit,
the command aliases to patch into the manifest and an optional sample file.
:func:`build_tests_feature` builds the Jest + Testing Library bundle behind the
``tests`` option.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Sequence

from ..config import Config
from ..errors import ConditionalFeatureFailed
from ..models import ConfigArtifact, ProjectContext, TemplateVars
from .artifacts import jest_config, jest_setup, sample_test

if TYPE_CHECKING:
    from ..steps import Toolkit

ArtifactRenderer = Callable[[TemplateVars], ConfigArtifact]

TESTS_FEATURE = "tests"

TEST_SCRIPTS: dict[str, str] = {
    "test": "jest",
    "test:watch": "jest --watch",
    "test:coverage": "jest --coverage",
}


class ConditionalFeatureInstaller:
    """Installs one optional feature bundle into a scaffolded project."""

    def __init__(
        self,
        feature: str,
        packages: Sequence[str],
        artifacts: Sequence[ArtifactRenderer],
        scripts: dict[str, str],
        sample: Optional[ArtifactRenderer] = None,
    ) -> None:
        self.feature = feature
        self.packages = list(packages)
        self.artifacts = list(artifacts)
        self.scripts = dict(scripts)
        self.sample = sample

    def applies_to(self, context: ProjectContext) -> bool:
        return context.is_selected(self.feature)

    async def install(self, context: ProjectContext, toolkit: "Toolkit") -> None:
        """Add the bundle's packages, then emit its config, scripts and sample.

        Raises:
            ConditionalFeatureFailed: Wrapping whichever sub-step failed first.
        """
        try:
            await toolkit.add_dev_dependencies(context, self.packages)
            variables = toolkit.variables(context)
            for render in self.artifacts:
                toolkit.emit(render(variables))
            toolkit.patch_scripts(context, self.scripts)
            if self.sample is not None:
                toolkit.emit(self.sample(variables))
        except Exception as exc:
            raise ConditionalFeatureFailed(self.feature, exc) from exc


def build_tests_feature(config: Config) -> ConditionalFeatureInstaller:
    """The Jest + Testing Library bundle activated by the ``tests`` option."""
    return ConditionalFeatureInstaller(
        feature=TESTS_FEATURE,
        packages=config.packages.tests,
        artifacts=[jest_config, jest_setup],
        scripts=TEST_SCRIPTS,
        sample=sample_test,
    )
