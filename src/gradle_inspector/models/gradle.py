"""Models for Gradle invocations and the values parsed from them.

All models are request scoped: they are created for a single invocation
and discarded once the caller has the parsed result.
"""

import enum

import pydantic

ROOT_MODULE = ':'


class GradleTask(enum.StrEnum):
    """Gradle tasks invoked by the inspector."""

    build_environment = 'buildEnvironment'
    dependencies = 'dependencies'
    properties = 'properties'


class PropertyMode(enum.StrEnum):
    """How a property is requested from and located in Gradle output.

    ``single`` restricts the ``properties`` task to one property and is
    available from Gradle 7.5.0 onward. ``listing`` requests every
    property and scans the output line by line.
    """

    single = 'single'
    listing = 'listing'


class CommandResult(pydantic.BaseModel):
    """Captured result of a single process invocation."""

    command: str
    args: list[str] = []
    exit_code: int
    stdout: str = ''
    stderr: str = ''

    @property
    def command_line(self) -> str:
        return ' '.join([self.command, *self.args])

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def normalize_module(module: str) -> str:
    """Return the module prefix used to build a Gradle task path.

    Gradle addresses the root project's tasks as ``:task``, so the root
    module reference (``:``) becomes an empty prefix rather than
    producing ``::task``.

    """
    return '' if module == ROOT_MODULE else module


def task_path(module: str, task: GradleTask) -> str:
    """Build the ``<module>:<task>`` path for a module reference."""
    return f'{normalize_module(module)}:{task}'


class PropertyQuery(pydantic.BaseModel):
    """A request for a named property of a Gradle module."""

    module: str = ROOT_MODULE
    property_name: str = pydantic.Field(min_length=1)

    @property
    def task_path(self) -> str:
        return task_path(self.module, GradleTask.properties)

    def args(self, mode: PropertyMode) -> list[str]:
        """Return the Gradle arguments for the given retrieval mode."""
        args = [self.task_path, '-q']
        if mode == PropertyMode.single:
            args += ['--property', self.property_name]
        return args
