"""Query a Gradle project through the Gradle command line interface.

Gradle 7.5.0 added ``--property`` to the ``properties`` task, which limits
its output to a single property. The installed version is probed before
every property lookup and older versions fall back to scanning the full
property listing.
"""

import logging
import pathlib
import re
import time
import typing

import pydantic
import semver

from gradle_inspector import errors, mixins, models, process

LOGGER = logging.getLogger(__name__)

SINGLE_PROPERTY_MINIMUM = semver.Version(major=7, minor=5, patch=0)

# A dashed line, "Gradle <version>", then another dashed line
VERSION_BANNER = re.compile(
    r'^-+\r?\nGradle (?P<version>.+?)\r?\n-', re.MULTILINE
)
VERSION_COERCE = re.compile(r'(\d+)(?:\.(\d+))?(?:\.(\d+))?')

Runner = typing.Callable[
    [str, typing.Sequence[str], pathlib.Path, bool | None],
    typing.Awaitable[models.CommandResult],
]


def parse_version(output: str) -> str:
    """Extract the version from the output of ``gradle --version``.

    Raises:
        errors.ParseError: If the output has no version banner

    """
    match = VERSION_BANNER.search(output)
    if match is None:
        raise errors.ParseError('Failed to extract gradle version', output)
    return match.group('version')


def coerce_version(value: str) -> semver.Version | None:
    """Coerce a free-form version string into a semantic version.

    The first run of up to three dot separated numbers is used and
    everything around it is ignored, so ``7.5.0-rc-1`` becomes ``7.5.0``
    and ``8.0`` becomes ``8.0.0``. Returns :data:`None` if the value
    contains no number at all.

    """
    match = VERSION_COERCE.search(value)
    if match is None:
        return None
    major, minor, patch = (int(part or 0) for part in match.groups())
    return semver.Version(major=major, minor=minor, patch=patch)


def has_single_property_support(
    version: str, logger: logging.Logger | None = None
) -> bool:
    """Return whether a Gradle version supports single property queries.

    Raises:
        errors.ParseError: If the version can not be coerced

    """
    coerced = coerce_version(version)
    if coerced is None:
        raise errors.ParseError(
            f'Failed to parse gradle version: {version}', version
        )
    if coerced >= SINGLE_PROPERTY_MINIMUM:
        return True
    (logger or LOGGER).warning(
        'The current gradle version does not support retrieving a single '
        'property. Found version: %s.',
        version,
    )
    return False


def property_pattern(property_name: str) -> re.Pattern[str]:
    """Return the pattern matching a ``<name>: <value>`` output line."""
    return re.compile(rf'({re.escape(property_name)}: )(.+?)\r?$', re.M)


def extract_property(
    output: str, property_name: str, mode: models.PropertyMode
) -> str | None:
    """Locate a property value in the output of the ``properties`` task.

    In ``single`` mode the output only holds the requested property and is
    searched as a whole. In ``listing`` mode each line of the full listing
    is scanned in the order Gradle emitted it and the first match wins.

    """
    pattern = property_pattern(property_name)
    if mode == models.PropertyMode.single:
        match = pattern.search(output)
    else:
        match = next(
            (
                line_match
                for line_match in map(pattern.search, output.split('\n'))
                if line_match is not None
            ),
            None,
        )
    return match.group(2) if match is not None else None


class Gradle(mixins.LoggerMixin):
    """Runs Gradle tasks for a project and parses what they print.

    Each public coroutine performs its own invocations. Nothing, including
    the detected Gradle version, is remembered between calls.
    """

    def __init__(
        self,
        configuration: models.Configuration,
        logger: logging.Logger | None = None,
        runner: Runner | None = None,
    ) -> None:
        super().__init__(configuration.verbose)
        self._set_logger(logger)
        self.configuration = configuration
        self.runner: Runner = runner or process.run

    @property
    def executable(self) -> str:
        return self.configuration.executable

    async def probe_version(self) -> str:
        """Return the Gradle version reported by ``gradle --version``."""
        output = await self._execute(['--version'])
        try:
            return parse_version(output)
        except errors.ParseError:
            self.logger.debug(
                'Failed to extract gradle version from: %s', output
            )
            raise

    async def probe_single_property_support(self) -> bool:
        """Detect whether Gradle supports retrieving a single property."""
        version = await self.probe_version()
        return has_single_property_support(version, self.logger)

    async def fetch_dependencies(
        self, module: str | None = None, configuration: str | None = None
    ) -> str:
        """Return the output of the ``dependencies`` task for a module.

        Args:
            module: Module to list, defaults to the configured module
            configuration: Dependency configuration to restrict the listing
                to. Omitted when empty.

        """
        start = time.monotonic()
        module = self.configuration.module if module is None else module
        configuration = configuration or self.configuration.configuration
        args = [
            '--console',
            'plain',
            models.task_path(module, models.GradleTask.dependencies),
        ]
        if configuration:
            args += ['--configuration', configuration]
        output = await self._execute(args)
        if configuration:
            self._log_verbose_info(
                "Completed retrieving the 'dependencies' for configuration "
                "'%s' within %ims",
                configuration,
                self._elapsed_ms(start),
            )
        else:
            self._log_verbose_info(
                "Completed retrieving the 'dependencies' within %ims",
                self._elapsed_ms(start),
            )
        return output

    async def fetch_build_environment(self) -> str:
        """Return the output of the root ``buildEnvironment`` task."""
        start = time.monotonic()
        output = await self._execute(
            [
                '--console',
                'plain',
                models.task_path(
                    models.ROOT_MODULE, models.GradleTask.build_environment
                ),
            ]
        )
        self._log_verbose_info(
            "Completed retrieving the 'buildEnvironment' within %ims",
            self._elapsed_ms(start),
        )
        return output

    async def fetch_property(
        self, module: str, property_name: str
    ) -> str | None:
        """Return a property of a module, or None if it is not reported.

        Raises:
            errors.ExecutionError: If a Gradle invocation fails
            errors.ParseError: If the Gradle version can not be determined

        """
        query = models.PropertyQuery(
            module=module, property_name=property_name
        )
        if await self.probe_single_property_support():
            mode = models.PropertyMode.single
        else:
            mode = models.PropertyMode.listing
        self.logger.debug(
            'Retrieving %r from %s using %s mode',
            property_name,
            query.task_path,
            mode,
        )
        output = await self._execute(query.args(mode))
        value = extract_property(output, property_name, mode)
        if value is None:
            self.logger.warning(
                "Failed to retrieve the '%s' for '%s'", property_name, module
            )
        return value

    async def fetch_build_path(self, module: str | None = None) -> str | None:
        """Return the ``buildFile`` property of a module."""
        if module is None:
            module = self.configuration.module
        return await self.fetch_property(module, 'buildFile')

    async def fetch_project_name(self) -> str | None:
        """Return the ``name`` property of the root project."""
        return await self.fetch_property(models.ROOT_MODULE, 'name')

    async def _execute(self, args: list[str]) -> str:
        """Run Gradle and return its stdout, raising on failure."""
        result = await self.runner(
            self.executable, args, self.configuration.project_path, None
        )
        if not result.succeeded:
            self.logger.error('%s', result.stderr)
            self.logger.error("'%s' command failed!", result.command_line)
            raise errors.ExecutionError(
                self.executable, args, result.exit_code, result.stderr
            )
        return result.stdout

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        """Return the milliseconds elapsed since a monotonic start time."""
        return int((time.monotonic() - start) * 1000)


def _gradle(
    use_wrapper: bool,
    project_path: pathlib.Path | str,
    logger: logging.Logger | None = None,
) -> Gradle:
    """Build a client, reporting an unusable project path as a failure.

    Raises:
        errors.ExecutionError: If the project path is not a directory

    """
    try:
        configuration = models.Configuration(
            use_wrapper=use_wrapper, project_path=project_path
        )
    except pydantic.ValidationError as err:
        (logger or LOGGER).error(
            'Invalid gradle project path %s: %s', project_path, err
        )
        raise errors.ExecutionError(
            './gradlew' if use_wrapper else 'gradle', [], -1, str(err)
        ) from err
    return Gradle(configuration, logger=logger)


async def probe_single_property_support(
    use_wrapper: bool,
    project_path: pathlib.Path | str,
    logger: logging.Logger | None = None,
) -> bool:
    """Detect whether the project's Gradle supports single properties."""
    return await _gradle(
        use_wrapper, project_path, logger
    ).probe_single_property_support()


async def fetch_dependencies(
    use_wrapper: bool,
    project_path: pathlib.Path | str,
    module: str,
    configuration: str | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Return the ``dependencies`` output for a module of a project."""
    return await _gradle(use_wrapper, project_path, logger).fetch_dependencies(
        module, configuration
    )


async def fetch_build_environment(
    use_wrapper: bool,
    project_path: pathlib.Path | str,
    logger: logging.Logger | None = None,
) -> str:
    """Return the ``buildEnvironment`` output for a project."""
    return await _gradle(
        use_wrapper, project_path, logger
    ).fetch_build_environment()


async def fetch_property(
    use_wrapper: bool,
    project_path: pathlib.Path | str,
    module: str,
    property_name: str,
    logger: logging.Logger | None = None,
) -> str | None:
    """Return a property of a module of a project, if Gradle reports it."""
    return await _gradle(use_wrapper, project_path, logger).fetch_property(
        module, property_name
    )
