"""Command line interface for gradle-inspector.

Settings are read from an optional TOML file (the ``[gradle]`` table) and
overridden by command line flags.
"""

import argparse
import asyncio
import logging
import pathlib
import sys
import tomllib
import typing

import pydantic

from gradle_inspector import errors, gradle, models, version

LOGGER = logging.getLogger(__name__)


def parse_args(
    args: typing.Sequence[str] | None = None,
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='gradle-inspector',
        description='Query a Gradle project through the Gradle CLI',
    )
    parser.add_argument(
        '--config',
        type=pathlib.Path,
        metavar='FILE',
        help='TOML configuration file with a [gradle] table',
    )
    parser.add_argument(
        '--project-path',
        type=pathlib.Path,
        metavar='DIR',
        help='Directory of the Gradle project (default: .)',
    )
    parser.add_argument(
        '--use-wrapper',
        action='store_true',
        default=None,
        help='Invoke ./gradlew instead of gradle',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        default=None,
        help='Log progress and timing information',
    )
    parser.add_argument('--debug', action='store_true')
    parser.add_argument(
        '-V', '--version', action='version', version=version.__version__
    )

    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser(
        'version', help='Show the Gradle version and its capabilities'
    )
    dependencies = subparsers.add_parser(
        'dependencies', help='Print the dependencies of a module'
    )
    dependencies.add_argument('--module', help='Module path (default: :)')
    dependencies.add_argument(
        '--configuration', help='Restrict to a dependency configuration'
    )
    subparsers.add_parser(
        'build-environment', help='Print the build environment'
    )
    prop = subparsers.add_parser('property', help='Print a module property')
    prop.add_argument('name', help='Name of the property')
    prop.add_argument('--module', help='Module path (default: :)')
    build_path = subparsers.add_parser(
        'build-path', help='Print the build file of a module'
    )
    build_path.add_argument('--module', help='Module path (default: :)')
    subparsers.add_parser(
        'project-name', help='Print the name of the root project'
    )
    return parser.parse_args(args)


def load_configuration(args: argparse.Namespace) -> models.Configuration:
    """Build the configuration from the config file and CLI overrides.

    Raises:
        RuntimeError: If the config file can not be read or is invalid

    """
    data: dict[str, typing.Any] = {}
    if args.config:
        try:
            with args.config.open('rb') as handle:
                data = tomllib.load(handle).get('gradle', {})
        except (OSError, tomllib.TOMLDecodeError) as err:
            raise RuntimeError(
                f'Failed to load configuration from {args.config}: {err}'
            ) from err
    overrides = {
        'configuration': getattr(args, 'configuration', None),
        'module': getattr(args, 'module', None),
        'project_path': args.project_path,
        'use_wrapper': args.use_wrapper,
        'verbose': args.verbose,
    }
    data.update(
        {key: value for key, value in overrides.items() if value is not None}
    )
    try:
        return models.Configuration.model_validate(data)
    except pydantic.ValidationError as err:
        raise RuntimeError(f'Invalid configuration: {err}') from err


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s %(levelname)-8s %(name)s: %(message)s',
    )


async def execute(
    args: argparse.Namespace, client: gradle.Gradle
) -> str | None:
    """Run the requested command and return the text to print."""
    match args.command:
        case 'version':
            gradle_version = await client.probe_version()
            supported = gradle.has_single_property_support(
                gradle_version, client.logger
            )
            return (
                f'Gradle {gradle_version} (single property queries '
                f'{"supported" if supported else "not supported"})'
            )
        case 'dependencies':
            return await client.fetch_dependencies()
        case 'build-environment':
            return await client.fetch_build_environment()
        case 'property':
            return await client.fetch_property(
                client.configuration.module, args.name
            )
        case 'build-path':
            return await client.fetch_build_path()
        case 'project-name':
            return await client.fetch_project_name()
        case _:
            raise RuntimeError(f'Unsupported command: {args.command}')


def main(argv: typing.Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.debug)
    try:
        configuration = load_configuration(args)
    except RuntimeError as err:
        LOGGER.error('%s', err)
        return 2
    client = gradle.Gradle(configuration)
    try:
        output = asyncio.run(execute(args, client))
    except errors.GradleInspectorError as err:
        LOGGER.error('%s', err)
        return 1
    print(output if output is not None else '')
    return 0


if __name__ == '__main__':
    sys.exit(main())
