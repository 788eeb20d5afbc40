"""Configuration model with Pydantic validation.

Settings may come from a TOML file, the command line, or environment
variables. Values explicitly provided always win over the environment.
"""

import os
import pathlib
import typing

import pydantic

from gradle_inspector.models import gradle

ENV_PREFIX = 'GRADLE_INSPECTOR_'
TRUTHY = {'1', 'true', 'yes', 'on'}


class Configuration(pydantic.BaseModel):
    """Settings for inspecting a Gradle project.

    ``use_wrapper`` selects the project's ``./gradlew`` wrapper instead of
    a ``gradle`` executable found on the ``PATH``.
    """

    use_wrapper: bool = False
    project_path: pathlib.Path = pathlib.Path('.')
    module: str = gradle.ROOT_MODULE
    configuration: str | None = None
    verbose: bool = False

    @pydantic.model_validator(mode='before')
    @classmethod
    def _set_defaults_from_env(cls, data: typing.Any) -> typing.Any:
        if not isinstance(data, dict):
            return data
        data = {key: value for key, value in data.items() if value is not None}
        if data.get('use_wrapper') is None:
            value = os.environ.get(f'{ENV_PREFIX}USE_WRAPPER')
            if value:
                data['use_wrapper'] = value.strip().lower() in TRUTHY
        if data.get('project_path') is None:
            value = os.environ.get(f'{ENV_PREFIX}PROJECT_PATH')
            if value:
                data['project_path'] = value
        return data

    @pydantic.field_validator('project_path')
    @classmethod
    def _validate_project_path(cls, value: pathlib.Path) -> pathlib.Path:
        if not value.is_dir():
            raise ValueError(f'{value} is not a directory')
        return value

    @pydantic.field_validator('configuration')
    @classmethod
    def _empty_configuration_is_none(cls, value: str | None) -> str | None:
        return value or None

    @property
    def executable(self) -> str:
        """The Gradle command line interface to invoke."""
        return './gradlew' if self.use_wrapper else 'gradle'
