from __future__ import annotations
import os
import re
from abc import ABC, abstractmethod
from typing import Any, Mapping, TypeAlias


ConfigValue: TypeAlias = Any


class ConfigPreprocessor(ABC):
    """
    Transforms raw config structures (dict/list/str) BEFORE pydantic validation.

    Examples:
        - Resolve ${ENV_VAR} placeholders
        - Apply overlays (base.yaml + env.yaml)
        - Fill derived defaults that are easier to pre-parse
    """

    @abstractmethod
    def process(self, data: ConfigValue) -> ConfigValue: ...


class EnvVarPreprocessor(ConfigPreprocessor):
    """
    Resolves ${NAME} placeholders from the process environment, or from
    an explicit mapping when one is given.
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ
        self._env_pattern = re.compile(r"\$\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}")

    def _replace_env(self, s: str) -> str:
        def replace(m: re.Match) -> str:
            name = m.group(1)
            if name not in self._environ:
                raise KeyError(f"Environment variable {name} referenced in config is not set")
            return self._environ[name]

        return self._env_pattern.sub(replace, s)

    def process(self, data: ConfigValue) -> ConfigValue:
        if isinstance(data, dict):
            return {k: self.process(v) for k, v in data.items()}

        if isinstance(data, list):
            return [self.process(v) for v in data]

        if isinstance(data, str):
            return self._replace_env(data)

        return data
