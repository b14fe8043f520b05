import json
import yaml
from typing import Any, Callable
from pathlib import Path

from rest_api.config.models import RestApiConfig
from rest_api.config.preprocessor import ConfigPreprocessor, ConfigValue


class ConfigLoader:
    """
    Load + preprocess + validate RestApi configs from YAML/JSON.

    - Preprocessors run on raw data before Pydantic validation.
    - Result is fully validated RestApiConfig
    """

    def __init__(self, preprocessors: list[ConfigPreprocessor] | None = None):
        self._preprocessors = preprocessors or []

    def add_preprocessor(self, preprocessor: ConfigPreprocessor) -> None:
        self._preprocessors.append(preprocessor)

    def from_yaml(self, source: str | Path) -> RestApiConfig:
        data = self._load(source, parser=yaml.safe_load)
        return self._build(data)

    def from_json(self, source: str | Path) -> RestApiConfig:
        data = self._load(source, parser=json.loads)
        return self._build(data)

    def _load(
        self,
        source: str | Path,
        *,
        parser: Callable[[str], Any],
    ) -> ConfigValue:
        text = self._read_source(source)
        return parser(text)

    def _read_source(self, source: str | Path) -> str:
        """
        Read source as text.
        If `source` is a file path, read it.
        Otherwise treat it as raw content.
        """
        if isinstance(source, Path):
            return source.read_text()

        # string: path or raw content?
        if "\n" not in source:
            p = Path(source)
            try:
                if p.is_file():
                    return p.read_text()
            except OSError:
                # not a usable path (e.g. name too long), treat as raw content
                pass

        return source

    def _build(self, data: ConfigValue) -> RestApiConfig:
        for pre in self._preprocessors:
            data = pre.process(data)

        return RestApiConfig.model_validate(data)
