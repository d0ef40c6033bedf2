"""YAML rule files, validated with Pydantic v2 and loaded into an engine.

Rule files name types rather than reference them, so the loader is given a
resolver mapping each name to the descriptor registered with the engine.
Only attribute-map conditions can be written in a file; predicate conditions
have to be registered in code.

Schema
------
::

    version: "1"
    rules:
      - performer: User
        actions: [read, create]
        target: Product
        conditions:
          published: true
      - performer: Admin
        actions: manage
        target: all

Example
-------
::

    loader = RuleLoader({"User": User, "Product": Product})
    engine = loader.load("permissions.yaml")
    engine.can(User(), "read", Product(published=True))
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cancan.engine import CanCan
from cancan.errors import RuleConfigError
from cancan.rules import ALL

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])


class RuleSpec(BaseModel):
    """One ``allow`` registration as written in a rule file."""

    model_config = {"extra": "forbid"}

    performer: str = Field(min_length=1)
    actions: list[str] = Field(min_length=1)
    target: str = Field(min_length=1)
    conditions: dict[str, Any] | None = Field(default=None)

    @field_validator("actions", mode="before")
    @classmethod
    def wrap_single_action(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value


class RulesConfig(BaseModel):
    """Top-level rule file schema."""

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    rules: list[RuleSpec] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, value: object) -> object:
        if isinstance(value, (int, float)):
            return str(value)
        return value


class RuleLoader:
    """Loads rule files into :class:`~cancan.engine.CanCan` engines.

    Parameters
    ----------
    resolver:
        Mapping of type names used in rule files to type descriptors.
        ``"all"`` needs no entry when used as a target.
    """

    def __init__(self, resolver: Mapping[str, Any]) -> None:
        self._resolver = dict(resolver)

    def load(self, config_path: str | Path, engine: CanCan | None = None) -> CanCan:
        """Load rules from a YAML file on disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        RuleConfigError
            If the file cannot be parsed or is invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Rule file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise RuleConfigError(f"Failed to parse YAML: {exc}", str(config_path)) from exc

        return self._populate(raw, engine, config_path=str(config_path))

    def load_string(
        self,
        yaml_string: str,
        engine: CanCan | None = None,
        config_path: str | None = None,
    ) -> CanCan:
        """Load rules from a YAML string."""
        try:
            raw = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise RuleConfigError(f"Failed to parse YAML string: {exc}", config_path) from exc
        return self._populate(raw, engine, config_path=config_path)

    def load_from_dict(
        self,
        config: Mapping[str, object],
        engine: CanCan | None = None,
        config_path: str | None = None,
    ) -> CanCan:
        """Load rules from an already-parsed config mapping."""
        return self._populate(config, engine, config_path=config_path)

    def parse(self, raw: object, config_path: str | None = None) -> RulesConfig:
        """Validate raw config data without registering anything."""
        if not isinstance(raw, Mapping):
            raise RuleConfigError("Rule file must be a YAML mapping.", config_path)
        try:
            config = RulesConfig.model_validate(dict(raw))
        except ValidationError as exc:
            raise RuleConfigError(f"Invalid rule file: {exc}", config_path) from exc

        if config.version not in _SUPPORTED_VERSIONS:
            raise RuleConfigError(
                f"Unsupported rule file version {config.version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}.",
                config_path,
            )
        return config

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _populate(
        self,
        raw: object,
        engine: CanCan | None,
        config_path: str | None,
    ) -> CanCan:
        config = self.parse(raw, config_path)
        target_engine = engine if engine is not None else CanCan()

        # Resolve every rule before registering any, so a bad file leaves the
        # engine untouched.
        resolved: list[tuple[Any, list[str], Any, dict[str, Any] | None]] = []
        for index, spec in enumerate(config.rules):
            try:
                performer_type = self._resolve(spec.performer)
                target_type = ALL if spec.target == ALL else self._resolve(spec.target)
            except KeyError as exc:
                raise RuleConfigError(
                    f"Error in rule at index {index}: {exc.args[0]}", config_path
                ) from exc
            resolved.append((performer_type, spec.actions, target_type, spec.conditions))

        for performer_type, actions, target_type, conditions in resolved:
            target_engine.allow(performer_type, actions, target_type, conditions)

        logger.info(
            "Loaded %d permission rules from %s",
            len(resolved),
            config_path or "<dict>",
        )
        return target_engine

    def _resolve(self, name: str) -> Any:
        try:
            return self._resolver[name]
        except KeyError:
            raise KeyError(
                f"Unknown type {name!r}. Known types: {sorted(self._resolver)}."
            ) from None
