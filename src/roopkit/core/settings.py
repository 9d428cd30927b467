"""
User-configurable analysis settings.

Hosts pass their `roop` configuration section (camelCase keys, as editors
store them) into `AnalysisSettings.from_host`. Out-of-range or unknown values
are coerced back to defaults the same way the editor integration always has,
so a typo in user settings never disables analysis.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from roopkit.exceptions import SettingsError

LintLevel = Literal["off", "hint", "information", "warning", "error"]

LINT_LEVELS = ("off", "hint", "information", "warning", "error")

MIN_INDENT_SIZE = 2
MAX_INDENT_SIZE = 8


class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class FormatSettings(_SettingsModel):
    """Formatter switches."""

    enabled: bool = True
    indent_size: int = 2

    @field_validator("indent_size", mode="before")
    @classmethod
    def _clamp_indent_size(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 2
        return max(MIN_INDENT_SIZE, min(MAX_INDENT_SIZE, int(value)))


class CheckSettings(_SettingsModel):
    """Severity of one diagnostic check; `off` disables the check."""

    severity: LintLevel

    @property
    def enabled(self) -> bool:
        return self.severity != "off"


class LintSettings(_SettingsModel):
    """Per-check severities."""

    missing_colon: CheckSettings = CheckSettings(severity="hint")
    unbalanced_task: CheckSettings = CheckSettings(severity="warning")
    unrecognized_token: CheckSettings = CheckSettings(severity="hint")

    @field_validator(
        "missing_colon", "unbalanced_task", "unrecognized_token", mode="before"
    )
    @classmethod
    def _fallback_to_default_level(cls, value: Any, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].default
        if isinstance(value, CheckSettings):
            return value
        # Accept the shorthand `"missingColon": "warning"`
        if isinstance(value, str):
            value = {"severity": value}
        if not isinstance(value, Mapping) or value.get("severity") not in LINT_LEVELS:
            return default
        return {"severity": value["severity"]}


class ValidationSettings(_SettingsModel):
    """Whole-document validation switches and the per-check diagnostic budget."""

    enable: bool = True
    max_problems: int = 200

    @field_validator("max_problems", mode="before")
    @classmethod
    def _at_least_one(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 200
        return max(1, int(value))


class CompletionSettings(_SettingsModel):
    """User vocabulary extensions."""

    extra_keywords: tuple[str, ...] = ()

    @field_validator("extra_keywords", mode="before")
    @classmethod
    def _only_string_lists(cls, value: Any) -> tuple[str, ...]:
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


class AnalysisSettings(_SettingsModel):
    """
    All knobs the host exposes to users, passed into every analysis call.

    Params:
        format: Formatter enablement and indent width
        lint: Severity per diagnostic check
        validation: Global validation switch and diagnostic budget
        completion: Extra allow-listed keywords
    """

    format: FormatSettings = FormatSettings()
    lint: LintSettings = LintSettings()
    validation: ValidationSettings = ValidationSettings()
    completion: CompletionSettings = CompletionSettings()

    @classmethod
    def from_host(cls, config: Mapping[str, Any] | None) -> "AnalysisSettings":
        """
        Build settings from the host's configuration section.

        Params:
            config: Mapping such as `{"format": {"indentSize": 4}}`; None means defaults

        Returns:
            Validated, frozen settings

        Raises:
            SettingsError: If a value cannot be coerced (e.g. a non-boolean switch)
        """
        if config is None:
            return cls()
        if not isinstance(config, Mapping):
            raise SettingsError("roop", "configuration section must be a mapping")

        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            raise SettingsError(key, first["msg"]) from e


DEFAULT_SETTINGS = AnalysisSettings()
