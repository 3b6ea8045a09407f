"""Option resolution shared by every resolver.

A value comes from the first source that yields one: the command-line flag,
then the profile (for options a profile can hold), then an interactive prompt.
"""

from __future__ import annotations

import getpass
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from symbol_cli.errors import InvalidOptionFormatError, MissingRequiredOptionError
from symbol_cli.shared.logging import get_logger
from symbol_cli.shared.validation import ValidationResult

logger = get_logger(__name__)


class Prompter(Protocol):
    def prompt(self, message: str, hidden: bool = False) -> str: ...


class ConsolePrompter:
    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        getpass_func: Callable[[str], str] = getpass.getpass,
    ):
        self.input_func = input_func
        self.getpass_func = getpass_func

    def prompt(self, message: str, hidden: bool = False) -> str:
        text = message if message.endswith(" ") else message + " "
        if hidden:
            return self.getpass_func(text)
        return self.input_func(text)


@dataclass
class ExecutionContext:
    interactive: bool = True
    prompter: Prompter = field(default_factory=ConsolePrompter)


class OptionSource(Protocol):
    """Anything that can hold a stored value for an option, such as a profile."""

    def lookup(self, field_name: str) -> str | None: ...


def option_value(options: Any, field_name: str) -> str | None:
    value = getattr(options, field_name, None)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def resolve_raw_value(
    options: Any,
    field_name: str,
    prompt_message: str,
    context: ExecutionContext,
    secondary_source: OptionSource | None = None,
    hidden: bool = False,
) -> str:
    value = option_value(options, field_name)
    if value is not None:
        logger.debug("Option %s taken from flag", field_name)
        return value

    if secondary_source is not None:
        stored = secondary_source.lookup(field_name)
        if stored is not None and str(stored).strip():
            logger.debug("Option %s taken from profile", field_name)
            return str(stored).strip()

    if context.interactive:
        answer = context.prompter.prompt(prompt_message, hidden=hidden)
        if answer and answer.strip():
            return answer.strip()

    raise MissingRequiredOptionError(field_name)


def parse_or_raise(result: ValidationResult, field_name: str) -> Any:
    if not result.is_valid:
        raise InvalidOptionFormatError(field_name, result.error_message or "invalid value")
    return result.normalized_value


class Resolver(Protocol):
    field_name: str

    def resolve(
        self,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> Any: ...


class ResolvedOptions:
    """Values resolved during one command run, each resolved at most once."""

    def __init__(self):
        self._values: dict[str, Any] = {}

    def __contains__(self, field_name: str) -> bool:
        return field_name in self._values

    def get(self, field_name: str, default: Any = None) -> Any:
        return self._values.get(field_name, default)

    def resolve(
        self,
        resolver: Resolver,
        options: Any,
        secondary_source: OptionSource | None = None,
        prompt_message: str | None = None,
        field_name: str | None = None,
    ) -> Any:
        name = field_name or resolver.field_name
        if name not in self._values:
            self._values[name] = resolver.resolve(
                options,
                secondary_source=secondary_source,
                prompt_message=prompt_message,
                field_name=name,
            )
        return self._values[name]
