"""Command argument types and definitions."""

from dataclasses import dataclass
from typing import Any

import hikari

# Option types that the platform refuses choices for
_NO_CHOICE_TYPES = frozenset(
    {
        hikari.OptionType.BOOLEAN,
        hikari.OptionType.USER,
        hikari.OptionType.CHANNEL,
        hikari.OptionType.ROLE,
        hikari.OptionType.MENTIONABLE,
        hikari.OptionType.ATTACHMENT,
    }
)


@dataclass
class CommandArgument:
    """Defines an argument for a command using hikari option types."""

    name: str
    arg_type: hikari.OptionType
    description: str
    required: bool = True
    default: Any = None
    choices: list[Any] | None = None
    min_length: int | None = None
    max_length: int | None = None

    def __post_init__(self) -> None:
        if self.choices is not None and self.arg_type in _NO_CHOICE_TYPES:
            raise ValueError(f"Argument '{self.name}' of type {self.arg_type} cannot declare choices")
        if self.required and self.default is not None:
            raise ValueError(f"Required argument '{self.name}' cannot have a default")

    def to_option(self) -> hikari.CommandOption:
        """Build the platform option registered for this argument."""
        choices = None
        if self.choices is not None:
            choices = [hikari.CommandChoice(name=str(choice), value=choice) for choice in self.choices]

        return hikari.CommandOption(
            type=self.arg_type,
            name=self.name,
            description=self.description,
            is_required=self.required,
            choices=choices,
            min_length=self.min_length,
            max_length=self.max_length,
        )
