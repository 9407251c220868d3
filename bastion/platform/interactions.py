"""Translation of hikari command interactions into invocations."""

from __future__ import annotations

import hikari

from ..commands.options import ChannelRef, Invocation, InvocationOptions, OptionValue, UserRef


def _convert_option(
    option: hikari.CommandInteractionOption,
    resolved: hikari.ResolvedOptionData | None,
) -> OptionValue:
    if option.type == hikari.OptionType.USER:
        user_id = int(option.value)
        # Only users resolved as members of the invoking guild count as members.
        is_member = resolved is not None and user_id in resolved.members
        return UserRef(user_id, is_member=is_member)
    if option.type == hikari.OptionType.CHANNEL:
        return ChannelRef(int(option.value))
    if isinstance(option.value, hikari.Snowflake):
        return int(option.value)
    return option.value


def options_from_interaction(interaction: hikari.CommandInteraction) -> InvocationOptions:
    items = [(option.name, _convert_option(option, interaction.resolved)) for option in interaction.options or ()]
    return InvocationOptions(items)


def invocation_from_interaction(interaction: hikari.CommandInteraction) -> Invocation:
    return Invocation(
        command_name=interaction.command_name,
        options=options_from_interaction(interaction),
        actor_id=int(interaction.user.id),
        guild_id=int(interaction.guild_id) if interaction.guild_id else None,
        channel_id=int(interaction.channel_id),
        interaction_id=int(interaction.id),
    )
