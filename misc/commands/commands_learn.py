from __future__ import annotations

from discord.ext import commands
from learn.parser import ADD_USAGE
from learn.parser import DEL_USAGE
from learn.parser import parse_learn_add_args
from learn.parser import parse_learn_delete_args
from learn.service import handle_mutation_command
from misc.commands.command_deps import CommandDeps
from misc.commands.command_deps import CommandGates


def register(
    bot: commands.Bot,
    *,
    deps: CommandDeps,
    gates: CommandGates,
) -> None:
    async def _reply(ctx: commands.Context, text: str) -> None:
        if deps.send_chunked is not None:
            await deps.send_chunked(ctx.channel, text)
        elif text:
            await ctx.send(text)

    async def _run(ctx: commands.Context, command) -> None:
        reply = await handle_mutation_command(
            command,
            store_lock=deps.store_lock,
            store=deps.store,
            templates=deps.reply_templates,
        )
        await _reply(ctx, reply)

    @bot.group(name="learn", invoke_without_command=True)
    async def learn_group(ctx: commands.Context):
        if not gates.in_allowed_channel(ctx):
            return
        await ctx.send(f"{ADD_USAGE}\n{DEL_USAGE}\nQuery with `??<topic>[index]`.")

    @learn_group.command(name="add")
    async def learn_add_cmd(ctx: commands.Context, *, raw: str = ""):
        if not gates.in_allowed_channel(ctx):
            return
        command = parse_learn_add_args(raw)
        if command is None:
            await ctx.send(ADD_USAGE)
            return
        await _run(ctx, command)

    @learn_group.command(name="del", aliases=["delete"])
    async def learn_del_cmd(ctx: commands.Context, *, raw: str = ""):
        if not gates.in_allowed_channel(ctx):
            return
        command = parse_learn_delete_args(raw)
        if command is None:
            await ctx.send(DEL_USAGE)
            return
        await _run(ctx, command)
