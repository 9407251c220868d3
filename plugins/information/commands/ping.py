from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

import aiohttp

from bastion.commands import command
from bastion.core.reports import Report
from bastion.plugins import Plugin
from config.settings import settings

from ..config import LATENCY_UNAVAILABLE, PROBE_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from bastion.core.dispatch import CommandContext

logger = logging.getLogger(__name__)


async def retrieve_latency(url: str | None = None) -> float:
    """Round-trip time of an HTTP GET to the platform API, in milliseconds."""
    timeout = aiohttp.ClientTimeout(total=PROBE_TIMEOUT_SECONDS)
    start = time.perf_counter()
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url or settings.latency_probe_url) as resp:
            await resp.read()
    return (time.perf_counter() - start) * 1000


async def latency_text() -> str:
    try:
        latency = await retrieve_latency()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Latency probe failed: {e}")
        return LATENCY_UNAVAILABLE
    return f"{latency:.0f}ms"


@command(
    name="ping",
    description="Returns the ping of the bot. Pong!",
    plugin=Plugin.INFORMATION,
    aliases=["am-i-alive"],
)
async def ping(ctx: CommandContext) -> None:
    await ctx.respond(Report.info("Wait a moment...", "Pinging..."))
    latency = await latency_text()
    await ctx.responder.edit(Report.success("Pong!", "I'm alive!").add_field("Latency", latency, inline=True))
