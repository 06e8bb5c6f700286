"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable, Iterator
from contextlib import AsyncExitStack, contextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from cinesync.adapters.assets import HttpAssetMaterializer
from cinesync.adapters.discord import DiscordClient
from cinesync.adapters.notion import NotionClient
from cinesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from cinesync.adapters.tmdb import TmdbClient
from cinesync.config import (
    get_discord_config,
    get_notion_config,
    get_storage_config,
    get_sync_config,
    get_tmdb_config,
)
from cinesync.domain.ports.unit_of_work import SyncStateUnitOfWork
from cinesync.domain.reconciliation import ReconciliationEngine
from cinesync.domain.scheduler import Scheduler

if TYPE_CHECKING:
    from cinesync.config import DiscordConfig, SyncConfig
    from cinesync.domain.reconciliation import TickResult

UnitOfWorkFactory = Callable[[], SyncStateUnitOfWork]

log = getLogger(__name__)


@dataclass(slots=True)
class Services:
    """The HTTP adapters one service run talks to."""

    notion: NotionClient
    tmdb: TmdbClient
    assets: HttpAssetMaterializer
    discord: DiscordClient

    async def verify(self) -> None:
        """Check every credential; the first failure propagates."""

        await asyncio.gather(
            self.notion.verify(),
            self.tmdb.verify(),
            self.discord.verify(),
        )

    async def aclose(self) -> None:
        await self.notion.aclose()
        await self.tmdb.aclose()
        await self.assets.aclose()
        await self.discord.aclose()


def build_services(*, discord_config: DiscordConfig | None = None) -> Services:
    """Build the adapters from the environment."""

    return Services(
        notion=NotionClient(config=get_notion_config()),
        tmdb=TmdbClient(config=get_tmdb_config()),
        assets=HttpAssetMaterializer(scratch_dir=get_storage_config().scratch_path()),
        discord=DiscordClient(config=discord_config or get_discord_config()),
    )


def build_engine(
    services: Services,
    *,
    channel_id: str,
    sync_config: SyncConfig,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        source=services.notion,
        catalog=services.tmdb,
        assets=services.assets,
        publisher=services.discord,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyUnitOfWork,
        channel_id=channel_id,
        record_timeout_seconds=sync_config.record_timeout_seconds,
        concurrency=sync_config.concurrency,
    )


async def serve(
    *,
    once: bool = False,
    services: Services | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    sync_config: SyncConfig | None = None,
) -> TickResult | None:
    """Verify credentials, then reconcile once or on the configured interval."""

    effective_sync = sync_config or get_sync_config()
    discord_config = get_discord_config()
    if unit_of_work_factory is None and not is_started():
        startup()

    async with AsyncExitStack() as stack:
        effective_services = services or build_services(discord_config=discord_config)
        stack.push_async_callback(effective_services.aclose)

        await effective_services.verify()
        engine = build_engine(
            effective_services,
            channel_id=discord_config.channel_id,
            sync_config=effective_sync,
            unit_of_work_factory=unit_of_work_factory,
        )

        if once:
            return await engine.run_tick()

        log.info(
            "Starting sync loop: interval=%ss, concurrency=%s",
            effective_sync.interval_seconds,
            effective_sync.concurrency,
        )
        scheduler = Scheduler(engine.run_tick, interval=effective_sync.interval)
        stack.enter_context(_stop_on_interrupt(scheduler))
        await scheduler.run()
    return None


@contextmanager
def _stop_on_interrupt(scheduler: Scheduler) -> Iterator[None]:
    """Route Ctrl+C to ``scheduler.stop`` so an in-flight tick finishes first."""

    loop = asyncio.get_running_loop()

    def _on_sigint() -> None:
        log.info("Closed by user (Ctrl+C), waiting for the running sync to finish")
        scheduler.stop()

    try:
        loop.add_signal_handler(signal.SIGINT, _on_sigint)
    except NotImplementedError:
        # Windows event loops; KeyboardInterrupt reaches main() instead.
        yield
        return
    try:
        yield
    finally:
        loop.remove_signal_handler(signal.SIGINT)


def run_service(*, once: bool = False) -> TickResult | None:
    """Synchronous entry point wrapping :func:`serve`."""

    return asyncio.run(serve(once=once))
