#!/usr/bin/env python3
"""
Suspending client for the org.freedesktop.UPower.PowerProfiles interface.

AsyncPowerProfilesProxy offers the same operations as PowerProfilesProxy,
as coroutines. Each round trip runs in the event loop's executor, so the
awaiting task is suspended while the daemon answers and other tasks keep
running. Errors are the same PpdError subclasses the blocking proxy raises.
"""

import asyncio
import functools
import logging
from concurrent.futures import Executor
from typing import List, Optional

from dasbus.connection import MessageBus

from .constants import DEFAULT_TIMEOUT
from .proxy import PowerProfilesProxy, connect
from .structures import Action, ActiveHold, Profile

log = logging.getLogger(__name__)


class AsyncPowerProfilesProxy:
    """
    Suspending proxy of power-profiles-daemon.

    Cancelling a task that awaits one of these coroutines raises
    CancelledError in that task right away; the reply, if it still
    arrives, is dropped.
    """

    def __init__(self, proxy: PowerProfilesProxy, executor: Optional[Executor] = None):
        """
        Initialize the proxy.

        Args:
            proxy: Blocking proxy doing the actual round trips
            executor: Executor running them, the loop's default one if None
        """
        self._proxy = proxy
        self._executor = executor

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    @property
    def timeout(self) -> int:
        return self._proxy.timeout

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    async def active_profile(self) -> str:
        return await self._run(self._proxy.active_profile)

    async def set_active_profile(self, profile: str):
        await self._run(self._proxy.set_active_profile, profile)

    async def profiles(self) -> List[Profile]:
        return await self._run(self._proxy.profiles)

    async def performance_degraded(self) -> Optional[str]:
        return await self._run(self._proxy.performance_degraded)

    async def performance_inhibited(self) -> Optional[str]:
        return await self._run(self._proxy.performance_inhibited)

    async def hold_profile(self, application_id: str, reason: str, profile: str) -> int:
        return await self._run(self._proxy.hold_profile, application_id, reason, profile)

    async def release_hold(self, cookie: int):
        await self._run(self._proxy.release_hold, cookie)

    release_profile = release_hold

    async def active_profile_holds(self) -> List[ActiveHold]:
        return await self._run(self._proxy.active_profile_holds)

    async def actions(self) -> List[Action]:
        return await self._run(self._proxy.actions)

    async def action_names(self) -> List[str]:
        return await self._run(self._proxy.action_names)

    async def set_action_enabled(self, action: str, enabled: bool):
        await self._run(self._proxy.set_action_enabled, action, enabled)

    async def battery_aware(self) -> bool:
        return await self._run(self._proxy.battery_aware)

    async def set_battery_aware(self, enabled: bool):
        await self._run(self._proxy.set_battery_aware, enabled)

    async def version(self) -> str:
        return await self._run(self._proxy.version)

    async def close(self):
        # Synchronous, so it still runs in a cancelled task
        self._proxy.close()


async def connect_async(
    bus: Optional[MessageBus] = None,
    timeout: int = DEFAULT_TIMEOUT,
    executor: Optional[Executor] = None,
) -> AsyncPowerProfilesProxy:
    """
    Connect to power-profiles-daemon without blocking the event loop.

    Raises:
        TransportError: If the bus is unreachable or the daemon is neither
            running nor activatable
    """
    loop = asyncio.get_running_loop()
    proxy = await loop.run_in_executor(executor, functools.partial(connect, bus, timeout))
    log.debug("Connected to power-profiles-daemon (suspending proxy)")
    return AsyncPowerProfilesProxy(proxy, executor)
