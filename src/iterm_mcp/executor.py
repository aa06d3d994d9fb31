"""Running commands in a session and waiting for them to finish."""

import asyncio

from .errors import ExecutionError, HostError
from .escape import as_literal
from .host import HostScriptRunner
from .log import get_logger
from .target import SessionTarget

logger = get_logger(__name__)


class CommandExecutor:
    """
    Writes command text into a session and polls until it goes idle.

    The terminal offers no exit status, only an "is processing" flag, so
    a finished wait means the session went quiet, not that the command
    succeeded.
    """

    def __init__(
        self,
        runner: HostScriptRunner,
        poll_interval: float = 0.1,
        max_wait: float = 10.0,
    ) -> None:
        self.runner = runner
        self.poll_interval = poll_interval
        self.max_wait = max_wait

    async def execute(self, command: str, target: SessionTarget) -> bool:
        """
        Run a command and wait for the session to stop processing.

        Returns True if the session went idle, False if the wait timed
        out. A timeout is not an error; callers inspect the buffer.

        Raises:
            ExecutionError: If any host call fails
        """
        try:
            tty = await self.get_tty(target)
            logger.debug("tty_resolved", target=str(target), tty=tty)

            await self.runner.run_script(
                target.tell(f"write text {as_literal(command)}")
            )
            logger.debug("command_dispatched", target=str(target), chars=len(command))

            return await self._wait_until_idle(target)
        except HostError as e:
            raise ExecutionError(e) from e

    async def get_tty(self, target: SessionTarget) -> str:
        return (await self.runner.run_script(target.tell("return tty"))).strip()

    async def is_processing(self, target: SessionTarget) -> bool:
        output = await self.runner.run_script(target.tell("return is processing"))
        return output.strip().lower() == "true"

    async def _wait_until_idle(self, target: SessionTarget) -> bool:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.max_wait

        while await self.is_processing(target):
            if loop.time() >= deadline:
                logger.warning("poll_timeout", target=str(target), max_wait=self.max_wait)
                return False
            await asyncio.sleep(self.poll_interval)

        return True
