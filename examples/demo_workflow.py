"""Example pipeline: build and test a Swift package.

Run locally with:
    python examples/demo_workflow.py --workspace path/to/package
or:
    ciflow run examples.demo_workflow:Demo --workspace path/to/package
"""
from __future__ import annotations

import logging

from ciflow import Workflow
from ciflow.steps import SetEnvironment, ShellCommand


class Build(Workflow):
    async def run(self) -> None:
        await self.step(ShellCommand("swift build"))


class Test(Workflow):
    async def run(self) -> None:
        await self.step(ShellCommand("swift test"))


class Demo(Workflow):
    log_level = logging.DEBUG

    async def run(self) -> None:
        await self.step(SetEnvironment(SWIFT_DETERMINISTIC_HASHING="1"))
        await self.workflow(Build)
        await self.workflow(Test)

        output = await self.step(ShellCommand("echo", "Done"), name="Greeting")
        self.logger.info(f"Output: {output}")


if __name__ == "__main__":
    Demo.start()
