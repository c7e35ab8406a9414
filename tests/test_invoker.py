"""
Tests for symbolicatecrash invocation and completion delivery.

Validates:
1. Argument order: [--dsym=<dsym>] <crash> [<app>]
2. DEVELOPER_DIR only when a developer root is known
3. Completion runs exactly once, on the dispatcher's context
4. stdout presence decides success; exit status does not
5. At most one invocation in flight
"""

import asyncio
import logging
import threading
from unittest.mock import MagicMock

import pytest

from crash_assistant.artifacts import ArtifactResolver, ResolverState
from crash_assistant.execution.dispatch import (
    EventLoopDispatcher,
    ImmediateDispatcher,
    QueueDispatcher,
)
from crash_assistant.execution.invoker import Invoker
from crash_assistant.execution.results import CommandResult
from crash_assistant.toolchain import ToolLocator

TOOL = "/Xcode.app/Contents/SharedFrameworks/symbolicatecrash"
ROOT = "/Xcode.app/Contents/Developer"


def make_invoker(state, runner, tool_path=TOOL, developer_root=ROOT, dispatcher=None):
    locator = MagicMock(spec=ToolLocator)
    locator.tool_path = tool_path
    locator.developer_root = developer_root
    resolver = ArtifactResolver(locator)
    resolver.state = state
    return Invoker(locator, resolver, dispatcher=dispatcher, runner=runner)


def result_runner(result):
    calls = []

    def runner(command, arguments, environment):
        calls.append((command, arguments, environment))
        return result

    runner.calls = calls
    return runner


@pytest.fixture
def full_state():
    return ResolverState(app_path="/a/Foo.app", dsym_path="/a/Foo.app.dSYM", crash_path="/a/Foo.crash")


class TestArguments:
    def test_full_argument_order(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult()))

        assert invoker.build_arguments() == ["--dsym=/a/Foo.app.dSYM", "/a/Foo.crash", "/a/Foo.app"]

    def test_crash_only_omits_dsym_flag(self):
        invoker = make_invoker(ResolverState(crash_path="/a/Foo.crash"), result_runner(CommandResult()))

        assert invoker.build_arguments() == ["/a/Foo.crash"]

    def test_crash_and_app(self):
        state = ResolverState(app_path="/a/Foo.app", crash_path="/a/Foo.crash")
        invoker = make_invoker(state, result_runner(CommandResult()))

        assert invoker.build_arguments() == ["/a/Foo.crash", "/a/Foo.app"]

    def test_environment_carries_developer_root(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult()))

        assert invoker.build_environment() == {"DEVELOPER_DIR": ROOT}

    def test_environment_empty_without_root(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult()), developer_root=None)

        assert invoker.build_environment() == {}


class TestInvoke:
    def run_to_completion(self, invoker):
        received = []
        dispatcher = QueueDispatcher()

        started = invoker.invoke(received.append, dispatcher)
        if started:
            assert dispatcher.drain(timeout=10) == 1
        invoker.shutdown()
        return started, received

    def test_stdout_is_delivered(self, full_state):
        runner = result_runner(CommandResult(stdout="symbolicated\n", stderr="", exit_status=0))
        invoker = make_invoker(full_state, runner)

        started, received = self.run_to_completion(invoker)

        assert started is True
        assert received == ["symbolicated\n"]
        assert runner.calls == [
            (TOOL, ["--dsym=/a/Foo.app.dSYM", "/a/Foo.crash", "/a/Foo.app"], {"DEVELOPER_DIR": ROOT})
        ]

    def test_non_zero_exit_with_stdout_still_delivers(self, full_state):
        result = CommandResult(stdout="partial\n", stderr="No symbol file found\n", exit_status=1)
        invoker = make_invoker(full_state, result_runner(result))

        _, received = self.run_to_completion(invoker)

        assert received == ["partial\n"]

    def test_stderr_with_stdout_is_logged_not_delivered(self, full_state, caplog):
        result = CommandResult(stdout="frames\n", stderr="No symbol file found\n", exit_status=0)
        invoker = make_invoker(full_state, result_runner(result))

        with caplog.at_level(logging.WARNING, logger="crash_assistant.execution.invoker"):
            _, received = self.run_to_completion(invoker)

        assert received == ["frames\n"]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["[Invoker] Warning: No symbol file found\n"]

    def test_stderr_without_stdout_is_logged_as_failure(self, full_state, caplog):
        result = CommandResult(stdout=None, stderr="Can't locate Foo.pm\n", exit_status=2)
        invoker = make_invoker(full_state, result_runner(result))

        with caplog.at_level(logging.WARNING, logger="crash_assistant.execution.invoker"):
            _, received = self.run_to_completion(invoker)

        assert received == [None]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["[Invoker] Failed: Can't locate Foo.pm\n"]

    def test_clean_run_logs_no_warning(self, full_state, caplog):
        invoker = make_invoker(full_state, result_runner(CommandResult(stdout="ok", stderr="", exit_status=0)))

        with caplog.at_level(logging.WARNING, logger="crash_assistant.execution.invoker"):
            self.run_to_completion(invoker)

        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []

    def test_empty_stdout_is_still_success(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult(stdout="", stderr="", exit_status=0)))

        _, received = self.run_to_completion(invoker)

        assert received == [""]

    def test_missing_stdout_delivers_none(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult()))

        _, received = self.run_to_completion(invoker)

        assert received == [None]

    def test_runner_exception_delivers_none_and_releases_guard(self, full_state):
        def exploding(command, arguments, environment):
            raise RuntimeError("boom")

        invoker = make_invoker(full_state, exploding)

        _, received = self.run_to_completion(invoker)

        assert received == [None]
        assert invoker.in_flight is False

    def test_without_tool_completes_synchronously_with_none(self, full_state):
        runner = result_runner(CommandResult(stdout="x"))
        invoker = make_invoker(full_state, runner, tool_path=None)
        received = []

        assert invoker.invoke(received.append) is False

        assert received == [None]
        assert runner.calls == []
        invoker.shutdown()

    def test_completion_runs_on_draining_thread(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult(stdout="ok")))
        threads = []

        dispatcher = QueueDispatcher()
        invoker.invoke(lambda output: threads.append(threading.current_thread()), dispatcher)
        dispatcher.drain(timeout=10)
        invoker.shutdown()

        assert threads == [threading.current_thread()]

    def test_overlapping_invoke_is_rejected(self, full_state):
        release = threading.Event()
        entered = threading.Event()

        def slow(command, arguments, environment):
            entered.set()
            release.wait(10)
            return CommandResult(stdout="done", stderr="", exit_status=0)

        invoker = make_invoker(full_state, slow)
        dispatcher = QueueDispatcher()
        first, second = [], []

        assert invoker.invoke(first.append, dispatcher) is True
        assert entered.wait(10)
        assert invoker.in_flight is True

        assert invoker.invoke(second.append, dispatcher) is False
        assert second == [None]

        release.set()
        dispatcher.drain(timeout=10)
        invoker.shutdown()

        assert first == ["done"]
        assert invoker.in_flight is False

    def test_invoke_again_after_completion(self, full_state):
        invoker = make_invoker(full_state, result_runner(CommandResult(stdout="ok")))
        dispatcher = QueueDispatcher()
        received = []

        invoker.invoke(received.append, dispatcher)
        dispatcher.drain(timeout=10)
        invoker.invoke(received.append, dispatcher)
        dispatcher.drain(timeout=10)
        invoker.shutdown()

        assert received == ["ok", "ok"]


@pytest.mark.posix
class TestRealProcess:
    def test_fake_tool_sees_arguments_and_developer_dir(self, settings, fake_xcode, archive, crash_file):
        from crash_assistant.session import SymbolicationSession

        session = SymbolicationSession.create(settings, dispatcher=ImmediateDispatcher())
        session.submit_file(archive.path)
        session.submit_file(crash_file)
        done = threading.Event()
        received = []

        def on_done(output):
            received.append(output)
            done.set()

        assert session.invoke(on_done) is True
        assert done.wait(10)
        session.close()

        assert received[0].splitlines() == [
            f"DEVELOPER_DIR={fake_xcode.developer_root}",
            f"ARG:--dsym={archive.dsym}",
            f"ARG:{crash_file}",
            f"ARG:{archive.app}",
        ]


class TestDispatchers:
    def test_immediate_runs_inline(self):
        received = []

        ImmediateDispatcher().post(received.append, "x")

        assert received == ["x"]

    def test_queue_holds_until_drained(self):
        dispatcher = QueueDispatcher()
        received = []

        dispatcher.post(received.append, "a")
        dispatcher.post(received.append, None)
        assert received == []

        assert dispatcher.drain(block=False) == 2
        assert received == ["a", None]

    def test_queue_drain_times_out_empty(self):
        assert QueueDispatcher().drain(timeout=0.01) == 0

    def test_event_loop_dispatcher_resolves_future_from_worker(self):
        async def scenario():
            loop = asyncio.get_running_loop()
            future = loop.create_future()
            dispatcher = EventLoopDispatcher(loop)
            worker = threading.Thread(target=dispatcher.post, args=(future.set_result, "from worker"))
            worker.start()
            value = await asyncio.wait_for(future, timeout=10)
            worker.join()
            return value

        assert asyncio.run(scenario()) == "from worker"
